"""
OAuth 2.0 client for the 777bingo platform.

This package implements the Authorization Code flow against 777bingo:
an authorization code received on the caller's redirect handler is
exchanged for an access token, which then unlocks the user's profile and
qtum wallet.

Public API:
    PlatformOAuthConfig: Platform host, client credentials and URL builders
    PlatformOAuthClient: Token exchange, profile and wallet lookups
    get_token / get_profile / get_wallet: One-shot module-level operations
    Token, Profile, Wallet, ApiError: Response models
    SessionSerializer, register_session_types: Session storage support

Exceptions:
    PlatformOAuthError: Base exception
    ConfigurationError: Configuration could not be loaded
    TransportError: Request failed at the network level
    HTTPStatusError: Non-200 HTTP status
    DecodeError: Malformed response body
    ProtocolError: Platform reported an error
    SessionSerializationError: Session encode/decode failed
"""

from .client import PlatformOAuthClient, get_profile, get_token, get_wallet
from .config import PlatformOAuthConfig
from .exceptions import (
    ConfigurationError,
    DecodeError,
    HTTPStatusError,
    PlatformOAuthError,
    ProtocolError,
    SessionSerializationError,
    TransportError,
)
from .models import ApiError, Profile, Token, Wallet
from .session import SessionSerializer, register_session_types

__all__ = [
    # Configuration
    "PlatformOAuthConfig",
    # Client
    "PlatformOAuthClient",
    "get_token",
    "get_profile",
    "get_wallet",
    # Models
    "ApiError",
    "Token",
    "Profile",
    "Wallet",
    # Session
    "SessionSerializer",
    "register_session_types",
    # Exceptions
    "PlatformOAuthError",
    "ConfigurationError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
    "ProtocolError",
    "SessionSerializationError",
]
