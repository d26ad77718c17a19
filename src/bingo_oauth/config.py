"""
OAuth configuration for the 777bingo platform.

This module holds the platform host and client credentials and derives the
three OAuth endpoint URLs from them. Configuration is normally built by the
caller; loaders for a parsed config file and for environment variables are
provided for applications that keep their settings there.
"""

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict
from urllib.parse import quote

from .exceptions import ConfigurationError

TOKEN_PATH = "/oauth2/v1/token"
PROFILE_PATH = "/oauth2/v1/profile"
WALLET_PATH = "/oauth2/v1/wallet"

# The wallet endpoint only serves qtum balances for now
WALLET_ASSET_TYPE = "qtum"


@dataclass(frozen=True)
class PlatformOAuthConfig:
    """
    Configuration for 777bingo OAuth 2.0.

    No field is validated: an empty host still builds a (useless) URL and
    checking values is left to the caller.

    Attributes:
        platform_host: Scheme and host of the platform (e.g. https://777bingo.com)
        client_id: Client ID issued by the platform
        client_secret: Client secret issued by the platform
        redirect_uri: Redirect URI registered for the client, sent for validation
    """

    platform_host: str
    client_id: str
    client_secret: str
    redirect_uri: str

    def token_url(self) -> str:
        """URL of the token endpoint."""
        return self.platform_host + TOKEN_PATH

    def profile_url(self, access_token: str) -> str:
        """
        URL of the profile endpoint for an access token.

        Args:
            access_token: Access token from the token exchange

        Returns:
            Profile URL with the percent-encoded token in the query string
        """
        return f"{self.platform_host}{PROFILE_PATH}?access_token={_quote_token(access_token)}"

    def wallet_url(self, access_token: str) -> str:
        """
        URL of the wallet endpoint for an access token.

        Args:
            access_token: Access token from the token exchange

        Returns:
            Wallet URL with the percent-encoded token and the fixed asset type
        """
        return (
            f"{self.platform_host}{WALLET_PATH}"
            f"?access_token={_quote_token(access_token)}&type={WALLET_ASSET_TYPE}"
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlatformOAuthConfig":
        """
        Create configuration from a parsed config file section.

        Args:
            data: Mapping with platform_host, client_id, client_secret, redirect_uri

        Returns:
            PlatformOAuthConfig instance

        Raises:
            ConfigurationError: If a key is missing
        """
        missing = [key for key in _FIELDS if key not in data]
        if missing:
            raise ConfigurationError(
                f"Missing OAuth configuration keys: {', '.join(missing)}"
            )

        return cls(**{key: str(data[key]) for key in _FIELDS})

    @classmethod
    def from_env(cls, prefix: str = "BINGO_") -> "PlatformOAuthConfig":
        """
        Load configuration from environment variables.

        Required environment variables (with the default prefix):
            BINGO_PLATFORM_HOST: Platform scheme and host
            BINGO_CLIENT_ID: Client ID
            BINGO_CLIENT_SECRET: Client secret
            BINGO_REDIRECT_URI: Registered redirect URI

        Args:
            prefix: Prefix prepended to each variable name

        Returns:
            PlatformOAuthConfig instance

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        values = {key: os.environ.get(f"{prefix}{key.upper()}") for key in _FIELDS}
        missing = [f"{prefix}{key.upper()}" for key, value in values.items() if value is None]

        if missing:
            raise ConfigurationError(
                "Missing 777bingo OAuth settings. Set environment variables:\n"
                + "\n".join(f"  {name}=..." for name in missing)
            )

        return cls(**values)


_FIELDS = ("platform_host", "client_id", "client_secret", "redirect_uri")


def _quote_token(access_token: str) -> str:
    return quote(access_token, safe="")
