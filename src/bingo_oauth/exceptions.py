"""
Exception classes for the 777bingo OAuth client.

All errors raised by this package derive from PlatformOAuthError so callers
can catch the whole family in one place, or pick out the individual failure
kinds (transport, HTTP status, decode, platform protocol) when they need to.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import ApiError


class PlatformOAuthError(Exception):
    """Base exception for all 777bingo OAuth errors."""

    pass


class ConfigurationError(PlatformOAuthError):
    """OAuth configuration could not be loaded (missing values)."""

    pass


class TransportError(PlatformOAuthError):
    """The HTTP request itself failed (DNS, refused connection, timeout)."""

    pass


class HTTPStatusError(PlatformOAuthError):
    """
    Platform answered with a non-200 HTTP status.

    Attributes:
        status_code: HTTP status code of the response
        reason: HTTP reason phrase (e.g. "Internal Server Error")
        body: Raw response body, decoded as text
    """

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"{status_code} {reason}: {body}")


class DecodeError(PlatformOAuthError):
    """Response body is not valid JSON for the expected shape."""

    pass


class ProtocolError(PlatformOAuthError):
    """
    Response decoded fine but carries a platform-level error.

    Attributes:
        operation: Name of the failed operation ("token", "profile", "wallet")
        api_error: The error envelope returned by the platform
    """

    def __init__(self, operation: str, api_error: "ApiError"):
        self.operation = operation
        self.api_error = api_error
        super().__init__(f"Get {operation} failed: {api_error.message}")


class SessionSerializationError(PlatformOAuthError):
    """A value could not be encoded to or decoded from session storage."""

    def __init__(self, message: str, type_name: Optional[str] = None):
        self.type_name = type_name
        super().__init__(message)
