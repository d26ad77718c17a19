"""
777bingo OAuth client.

This module implements the authorization-code flow against the platform:

- Token exchange (authorization code → access token)
- Profile lookup with an access token
- Wallet lookup with an access token

Each operation is a single request with no retries and no caching. The
client holds only its immutable configuration (and an optional
caller-supplied session), so one instance can serve concurrent calls.
"""

import logging
import time
from typing import Optional

import requests
from requests.auth import HTTPBasicAuth

from .config import PlatformOAuthConfig
from .exceptions import DecodeError, ProtocolError, TransportError
from .models import E, Profile, Token, Wallet
from .transport import Timeout, decode_json, http_get

logger = logging.getLogger(__name__)

# Token exchange must complete, body included, within this many seconds
TOKEN_REQUEST_TIMEOUT = 3

# Small reads keep the deadline check close to the actual arrival of data
READ_CHUNK_SIZE = 64


class PlatformOAuthClient:
    """
    Client for the 777bingo OAuth endpoints.

    Example:
        client = PlatformOAuthClient(config)
        token = client.get_token(code)
        profile = client.get_profile(token.access_token)
        wallet = client.get_wallet(token.access_token)
    """

    def __init__(
        self,
        config: PlatformOAuthConfig,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Platform OAuth configuration
            session: Optional requests session for connection reuse; when not
                     provided every call uses a fresh connection
        """
        self.config = config
        self.session = session

    def get_token(self, code: str) -> Token:
        """
        Exchange an authorization code for an access token.

        A non-200 status is not fatal on its own here: the platform reports
        grant failures in the body, so only a body that fails to decode or
        that carries an error stops the flow.

        Args:
            code: Authorization code received on the OAuth redirect

        Returns:
            Token with access and refresh tokens

        Raises:
            TransportError: If the request could not be completed
            DecodeError: If the response is not a valid token object
            ProtocolError: If the platform reported an error
        """
        logger.debug(f"Exchanging authorization code at {self.config.token_url()}")

        post = self.session.post if self.session is not None else requests.post
        deadline = time.monotonic() + TOKEN_REQUEST_TIMEOUT

        try:
            response = post(
                self.config.token_url(),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    # Only validated by the platform, no redirect happens
                    "redirect_uri": self.config.redirect_uri,
                },
                auth=HTTPBasicAuth(self.config.client_id, self.config.client_secret),
                timeout=TOKEN_REQUEST_TIMEOUT,
                stream=True,
            )
            body = _read_until(response, deadline)
        except requests.RequestException as e:
            logger.error(f"Network error during token exchange: {e}")
            raise TransportError(f"Network error during token exchange: {e}") from e

        logger.debug(f"Token endpoint answered with status {response.status_code}")

        try:
            payload = decode_json(body)
        except DecodeError as e:
            logger.error(
                f"Invalid response from token endpoint "
                f"(status {response.status_code}): {e}"
            )
            raise DecodeError(f"Invalid response from token endpoint: {e}") from e

        token = _check("token", Token.from_payload(payload))
        logger.info("Successfully obtained access token")
        return token

    def get_profile(self, access_token: str, timeout: Timeout = None) -> Profile:
        """
        Fetch the authenticated user's profile.

        Args:
            access_token: Access token from get_token
            timeout: Optional request timeout in seconds

        Returns:
            Profile of the token owner

        Raises:
            TransportError: If the request could not be completed
            HTTPStatusError: If the response status is not 200
            DecodeError: If the response is not a valid profile object
            ProtocolError: If the platform reported an error
        """
        body = http_get(
            self.config.profile_url(access_token), timeout=timeout, session=self.session
        )
        return _check("profile", Profile.from_payload(decode_json(body)))

    def get_wallet(self, access_token: str, timeout: Timeout = None) -> Wallet:
        """
        Fetch the authenticated user's qtum wallet.

        Args:
            access_token: Access token from get_token
            timeout: Optional request timeout in seconds

        Returns:
            Wallet with address and balance

        Raises:
            TransportError: If the request could not be completed
            HTTPStatusError: If the response status is not 200
            DecodeError: If the response is not a valid wallet object
            ProtocolError: If the platform reported an error
        """
        body = http_get(
            self.config.wallet_url(access_token), timeout=timeout, session=self.session
        )
        return _check("wallet", Wallet.from_payload(decode_json(body)))


def _read_until(response: requests.Response, deadline: float) -> bytes:
    """
    Read a streamed response body, failing once the deadline has passed.

    The requests timeout bounds the connect step and each single read, not
    the whole exchange.
    """
    chunks = []
    try:
        if time.monotonic() > deadline:
            raise _deadline_error()
        for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
            if time.monotonic() > deadline:
                raise _deadline_error()
            chunks.append(chunk)
    finally:
        response.close()
    return b"".join(chunks)


def _deadline_error() -> TransportError:
    message = f"Token exchange did not complete within {TOKEN_REQUEST_TIMEOUT}s"
    logger.error(message)
    return TransportError(message)


def _check(operation: str, entity: E) -> E:
    if not entity.succeeded:
        logger.error(f"Get {operation} failed: {entity.api_error.message}")
        raise ProtocolError(operation, entity.api_error)
    return entity


def get_token(code: str, config: PlatformOAuthConfig) -> Token:
    """Exchange an authorization code for a token (see PlatformOAuthClient.get_token)."""
    return PlatformOAuthClient(config).get_token(code)


def get_profile(
    config: PlatformOAuthConfig, access_token: str, timeout: Timeout = None
) -> Profile:
    """Fetch the token owner's profile (see PlatformOAuthClient.get_profile)."""
    return PlatformOAuthClient(config).get_profile(access_token, timeout=timeout)


def get_wallet(
    config: PlatformOAuthConfig, access_token: str, timeout: Timeout = None
) -> Wallet:
    """Fetch the token owner's wallet (see PlatformOAuthClient.get_wallet)."""
    return PlatformOAuthClient(config).get_wallet(access_token, timeout=timeout)
