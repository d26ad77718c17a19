"""
HTTP helpers shared by the profile and wallet lookups.

http_get performs a single GET, reads the whole body and turns a non-200
status into an HTTPStatusError. There are no retries: callers that want a
retry policy implement it above this layer.
"""

import json
import logging
from typing import Any, Optional, Union

import requests

from .exceptions import DecodeError, HTTPStatusError, TransportError

logger = logging.getLogger(__name__)

Timeout = Optional[Union[float, tuple]]


def http_get(
    url: str,
    timeout: Timeout = None,
    session: Optional[requests.Session] = None,
) -> bytes:
    """
    Issue a GET request and return the raw response body.

    Args:
        url: Fully built request URL
        timeout: Request timeout in seconds (None waits indefinitely)
        session: Optional session for connection reuse

    Returns:
        Response body bytes, unparsed

    Raises:
        TransportError: If the request could not be completed
        HTTPStatusError: If the response status is not 200
    """
    logger.debug(f"GET {_redact(url)}")

    try:
        if session is not None:
            response = session.get(url, timeout=timeout)
        else:
            response = requests.get(url, timeout=timeout)
        body = response.content
    except requests.RequestException as e:
        logger.error(f"Network error during GET {_redact(url)}: {e}")
        raise TransportError(f"Network error during GET request: {e}") from e

    logger.debug(f"body: {body!r}")

    if response.status_code != 200:
        text = body.decode("utf-8", errors="replace")
        logger.error(f"Request failed: {response.status_code} - {text}")
        raise HTTPStatusError(response.status_code, response.reason or "", text)

    return body


def decode_json(body: Union[bytes, str]) -> Any:
    """
    Parse a response body as JSON.

    NaN and Infinity literals are rejected, as standard JSON has no such values.

    Raises:
        DecodeError: If the body is not valid JSON
    """
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Invalid JSON in response body: {e}") from e


def _reject_constant(name: str) -> Any:
    raise DecodeError(f"Invalid JSON in response body: {name} is not a number")


def _redact(url: str) -> str:
    """Strip the query string so access tokens stay out of the logs."""
    return url.split("?", 1)[0]
