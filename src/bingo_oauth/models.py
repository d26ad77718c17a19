"""
Data models for 777bingo OAuth responses.

Every platform response is a single flat JSON object that may hold either the
entity's own fields or an error envelope ({"error", "error_description"}),
never nested. Each model is decoded from the whole object in one pass and
keeps the envelope alongside its own fields; a value with an empty envelope
is a success.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Type, TypeVar

from .exceptions import DecodeError

E = TypeVar("E", bound="PlatformEntity")

# Integer fields are 64-bit on the platform
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _field(data: Dict[str, Any], key: str, kind: Type, zero: Any) -> Any:
    """
    Read one field with JSON zero-value semantics.

    Missing keys and nulls decode to the zero value; a present value of the
    wrong JSON type is a decode error.
    """
    value = data.get(key)
    if value is None:
        return zero

    # bool is an int subclass but never a valid number on the wire
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DecodeError(
            f"Field '{key}' has invalid type {type(value).__name__}"
        )

    if kind is int and not INT64_MIN <= value <= INT64_MAX:
        raise DecodeError(f"Field '{key}' is out of range")

    if isinstance(value, float) and not math.isfinite(value):
        raise DecodeError(f"Field '{key}' is out of range")

    return value


@dataclass(frozen=True)
class ApiError:
    """
    Platform error envelope.

    Attributes:
        error: Machine-readable error code (e.g. "invalid_grant")
        description: Human-readable error description
    """

    error: str = ""
    description: str = ""

    @property
    def is_empty(self) -> bool:
        """True when the platform reported no error."""
        return not self.error and not self.description

    @property
    def message(self) -> str:
        return f"{self.error}: {self.description}"

    def to_dict(self) -> Dict[str, str]:
        if self.is_empty:
            return {}
        return {"error": self.error, "error_description": self.description}

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "ApiError":
        return cls(
            error=_field(data, "error", str, ""),
            description=_field(data, "error_description", str, ""),
        )


class PlatformEntity(ABC):
    """Base for response entities that carry the flattened error envelope."""

    api_error: ApiError

    @property
    def succeeded(self) -> bool:
        return self.api_error.is_empty

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the platform's flat wire shape.

        Returns:
            Dictionary with the entity fields and, if set, the error fields
        """
        data = {name: getattr(self, name) for name in self._wire_fields()}
        data.update(self.api_error.to_dict())
        return data

    @classmethod
    def from_payload(cls: Type[E], data: Any) -> E:
        """
        Decode a parsed JSON body into this entity.

        Args:
            data: Parsed JSON value (must be an object)

        Returns:
            Entity instance; check ``succeeded`` before using it

        Raises:
            DecodeError: If the body is not an object or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise DecodeError(
                f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}"
            )

        values = {
            name: _field(data, name, kind, zero)
            for name, (kind, zero) in cls._wire_types().items()
        }
        return cls(api_error=ApiError.from_payload(data), **values)

    from_dict = from_payload

    @classmethod
    @abstractmethod
    def _wire_types(cls) -> Dict[str, tuple]:
        """Map each wire field to its (JSON type, zero value)."""

    @classmethod
    def _wire_fields(cls) -> tuple:
        return tuple(cls._wire_types())


@dataclass(frozen=True)
class Token(PlatformEntity):
    """
    OAuth token issued by the authorization-code grant.

    The caller owns the token after the exchange (typically keeping it in a
    session); this package never persists it.

    Attributes:
        access_token: Bearer credential for profile and wallet requests
        token_type: Token type (typically "bearer")
        expires_in: Token lifetime in seconds from issue
        refresh_token: Refresh credential (unused by this client)
        api_error: Error envelope, empty on success
    """

    access_token: str = ""
    token_type: str = ""
    expires_in: int = 0
    refresh_token: str = ""
    api_error: ApiError = field(default_factory=ApiError)

    @classmethod
    def _wire_types(cls) -> Dict[str, tuple]:
        return {
            "access_token": (str, ""),
            "token_type": (str, ""),
            "expires_in": (int, 0),
            "refresh_token": (str, ""),
        }


@dataclass(frozen=True)
class Profile(PlatformEntity):
    """Authenticated user's profile."""

    code: int = 0
    id: int = 0
    nickname: str = ""
    email: str = ""
    phone: str = ""
    api_error: ApiError = field(default_factory=ApiError)

    @classmethod
    def _wire_types(cls) -> Dict[str, tuple]:
        return {
            "code": (int, 0),
            "id": (int, 0),
            "nickname": (str, ""),
            "email": (str, ""),
            "phone": (str, ""),
        }


@dataclass(frozen=True)
class Wallet(PlatformEntity):
    """Authenticated user's qtum wallet."""

    code: int = 0
    address: str = ""
    balance: float = 0.0
    api_error: ApiError = field(default_factory=ApiError)

    @classmethod
    def _wire_types(cls) -> Dict[str, tuple]:
        return {
            "code": (int, 0),
            "address": (str, ""),
            "balance": ((int, float), 0.0),
        }

    @classmethod
    def from_payload(cls, data: Any) -> "Wallet":
        wallet = super().from_payload(data)
        # JSON integers are valid balances; normalize them to float
        if isinstance(wallet.balance, int):
            return cls(
                code=wallet.code,
                address=wallet.address,
                balance=_to_float("balance", wallet.balance),
                api_error=wallet.api_error,
            )
        return wallet

    from_dict = from_payload


def _to_float(key: str, value: int) -> float:
    try:
        return float(value)
    except OverflowError as e:
        raise DecodeError(f"Field '{key}' is out of range") from e
