"""
Session serialization for OAuth values.

Web frameworks keep per-user state (such as the Token obtained after the
OAuth redirect) in a session store that only understands strings. The
SessionSerializer encodes registered value types as tagged JSON and rebuilds
them on load without the caller knowing the stored type in advance.

Registration is explicit: the application calls register_session_types()
once at startup with the serializer its session layer uses.
"""

import json
import logging
from typing import Any, Dict, Optional, Type

from .exceptions import PlatformOAuthError, SessionSerializationError
from .models import Token

logger = logging.getLogger(__name__)

TYPE_KEY = "__type__"
DATA_KEY = "data"


class SessionSerializer:
    """
    JSON codec with a registry of value types.

    A registered type must provide ``to_dict()`` and a ``from_dict()``
    classmethod.
    """

    def __init__(self) -> None:
        self._types_by_name: Dict[str, Type] = {}
        self._names_by_type: Dict[Type, str] = {}

    def register(self, cls: Type, name: Optional[str] = None) -> None:
        """
        Register a value type.

        Registering the same type under the same name again is a no-op.

        Args:
            cls: Type to register
            name: Tag stored alongside the data (defaults to module.qualname)

        Raises:
            SessionSerializationError: If the type cannot be serialized or the
                                       name is already taken by another type
        """
        if not callable(getattr(cls, "to_dict", None)) or not callable(
            getattr(cls, "from_dict", None)
        ):
            raise SessionSerializationError(
                f"{cls.__name__} must define to_dict() and from_dict()"
            )

        name = name or f"{cls.__module__}.{cls.__qualname__}"
        existing = self._types_by_name.get(name)
        if existing is not None and existing is not cls:
            raise SessionSerializationError(
                f"Session type name '{name}' already registered for {existing.__name__}",
                type_name=name,
            )

        self._types_by_name[name] = cls
        self._names_by_type[cls] = name
        logger.debug(f"Registered session type {name}")

    def is_registered(self, cls: Type) -> bool:
        return cls in self._names_by_type

    def dumps(self, value: Any) -> str:
        """
        Encode a registered value.

        Raises:
            SessionSerializationError: If the value's type is not registered
        """
        name = self._names_by_type.get(type(value))
        if name is None:
            raise SessionSerializationError(
                f"Type {type(value).__name__} is not registered for session storage"
            )

        return json.dumps({TYPE_KEY: name, DATA_KEY: value.to_dict()})

    def loads(self, text: str) -> Any:
        """
        Decode a value produced by dumps().

        Raises:
            SessionSerializationError: If the text is malformed or names an
                                       unregistered type
        """
        try:
            envelope = json.loads(text)
        except (ValueError, TypeError) as e:
            raise SessionSerializationError(f"Invalid session data: {e}") from e

        if not isinstance(envelope, dict) or TYPE_KEY not in envelope:
            raise SessionSerializationError("Session data has no type tag")

        name = envelope[TYPE_KEY]
        cls = self._types_by_name.get(name)
        if cls is None:
            raise SessionSerializationError(
                f"Unknown session type '{name}'", type_name=name
            )

        try:
            return cls.from_dict(envelope.get(DATA_KEY) or {})
        except (PlatformOAuthError, KeyError, TypeError, ValueError) as e:
            raise SessionSerializationError(
                f"Could not rebuild {name} from session data: {e}", type_name=name
            ) from e


def register_session_types(serializer: SessionSerializer) -> None:
    """
    Register this package's session-storable types.

    Call once during application startup.

    Args:
        serializer: Serializer used by the application's session layer
    """
    serializer.register(Token)
