"""Custom exception hierarchy for dbusctl.

All exceptions that cross layer boundaries must inherit from
:class:`DbusctlError`.  Raw third-party exceptions (e.g. from dbus-fast)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
DbusctlError
├── EncodeError
│   ├── MalformedTokenError
│   ├── UnsupportedTypeError
│   ├── InvalidValueError
│   ├── InvalidArraySpecError
│   ├── UnsupportedArrayElementTypeError
│   ├── InvalidDictSpecError
│   ├── OddPairCountError
│   └── UnsupportedDictTypesError
├── InvalidTargetError
├── TransportError
│   ├── BusConnectionError
│   └── MethodCallError
└── EnvironmentError
"""

from __future__ import annotations

_TYPE_TAGS = (
    "int16, uint16, int32, uint32, int64, uint64, byte, double, "
    "boolean|bool, string, objpath, signature"
)


class DbusctlError(Exception):
    """Base exception for all dbusctl errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Argument encoding -----------------------------------------------------

class EncodeError(DbusctlError):
    """Raised when a ``type:value`` argument cannot be encoded."""


class MalformedTokenError(EncodeError):
    """Raised when an argument has no ``:`` separating type and value."""

    def __init__(self, token: str) -> None:
        super().__init__(
            f"Invalid argument '{token}': expected format: <type>:<value>",
            hint=f"Supported types: {_TYPE_TAGS}, array, dict",
        )
        self.token: str = token


class UnsupportedTypeError(EncodeError):
    """Raised when the type tag of an argument is not recognised."""

    def __init__(self, tag: str) -> None:
        super().__init__(
            f"Unsupported type: {tag}",
            hint=f"Supported types: {_TYPE_TAGS}, array, dict",
        )
        self.tag: str = tag


class InvalidValueError(EncodeError):
    """Raised when a value does not parse as its declared scalar kind."""

    def __init__(self, kind: str, raw: str, cause: str) -> None:
        super().__init__(f"Invalid {kind} '{raw}': {cause}")
        self.kind: str = kind
        self.raw: str = raw
        self.cause: str = cause


class InvalidArraySpecError(EncodeError):
    """Raised when an ``array`` argument lacks its element type."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"Invalid array type '{raw}': expected format: "
            "array:<element_type>:<comma_separated_values>",
        )
        self.raw: str = raw


class UnsupportedArrayElementTypeError(EncodeError):
    """Raised when an ``array`` argument names an unknown element type."""

    def __init__(self, tag: str) -> None:
        super().__init__(
            f"Unsupported array element type: {tag}",
            hint=f"Array elements may be: {_TYPE_TAGS}",
        )
        self.tag: str = tag


class InvalidDictSpecError(EncodeError):
    """Raised when a ``dict`` argument lacks its key or value type."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"Invalid dictionary type '{raw}': expected format: "
            "dict:<key_type>:<value_type>:<comma_separated_pairs>",
        )
        self.raw: str = raw


class OddPairCountError(EncodeError):
    """Raised when a ``dict`` argument has an unpaired key."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"Invalid dictionary type '{raw}': expected even number of pairs",
        )
        self.raw: str = raw


class UnsupportedDictTypesError(EncodeError):
    """Raised for a key/value type combination dictionaries do not support."""

    def __init__(self, key_type: str, value_type: str) -> None:
        super().__init__(
            "Unsupported dictionary key-value type combination: "
            f"{key_type}:{value_type}",
            hint=(
                "Keys must be 'string'; values may be int16, uint16, int32, "
                "uint32, int64, uint64, byte, double, boolean|bool or string"
            ),
        )
        self.key_type: str = key_type
        self.value_type: str = value_type


# --- Call target -----------------------------------------------------------

class InvalidTargetError(DbusctlError):
    """Raised when the service, object path, interface or method is malformed."""


# --- Transport -------------------------------------------------------------

class TransportError(DbusctlError):
    """Raised when the method call could not be completed over the bus."""


class BusConnectionError(TransportError):
    """Raised when connecting to the message bus fails."""


class MethodCallError(TransportError):
    """Raised when the remote service answers with a D-Bus error reply."""

    def __init__(
        self,
        error_name: str,
        message: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(f"{error_name}: {message}" if message else error_name, hint=hint)
        self.error_name: str = error_name


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(DbusctlError):
    """Raised when a required runtime dependency is not available."""
