"""Domain models for dbusctl.

All models are **frozen** dataclasses or enums — immutable value objects
with no behaviour beyond data access and signature derivation.  They
carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Union


# ---------------------------------------------------------------------------
# Scalar kinds
# ---------------------------------------------------------------------------

class ScalarKind(enum.Enum):
    """Closed set of primitive D-Bus kinds accepted on the command line.

    The enum value is the canonical type tag; :attr:`signature` is the
    single-character D-Bus type code.
    """

    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    BYTE = "byte"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    STRING = "string"
    OBJECT_PATH = "objpath"
    SIGNATURE = "signature"

    @property
    def signature(self) -> str:
        """Single-character D-Bus type code for this kind."""
        return _SIGNATURE_CODES[self]

    @classmethod
    def from_tag(cls, tag: str) -> ScalarKind | None:
        """Return the kind named by *tag*, or ``None`` if it is unknown.

        Matching is case-sensitive; ``bool`` is accepted as a synonym
        for ``boolean``.
        """
        return _TAGS.get(tag)


_SIGNATURE_CODES: dict[ScalarKind, str] = {
    ScalarKind.INT16: "n",
    ScalarKind.UINT16: "q",
    ScalarKind.INT32: "i",
    ScalarKind.UINT32: "u",
    ScalarKind.INT64: "x",
    ScalarKind.UINT64: "t",
    ScalarKind.BYTE: "y",
    ScalarKind.DOUBLE: "d",
    ScalarKind.BOOLEAN: "b",
    ScalarKind.STRING: "s",
    ScalarKind.OBJECT_PATH: "o",
    ScalarKind.SIGNATURE: "g",
}

_TAGS: dict[str, ScalarKind] = {kind.value: kind for kind in ScalarKind}
_TAGS["bool"] = ScalarKind.BOOLEAN


class BusKind(enum.Enum):
    """Which well-known message bus to connect to."""

    SESSION = "session"
    SYSTEM = "system"


# ---------------------------------------------------------------------------
# Message body fields
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScalarField:
    """A single primitive value."""

    kind: ScalarKind
    value: Any
    """``int``, ``float``, ``bool`` or ``str`` depending on :attr:`kind`."""

    @property
    def signature(self) -> str:
        return self.kind.signature

    def to_wire(self) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class ArrayField:
    """An ordered, homogeneous sequence of primitive values."""

    element_kind: ScalarKind
    values: tuple[Any, ...]

    @property
    def signature(self) -> str:
        return "a" + self.element_kind.signature

    def to_wire(self) -> list[Any] | bytes:
        """``ay`` is marshalled from a bytes-like value; every other array from a list."""
        if self.element_kind is ScalarKind.BYTE:
            return bytes(self.values)
        return list(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, slots=True)
class DictField:
    """A mapping between two primitive kinds.

    Entries are stored as an insertion-ordered tuple of ``(key, value)``
    pairs with unique keys, keeping the field hashable.
    """

    key_kind: ScalarKind
    value_kind: ScalarKind
    entries: tuple[tuple[Any, Any], ...]

    @property
    def signature(self) -> str:
        return "a{" + self.key_kind.signature + self.value_kind.signature + "}"

    def as_dict(self) -> dict[Any, Any]:
        return dict(self.entries)

    def to_wire(self) -> dict[Any, Any]:
        return self.as_dict()

    def __len__(self) -> int:
        return len(self.entries)


Field = Union[ScalarField, ArrayField, DictField]


@dataclass(frozen=True, slots=True)
class MessageBody:
    """Immutable, ordered collection of message body fields.

    Field order is significant: D-Bus method arguments are positional.
    """

    fields: tuple[Field, ...]

    @property
    def signature(self) -> str:
        """The D-Bus signature describing the whole body."""
        return "".join(field.signature for field in self.fields)

    def to_wire(self) -> list[Any]:
        """Return the body as the list of Python values sent on the wire."""
        return [field.to_wire() for field in self.fields]

    def __len__(self) -> int:
        return len(self.fields)

    def __bool__(self) -> bool:
        return len(self.fields) > 0


# ---------------------------------------------------------------------------
# Call target
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CallTarget:
    """Where a method call is sent."""

    service: str
    """Destination bus name (e.g. ``org.freedesktop.DBus``)."""

    object_path: str
    """Object path on the destination (e.g. ``/org/freedesktop/DBus``)."""

    interface: str
    """Interface that declares :attr:`method`."""

    method: str
    """Member name of the method to invoke."""

    bus: BusKind = BusKind.SESSION
    """Bus the destination lives on."""
