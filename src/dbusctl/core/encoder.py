"""Typed argument encoder: ``type:value`` strings to a message body.

Grammar
-------
::

    token       := scalarToken | arrayToken | dictToken
    scalarToken := <scalarTag> ":" <value>
    arrayToken  := "array" ":" <scalarTag> ":" <v1> "," <v2> ...
    dictToken   := "dict" ":" <scalarTag> ":" <scalarTag> ":" <k1> "," <v1> ...

``,`` and ``:`` are hard delimiters; there is no escape mechanism.

Every context (bare scalar, array element, dictionary key and value)
goes through :func:`parse_scalar`.  The first invalid element aborts the
whole call; no partial body is ever returned.

Guarantees
----------
* Pure: no I/O and no state shared between calls.
* Only :class:`~dbusctl.exceptions.EncodeError` subclasses escape
  (or :class:`~dbusctl.exceptions.EnvironmentError` when dbus-fast,
  which validates object paths and signatures, is not installed).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from typing import Any

from dbusctl.core.models import (
    ArrayField,
    DictField,
    Field,
    MessageBody,
    ScalarField,
    ScalarKind,
)
from dbusctl.exceptions import (
    EnvironmentError,
    InvalidArraySpecError,
    InvalidDictSpecError,
    InvalidValueError,
    MalformedTokenError,
    OddPairCountError,
    UnsupportedArrayElementTypeError,
    UnsupportedDictTypesError,
    UnsupportedTypeError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scalar parsers
# ---------------------------------------------------------------------------

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)

# (minimum, maximum) inclusive.
_INT_RANGES: dict[ScalarKind, tuple[int, int]] = {
    ScalarKind.INT16: (-(2**15), 2**15 - 1),
    ScalarKind.UINT16: (0, 2**16 - 1),
    ScalarKind.INT32: (-(2**31), 2**31 - 1),
    ScalarKind.UINT32: (0, 2**32 - 1),
    ScalarKind.INT64: (-(2**63), 2**63 - 1),
    ScalarKind.UINT64: (0, 2**64 - 1),
    ScalarKind.BYTE: (0, 2**8 - 1),
}

# Digits in 2**64 - 1; longer magnitudes are out of range for every kind.
_MAX_INT_DIGITS = 20


def _integer_parser(kind: ScalarKind) -> Callable[[str], int]:
    low, high = _INT_RANGES[kind]
    pattern = _SIGNED_RE if low < 0 else _UNSIGNED_RE

    def parse(raw: str) -> int:
        if not raw:
            raise ValueError("cannot parse integer from empty string")
        if pattern.fullmatch(raw) is None:
            raise ValueError("invalid digit found in string")
        negative = raw.startswith("-")
        digits = raw.lstrip("+-").lstrip("0") or "0"
        if len(digits) > _MAX_INT_DIGITS:
            if negative:
                raise ValueError("number too small to fit in target type")
            raise ValueError("number too large to fit in target type")
        value = -int(digits) if negative else int(digits)
        if value > high:
            raise ValueError("number too large to fit in target type")
        if value < low:
            raise ValueError("number too small to fit in target type")
        return value

    return parse


def _parse_double(raw: str) -> float:
    if _FLOAT_RE.fullmatch(raw) is None:
        raise ValueError("invalid float literal")
    return float(raw)


def _parse_boolean(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ValueError("provided string was not `true` or `false`")


def _parse_string(raw: str) -> str:
    return raw


def _parse_object_path(raw: str) -> str:
    try:
        from dbus_fast.validators import is_object_path_valid
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "dbus-fast is not installed. Install with: pip install dbus-fast",
        ) from exc

    if not is_object_path_valid(raw):
        raise ValueError(
            "object paths must start with '/' and contain only "
            "[A-Za-z0-9_] elements separated by single '/'"
        )
    return raw


def _parse_signature(raw: str) -> str:
    try:
        from dbus_fast import SignatureTree
        from dbus_fast.errors import InvalidSignatureError
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "dbus-fast is not installed. Install with: pip install dbus-fast",
        ) from exc

    try:
        SignatureTree(raw)
    except InvalidSignatureError as exc:
        raise ValueError(str(exc)) from exc
    return raw


_SCALAR_PARSERS: dict[ScalarKind, Callable[[str], Any]] = {
    **{kind: _integer_parser(kind) for kind in _INT_RANGES},
    ScalarKind.DOUBLE: _parse_double,
    ScalarKind.BOOLEAN: _parse_boolean,
    ScalarKind.STRING: _parse_string,
    ScalarKind.OBJECT_PATH: _parse_object_path,
    ScalarKind.SIGNATURE: _parse_signature,
}

# Value kinds a string-keyed dictionary may carry.
_DICT_VALUE_KINDS: frozenset[ScalarKind] = frozenset(_SCALAR_PARSERS) - {
    ScalarKind.OBJECT_PATH,
    ScalarKind.SIGNATURE,
}


def parse_scalar(kind: ScalarKind, raw: str) -> Any:
    """Parse *raw* as a value of *kind* using its canonical text form.

    Raises
    ------
    InvalidValueError
        If *raw* is not a valid textual encoding of *kind*.
    """
    try:
        return _SCALAR_PARSERS[kind](raw)
    except ValueError as exc:
        raise InvalidValueError(kind.value, raw, str(exc)) from exc


# ---------------------------------------------------------------------------
# Field parsers (one per top-level tag family)
# ---------------------------------------------------------------------------

def _split_elements(values: str) -> list[str]:
    return [element.strip() for element in values.split(",")]


def _parse_array(rest: str) -> ArrayField:
    parts = rest.split(":", 1)
    if len(parts) != 2:
        raise InvalidArraySpecError(rest)
    element_tag, values = parts

    kind = ScalarKind.from_tag(element_tag)
    if kind is None:
        raise UnsupportedArrayElementTypeError(element_tag)

    return ArrayField(
        element_kind=kind,
        values=tuple(parse_scalar(kind, element) for element in _split_elements(values)),
    )


def _parse_dict(rest: str) -> DictField:
    parts = rest.split(":", 2)
    if len(parts) != 3:
        raise InvalidDictSpecError(rest)
    key_tag, value_tag, pairs = parts

    tokens = _split_elements(pairs)
    if len(tokens) % 2 != 0:
        raise OddPairCountError(rest)

    key_kind = ScalarKind.from_tag(key_tag)
    value_kind = ScalarKind.from_tag(value_tag)
    if key_kind is not ScalarKind.STRING or value_kind not in _DICT_VALUE_KINDS:
        raise UnsupportedDictTypesError(key_tag, value_tag)

    mapping: dict[Any, Any] = {}
    for index in range(0, len(tokens), 2):
        key = parse_scalar(key_kind, tokens[index])
        mapping[key] = parse_scalar(value_kind, tokens[index + 1])

    return DictField(
        key_kind=key_kind,
        value_kind=value_kind,
        entries=tuple(mapping.items()),
    )


_COMPOSITE_PARSERS: dict[str, Callable[[str], Field]] = {
    "array": _parse_array,
    "dict": _parse_dict,
}


def parse_token(token: str) -> Field:
    """Parse a single ``type:value`` argument into a body field.

    Raises
    ------
    EncodeError
        Any subclass, describing the first problem found in *token*.
    """
    tag, sep, rest = token.partition(":")
    if not sep:
        raise MalformedTokenError(token)

    composite = _COMPOSITE_PARSERS.get(tag)
    if composite is not None:
        return composite(rest)

    kind = ScalarKind.from_tag(tag)
    if kind is None:
        raise UnsupportedTypeError(tag)
    return ScalarField(kind=kind, value=parse_scalar(kind, rest))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def encode(tokens: Sequence[str]) -> MessageBody:
    """Encode *tokens* into a :class:`MessageBody`, preserving order.

    Raises
    ------
    EncodeError
        On the first token that fails to parse.
    """
    fields: list[Field] = []
    for position, token in enumerate(tokens):
        field = parse_token(token)
        logger.debug("argument %d: %r -> %s", position, token, field.signature)
        fields.append(field)

    body = MessageBody(fields=tuple(fields))
    logger.debug("encoded %d argument(s), signature %r", len(body), body.signature)
    return body
