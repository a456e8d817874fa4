"""Reply rendering: D-Bus reply values to JSON output.

dbus-fast unmarshals replies into plain Python values.  JSON cannot hold
``Variant`` wrappers, ``bytes`` (for ``ay``) or non-finite doubles
directly; :func:`to_jsonable` converts them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from dbusctl.cli.console import output


def to_jsonable(value: Any) -> Any:
    """Convert a reply value into something :mod:`json` can serialise.

    * ``Variant`` → its inner value (recursively converted)
    * ``bytes`` / ``bytearray`` → list of ints
    * ``list`` / ``tuple`` (arrays and structs) → list
    * ``dict`` → dict with string keys
    * ``NaN`` and infinities → ``None``
    """
    # Duck-typed so this module does not import dbus-fast.
    if hasattr(value, "signature") and hasattr(value, "value") and not isinstance(value, (str, bytes)):
        return to_jsonable(value.value)
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {_json_key(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _json_key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def render_reply(fields: Sequence[Any]) -> None:
    """Print the first reply field as JSON; an empty reply prints nothing."""
    if not fields:
        return
    output.print_json(to_jsonable(fields[0]))
