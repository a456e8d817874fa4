"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* The only third-party code used is dbus-fast's pure name, path and
  signature validators.
"""

from dbusctl.core.call_service import CallService
from dbusctl.core.encoder import encode, parse_scalar, parse_token
from dbusctl.core.models import (
    ArrayField,
    BusKind,
    CallTarget,
    DictField,
    MessageBody,
    ScalarField,
    ScalarKind,
)
from dbusctl.core.protocols import BusTransport

__all__: list[str] = [
    "ArrayField",
    "BusKind",
    "BusTransport",
    "CallService",
    "CallTarget",
    "DictField",
    "MessageBody",
    "ScalarField",
    "ScalarKind",
    "encode",
    "parse_scalar",
    "parse_token",
]
