"""Core call service: validates, encodes and dispatches a method call.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~dbusctl.core.protocols.BusTransport` injected at
construction time (dependency inversion), keeping the core free of any
bus connection code.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``.
* Nothing is sent when the target or any argument is invalid.
* Only :class:`~dbusctl.exceptions.DbusctlError` subclasses escape.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from dbusctl.core.encoder import encode
from dbusctl.core.models import CallTarget
from dbusctl.core.protocols import BusTransport
from dbusctl.exceptions import (
    DbusctlError,
    EnvironmentError,
    InvalidTargetError,
    TransportError,
)

logger = logging.getLogger(__name__)


class CallService:
    """Stateless service that turns CLI strings into one method call.

    Parameters
    ----------
    transport:
        Any object satisfying the :class:`BusTransport` protocol.
    """

    def __init__(self, transport: BusTransport) -> None:
        self._transport: BusTransport = transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def call(self, target: CallTarget, tokens: Sequence[str]) -> list[Any]:
        """Encode *tokens*, call *target* and return the reply fields.

        Raises
        ------
        InvalidTargetError
            If a component of *target* is malformed.
        EncodeError
            If any argument fails to encode.
        TransportError
            If the call cannot be completed.
        """
        self._validate_target(target)
        body = encode(tokens)
        logger.info(
            "calling %s.%s on %s %s (%s bus, signature %r)",
            target.interface,
            target.method,
            target.service,
            target.object_path,
            target.bus.value,
            body.signature,
        )

        try:
            return self._transport.call(target, body)
        except DbusctlError:
            # Already one of ours — let it propagate unchanged.
            raise
        except Exception as exc:
            raise TransportError(f"Unexpected transport error: {exc}") from exc

    # ------------------------------------------------------------------
    # Target validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_target(target: CallTarget) -> None:
        """Raise :class:`InvalidTargetError` for malformed names or paths."""
        try:
            from dbus_fast.validators import (
                is_bus_name_valid,
                is_interface_name_valid,
                is_member_name_valid,
                is_object_path_valid,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "dbus-fast is not installed. Install with: pip install dbus-fast",
            ) from exc

        if not is_bus_name_valid(target.service):
            raise InvalidTargetError(
                f"Invalid service name: {target.service!r}",
                hint="Use a well-known name such as org.freedesktop.DBus "
                "or a unique name such as :1.42",
            )
        if not is_object_path_valid(target.object_path):
            raise InvalidTargetError(
                f"Invalid object path: {target.object_path!r}",
                hint="Object paths look like /org/freedesktop/DBus",
            )
        if not is_interface_name_valid(target.interface):
            raise InvalidTargetError(
                f"Invalid interface name: {target.interface!r}",
                hint="Interface names look like org.freedesktop.DBus.Peer",
            )
        if not is_member_name_valid(target.method):
            raise InvalidTargetError(
                f"Invalid method name: {target.method!r}",
                hint="Method names contain only [A-Za-z0-9_] and do not "
                "start with a digit",
            )
