"""dbus-fast backed implementation of :class:`~dbusctl.core.protocols.BusTransport`.

This module is the **only** place in the codebase that opens a bus
connection.  All dbus-fast exceptions are caught here and re-raised as
typed :class:`~dbusctl.exceptions.DbusctlError` subclasses — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from dbusctl.core.models import BusKind, CallTarget, MessageBody
from dbusctl.exceptions import (
    BusConnectionError,
    DbusctlError,
    EnvironmentError,
    MethodCallError,
    TransportError,
)

logger = logging.getLogger(__name__)


class DbusFastTransport:
    """Concrete :class:`BusTransport` backed by ``dbus_fast.aio``.

    Usage::

        transport = DbusFastTransport()
        fields = transport.call(target, encode(["string:hello"]))

    Each call opens a fresh connection, performs exactly one
    request/response exchange and disconnects.
    """

    _ADDRESS_ENV: dict[BusKind, str] = {
        BusKind.SESSION: "DBUS_SESSION_BUS_ADDRESS",
        BusKind.SYSTEM: "DBUS_SYSTEM_BUS_ADDRESS",
    }

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def call(self, target: CallTarget, body: MessageBody) -> list[Any]:
        """Send *body* to *target* and return the reply fields.

        Raises
        ------
        BusConnectionError
            When the bus cannot be reached or authentication fails.
        MethodCallError
            When the destination replies with an error.
        TransportError
            For any other dbus-fast failure.
        """
        try:
            import dbus_fast  # noqa: F401
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "dbus-fast is not installed. Install with: pip install dbus-fast",
            ) from exc

        try:
            return asyncio.run(self._call(target, body))
        except DbusctlError:
            raise
        except Exception as exc:
            raise TransportError(f"Unexpected dbus-fast error: {exc}") from exc

    # ------------------------------------------------------------------
    # Async exchange
    # ------------------------------------------------------------------

    async def _call(self, target: CallTarget, body: MessageBody) -> list[Any]:
        from dbus_fast import Message, MessageType

        bus = await self._connect(target.bus)
        try:
            message = Message(
                destination=target.service,
                path=target.object_path,
                interface=target.interface,
                member=target.method,
                signature=body.signature,
                body=body.to_wire(),
            )
            logger.debug("sending %s with body %r", message.member, message.body)
            reply = await bus.call(message)
        finally:
            bus.disconnect()

        if reply is None:
            raise TransportError("The bus closed without replying.")

        if reply.message_type == MessageType.ERROR:
            self._raise_error_reply(reply)

        logger.debug("reply signature %r", reply.signature)
        return list(reply.body)

    async def _connect(self, kind: BusKind) -> Any:
        from dbus_fast import BusType
        from dbus_fast.aio import MessageBus
        from dbus_fast.errors import AuthError, InvalidAddressError

        bus_type = BusType.SYSTEM if kind is BusKind.SYSTEM else BusType.SESSION
        logger.info("connecting to the %s bus", kind.value)

        try:
            return await MessageBus(bus_type=bus_type).connect()
        except (OSError, AuthError, InvalidAddressError) as exc:
            raise BusConnectionError(
                f"Could not connect to the {kind.value} bus: {exc}",
                hint=f"Check that a {kind.value} bus is running and that "
                f"{self._ADDRESS_ENV[kind]} is correct. "
                "Run 'dbusctl doctor' for details.",
            ) from exc

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _raise_error_reply(reply: Any) -> None:
        """Translate a D-Bus error reply into :class:`MethodCallError`.

        Always raises.
        """
        detail = ""
        if reply.body and isinstance(reply.body[0], str):
            detail = reply.body[0]

        hint = None
        if reply.error_name in (
            "org.freedesktop.DBus.Error.ServiceUnknown",
            "org.freedesktop.DBus.Error.NameHasNoOwner",
        ):
            hint = "Is the service running on this bus? Try --system for system services."
        elif reply.error_name in (
            "org.freedesktop.DBus.Error.UnknownMethod",
            "org.freedesktop.DBus.Error.InvalidArgs",
        ):
            hint = "Check the method name and argument types against the interface."

        raise MethodCallError(reply.error_name or "unknown error", detail, hint=hint)
