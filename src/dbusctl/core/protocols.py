"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Any, Protocol

from dbusctl.core.models import CallTarget, MessageBody


class BusTransport(Protocol):
    """Contract for message-bus backends.

    Any object that implements :meth:`call` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def call(self, target: CallTarget, body: MessageBody) -> list[Any]:
        """Send one method call carrying *body* to *target*.

        Returns the fields of the reply body, in order.  The body is
        consumed opaquely: its signature and wire values are forwarded
        as-is.

        Implementations must map all backend-specific exceptions to
        :class:`~dbusctl.exceptions.DbusctlError` subclasses.

        Raises
        ------
        BusConnectionError
            When the bus cannot be reached.
        MethodCallError
            When the destination replies with a D-Bus error.
        """
        ...  # pragma: no cover
