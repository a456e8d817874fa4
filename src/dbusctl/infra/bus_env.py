"""Infrastructure: message bus address detection.

This module locates the session and system bus addresses the way
libdbus clients do, for diagnostics.

Rules
-----
* Environment and filesystem probes only, no bus connection.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dbusctl.core.models import BusKind

SYSTEM_BUS_SOCKET = Path("/var/run/dbus/system_bus_socket")


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BusStatus:
    """Result of a bus address probe.

    Attributes
    ----------
    kind : BusKind
        Which bus was probed.
    found : bool
        Whether an address could be determined.
    address : str | None
        The bus address (``unix:path=...``), or ``None``.
    detail : str
        Human-readable description of where the address came from.
    """

    kind: BusKind
    found: bool
    address: str | None
    detail: str


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_bus(kind: BusKind) -> BusStatus:
    """Probe the environment for the address of the *kind* bus.

    Returns a :class:`BusStatus` regardless of whether the bus is
    present — the caller decides whether to abort or merely warn.
    """
    if kind is BusKind.SESSION:
        env_var = "DBUS_SESSION_BUS_ADDRESS"
        socket = _session_socket()
    else:
        env_var = "DBUS_SYSTEM_BUS_ADDRESS"
        socket = SYSTEM_BUS_SOCKET

    address = os.environ.get(env_var)
    if address:
        return BusStatus(kind=kind, found=True, address=address, detail=f"from {env_var}")

    if socket is not None and socket.exists():
        return BusStatus(
            kind=kind,
            found=True,
            address=f"unix:path={socket}",
            detail=f"socket at {socket}",
        )

    return BusStatus(
        kind=kind,
        found=False,
        address=None,
        detail=f"not found ({env_var} unset)",
    )


def _session_socket() -> Path | None:
    runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    if not runtime_dir:
        return None
    return Path(runtime_dir) / "bus"
