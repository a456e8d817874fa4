"""Infrastructure layer — external system integration.

This layer wraps all interaction with dbus-fast and the operating
system.  Every raw third-party exception must be caught here and
re-raised as a :class:`~dbusctl.exceptions.DbusctlError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from dbusctl.infra.bus_env import BusStatus, detect_bus
from dbusctl.infra.dbus_transport import DbusFastTransport

__all__: list[str] = [
    "BusStatus",
    "DbusFastTransport",
    "detect_bus",
]
