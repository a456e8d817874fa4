"""``dbusctl doctor``: can this environment reach a message bus?

Each check yields a :class:`DoctorCheck`.  A missing bus is only a
warning because the other bus may still be usable; a missing or too old
runtime dependency is a failure.
"""

from __future__ import annotations

import enum
import platform
import sys
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

from dbusctl.cli import exit_codes
from dbusctl.cli.console import console, escape
from dbusctl.core.models import BusKind
from dbusctl.infra.bus_env import detect_bus
from dbusctl.version import __version__

MIN_PYTHON = (3, 10)


class CheckStatus(enum.Enum):
    OK = "green"
    WARN = "yellow"
    FAIL = "red"


@dataclass(frozen=True, slots=True)
class DoctorCheck:
    component: str
    value: str
    status: CheckStatus = CheckStatus.OK


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def _python_check() -> DoctorCheck:
    ok = sys.version_info[:2] >= MIN_PYTHON
    value = platform.python_version()
    if not ok:
        value += " (>={}.{} required)".format(*MIN_PYTHON)
    return DoctorCheck("Python", value, CheckStatus.OK if ok else CheckStatus.FAIL)


def _dbus_fast_check() -> DoctorCheck:
    try:
        import dbus_fast  # noqa: F401
    except ImportError:
        return DoctorCheck("dbus-fast", "not installed", CheckStatus.FAIL)

    try:
        return DoctorCheck("dbus-fast", version("dbus-fast"))
    except PackageNotFoundError:
        return DoctorCheck("dbus-fast", "unknown version")


def _bus_check(kind: BusKind) -> DoctorCheck:
    found = detect_bus(kind)
    component = f"{kind.value} bus"
    if found.found and found.address:
        return DoctorCheck(component, found.address)
    return DoctorCheck(component, found.detail, CheckStatus.WARN)


def collect_checks() -> list[DoctorCheck]:
    """Run every check, in display order."""
    return [
        DoctorCheck("dbusctl", __version__),
        _python_check(),
        _dbus_fast_check(),
        _bus_check(BusKind.SESSION),
        _bus_check(BusKind.SYSTEM),
        DoctorCheck("OS", f"{platform.system()} {platform.release()} ({platform.machine()})"),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render(checks: list[DoctorCheck]) -> None:
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        console.print("dbusctl doctor")
        for check in checks:
            console.print(f"  {check.status.name:<5} {check.component:<12} {check.value}")
        return

    table = Table(title="dbusctl doctor", header_style="bold cyan", border_style="dim")
    table.add_column("Status", justify="center")
    table.add_column("Component", style="bold")
    table.add_column("Value")
    for check in checks:
        style = check.status.value
        table.add_row(f"[{style}]{check.status.name}[/{style}]", check.component, escape(check.value))
    console.print(table)


def run_doctor() -> int:
    """Render the diagnostics; :data:`exit_codes.GENERAL_ERROR` if any check failed."""
    checks = collect_checks()
    _render(checks)

    failed = [check.component for check in checks if check.status is CheckStatus.FAIL]
    if failed:
        console.print(f"Failed: {', '.join(failed)}")
        return exit_codes.GENERAL_ERROR
    console.print("All checks passed.")
    return exit_codes.SUCCESS
