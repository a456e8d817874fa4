"""Tests for bus address detection (infra/bus_env.py).

The environment and filesystem are controlled with ``monkeypatch`` and
``tmp_path`` — no system dependency.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from dbusctl.core.models import BusKind
from dbusctl.infra import bus_env
from dbusctl.infra.bus_env import BusStatus, detect_bus


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DBUS_SESSION_BUS_ADDRESS", raising=False)
    monkeypatch.delenv("DBUS_SYSTEM_BUS_ADDRESS", raising=False)
    monkeypatch.delenv("XDG_RUNTIME_DIR", raising=False)
    monkeypatch.setattr(bus_env, "SYSTEM_BUS_SOCKET", tmp_path / "missing_socket")


# ---------------------------------------------------------------------------
# Session bus
# ---------------------------------------------------------------------------

class TestSessionBus:
    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DBUS_SESSION_BUS_ADDRESS", "unix:path=/run/user/1000/bus")
        status = detect_bus(BusKind.SESSION)
        assert status.found is True
        assert status.address == "unix:path=/run/user/1000/bus"
        assert "DBUS_SESSION_BUS_ADDRESS" in status.detail

    def test_from_runtime_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        (tmp_path / "bus").touch()
        monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))
        status = detect_bus(BusKind.SESSION)
        assert status.found is True
        assert status.address == f"unix:path={tmp_path / 'bus'}"

    def test_runtime_dir_without_socket(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
    ) -> None:
        monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))
        status = detect_bus(BusKind.SESSION)
        assert status.found is False

    def test_not_found(self) -> None:
        status = detect_bus(BusKind.SESSION)
        assert status.found is False
        assert status.address is None
        assert status.kind is BusKind.SESSION
        assert "not found" in status.detail


# ---------------------------------------------------------------------------
# System bus
# ---------------------------------------------------------------------------

class TestSystemBus:
    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DBUS_SYSTEM_BUS_ADDRESS", "unix:path=/tmp/sys")
        status = detect_bus(BusKind.SYSTEM)
        assert status.found is True
        assert status.address == "unix:path=/tmp/sys"

    def test_from_well_known_socket(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
    ) -> None:
        socket = tmp_path / "system_bus_socket"
        socket.touch()
        monkeypatch.setattr(bus_env, "SYSTEM_BUS_SOCKET", socket)
        status = detect_bus(BusKind.SYSTEM)
        assert status.found is True
        assert status.address == f"unix:path={socket}"

    def test_not_found(self) -> None:
        status = detect_bus(BusKind.SYSTEM)
        assert status.found is False
        assert "DBUS_SYSTEM_BUS_ADDRESS" in status.detail

    def test_session_env_does_not_leak_into_system(
        self, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("DBUS_SESSION_BUS_ADDRESS", "unix:path=/run/user/1000/bus")
        assert detect_bus(BusKind.SYSTEM).found is False


# ---------------------------------------------------------------------------
# BusStatus dataclass
# ---------------------------------------------------------------------------

class TestBusStatus:
    def test_frozen(self) -> None:
        status = BusStatus(kind=BusKind.SESSION, found=True, address="x", detail="y")
        with pytest.raises(AttributeError):
            status.found = False  # type: ignore[misc]
