"""Tests for CallService (core/call_service.py).

The :class:`BusTransport` dependency is **mocked** — no bus access.
These tests verify:

* Target validation (service, object path, interface, method)
* Arguments are encoded before anything is sent
* Nothing is sent when validation or encoding fails
* Exception mapping (unexpected transport errors → ``TransportError``)
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from dbusctl.core.call_service import CallService
from dbusctl.core.models import BusKind, CallTarget, MessageBody, ScalarField, ScalarKind
from dbusctl.exceptions import (
    BusConnectionError,
    InvalidTargetError,
    InvalidValueError,
    MethodCallError,
    TransportError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fake_transport(reply: list[Any] | Exception) -> MagicMock:
    """Return a mock BusTransport.

    If *reply* is a list, ``call`` returns it.
    If *reply* is an exception, ``call`` raises it.
    """
    transport = MagicMock()
    if isinstance(reply, Exception):
        transport.call.side_effect = reply
    else:
        transport.call.return_value = reply
    return transport


def _target(**overrides: Any) -> CallTarget:
    defaults: dict[str, Any] = {
        "service": "org.freedesktop.DBus",
        "object_path": "/org/freedesktop/DBus",
        "interface": "org.freedesktop.DBus",
        "method": "NameHasOwner",
        "bus": BusKind.SESSION,
    }
    defaults.update(overrides)
    return CallTarget(**defaults)


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

class TestCall:
    def test_returns_reply_fields(self) -> None:
        transport = _fake_transport([True])
        service = CallService(transport)

        result = service.call(_target(), ["string:org.example.Service"])

        assert result == [True]

    def test_passes_encoded_body(self) -> None:
        transport = _fake_transport([])
        service = CallService(transport)
        target = _target()

        service.call(target, ["int32:1", "string:x"])

        transport.call.assert_called_once()
        sent_target, sent_body = transport.call.call_args.args
        assert sent_target is target
        assert isinstance(sent_body, MessageBody)
        assert sent_body.signature == "is"
        assert sent_body.fields[0] == ScalarField(kind=ScalarKind.INT32, value=1)

    def test_no_arguments_sends_empty_body(self) -> None:
        transport = _fake_transport([])
        CallService(transport).call(_target(), [])

        _, sent_body = transport.call.call_args.args
        assert not sent_body

    def test_unique_name_destination(self) -> None:
        transport = _fake_transport([])
        CallService(transport).call(_target(service=":1.42"), [])
        transport.call.assert_called_once()


# ---------------------------------------------------------------------------
# Target validation
# ---------------------------------------------------------------------------

class TestTargetValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"service": ""},
            {"service": "no_dots"},
            {"service": "org..example"},
            {"object_path": "org/freedesktop"},
            {"object_path": "/trailing/"},
            {"interface": "NoDots"},
            {"interface": "org.example.1bad"},
            {"method": ""},
            {"method": "Has.Dot"},
            {"method": "1Leading"},
        ],
    )
    def test_invalid_target_rejected(self, overrides: dict[str, str]) -> None:
        transport = _fake_transport([])
        with pytest.raises(InvalidTargetError) as exc_info:
            CallService(transport).call(_target(**overrides), [])
        assert exc_info.value.hint is not None
        transport.call.assert_not_called()


# ---------------------------------------------------------------------------
# Failure handling
# ---------------------------------------------------------------------------

class TestFailures:
    def test_encode_error_sends_nothing(self) -> None:
        transport = _fake_transport([])
        with pytest.raises(InvalidValueError):
            CallService(transport).call(_target(), ["int32:1", "int32:oops"])
        transport.call.assert_not_called()

    def test_our_errors_propagate_unchanged(self) -> None:
        original = MethodCallError("org.freedesktop.DBus.Error.Failed", "nope")
        transport = _fake_transport(original)
        with pytest.raises(MethodCallError) as exc_info:
            CallService(transport).call(_target(), [])
        assert exc_info.value is original

    def test_connection_error_propagates(self) -> None:
        transport = _fake_transport(BusConnectionError("no bus"))
        with pytest.raises(BusConnectionError):
            CallService(transport).call(_target(), [])

    def test_unexpected_error_wrapped(self) -> None:
        transport = _fake_transport(RuntimeError("kaboom"))
        with pytest.raises(TransportError, match="kaboom") as exc_info:
            CallService(transport).call(_target(), [])
        assert isinstance(exc_info.value.__cause__, RuntimeError)
