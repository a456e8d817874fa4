"""Tests for logging configuration (cli/log.py)."""

from __future__ import annotations

import logging
import sys

import pytest

from dbusctl.cli.log import configure_logging, level_for


class TestLevelFor:
    @pytest.mark.parametrize(
        ("verbosity", "level"),
        [
            (0, logging.WARNING),
            (1, logging.INFO),
            (2, logging.DEBUG),
            (5, logging.DEBUG),
            (-1, logging.WARNING),
        ],
    )
    def test_mapping(self, verbosity: int, level: int) -> None:
        assert level_for(verbosity) == level


class TestConfigureLogging:
    def test_uses_rich_handler(self) -> None:
        from rich.logging import RichHandler

        configure_logging(1)
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)

    def test_plain_handler_without_rich(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "rich.logging", None)
        configure_logging(2)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert type(root.handlers[0]) is logging.StreamHandler

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(0)
        configure_logging(0)
        assert len(logging.getLogger().handlers) == 1
