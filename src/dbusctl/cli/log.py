"""Logging configuration for the CLI.

Library modules only ever call ``logging.getLogger(__name__)``; the
handler is installed here, once, by the entry point.  Rich's
``RichHandler`` is used when Rich is installed.
"""

from __future__ import annotations

import logging

_LEVELS: tuple[int, ...] = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    return _LEVELS[max(0, min(verbosity, len(_LEVELS) - 1))]


def configure_logging(verbosity: int = 0) -> None:
    """Install a single stderr handler on the root logger."""
    level = level_for(verbosity)

    handler: logging.Handler
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
        )
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logging.basicConfig(level=level, handlers=[handler], force=True)
