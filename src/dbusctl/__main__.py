"""Allow ``python -m dbusctl`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m dbusctl`` behaves identically to the ``dbusctl``
console script.
"""

from __future__ import annotations

from dbusctl.cli.app import cli

if __name__ == "__main__":
    cli()
