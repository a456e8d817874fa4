"""CLI application entry point and command routing for dbusctl.

This module is the **sole error boundary** for the entire application.
It catches :class:`~dbusctl.exceptions.DbusctlError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; the console proxies in
  :mod:`dbusctl.cli.console` are used exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from dbusctl.cli import exit_codes
from dbusctl.cli.console import console, escape
from dbusctl.cli.log import configure_logging
from dbusctl.core.models import BusKind, CallTarget
from dbusctl.exceptions import DbusctlError
from dbusctl.version import __version__

_ARGS_EPILOG = """\
arguments are written as <type>:<value>:
  scalar  int16 uint16 int32 uint32 int64 uint64 byte double
          boolean|bool string objpath signature   e.g. int32:42
  array   array:<type>:<v1>,<v2>,...               e.g. array:string:a,b
  dict    dict:string:<type>:<k1>,<v1>,<k2>,<v2>   e.g. dict:string:int32:a,1
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``dbusctl call -s SERVICE -o OBJECT -i INTERFACE -m METHOD [ARGS...]``
    * ``dbusctl doctor``  — environment diagnostics
    * ``dbusctl --version``
    """
    parser = argparse.ArgumentParser(
        prog="dbusctl",
        description="A command-line utility for interacting with D-Bus.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )

    commands = parser.add_subparsers(dest="command", metavar="<command>")

    call = commands.add_parser(
        "call",
        help="Call a D-Bus method.",
        description="Call a D-Bus method and print the first reply value as JSON.",
        epilog=_ARGS_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    call.add_argument(
        "--system",
        action="store_true",
        help="Use the system bus instead of the session bus.",
    )
    call.add_argument("-s", "--service", required=True, help="D-Bus service name.")
    call.add_argument("-o", "--object", required=True, help="D-Bus object path.")
    call.add_argument("-i", "--interface", required=True, help="D-Bus interface name.")
    call.add_argument("-m", "--method", required=True, help="D-Bus method name.")
    call.add_argument("args", nargs="*", default=[], help="D-Bus method arguments.")

    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_call(args: argparse.Namespace) -> int:
    """Dispatch a single method call.

    Flow:
    1. Build the call target from the flags.
    2. Encode the arguments and send them via the transport.
    3. Render the first reply field.
    """
    from dbusctl.cli.render import render_reply
    from dbusctl.core.call_service import CallService
    from dbusctl.infra.dbus_transport import DbusFastTransport

    target = CallTarget(
        service=args.service,
        object_path=args.object,
        interface=args.interface,
        method=args.method,
        bus=BusKind.SYSTEM if args.system else BusKind.SESSION,
    )

    service = CallService(DbusFastTransport())
    fields = service.call(target, args.args)
    render_reply(fields)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from dbusctl.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the dbusctl CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)

    if args.command == "doctor":
        return _handle_doctor()

    return _handle_call(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DbusctlError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
