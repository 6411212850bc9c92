"""CLI application entry point and command routing for moodlebox.

This module is the **sole error boundary** for the entire application.
It catches :class:`~moodlebox.exceptions.MoodleboxError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Architecture notes
------------------
* No decoding or parsing lives here — all work is delegated to the
  core and infrastructure layers.
* Results go to stdout (JSON for structured values); messages go to
  stderr through :data:`~moodlebox.cli.console.console`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

from moodlebox.cli import exit_codes
from moodlebox.cli.console import console, escape_markup
from moodlebox.config import Settings, load_settings
from moodlebox.core.models import ScannerMode
from moodlebox.exceptions import MoodleboxError
from moodlebox.logger import setup_logging
from moodlebox.version import __version__

if TYPE_CHECKING:
    from moodlebox.core.system_service import SystemInfoService

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser with one sub-command per probe."""
    parser = argparse.ArgumentParser(
        prog="moodlebox",
        description="Raspberry Pi host introspection for MoodleBox.",
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
        action="store_true",
        help="Log debug output to stderr.",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="PATH",
        help="YAML settings file (default: $MOODLEBOX_CONFIG).",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.add_parser("status", help="Summarise every probe in a table.")
    sub.add_parser("hardware", help="Decode the board revision code.")
    sub.add_parser("throttled", help="Decode the firmware throttled state.")
    sub.add_parser("freespace", help="Unallocated space on the SD card, in MB.")
    sub.add_parser("wifi", help="Name of the wireless interface.")

    config_cmd = sub.add_parser("parse-config", help="Parse a key=value file as JSON.")
    config_cmd.add_argument("file", help="File to parse.")
    config_cmd.add_argument(
        "--sections",
        action="store_true",
        help="Keep [section] headers as nested mappings.",
    )
    config_cmd.add_argument(
        "--mode",
        choices=[m.value for m in ScannerMode],
        default=ScannerMode.NORMAL.value,
        help="Value interpretation (default: normal).",
    )

    unhex_cmd = sub.add_parser("unhex", help="Convert \\xNN escapes to characters.")
    unhex_cmd.add_argument("text", help="String containing \\xNN escapes.")
    return parser


# ---------------------------------------------------------------------------
# Service wiring
# ---------------------------------------------------------------------------

def _build_service(settings: Settings) -> SystemInfoService:
    from moodlebox.core.system_service import SystemInfoService
    from moodlebox.infra.commands import SubprocessRunner
    from moodlebox.infra.files import FileReader

    runner = SubprocessRunner(use_sudo=settings.use_sudo, timeout=settings.command_timeout)
    return SystemInfoService(
        runner,
        FileReader(),
        cpuinfo_path=settings.cpuinfo_path,
        sd_device=settings.sd_device,
    )


def _emit(value: Any) -> int:
    """Write a probe result to stdout, or report that it is unavailable."""
    if value is None:
        console.print("[yellow]Not available on this system.[/yellow]")
        return exit_codes.GENERAL_ERROR
    if isinstance(value, (dict, list)):
        print(json.dumps(value, indent=2, ensure_ascii=False))
    else:
        print(value)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_status(settings: Settings) -> int:
    from moodlebox.cli.status import run_status

    return run_status(_build_service(settings), settings.net_class_path)


def _handle_hardware(settings: Settings) -> int:
    model = _build_service(settings).get_hardware_model()
    return _emit(model.to_dict() if model is not None else None)


def _handle_throttled(settings: Settings) -> int:
    state = _build_service(settings).get_throttled_state()
    return _emit(state.to_dict() if state is not None else None)


def _handle_freespace(settings: Settings) -> int:
    return _emit(_build_service(settings).unallocated_free_space())


def _handle_wifi(settings: Settings) -> int:
    from moodlebox.infra.network import get_wireless_interface_name

    return _emit(get_wireless_interface_name(settings.net_class_path))


def _handle_parse_config(path: str, sections: bool, mode: str) -> int:
    from moodlebox.infra.files import parse_config_file

    return _emit(parse_config_file(path, sections=sections, mode=ScannerMode(mode)))


def _handle_unhex(text: str) -> int:
    from moodlebox.core.text import convert_hex_string

    return _emit(convert_hex_string(text))


_PROBES = {
    "status": _handle_status,
    "hardware": _handle_hardware,
    "throttled": _handle_throttled,
    "freespace": _handle_freespace,
    "wifi": _handle_wifi,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the moodlebox CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "parse-config":
        return _handle_parse_config(args.file, args.sections, args.mode)
    if args.command == "unhex":
        return _handle_unhex(args.text)

    settings = load_settings(args.config)
    logger.debug("Settings: %s", settings)
    return _PROBES[args.command](settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except MoodleboxError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
