"""``moodlebox status`` — one-screen summary of the appliance.

Runs every probe and renders a Rich table (or a plain-text table when
Rich is missing).  No decoding happens here; the rows only format what
the core and infra layers return.
"""

from __future__ import annotations

import platform
import sys
from pathlib import Path

from moodlebox.cli import exit_codes
from moodlebox.cli.console import console, escape_markup
from moodlebox.core.system_service import SystemInfoService
from moodlebox.exceptions import WirelessInterfaceError
from moodlebox.infra.network import get_wireless_interface_name
from moodlebox.version import __version__

Row = tuple[str, str, str]

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Row collectors
# ---------------------------------------------------------------------------

def _version_check() -> Row:
    return "moodlebox", __version__, OK


def _os_check() -> Row:
    value = f"{platform.system()} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def _hardware_check(service: SystemInfoService) -> Row:
    model = service.get_hardware_model()
    if model is None:
        return "Board", "not detected", WARN
    value = (
        f"Raspberry Pi {model.model} rev {model.revision}, {model.processor}, "
        f"{model.memory} MB, {model.manufacturer}"
    )
    return "Board", value, OK


def _throttled_check(service: SystemInfoService) -> Row:
    state = service.get_throttled_state()
    if state is None:
        return "Power", "unknown", WARN
    if state.any_active:
        active = [name for name, flag in state.to_dict().items() if flag and "occurred" not in name]
        return "Power", ", ".join(active).replace("_", " "), FAIL
    if state.any_occurred:
        occurred = [name for name, flag in state.to_dict().items() if flag]
        return "Power", ", ".join(occurred).replace("_", " "), WARN
    return "Power", "no throttling", OK


def _free_space_check(service: SystemInfoService) -> Row:
    space = service.unallocated_free_space()
    if space is None:
        return "SD free space", "unknown", WARN
    return "SD free space", f"{space:g} MB unallocated", OK


def _wireless_check(net_path: Path) -> Row:
    try:
        return "Wi-Fi", get_wireless_interface_name(net_path), OK
    except WirelessInterfaceError as exc:
        return "Wi-Fi", str(exc), WARN


def collect_rows(service: SystemInfoService, net_path: Path) -> list[Row]:
    return [
        _version_check(),
        _os_check(),
        _hardware_check(service),
        _throttled_check(service),
        _free_space_check(service),
        _wireless_check(net_path),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(rows: list[Row]) -> None:
    print("\nmoodlebox status", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<48} {'Status':<8}", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for label, value, status in rows:
        print(f"{label:<14} {value:<48} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def run_status(service: SystemInfoService, net_path: Path) -> int:
    """Collect and render every probe.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` unless a row is ``FAIL`` (a power
        problem is active right now), then :data:`exit_codes.GENERAL_ERROR`.
    """
    rows = collect_rows(service, net_path)
    has_failure = any("FAIL" in status for _, _, status in rows)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(rows)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
    else:
        table = Table(
            title="moodlebox status",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=14)
        table.add_column("Value", min_width=24)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in rows:
            table.add_row(label, escape_markup(value), status)

        console.print()
        console.print(table)
        console.print()
        if has_failure:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            console.print("[bold green]All checks passed.[/bold green]")

    return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS
