"""Shared pytest fixtures and configuration for the moodlebox test suite.

Guidelines
----------
* No test reads the real ``/proc`` or ``/sys`` or runs a real command.
* Core tests must be pure — no side effects.
* ``MOODLEBOX_*`` environment variables are cleared for every test.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

import pytest

from moodlebox.exceptions import CommandFailedError
from moodlebox.logger import LOGGER_NAME


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "MOODLEBOX_CONFIG",
        "MOODLEBOX_CPUINFO",
        "MOODLEBOX_NET_PATH",
        "MOODLEBOX_SD_DEVICE",
        "MOODLEBOX_USE_SUDO",
        "MOODLEBOX_COMMAND_TIMEOUT",
        "MOODLEBOX_LOG_LEVEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    """Undo :func:`moodlebox.logger.setup_logging` between tests."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Fakes for the core protocols
# ---------------------------------------------------------------------------

class FakeRunner:
    """CommandRunner returning canned output keyed by program name."""

    def __init__(self, outputs: dict[str, str | Exception] | None = None) -> None:
        self.outputs: dict[str, str | Exception] = outputs or {}
        self.calls: list[tuple[tuple[str, ...], bool]] = []

    def run(self, argv: Sequence[str], *, privileged: bool = False) -> str:
        self.calls.append((tuple(argv), privileged))
        result = self.outputs.get(argv[0])
        if result is None:
            raise CommandFailedError(f"{argv[0]} is not installed or not on PATH.")
        if isinstance(result, Exception):
            raise result
        return result


class FakeReader:
    """TextReader serving in-memory files."""

    def __init__(self, files: dict[Path, str] | None = None) -> None:
        self.files: dict[Path, str] = files or {}

    def read_text(self, path: Path) -> str | None:
        return self.files.get(Path(path))


CPUINFO_PI3 = """\
processor\t: 0
model name\t: ARMv7 Processor rev 4 (v7l)
BogoMIPS\t: 38.40

Hardware\t: BCM2835
Revision\t: a02082
Serial\t\t: 00000000deadbeef
Model\t\t: Raspberry Pi 3 Model B Rev 1.2
"""

PARTED_FREE = """\
Model: SD SC16G (sd/mmc)
Disk /dev/mmcblk0: 15931MB
Sector size (logical/physical): 512B/512B
Partition Table: msdos
Disk Flags:

Number  Start   End      Size     Type     File system  Flags
        0.02MB  4.19MB   4.17MB            Free Space
 1      4.19MB  273MB    268MB    primary  fat32        lba
 2      273MB   3421MB   3148MB   primary  ext4
        3421MB  15931MB  12510MB           Free Space

"""
