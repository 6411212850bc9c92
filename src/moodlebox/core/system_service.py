"""Core system-information service — orchestrates probes and decoders.

The service depends on a :class:`~moodlebox.core.protocols.CommandRunner`
and a :class:`~moodlebox.core.protocols.TextReader` injected at
construction time, keeping the core free of subprocess and filesystem
imports.

Guarantees
----------
* Every public method returns ``None`` when the information is not
  available; none of them raises.
* Parsing of command output is pure and exposed as static methods.
"""

from __future__ import annotations

import logging
from pathlib import Path

from moodlebox.core.models import HardwareModel, ThrottledState
from moodlebox.core.protocols import CommandRunner, TextReader
from moodlebox.core.revision import decode_revision, parse_revision_code
from moodlebox.core.throttled import decode_throttled, parse_throttled_output
from moodlebox.exceptions import MoodleboxError

logger = logging.getLogger(__name__)

FREE_SPACE_MARKER = "Free Space"


class SystemInfoService:
    """Stateless facade over the Raspberry Pi probes.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    reader:
        Any object satisfying the :class:`TextReader` protocol.
    cpuinfo_path:
        File holding the ``Revision`` line.
    sd_device:
        Block device inspected by :meth:`unallocated_free_space`.
    """

    def __init__(
        self,
        runner: CommandRunner,
        reader: TextReader,
        *,
        cpuinfo_path: Path = Path("/proc/cpuinfo"),
        sd_device: str = "/dev/mmcblk0",
    ) -> None:
        self._runner: CommandRunner = runner
        self._reader: TextReader = reader
        self._cpuinfo_path: Path = cpuinfo_path
        self._sd_device: str = sd_device

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_hardware_model(self) -> HardwareModel | None:
        """Decode the board from cpuinfo; ``None`` if unreadable or old-style."""
        cpuinfo = self._reader.read_text(self._cpuinfo_path)
        if cpuinfo is None:
            logger.debug("Cannot read %s", self._cpuinfo_path)
            return None

        code = parse_revision_code(cpuinfo)
        if code is None:
            logger.debug("No revision code in %s", self._cpuinfo_path)
            return None

        model = decode_revision(code)
        if model is None:
            logger.info("Revision code %06x uses the unsupported old-style encoding", code)
        return model

    def get_throttled_state(self) -> ThrottledState | None:
        """Query ``vcgencmd get_throttled`` and decode the flags."""
        output = self._run(("vcgencmd", "get_throttled"))
        if output is None:
            return None
        value = parse_throttled_output(output)
        if value is None:
            logger.warning("Unexpected vcgencmd output: %r", output)
            return None
        return decode_throttled(value)

    def unallocated_free_space(self) -> float | None:
        """Return unallocated space at the end of the SD card, in MB."""
        output = self._run(("parted", self._sd_device, "unit", "MB", "print", "free"))
        if output is None:
            return None
        space = self.parse_free_space(output)
        if space is None:
            logger.debug("No trailing free space in parted output")
        return space

    # ------------------------------------------------------------------
    # Output parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def parse_free_space(output: str) -> float | None:
        """Extract the size column of the trailing ``Free Space`` row.

        ``parted ... unit MB print free`` ends with a row such as
        ``3421MB  15931MB  12510MB  Free Space``; its third column,
        without the ``MB`` suffix, is the result.
        """
        lines = [line for line in output.splitlines() if line.strip()]
        if not lines or FREE_SPACE_MARKER not in lines[-1]:
            return None
        columns = lines[-1].split()
        if len(columns) < 3:
            return None
        size = columns[2]
        if size.upper().endswith("MB"):
            size = size[:-2]
        try:
            return float(size)
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # Runner delegation (safe boundary)
    # ------------------------------------------------------------------

    def _run(self, argv: tuple[str, ...]) -> str | None:
        """Run a privileged command; any failure becomes ``None``."""
        try:
            return self._runner.run(argv, privileged=True)
        except (MoodleboxError, OSError, UnicodeError) as exc:
            logger.warning("%s", exc)
            return None
