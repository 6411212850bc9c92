"""Protocols (interfaces) consumed by the core layer.

Core code depends only on these protocols, never on the concrete
subprocess or filesystem adapters in :mod:`moodlebox.infra`.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class CommandRunner(Protocol):
    """Contract for running an external command and capturing stdout."""

    def run(self, argv: Sequence[str], *, privileged: bool = False) -> str:
        """Run *argv* and return its standard output.

        Parameters
        ----------
        argv:
            Program and arguments.  Never interpreted by a shell.
        privileged:
            Whether the command needs root (implementations may prefix
            ``sudo``).

        Raises
        ------
        CommandFailedError
            When the command is missing, times out or exits non-zero.
        """
        ...  # pragma: no cover


class TextReader(Protocol):
    """Contract for reading a small text file."""

    def read_text(self, path: Path) -> str | None:
        """Return the file's contents, or ``None`` if it cannot be read."""
        ...  # pragma: no cover
