"""Custom exception hierarchy for moodlebox.

Library functions report *absence* (unsupported hardware, failed
command, unreadable file) by returning ``None``.  Exceptions are
reserved for conditions the caller must act on, and every one of them
inherits from :class:`MoodleboxError` so that the CLI error boundary
can render a clean message without leaking stack traces.

Hierarchy
---------
MoodleboxError
├── CommandFailedError
├── WirelessInterfaceError
│   ├── WirelessInterfaceNotFoundError
│   └── AmbiguousWirelessInterfaceError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class MoodleboxError(Exception):
    """Base exception for all moodlebox errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- External commands -----------------------------------------------------

class CommandFailedError(MoodleboxError):
    """Raised by a command runner when an external command cannot complete.

    Services catch this and collapse it to ``None``; it only escapes
    when a runner is used directly.
    """

    def __init__(
        self,
        message: str,
        *,
        argv: tuple[str, ...] = (),
        returncode: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.argv: tuple[str, ...] = argv
        self.returncode: int | None = returncode


# --- Wireless interface lookup ---------------------------------------------

class WirelessInterfaceError(MoodleboxError):
    """Base class for wireless interface lookup failures."""


class WirelessInterfaceNotFoundError(WirelessInterfaceError):
    """Raised when no network interface exposes a ``wireless`` directory."""


class AmbiguousWirelessInterfaceError(WirelessInterfaceError):
    """Raised when more than one wireless interface is present."""

    def __init__(self, interfaces: tuple[str, ...]) -> None:
        super().__init__(
            f"Found {len(interfaces)} wireless interfaces: {', '.join(interfaces)}",
            hint="Pass the interface name explicitly.",
        )
        self.interfaces: tuple[str, ...] = interfaces


# --- Configuration / environment -------------------------------------------

class ConfigurationError(MoodleboxError):
    """Raised when the moodlebox settings file or overrides are invalid."""


class EnvironmentError(MoodleboxError):
    """Raised when a required runtime dependency is not available."""
