"""Domain models for moodlebox.

All models are **frozen** dataclasses — immutable value objects with no
I/O and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from typing import Any


# ---------------------------------------------------------------------------
# Hardware revision
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HardwareModel:
    """Raspberry Pi board description decoded from a new-style revision code."""

    revision: str
    """PCB revision, e.g. ``"1.2"``."""

    model: str
    """Board model, e.g. ``"3B"``.  ``"Unknown"`` for unassigned indices."""

    processor: str
    """SoC name, e.g. ``"BCM2837"``."""

    manufacturer: str
    """Board manufacturer, e.g. ``"Sony UK"``."""

    memory: str
    """Memory size in MB as a string, e.g. ``"1024"``."""

    warranty_voided: bool = False
    """Whether either warranty bit (24 or 25) is set."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Throttled state
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ThrottledState:
    """Power and thermal flags reported by ``vcgencmd get_throttled``.

    The first four flags describe the current state; the remaining four
    are sticky and record whether the condition happened since boot.
    """

    under_voltage_detected: bool
    arm_frequency_capped: bool
    currently_throttled: bool
    soft_temp_limit_active: bool
    under_voltage_occurred: bool
    arm_frequency_capped_occurred: bool
    throttling_occurred: bool
    soft_temp_limit_occurred: bool

    @property
    def any_active(self) -> bool:
        return (
            self.under_voltage_detected
            or self.arm_frequency_capped
            or self.currently_throttled
            or self.soft_temp_limit_active
        )

    @property
    def any_occurred(self) -> bool:
        return (
            self.under_voltage_occurred
            or self.arm_frequency_capped_occurred
            or self.throttling_occurred
            or self.soft_temp_limit_occurred
        )

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Config parsing mode
# ---------------------------------------------------------------------------

class ScannerMode(enum.Enum):
    """How values in a ``key=value`` file are interpreted."""

    NORMAL = "normal"
    """Strip matching surrounding quotes, keep everything else as text."""

    RAW = "raw"
    """Return values exactly as written."""

    TYPED = "typed"
    """Like NORMAL, then convert booleans, ``null`` and integers."""
