"""Decoder for the ``vcgencmd get_throttled`` bitmask.

::

    bit  flag
    0    under-voltage detected
    1    ARM frequency capped
    2    currently throttled
    3    soft temperature limit active
    16   under-voltage has occurred
    17   ARM frequency capping has occurred
    18   throttling has occurred
    19   soft temperature limit has occurred
"""

from __future__ import annotations

from moodlebox.core.models import ThrottledState

UNDER_VOLTAGE_DETECTED = 1 << 0
ARM_FREQUENCY_CAPPED = 1 << 1
CURRENTLY_THROTTLED = 1 << 2
SOFT_TEMP_LIMIT_ACTIVE = 1 << 3
UNDER_VOLTAGE_OCCURRED = 1 << 16
ARM_FREQUENCY_CAPPED_OCCURRED = 1 << 17
THROTTLING_OCCURRED = 1 << 18
SOFT_TEMP_LIMIT_OCCURRED = 1 << 19


def decode_throttled(value: int) -> ThrottledState:
    """Split *value* into its eight independent flags."""
    return ThrottledState(
        under_voltage_detected=bool(value & UNDER_VOLTAGE_DETECTED),
        arm_frequency_capped=bool(value & ARM_FREQUENCY_CAPPED),
        currently_throttled=bool(value & CURRENTLY_THROTTLED),
        soft_temp_limit_active=bool(value & SOFT_TEMP_LIMIT_ACTIVE),
        under_voltage_occurred=bool(value & UNDER_VOLTAGE_OCCURRED),
        arm_frequency_capped_occurred=bool(value & ARM_FREQUENCY_CAPPED_OCCURRED),
        throttling_occurred=bool(value & THROTTLING_OCCURRED),
        soft_temp_limit_occurred=bool(value & SOFT_TEMP_LIMIT_OCCURRED),
    )


def parse_throttled_output(output: str) -> int | None:
    """Parse ``throttled=0x50005`` (or a bare hex token) into an int.

    Returns ``None`` for empty or non-hexadecimal output.
    """
    text = output.strip()
    if "=" in text:
        text = text.split("=", 1)[1].strip()
    if not text:
        return None
    try:
        return int(text, 16)
    except ValueError:
        return None
