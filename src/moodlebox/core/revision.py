"""Raspberry Pi hardware revision code decoder.

New-style revision codes (bit 23 set) pack the board description into
a 32-bit integer::

    bits   field           width
    00-03  PCB revision    4
    04-11  model           8
    12-15  processor       4
    16-19  manufacturer    4
    20-22  memory size     3
    23     new-style flag  1
    24     warranty bit    1   (pre Pi 2)
    25     warranty bit    1   (Pi 2 and later)

Old-style codes are not decoded: :func:`decode_revision` returns
``None`` for them.  Every function here is pure.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from moodlebox.core.models import HardwareModel

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# (mask, shift) pairs
REVISION_MASK, REVISION_SHIFT = 0x0000000F, 0
MODEL_MASK, MODEL_SHIFT = 0x00000FF0, 4
PROCESSOR_MASK, PROCESSOR_SHIFT = 0x0000F000, 12
MANUFACTURER_MASK, MANUFACTURER_SHIFT = 0x000F0000, 16
MEMORY_MASK, MEMORY_SHIFT = 0x00700000, 20
NEW_STYLE_MASK, NEW_STYLE_SHIFT = 0x00800000, 23
WARRANTY_MASK = 0x03000000

MODELS: tuple[str, ...] = (
    "A", "B", "A+", "B+", "2B", "Alpha", "CM1", UNKNOWN,
    "3B", "Zero", "CM3", UNKNOWN, "ZeroW", "3B+", "3A+", UNKNOWN,
    "CM3+", "4B", "Zero2W", "400", "CM4", "CM4S", UNKNOWN, "5",
    "CM5", "500", "CM5Lite",
)
PROCESSORS: tuple[str, ...] = ("BCM2835", "BCM2836", "BCM2837", "BCM2711", "BCM2712")
MANUFACTURERS: tuple[str, ...] = (
    "Sony UK", "Egoman", "Embest", "Sony Japan", "Embest", "Stadium",
)
MEMORY_SIZES: tuple[str, ...] = ("256", "512", "1024", "2048", "4096", "8192", "16384")

_REVISION_LINE = re.compile(r"^Revision.*$", re.MULTILINE)


def _field(code: int, mask: int, shift: int) -> int:
    return (code & mask) >> shift


def _lookup(table: Sequence[str], index: int, name: str) -> str:
    """Return ``table[index]`` or ``"Unknown"`` when *index* is out of range."""
    if 0 <= index < len(table):
        return table[index]
    logger.warning("Unrecognised %s index %d in revision code", name, index)
    return UNKNOWN


def is_new_style(code: int) -> bool:
    return bool(_field(code, NEW_STYLE_MASK, NEW_STYLE_SHIFT))


def parse_revision_code(cpuinfo: str) -> int | None:
    """Extract the revision code from ``/proc/cpuinfo`` text.

    Uses the first line starting with ``Revision``; the code is its
    last whitespace-separated token.  Returns ``None`` when no such
    line exists or the token is not hexadecimal.
    """
    match = _REVISION_LINE.search(cpuinfo)
    if match is None:
        return None
    tokens = match.group(0).split()
    if not tokens:
        return None
    try:
        return int(tokens[-1], 16) & 0xFFFFFFFF
    except ValueError:
        logger.debug("Revision token %r is not hexadecimal", tokens[-1])
        return None


def decode_revision(code: int) -> HardwareModel | None:
    """Decode a new-style revision code into a :class:`HardwareModel`.

    Returns ``None`` for old-style codes (bit 23 unset).  Indices that
    fall outside the lookup tables decode to ``"Unknown"``.
    """
    if not is_new_style(code):
        return None

    return HardwareModel(
        revision=f"1.{_field(code, REVISION_MASK, REVISION_SHIFT)}",
        model=_lookup(MODELS, _field(code, MODEL_MASK, MODEL_SHIFT), "model"),
        processor=_lookup(
            PROCESSORS, _field(code, PROCESSOR_MASK, PROCESSOR_SHIFT), "processor",
        ),
        manufacturer=_lookup(
            MANUFACTURERS,
            _field(code, MANUFACTURER_MASK, MANUFACTURER_SHIFT),
            "manufacturer",
        ),
        memory=_lookup(MEMORY_SIZES, _field(code, MEMORY_MASK, MEMORY_SHIFT), "memory"),
        warranty_voided=bool(code & WARRANTY_MASK),
    )


def decode_cpuinfo(cpuinfo: str) -> HardwareModel | None:
    """Parse and decode in one step; ``None`` if either stage fails."""
    code = parse_revision_code(cpuinfo)
    if code is None:
        return None
    return decode_revision(code)
