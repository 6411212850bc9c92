"""Core / service layer — pure decoding and parsing logic.

Rules
-----
* No ``print()`` calls.
* No subprocess or filesystem access; those arrive through the
  protocols in :mod:`moodlebox.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from moodlebox.core.models import HardwareModel, ScannerMode, ThrottledState
from moodlebox.core.protocols import CommandRunner, TextReader
from moodlebox.core.revision import decode_cpuinfo, decode_revision, parse_revision_code
from moodlebox.core.system_service import SystemInfoService
from moodlebox.core.text import (
    convert_hex_bytes,
    convert_hex_string,
    parse_config_text,
    strip_comment_lines,
)
from moodlebox.core.throttled import decode_throttled, parse_throttled_output

__all__: list[str] = [
    "CommandRunner",
    "HardwareModel",
    "ScannerMode",
    "SystemInfoService",
    "TextReader",
    "ThrottledState",
    "convert_hex_bytes",
    "convert_hex_string",
    "decode_cpuinfo",
    "decode_revision",
    "decode_throttled",
    "parse_config_text",
    "parse_revision_code",
    "parse_throttled_output",
    "strip_comment_lines",
]
