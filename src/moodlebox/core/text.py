"""Pure text transforms: ``\\xNN`` unescaping and ``key=value`` parsing.

No I/O happens here; :mod:`moodlebox.infra.files` reads files and hands
their text to :func:`parse_config_text`.
"""

from __future__ import annotations

import configparser
import re
from typing import Any

from moodlebox.core.models import ScannerMode

# ---------------------------------------------------------------------------
# Hex escapes
# ---------------------------------------------------------------------------

_HEX_ESCAPE = re.compile(r"\\x([0-9a-f]{2})", re.IGNORECASE)


def convert_hex_bytes(text: str) -> bytes:
    """Replace every ``\\xNN`` escape in *text* with the raw byte ``NN``.

    Everything else is encoded as UTF-8 unchanged.  Malformed escapes
    (``\\x4``, ``\\xZZ``) are not escapes and pass through literally.
    """
    out = bytearray()
    pos = 0
    for match in _HEX_ESCAPE.finditer(text):
        out += text[pos:match.start()].encode("utf-8", "surrogatepass")
        out.append(int(match.group(1), 16))
        pos = match.end()
    out += text[pos:].encode("utf-8", "surrogatepass")
    return bytes(out)


def convert_hex_string(text: str) -> str:
    """Unescape ``\\xNN`` sequences and decode the result as UTF-8.

    ``"\\x41\\x42"`` becomes ``"AB"`` and ``"caf\\xc3\\xa9"`` becomes
    ``"café"``.  Byte sequences that are not valid UTF-8 are replaced
    with U+FFFD.  Text without escapes is returned unchanged.
    """
    if _HEX_ESCAPE.search(text) is None:
        return text
    return convert_hex_bytes(text).decode("utf-8", "replace")


# ---------------------------------------------------------------------------
# key=value config text
# ---------------------------------------------------------------------------

_COMMENT_LINE = re.compile(r"^#.*(?:\r?\n|\Z)", re.MULTILINE)

# Keys before the first [section] header land in this pseudo-section.
_TOP_SECTION = "__moodlebox_top__"
_DEFAULT_SECTION = "__moodlebox_defaults__"

_TRUE_WORDS = frozenset({"true", "on", "yes"})
_FALSE_WORDS = frozenset({"false", "off", "no", "none"})
_INT_LITERAL = re.compile(r"^[+-]?\d+$")
# A quoted value, optionally followed by a ``;`` comment.
_QUOTED = re.compile(r"""^(["'])(.*)\1\s*(?:;.*)?$""", re.DOTALL)


def strip_comment_lines(text: str) -> str:
    """Remove whole lines beginning with ``#``."""
    return _COMMENT_LINE.sub("", text)


def _dedent_lines(text: str) -> str:
    """Drop leading whitespace so no line is read as a continuation."""
    return "\n".join(line.lstrip() for line in text.splitlines())


def _convert(value: str, mode: ScannerMode) -> Any:
    """Interpret one raw value the way ``parse_ini_string`` does.

    NORMAL maps ``true/on/yes`` to ``"1"`` and ``false/off/no/none/null``
    to ``""``; TYPED maps them to ``True``, ``False`` and ``None`` and
    turns integer literals into ``int``.  Both drop a trailing ``;``
    comment and keep quoted values verbatim.  RAW changes nothing.
    """
    if mode is ScannerMode.RAW:
        return value

    quoted = _QUOTED.match(value)
    if quoted is not None:
        return quoted.group(2)
    value = value.split(";", 1)[0].rstrip()

    lowered = value.lower()
    if lowered in _TRUE_WORDS:
        return True if mode is ScannerMode.TYPED else "1"
    if lowered in _FALSE_WORDS:
        return False if mode is ScannerMode.TYPED else ""
    if lowered == "null":
        return None if mode is ScannerMode.TYPED else ""
    if mode is ScannerMode.TYPED and _INT_LITERAL.match(value):
        return int(value)
    return value


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        delimiters=("=",),
        comment_prefixes=(";",),
        interpolation=None,
        strict=False,
        default_section=_DEFAULT_SECTION,
    )
    # Keep keys case-sensitive.
    parser.optionxform = str  # type: ignore[assignment, method-assign]
    return parser


def parse_config_text(
    text: str,
    sections: bool = False,
    mode: ScannerMode = ScannerMode.NORMAL,
) -> dict[str, Any]:
    """Parse ``key=value`` text after removing ``#`` comment lines.

    Leading whitespace is ignored, so an indented line is a key of its
    own rather than a continuation of the previous value.  With ``sections=False`` every key from every section is merged into
    one flat mapping, later keys overriding earlier ones.  With
    ``sections=True`` each ``[section]`` becomes a nested mapping and
    keys preceding the first header stay at the top level.

    Raises
    ------
    configparser.Error
        On malformed input.  :func:`moodlebox.infra.files.parse_config_file`
        turns this into ``None``.
    """
    parser = _new_parser()
    body = strip_comment_lines(_dedent_lines(text))
    parser.read_string(f"[{_TOP_SECTION}]\n" + body)

    result: dict[str, Any] = {}
    for section in parser.sections():
        values = {
            key: _convert(raw, mode)
            for key, raw in parser.items(section, raw=True)
        }
        if section == _TOP_SECTION or not sections:
            result.update(values)
        else:
            result[section] = values
    return result
