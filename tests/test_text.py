"""Tests for the pure text transforms (core/text.py)."""

from __future__ import annotations

import configparser

import pytest

from moodlebox.core.models import ScannerMode
from moodlebox.core.text import (
    convert_hex_bytes,
    convert_hex_string,
    parse_config_text,
    strip_comment_lines,
)


# ---------------------------------------------------------------------------
# Hex escapes
# ---------------------------------------------------------------------------

class TestConvertHexString:
    def test_ascii(self) -> None:
        assert convert_hex_string(r"\x41\x42") == "AB"

    def test_no_escapes_unchanged(self) -> None:
        assert convert_hex_string("MoodleBox") == "MoodleBox"

    def test_already_decoded_text_unchanged(self) -> None:
        assert convert_hex_string(convert_hex_string(r"caf\xc3\xa9")) == "café"

    def test_utf8_sequence(self) -> None:
        assert convert_hex_string(r"caf\xc3\xa9") == "café"

    def test_mixed(self) -> None:
        assert convert_hex_string(r"Box\x20\x31") == "Box 1"

    def test_uppercase(self) -> None:
        assert convert_hex_string(r"\X41\x4A\x4a") == "AJJ"

    @pytest.mark.parametrize("text", [r"\x4", r"\xZZ", r"\x", "x41", r"\\y41"])
    def test_malformed_escapes_pass_through(self, text: str) -> None:
        assert convert_hex_string(text) == text

    def test_invalid_utf8_is_replaced(self) -> None:
        assert convert_hex_string(r"\xff") == "\ufffd"


class TestConvertHexBytes:
    def test_raw_byte(self) -> None:
        assert convert_hex_bytes(r"\xff") == b"\xff"

    def test_passthrough_is_utf8(self) -> None:
        assert convert_hex_bytes(r"é\x41") == "é".encode() + b"A"


# ---------------------------------------------------------------------------
# Comment stripping
# ---------------------------------------------------------------------------

class TestStripCommentLines:
    def test_removes_hash_lines(self) -> None:
        assert strip_comment_lines("#one\nkey=value\n# two\n") == "key=value\n"

    def test_last_line_without_newline(self) -> None:
        assert strip_comment_lines("key=value\n#tail") == "key=value\n"

    def test_indented_hash_is_kept(self) -> None:
        assert strip_comment_lines("  #kept\n") == "  #kept\n"


# ---------------------------------------------------------------------------
# parse_config_text
# ---------------------------------------------------------------------------

HOSTAPD = """\
# hostapd configuration
interface=wlan0
ssid=MoodleBox
channel=11
# wpa_passphrase=old
wpa_passphrase=moodlebox=secret
"""


class TestParseConfigText:
    def test_comment_then_key(self) -> None:
        assert parse_config_text("#comment\nkey=value\n") == {"key": "value"}

    def test_hostapd_file(self) -> None:
        assert parse_config_text(HOSTAPD) == {
            "interface": "wlan0",
            "ssid": "MoodleBox",
            "channel": "11",
            "wpa_passphrase": "moodlebox=secret",
        }

    def test_empty_text(self) -> None:
        assert parse_config_text("") == {}

    def test_key_case_is_preserved(self) -> None:
        assert parse_config_text("SSID=Box\n") == {"SSID": "Box"}

    def test_spaces_around_delimiter(self) -> None:
        assert parse_config_text("key = value\n") == {"key": "value"}

    def test_empty_value(self) -> None:
        assert parse_config_text("key=\n") == {"key": ""}

    def test_semicolon_comments(self) -> None:
        assert parse_config_text("; note\nkey=value\n") == {"key": "value"}

    def test_duplicate_key_last_wins(self) -> None:
        assert parse_config_text("a=1\na=2\n") == {"a": "2"}

    def test_indented_line_is_its_own_key(self) -> None:
        assert parse_config_text("a=1\n  b=2\n") == {"a": "1", "b": "2"}

    def test_indented_line_after_blank_line(self) -> None:
        assert parse_config_text("a=1\n\n    b=2\n") == {"a": "1", "b": "2"}

    def test_indented_comment_line(self) -> None:
        assert parse_config_text("a=1\n  # note\n\tb=2\n") == {"a": "1", "b": "2"}

    def test_indented_section_header(self) -> None:
        result = parse_config_text("  [wifi]\n  ssid=Box\n", sections=True)
        assert result == {"wifi": {"ssid": "Box"}}

    def test_crlf_line_endings(self) -> None:
        assert parse_config_text("a=1\r\n b=2\r\n") == {"a": "1", "b": "2"}

    def test_malformed_line_raises(self) -> None:
        with pytest.raises(configparser.Error):
            parse_config_text("not a setting\n")


class TestSections:
    TEXT = "top=1\n[wifi]\nssid=Box\n[lan]\naddress=10.0.0.1\ntop=2\n"

    def test_flat_merges_all_keys(self) -> None:
        assert parse_config_text(self.TEXT) == {
            "top": "2",
            "ssid": "Box",
            "address": "10.0.0.1",
        }

    def test_sectioned(self) -> None:
        assert parse_config_text(self.TEXT, sections=True) == {
            "top": "1",
            "wifi": {"ssid": "Box"},
            "lan": {"address": "10.0.0.1", "top": "2"},
        }

    def test_default_section_is_not_special(self) -> None:
        text = "[DEFAULT]\na=1\n[other]\nb=2\n"
        assert parse_config_text(text, sections=True) == {
            "DEFAULT": {"a": "1"},
            "other": {"b": "2"},
        }


class TestScannerModes:
    def test_normal_strips_quotes(self) -> None:
        assert parse_config_text('name="My Box"\n') == {"name": "My Box"}

    def test_normal_maps_boolean_words(self) -> None:
        text = "a=yes\nb=On\nc=true\nd=off\ne=no\nf=none\ng=null\nh=FALSE\n"
        assert parse_config_text(text) == {
            "a": "1",
            "b": "1",
            "c": "1",
            "d": "",
            "e": "",
            "f": "",
            "g": "",
            "h": "",
        }

    def test_normal_keeps_numbers_as_text(self) -> None:
        assert parse_config_text("channel=11\n") == {"channel": "11"}

    def test_normal_quoted_words_stay_verbatim(self) -> None:
        assert parse_config_text('a="yes"\n') == {"a": "yes"}

    def test_inline_comment_is_dropped(self) -> None:
        text = "channel=11 ; 2.4 GHz\nflag=on;enabled\nname=\"a;b\" ; note\n"
        assert parse_config_text(text) == {"channel": "11", "flag": "1", "name": "a;b"}

    def test_typed_inline_comment_is_dropped(self) -> None:
        result = parse_config_text("channel=11 ; 2.4 GHz\n", mode=ScannerMode.TYPED)
        assert result == {"channel": 11}

    def test_raw_keeps_quotes(self) -> None:
        result = parse_config_text('name="My Box"\n', mode=ScannerMode.RAW)
        assert result == {"name": '"My Box"'}

    def test_raw_keeps_words_and_comments(self) -> None:
        result = parse_config_text("a=yes ; note\n", mode=ScannerMode.RAW)
        assert result == {"a": "yes ; note"}

    def test_typed_conversions(self) -> None:
        text = "a=yes\nb=Off\nc=null\nd=42\ne=-3\nf=none\ng=text\nh=1.5\n"
        assert parse_config_text(text, mode=ScannerMode.TYPED) == {
            "a": True,
            "b": False,
            "c": None,
            "d": 42,
            "e": -3,
            "f": False,
            "g": "text",
            "h": "1.5",
        }

    def test_typed_quoted_values_stay_strings(self) -> None:
        text = "a=\"42\"\nb='true'\n"
        assert parse_config_text(text, mode=ScannerMode.TYPED) == {"a": "42", "b": "true"}
