from __future__ import annotations

import pytest

from propres.codecs import escape_key, escape_value, unescape
from propres.codecs._props_escape import EscapeSpace, escape, escape_note
from propres.core.errors import MalformedUnicodeEscape


def test_escape_key_escapes_every_space() -> None:
    assert escape_key("a b c") == "a\\ b\\ c"
    assert escape_key(" lead") == "\\ lead"


def test_escape_value_escapes_only_leading_white_space() -> None:
    assert escape_value("  two words") == "\\ \\ two words"
    assert escape_value("\t\fx") == "\\t\\fx"
    assert escape_value("a b") == "a b"


def test_escape_none_mode_leaves_leading_spaces() -> None:
    assert escape("  x", EscapeSpace.NONE) == "  x"


def test_escape_special_characters() -> None:
    assert escape_value("x=y:z#!\\") == "x\\=y\\:z\\#\\!\\\\"


def test_escape_control_and_non_ascii() -> None:
    assert escape_value("a\tb\nc\rd\fe") == "a\\tb\\nc\\rd\\fe"
    assert escape_value("\x01") == "\\u0001"
    assert escape_value("~") == "\\u007E"
    assert escape_value("café") == "caf\\u00E9"
    assert escape_value("日本") == "\\u65E5\\u672C"


def test_escape_supplementary_code_point_as_surrogate_pair() -> None:
    assert escape_value("\U0001F600") == "\\uD83D\\uDE00"
    assert unescape("\\uD83D\\uDE00") == "\U0001F600"


def test_unescape_mnemonics_and_unicode() -> None:
    assert unescape("a\\tb\\nc\\rd\\fe") == "a\tb\nc\rd\fe"
    assert unescape("caf\\u00e9") == "café"
    assert unescape("\\u00E9") == "é"


def test_unescape_unknown_escape_drops_backslash() -> None:
    assert unescape("\\z\\=\\:\\ ") == "z=: "
    assert unescape("\\b") == "b"


def test_unescape_does_not_interpret_octal() -> None:
    assert unescape("\\101") == "101"


def test_unescape_trailing_backslash_is_dropped() -> None:
    assert unescape("abc\\") == "abc"


@pytest.mark.parametrize("text", ["\\u12", "x\\u", "\\u12G4", "\\uZZZZ"])
def test_unescape_malformed_unicode_escape(text: str) -> None:
    with pytest.raises(MalformedUnicodeEscape, match="malformed Unicode escape") as ei:
        unescape(text)
    assert ei.value.text == text


@pytest.mark.parametrize(
    "value",
    [
        "",
        "plain",
        "  leading and trailing  ",
        "tabs\tand\nnewlines\r\n",
        "#!=:\\ all specials",
        "\\\\\\",
        "\x00\x1f\x7e\x7f",
        "café 日本 \U0001F600",
    ],
)
def test_unescape_inverts_escape_value(value: str) -> None:
    assert unescape(escape_value(value)) == value
    assert unescape(escape_key(value)) == value


def test_escape_note_keeps_markers_and_separators() -> None:
    assert escape_note(" a=b: #!") == " a=b: #!"
    assert escape_note("back\\slash é") == "back\\\\slash \\u00E9"
    assert unescape(escape_note("x\\y\né")) == "x\\y\né"
