from __future__ import annotations

import io
from pathlib import Path

import pytest

from propres.codecs._props_writer import INDENT
from propres.codecs.java_properties import (
    merge_properties,
    merge_properties_file,
    merge_properties_text,
    parse_properties_text,
)


def test_merge_rewrites_only_updated_key() -> None:
    base = "# note\nkey1=old\nkey2=same\n"
    assert merge_properties_text(base, {"key1": "new"}) == "# note\nkey1=new\nkey2=same\n"


def test_merge_without_updates_is_identity() -> None:
    base = "# c\n\n  a = 1\nb:2\r\nlong = one \\\n   two\nbogus\n\\u12=x\n! end"
    assert merge_properties_text(base, {}) == base


def test_merge_keeps_separator_style_and_indent() -> None:
    base = "   a = 1\n\tb:2\nc 3\nd   :   4\n"
    out = merge_properties_text(base, {"a": "x", "b": "y", "c": "z", "d": "w"})
    assert out == "   a = x\n\tb:y\nc z\nd   :   w\n"


def test_merge_preserves_crlf_and_missing_final_newline() -> None:
    assert merge_properties_text("a=1\r\nb=2\r\n", {"b": "n"}) == "a=1\r\nb=n\r\n"
    assert merge_properties_text("a=1\nb=2", {"b": "n"}) == "a=1\nb=n"


def test_merge_replaces_whole_continued_definition() -> None:
    base = "a = one \\\n    two\nb = keep \\\n    this\n"
    out = merge_properties_text(base, {"a": "x"})
    assert out == "a = x\nb = keep \\\n    this\n"


def test_merge_long_value_is_folded() -> None:
    value = " ".join(["translated"] * 20)
    out = merge_properties_text("k=v\nother=1\n", {"k": value})
    lines = out.split("\n")
    assert lines[0].startswith("k=")
    assert lines[0].endswith("\\")
    assert lines[1].startswith(INDENT)
    assert out.endswith("other=1\n")
    assert parse_properties_text(out).to_dict() == {"k": value, "other": "1"}


def test_merge_folded_definition_uses_original_line_ending() -> None:
    value = " ".join(["translated"] * 20)
    out = merge_properties_text("k=v\r\n", {"k": value})
    assert "\n" not in out.replace("\r\n", "")
    assert out.endswith("\r\n")


def test_merge_escapes_new_value() -> None:
    assert merge_properties_text("a=1\n", {"a": " café=x"}) == "a=\\ caf\\u00E9\\=x\n"


def test_merge_leaves_comments_that_look_like_definitions() -> None:
    assert merge_properties_text("# a=1\n!a=1\na=1\n", {"a": "2"}) == "# a=1\n!a=1\na=2\n"


def test_merge_passes_malformed_lines_through() -> None:
    base = "bogusline\n\\u12=bad\n=nokey\na=1\n"
    assert merge_properties_text(base, {"a": "2", "bogusline": "x"}) == "bogusline\n\\u12=bad\n=nokey\na=2\n"


def test_merge_matches_escaped_keys() -> None:
    assert merge_properties_text("a\\ b=1\n", {"a b": "2"}) == "a\\ b=2\n"


def test_merge_rewrites_every_definition_of_a_duplicated_key() -> None:
    assert merge_properties_text("a=1\nb=2\na=3\n", {"a": "x"}) == "a=x\nb=2\na=x\n"


def test_merge_does_not_add_missing_keys() -> None:
    assert merge_properties_text("a=1\n", {"zzz": "new"}) == "a=1\n"


def test_merge_rejects_non_str_values() -> None:
    with pytest.raises(TypeError, match="must be str"):
        merge_properties_text("a=1\n", {"a": 1})  # type: ignore[dict-item]


def test_merge_streams_are_byte_exact_for_latin1_content() -> None:
    base = io.BytesIO(b"k=caf\xe9\r\nx=1\n")
    out = io.BytesIO()
    merge_properties(base, out, {"x": "\u00e9"})
    assert out.getvalue() == b"k=caf\xe9\r\nx=\\u00E9\n"
    # Caller keeps ownership of both streams.
    assert not base.closed
    assert not out.closed


def test_merge_properties_file_in_place(tmp_path: Path) -> None:
    p = tmp_path / "messages.properties"
    p.write_bytes(b"# header\n\ngreeting = Hello\nfarewell = Bye\n")
    merge_properties_file(p, p, {"greeting": "Bonjour"}, locale="fr")
    assert p.read_bytes() == b"# header\n\ngreeting = Bonjour\nfarewell = Bye\n"
