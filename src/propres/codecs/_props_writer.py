"""Internal writer helpers for the Java properties codec.

This module contains the export/formatting logic for `.properties` files:
- single definition rendering with column-limited line folding
- note (comment) rendering
- whole-bundle serialization in deterministic order

This is a private module; public API is in `java_properties.py`.
"""

from __future__ import annotations

from typing import Iterable

from propres.codecs._props_escape import (
    EscapeSpace,
    escape,
    escape_key,
    escape_note,
    escape_value,
    is_whitespace,
)
from propres.codecs._segment import Segmenter, checked_segments, segment_words
from propres.core.model import Bundle, ResourceEntry, Separator

COLMAX = 80
INDENT = "    "


def render_separator(separator: Separator) -> str:
    """`=` and `:` are padded with one space on each side; a space separator is bare."""
    if separator is Separator.SPACE:
        return " "
    return f" {separator.char} "


def render_definition(
    key: str,
    value: str,
    separator: Separator = Separator.EQUAL,
    locale: str = "en",
    *,
    separator_text: str | None = None,
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> list[str]:
    """Render one definition as physical lines (without terminators).

    A definition that fits in `column_limit` columns is a single line. Longer
    ones keep key and separator on the first line and fold the value at word
    segments; every line but the last ends with a continuation backslash and
    continuation lines are indented by `INDENT`. A continuation line never
    starts with white space, so a break is deferred until the next segment
    that starts with a non-space character.

    Args:
        separator_text: exact separator text to use instead of the canonical
            rendering of `separator` (the merge engine passes the original).
        segmenter: word segmenter `(text, locale) -> segments`; defaults to
            `segment_words`.
    """
    esc_key = escape_key(key)
    sep = separator_text if separator_text is not None else render_separator(separator)
    esc_value = escape_value(value)

    if len(esc_key) + len(sep) + len(esc_value) <= column_limit:
        return [esc_key + sep + esc_value]

    lines: list[str] = []
    buf = esc_key + sep
    if len(buf) > column_limit:
        lines.append(buf + "\\")
        buf = INDENT

    segments = checked_segments(segmenter or segment_words, value, locale)

    emit_next = False
    for i, segment in enumerate(segments):
        esc_segment = escape(segment, EscapeSpace.LEADING_ONLY if i == 0 else EscapeSpace.NONE)
        if emit_next or len(buf) + len(esc_segment) + 2 >= column_limit:
            if buf != INDENT and not is_whitespace(esc_segment[0]):
                lines.append(buf + "\\")
                buf = INDENT
                emit_next = False
        buf += esc_segment
        if len(buf) + 2 >= column_limit:
            # Break after checking the next segment.
            emit_next = True

    if buf == INDENT and lines:
        # Nothing followed the key line; drop its continuation marker.
        lines[-1] = lines[-1][:-1]
    else:
        lines.append(buf)
    return lines


def render_note(note: str) -> str:
    return "#" + escape_note(note)


def _render_entry_notes(notes: Iterable[str], *, window_open: bool) -> list[str]:
    # An empty note came from a blank line. Written as a blank line it would
    # turn preceding comments into global notes while that window is open.
    lines: list[str] = []
    pending = False
    for note in notes:
        if note:
            lines.append(render_note(note))
            pending = True
        elif window_open and pending:
            lines.append("#")
        else:
            lines.append("")
            window_open = False
    return lines


def sorted_entries(bundle: Bundle) -> list[ResourceEntry]:
    """Entries in write order: by sequence number, then key."""
    return sorted(bundle.entries, key=lambda e: (e.sequence_number, e.key))


def format_bundle_lines(
    bundle: Bundle,
    *,
    locale: str = "en",
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> list[str]:
    """Serialize a bundle to physical lines (without terminators)."""
    lines: list[str] = []
    window_open = True
    if bundle.global_notes:
        lines.extend(render_note(n) for n in bundle.global_notes)
        lines.append("")
        window_open = False

    for entry in sorted_entries(bundle):
        lines.extend(_render_entry_notes(entry.notes, window_open=window_open))
        window_open = False
        lines.extend(
            render_definition(
                entry.key,
                entry.value,
                Separator.EQUAL,
                locale,
                segmenter=segmenter,
                column_limit=column_limit,
            )
        )
    return lines
