"""Internal parsing helpers for the Java properties codec.

Private module for parsing logic; public API is in `java_properties.py`.

A logical line is one of:
- comment: starts with `#` or `!` -> its text (marker removed) is unescaped
  into the pending notes
- blank: closes the global-notes window (see `NotesCollector`)
- definition: `key <sep> value` where the separator is the first unescaped
  `=` / `:` or a run of white space (optionally followed by `=` / `:`)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from propres.codecs._props_escape import WHITESPACE, strip_leading_whitespace, unescape
from propres.codecs._props_lines import LogicalLine, assemble_logical_lines
from propres.core.errors import MalformedDefinition, MalformedUnicodeEscape
from propres.core.model import Bundle, OrderedEntries, Separator

logger = logging.getLogger(__name__)


# ----------------------------
# Definition lines
# ----------------------------


@dataclass(frozen=True)
class PropDef:
    """A parsed definition line.

    `separator_text` is the exact text between the raw key and the raw value
    (for example `"="`, `" = "` or `"  "`); the merge engine reuses it to keep
    the original spacing.
    """

    key: str
    value: str
    separator: Separator
    separator_text: str


def _scan_separator(line: str) -> tuple[int, int, Separator] | None:
    """Locate the separator in a definition line.

    Returns:
        (key_end, value_start, separator) or None when no separator exists or
        the line starts with one.
    """
    key_end = -1
    escaped = False
    for i, c in enumerate(line):
        if key_end >= 0:
            # White space already ended the key; the next non-space character
            # decides between "=", ":" and a plain space separator.
            if c in WHITESPACE:
                continue
            if c == "=":
                return key_end, i + 1, Separator.EQUAL
            if c == ":":
                return key_end, i + 1, Separator.COLON
            return key_end, i, Separator.SPACE
        if escaped:
            escaped = False
            continue
        if c == "\\":
            escaped = True
            continue
        if i == 0:
            if c in WHITESPACE or c in "=:":
                return None
            continue
        if c in WHITESPACE:
            key_end = i
        elif c == "=":
            return i, i + 1, Separator.EQUAL
        elif c == ":":
            return i, i + 1, Separator.COLON

    if key_end >= 0:
        # Key followed only by white space: empty value.
        return key_end, len(line), Separator.SPACE
    return None


def parse_definition(line: str, *, lineno: int | None = None) -> PropDef:
    """Parse a definition logical line (leading white space already stripped).

    Raises:
        MalformedDefinition: no separator, or the line starts with a separator.
        MalformedUnicodeEscape: invalid `\\uXXXX` in key or value.
    """
    found = _scan_separator(line)
    if found is None:
        raise MalformedDefinition(line, lineno=lineno)
    key_end, value_start, sep = found

    raw_value = line[value_start:]
    value_offset = value_start + (len(raw_value) - len(strip_leading_whitespace(raw_value)))
    try:
        key = unescape(line[:key_end])
        value = unescape(line[value_offset:])
    except MalformedUnicodeEscape as e:
        raise MalformedUnicodeEscape(e.text, position=e.position, lineno=lineno) from e
    return PropDef(key=key, value=value, separator=sep, separator_text=line[key_end:value_offset])


# ----------------------------
# Global notes state machine
# ----------------------------


class NotesState(Enum):
    CANDIDATE = "candidate"
    CLOSED = "closed"


class NotesCollector:
    """Buffers comment lines and decides where they belong.

    While CANDIDATE, a blank line turns the buffered comments into the
    bundle's global notes. The first blank line or definition closes the
    window for good; afterwards a blank line is kept as an empty note.
    """

    def __init__(self) -> None:
        self.state = NotesState.CANDIDATE
        self.global_notes: tuple[str, ...] | None = None
        self._pending: list[str] = []

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def comment(self, text: str) -> None:
        self._pending.append(text)

    def blank(self) -> None:
        if self.state is NotesState.CANDIDATE and self._pending:
            self.global_notes = tuple(self._pending)
            self._pending.clear()
        else:
            self._pending.append("")
        self.state = NotesState.CLOSED

    def take(self) -> tuple[str, ...]:
        """Hand the pending notes to a definition and close the window."""
        notes = tuple(self._pending)
        self._pending.clear()
        self.state = NotesState.CLOSED
        return notes


# ----------------------------
# Entry parser
# ----------------------------


def _comment_text(logical: LogicalLine) -> str:
    try:
        return unescape(logical.text[1:])
    except MalformedUnicodeEscape as e:
        raise MalformedUnicodeEscape(e.text, position=e.position, lineno=logical.lineno) from e


def parse_logical_lines(
    logical_lines: Iterable[LogicalLine],
    *,
    strict: bool = False,
    on_skip: Callable[[MalformedDefinition], None] | None = None,
) -> Bundle:
    """Build a `Bundle` from assembled logical lines.

    Args:
        strict: if True, a definition line without a separator raises
            `MalformedDefinition`; otherwise it is skipped with a warning and
            any pending notes stay pending for the next definition.
        on_skip: called with the error for every skipped line.
    """
    entries = OrderedEntries()
    notes = NotesCollector()
    skipped = 0

    for logical in logical_lines:
        if logical.is_comment:
            notes.comment(_comment_text(logical))
        elif logical.is_blank:
            notes.blank()
        else:
            try:
                prop = parse_definition(logical.text, lineno=logical.lineno)
            except MalformedDefinition as e:
                if strict:
                    raise
                skipped += 1
                logger.warning("skipping %s", e)
                if on_skip is not None:
                    on_skip(e)
                continue
            if prop.key in entries:
                logger.debug("line %d: key %r redefined; last value wins", logical.lineno, prop.key)
            entries.put(prop.key, prop.value, notes.take())

    logger.debug("parsed %d entries (%d malformed lines skipped)", len(entries), skipped)
    return Bundle(entries=entries.entries(), global_notes=notes.global_notes)


def parse_lines(
    lines: Iterable[str],
    *,
    strict: bool = False,
    on_skip: Callable[[MalformedDefinition], None] | None = None,
) -> Bundle:
    """Parse physical lines (with or without terminators) into a `Bundle`."""
    return parse_logical_lines(assemble_logical_lines(lines), strict=strict, on_skip=on_skip)
