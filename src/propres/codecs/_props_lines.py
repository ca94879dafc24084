"""Logical line assembly for Java properties text.

Private module. Physical lines are kept *with* their original terminator so
the merge engine can re-emit them byte-for-byte.

Rules:
- a comment (`#`/`!` after leading white space) or blank physical line is
  always a logical line of its own; comments never continue
- otherwise, a physical line continues onto the next when its trailing run of
  backslashes has odd length; an even run is an escaped backslash
- joining drops the continuation backslash and the next line's leading white
  space
- end of input while a continuation is pending closes the partial line
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable, Iterator

from propres.codecs._props_escape import leading_whitespace_length, strip_leading_whitespace

_LINE_ENDINGS = ("\r\n", "\n", "\r")


def split_line_ending(line: str) -> tuple[str, str]:
    """Split a physical line into (content, terminator)."""
    for ending in _LINE_ENDINGS:
        if line.endswith(ending):
            return line[: -len(ending)], ending
    return line, ""


def iter_physical_lines(text: str) -> Iterator[str]:
    """Yield physical lines with terminators; only CR, LF and CRLF break lines."""
    # io.StringIO(newline="") splits on \r, \n, \r\n only (str.splitlines would also
    # split on form feed, which is white space in this format).
    return iter(io.StringIO(text, newline=""))


def is_comment(content: str) -> bool:
    s = strip_leading_whitespace(content)
    return s.startswith("#") or s.startswith("!")


def is_continuation(content: str) -> bool:
    """True if `content` ends with an odd number of backslashes."""
    count = len(content) - len(content.rstrip("\\"))
    return count % 2 == 1


@dataclass(frozen=True)
class LogicalLine:
    """One comment, blank or definition line assembled from physical lines.

    `text` has the first line's leading white space stripped and continuations
    joined; `physical` holds the untouched source lines (with terminators).
    """

    text: str
    physical: tuple[str, ...]
    lineno: int

    @property
    def indent(self) -> str:
        first, _ = split_line_ending(self.physical[0])
        return first[: leading_whitespace_length(first)]

    @property
    def line_ending(self) -> str:
        """Terminator of the last physical line ("" at end of input without one)."""
        return split_line_ending(self.physical[-1])[1]

    @property
    def is_comment(self) -> bool:
        return len(self.physical) == 1 and is_comment(self.text)

    @property
    def is_blank(self) -> bool:
        return self.text == ""

    @property
    def source(self) -> str:
        return "".join(self.physical)


def assemble_logical_lines(lines: Iterable[str]) -> Iterator[LogicalLine]:
    """Group physical lines into logical lines.

    Args:
        lines: physical lines, each optionally ending in "\\n", "\\r\\n" or "\\r".
    """
    buf: list[str] = []
    physical: list[str] = []
    start = 0

    for lineno, raw in enumerate(lines, start=1):
        content, _ = split_line_ending(raw)
        norm = strip_leading_whitespace(content)

        if not physical:
            start = lineno
            if not norm or is_comment(norm):
                yield LogicalLine(norm, (raw,), lineno)
                continue

        physical.append(raw)
        if is_continuation(norm):
            buf.append(norm[:-1])
            continue

        buf.append(norm)
        yield LogicalLine("".join(buf), tuple(physical), start)
        buf = []
        physical = []

    if physical:
        yield LogicalLine("".join(buf), tuple(physical), start)
