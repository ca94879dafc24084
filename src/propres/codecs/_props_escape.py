"""Character-level escaping for Java properties keys, values and comments.

Private module; public API is re-exported from `propres.codecs`.

Escape rules (compatible with `java.util.Properties#store`):
- a leading run of space/tab/form-feed becomes `\\ `, `\\t`, `\\f` (ALL and
  LEADING_ONLY modes); ALL additionally escapes every interior space
- code points < 0x20 or >= 0x7E use a mnemonic (`\\t \\n \\f \\r`) when one
  exists, otherwise `\\uXXXX` (uppercase hex); code points above U+FFFF are
  written as a surrogate pair of `\\uXXXX` escapes
- `# ! = : \\` are always preceded by a backslash

Unescape rules:
- `\\t \\n \\f \\r` map to their control characters
- `\\u` must be followed by exactly four hex digits
- any other escaped character is taken literally (no octal, no `\\b`)
- a lone trailing backslash is dropped
"""

from __future__ import annotations

from enum import Enum

from propres.core.errors import MalformedUnicodeEscape

BACKSLASH = "\\"

# Java properties white space: space, tab and form feed.
WHITESPACE = " \t\f"

_MNEMONIC_ESCAPES: dict[str, str] = {
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}
_MNEMONIC_UNESCAPES: dict[str, str] = {v[1]: k for k, v in _MNEMONIC_ESCAPES.items()}

_SPECIAL_CHARS = frozenset("#!=:\\")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class EscapeSpace(Enum):
    ALL = "all"
    LEADING_ONLY = "leading_only"
    NONE = "none"


def is_whitespace(c: str) -> bool:
    return c in WHITESPACE


def leading_whitespace_length(s: str) -> int:
    i = 0
    while i < len(s) and s[i] in WHITESPACE:
        i += 1
    return i


def strip_leading_whitespace(s: str) -> str:
    return s[leading_whitespace_length(s):]


def _unicode_escape(c: str) -> str:
    cp = ord(c)
    if cp > 0xFFFF:
        cp -= 0x10000
        hi = 0xD800 + (cp >> 10)
        lo = 0xDC00 + (cp & 0x3FF)
        return f"\\u{hi:04X}\\u{lo:04X}"
    return f"\\u{cp:04X}"


def _escape_nonprintable(c: str) -> str:
    return _MNEMONIC_ESCAPES.get(c) or _unicode_escape(c)


def escape(s: str, mode: EscapeSpace) -> str:
    out: list[str] = []
    idx = 0

    if mode is not EscapeSpace.NONE:
        while idx < len(s) and s[idx] in WHITESPACE:
            c = s[idx]
            out.append("\\ " if c == " " else _MNEMONIC_ESCAPES[c])
            idx += 1

    for c in s[idx:]:
        cp = ord(c)
        if cp < 0x20 or cp >= 0x7E:
            out.append(_escape_nonprintable(c))
        elif c == " ":
            out.append("\\ " if mode is EscapeSpace.ALL else " ")
        elif c in _SPECIAL_CHARS:
            out.append(BACKSLASH + c)
        else:
            out.append(c)
    return "".join(out)


def escape_key(s: str) -> str:
    """Escape a property key (every space escaped)."""
    return escape(s, EscapeSpace.ALL)


def escape_value(s: str) -> str:
    """Escape a property value (only leading white space escaped)."""
    return escape(s, EscapeSpace.LEADING_ONLY)


def escape_note(s: str) -> str:
    """Escape comment text: backslash, control characters and non-ASCII only."""
    out: list[str] = []
    for c in s:
        cp = ord(c)
        if cp < 0x20 or cp >= 0x7E:
            out.append(_escape_nonprintable(c))
        elif c == BACKSLASH:
            out.append("\\\\")
        else:
            out.append(c)
    return "".join(out)


def _join_surrogates(units: list[str]) -> str:
    s = "".join(units)
    if not any("\ud800" <= c <= "\udfff" for c in s):
        return s
    # Pair up UTF-16 surrogates produced by \uXXXX escapes; lone ones are kept.
    return s.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def unescape(s: str) -> str:
    """Decode escape sequences in a key, value or comment.

    Raises:
        MalformedUnicodeEscape: if `\\u` is not followed by four hex digits.
    """
    if BACKSLASH not in s:
        return s

    out: list[str] = []
    i = 0
    n = len(s)
    while i < n:
        c = s[i]
        if c != BACKSLASH:
            out.append(c)
            i += 1
            continue
        if i + 1 >= n:
            # Incomplete escape at end of input is dropped.
            break
        nxt = s[i + 1]
        if nxt == "u":
            digits = s[i + 2 : i + 6]
            if len(digits) != 4 or not all(d in _HEX_DIGITS for d in digits):
                raise MalformedUnicodeEscape(s, position=i)
            out.append(chr(int(digits, 16)))
            i += 6
            continue
        out.append(_MNEMONIC_UNESCAPES.get(nxt, nxt))
        i += 2
    return _join_surrogates(out)
