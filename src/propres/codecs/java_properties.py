"""Java `.properties` codec (parse + write + format-preserving merge).

Files are ISO-8859-1 text; characters outside that range (and everything at or
above U+007E on output) travel as `\\uXXXX` escapes.

Parse:
- produces a `Bundle`: entries in first-seen key order, 1-based sequence
  numbers, per-entry notes (preceding comment/blank lines) and optional
  global notes (leading comment block ended by the first blank line)
- a key defined twice keeps its first position and sequence number and takes
  the last value
- a definition line without a separator is skipped with a warning, or raises
  `MalformedDefinition` when `strict=True`
- a malformed `\\uXXXX` escape always raises `MalformedUnicodeEscape`

Write:
- entries sorted by (sequence number, key); `key = value` with lines folded at
  80 columns on word boundaries

Merge:
- rewrites only definitions whose key is in `updates`, keeping their original
  indentation and separator; every other byte of the base file is kept
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Mapping

from propres.codecs._props_lines import iter_physical_lines
from propres.codecs._props_merge import merge_lines
from propres.codecs._props_parser import parse_lines
from propres.codecs._props_writer import COLMAX, format_bundle_lines
from propres.codecs._segment import Segmenter
from propres.core.errors import MalformedDefinition, PropertiesIOError
from propres.core.model import Bundle

PROPS_ENCODING = "iso-8859-1"

SkipHandler = Callable[[MalformedDefinition], None]


def _require_str(obj: object, *, where: str) -> str:
    if not isinstance(obj, str):
        raise TypeError(f"{where}: expected str, got {type(obj).__name__}")
    return obj


def _require_bundle(obj: object, *, where: str) -> Bundle:
    if not isinstance(obj, Bundle):
        raise TypeError(f"{where}: expected Bundle, got {type(obj).__name__}")
    return obj


def _require_updates(obj: object, *, where: str) -> Mapping[str, str]:
    if not isinstance(obj, Mapping):
        raise TypeError(f"{where}: expected a mapping of key -> value, got {type(obj).__name__}")
    for k, v in obj.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise TypeError(f"{where}: keys and values must be str (got {k!r}: {v!r})")
    return obj


def _checked_lines(reader: io.TextIOWrapper) -> Iterator[str]:
    it = iter(reader)
    while True:
        try:
            line = next(it)
        except StopIteration:
            return
        except OSError as e:
            raise PropertiesIOError(f"read failed: {e}") from e
        yield line


@contextmanager
def _physical_lines(stream: BinaryIO) -> Iterator[Iterator[str]]:
    # newline="" keeps CR/LF/CRLF terminators untranslated.
    reader = io.TextIOWrapper(stream, encoding=PROPS_ENCODING, newline="")
    try:
        yield _checked_lines(reader)
    finally:
        # Leave the caller's stream open.
        reader.detach()


def _detach_writer(writer: io.TextIOWrapper) -> None:
    # detach() flushes the byte stream again; a buffered stream that failed
    # once fails here too.
    try:
        writer.detach()
    except OSError as e:
        raise PropertiesIOError(f"write failed: {e}") from e


@contextmanager
def _text_writer(stream: BinaryIO) -> Iterator[io.TextIOWrapper]:
    writer = io.TextIOWrapper(stream, encoding=PROPS_ENCODING, newline="")
    try:
        yield writer
        writer.flush()
    except PropertiesIOError:
        raise
    except OSError as e:
        raise PropertiesIOError(f"write failed: {e}") from e
    finally:
        _detach_writer(writer)


# ----------------------------
# Parse
# ----------------------------


def parse_properties_text(text: str, *, strict: bool = False, on_skip: SkipHandler | None = None) -> Bundle:
    """Parse properties text (already decoded) into a `Bundle`.

    `on_skip` receives the `MalformedDefinition` of each line skipped in
    non-strict mode.
    """
    _require_str(text, where="parse_properties_text")
    return parse_lines(iter_physical_lines(text), strict=strict, on_skip=on_skip)


def parse_properties(stream: BinaryIO, *, strict: bool = False, on_skip: SkipHandler | None = None) -> Bundle:
    """Parse an ISO-8859-1 byte stream. The stream is not closed."""
    with _physical_lines(stream) as lines:
        return parse_lines(lines, strict=strict, on_skip=on_skip)


def read_properties(path: str | Path, *, strict: bool = False, on_skip: SkipHandler | None = None) -> Bundle:
    """Read a `.properties` file from disk and parse."""
    p = Path(path)
    try:
        f = p.open("rb")
    except OSError as e:
        raise PropertiesIOError(f"cannot open for reading: {e}", path=p) from e
    with f:
        return parse_properties(f, strict=strict, on_skip=on_skip)


# ----------------------------
# Write
# ----------------------------


def format_properties_text(
    bundle: Bundle,
    *,
    locale: str = "en",
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> str:
    """Serialize a bundle to properties text ("\\n" line endings, pure ASCII)."""
    _require_bundle(bundle, where="format_properties_text")
    lines = format_bundle_lines(bundle, locale=locale, segmenter=segmenter, column_limit=column_limit)
    return "".join(line + "\n" for line in lines)


def dump_properties(
    bundle: Bundle,
    stream: BinaryIO,
    *,
    locale: str = "en",
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> None:
    """Write a bundle to a byte stream. The stream is not closed."""
    text = format_properties_text(bundle, locale=locale, segmenter=segmenter, column_limit=column_limit)
    with _text_writer(stream) as writer:
        writer.write(text)


def write_properties(
    path: str | Path,
    bundle: Bundle,
    *,
    locale: str = "en",
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> None:
    """Write a bundle to a `.properties` file, creating parent directories."""
    text = format_properties_text(bundle, locale=locale, segmenter=segmenter, column_limit=column_limit)
    out_path = Path(path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("w", encoding=PROPS_ENCODING, newline="") as f:
            f.write(text)
    except OSError as e:
        raise PropertiesIOError(f"write failed: {e}", path=out_path) from e


# ----------------------------
# Merge
# ----------------------------


def merge_properties_text(
    base_text: str,
    updates: Mapping[str, str],
    *,
    locale: str = "en",
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> str:
    """Apply `updates` to `base_text`, changing only the updated definitions."""
    _require_str(base_text, where="merge_properties_text")
    _require_updates(updates, where="merge_properties_text")
    chunks = merge_lines(
        iter_physical_lines(base_text),
        updates,
        locale=locale,
        segmenter=segmenter,
        column_limit=column_limit,
    )
    return "".join(chunks)


def merge_properties(
    base: BinaryIO,
    out: BinaryIO,
    updates: Mapping[str, str],
    *,
    locale: str = "en",
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> None:
    """Stream `base` to `out` with `updates` applied. Neither stream is closed."""
    _require_updates(updates, where="merge_properties")
    with _physical_lines(base) as lines, _text_writer(out) as writer:
        for chunk in merge_lines(lines, updates, locale=locale, segmenter=segmenter, column_limit=column_limit):
            writer.write(chunk)


def merge_properties_file(
    base_path: str | Path,
    out_path: str | Path,
    updates: Mapping[str, str],
    *,
    locale: str = "en",
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> None:
    """Merge `updates` into the file at `base_path` and write the result to `out_path`.

    `out_path` may equal `base_path`; the base is read completely first.
    """
    base_p = Path(base_path)
    out_p = Path(out_path)
    try:
        data = base_p.read_bytes()
    except OSError as e:
        raise PropertiesIOError(f"cannot read base file: {e}", path=base_p) from e

    buf = io.BytesIO()
    merge_properties(io.BytesIO(data), buf, updates, locale=locale, segmenter=segmenter, column_limit=column_limit)

    try:
        out_p.parent.mkdir(parents=True, exist_ok=True)
        out_p.write_bytes(buf.getvalue())
    except OSError as e:
        raise PropertiesIOError(f"write failed: {e}", path=out_p) from e
