"""Format-preserving merge of updated values into an existing properties file.

Private module; public API is in `java_properties.py`.

Only definitions whose key is in the update mapping are rewritten. Every other
logical line (comments, blank lines, untouched or unparseable definitions) is
emitted exactly as read, including its line terminators.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping

from propres.codecs._props_lines import LogicalLine, assemble_logical_lines, split_line_ending
from propres.codecs._props_parser import PropDef, parse_definition
from propres.codecs._props_writer import COLMAX, render_definition
from propres.codecs._segment import Segmenter
from propres.core.errors import PropertiesError

logger = logging.getLogger(__name__)


def _try_parse(logical: LogicalLine) -> PropDef | None:
    if logical.is_comment or logical.is_blank:
        return None
    try:
        return parse_definition(logical.text, lineno=logical.lineno)
    except PropertiesError as e:
        logger.debug("passing through unparseable line: %s", e)
        return None


def _rewrite(
    logical: LogicalLine,
    prop: PropDef,
    value: str,
    *,
    locale: str,
    segmenter: Segmenter | None,
    column_limit: int,
) -> str:
    rendered = render_definition(
        prop.key,
        value,
        prop.separator,
        locale,
        separator_text=prop.separator_text,
        segmenter=segmenter,
        column_limit=column_limit,
    )
    eol = logical.line_ending
    inner_eol = split_line_ending(logical.physical[0])[1] or eol or "\n"
    return logical.indent + inner_eol.join(rendered) + eol


def merge_lines(
    lines: Iterable[str],
    updates: Mapping[str, str],
    *,
    locale: str = "en",
    segmenter: Segmenter | None = None,
    column_limit: int = COLMAX,
) -> Iterator[str]:
    """Yield output text chunks for `lines` with `updates` applied.

    Args:
        lines: physical lines of the base file, with terminators.
        updates: key -> new value; read only.
    """
    rewritten = 0
    for logical in assemble_logical_lines(lines):
        prop = _try_parse(logical)
        if prop is None or prop.key not in updates:
            yield logical.source
            continue
        rewritten += 1
        yield _rewrite(
            logical,
            prop,
            updates[prop.key],
            locale=locale,
            segmenter=segmenter,
            column_limit=column_limit,
        )
    logger.debug("merge rewrote %d definitions", rewritten)
