"""Word segmentation used when folding long values.

Private module. A segmenter is any callable `(text, locale) -> segments` whose
segments concatenate back to `text`. The default cuts the text at the word
boundaries of an ICU word break iterator for the given locale, so scripts
written without spaces (Japanese, Chinese, Thai) still fold between words.
"""

from __future__ import annotations

from typing import Callable, Sequence

from icu import BreakIterator, Locale

Segmenter = Callable[[str, str], Sequence[str]]


def _icu_locale(locale: str) -> Locale:
    # Accept BCP 47 tags ("pt-BR") as well as ICU ids ("pt_BR").
    return Locale(locale.replace("-", "_"))


def _utf16_to_index(text: str) -> dict[int, int]:
    """Map UTF-16 code unit offsets (what ICU reports) to `str` indices."""
    offsets: dict[int, int] = {}
    units = 0
    for i, c in enumerate(text):
        offsets[units] = i
        units += 2 if ord(c) > 0xFFFF else 1
    offsets[units] = len(text)
    return offsets


def segment_words(text: str, locale: str = "en") -> list[str]:
    """Split `text` into contiguous word-boundary segments."""
    if not text:
        return []
    word_bi = BreakIterator.createWordInstance(_icu_locale(locale))
    word_bi.setText(text)
    to_index = _utf16_to_index(text)

    bounds = sorted({0, len(text)} | {to_index[b] for b in word_bi if b in to_index})
    return [text[start:end] for start, end in zip(bounds, bounds[1:])]


def checked_segments(segmenter: Segmenter, text: str, locale: str) -> list[str]:
    """Run `segmenter` and verify that it covers `text` exactly."""
    segments = [s for s in segmenter(text, locale) if s]
    if "".join(segments) != text:
        raise ValueError(f"segmenter: segments do not reconstruct the input text {text!r}")
    return segments
