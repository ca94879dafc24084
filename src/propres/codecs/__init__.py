"""Codecs for reading/writing resource bundle file formats.

- Java `.properties` parse/write/merge lives in `java_properties`.
- The escape codec is re-exported here for callers that escape keys/values
  on their own.
"""

from __future__ import annotations

from propres.codecs._props_escape import escape_key, escape_value, unescape
from propres.codecs._segment import Segmenter, segment_words

__all__ = [
    "Segmenter",
    "escape_key",
    "escape_value",
    "segment_words",
    "unescape",
]
