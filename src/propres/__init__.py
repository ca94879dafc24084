"""propres — Java properties resource codec.

Parses `.properties` resource files into an ordered `Bundle`, serializes
bundles back with column-limited line folding, and merges updated values into
an existing file while leaving every unrelated byte untouched.
"""

from __future__ import annotations

from propres.core import Bundle, ResourceEntry, Separator
from propres.codecs.java_properties import (
    merge_properties_text,
    parse_properties_text,
    read_properties,
    write_properties,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Bundle",
    "ResourceEntry",
    "Separator",
    "merge_properties_text",
    "parse_properties_text",
    "read_properties",
    "write_properties",
]
