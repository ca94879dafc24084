"""propres core: data model, error kinds and the tabular view.

This package is intentionally standalone and must not import CLI/codecs/bundle
to avoid circular dependencies.
"""

from __future__ import annotations

from .errors import MalformedDefinition, MalformedUnicodeEscape, PropertiesError, PropertiesIOError
from .model import Bundle, OrderedEntries, ResourceEntry, Separator
from .tables import ENTRY_COLUMN_ORDER, bundle_from_frame, entries_frame, normalize_entries

__all__ = [
    "Bundle",
    "OrderedEntries",
    "ResourceEntry",
    "Separator",
    "PropertiesError",
    "MalformedUnicodeEscape",
    "MalformedDefinition",
    "PropertiesIOError",
    "ENTRY_COLUMN_ORDER",
    "entries_frame",
    "bundle_from_frame",
    "normalize_entries",
]
