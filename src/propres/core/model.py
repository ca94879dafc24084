"""Core data model for propres.

- `ResourceEntry`: one key/value definition with its sequence number and notes.
- `OrderedEntries`: explicit ordered container (key order + key lookup) used
  while a bundle is being assembled.
- `Bundle`: immutable, ordered collection of entries plus optional global notes.

This module must not import codecs/bundle/cli.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Sequence


class Separator(Enum):
    """Glyph dividing key from value in a definition line."""

    EQUAL = "="
    COLON = ":"
    SPACE = " "

    @property
    def char(self) -> str:
        return self.value


def _norm_notes(notes: Iterable[str] | None, *, where: str) -> tuple[str, ...]:
    if notes is None:
        return ()
    if isinstance(notes, (str, bytes)):
        raise TypeError(f"{where}: expected a sequence of str, got {type(notes).__name__}")
    out = tuple(notes)
    for n in out:
        if not isinstance(n, str):
            raise TypeError(f"{where}: expected str items, got {type(n).__name__}")
    return out


@dataclass(frozen=True)
class ResourceEntry:
    key: str
    value: str
    sequence_number: int
    notes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            raise TypeError(f"ResourceEntry.key: expected str, got {type(self.key).__name__}")
        if not isinstance(self.value, str):
            raise TypeError(f"ResourceEntry.value: expected str, got {type(self.value).__name__}")
        if isinstance(self.sequence_number, bool) or not isinstance(self.sequence_number, int):
            raise TypeError(
                f"ResourceEntry.sequence_number: expected int, got {type(self.sequence_number).__name__}"
            )
        if self.sequence_number < 1:
            raise ValueError(f"ResourceEntry.sequence_number: must be >= 1, got {self.sequence_number}")
        object.__setattr__(self, "notes", _norm_notes(self.notes, where="ResourceEntry.notes"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "sequence_number": self.sequence_number,
            "notes": list(self.notes),
        }


class OrderedEntries:
    """Ordered key -> entry container with last-write-wins values.

    Keys keep the position (and sequence number) of their first definition; a
    later definition of the same key replaces the value in place. Notes are
    replaced only when the later definition carries notes of its own.
    """

    def __init__(self) -> None:
        self._order: list[str] = []
        self._index: dict[str, ResourceEntry] = {}

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def put(self, key: str, value: str, notes: Sequence[str] = ()) -> ResourceEntry:
        prev = self._index.get(key)
        if prev is None:
            entry = ResourceEntry(key, value, len(self._order) + 1, tuple(notes))
            self._order.append(key)
        else:
            entry = ResourceEntry(key, value, prev.sequence_number, tuple(notes) if notes else prev.notes)
        self._index[key] = entry
        return entry

    def entries(self) -> tuple[ResourceEntry, ...]:
        return tuple(self._index[k] for k in self._order)


@dataclass(frozen=True)
class Bundle:
    """Parsed resource bundle: entries in first-seen order plus global notes.

    `global_notes` is None when the source had no leading comment block
    terminated by a blank line. An empty sequence is stored as None.
    """

    entries: tuple[ResourceEntry, ...] = ()
    global_notes: tuple[str, ...] | None = None
    _by_key: Mapping[str, ResourceEntry] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = tuple(self.entries)
        by_key: dict[str, ResourceEntry] = {}
        for i, e in enumerate(entries):
            if not isinstance(e, ResourceEntry):
                raise TypeError(f"Bundle.entries[{i}]: expected ResourceEntry, got {type(e).__name__}")
            if e.key in by_key:
                raise ValueError(f"Bundle.entries[{i}]: duplicate key {e.key!r}")
            by_key[e.key] = e
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_by_key", by_key)
        if self.global_notes is not None:
            # An empty block cannot be written or read back; store it as absent.
            notes = _norm_notes(self.global_notes, where="Bundle.global_notes")
            object.__setattr__(self, "global_notes", notes or None)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str], *, global_notes: Iterable[str] | None = None) -> "Bundle":
        """Build a bundle from a key -> value mapping, numbering entries in mapping order."""
        entries = tuple(ResourceEntry(str(k), str(v), i) for i, (k, v) in enumerate(values.items(), start=1))
        return cls(entries=entries, global_notes=None if global_notes is None else tuple(global_notes))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ResourceEntry]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __getitem__(self, key: str) -> ResourceEntry:
        return self._by_key[key]

    def get(self, key: str, default: ResourceEntry | None = None) -> ResourceEntry | None:
        return self._by_key.get(key, default)

    def keys(self) -> list[str]:
        return [e.key for e in self.entries]

    def to_dict(self) -> dict[str, str]:
        """Return key -> value in bundle order."""
        return {e.key: e.value for e in self.entries}
