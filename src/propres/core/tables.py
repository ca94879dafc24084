"""Tabular view of a `Bundle` as a pandas DataFrame.

The entries table is the on-disk representation used by `propres.bundle` and a
convenient inspection format for upload tooling:

- one row per entry, canonical column order `ENTRY_COLUMN_ORDER`
- `notes` stored as a JSON array string so the table stays flat
- rows sorted by `sequence_number`, then `key`, for deterministic CSV export

Global notes are not part of the table; they travel next to it.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Iterable

from propres.core.model import Bundle, ResourceEntry

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


ENTRY_SCHEMA: dict[str, str] = {
    "key": "string",
    "value": "string",
    "sequence_number": "Int64",
    "notes": "string",
}

ENTRY_COLUMN_ORDER: list[str] = list(ENTRY_SCHEMA.keys())


def _require_dataframe(df: object) -> "pd.DataFrame":
    import pandas as pd

    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"entries: expected pandas.DataFrame, got {type(df).__name__}")
    return df


def _notes_to_json(notes: Iterable[str]) -> str:
    return json.dumps(list(notes), ensure_ascii=False)


def _notes_from_json(s: Any, *, row: int) -> tuple[str, ...]:
    if s is None or (isinstance(s, float) and s != s):
        return ()
    try:
        obj = json.loads(str(s)) if str(s) else []
    except json.JSONDecodeError as e:
        raise ValueError(f"entries[{row}].notes: invalid JSON array: {e}") from e
    if not isinstance(obj, list) or not all(isinstance(x, str) for x in obj):
        raise ValueError(f"entries[{row}].notes: expected JSON array of strings")
    return tuple(obj)


def normalize_entries(df: "pd.DataFrame") -> "pd.DataFrame":
    """Return a copy with canonical columns, dtypes and row order.

    Unlike free-text tables elsewhere, keys and values are NOT stripped:
    leading/trailing whitespace is significant in resource strings.
    """
    df = _require_dataframe(df)
    missing = [c for c in ENTRY_COLUMN_ORDER if c not in df.columns]
    if missing:
        raise ValueError(f"entries: missing required columns: {missing}")
    extras = [c for c in df.columns if c not in ENTRY_COLUMN_ORDER]
    if extras:
        raise ValueError(f"entries: unexpected extra columns: {extras}")

    df = df.loc[:, ENTRY_COLUMN_ORDER].copy()
    for col, dtype in ENTRY_SCHEMA.items():
        df[col] = df[col].astype(dtype)
    df["notes"] = df["notes"].fillna("[]")

    df = df.sort_values(["sequence_number", "key"], kind="mergesort").reset_index(drop=True)
    return df


def entries_frame(bundle: Bundle) -> "pd.DataFrame":
    """Build the normalized entries DataFrame for a bundle."""
    import pandas as pd

    rows = [
        {
            "key": e.key,
            "value": e.value,
            "sequence_number": e.sequence_number,
            "notes": _notes_to_json(e.notes),
        }
        for e in bundle.entries
    ]
    df = pd.DataFrame(rows, columns=ENTRY_COLUMN_ORDER)
    return normalize_entries(df)


def bundle_from_frame(df: "pd.DataFrame", *, global_notes: Iterable[str] | None = None) -> Bundle:
    """Rebuild a `Bundle` from an entries DataFrame.

    Raises:
        ValueError: on missing keys/sequence numbers, bad notes JSON, or duplicate keys.
    """
    import pandas as pd

    norm = normalize_entries(df)
    entries: list[ResourceEntry] = []
    for i, row in enumerate(norm.itertuples(index=False)):
        if pd.isna(row.key):
            raise ValueError(f"entries[{i}].key: missing")
        if pd.isna(row.sequence_number):
            raise ValueError(f"entries[{i}].sequence_number: missing")
        value = "" if pd.isna(row.value) else str(row.value)
        entries.append(
            ResourceEntry(
                key=str(row.key),
                value=value,
                sequence_number=int(row.sequence_number),
                notes=_notes_from_json(row.notes, row=i),
            )
        )
    return Bundle(entries=tuple(entries), global_notes=None if global_notes is None else tuple(global_notes))
