from __future__ import annotations

import pandas as pd
import pytest

from propres.codecs.java_properties import parse_properties_text
from propres.core.tables import ENTRY_COLUMN_ORDER, bundle_from_frame, entries_frame, normalize_entries


def _bundle():
    return parse_properties_text("# g\n\n# about b\nb= padded \na=NA\nc=\n")


def test_entries_frame_columns_and_order() -> None:
    df = entries_frame(_bundle())
    assert list(df.columns) == ENTRY_COLUMN_ORDER
    assert list(df["key"]) == ["b", "a", "c"]
    assert list(df["sequence_number"]) == [1, 2, 3]
    assert df.loc[0, "notes"] == '[" about b"]'
    # Values are not stripped.
    assert df.loc[0, "value"] == "padded "


def test_bundle_from_frame_roundtrip() -> None:
    bundle = _bundle()
    back = bundle_from_frame(entries_frame(bundle), global_notes=bundle.global_notes)
    assert back == bundle


def test_normalize_entries_sorts_by_sequence_number() -> None:
    df = pd.DataFrame(
        [
            {"key": "b", "value": "2", "sequence_number": 2, "notes": "[]"},
            {"key": "a", "value": "1", "sequence_number": 1, "notes": None},
        ]
    )
    norm = normalize_entries(df)
    assert list(norm["key"]) == ["a", "b"]
    assert list(norm["notes"]) == ["[]", "[]"]


def test_normalize_entries_rejects_bad_columns() -> None:
    with pytest.raises(ValueError, match="missing required columns"):
        normalize_entries(pd.DataFrame([{"key": "a"}]))
    with pytest.raises(ValueError, match="unexpected extra columns"):
        normalize_entries(
            pd.DataFrame([{"key": "a", "value": "1", "sequence_number": 1, "notes": "[]", "x": 1}])
        )


def test_bundle_from_frame_rejects_bad_notes() -> None:
    df = pd.DataFrame([{"key": "a", "value": "1", "sequence_number": 1, "notes": "{}"}])
    with pytest.raises(ValueError, match="notes"):
        bundle_from_frame(df)
