from __future__ import annotations

import pytest

from propres.codecs.java_properties import format_properties_text, parse_properties_text
from propres.core.model import Bundle, OrderedEntries, ResourceEntry


def test_ordered_entries_update_in_place() -> None:
    oe = OrderedEntries()
    oe.put("a", "1", ("note",))
    oe.put("b", "2")
    oe.put("a", "3")
    entries = oe.entries()
    assert [(e.key, e.value, e.sequence_number, e.notes) for e in entries] == [
        ("a", "3", 1, ("note",)),
        ("b", "2", 2, ()),
    ]
    assert "a" in oe
    assert len(oe) == 2


def test_bundle_lookup_and_order() -> None:
    bundle = Bundle.from_mapping({"z": "1", "a": "2"}, global_notes=["g"])
    assert bundle.keys() == ["z", "a"]
    assert bundle["a"].sequence_number == 2
    assert bundle.get("missing") is None
    assert "z" in bundle
    assert bundle.global_notes == ("g",)
    assert bundle.to_dict() == {"z": "1", "a": "2"}


def test_empty_global_notes_are_stored_as_absent() -> None:
    bundle = Bundle.from_mapping({"a": "1"}, global_notes=[])
    assert bundle.global_notes is None
    assert parse_properties_text(format_properties_text(bundle)) == bundle


def test_bundle_rejects_duplicate_keys() -> None:
    with pytest.raises(ValueError, match="duplicate key 'a'"):
        Bundle(entries=(ResourceEntry("a", "1", 1), ResourceEntry("a", "2", 2)))


def test_resource_entry_validation() -> None:
    with pytest.raises(ValueError, match="must be >= 1"):
        ResourceEntry("a", "1", 0)
    with pytest.raises(TypeError, match="expected str"):
        ResourceEntry("a", 1, 1)  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="sequence of str"):
        ResourceEntry("a", "1", 1, "note")  # type: ignore[arg-type]


def test_resource_entry_to_dict() -> None:
    assert ResourceEntry("k", "v", 3, ["n"]).to_dict() == {
        "key": "k",
        "value": "v",
        "sequence_number": 3,
        "notes": ["n"],
    }
