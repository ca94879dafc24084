"""Package save/load (CSV) for parsed resource bundles.

A package is a folder rooted at `packages/<name>/<version>/` containing:
- manifest.json
- tables/entries.csv
- raw/source.properties
- raw/global_notes.json

The CSV is read back with every text column as `str` and no NA inference, so
empty values and strings such as "NA" survive the roundtrip.

This module intentionally avoids any dependency on codecs/CLI to prevent cycles.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from propres.core.model import Bundle
from propres.core.tables import bundle_from_frame, entries_frame

from .manifest import build_manifest, describe_resource, file_record, read_manifest, verify_hashes, write_manifest

SOURCE_ENCODING = "iso-8859-1"

_ENTRIES_REL = Path("tables") / "entries.csv"
_SOURCE_REL = Path("raw") / "source.properties"
_GLOBAL_NOTES_REL = Path("raw") / "global_notes.json"


@dataclass(frozen=True)
class PackageBundle:
    root: Path
    manifest: dict[str, Any]
    bundle: Bundle
    source_text: str


def _write_text_exact(path: Path, text: str) -> None:
    # newline="" prevents Python from translating newlines on write
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding=SOURCE_ENCODING, newline="") as f:
        f.write(text)


def _read_text_exact(path: Path) -> str:
    with path.open("r", encoding=SOURCE_ENCODING, newline="") as f:
        return f.read()


def _write_json_stable(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    path.write_text(text, encoding="utf-8")


def _coerce_global_notes(obj: Any) -> tuple[str, ...] | None:
    if obj is None:
        return None
    if not isinstance(obj, list) or not all(isinstance(x, str) for x in obj):
        raise ValueError("global_notes.json: expected null or an array of strings")
    return tuple(obj)


def save_package(
    root: Path,
    *,
    name: str,
    version: str,
    bundle: Bundle,
    source_text: str,
    strict: bool = False,
    skipped_lines: Iterable[int] = (),
) -> dict[str, Any]:
    """Save a parsed bundle to disk and return the manifest dict.

    `strict` and `skipped_lines` record how the source was imported.
    """
    if not isinstance(bundle, Bundle):
        raise TypeError(f"save_package: expected Bundle, got {type(bundle).__name__}")
    root = Path(root)

    # ---- write raw blobs (exact) ----
    _write_text_exact(root / _SOURCE_REL, source_text)
    notes = None if bundle.global_notes is None else list(bundle.global_notes)
    _write_json_stable(root / _GLOBAL_NOTES_REL, notes)

    # ---- entries table ----
    df = entries_frame(bundle)
    entries_path = root / _ENTRIES_REL
    entries_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(entries_path, index=False, lineterminator="\n", encoding="utf-8")

    files = {
        "entries": file_record(root, _ENTRIES_REL, rows=int(len(df))),
        "source": file_record(root, _SOURCE_REL),
        "global_notes": file_record(root, _GLOBAL_NOTES_REL),
    }
    resource = describe_resource(bundle, encoding=SOURCE_ENCODING, strict=strict, skipped_lines=skipped_lines)

    manifest = build_manifest(name=name, version=version, resource=resource, files=files)
    write_manifest(root / "manifest.json", manifest)
    return manifest


def load_package(root: Path, *, validate_hashes: bool = False) -> PackageBundle:
    """Load a package from disk.

    If validate_hashes is True, recompute sha256 for every file listed in the
    manifest and raise ValueError on any mismatch. The entry count recorded in
    the manifest must match the entries table.
    """
    root = Path(root)
    manifest = read_manifest(root / "manifest.json")
    if validate_hashes:
        verify_hashes(root, manifest)

    files = manifest["files"]

    import pandas as pd  # local import to keep module import-light

    df = pd.read_csv(
        root / files["entries"]["path"],
        dtype={"key": str, "value": str, "notes": str},
        keep_default_na=False,
        encoding="utf-8",
    )
    expected = manifest["resource"]["entries"]
    if len(df) != expected:
        raise ValueError(f"manifest.json: resource.entries is {expected} but the entries table has {len(df)} rows")

    notes_obj = json.loads((root / files["global_notes"]["path"]).read_text(encoding="utf-8"))
    bundle = bundle_from_frame(df, global_notes=_coerce_global_notes(notes_obj))

    return PackageBundle(
        root=root,
        manifest=manifest,
        bundle=bundle,
        source_text=_read_text_exact(root / files["source"]["path"]),
    )
