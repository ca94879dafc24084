"""Package manifest (`manifest.json`).

The manifest describes one imported resource file:

- `resource`: source encoding, entry count, global-note line count (null when
  the file has no global notes), how many entries carry notes, and the import
  record (`strict` flag and the line numbers of skipped malformed definitions)
- `files`: role -> {path, sha256}; the `entries` role also records `rows`

Roles are fixed (`REQUIRED_FILES`) so readers never guess paths.
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from propres.core.model import Bundle

SCHEMA_VERSION = "propres-1.0"

REQUIRED_FILES = ("entries", "source", "global_notes")


def sha256_file(path: Path) -> str:
    """Return hex-encoded sha256 for a file on disk."""
    h = hashlib.sha256()
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def describe_resource(
    bundle: Bundle,
    *,
    encoding: str,
    strict: bool = False,
    skipped_lines: Iterable[int] = (),
) -> dict[str, Any]:
    """Summarize a parsed bundle for the `resource` block."""
    return {
        "encoding": encoding,
        "entries": len(bundle),
        "global_note_lines": None if bundle.global_notes is None else len(bundle.global_notes),
        "annotated_entries": sum(1 for e in bundle.entries if e.notes),
        "import": {"strict": bool(strict), "skipped_lines": sorted(int(n) for n in skipped_lines)},
    }


def file_record(root: Path, rel: Path, **extra: Any) -> dict[str, Any]:
    record = {"path": str(rel).replace("\\", "/"), "sha256": sha256_file(Path(root) / rel)}
    record.update(extra)
    return record


def build_manifest(
    *,
    name: str,
    version: str,
    resource: dict[str, Any],
    files: dict[str, dict[str, Any]],
    created_utc: str | None = None,
) -> dict[str, Any]:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("manifest: name must be a non-empty string")
    if not isinstance(version, str) or not version.strip():
        raise ValueError("manifest: version must be a non-empty string")
    manifest = {
        "schema_version": SCHEMA_VERSION,
        "name": name.strip(),
        "version": version.strip(),
        "created_utc": created_utc or _now_utc_iso(),
        "resource": resource,
        "files": files,
    }
    return check_manifest(manifest)


def check_manifest(obj: Any) -> dict[str, Any]:
    """Validate manifest structure and return it.

    Raises:
        ValueError: wrong schema version, missing file roles, or bad fields.
    """
    if not isinstance(obj, dict):
        raise ValueError("manifest.json: expected JSON object")
    if obj.get("schema_version") != SCHEMA_VERSION:
        raise ValueError(f"manifest.json: unsupported schema_version {obj.get('schema_version')!r}")

    resource = obj.get("resource")
    if not isinstance(resource, dict):
        raise ValueError("manifest.json: resource must be an object")
    entries = resource.get("entries")
    if not isinstance(entries, int) or isinstance(entries, bool) or entries < 0:
        raise ValueError("manifest.json: resource.entries must be a non-negative integer")

    files = obj.get("files")
    if not isinstance(files, dict):
        raise ValueError("manifest.json: files must be an object")
    for role in REQUIRED_FILES:
        rec = files.get(role)
        if not isinstance(rec, dict):
            raise ValueError(f"manifest.json: files.{role} is missing")
        if not isinstance(rec.get("path"), str) or not rec["path"]:
            raise ValueError(f"manifest.json: files.{role}.path must be a non-empty string")
        if not isinstance(rec.get("sha256"), str):
            raise ValueError(f"manifest.json: files.{role}.sha256 must be a string")
    return obj


def verify_hashes(root: Path, manifest: dict[str, Any]) -> None:
    """Recompute every file hash; raise ValueError on the first mismatch."""
    for role, rec in manifest["files"].items():
        actual = sha256_file(Path(root) / rec["path"])
        if actual != rec["sha256"]:
            raise ValueError(f"sha256 mismatch for {role} ({rec['path']}): expected {rec['sha256']}, got {actual}")


def read_manifest(path: Path) -> dict[str, Any]:
    return check_manifest(json.loads(Path(path).read_text(encoding="utf-8")))


def write_manifest(path: Path, manifest: dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(manifest, indent=2, sort_keys=True) + "\n", encoding="utf-8")
