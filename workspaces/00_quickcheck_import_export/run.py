"""Quickcheck workspace: import -> package -> export -> reimport -> compare.

This workspace is self-contained (no repo-level assets required). It parses a
small synthetic `.properties` fixture, writes a package bundle under
`workspaces/00_quickcheck_import_export/outputs/packages/<name>/<version>/`,
exports a `.properties` file from the loaded package, re-imports it, and writes
a JSON report.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from propres.bundle.io import load_package, save_package
from propres.codecs.java_properties import parse_properties_text, read_properties, write_properties
from propres.core.tables import entries_frame


def _fixture_properties_text() -> str:
    return "\n".join(
        [
            "# Demo resource bundle",
            "# Maintained by the docs team",
            "",
            "# Window title",
            "app.title = Demo Application",
            "app.greeting: Hello, world!",
            "app.farewell Good\\u00EFbye",
            "",
            "# Shown on the about page",
            "about.text = This application demonstrates how long values are folded \\",
            "    across several lines when they are written back out.",
            "path.home = C:\\\\Users\\\\demo",
            "empty.value =",
        ]
    ) + "\n"


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main() -> None:
    here = Path(__file__).resolve().parent
    outputs = here / "outputs"
    outputs.mkdir(parents=True, exist_ok=True)

    pkg_name = "demo-strings"
    pkg_version = "v0"
    pkg_root = outputs / "packages" / pkg_name / pkg_version

    src_text = _fixture_properties_text()
    bundle1 = parse_properties_text(src_text)
    save_package(pkg_root, name=pkg_name, version=pkg_version, bundle=bundle1, source_text=src_text)

    export_path = outputs / "export.properties"
    loaded = load_package(pkg_root, validate_hashes=True)
    write_properties(export_path, loaded.bundle)

    bundle2 = read_properties(export_path)

    ok_entries = True
    try:
        pd.testing.assert_frame_equal(entries_frame(bundle2), entries_frame(bundle1))
    except AssertionError:
        ok_entries = False

    ok_global = bundle2.global_notes == bundle1.global_notes

    report = {
        "package_root": str(pkg_root),
        "export_path": str(export_path),
        "entries_equal": ok_entries,
        "global_notes_equal": ok_global,
        "entry_count": len(bundle2),
        "keys": bundle2.keys(),
    }
    _write_json(outputs / "roundtrip_report.json", report)

    if not (ok_entries and ok_global):
        raise SystemExit("roundtrip failed; see outputs/roundtrip_report.json")


if __name__ == "__main__":
    main()
