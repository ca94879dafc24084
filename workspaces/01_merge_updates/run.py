"""Workspace 01: format-preserving merge of translated values.

This workspace is self-contained (no repo-level assets required). It:
1) writes a synthetic base file to outputs/base.properties (CRLF line endings)
2) loads updates from outputs/updates.json
3) merges them into outputs/merged.properties
4) re-imports the merged file and checks that updated keys carry the new values
   and that every line of the base file outside the updated definitions is unchanged

On failure it writes outputs/merge_report.json and exits non-zero.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from propres.codecs.java_properties import merge_properties_file, read_properties


def _fixture_base_text() -> str:
    return "\r\n".join(
        [
            "# Checkout strings",
            "",
            "checkout.title=Checkout",
            "  # indented comment",
            "checkout.note : Orders placed after noon ship \\",
            "    the next business day.",
            "checkout.button = Pay now",
            "",
        ]
    )


def _fixture_updates() -> dict[str, str]:
    return {
        "checkout.title": "Kasse",
        "checkout.note": "Bestellungen, die nach 12 Uhr eingehen, werden am nächsten Werktag "
        "versendet. Bitte beachten Sie die Feiertage in Ihrem Bundesland.",
        "checkout.missing": "not in the base file",
    }


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False) + "\n", encoding="utf-8")


def main() -> None:
    here = Path(__file__).resolve().parent
    outputs = here / "outputs"
    outputs.mkdir(parents=True, exist_ok=True)

    base_path = outputs / "base.properties"
    base_path.write_bytes(_fixture_base_text().encode("iso-8859-1"))

    updates_path = outputs / "updates.json"
    _write_json(updates_path, _fixture_updates())
    updates = json.loads(updates_path.read_text(encoding="utf-8"))

    merged_path = outputs / "merged.properties"
    merge_properties_file(base_path, merged_path, updates)

    merged = read_properties(merged_path)
    merged_lines = merged_path.read_bytes().decode("iso-8859-1").splitlines(keepends=True)
    base_lines = base_path.read_bytes().decode("iso-8859-1").splitlines(keepends=True)

    values = merged.to_dict()
    wrong_values = {k: values[k] for k, v in updates.items() if k in values and values[k] != v}
    missing_lines = [
        line
        for line in base_lines
        if not line.lstrip().startswith(("checkout.title", "checkout.note", "the next"))
        and line not in merged_lines
    ]
    ok = not wrong_values and not missing_lines and "checkout.missing" not in merged

    report = {
        "merged_path": str(merged_path),
        "ok": ok,
        "wrong_values": wrong_values,
        "lines_lost": missing_lines,
        "keys": merged.keys(),
    }
    _write_json(outputs / "merge_report.json", report)

    if not ok:
        raise SystemExit("merge check failed; see outputs/merge_report.json")


if __name__ == "__main__":
    main()
