from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from propres import __version__
from propres.cli.main import app
from propres.codecs.java_properties import read_properties

_SOURCE = "# Messages\n\n# start\ngreeting = Hello\nfarewell: Bye\n"


def _write_source(tmp_path: Path) -> Path:
    p = tmp_path / "messages.properties"
    p.write_bytes(_SOURCE.encode("iso-8859-1"))
    return p


def _import(runner: CliRunner, tmp_path: Path) -> Path:
    src = _write_source(tmp_path)
    out_dir = tmp_path / "packages"
    res = runner.invoke(app, ["import-props", str(src), "--name", "demo", "--version", "v0", "--out-dir", str(out_dir)])
    assert res.exit_code == 0, res.output
    return out_dir / "demo" / "v0"


def test_version() -> None:
    res = CliRunner().invoke(app, ["version"])
    assert res.exit_code == 0
    assert res.output.strip() == __version__


def test_import_validate_export(tmp_path: Path) -> None:
    runner = CliRunner()
    root = _import(runner, tmp_path)
    assert (root / "manifest.json").exists()

    res = runner.invoke(app, ["validate", "--path", str(root), "--validate-hashes", "--check-source"])
    assert res.exit_code == 0, res.output
    assert "OK" in res.output

    out = tmp_path / "exported.properties"
    res = runner.invoke(app, ["export-props", "--out", str(out), "--path", str(root)])
    assert res.exit_code == 0, res.output
    assert out.read_text(encoding="iso-8859-1") == "# Messages\n\n# start\ngreeting = Hello\nfarewell = Bye\n"


def test_validate_requires_exactly_one_target(tmp_path: Path) -> None:
    res = CliRunner().invoke(app, ["validate"])
    assert res.exit_code != 0


def test_import_strict_reports_malformed_line(tmp_path: Path) -> None:
    src = tmp_path / "bad.properties"
    src.write_bytes(b"a=1\nbogus\n")
    runner = CliRunner()
    args = ["import-props", str(src), "--name", "demo", "--version", "v0", "--out-dir", str(tmp_path / "pk")]

    assert runner.invoke(app, args).exit_code == 0
    res = runner.invoke(app, args + ["--strict"])
    assert res.exit_code == 2


def test_merge_props_from_json(tmp_path: Path) -> None:
    src = _write_source(tmp_path)
    updates = tmp_path / "fr.json"
    updates.write_text(json.dumps({"greeting": "Bonjour"}), encoding="utf-8")
    out = tmp_path / "messages_fr.properties"

    res = CliRunner().invoke(app, ["merge-props", str(src), "--updates", str(updates), "--out", str(out)])
    assert res.exit_code == 0, res.output
    assert out.read_text(encoding="iso-8859-1") == _SOURCE.replace("Hello", "Bonjour")


def test_merge_props_from_properties(tmp_path: Path) -> None:
    src = _write_source(tmp_path)
    updates = tmp_path / "de.properties"
    updates.write_bytes(b"farewell=Tsch\\u00FCss\n")
    out = tmp_path / "messages_de.properties"

    res = CliRunner().invoke(
        app, ["merge-props", str(src), "--updates", str(updates), "--out", str(out), "--locale", "de"]
    )
    assert res.exit_code == 0, res.output
    assert read_properties(out).to_dict() == {"greeting": "Hello", "farewell": "Tschüss"}
    assert "farewell: Tsch\\u00FCss\n" in out.read_text(encoding="iso-8859-1")


def test_merge_props_rejects_bad_updates(tmp_path: Path) -> None:
    src = _write_source(tmp_path)
    updates = tmp_path / "bad.json"
    updates.write_text("[1, 2]", encoding="utf-8")
    res = CliRunner().invoke(
        app, ["merge-props", str(src), "--updates", str(updates), "--out", str(tmp_path / "o.properties")]
    )
    assert res.exit_code == 2


def test_import_records_skipped_lines_in_manifest(tmp_path: Path) -> None:
    src = tmp_path / "bad.properties"
    src.write_bytes(b"a=1\nbogus\n")
    out_dir = tmp_path / "pk"
    res = CliRunner().invoke(
        app, ["import-props", str(src), "--name", "demo", "--version", "v0", "--out-dir", str(out_dir)]
    )
    assert res.exit_code == 0, res.output
    manifest = json.loads((out_dir / "demo" / "v0" / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["resource"]["import"] == {"strict": False, "skipped_lines": [2]}


def test_import_missing_file_exits_with_message(tmp_path: Path) -> None:
    missing = tmp_path / "missing.properties"
    res = CliRunner().invoke(
        app, ["import-props", str(missing), "--name", "demo", "--version", "v0", "--out-dir", str(tmp_path / "pk")]
    )
    assert res.exit_code == 2
    assert "error:" in res.output
    assert not (tmp_path / "pk").exists()


def test_merge_props_missing_base_exits_with_message(tmp_path: Path) -> None:
    updates = tmp_path / "fr.json"
    updates.write_text(json.dumps({"greeting": "Bonjour"}), encoding="utf-8")
    res = CliRunner().invoke(
        app,
        ["merge-props", str(tmp_path / "nope.properties"), "--updates", str(updates), "--out", str(tmp_path / "o")],
    )
    assert res.exit_code == 2
    assert "error:" in res.output
