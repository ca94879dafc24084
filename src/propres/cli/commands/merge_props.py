"""`propres merge-props` command.

Writes updated values into an existing `.properties` file while keeping every
other line byte-for-byte. Updates come from either:
- a JSON object `{"key": "new value", ...}` (`.json` suffix), or
- another `.properties` file (its parsed key/value pairs)
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from propres.codecs.java_properties import merge_properties_file, read_properties
from propres.core.errors import PropertiesError


def _load_updates(path: Path) -> dict[str, str]:
    if path.suffix.lower() == ".json":
        obj = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(obj, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in obj.items()):
            raise ValueError(f"{path}: expected a JSON object of string -> string")
        return obj
    return read_properties(path).to_dict()


def register(app: typer.Typer) -> None:
    @app.command("merge-props")
    def merge_props(
        base: str = typer.Argument(..., help="Base .properties file whose layout is preserved."),
        updates: str = typer.Option(..., "--updates", help="Updated values: a .json object or a .properties file."),
        out: str = typer.Option(..., "--out", help="Output .properties file path (may equal the base)."),
        locale: str = typer.Option("en", "--locale", help="Locale used for word breaking when folding lines."),
    ) -> None:
        """Merge updated values into a `.properties` file."""
        try:
            update_map = _load_updates(Path(updates))
            merge_properties_file(base, out, update_map, locale=locale)
        except (PropertiesError, ValueError, OSError) as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=2)

        typer.echo(out)
