"""`propres import-props` command.

Imports a Java `.properties` file into a package bundle:
- parses definitions, notes and global notes into a `Bundle`
- preserves the exact source text
- writes a CSV bundle under `packages/<name>/<version>/` (or `--out-dir`)
"""

from __future__ import annotations

from pathlib import Path

import typer

from propres.bundle.io import SOURCE_ENCODING, save_package
from propres.codecs.java_properties import parse_properties_text
from propres.core.errors import PropertiesError


def register(app: typer.Typer) -> None:
    @app.command("import-props")
    def import_props(
        props_path: str = typer.Argument(..., help="Path to a .properties file."),
        name: str = typer.Option(..., "--name", help="Package name (folder under packages/)."),
        version: str = typer.Option(..., "--version", help="Package version (folder under packages/<name>/)."),
        out_dir: str = typer.Option(
            "packages",
            "--out-dir",
            help="Output directory for the created package bundle.",
        ),
        strict: bool = typer.Option(
            False,
            "--strict",
            help="Fail on definition lines without a separator instead of skipping them.",
        ),
    ) -> None:
        """Import a Java `.properties` file into a package bundle."""
        p = Path(props_path)
        skipped: list[int] = []
        try:
            with p.open("r", encoding=SOURCE_ENCODING, newline="") as f:
                source_text = f.read()
            bundle = parse_properties_text(
                source_text,
                strict=strict,
                on_skip=lambda e: skipped.append(e.lineno or 0),
            )
        except (PropertiesError, OSError) as e:
            typer.echo(f"error: {p}: {e}", err=True)
            raise typer.Exit(code=2)

        root = Path(out_dir) / name / version
        save_package(
            root,
            name=name,
            version=version,
            bundle=bundle,
            source_text=source_text,
            strict=strict,
            skipped_lines=skipped,
        )
        if skipped:
            typer.echo(f"warning: skipped {len(skipped)} malformed line(s): {skipped}", err=True)

        typer.echo(str(root))
