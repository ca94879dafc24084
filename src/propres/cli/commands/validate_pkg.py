"""`propres validate` command.

Validates a package bundle on disk:
- loads the entries table via propres.bundle.io.load_package()
  (rebuilding the Bundle enforces unique keys and positive sequence numbers)
- optionally validates manifest sha256 hashes
- optionally checks that the stored source still parses to the same entries
"""

from __future__ import annotations

from typing import Optional

import typer

from propres.bundle.io import load_package
from propres.codecs.java_properties import parse_properties_text

from propres.cli.commands._package_ref import resolve_root


def register(app: typer.Typer) -> None:
    @app.command("validate")
    def validate(
        path: Optional[str] = typer.Option(None, "--path", help="Path to a package root (packages/<name>/<version>)."),
        package: Optional[str] = typer.Option(None, "--package", help="Package reference name@version."),
        validate_hashes: bool = typer.Option(False, "--validate-hashes", help="Recompute sha256 and compare to manifest."),
        check_source: bool = typer.Option(
            False,
            "--check-source",
            help="Re-parse raw/source.properties and compare with the entries table.",
        ),
    ) -> None:
        """Validate a propres package bundle."""
        try:
            root = resolve_root(path=path, package=package)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e

        try:
            pkg = load_package(root, validate_hashes=validate_hashes)
        except ValueError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=2)

        if check_source:
            reparsed = parse_properties_text(pkg.source_text)
            if reparsed.to_dict() != pkg.bundle.to_dict():
                typer.echo("error: entries table does not match raw/source.properties", err=True)
                raise typer.Exit(code=2)

        typer.echo("OK")
