"""`propres export-props` command.

Writes the bundle stored in a package as a `.properties` file: entries in
sequence-number order, notes as comments, long values folded at 80 columns.
"""

from __future__ import annotations

from typing import Optional

import typer

from propres.bundle.io import load_package
from propres.codecs.java_properties import write_properties

from propres.cli.commands._package_ref import resolve_root


def register(app: typer.Typer) -> None:
    @app.command("export-props")
    def export_props(
        out: str = typer.Option(..., "--out", help="Output .properties file path."),
        path: Optional[str] = typer.Option(None, "--path", help="Path to a package root (packages/<name>/<version>)."),
        package: Optional[str] = typer.Option(None, "--package", help="Package reference name@version."),
        locale: str = typer.Option("en", "--locale", help="Locale used for word breaking when folding lines."),
    ) -> None:
        """Export a package bundle as a `.properties` file."""
        try:
            root = resolve_root(path=path, package=package)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e

        pkg = load_package(root)
        write_properties(out, pkg.bundle, locale=locale)

        typer.echo(out)
