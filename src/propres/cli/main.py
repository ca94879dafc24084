"""propres CLI entrypoint."""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="propres",
    add_completion=False,
    no_args_is_help=True,
    help="Java properties resource codec command line interface.",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """propres CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("version")
def version() -> None:
    """Print the installed propres version."""
    from propres import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `propres --help` is fast.
    """
    from propres.cli.commands import export_props as export_props_cmd
    from propres.cli.commands import import_props as import_props_cmd
    from propres.cli.commands import merge_props as merge_props_cmd
    from propres.cli.commands import validate_pkg as validate_pkg_cmd

    import_props_cmd.register(app)
    export_props_cmd.register(app)
    merge_props_cmd.register(app)
    validate_pkg_cmd.register(app)


_register_commands()
