"""Main Typer application — imports and registers all CLI commands.

Entry point: ``spork`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import typer

from spork.cli.commands.promote import promote_cmd

app = typer.Typer(
    name="spork",
    help="Spork: promote cookbook versions into chef environments.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(
    name="promote",
    help="Pin ENVIRONMENT to the current (or given) version of COOKBOOK.",
)(promote_cmd)


@app.command(name="version", help="Show the spork version.")
def version_cmd() -> None:
    """Print the installed spork version."""
    from spork import __version__

    typer.echo(__version__)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
