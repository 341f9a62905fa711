"""CLI commands for scripture-engine."""

import typer

from scripture_engine.cli.reader import app as reader_app

main_app = typer.Typer(
    name="scripture-engine",
    help="Scripture Engine CLI",
    no_args_is_help=True,
)
main_app.add_typer(reader_app, name="reader")


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
