"""Main entry point for drizzle2typeorm CLI tool."""

import logging

import typer
from rich.logging import RichHandler

from cli import __version__
from cli.commands import configure, convert
from cli.commands.inspect import inspect

# Create main app
app = typer.Typer(
    name="drizzle2typeorm",
    help="Convert Drizzle ORM schemas into TypeORM entity schemas",
    no_args_is_help=True,
    add_completion=False,
)

# Add subcommands
app.add_typer(convert.app, name="convert")
app.add_typer(configure.app, name="config")
app.command(name="inspect")(inspect)


def version_callback(show_version: bool) -> None:
    """Show version and exit.

    Args:
        show_version: Whether to show version
    """
    if show_version:
        typer.echo(f"drizzle2typeorm version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Convert Drizzle ORM schemas into TypeORM entity schemas.

    Examples:

        # Convert a local schema folder
        drizzle2typeorm convert local src/db/schema src/entities

        # Fetch a schema folder from Git and convert it
        drizzle2typeorm convert git git@github.com:acme/api.git src/db/schema -o entities

        # Show the extracted entity model
        drizzle2typeorm inspect src/db/schema --pretty

    For detailed help on each command:
        drizzle2typeorm convert --help
        drizzle2typeorm inspect --help
        drizzle2typeorm config --help
    """
    configure_logging(verbose)


if __name__ == "__main__":
    app()
