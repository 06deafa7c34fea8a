"""Configuration file commands."""

import typer

from cli.output import error_message, format_yaml, success_message

app = typer.Typer(help="Manage the drizzle2typeorm config file")


@app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Create a config file with default settings."""
    from cli.config import init_config

    try:
        path = init_config(force=force)
        success_message(f"Config written to {path}")
    except FileExistsError as e:
        error_message(str(e), hint="Use --force to overwrite it")
        raise typer.Exit(1) from e


@app.command("show")
def config_show() -> None:
    """Show the effective configuration and report problems."""
    from cli.config import get_config_path, load_config, validate_config

    try:
        config = load_config()
    except ValueError as e:
        error_message(str(e))
        raise typer.Exit(1) from e

    typer.echo(f"# {get_config_path()}")
    typer.echo(format_yaml(config.model_dump()))

    errors = validate_config(config)
    for error in errors:
        error_message(error)
    if errors:
        raise typer.Exit(1)
