"""Schema conversion commands."""

import subprocess
from pathlib import Path

import typer

from cli.output import error_message, preview_modules, success_message
from core.converter import convert_schemas
from core.pipeline import convert_local_schemas, fetch_and_convert_schemas
from core.schema.parser import SchemaParseError
from core.sources.git import SubfolderNotFoundError
from core.sources.local import read_schema_files

app = typer.Typer(help="Convert Drizzle schema files into TypeORM entity schemas")


@app.command("local")
def convert_local(
    input_dir: Path = typer.Argument(
        ..., help="Directory containing schema files", exists=True, file_okay=False, resolve_path=True
    ),
    output_dir: Path | None = typer.Argument(
        None, help="Directory for generated modules (default: from config)", file_okay=False, resolve_path=True
    ),
    source_extension: str | None = typer.Option(None, "--source-ext", help="Schema file extension (default: .ts)"),
    output_extension: str | None = typer.Option(None, "--output-ext", help="Generated file extension (default: .js)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print generated modules instead of writing them"),
) -> None:
    """Convert the schema files of a local directory.

    Input files are left untouched.

    Example:
        drizzle2typeorm convert local src/db/schema src/entities
    """
    try:
        from cli.config import get_conversion_defaults, get_output_defaults

        conversion_defaults = get_conversion_defaults()
        if source_extension is None:
            source_extension = conversion_defaults.source_extension
        if output_extension is None:
            output_extension = conversion_defaults.output_extension
        if output_dir is None:
            output_dir = Path(get_output_defaults().directory).resolve()

        if dry_run:
            outputs = convert_schemas(read_schema_files(input_dir, source_extension), output_extension)
            preview_modules(outputs)
            return

        summary = convert_local_schemas(input_dir, output_dir, source_extension, output_extension)
        if summary.files_converted == 0:
            error_message(f"No {source_extension} files found in {input_dir}")
            raise typer.Exit(1)
        success_message(f"Converted {summary.files_converted} local file(s) into {output_dir}")

    except typer.Exit:
        raise
    except SchemaParseError as e:
        error_message(str(e), hint="Fix the syntax error; no files were written")
        raise typer.Exit(1) from e
    except ValueError as e:
        error_message(str(e), hint="Check your config file")
        raise typer.Exit(1) from e
    except Exception as e:
        error_message(f"Failed to convert schemas: {e}")
        raise typer.Exit(1) from e


@app.command("git")
def convert_git(
    repo: str = typer.Argument(..., help="Repository URL, or @name of a configured repository"),
    subfolder: str | None = typer.Argument(None, help="Folder inside the repository (default: from config)"),
    output_dir: Path | None = typer.Option(
        None, "--output", "-o", help="Directory for generated modules (default: from config)", resolve_path=True
    ),
    source_extension: str | None = typer.Option(None, "--source-ext", help="Schema file extension (default: .ts)"),
    output_extension: str | None = typer.Option(None, "--output-ext", help="Generated file extension (default: .js)"),
) -> None:
    """Fetch a schema folder from a Git repository and convert it in place.

    The output directory is replaced by the fetched files; the fetched schema
    files are deleted once converted.

    Example:
        drizzle2typeorm convert git git@github.com:acme/api.git src/db/schema -o entities
    """
    try:
        from cli.config import get_conversion_defaults, get_output_defaults, resolve_repository

        repo_url, subfolder = resolve_repository(repo, subfolder)
        if not subfolder:
            error_message("No subfolder given", hint="Pass SUBFOLDER or configure it for the repository")
            raise typer.Exit(1)

        conversion_defaults = get_conversion_defaults()
        if source_extension is None:
            source_extension = conversion_defaults.source_extension
        if output_extension is None:
            output_extension = conversion_defaults.output_extension
        if output_dir is None:
            output_dir = Path(get_output_defaults().directory).resolve()

        summary = fetch_and_convert_schemas(repo_url, subfolder, output_dir, source_extension, output_extension)
        if summary.files_converted == 0:
            error_message(f"No {source_extension} files found in {subfolder}")
            raise typer.Exit(1)
        success_message(f"Converted {summary.files_converted} file(s) from Git into {output_dir}")

    except typer.Exit:
        raise
    except KeyError as e:
        error_message(str(e.args[0]), hint="Add the repository to your config file")
        raise typer.Exit(1) from e
    except SubfolderNotFoundError as e:
        error_message(str(e), hint="Check the subfolder path inside the repository")
        raise typer.Exit(1) from e
    except subprocess.CalledProcessError as e:
        error_message(f"git failed: {(e.stderr or '').strip() or e}", hint="Check the repository URL and access")
        raise typer.Exit(1) from e
    except SchemaParseError as e:
        error_message(str(e), hint="Fix the syntax error; no files were written")
        raise typer.Exit(1) from e
    except ValueError as e:
        error_message(str(e), hint="Check your config file")
        raise typer.Exit(1) from e
    except Exception as e:
        error_message(f"Failed to convert schemas: {e}")
        raise typer.Exit(1) from e
