"""Entity model inspection command."""

from pathlib import Path

import typer

from cli.output import error_message, output_document
from core.converter import build_entities
from core.schema.parser import SchemaParseError
from core.sources.local import read_schema_path


def inspect(
    path: Path = typer.Argument(..., help="Schema file or directory", exists=True, resolve_path=True),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file path (default: stdout)", dir_okay=False, resolve_path=True
    ),
    output_format: str | None = typer.Option(None, "--format", "-f", help="Output format: json or yaml"),
    pretty: bool | None = typer.Option(None, "--pretty", help="Pretty-print JSON output"),
) -> None:
    """Show the entity model extracted from schema files.

    Examples:
        # Inspect one file
        drizzle2typeorm inspect src/db/schema/users.ts --pretty

        # Inspect a directory as YAML
        drizzle2typeorm inspect src/db/schema --format yaml
    """
    try:
        from cli.config import get_conversion_defaults, get_output_defaults

        output_defaults = get_output_defaults()
        if output_format is None:
            output_format = output_defaults.format
        if pretty is None:
            pretty = output_defaults.pretty

        files = read_schema_path(path, get_conversion_defaults().source_extension)
        entities = build_entities(files)
        document = {
            "entities": [entity.model_dump(mode="json", exclude_none=True) for entity in entities],
            "count": len(entities),
        }
        output_document(document, output_path=output, output_format=output_format, pretty=pretty)

    except typer.Exit:
        raise
    except SchemaParseError as e:
        error_message(str(e), hint="Fix the syntax error and try again")
        raise typer.Exit(1) from e
    except (FileNotFoundError, ValueError) as e:
        error_message(str(e))
        raise typer.Exit(1) from e
    except Exception as e:
        error_message(f"Failed to inspect schemas: {e}")
        raise typer.Exit(1) from e
