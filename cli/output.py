"""Output formatting utilities for CLI."""

import json
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax

console = Console()


def format_json(data: Any, pretty: bool = False) -> str:
    """Format data as JSON.

    Args:
        data: Data to format
        pretty: Whether to pretty-print with indentation

    Returns:
        JSON string
    """
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def format_yaml(data: Any) -> str:
    """Format data as YAML.

    Args:
        data: Data to format

    Returns:
        YAML string
    """
    result = yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return str(result) if result is not None else ""


def output_document(
    data: Any,
    output_path: Path | None = None,
    output_format: str = "json",
    pretty: bool = False,
) -> None:
    """Output a document to file or stdout.

    Args:
        data: JSON-serializable data
        output_path: Output file path (None = stdout)
        output_format: Output format (json or yaml)
        pretty: Whether to pretty-print JSON
    """
    match output_format:
        case "yaml":
            output_str = format_yaml(data)
        case "json":
            output_str = format_json(data, pretty=pretty)
        case _:
            typer.secho(f"✗ Error: Unknown output format: {output_format}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output_str, encoding="utf-8")
        typer.secho(f"✓ Written to {output_path}", fg=typer.colors.GREEN)
    else:
        console.print(Syntax(output_str, output_format, theme="monokai", line_numbers=False))


def preview_modules(outputs: dict[str, str]) -> None:
    """Print generated modules with syntax highlighting instead of writing them."""
    for file_name, content in outputs.items():
        console.rule(Path(file_name).name)
        console.print(Syntax(content, "javascript", theme="monokai", line_numbers=False))


def error_message(message: str, hint: str | None = None) -> None:
    """Print error message.

    Args:
        message: Error message
        hint: Optional hint for user
    """
    typer.secho(f"✗ Error: {message}", fg=typer.colors.RED, err=True)
    if hint:
        typer.secho(f"  Hint: {hint}", fg=typer.colors.YELLOW, err=True)


def success_message(message: str) -> None:
    """Print success message.

    Args:
        message: Success message
    """
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN)
