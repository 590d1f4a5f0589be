"""Output formatting for tvx commands."""

import json
from enum import Enum
from typing import Any

import typer


class OutputFormat(str, Enum):
    """Output format for command results."""

    json = "json"
    text = "text"


def _text_lines(value: Any, indent: int = 0) -> list[str]:
    pad = "  " * indent
    lines: list[str] = []
    if isinstance(value, dict):
        for key, item in value.items():
            if isinstance(item, (dict, list)) and item:
                lines.append(f"{pad}{key}:")
                lines.extend(_text_lines(item, indent + 1))
            else:
                lines.append(f"{pad}{key}: {item}")
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, (dict, list)):
                lines.append(f"{pad}-")
                lines.extend(_text_lines(item, indent + 1))
            else:
                lines.append(f"{pad}- {item}")
    else:
        lines.append(f"{pad}{value}")
    return lines


def output(result: Any, format: OutputFormat = OutputFormat.json) -> None:
    """Print a command result in the requested format."""
    if format == OutputFormat.json:
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        typer.echo("\n".join(_text_lines(result)))


def output_error(
    code: str,
    message: str,
    exit_code: int,
    format: OutputFormat = OutputFormat.json,
) -> None:
    """Print an error and exit with the given code."""
    output({"error": {"code": code, "message": message}}, format)
    raise typer.Exit(exit_code)
