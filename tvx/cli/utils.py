"""Shared helpers for tvx commands."""

import sys
from pathlib import Path
from typing import Union

import typer

from tvx.core import config

# Exit codes
EXIT_SUCCESS = 0
EXIT_PARSE_ERROR = 2
EXIT_VALIDATION_FAILURE = 3


def read_input(source: str, binary: bool = False) -> Union[str, bytes]:
    """Read a document from a file path or '-' for stdin.

    Args:
        source: File path, or '-' to read stdin
        binary: Return bytes instead of str

    Returns:
        Document contents

    Raises:
        typer.BadParameter: If the file does not exist or is too large
    """
    if source == "-":
        data = sys.stdin.buffer.read() if binary else sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            raise typer.BadParameter(f"No such file: {source}")
        data = path.read_bytes() if binary else path.read_text("utf-8")

    if len(data) > config.MAX_DOCUMENT_BYTES:
        raise typer.BadParameter(
            f"Input is {len(data)} bytes, limit is {config.MAX_DOCUMENT_BYTES}"
        )
    return data
