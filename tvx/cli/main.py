"""tvx command line.

Commands:
    tvx validate <path>...   Decode and validate vectors (files or directories)
    tvx inspect <path>       Summarize a single vector
    tvx schema               Print the bundled JSON Schema
"""

import logging
from typing import Any, List, Optional

import typer

from tvx.cli.output import OutputFormat, output, output_error
from tvx.cli.utils import (
    EXIT_PARSE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILURE,
    read_input,
)
from tvx.core.exceptions import StructuralMismatch, VectorError
from tvx.core.logging import configure_logging
from tvx.schema import (
    TestVector,
    VectorClass,
    assert_json_schema,
    iter_vector_paths,
    load_document,
    load_json_schema,
    read_vector_bytes,
    validate_vector,
    vector_from_dict,
)

log = logging.getLogger(__name__)

app = typer.Typer(
    name="tvx",
    help="Decode, validate and inspect VM conformance test vectors.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (defaults to TVX_LOG_LEVEL or INFO)",
    ),
) -> None:
    """Configure logging for every command."""
    configure_logging(log_level=log_level)


def _check_document(raw: bytes, strict: Optional[bool], schema: bool) -> TestVector:
    """Decode, optionally schema-check, and validate one document."""
    document = load_document(raw)
    if schema:
        assert_json_schema(document)
    vector = vector_from_dict(document)
    validate_vector(vector, strict=strict)
    return vector


@app.command("validate")
def validate_cmd(
    paths: List[str] = typer.Argument(
        ...,
        help="Vector files or directories (walked for *.json)",
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--no-strict",
        help="Enable strict checks (defaults to TVX_VALIDATION_STRICT)",
    ),
    schema: bool = typer.Option(
        False,
        "--schema",
        help="Also check each document against the JSON Schema",
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.json,
        "--format",
        "-f",
        help="Output format",
    ),
) -> None:
    """Validate test vectors.

    Exit codes: 0 all valid, 2 a document could not be decoded,
    3 a decoded document violates a structural invariant.

    Examples:
        tvx validate corpus/
        tvx validate vector.json --strict --schema
    """
    try:
        files = list(iter_vector_paths(paths))
    except VectorError as e:
        output_error(code=e.code, message=e.message, exit_code=EXIT_PARSE_ERROR, format=format)
        return

    results: list[dict[str, Any]] = []
    exit_code = EXIT_SUCCESS
    for path in files:
        entry: dict[str, Any] = {"path": str(path), "valid": True}
        try:
            vector = _check_document(read_vector_bytes(path), strict, schema)
            entry["id"] = vector.id
            entry["class"] = vector.class_.value
        except StructuralMismatch as e:
            entry["valid"] = False
            entry["error"] = {"code": e.code, "message": e.message}
            if exit_code == EXIT_SUCCESS:
                exit_code = EXIT_VALIDATION_FAILURE
        except VectorError as e:
            entry["valid"] = False
            entry["error"] = {"code": e.code, "message": e.message}
            exit_code = EXIT_PARSE_ERROR
        if not entry["valid"]:
            log.debug("vector rejected", extra={"path": str(path), "code": entry["error"]["code"]})
        results.append(entry)

    output(
        {
            "valid": exit_code == EXIT_SUCCESS,
            "total": len(results),
            "failed": sum(1 for r in results if not r["valid"]),
            "results": results,
        },
        format,
    )
    if exit_code != EXIT_SUCCESS:
        raise typer.Exit(exit_code)


def _summarize(vector: TestVector) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "id": vector.id,
        "class": vector.class_.value,
        "hints": list(vector.hints or []),
        "selector": dict(vector.selector or {}),
        "car_bytes": len(vector.car),
        "receipts": len(vector.receipts),
    }
    if vector.class_ == VectorClass.MESSAGE:
        summary["messages"] = len(vector.apply_messages)
    elif vector.class_ == VectorClass.TIPSET:
        summary["tipsets"] = len(vector.apply_tipsets)
        summary["blocks"] = sum(len(ts.blocks or []) for ts in vector.apply_tipsets)
    else:
        summary["blocks"] = len(vector.apply_blockseq.blocks)
        summary["message_repo"] = len(vector.apply_blockseq.message_repo)
    pre = vector.preconditions
    if pre is not None:
        summary["epoch"] = pre.epoch
        if pre.blockseq is not None and pre.blockseq.genesis_ts is not None:
            summary["genesis_ts"] = pre.blockseq.genesis_ts.isoformat()
    return summary


@app.command("inspect")
def inspect_cmd(
    source: str = typer.Argument(
        ...,
        help="Vector file path, or '-' for stdin",
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.json,
        "--format",
        "-f",
        help="Output format",
    ),
) -> None:
    """Summarize a test vector without validating it.

    Examples:
        tvx inspect vector.json
        cat vector.json | tvx inspect - --format text
    """
    raw = read_input(source, binary=True)
    try:
        vector = vector_from_dict(load_document(raw))
    except VectorError as e:
        output_error(code=e.code, message=e.message, exit_code=EXIT_PARSE_ERROR, format=format)
        return

    output(_summarize(vector), format)


@app.command("schema")
def schema_cmd() -> None:
    """Print the bundled JSON Schema for test vectors."""
    output(load_json_schema(), OutputFormat.json)


if __name__ == "__main__":
    app()
