"""Test vector documents against the bundled JSON Schema.

The schema (schema.json, Draft 7) describes the wire shape only. It allows
unknown properties everywhere, so newer documents still pass. Cross-field
rules stay in the validator module.
"""

import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List

from jsonschema import Draft7Validator

from tvx.core.exceptions import SchemaViolation

log = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def load_json_schema() -> Dict[str, Any]:
    """Load the bundled test vector JSON Schema."""
    text = resources.files("tvx.schema").joinpath("schema.json").read_text("utf-8")
    return json.loads(text)


def check_json_schema(document: Dict[str, Any], max_errors: int = 10) -> List[str]:
    """Validate a wire-form document against the JSON Schema.

    Args:
        document: Object parsed from JSON (not a TestVector)
        max_errors: Maximum validation errors to collect

    Returns:
        List of validation errors (empty if valid)
    """
    validator = Draft7Validator(load_json_schema())
    errors: List[str] = []
    for error in sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path]):
        path = "/".join(str(p) for p in error.absolute_path) or "<root>"
        errors.append(f"{path}: {error.message}")
        if len(errors) >= max_errors:
            break
    if errors:
        log.debug("schema check failed", extra={"code": "SCHEMA_VIOLATION"})
    return errors


def assert_json_schema(document: Dict[str, Any]) -> None:
    """Raise SchemaViolation unless the document matches the JSON Schema."""
    errors = check_json_schema(document)
    if errors:
        raise SchemaViolation(errors)
