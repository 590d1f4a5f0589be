"""Test vector JSON decoding and encoding.

Decoding maps pydantic validation failures onto the vector error kinds:
- Binary/duration fields that fail to decode -> MalformedEncoding
- Class tag disagreeing with the payload     -> ClassVariantMismatch
- Anything else (bad JSON, missing fields)   -> ParseError

A failed decode never returns a partially populated document.
"""

import json
import logging
from typing import Any, Dict, List, Union

from pydantic import ValidationError

from tvx.core.exceptions import (
    ClassVariantMismatch,
    MalformedEncoding,
    ParseError,
    VectorError,
)

from .encoding import MALFORMED_ENCODING_ERROR
from .models import CLASS_VARIANT_ERROR, TestVector

log = logging.getLogger(__name__)


def _describe(error: Dict[str, Any]) -> str:
    path = ".".join(str(p) for p in error["loc"])
    return f"{path}: {error['msg']}" if path else error["msg"]


def _map_validation_error(exc: ValidationError) -> VectorError:
    """Translate a pydantic ValidationError into a vector error.

    Encoding errors take precedence over everything else, then class/payload
    disagreement, then generic shape errors.
    """
    errors = exc.errors(include_url=False)

    encoding = [e for e in errors if e["type"] == MALFORMED_ENCODING_ERROR]
    if encoding:
        return MalformedEncoding("; ".join(_describe(e) for e in encoding))

    variant = [e for e in errors if e["type"] == CLASS_VARIANT_ERROR]
    if variant:
        return ClassVariantMismatch(variant[0]["msg"])

    return ParseError("; ".join(_describe(e) for e in errors))


def load_document(raw: Union[bytes, str]) -> Any:
    """Parse JSON text without interpreting it as a vector.

    Raises:
        ParseError: If raw is not valid JSON
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Invalid JSON: {e}") from e


def vector_from_dict(data: Any) -> TestVector:
    """Build a TestVector from an already-parsed JSON object.

    Args:
        data: Object parsed from JSON

    Returns:
        Decoded TestVector

    Raises:
        ParseError: If data is not an object or has the wrong shape
        MalformedEncoding: If a base64 or millisecond field is invalid
        ClassVariantMismatch: If class and populated payload disagree
    """
    if not isinstance(data, dict):
        raise ParseError(f"Test vector must be object, got {type(data).__name__}")
    try:
        vector = TestVector.model_validate(data)
    except ValidationError as e:
        raise _map_validation_error(e) from e
    log.debug("decoded test vector", extra={"vector_id": vector.id})
    return vector


def parse_test_vector(raw: Union[bytes, str]) -> TestVector:
    """Decode a test vector from JSON text.

    Args:
        raw: JSON document as bytes or str

    Returns:
        Decoded TestVector

    Raises:
        ParseError: If raw is not JSON or has the wrong shape
        MalformedEncoding: If a base64 or millisecond field is invalid
        ClassVariantMismatch: If class and populated payload disagree
    """
    return vector_from_dict(load_document(raw))


def parse_test_vectors(raw: Union[bytes, str]) -> List[TestVector]:
    """Decode one vector object or an array of vector objects."""
    data = load_document(raw)
    if isinstance(data, list):
        return [vector_from_dict(item) for item in data]
    return [vector_from_dict(data)]


def dump_test_vector(vector: TestVector, indent: int = None) -> str:
    """Encode a test vector to JSON text."""
    return vector.to_json(indent=indent)
