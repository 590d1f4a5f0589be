# tvx - Portable VM conformance test vector schema

from tvx.core.config import HINT_INCORRECT, HINT_NEGATE
from tvx.core.exceptions import (
    ClassVariantMismatch,
    MalformedEncoding,
    ParseError,
    StructuralMismatch,
    VectorError,
)
from tvx.schema import (
    TestVector,
    VectorClass,
    dump_test_vector,
    parse_test_vector,
    validate_vector,
)

__version__ = "0.1.0"

__all__ = [
    "HINT_INCORRECT",
    "HINT_NEGATE",
    "TestVector",
    "VectorClass",
    "parse_test_vector",
    "dump_test_vector",
    "validate_vector",
    "VectorError",
    "MalformedEncoding",
    "StructuralMismatch",
    "ClassVariantMismatch",
    "ParseError",
]
