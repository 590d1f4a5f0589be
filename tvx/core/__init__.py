# tvx Core - Shared configuration, exceptions, and logging

from tvx.core.exceptions import (
    VectorError,
    MalformedEncoding,
    StructuralMismatch,
    ClassVariantMismatch,
    FailureIndexOutOfRange,
    MissingPreconditions,
    ParseError,
    SchemaViolation,
)
from tvx.core.logging import configure_logging, JsonFormatter

__all__ = [
    "VectorError",
    "MalformedEncoding",
    "StructuralMismatch",
    "ClassVariantMismatch",
    "FailureIndexOutOfRange",
    "MissingPreconditions",
    "ParseError",
    "SchemaViolation",
    "configure_logging",
    "JsonFormatter",
]
