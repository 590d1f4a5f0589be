"""Test vector exceptions.

Contains the failure kinds surfaced by decoding and validation:
- MalformedEncoding for binary/duration fields that cannot be decoded
- StructuralMismatch hierarchy for cross-field invariant violations
- ParseError / SchemaViolation for documents of the wrong shape

Every exception carries a stable ``code`` so callers (drivers, the CLI)
can report failures without matching on message text.
"""


class VectorError(Exception):
    """Base exception for test vector errors.

    Attributes:
        code: Error code string for categorization
        message: Human-readable error message
    """

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


# =============================================================================
# Encoding Exceptions
# =============================================================================

class MalformedEncoding(VectorError):
    """A binary-as-text or millisecond field could not be decoded.

    Used when:
    - Text is not valid standard base64
    - A duration is negative, fractional or not a number
    """

    def __init__(self, message: str = "Malformed field encoding"):
        super().__init__("MALFORMED_ENCODING", message)


# =============================================================================
# Structural Exceptions
# =============================================================================

class StructuralMismatch(VectorError):
    """The decoded document violates a cross-field invariant.

    The base rule: for class ``message`` the number of postcondition
    receipts must equal the number of applied messages.
    """

    def __init__(
        self,
        message: str = "Structural mismatch",
        code: str = "STRUCTURAL_MISMATCH",
    ):
        super().__init__(code, message)


class ClassVariantMismatch(StructuralMismatch):
    """The class tag and the populated apply field disagree."""

    def __init__(self, message: str = "Class does not match populated payload"):
        super().__init__(message, code="CLASS_VARIANT_MISMATCH")


class FailureIndexOutOfRange(StructuralMismatch):
    """An apply_message_failures index does not name an applied message.

    Only raised by strict validation.
    """

    def __init__(self, message: str = "Message failure index out of range"):
        super().__init__(message, code="FAILURE_INDEX_OUT_OF_RANGE")


class MissingPreconditions(StructuralMismatch):
    """A precondition required by the vector class is absent.

    Only raised by strict validation.
    """

    def __init__(self, message: str = "Required preconditions missing"):
        super().__init__(message, code="PRECONDITIONS_MISSING")


# =============================================================================
# Document Exceptions
# =============================================================================

class ParseError(VectorError):
    """Document is not JSON or a field has the wrong shape.

    Used when:
    - Invalid JSON
    - Missing required fields
    - Unexpected data types
    """

    def __init__(self, message: str = "Test vector parse failed"):
        super().__init__("VECTOR_PARSE_FAILED", message)


class SchemaViolation(VectorError):
    """Document does not conform to the bundled JSON Schema.

    Attributes:
        errors: Individual schema error messages
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        summary = errors[0] if errors else "unknown schema error"
        if len(errors) > 1:
            summary = f"{summary} (+{len(errors) - 1} more)"
        super().__init__("SCHEMA_VIOLATION", f"JSON Schema check failed: {summary}")
