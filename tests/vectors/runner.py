"""Runner decoding and validating a sample vector case."""

from typing import Optional

from tvx.core.exceptions import VectorError
from tvx.schema import TestVector, check_json_schema, load_document, parse_test_vector, validate_vector

from .schema import VectorCase


class VectorRunner:
    """Decodes and validates one sample vector, recording the outcome."""

    def __init__(self, case: VectorCase):
        self.case = case
        self.vector: Optional[TestVector] = None

    def run(self) -> str:
        """Return "VALID" or the error code raised by decode/validate."""
        raw = self.case.path.read_bytes()
        try:
            self.vector = parse_test_vector(raw)
            validate_vector(self.vector, strict=False)
        except VectorError as e:
            return e.code
        return "VALID"

    def verify_result(self, outcome: str) -> None:
        """Assert the outcome matches the case expectation."""
        assert outcome == self.case.expected, (
            f"{self.case.id}: expected {self.case.expected}, got {outcome}"
        )
        if outcome == "VALID":
            # Re-encoding a valid vector must decode to an equal document
            again = parse_test_vector(self.vector.to_json())
            assert again == self.vector

    def schema_errors(self) -> list:
        return check_json_schema(load_document(self.case.path.read_bytes()))
