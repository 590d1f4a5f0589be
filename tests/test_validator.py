"""
Unit tests for structural validation of decoded test vectors.
"""

import pytest

from tvx.core import config
from tvx.core.exceptions import (
    ClassVariantMismatch,
    FailureIndexOutOfRange,
    MissingPreconditions,
    StructuralMismatch,
)
from tvx.schema import TestVector, VectorClass, validate_vector
from tvx.schema.validator import (
    check_blockseq_preconditions,
    check_class_variant,
    check_failure_indices,
    check_receipt_count,
)


def _vector(doc) -> TestVector:
    return TestVector.model_validate(doc)


# =============================================================================
# Receipt Count Tests
# =============================================================================


class TestReceiptCount:
    """Tests for the one-receipt-per-message rule."""

    def test_matching_counts_pass(self, message_doc):
        """Two messages with two receipts validate"""
        validate_vector(_vector(message_doc))

    def test_fewer_receipts_fail(self, message_doc):
        """Two messages with one receipt is a StructuralMismatch"""
        message_doc["postconditions"]["receipts"].pop()
        with pytest.raises(StructuralMismatch) as exc_info:
            validate_vector(_vector(message_doc))
        assert exc_info.value.code == "STRUCTURAL_MISMATCH"
        assert "receipts=1, messages=2" in exc_info.value.message

    def test_more_receipts_fail(self, message_doc):
        receipts = message_doc["postconditions"]["receipts"]
        receipts.append(dict(receipts[0]))
        with pytest.raises(StructuralMismatch):
            check_receipt_count(_vector(message_doc))

    def test_missing_postconditions_counts_as_zero(self, message_doc):
        del message_doc["postconditions"]
        with pytest.raises(StructuralMismatch):
            validate_vector(_vector(message_doc))

    def test_tipset_never_checked(self, tipset_doc):
        """Receipt count is unconstrained for tipset vectors"""
        tipset_doc["postconditions"]["receipts"] = [
            {"exit_code": 0, "return": "", "gas_used": 1},
            {"exit_code": 0, "return": "", "gas_used": 2},
            {"exit_code": 1, "return": "", "gas_used": 3},
        ]
        validate_vector(_vector(tipset_doc))

    def test_blockseq_never_checked(self, blockseq_doc):
        blockseq_doc["postconditions"]["receipts"] = [
            {"exit_code": 0, "return": "", "gas_used": 1},
        ]
        validate_vector(_vector(blockseq_doc))

    def test_method_on_vector(self, message_doc):
        message_doc["postconditions"]["receipts"] = []
        with pytest.raises(StructuralMismatch):
            _vector(message_doc).validate_invariants()

    def test_validation_does_not_mutate(self, message_doc):
        vector = _vector(message_doc)
        before = vector.to_dict()
        validate_vector(vector, strict=True)
        assert vector.to_dict() == before


# =============================================================================
# Class / Payload Tests
# =============================================================================


class TestClassVariantCheck:
    """Tests for class/payload agreement on unvalidated vectors."""

    def test_constructed_mismatch_detected(self, message_doc):
        """model_construct() skips decode checks; the validator catches it"""
        good = _vector(message_doc)
        vector = TestVector.model_construct(
            class_=VectorClass.TIPSET,
            apply_messages=good.apply_messages,
            postconditions=good.postconditions,
        )
        with pytest.raises(ClassVariantMismatch) as exc_info:
            check_class_variant(vector)
        assert exc_info.value.code == "CLASS_VARIANT_MISMATCH"

    def test_mismatch_is_structural(self, message_doc):
        good = _vector(message_doc)
        vector = TestVector.model_construct(
            class_=VectorClass.BLOCKSEQ,
            apply_messages=good.apply_messages,
        )
        with pytest.raises(StructuralMismatch):
            validate_vector(vector)

    def test_agreeing_vector_passes(self, blockseq_doc):
        check_class_variant(_vector(blockseq_doc))


# =============================================================================
# Strict Mode Tests
# =============================================================================


class TestStrictMode:
    """Tests for checks only run in strict mode."""

    def test_failure_index_in_range(self, message_doc):
        message_doc["postconditions"]["apply_message_failures"] = [0, 1]
        check_failure_indices(_vector(message_doc))

    @pytest.mark.parametrize("index", [2, 5, -1])
    def test_failure_index_out_of_range(self, message_doc, index):
        message_doc["postconditions"]["apply_message_failures"] = [index]
        with pytest.raises(FailureIndexOutOfRange) as exc_info:
            validate_vector(_vector(message_doc), strict=True)
        assert exc_info.value.code == "FAILURE_INDEX_OUT_OF_RANGE"

    def test_failure_index_ignored_when_lenient(self, message_doc):
        message_doc["postconditions"]["apply_message_failures"] = [9]
        validate_vector(_vector(message_doc), strict=False)

    def test_failure_index_ignored_for_tipsets(self, tipset_doc):
        tipset_doc["postconditions"]["apply_message_failures"] = [9]
        validate_vector(_vector(tipset_doc), strict=True)

    def test_blockseq_requires_genesis(self, blockseq_doc):
        del blockseq_doc["preconditions"]["genesis_ts"]
        with pytest.raises(MissingPreconditions) as exc_info:
            validate_vector(_vector(blockseq_doc), strict=True)
        assert exc_info.value.code == "PRECONDITIONS_MISSING"

    def test_blockseq_without_preconditions(self, blockseq_doc):
        del blockseq_doc["preconditions"]
        with pytest.raises(MissingPreconditions):
            check_blockseq_preconditions(_vector(blockseq_doc))

    def test_blockseq_with_genesis_passes(self, blockseq_doc):
        validate_vector(_vector(blockseq_doc), strict=True)

    def test_strict_default_from_config(self, monkeypatch, blockseq_doc):
        """strict=None falls back to VALIDATION_STRICT at call time"""
        del blockseq_doc["preconditions"]["genesis_ts"]
        vector = _vector(blockseq_doc)

        monkeypatch.setattr(config, "VALIDATION_STRICT", False)
        validate_vector(vector)

        monkeypatch.setattr(config, "VALIDATION_STRICT", True)
        with pytest.raises(MissingPreconditions):
            validate_vector(vector)

    def test_explicit_flag_overrides_config(self, monkeypatch, message_doc):
        monkeypatch.setattr(config, "VALIDATION_STRICT", True)
        message_doc["postconditions"]["apply_message_failures"] = [7]
        validate_vector(_vector(message_doc), strict=False)
