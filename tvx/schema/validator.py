"""Structural validation of decoded test vectors.

Validates:
- Class tag agrees with the populated apply payload
- For class ``message``, one postcondition receipt per applied message

Strict mode (``strict=True`` or TVX_VALIDATION_STRICT=true) also checks:
- apply_message_failures indices name an applied message
- blockseq vectors declare a genesis timestamp

Validation is a pure read-only pass; it never mutates the vector.
CAR referential completeness is left to the archive reader.
"""

import logging
from typing import Optional

from tvx.core import config
from tvx.core.exceptions import (
    ClassVariantMismatch,
    FailureIndexOutOfRange,
    MissingPreconditions,
    StructuralMismatch,
)

from .models import TestVector, VectorClass, class_variant_problem

log = logging.getLogger(__name__)


def check_class_variant(vector: TestVector) -> None:
    """Check the class tag selects the one populated payload.

    Decoding already enforces this; the check also covers vectors built
    with model_construct(), which skips validation.

    Raises:
        ClassVariantMismatch: If class and payload disagree
    """
    problem = class_variant_problem(vector)
    if problem:
        raise ClassVariantMismatch(problem)


def check_receipt_count(vector: TestVector) -> None:
    """Check a message vector has one receipt per applied message.

    Tipset and blockseq vectors are never rejected by this rule.

    Raises:
        StructuralMismatch: If the counts differ
    """
    if vector.class_ != VectorClass.MESSAGE:
        return
    messages = len(vector.apply_messages or [])
    receipts = len(vector.receipts)
    if receipts != messages:
        raise StructuralMismatch(
            "length of postcondition receipts must match length of messages "
            f"to apply (receipts={receipts}, messages={messages})"
        )


def check_failure_indices(vector: TestVector) -> None:
    """Check apply_message_failures only names applied messages.

    Only message vectors are checked; for tipsets the index space is
    driver-defined.

    Raises:
        FailureIndexOutOfRange: If an index is negative or too large
    """
    if vector.class_ != VectorClass.MESSAGE or vector.postconditions is None:
        return
    count = len(vector.apply_messages or [])
    for index in vector.postconditions.apply_message_failures or []:
        if not 0 <= index < count:
            raise FailureIndexOutOfRange(
                f"apply_message_failures index {index} outside 0..{count - 1}"
            )


def check_blockseq_preconditions(vector: TestVector) -> None:
    """Check a blockseq vector declares its genesis timestamp.

    Raises:
        MissingPreconditions: If genesis_ts is absent
    """
    if vector.class_ != VectorClass.BLOCKSEQ:
        return
    pre = vector.preconditions
    if pre is None or pre.blockseq is None or pre.blockseq.genesis_ts is None:
        raise MissingPreconditions("blockseq vector requires preconditions.genesis_ts")


def validate_vector(vector: TestVector, strict: Optional[bool] = None) -> None:
    """Validate cross-field invariants of a decoded vector.

    Args:
        vector: Fully decoded vector
        strict: Enable the strict checks; defaults to VALIDATION_STRICT

    Raises:
        StructuralMismatch: Or one of its subclasses, on the first
            violated invariant
    """
    if strict is None:
        strict = config.VALIDATION_STRICT

    check_class_variant(vector)
    check_receipt_count(vector)
    if strict:
        check_failure_indices(vector)
        check_blockseq_preconditions(vector)

    log.debug(
        "vector validated",
        extra={"vector_id": vector.id, "strict": strict},
    )
