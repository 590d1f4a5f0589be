"""Data models for the test vector document.

Defines:
- VectorClass: which apply payload a vector carries
- Metadata / GenerationData: provenance, never checked against results
- Preconditions: base record plus the blockseq-only extension
- Postconditions / Receipt: expected end state
- Diagnostics: opaque implementation-specific debugging output
- TestVector: the document itself

A vector is built whole, serialized once, and immutable afterwards.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)
from pydantic_core import PydanticCustomError

from tvx.core.config import HINT_INCORRECT, HINT_NEGATE

from .base import CID, BigInt, Int64, WireModel
from .encoding import Base64Bytes
from .variants import BlockSeq, Message, Tipset


# pydantic error type used to tag class/payload disagreement
CLASS_VARIANT_ERROR = "class_variant_mismatch"


class VectorClass(str, Enum):
    """Kind of behaviour a vector exercises."""

    MESSAGE = "message"  # VM behaviour and state over one or many messages
    TIPSET = "tipset"  # VM behaviour and state over tipsets and null rounds
    BLOCKSEQ = "blockseq"  # State after blocks arrive at concrete times


# Wire field holding the apply payload for each class
PAYLOAD_FIELDS: Dict[VectorClass, str] = {
    VectorClass.MESSAGE: "apply_messages",
    VectorClass.TIPSET: "apply_tipsets",
    VectorClass.BLOCKSEQ: "apply_blockseq",
}


# =============================================================================
# Metadata
# =============================================================================

class GenerationData(WireModel):
    """One tool (and its version) involved in generating the vector."""

    source: Optional[str] = None
    version: Optional[str] = None


class Metadata(WireModel):
    """Provenance of the vector (wire name ``_meta``).

    Attributes:
        id: Vector identifier
        version: Schema/vector version
        description: Human description
        comment: Free-text comment
        gen: Generation records
        tags: Free-form tags
    """

    id: str
    version: Optional[str] = None
    description: Optional[str] = None
    comment: Optional[str] = None
    gen: List[GenerationData] = Field(default_factory=list)
    tags: Optional[List[str]] = None

    @field_validator("gen", mode="before")
    @classmethod
    def _null_gen(cls, v: Any) -> Any:
        return [] if v is None else v


# =============================================================================
# Pre/Postconditions
# =============================================================================

class StateTree(WireModel):
    """Reference to a state tree stored in the vector's CAR blob."""

    root_cid: Optional[CID] = None


# Wire keys of the blockseq extension, written flat inside "preconditions"
_BLOCKSEQ_KEYS = ("genesis_ts", "chain_head")


class BlockSeqPreconditions(WireModel):
    """Preconditions that only apply to ``blockseq`` vectors.

    Attributes:
        genesis_ts: Genesis instant; block offsets are relative to it.
            Held at microsecond precision: RFC 3339 text with more than
            six fractional digits is truncated to microseconds on decode.
        chain_head: CIDs of the head tipset's blocks. The order is taken
            as written; no genesis-first/tip-first convention is assumed.
    """

    genesis_ts: Optional[datetime] = None
    chain_head: Optional[List[CID]] = None


class Preconditions(WireModel):
    """Environment to establish before applying the payload.

    Attributes:
        epoch: Starting epoch; driver reinterprets as a chain epoch
        state_tree: Starting state tree
        circ_supply: Circulating supply to inject, as a token amount.
            None means the driver's default (total supply).
        blockseq: Class-specific extension; None unless genesis_ts or
            chain_head were present on the wire
    """

    epoch: Int64 = 0
    state_tree: Optional[StateTree] = None
    circ_supply: Optional[BigInt] = None
    blockseq: Optional[BlockSeqPreconditions] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_blockseq(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        # "blockseq" is not a wire key; only Python callers pass the model
        given = data.get("blockseq")
        base = {
            k: v for k, v in data.items()
            if k not in _BLOCKSEQ_KEYS and k != "blockseq"
        }
        if isinstance(given, BlockSeqPreconditions):
            base["blockseq"] = given
            return base
        extension = {k: data[k] for k in _BLOCKSEQ_KEYS if k in data}
        if extension:
            base["blockseq"] = extension
        return base

    @model_serializer(mode="wrap")
    def _flatten_blockseq(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        extension = data.pop("blockseq", None)
        if extension:
            data.update(extension)
        return data


class Receipt(WireModel):
    """Expected outcome of one applied message.

    Attributes:
        exit_code: Driver reinterprets as an exit code
        return_value: Opaque return bytes (wire name ``return``)
        gas_used: Gas consumed
    """

    exit_code: Int64
    return_value: Base64Bytes = Field(default=b"", alias="return")
    gas_used: Int64


class Postconditions(WireModel):
    """Expected state after applying the payload.

    Attributes:
        apply_message_failures: Indices of applied messages expected to
            fail outright (as opposed to a non-zero exit code)
        state_tree: Resulting state tree
        receipts: One receipt per applied message
        receipts_roots: Roots of the receipt trees, one per tipset
    """

    apply_message_failures: Optional[List[Int64]] = None
    state_tree: Optional[StateTree] = None
    receipts: List[Receipt] = Field(default_factory=list)
    receipts_roots: Optional[List[CID]] = None

    @field_validator("receipts", mode="before")
    @classmethod
    def _null_receipts(cls, v: Any) -> Any:
        return [] if v is None else v


class Diagnostics(WireModel):
    """Opaque diagnostic output tagged with its format."""

    format: str
    data: Base64Bytes = b""


# =============================================================================
# Document
# =============================================================================

def _is_populated(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, list):
        return len(value) > 0
    return True


def class_variant_problem(vector: "TestVector") -> Optional[str]:
    """Describe a class/payload disagreement, or None if they agree.

    The payload field selected by the class must be populated (a non-empty
    list, or a BlockSeq object); the other two must be absent or empty.
    """
    expected = PAYLOAD_FIELDS[vector.class_]
    if not _is_populated(getattr(vector, expected)):
        return f"class '{vector.class_.value}' requires a populated {expected}"
    extra = [
        name for name in PAYLOAD_FIELDS.values()
        if name != expected and _is_populated(getattr(vector, name))
    ]
    if extra:
        return f"class '{vector.class_.value}' must not populate {', '.join(extra)}"
    return None


class TestVector(WireModel):
    """A single conformance test case.

    Exactly one of apply_messages / apply_tipsets / apply_blockseq is
    populated, selected by class_; construction fails otherwise.

    Attributes:
        class_: Vector class (wire name ``class``)
        selector: Capability name -> value a driver checks before running
            the vector. None means always applicable.
        hints: Free-form driver flags, order preserved. See HINT_INCORRECT
            and HINT_NEGATE.
        meta: Provenance (wire name ``_meta``)
        car: CAR archive holding every state tree referenced by root CID
        preconditions: Environment to establish first
        apply_messages: Payload for class ``message``
        apply_tipsets: Payload for class ``tipset``
        apply_blockseq: Payload for class ``blockseq``
        postconditions: Expected end state
        diagnostics: Optional diagnostics blob
    """

    __test__ = False  # not a pytest test class

    class_: VectorClass = Field(alias="class")
    selector: Optional[Dict[str, str]] = None
    hints: Optional[List[str]] = None
    meta: Optional[Metadata] = Field(default=None, alias="_meta")
    car: Base64Bytes = b""
    preconditions: Optional[Preconditions] = None
    apply_messages: Optional[List[Message]] = None
    apply_tipsets: Optional[List[Tipset]] = None
    apply_blockseq: Optional[BlockSeq] = None
    postconditions: Optional[Postconditions] = None
    diagnostics: Optional[Diagnostics] = None

    @model_validator(mode="after")
    def _check_class_variant(self) -> "TestVector":
        problem = class_variant_problem(self)
        if problem:
            raise PydanticCustomError(CLASS_VARIANT_ERROR, "{reason}", {"reason": problem})
        return self

    @property
    def id(self) -> Optional[str]:
        """Vector id from metadata, if any."""
        return self.meta.id if self.meta else None

    @property
    def payload(self) -> Union[List[Message], List[Tipset], BlockSeq]:
        """The populated apply payload for this vector's class."""
        return getattr(self, PAYLOAD_FIELDS[self.class_])

    @property
    def receipts(self) -> List[Receipt]:
        """Postcondition receipts (empty when postconditions are absent)."""
        return self.postconditions.receipts if self.postconditions else []

    def has_hint(self, hint: str) -> bool:
        return hint in (self.hints or [])

    @property
    def is_incorrect(self) -> bool:
        """Vector knowingly encodes wrong behaviour; drivers may skip it."""
        return self.has_hint(HINT_INCORRECT)

    @property
    def is_negated(self) -> bool:
        """Drivers must assert the postconditions are NOT met."""
        return self.has_hint(HINT_NEGATE)

    def validate_invariants(self, strict: Optional[bool] = None) -> None:
        """Run the structural validator over this vector.

        Raises:
            StructuralMismatch: If a cross-field invariant is violated
        """
        from .validator import validate_vector

        validate_vector(self, strict=strict)

    def to_dict(self) -> Dict[str, Any]:
        """Wire-form mapping; unset optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize the whole document to JSON text."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
