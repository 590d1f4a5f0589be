"""Apply payloads, one shape per vector class.

- message:  ordered list of Message
- tipset:   ordered list of Tipset, each holding Blocks
- blockseq: BlockSeq, timestamped raw blocks plus a message repository

These models carry no behaviour. Numeric fields keep the most precise
Python type available; the comment on each field names the chain-domain
type the driver must reinterpret it as. Message and block bytes are opaque
to the schema.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationInfo, field_validator

from .base import BigInt, Int64, WireModel
from .encoding import Base64Bytes, OffsetMillis


class Message(WireModel):
    """A single message to apply (class ``message``).

    Attributes:
        bytes_: Serialized chain message (wire name ``bytes``)
        epoch: Epoch override for this message; driver reinterprets as a
            chain epoch. None means "use the precondition epoch".
    """

    bytes_: Base64Bytes = Field(alias="bytes")
    epoch: Optional[Int64] = None


class Block(WireModel):
    """A block inside a tipset.

    Attributes:
        miner_addr: Miner address in its native string form
        win_count: Election win count
        messages: Serialized chain messages included in the block
    """

    miner_addr: str
    win_count: Int64
    messages: List[Base64Bytes] = Field(default_factory=list)

    @field_validator("messages", mode="before")
    @classmethod
    def _null_messages(cls, v: Any) -> Any:
        return [] if v is None else v


class Tipset(WireModel):
    """A tipset to apply (class ``tipset``).

    Attributes:
        epoch: Driver reinterprets as a chain epoch
        basefee: Arbitrary-precision integer; driver reinterprets as a
            token amount
        blocks: Blocks in the tipset, in order. None for a null round.
    """

    epoch: Int64
    basefee: BigInt
    blocks: Optional[List[Block]] = None


class TimestampedRawBlock(WireModel):
    """A raw block arriving at a point in time (class ``blockseq``).

    Attributes:
        offset_ms: Elapsed time since genesis at which the block arrives
        bytes_: Serialized block message, i.e. header plus message CIDs
            (wire name ``bytes``)
    """

    offset_ms: OffsetMillis
    bytes_: Base64Bytes = Field(alias="bytes")


class BlockSeq(WireModel):
    """Block sequence plus the message payloads its blocks reference.

    Attributes:
        blocks: Timestamped blocks, in arrival order
        message_repo: Message CID (native string form) -> serialized message
    """

    blocks: List[TimestampedRawBlock] = Field(default_factory=list)
    message_repo: Dict[str, Base64Bytes] = Field(default_factory=dict)

    @field_validator("blocks", "message_repo", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any, info: ValidationInfo) -> Any:
        # Generators write nil collections as null
        if v is None:
            return [] if info.field_name == "blocks" else {}
        return v

    def message(self, cid: str) -> Optional[bytes]:
        """Look up a message payload by CID string, or None if absent."""
        return self.message_repo.get(str(cid))
