# tvx Schema - Test vector data model, encodings, and validation

from tvx.schema.base import CID, WireModel
from tvx.schema.codec import (
    load_document,
    dump_test_vector,
    parse_test_vector,
    parse_test_vectors,
    vector_from_dict,
)
from tvx.schema.corpus import iter_vector_paths, load_vector, read_vector_bytes
from tvx.schema.encoding import Base64Bytes, BytesCodec, MillisCodec, OffsetMillis
from tvx.schema.models import (
    PAYLOAD_FIELDS,
    BlockSeqPreconditions,
    Diagnostics,
    GenerationData,
    Metadata,
    Postconditions,
    Preconditions,
    Receipt,
    StateTree,
    TestVector,
    VectorClass,
)
from tvx.schema.validator import validate_vector
from tvx.schema.variants import (
    Block,
    BlockSeq,
    Message,
    Tipset,
    TimestampedRawBlock,
)
from tvx.schema.wire_schema import (
    assert_json_schema,
    check_json_schema,
    load_json_schema,
)

__all__ = [
    # Models
    "TestVector",
    "VectorClass",
    "PAYLOAD_FIELDS",
    "Metadata",
    "GenerationData",
    "Preconditions",
    "BlockSeqPreconditions",
    "Postconditions",
    "Receipt",
    "StateTree",
    "Diagnostics",
    "CID",
    "WireModel",
    # Payloads
    "Message",
    "Tipset",
    "Block",
    "BlockSeq",
    "TimestampedRawBlock",
    # Encodings
    "Base64Bytes",
    "OffsetMillis",
    "BytesCodec",
    "MillisCodec",
    # Decode / encode
    "parse_test_vector",
    "parse_test_vectors",
    "vector_from_dict",
    "dump_test_vector",
    "load_document",
    # Validation
    "validate_vector",
    "check_json_schema",
    "assert_json_schema",
    "load_json_schema",
    # Corpus
    "iter_vector_paths",
    "load_vector",
    "read_vector_bytes",
]
