"""Encoding adapters for binary and duration fields.

Two value encodings appear throughout a test vector:
- Binary payloads (CAR blob, message/block bytes, receipt return values)
  travel as standard padded base64 text.
- Block arrival offsets travel as a non-negative integer count of
  milliseconds since genesis.

Each encoding is a codec class with a symmetric encode/decode pair.
Base64Bytes and OffsetMillis compose the codecs into pydantic field types,
so every model field using them gets the same wire behaviour.
"""

import base64
import binascii
from datetime import timedelta
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator
from pydantic_core import PydanticCustomError

from tvx.core.exceptions import MalformedEncoding

# pydantic error type used to tag encoding failures inside a ValidationError
MALFORMED_ENCODING_ERROR = "malformed_encoding"

_ONE_MS = timedelta(milliseconds=1)


class BytesCodec:
    """Arbitrary bytes <-> standard base64 text."""

    @staticmethod
    def encode(value: bytes) -> str:
        """Encode bytes to padded standard base64 (empty bytes -> "")."""
        return base64.b64encode(bytes(value)).decode("ascii")

    @staticmethod
    def decode(text: Any) -> bytes:
        """Decode standard base64 text back to bytes.

        Line breaks inside the text are ignored. JSON null decodes to
        empty bytes, matching how generators emit absent payloads.

        Args:
            text: Wire value, normally a str

        Returns:
            Decoded bytes

        Raises:
            MalformedEncoding: If text is not a string or not valid base64
        """
        if text is None:
            return b""
        if not isinstance(text, str):
            raise MalformedEncoding(
                f"expected base64 string, got {type(text).__name__}"
            )
        cleaned = text.replace("\r", "").replace("\n", "")
        try:
            return base64.b64decode(cleaned, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedEncoding(f"invalid base64: {e}") from e


class MillisCodec:
    """Duration <-> non-negative integer milliseconds."""

    @staticmethod
    def encode(value: timedelta) -> int:
        """Encode a duration as whole milliseconds, truncating the rest.

        Raises:
            MalformedEncoding: If the duration is negative
        """
        if value < timedelta(0):
            raise MalformedEncoding(f"negative duration: {value}")
        return value // _ONE_MS

    @staticmethod
    def decode(value: Any) -> timedelta:
        """Decode an integer millisecond count into a duration.

        Args:
            value: Wire value, must be a non-negative int (bool and float
                are rejected)

        Returns:
            timedelta of exactly that many milliseconds

        Raises:
            MalformedEncoding: If value is not a non-negative integer
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise MalformedEncoding(
                f"expected integer milliseconds, got {type(value).__name__}"
            )
        if value < 0:
            raise MalformedEncoding(f"milliseconds must be non-negative, got {value}")
        try:
            return timedelta(milliseconds=value)
        except OverflowError as e:
            raise MalformedEncoding(f"milliseconds out of range: {value}") from e


def _encoding_error(e: MalformedEncoding) -> PydanticCustomError:
    return PydanticCustomError(MALFORMED_ENCODING_ERROR, "{reason}", {"reason": e.message})


def _validate_bytes(value: Any) -> bytes:
    # Python callers hand over raw bytes; the wire hands over text
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    try:
        return BytesCodec.decode(value)
    except MalformedEncoding as e:
        raise _encoding_error(e) from e


def _validate_offset(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        if value < timedelta(0):
            raise _encoding_error(MalformedEncoding(f"negative duration: {value}"))
        return value
    try:
        return MillisCodec.decode(value)
    except MalformedEncoding as e:
        raise _encoding_error(e) from e


Base64Bytes = Annotated[
    bytes,
    PlainValidator(_validate_bytes),
    PlainSerializer(BytesCodec.encode, return_type=str),
]

OffsetMillis = Annotated[
    timedelta,
    PlainValidator(_validate_offset),
    PlainSerializer(MillisCodec.encode, return_type=int),
]
