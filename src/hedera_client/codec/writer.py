"""
Protobuf wire-format writer.

Encodes messages of the ledger's protobuf schema field by field. Fields are
written in the order the caller emits them (ascending field number by
convention) and proto3 defaults are omitted, so two equal messages always
encode to the same bytes.
"""

import builtins
import struct
from typing import List

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LENGTH_DELIMITED = 2
WIRE_FIXED32 = 5

_U64_MASK = 0xFFFFFFFFFFFFFFFF


class ProtoWriter:
    """
    Protobuf writer accumulating bytes into a buffer.

    Scalar helpers skip proto3 default values; `message` always writes its
    field so that an empty-but-present submessage survives a round trip.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """Write a single byte."""
        self._bb.append(v & 0xFF)

    def raw(self, v: bytes) -> None:
        """Write raw bytes without length prefix."""
        self._bb.extend(v)

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Negative values are written as their 64-bit two's complement, which
        is how protobuf encodes negative int32/int64 fields.

        Args:
            v: Integer value to encode as varint
        """
        x = v & _U64_MASK
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def tag(self, field: int, wire_type: int) -> None:
        """Write a field key."""
        self.uvarint((field << 3) | wire_type)

    def int64(self, field: int, v: int) -> None:
        """Write an int64/int32/uint64/uint32/enum field (varint)."""
        if v:
            self.tag(field, WIRE_VARINT)
            self.uvarint(v)

    # uint64 and enums share the varint encoding
    uint64 = int64
    int32 = int64
    uint32 = int64
    enum = int64

    def sint64(self, field: int, v: int) -> None:
        """Write a zigzag-encoded sint64 field."""
        if v:
            self.tag(field, WIRE_VARINT)
            self.uvarint(zigzag_encode(v))

    def bool(self, field: int, v: bool) -> None:
        """Write a bool field."""
        if v:
            self.tag(field, WIRE_VARINT)
            self.uvarint(1)

    def fixed64(self, field: int, v: int) -> None:
        """Write a fixed64 field."""
        if v:
            self.tag(field, WIRE_FIXED64)
            self.raw(struct.pack('<Q', v & _U64_MASK))

    def bytes(self, field: int, v: bytes) -> None:
        """Write a length-delimited bytes field."""
        if v:
            self.tag(field, WIRE_LENGTH_DELIMITED)
            self.uvarint(len(v))
            self.raw(v)

    def string(self, field: int, s: str) -> None:
        """Write a UTF-8 string field."""
        self.bytes(field, s.encode('utf-8'))

    def message(self, field: int, encoded: builtins.bytes) -> None:
        """Write an embedded message, even when it encodes to zero bytes."""
        self.tag(field, WIRE_LENGTH_DELIMITED)
        self.uvarint(len(encoded))
        self.raw(encoded)

    def packed_int64(self, field: int, values: List[int]) -> None:
        """Write a packed repeated int64 field."""
        if not values:
            return
        inner = ProtoWriter()
        for value in values:
            inner.uvarint(value)
        self.message(field, inner.to_bytes())

    def to_bytes(self) -> builtins.bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return builtins.bytes(self._bb)


def zigzag_encode(v: int) -> int:
    """Map a signed 64-bit integer onto an unsigned one (sint64)."""
    return ((v << 1) ^ (v >> 63)) & _U64_MASK
