"""
Protobuf wire-format reader.

Walks the fields of one encoded message. Unknown fields are returned like any
other so callers may ignore them; truncated or malformed input raises
DecodeError.
"""

import builtins
import struct
from typing import Iterator, List, Tuple, Union

from ..runtime.errors import DecodeError
from .writer import WIRE_VARINT, WIRE_FIXED64, WIRE_LENGTH_DELIMITED, WIRE_FIXED32

FieldValue = Union[int, builtins.bytes]


class ProtoReader:
    """
    Protobuf reader over an immutable byte buffer.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Encoded message to read from
        """
        if not isinstance(buf, (builtins.bytes, bytearray, memoryview)):
            raise DecodeError(f"expected bytes, got {type(buf).__name__}")
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        """True once every byte has been consumed."""
        return self._off >= len(self._buf)

    def u8(self) -> int:
        """Read one byte."""
        if self._off >= len(self._buf):
            raise DecodeError("unexpected end of message")
        val = self._buf[self._off]
        self._off += 1
        return val

    def uvarint(self) -> int:
        """
        Read unsigned varint in ULEB128 format.

        Returns:
            Decoded unsigned integer value
        """
        x = 0
        s = 0
        while True:
            if s >= 70:
                raise DecodeError("varint is longer than 10 bytes")
            b = self.u8()
            if b < 0x80:
                x |= b << s
                break
            x |= (b & 0x7F) << s
            s += 7
        if x > 0xFFFFFFFFFFFFFFFF:
            raise DecodeError("varint overflows 64 bits")
        return x

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        if self._off + n > len(self._buf):
            raise DecodeError(f"truncated message: need {n} bytes at offset {self._off}")
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def field(self) -> Tuple[int, int, FieldValue]:
        """
        Read the next field.

        Returns:
            (field number, wire type, value); the value is an int for varint
            and fixed fields and bytes for length-delimited ones
        """
        key = self.uvarint()
        field_number, wire_type = key >> 3, key & 0x7
        if field_number == 0:
            raise DecodeError("field number 0 is reserved")

        if wire_type == WIRE_VARINT:
            return field_number, wire_type, self.uvarint()
        if wire_type == WIRE_FIXED64:
            return field_number, wire_type, struct.unpack('<Q', self.bytes(8))[0]
        if wire_type == WIRE_LENGTH_DELIMITED:
            return field_number, wire_type, self.bytes(self.uvarint())
        if wire_type == WIRE_FIXED32:
            return field_number, wire_type, struct.unpack('<I', self.bytes(4))[0]
        raise DecodeError(f"unsupported wire type {wire_type} for field {field_number}")

    def fields(self) -> Iterator[Tuple[int, int, FieldValue]]:
        """Iterate over every remaining field."""
        while not self.eof:
            yield self.field()


def iter_fields(data: builtins.bytes) -> Iterator[Tuple[int, int, FieldValue]]:
    """Iterate over the fields of an encoded message."""
    return ProtoReader(data).fields()


def expect_bytes(field_number: int, wire_type: int, value: FieldValue) -> builtins.bytes:
    """Return a length-delimited value or fail with a DecodeError."""
    if wire_type != WIRE_LENGTH_DELIMITED:
        raise DecodeError(f"field {field_number}: expected length-delimited, got wire type {wire_type}")
    return value


def expect_varint(field_number: int, wire_type: int, value: FieldValue) -> int:
    """Return a varint value or fail with a DecodeError."""
    if wire_type != WIRE_VARINT:
        raise DecodeError(f"field {field_number}: expected varint, got wire type {wire_type}")
    return value


def to_int64(v: int) -> int:
    """Reinterpret an unsigned varint as a signed 64-bit integer."""
    return v - (1 << 64) if v >= (1 << 63) else v


def to_int32(v: int) -> int:
    """Reinterpret a varint as a signed 32-bit integer."""
    v &= 0xFFFFFFFF
    return v - (1 << 32) if v >= (1 << 31) else v


def zigzag_decode(v: int) -> int:
    """Inverse of zigzag_encode (sint64)."""
    return (v >> 1) ^ -(v & 1)


def unpack_int64(wire_type: int, value: FieldValue) -> List[int]:
    """Read a repeated int64 field, packed or not."""
    if wire_type == WIRE_VARINT:
        return [to_int64(value)]
    if wire_type == WIRE_LENGTH_DELIMITED:
        inner = ProtoReader(value)
        out = []
        while not inner.eof:
            out.append(to_int64(inner.uvarint()))
        return out
    raise DecodeError(f"unexpected wire type {wire_type} for repeated int64")
