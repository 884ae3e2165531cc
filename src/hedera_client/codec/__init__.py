"""
Hedera Binary Codec Module

Produces and accepts the protobuf wire encoding of the ledger's schema.

Key components:
- writer.py: ProtoWriter with varint, zigzag and length-delimited fields
- reader.py: ProtoReader yielding (field, wire type, value) triples
"""

from .reader import (
    ProtoReader,
    iter_fields,
    expect_bytes,
    expect_varint,
    to_int64,
    to_int32,
    zigzag_decode,
    unpack_int64,
)
from .writer import (
    ProtoWriter,
    zigzag_encode,
    WIRE_VARINT,
    WIRE_FIXED64,
    WIRE_LENGTH_DELIMITED,
    WIRE_FIXED32,
)

__all__ = [
    "ProtoReader",
    "ProtoWriter",
    "iter_fields",
    "expect_bytes",
    "expect_varint",
    "to_int64",
    "to_int32",
    "zigzag_decode",
    "zigzag_encode",
    "unpack_int64",
    "WIRE_VARINT",
    "WIRE_FIXED64",
    "WIRE_LENGTH_DELIMITED",
    "WIRE_FIXED32",
]
