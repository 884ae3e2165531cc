"""
Tests for the protobuf wire codec.
"""

import pytest

from hedera_client.codec import (
    ProtoReader,
    ProtoWriter,
    iter_fields,
    to_int64,
    unpack_int64,
    zigzag_decode,
    zigzag_encode,
    WIRE_LENGTH_DELIMITED,
    WIRE_VARINT,
)
from hedera_client.runtime.errors import DecodeError


class TestProtoWriter:
    """Test field encodings."""

    def test_varint(self):
        w = ProtoWriter()
        w.int64(1, 300)
        assert w.to_bytes() == bytes.fromhex("08ac02")

    def test_default_values_are_skipped(self):
        w = ProtoWriter()
        w.int64(1, 0)
        w.bool(2, False)
        w.string(3, "")
        w.sint64(4, 0)
        assert w.to_bytes() == b""

    def test_negative_int64_uses_ten_bytes(self):
        w = ProtoWriter()
        w.int64(1, -1)
        assert w.to_bytes() == bytes.fromhex("08ffffffffffffffffff01")

    def test_sint64_zigzag(self):
        w = ProtoWriter()
        w.sint64(2, -1)
        assert w.to_bytes() == bytes.fromhex("1001")

    def test_empty_message_is_written(self):
        w = ProtoWriter()
        w.message(5, b"")
        assert w.to_bytes() == bytes.fromhex("2a00")

    def test_packed_int64(self):
        w = ProtoWriter()
        w.packed_int64(4, [1, 2, 300])
        assert w.to_bytes() == bytes.fromhex("22040102ac02")


class TestProtoReader:
    """Test field decoding."""

    def test_reads_what_writer_wrote(self):
        w = ProtoWriter()
        w.int64(1, 7)
        w.string(2, "memo")
        w.sint64(3, -5)
        fields = list(iter_fields(w.to_bytes()))
        assert fields == [
            (1, WIRE_VARINT, 7),
            (2, WIRE_LENGTH_DELIMITED, b"memo"),
            (3, WIRE_VARINT, zigzag_encode(-5)),
        ]
        assert zigzag_decode(fields[2][2]) == -5

    def test_truncated_length(self):
        with pytest.raises(DecodeError):
            list(iter_fields(bytes.fromhex("1205616263")))

    def test_unsupported_wire_type(self):
        with pytest.raises(DecodeError):
            list(iter_fields(bytes.fromhex("0b")))

    def test_field_zero_is_reserved(self):
        with pytest.raises(DecodeError):
            ProtoReader(bytes.fromhex("0001")).field()

    def test_overlong_varint(self):
        with pytest.raises(DecodeError):
            ProtoReader(b"\xff" * 11).uvarint()

    def test_rejects_non_bytes(self):
        with pytest.raises(DecodeError):
            ProtoReader("not bytes")

    def test_unpack_packed_and_unpacked(self):
        assert unpack_int64(WIRE_LENGTH_DELIMITED, bytes.fromhex("0102ac02")) == [1, 2, 300]
        assert unpack_int64(WIRE_VARINT, 9) == [9]

    def test_to_int64(self):
        assert to_int64(2**64 - 1) == -1
        assert to_int64(5) == 5
