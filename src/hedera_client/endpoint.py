"""
Node service endpoints from the network address book.
"""

from __future__ import annotations
from dataclasses import dataclass
from ipaddress import IPv4Address
from typing import Optional

from .codec import ProtoWriter, iter_fields, expect_bytes, expect_varint, to_int32
from .runtime.errors import DecodeError

DEFAULT_PORT = 50211

# Address books published 0 or the legacy 50111 for nodes serving on 50211
_LEGACY_PORTS = frozenset({0, 50111})


def normalize_port(port: int) -> int:
    return DEFAULT_PORT if port in _LEGACY_PORTS else port


@dataclass(frozen=True)
class Endpoint:
    """An IPv4 address and port a node accepts requests on."""

    address: Optional[IPv4Address]
    port: int = DEFAULT_PORT

    def __post_init__(self):
        if isinstance(self.address, (str, bytes)):
            object.__setattr__(self, "address", IPv4Address(self.address))
        object.__setattr__(self, "port", normalize_port(self.port))

    @classmethod
    def from_bytes(cls, data: bytes) -> Endpoint:
        """Decode a protobuf ServiceEndpoint."""
        address = None
        port = 0
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                raw = expect_bytes(field, wire_type, value)
                if len(raw) != 4:
                    raise DecodeError(f"ipAddressV4 must be 4 bytes, got {len(raw)}")
                address = IPv4Address(raw)
            elif field == 2:
                # uint32 on the wire despite the int32 declaration
                port = to_int32(expect_varint(field, wire_type, value)) & 0xFFFFFFFF
        return cls(address, port)

    def to_bytes(self) -> bytes:
        """Encode as a protobuf ServiceEndpoint."""
        w = ProtoWriter()
        if self.address is not None:
            w.bytes(1, self.address.packed)
        w.int32(2, self.port)
        return w.to_bytes()

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


__all__ = ["Endpoint", "DEFAULT_PORT", "normalize_port"]
