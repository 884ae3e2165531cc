"""
Ledger identity of a network.

The ledger id is the network-specific input of the entity-id checksum, so the
same numeric id carries different checksums on mainnet, testnet and
previewnet.
"""

from __future__ import annotations
from typing import Any

from ..runtime.errors import BadLedgerIdError

_NAMES = {
    b"\x00": "mainnet",
    b"\x01": "testnet",
    b"\x02": "previewnet",
}


class LedgerId:
    """Opaque ledger identifier bytes with well-known names."""

    MAINNET: LedgerId
    TESTNET: LedgerId
    PREVIEWNET: LedgerId

    def __init__(self, ledger_id: bytes):
        if not isinstance(ledger_id, (bytes, bytearray)) or not ledger_id:
            raise BadLedgerIdError(f"ledger id must be non-empty bytes, got {ledger_id!r}")
        self._bytes = bytes(ledger_id)

    @classmethod
    def from_string(cls, text: str) -> LedgerId:
        """Parse a network name (`mainnet`, `testnet`, `previewnet`) or a hex ledger id."""
        name = text.strip().lower()
        for raw, known in _NAMES.items():
            if name == known:
                return cls(raw)
        try:
            return cls(bytes.fromhex(name))
        except ValueError as e:
            raise BadLedgerIdError(f"unknown network or malformed ledger id: {text!r}", cause=e)

    @classmethod
    def from_bytes(cls, data: bytes) -> LedgerId:
        return cls(data)

    @classmethod
    def of(cls, network: Any) -> LedgerId:
        """
        Resolve anything that names a network to a LedgerId.

        Accepts a LedgerId, a name or hex string, raw bytes, or an object with
        a `ledger_id` attribute (such as a Client).
        """
        if isinstance(network, LedgerId):
            return network
        if isinstance(network, str):
            return cls.from_string(network)
        if isinstance(network, (bytes, bytearray)):
            return cls(network)
        ledger_id = getattr(network, "ledger_id", None)
        if isinstance(ledger_id, LedgerId):
            return ledger_id
        raise BadLedgerIdError(f"cannot determine the ledger id of {network!r}")

    def to_bytes(self) -> bytes:
        return self._bytes

    def is_mainnet(self) -> bool:
        return self._bytes == b"\x00"

    def is_testnet(self) -> bool:
        return self._bytes == b"\x01"

    def is_previewnet(self) -> bool:
        return self._bytes == b"\x02"

    def __str__(self) -> str:
        return _NAMES.get(self._bytes, self._bytes.hex())

    def __repr__(self) -> str:
        return f"LedgerId.from_string('{self}')"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LedgerId):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)


LedgerId.MAINNET = LedgerId(b"\x00")
LedgerId.TESTNET = LedgerId(b"\x01")
LedgerId.PREVIEWNET = LedgerId(b"\x02")


__all__ = ["LedgerId"]
