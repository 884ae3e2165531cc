"""
Network-bound entity id checksums (HIP-15).

A checksum is five lowercase letters derived from the textual address
`shard.realm.num` and the ledger id. It exists to catch an address copied
from one network and pasted into a transaction for another.
"""

from __future__ import annotations
import re

from .ledger_id import LedgerId

CHECKSUM_LENGTH = 5
CHECKSUM_PATTERN = re.compile(r"^[a-z]{5}$")

_P3 = 26 ** 3
_P5 = 26 ** 5
_M = 1_000_003  # smallest prime above one million, final permutation
_W = 31  # digit weight, coprime to _P5


def checksum(ledger_id: LedgerId, address: str) -> str:
    """
    Compute the checksum of `address` on the network `ledger_id`.

    Args:
        ledger_id: Target network
        address: Canonical `shard.realm.num` text

    Returns:
        Five lowercase ASCII letters
    """
    digits = [10 if ch == "." else int(ch) for ch in address]

    s = 0
    s0 = 0
    s1 = 0
    for i, d in enumerate(digits):
        s = (_W * s + d) % _P3
        if i % 2 == 0:
            s0 = (s0 + d) % 11
        else:
            s1 = (s1 + d) % 11

    sh = 0
    for b in ledger_id.to_bytes() + bytes(6):
        sh = (_W * sh + b) % _P5

    c = ((((len(address) % 5) * 11 + s0) * 11 + s1) * _P3 + s + sh) % _P5
    c = (c * _M) % _P5

    letters = []
    for _ in range(CHECKSUM_LENGTH):
        letters.append(chr(ord("a") + c % 26))
        c //= 26
    return "".join(reversed(letters))


def is_checksum(text: str) -> bool:
    return bool(CHECKSUM_PATTERN.match(text))


__all__ = ["checksum", "is_checksum", "CHECKSUM_LENGTH"]
