"""
Entity identifiers for the Hedera network.

Provides `shard.realm.num` ids with text and protobuf encodings and
network-bound checksums.
"""

from .ledger_id import LedgerId
from .checksum import checksum, is_checksum
from .entity_id import EntityId
from .account_id import AccountId
from .token_id import TokenId, NftId

__all__ = [
    "LedgerId",
    "checksum",
    "is_checksum",
    "EntityId",
    "AccountId",
    "TokenId",
    "NftId",
]
