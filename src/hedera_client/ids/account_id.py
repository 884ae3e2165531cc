"""Account identifiers (protobuf AccountID)."""

from __future__ import annotations

from .entity_id import EntityId


class AccountId(EntityId):
    """The id of an account: `shard.realm.num`."""

    __slots__ = ()


__all__ = ["AccountId"]
