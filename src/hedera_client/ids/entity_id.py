"""
Shared behavior of `shard.realm.num` entity identifiers.

Subclasses only differ in their protobuf message; text parsing, checksums,
ordering and pydantic integration live here. The checksum parsed from text is
kept for validation but never takes part in equality, hashing or ordering:
the same id has a different checksum on every network.
"""

from __future__ import annotations
import re
from functools import total_ordering
from typing import Any, Optional, Tuple, Type, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..codec import ProtoWriter, iter_fields, expect_varint, to_int64
from ..runtime.errors import BadEntityIdError, ChecksumMismatchError, DecodeError
from .checksum import checksum as compute_checksum, is_checksum
from .ledger_id import LedgerId

INT64_MAX = (1 << 63) - 1

_ENTITY_ID = re.compile(r"^(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)(?:-([^-]*))?$")

E = TypeVar("E", bound="EntityId")


def parse_entity_text(text: str) -> Tuple[int, int, int, Optional[str]]:
    """
    Split `shard.realm.num[-checksum]` into its parts.

    Raises:
        BadEntityIdError: On any deviation from the grammar
    """
    if not isinstance(text, str):
        raise BadEntityIdError(f"entity id must be a string, got {type(text).__name__}")
    match = _ENTITY_ID.match(text.strip())
    if match is None:
        raise BadEntityIdError(
            f"Invalid ID \"{text}\": format should look like 0.0.123 or 0.0.123-vfmkw")
    shard, realm, num = (int(match.group(i)) for i in (1, 2, 3))
    present_checksum = match.group(4)
    if present_checksum is not None and not is_checksum(present_checksum):
        raise BadEntityIdError(
            f"Invalid ID \"{text}\": checksum must be five lowercase letters")
    return shard, realm, num, present_checksum


def _check_component(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadEntityIdError(f"{name} must be an integer, got {value!r}")
    if value < 0 or value > INT64_MAX:
        raise BadEntityIdError(f"{name} out of range: {value}")
    return value


@total_ordering
class EntityId:
    """
    Base class for `shard.realm.num` identifiers.

    Construct from the triple, from `num` alone (shard and realm default to 0),
    or parse text with `from_string`.
    """

    __slots__ = ("_shard", "_realm", "_num", "_checksum")

    # protobuf field numbers shared by AccountID, TokenID and friends
    _SHARD_FIELD = 1
    _REALM_FIELD = 2
    _NUM_FIELD = 3

    def __init__(self, shard: int = 0, realm: int = 0, num: Optional[int] = None,
                 checksum: Optional[str] = None):
        if num is None:
            # EntityId(5005) reads as num 5005 on shard 0, realm 0
            shard, realm, num = 0, 0, shard
        self._shard = _check_component("shard", shard)
        self._realm = _check_component("realm", realm)
        self._num = _check_component("num", num)
        if checksum is not None and not is_checksum(checksum):
            raise BadEntityIdError(f"checksum must be five lowercase letters, got {checksum!r}")
        self._checksum = checksum

    @property
    def shard(self) -> int:
        return self._shard

    @property
    def realm(self) -> int:
        return self._realm

    @property
    def num(self) -> int:
        return self._num

    @property
    def checksum(self) -> Optional[str]:
        """Checksum present in the parsed text, if any."""
        return self._checksum

    @classmethod
    def from_string(cls: Type[E], text: str) -> E:
        """
        Parse `shard.realm.num` with an optional `-checksum` suffix.

        The checksum is kept so `validate_checksum` can check it later; it is
        not validated here because validation needs a network.
        """
        shard, realm, num, present_checksum = parse_entity_text(text)
        return cls(shard, realm, num, checksum=present_checksum)

    @classmethod
    def from_bytes(cls: Type[E], data: bytes) -> E:
        """Decode the protobuf message of this id type."""
        shard = realm = num = 0
        for field, wire_type, value in iter_fields(data):
            if field == cls._SHARD_FIELD:
                shard = to_int64(expect_varint(field, wire_type, value))
            elif field == cls._REALM_FIELD:
                realm = to_int64(expect_varint(field, wire_type, value))
            elif field == cls._NUM_FIELD:
                num = to_int64(expect_varint(field, wire_type, value))
        if min(shard, realm, num) < 0:
            raise DecodeError(f"negative component in {cls.__name__}: {shard}.{realm}.{num}")
        return cls(shard, realm, num)

    def to_bytes(self) -> bytes:
        """Encode as the protobuf message of this id type."""
        w = ProtoWriter()
        w.int64(self._SHARD_FIELD, self._shard)
        w.int64(self._REALM_FIELD, self._realm)
        w.int64(self._NUM_FIELD, self._num)
        return w.to_bytes()

    def compute_checksum(self, network: Any) -> str:
        """Checksum of this id on `network` (LedgerId, name, or Client)."""
        return compute_checksum(LedgerId.of(network), self._address())

    def to_string_with_checksum(self, network: Any) -> str:
        """`shard.realm.num-checksum` for the given network."""
        return f"{self._address()}-{self.compute_checksum(network)}"

    def validate_checksum(self, network: Any) -> None:
        """
        Check the parsed checksum against `network`.

        Ids without a checksum always pass.

        Raises:
            ChecksumMismatchError: If the checksum belongs to another network
        """
        if self._checksum is None:
            return
        ledger_id = LedgerId.of(network)
        expected = compute_checksum(ledger_id, self._address())
        if expected != self._checksum:
            raise ChecksumMismatchError(self._address(), self._checksum, expected, str(ledger_id))

    def _address(self) -> str:
        return f"{self._shard}.{self._realm}.{self._num}"

    def _key(self) -> Tuple[int, ...]:
        return (self._shard, self._realm, self._num)

    def __str__(self) -> str:
        return self._address()

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_string('{self}')"

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that accepts instances or id strings."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.to_string_ser_schema(when_used="json"),
        )

    @classmethod
    def _validate(cls, value: Any) -> Any:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        raise ValueError(f"Invalid {cls.__name__}: {value!r}")


__all__ = ["EntityId", "parse_entity_text"]
