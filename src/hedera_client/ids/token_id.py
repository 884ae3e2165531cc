"""
Token and NFT identifiers.

An NftId is a TokenId plus a serial number. It composes the token id rather
than extending it: an NFT is not a token.
"""

from __future__ import annotations
import re
from functools import total_ordering
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..codec import ProtoWriter, iter_fields, expect_bytes, expect_varint, to_int64
from ..runtime.errors import BadEntityIdError, DecodeError
from .entity_id import EntityId, INT64_MAX

_SERIAL_SEPARATOR = re.compile(r"[/@]")


class TokenId(EntityId):
    """The id of a token: `shard.realm.num`."""

    __slots__ = ()

    def nft(self, serial: int) -> NftId:
        """The NFT with `serial` in this token class."""
        return NftId(self, serial)


@total_ordering
class NftId:
    """
    A single non-fungible token: `shard.realm.num@serial`.
    """

    __slots__ = ("_token_id", "_serial")

    _TOKEN_FIELD = 1
    _SERIAL_FIELD = 2

    def __init__(self, token_id: TokenId, serial: int):
        if not isinstance(token_id, TokenId):
            raise BadEntityIdError(f"token_id must be a TokenId, got {token_id!r}")
        if isinstance(serial, bool) or not isinstance(serial, int):
            raise BadEntityIdError(f"serial must be an integer, got {serial!r}")
        if serial <= 0 or serial > INT64_MAX:
            raise BadEntityIdError(f"serial must be a positive 64-bit integer, got {serial}")
        self._token_id = token_id
        self._serial = serial

    @property
    def token_id(self) -> TokenId:
        return self._token_id

    @property
    def serial(self) -> int:
        return self._serial

    @classmethod
    def from_string(cls, text: str) -> NftId:
        """
        Parse `shard.realm.num[-checksum]@serial` (`/` is accepted instead of `@`).
        """
        if not isinstance(text, str):
            raise BadEntityIdError(f"NFT id must be a string, got {type(text).__name__}")
        parts = _SERIAL_SEPARATOR.split(text.strip())
        if len(parts) != 2:
            raise BadEntityIdError(
                f"Invalid NFT id \"{text}\": format should look like 0.0.123@5 or 0.0.123-vfmkw@5")
        token_text, serial_text = parts
        if not serial_text.isascii() or not serial_text.isdigit():
            raise BadEntityIdError(f"Invalid NFT id \"{text}\": serial must be a decimal integer")
        return cls(TokenId.from_string(token_text), int(serial_text))

    @classmethod
    def from_bytes(cls, data: bytes) -> NftId:
        """Decode a protobuf NftID."""
        token_id = TokenId(0, 0, 0)
        serial = 0
        for field, wire_type, value in iter_fields(data):
            if field == cls._TOKEN_FIELD:
                token_id = TokenId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == cls._SERIAL_FIELD:
                serial = to_int64(expect_varint(field, wire_type, value))
        if serial <= 0:
            raise DecodeError(f"NftID has no valid serial number: {serial}")
        return cls(token_id, serial)

    def to_bytes(self) -> bytes:
        """Encode as a protobuf NftID."""
        w = ProtoWriter()
        w.message(self._TOKEN_FIELD, self._token_id.to_bytes())
        w.int64(self._SERIAL_FIELD, self._serial)
        return w.to_bytes()

    def to_string_with_checksum(self, network: Any) -> str:
        return f"{self._token_id.to_string_with_checksum(network)}@{self._serial}"

    def validate_checksum(self, network: Any) -> None:
        """Validate the checksum carried by the token part."""
        self._token_id.validate_checksum(network)

    def __str__(self) -> str:
        return f"{self._token_id}@{self._serial}"

    def __repr__(self) -> str:
        return f"NftId.from_string('{self}')"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, NftId):
            return NotImplemented
        return (self._token_id, self._serial) == (other._token_id, other._serial)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, NftId):
            return NotImplemented
        return (self._token_id, self._serial) < (other._token_id, other._serial)

    def __hash__(self) -> int:
        return hash((self._token_id, self._serial))

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
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
        raise ValueError(f"Invalid NftId: {value!r}")


__all__ = ["TokenId", "NftId"]
