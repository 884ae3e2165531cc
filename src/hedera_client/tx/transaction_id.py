"""
Transaction identifiers.

A transaction id is the payer account plus the valid-start timestamp chosen by
the client, optionally marked as scheduled or carrying a nonce. Its text form
is `0.0.5006@1554158542.000000000[?scheduled][/nonce]`.
"""

from __future__ import annotations
import random
import re
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from ..codec import ProtoWriter, iter_fields, expect_bytes, expect_varint, to_int64, to_int32
from ..ids import AccountId
from ..runtime.errors import BadEntityIdError, DecodeError

_NANOS_PER_SECOND = 1_000_000_000

_TRANSACTION_ID = re.compile(
    r"^(?P<account>[^@]+)@(?P<seconds>[0-9]+)\.(?P<nanos>[0-9]{1,9})"
    r"(?P<scheduled>\?scheduled)?(?:/(?P<nonce>[0-9]+))?$"
)


@dataclass(frozen=True, order=True)
class Timestamp:
    """Seconds and nanoseconds since the Unix epoch (protobuf Timestamp)."""

    seconds: int
    nanos: int = 0

    def __post_init__(self):
        if not 0 <= self.nanos < _NANOS_PER_SECOND:
            raise ValueError(f"nanos must be in [0, 1e9), got {self.nanos}")

    @classmethod
    def now(cls) -> Timestamp:
        return cls.from_nanos(time.time_ns())

    @classmethod
    def from_nanos(cls, total_nanos: int) -> Timestamp:
        seconds, nanos = divmod(total_nanos, _NANOS_PER_SECOND)
        return cls(seconds, nanos)

    @classmethod
    def from_datetime(cls, dt: datetime) -> Timestamp:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        delta = dt - datetime(1970, 1, 1, tzinfo=timezone.utc)
        return cls(delta.days * 86400 + delta.seconds, delta.microseconds * 1000)

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc) + timedelta(
            microseconds=self.nanos // 1000)

    def to_nanos(self) -> int:
        return self.seconds * _NANOS_PER_SECOND + self.nanos

    def plus_nanos(self, nanos: int) -> Timestamp:
        return Timestamp.from_nanos(self.to_nanos() + nanos)

    @classmethod
    def from_bytes(cls, data: bytes) -> Timestamp:
        seconds = nanos = 0
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                seconds = to_int64(expect_varint(field, wire_type, value))
            elif field == 2:
                nanos = to_int32(expect_varint(field, wire_type, value))
        try:
            return cls(seconds, nanos)
        except ValueError as e:
            raise DecodeError(f"invalid Timestamp: {e}", cause=e)

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        w.int64(1, self.seconds)
        w.int32(2, self.nanos)
        return w.to_bytes()

    def __str__(self) -> str:
        return f"{self.seconds}.{self.nanos:09d}"


class TransactionId:
    """
    The id of a transaction: payer account and valid-start time.
    """

    __slots__ = ("_account_id", "_valid_start", "_scheduled", "_nonce")

    def __init__(self, account_id: AccountId, valid_start: Union[Timestamp, datetime],
                 scheduled: bool = False, nonce: Optional[int] = None):
        if not isinstance(account_id, AccountId):
            raise TypeError(f"account_id must be an AccountId, got {type(account_id).__name__}")
        if isinstance(valid_start, datetime):
            valid_start = Timestamp.from_datetime(valid_start)
        self._account_id = account_id
        self._valid_start = valid_start
        self._scheduled = bool(scheduled)
        self._nonce = nonce or None

    @classmethod
    def with_valid_start(cls, account_id: AccountId,
                         valid_start: Union[Timestamp, datetime]) -> TransactionId:
        return cls(account_id, valid_start)

    @classmethod
    def generate(cls, account_id: AccountId) -> TransactionId:
        """
        New id for `account_id`, valid from a few seconds ago.

        The start is backdated by a random 3-8 seconds so that a node whose
        clock runs slightly behind does not reject it as not yet valid.
        """
        jitter_ns = random.randint(3_000, 8_000) * 1_000_000
        return cls(account_id, Timestamp.from_nanos(time.time_ns() - jitter_ns))

    @property
    def account_id(self) -> AccountId:
        return self._account_id

    @property
    def valid_start(self) -> Timestamp:
        return self._valid_start

    @property
    def scheduled(self) -> bool:
        return self._scheduled

    @property
    def nonce(self) -> Optional[int]:
        return self._nonce

    def set_scheduled(self, scheduled: bool) -> TransactionId:
        """Copy of this id with the scheduled flag changed."""
        return TransactionId(self._account_id, self._valid_start, scheduled, self._nonce)

    def set_nonce(self, nonce: Optional[int]) -> TransactionId:
        """Copy of this id with another nonce."""
        return TransactionId(self._account_id, self._valid_start, self._scheduled, nonce)

    @classmethod
    def from_string(cls, text: str) -> TransactionId:
        match = _TRANSACTION_ID.match(text.strip())
        if match is None:
            raise BadEntityIdError(
                f"Invalid transaction id \"{text}\": expecting 0.0.5006@1554158542.000000000")
        nonce = match.group("nonce")
        return cls(
            AccountId.from_string(match.group("account")),
            Timestamp(int(match.group("seconds")), int(match.group("nanos").ljust(9, "0"))),
            scheduled=match.group("scheduled") is not None,
            nonce=int(nonce) if nonce is not None else None,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> TransactionId:
        """Decode a protobuf TransactionID."""
        valid_start = None
        account_id = None
        scheduled = False
        nonce = None
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                valid_start = Timestamp.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 2:
                account_id = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 3:
                scheduled = bool(expect_varint(field, wire_type, value))
            elif field == 4:
                nonce = to_int32(expect_varint(field, wire_type, value))
        if valid_start is None or account_id is None:
            raise DecodeError("TransactionID requires both accountID and transactionValidStart")
        return cls(account_id, valid_start, scheduled, nonce)

    def to_bytes(self) -> bytes:
        """Encode as a protobuf TransactionID."""
        w = ProtoWriter()
        w.message(1, self._valid_start.to_bytes())
        w.message(2, self._account_id.to_bytes())
        w.bool(3, self._scheduled)
        w.int32(4, self._nonce or 0)
        return w.to_bytes()

    def __str__(self) -> str:
        text = f"{self._account_id}@{self._valid_start}"
        if self._scheduled:
            text += "?scheduled"
        if self._nonce is not None:
            text += f"/{self._nonce}"
        return text

    def __repr__(self) -> str:
        return f"TransactionId.from_string('{self}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransactionId):
            return NotImplemented
        return (self._account_id, self._valid_start, self._scheduled, self._nonce) == (
            other._account_id, other._valid_start, other._scheduled, other._nonce)

    def __hash__(self) -> int:
        return hash((self._account_id, self._valid_start, self._scheduled, self._nonce))


__all__ = ["Timestamp", "TransactionId"]
