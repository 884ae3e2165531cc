"""
Transaction receipts.

The receipt is the network's verdict on a transaction that reached consensus:
its final status and the entities it created or changed.
"""

from __future__ import annotations
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..codec import ProtoWriter, iter_fields, expect_bytes, expect_varint, unpack_int64
from ..ids import AccountId, TokenId
from ..runtime.errors import ReceiptStatusError
from ..runtime.status import Status
from .transaction_id import TransactionId


class TransactionReceipt(BaseModel):
    """
    Outcome of a transaction.

    `status` is UNKNOWN until the network has reached consensus; the
    remaining fields are filled only for the operations that produce them.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: Status = Status.UNKNOWN
    transaction_id: Optional[TransactionId] = None
    account_id: Optional[AccountId] = None
    token_id: Optional[TokenId] = None
    total_supply: int = 0
    serials: List[int] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> Status:
        return value if isinstance(value, Status) else Status(value)

    def validate_status(self, transaction_id: Optional[TransactionId] = None) -> TransactionReceipt:
        """
        Raise ReceiptStatusError unless the status is SUCCESS.

        Returns:
            Self, for chaining
        """
        if not self.status.is_success:
            raise ReceiptStatusError(self.status, transaction_id or self.transaction_id, self)
        return self

    def to_bytes(self) -> bytes:
        """Encode as a protobuf TransactionReceipt."""
        w = ProtoWriter()
        w.enum(1, self.status)
        if self.account_id is not None:
            w.message(2, self.account_id.to_bytes())
        if self.token_id is not None:
            w.message(10, self.token_id.to_bytes())
        w.uint64(11, self.total_supply)
        w.packed_int64(14, self.serials)
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes, transaction_id: Optional[TransactionId] = None) -> TransactionReceipt:
        """Decode a protobuf TransactionReceipt."""
        fields = {"transaction_id": transaction_id, "serials": []}
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                fields["status"] = Status(expect_varint(field, wire_type, value))
            elif field == 2:
                fields["account_id"] = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 10:
                fields["token_id"] = TokenId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 11:
                fields["total_supply"] = expect_varint(field, wire_type, value)
            elif field == 14:
                fields["serials"].extend(unpack_int64(wire_type, value))
        return cls(**fields)


__all__ = ["TransactionReceipt"]
