"""
Transaction bodies and their protobuf encoding.

Every operation kind is a pydantic model tagged by a `kind` literal, forming
a closed union. Each kind knows its field number inside TransactionBody and
inside SchedulableTransactionBody, which is how decoding finds the concrete
kind: by looking at which operation field is populated.
"""

from __future__ import annotations
from datetime import timedelta
from enum import IntEnum
from typing import Annotated, ClassVar, Dict, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..codec import (
    ProtoWriter,
    iter_fields,
    expect_bytes,
    expect_varint,
    to_int64,
    to_int32,
    zigzag_decode,
    unpack_int64,
    WIRE_LENGTH_DELIMITED,
)
from ..hbar import Hbar
from ..ids import AccountId, TokenId
from ..keys import PublicKey
from ..runtime.errors import BadKeyError, DecodeError
from .transaction_id import Timestamp, TransactionId

B = TypeVar("B", bound="OperationBody")
E = TypeVar("E", bound=IntEnum)
M = TypeVar("M", bound="_ProtoModel")


def _encode_duration(duration: timedelta) -> bytes:
    w = ProtoWriter()
    w.int64(1, int(duration.total_seconds()))
    return w.to_bytes()


def _decode_duration(data: bytes) -> timedelta:
    seconds = 0
    for field, wire_type, value in iter_fields(data):
        if field == 1:
            seconds = to_int64(expect_varint(field, wire_type, value))
    return timedelta(seconds=seconds)


def _decode_string(field: int, wire_type: int, value) -> str:
    try:
        return expect_bytes(field, wire_type, value).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"field {field} is not valid UTF-8", cause=e)


def _decode_key(field: int, wire_type: int, value) -> PublicKey:
    try:
        return PublicKey.from_proto_key(expect_bytes(field, wire_type, value))
    except BadKeyError as e:
        raise DecodeError(f"unsupported key in field {field}", cause=e)


def _decode_enum(enum_cls: Type[E], field: int, wire_type: int, value) -> E:
    raw = expect_varint(field, wire_type, value)
    try:
        return enum_cls(raw)
    except ValueError as e:
        raise DecodeError(f"field {field} has unknown {enum_cls.__name__} {raw}", cause=e)


class _ProtoModel(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @classmethod
    def _decoded(cls: Type[M], **fields) -> M:
        """Build from decoded fields; values the model rejects are a DecodeError."""
        try:
            return cls(**fields)
        except ValidationError as e:
            raise DecodeError(f"invalid {cls.__name__}: {e.errors()[0]['msg']}", cause=e)


class OperationBody(_ProtoModel):
    """Operation-specific part of a transaction."""

    kind: str

    # TransactionBody / SchedulableTransactionBody field numbers
    BODY_FIELD: ClassVar[int]
    SCHEDULE_FIELD: ClassVar[int]

    def to_bytes(self) -> bytes:
        raise NotImplementedError

    @classmethod
    def from_bytes(cls: Type[B], data: bytes) -> B:
        raise NotImplementedError


# =============================================================================
# Transfers
# =============================================================================

class HbarTransfer(_ProtoModel):
    """One account's hbar debit or credit (protobuf AccountAmount)."""

    account_id: AccountId
    amount: Hbar
    is_approved: bool = False

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        w.message(1, self.account_id.to_bytes())
        w.sint64(2, self.amount.as_tinybar())
        w.bool(3, self.is_approved)
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> HbarTransfer:
        account_id, amount, approved = _decode_account_amount(data)
        return cls._decoded(account_id=account_id, amount=Hbar.from_tinybar(amount), is_approved=approved)


class TokenTransfer(_ProtoModel):
    """One account's fungible token debit or credit, in the token's smallest unit."""

    account_id: AccountId
    amount: int
    is_approved: bool = False

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        w.message(1, self.account_id.to_bytes())
        w.sint64(2, self.amount)
        w.bool(3, self.is_approved)
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> TokenTransfer:
        account_id, amount, approved = _decode_account_amount(data)
        return cls._decoded(account_id=account_id, amount=amount, is_approved=approved)


def _decode_account_amount(data: bytes):
    account_id = None
    amount = 0
    approved = False
    for field, wire_type, value in iter_fields(data):
        if field == 1:
            account_id = AccountId.from_bytes(expect_bytes(field, wire_type, value))
        elif field == 2:
            amount = zigzag_decode(expect_varint(field, wire_type, value))
        elif field == 3:
            approved = bool(expect_varint(field, wire_type, value))
    if account_id is None:
        raise DecodeError("AccountAmount without accountID")
    return account_id, amount, approved


class NftTransfer(_ProtoModel):
    """Movement of one NFT serial between two accounts."""

    sender_account_id: AccountId
    receiver_account_id: AccountId
    serial: int = Field(gt=0)
    is_approved: bool = False

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        w.message(1, self.sender_account_id.to_bytes())
        w.message(2, self.receiver_account_id.to_bytes())
        w.int64(3, self.serial)
        w.bool(4, self.is_approved)
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> NftTransfer:
        sender = receiver = None
        serial = 0
        approved = False
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                sender = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 2:
                receiver = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 3:
                serial = to_int64(expect_varint(field, wire_type, value))
            elif field == 4:
                approved = bool(expect_varint(field, wire_type, value))
        if sender is None or receiver is None or serial <= 0:
            raise DecodeError("NftTransfer requires sender, receiver and a positive serial")
        return cls._decoded(sender_account_id=sender, receiver_account_id=receiver,
                   serial=serial, is_approved=approved)


class TokenTransferList(_ProtoModel):
    """All movements of one token within a transfer."""

    token_id: TokenId
    transfers: List[TokenTransfer] = Field(default_factory=list)
    nft_transfers: List[NftTransfer] = Field(default_factory=list)
    expected_decimals: Optional[int] = None

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        w.message(1, self.token_id.to_bytes())
        for transfer in self.transfers:
            w.message(2, transfer.to_bytes())
        for nft_transfer in self.nft_transfers:
            w.message(3, nft_transfer.to_bytes())
        if self.expected_decimals is not None:
            wrapper = ProtoWriter()
            wrapper.uint32(1, self.expected_decimals)
            w.message(4, wrapper.to_bytes())
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> TokenTransferList:
        token_id = None
        transfers: List[TokenTransfer] = []
        nft_transfers: List[NftTransfer] = []
        expected_decimals = None
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                token_id = TokenId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 2:
                transfers.append(TokenTransfer.from_bytes(expect_bytes(field, wire_type, value)))
            elif field == 3:
                nft_transfers.append(NftTransfer.from_bytes(expect_bytes(field, wire_type, value)))
            elif field == 4:
                expected_decimals = 0
                for inner, inner_type, inner_value in iter_fields(expect_bytes(field, wire_type, value)):
                    if inner == 1:
                        expected_decimals = expect_varint(inner, inner_type, inner_value)
        if token_id is None:
            raise DecodeError("TokenTransferList without token")
        return cls._decoded(token_id=token_id, transfers=transfers, nft_transfers=nft_transfers,
                   expected_decimals=expected_decimals)


class CryptoTransferBody(OperationBody):
    """Hbar, fungible token and NFT transfers between accounts."""

    kind: Literal["crypto_transfer"] = "crypto_transfer"
    hbar_transfers: List[HbarTransfer] = Field(default_factory=list)
    token_transfers: List[TokenTransferList] = Field(default_factory=list)

    BODY_FIELD: ClassVar[int] = 14
    SCHEDULE_FIELD: ClassVar[int] = 9

    def to_bytes(self) -> bytes:
        transfer_list = ProtoWriter()
        for transfer in self.hbar_transfers:
            transfer_list.message(1, transfer.to_bytes())
        w = ProtoWriter()
        w.message(1, transfer_list.to_bytes())
        for token_transfers in self.token_transfers:
            w.message(2, token_transfers.to_bytes())
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> CryptoTransferBody:
        hbar_transfers: List[HbarTransfer] = []
        token_transfers: List[TokenTransferList] = []
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                for inner, inner_type, inner_value in iter_fields(expect_bytes(field, wire_type, value)):
                    if inner == 1:
                        hbar_transfers.append(
                            HbarTransfer.from_bytes(expect_bytes(inner, inner_type, inner_value)))
            elif field == 2:
                token_transfers.append(TokenTransferList.from_bytes(expect_bytes(field, wire_type, value)))
        return cls._decoded(hbar_transfers=hbar_transfers, token_transfers=token_transfers)


# =============================================================================
# Accounts
# =============================================================================

DEFAULT_AUTO_RENEW_PERIOD = timedelta(seconds=7_890_000)


class AccountCreateBody(OperationBody):
    """Create a new account (protobuf CryptoCreateTransactionBody)."""

    kind: Literal["crypto_create_account"] = "crypto_create_account"
    key: Optional[PublicKey] = None
    initial_balance: Hbar = Hbar.ZERO
    receiver_signature_required: bool = False
    auto_renew_period: Optional[timedelta] = DEFAULT_AUTO_RENEW_PERIOD
    memo: str = ""
    max_automatic_token_associations: int = 0

    BODY_FIELD: ClassVar[int] = 11
    SCHEDULE_FIELD: ClassVar[int] = 7

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        if self.key is not None:
            w.message(1, self.key.to_proto_key())
        w.uint64(2, self.initial_balance.as_tinybar())
        w.bool(8, self.receiver_signature_required)
        if self.auto_renew_period is not None:
            w.message(9, _encode_duration(self.auto_renew_period))
        w.string(13, self.memo)
        w.int32(14, self.max_automatic_token_associations)
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> AccountCreateBody:
        fields = {"auto_renew_period": None}
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                fields["key"] = _decode_key(field, wire_type, value)
            elif field == 2:
                fields["initial_balance"] = Hbar.from_tinybar(to_int64(expect_varint(field, wire_type, value)))
            elif field == 8:
                fields["receiver_signature_required"] = bool(expect_varint(field, wire_type, value))
            elif field == 9:
                fields["auto_renew_period"] = _decode_duration(expect_bytes(field, wire_type, value))
            elif field == 13:
                fields["memo"] = _decode_string(field, wire_type, value)
            elif field == 14:
                fields["max_automatic_token_associations"] = to_int32(expect_varint(field, wire_type, value))
        return cls._decoded(**fields)


# =============================================================================
# Tokens
# =============================================================================

class TokenType(IntEnum):
    FUNGIBLE_COMMON = 0
    NON_FUNGIBLE_UNIQUE = 1


class TokenSupplyType(IntEnum):
    INFINITE = 0
    FINITE = 1


class TokenCreateBody(OperationBody):
    """Create a token class (protobuf TokenCreateTransactionBody)."""

    kind: Literal["token_creation"] = "token_creation"
    name: str = ""
    symbol: str = ""
    decimals: int = Field(default=0, ge=0)
    initial_supply: int = Field(default=0, ge=0)
    treasury_account_id: Optional[AccountId] = None
    admin_key: Optional[PublicKey] = None
    kyc_key: Optional[PublicKey] = None
    freeze_key: Optional[PublicKey] = None
    wipe_key: Optional[PublicKey] = None
    supply_key: Optional[PublicKey] = None
    freeze_default: bool = False
    expiration_time: Optional[Timestamp] = None
    auto_renew_account_id: Optional[AccountId] = None
    auto_renew_period: Optional[timedelta] = None
    memo: str = ""
    token_type: TokenType = TokenType.FUNGIBLE_COMMON
    supply_type: TokenSupplyType = TokenSupplyType.INFINITE
    max_supply: int = Field(default=0, ge=0)
    fee_schedule_key: Optional[PublicKey] = None
    pause_key: Optional[PublicKey] = None

    BODY_FIELD: ClassVar[int] = 29
    SCHEDULE_FIELD: ClassVar[int] = 22

    KEY_FIELDS: ClassVar[Dict[int, str]] = {
        6: "admin_key",
        7: "kyc_key",
        8: "freeze_key",
        9: "wipe_key",
        10: "supply_key",
        20: "fee_schedule_key",
        22: "pause_key",
    }

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        w.string(1, self.name)
        w.string(2, self.symbol)
        w.uint32(3, self.decimals)
        w.uint64(4, self.initial_supply)
        if self.treasury_account_id is not None:
            w.message(5, self.treasury_account_id.to_bytes())
        for field in (6, 7, 8, 9, 10):
            self._write_key(w, field)
        w.bool(11, self.freeze_default)
        if self.expiration_time is not None:
            w.message(13, self.expiration_time.to_bytes())
        if self.auto_renew_account_id is not None:
            w.message(14, self.auto_renew_account_id.to_bytes())
        if self.auto_renew_period is not None:
            w.message(15, _encode_duration(self.auto_renew_period))
        w.string(16, self.memo)
        w.enum(17, self.token_type)
        w.enum(18, self.supply_type)
        w.int64(19, self.max_supply)
        self._write_key(w, 20)
        self._write_key(w, 22)
        return w.to_bytes()

    def _write_key(self, w: ProtoWriter, field: int) -> None:
        key = getattr(self, self.KEY_FIELDS[field])
        if key is not None:
            w.message(field, key.to_proto_key())

    @classmethod
    def from_bytes(cls, data: bytes) -> TokenCreateBody:
        fields = {}
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                fields["name"] = _decode_string(field, wire_type, value)
            elif field == 2:
                fields["symbol"] = _decode_string(field, wire_type, value)
            elif field == 3:
                fields["decimals"] = expect_varint(field, wire_type, value)
            elif field == 4:
                fields["initial_supply"] = expect_varint(field, wire_type, value)
            elif field == 5:
                fields["treasury_account_id"] = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field in cls.KEY_FIELDS:
                fields[cls.KEY_FIELDS[field]] = _decode_key(field, wire_type, value)
            elif field == 11:
                fields["freeze_default"] = bool(expect_varint(field, wire_type, value))
            elif field == 13:
                fields["expiration_time"] = Timestamp.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 14:
                fields["auto_renew_account_id"] = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 15:
                fields["auto_renew_period"] = _decode_duration(expect_bytes(field, wire_type, value))
            elif field == 16:
                fields["memo"] = _decode_string(field, wire_type, value)
            elif field == 17:
                fields["token_type"] = _decode_enum(TokenType, field, wire_type, value)
            elif field == 18:
                fields["supply_type"] = _decode_enum(TokenSupplyType, field, wire_type, value)
            elif field == 19:
                fields["max_supply"] = to_int64(expect_varint(field, wire_type, value))
        return cls._decoded(**fields)


class TokenMintBody(OperationBody):
    """Mint fungible supply (`amount`) or NFTs (one per `metadata` entry)."""

    kind: Literal["token_mint"] = "token_mint"
    token_id: Optional[TokenId] = None
    amount: int = Field(default=0, ge=0)
    metadata: List[bytes] = Field(default_factory=list)

    BODY_FIELD: ClassVar[int] = 37
    SCHEDULE_FIELD: ClassVar[int] = 29

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        if self.token_id is not None:
            w.message(1, self.token_id.to_bytes())
        w.uint64(2, self.amount)
        for entry in self.metadata:
            w.message(3, entry)
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> TokenMintBody:
        token_id = None
        amount = 0
        metadata: List[bytes] = []
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                token_id = TokenId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 2:
                amount = expect_varint(field, wire_type, value)
            elif field == 3:
                metadata.append(expect_bytes(field, wire_type, value))
        return cls._decoded(token_id=token_id, amount=amount, metadata=metadata)


class TokenWipeBody(OperationBody):
    """Wipe fungible balance or NFT serials from a non-treasury account."""

    kind: Literal["token_wipe"] = "token_wipe"
    token_id: Optional[TokenId] = None
    account_id: Optional[AccountId] = None
    amount: int = Field(default=0, ge=0)
    serials: List[int] = Field(default_factory=list)

    BODY_FIELD: ClassVar[int] = 39
    SCHEDULE_FIELD: ClassVar[int] = 31

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        if self.token_id is not None:
            w.message(1, self.token_id.to_bytes())
        if self.account_id is not None:
            w.message(2, self.account_id.to_bytes())
        w.uint64(3, self.amount)
        w.packed_int64(4, self.serials)
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> TokenWipeBody:
        fields = {"serials": []}
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                fields["token_id"] = TokenId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 2:
                fields["account_id"] = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 3:
                fields["amount"] = expect_varint(field, wire_type, value)
            elif field == 4:
                fields["serials"].extend(unpack_int64(wire_type, value))
        return cls._decoded(**fields)


class TokenAssociateBody(OperationBody):
    """Associate an account with token classes so it may hold them."""

    kind: Literal["token_associate"] = "token_associate"
    account_id: Optional[AccountId] = None
    token_ids: List[TokenId] = Field(default_factory=list)

    BODY_FIELD: ClassVar[int] = 40
    SCHEDULE_FIELD: ClassVar[int] = 32

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        if self.account_id is not None:
            w.message(1, self.account_id.to_bytes())
        for token_id in self.token_ids:
            w.message(2, token_id.to_bytes())
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> TokenAssociateBody:
        account_id = None
        token_ids: List[TokenId] = []
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                account_id = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 2:
                token_ids.append(TokenId.from_bytes(expect_bytes(field, wire_type, value)))
        return cls._decoded(account_id=account_id, token_ids=token_ids)


class _TokenAccountBody(OperationBody):
    """Bodies addressing one token and one account (token=1, account=2)."""

    token_id: Optional[TokenId] = None
    account_id: Optional[AccountId] = None

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        if self.token_id is not None:
            w.message(1, self.token_id.to_bytes())
        if self.account_id is not None:
            w.message(2, self.account_id.to_bytes())
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes):
        fields = {}
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                fields["token_id"] = TokenId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 2:
                fields["account_id"] = AccountId.from_bytes(expect_bytes(field, wire_type, value))
        return cls._decoded(**fields)


class TokenGrantKycBody(_TokenAccountBody):
    """Grant KYC for a token to an account."""

    kind: Literal["token_grant_kyc"] = "token_grant_kyc"

    BODY_FIELD: ClassVar[int] = 33
    SCHEDULE_FIELD: ClassVar[int] = 25


class _TokenOnlyBody(OperationBody):
    """Bodies addressing a single token (token=1)."""

    token_id: Optional[TokenId] = None

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        if self.token_id is not None:
            w.message(1, self.token_id.to_bytes())
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes):
        token_id = None
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                token_id = TokenId.from_bytes(expect_bytes(field, wire_type, value))
        return cls._decoded(token_id=token_id)


class TokenPauseBody(_TokenOnlyBody):
    """Pause every operation on a token."""

    kind: Literal["token_pause"] = "token_pause"

    BODY_FIELD: ClassVar[int] = 46
    SCHEDULE_FIELD: ClassVar[int] = 35


class TokenUnpauseBody(_TokenOnlyBody):
    """Lift a pause."""

    kind: Literal["token_unpause"] = "token_unpause"

    BODY_FIELD: ClassVar[int] = 47
    SCHEDULE_FIELD: ClassVar[int] = 36


# =============================================================================
# Tagged union and framing
# =============================================================================

OPERATION_BODIES = (
    CryptoTransferBody,
    AccountCreateBody,
    TokenCreateBody,
    TokenMintBody,
    TokenWipeBody,
    TokenAssociateBody,
    TokenGrantKycBody,
    TokenPauseBody,
    TokenUnpauseBody,
)

AnyOperationBody = Annotated[
    Union[
        CryptoTransferBody,
        AccountCreateBody,
        TokenCreateBody,
        TokenMintBody,
        TokenWipeBody,
        TokenAssociateBody,
        TokenGrantKycBody,
        TokenPauseBody,
        TokenUnpauseBody,
    ],
    Field(discriminator="kind"),
]

_BY_BODY_FIELD: Dict[int, Type[OperationBody]] = {cls.BODY_FIELD: cls for cls in OPERATION_BODIES}
_BY_SCHEDULE_FIELD: Dict[int, Type[OperationBody]] = {cls.SCHEDULE_FIELD: cls for cls in OPERATION_BODIES}

# Field numbers from here on are extensions outside the operation oneof
_FIRST_EXTENSION_FIELD = 1000


def _decode_operation(table: Dict[int, Type[OperationBody]], field: int, wire_type: int,
                      value, message: str) -> OperationBody:
    body_cls = table.get(field)
    if body_cls is None:
        raise DecodeError(f"{message} has an unsupported operation in field {field}")
    if wire_type != WIRE_LENGTH_DELIMITED:
        raise DecodeError(f"{message} field {field} is not a message")
    return body_cls.from_bytes(value)


class TransactionBody(_ProtoModel):
    """
    A full transaction body: framing plus exactly one operation.

    One body is produced per node; they differ only in `node_account_id`.
    """

    transaction_id: Optional[TransactionId] = None
    node_account_id: Optional[AccountId] = None
    transaction_fee: int = Field(default=0, ge=0)  # tinybar
    transaction_valid_duration: Optional[timedelta] = None
    memo: str = ""
    data: Optional[AnyOperationBody] = None

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        if self.transaction_id is not None:
            w.message(1, self.transaction_id.to_bytes())
        if self.node_account_id is not None:
            w.message(2, self.node_account_id.to_bytes())
        w.uint64(3, self.transaction_fee)
        if self.transaction_valid_duration is not None:
            w.message(4, _encode_duration(self.transaction_valid_duration))
        w.string(6, self.memo)
        if self.data is not None:
            w.message(self.data.BODY_FIELD, self.data.to_bytes())
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> TransactionBody:
        fields = {}
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                fields["transaction_id"] = TransactionId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 2:
                fields["node_account_id"] = AccountId.from_bytes(expect_bytes(field, wire_type, value))
            elif field == 3:
                fields["transaction_fee"] = expect_varint(field, wire_type, value)
            elif field == 4:
                fields["transaction_valid_duration"] = _decode_duration(expect_bytes(field, wire_type, value))
            elif field == 5:
                continue  # generateRecord, deprecated
            elif field == 6:
                fields["memo"] = _decode_string(field, wire_type, value)
            elif field < _FIRST_EXTENSION_FIELD:
                if "data" in fields:
                    raise DecodeError("TransactionBody has more than one operation")
                fields["data"] = _decode_operation(_BY_BODY_FIELD, field, wire_type, value,
                                                   "TransactionBody")
        return cls._decoded(**fields)


class SchedulableTransactionBody(_ProtoModel):
    """An operation without node or transaction-id framing, as stored in a schedule."""

    transaction_fee: int = Field(default=0, ge=0)  # tinybar
    memo: str = ""
    data: Optional[AnyOperationBody] = None

    def to_bytes(self) -> bytes:
        w = ProtoWriter()
        w.uint64(1, self.transaction_fee)
        w.string(2, self.memo)
        if self.data is not None:
            w.message(self.data.SCHEDULE_FIELD, self.data.to_bytes())
        return w.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> SchedulableTransactionBody:
        fields = {}
        for field, wire_type, value in iter_fields(data):
            if field == 1:
                fields["transaction_fee"] = expect_varint(field, wire_type, value)
            elif field == 2:
                fields["memo"] = _decode_string(field, wire_type, value)
            elif field < _FIRST_EXTENSION_FIELD:
                if "data" in fields:
                    raise DecodeError("SchedulableTransactionBody has more than one operation")
                fields["data"] = _decode_operation(_BY_SCHEDULE_FIELD, field, wire_type, value,
                                                   "SchedulableTransactionBody")
        return cls._decoded(**fields)


__all__ = [
    "OperationBody",
    "HbarTransfer",
    "TokenTransfer",
    "NftTransfer",
    "TokenTransferList",
    "CryptoTransferBody",
    "AccountCreateBody",
    "TokenType",
    "TokenSupplyType",
    "TokenCreateBody",
    "TokenMintBody",
    "TokenWipeBody",
    "TokenAssociateBody",
    "TokenGrantKycBody",
    "TokenPauseBody",
    "TokenUnpauseBody",
    "OPERATION_BODIES",
    "AnyOperationBody",
    "TransactionBody",
    "SchedulableTransactionBody",
]
