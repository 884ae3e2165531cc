"""
Base transaction builder for the Hedera network.

A builder collects the operation fields and the framing (nodes, transaction
id, fee, valid duration, memo) while it is mutable. `freeze()` turns it into a
FrozenTransaction holding the exact body bytes every signature covers; from
then on the builder refuses further changes.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar, Generic, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from ...hbar import Hbar
from ...ids import AccountId
from ...keys import PrivateKey, PublicKey
from ...runtime.errors import DecodeError, ErrorCode, HederaError, IllegalStateError
from ..bodies import OperationBody, SchedulableTransactionBody, TransactionBody
from ..frozen import FrozenTransaction
from ..transaction_id import TransactionId

if TYPE_CHECKING:
    from ...client import Client

logger = logging.getLogger(__name__)

BodyT = TypeVar("BodyT", bound=OperationBody)
T = TypeVar("T", bound="Transaction")

DEFAULT_MAX_TRANSACTION_FEE = Hbar(2)
DEFAULT_TRANSACTION_VALID_DURATION = timedelta(seconds=120)


class BuilderError(HederaError):
    """A builder field was given a value of the wrong type or range."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.ILLEGAL_ARGUMENT, cause=cause)


class Transaction(Generic[BodyT], ABC):
    """
    Base class for all transaction builders.

    Generic over BodyT = the operation body model this builder fills in.
    """

    default_max_transaction_fee: ClassVar[Hbar] = DEFAULT_MAX_TRANSACTION_FEE

    def __init__(self):
        """Initialize the builder."""
        self._body: BodyT = self.body_cls()
        self._node_account_ids: List[AccountId] = []
        self._transaction_id: Optional[TransactionId] = None
        self._max_transaction_fee: Optional[Hbar] = None
        self._transaction_valid_duration = DEFAULT_TRANSACTION_VALID_DURATION
        self._memo = ""
        self._frozen: Optional[FrozenTransaction] = None

    @property
    @abstractmethod
    def body_cls(self) -> Type[BodyT]:
        """Get the operation body class."""
        pass

    @property
    def tx_type(self) -> str:
        """Get the transaction type name."""
        return type(self).__name__

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def _require_not_frozen(self) -> None:
        if self._frozen is not None:
            raise IllegalStateError(
                f"{self.tx_type} is immutable; it has probably been frozen",
                {"transaction_id": str(self._transaction_id)},
            )

    def with_field(self: T, name: str, value: Any) -> T:
        """
        Set an operation field (chainable).

        Args:
            name: Field name on the operation body
            value: Field value

        Returns:
            Self for chaining

        Raises:
            IllegalStateError: If the builder has been frozen
            BuilderError: If the value does not fit the field
        """
        self._require_not_frozen()
        try:
            setattr(self._body, name, value)
        except ValidationError as e:
            raise BuilderError(f"Invalid value for {self.tx_type}.{name}: {value!r}", cause=e)
        return self

    def get_field(self, name: str) -> Any:
        return getattr(self._body, name)

    @property
    def body(self) -> BodyT:
        """A copy of the operation body as currently configured."""
        return self._body.model_copy(deep=True)

    @property
    def is_frozen(self) -> bool:
        return self._frozen is not None

    @property
    def node_account_ids(self) -> List[AccountId]:
        return list(self._node_account_ids)

    def set_node_account_ids(self: T, node_account_ids: List[Union[AccountId, str]]) -> T:
        """Set the nodes this transaction may be submitted to."""
        self._require_not_frozen()
        nodes = [n if isinstance(n, AccountId) else AccountId.from_string(n) for n in node_account_ids]
        if not nodes:
            raise BuilderError("node_account_ids must not be empty")
        self._node_account_ids = nodes
        return self

    @property
    def transaction_id(self) -> Optional[TransactionId]:
        return self._transaction_id

    def set_transaction_id(self: T, transaction_id: TransactionId) -> T:
        self._require_not_frozen()
        if not isinstance(transaction_id, TransactionId):
            raise BuilderError(f"transaction_id must be a TransactionId, got {type(transaction_id).__name__}")
        self._transaction_id = transaction_id
        return self

    @property
    def max_transaction_fee(self) -> Optional[Hbar]:
        return self._max_transaction_fee

    def set_max_transaction_fee(self: T, fee: Union[Hbar, int, Decimal, str]) -> T:
        """Set the most the payer is willing to pay; plain numbers are hbar."""
        self._require_not_frozen()
        fee = fee if isinstance(fee, Hbar) else Hbar(fee)
        if fee < Hbar.ZERO:
            raise BuilderError(f"max_transaction_fee must not be negative, got {fee}")
        self._max_transaction_fee = fee
        return self

    @property
    def transaction_valid_duration(self) -> timedelta:
        return self._transaction_valid_duration

    def set_transaction_valid_duration(self: T, duration: timedelta) -> T:
        self._require_not_frozen()
        if duration < timedelta(0):
            raise BuilderError(f"transaction_valid_duration must not be negative, got {duration}")
        self._transaction_valid_duration = duration
        return self

    @property
    def transaction_memo(self) -> str:
        return self._memo

    def set_transaction_memo(self: T, memo: str) -> T:
        self._require_not_frozen()
        self._memo = memo
        return self

    # ------------------------------------------------------------------
    # Freezing
    # ------------------------------------------------------------------

    def freeze(self) -> FrozenTransaction:
        """Freeze without a client: node ids and transaction id must be set."""
        return self.freeze_with(None)

    def freeze_with(self, client: Optional[Client]) -> FrozenTransaction:
        """
        Freeze the builder, filling missing framing from `client`.

        A missing transaction id is generated for the client's operator,
        missing node ids are the client's network and a missing max fee is
        the client's default (or this kind's default). If freezing fails
        the builder is left as it was.

        Returns:
            The frozen transaction; the same object on every call

        Raises:
            IllegalStateError: If the transaction id or node ids are missing
                and cannot be taken from the client
        """
        if self._frozen is not None:
            return self._frozen

        transaction_id = self._transaction_id
        if transaction_id is None:
            if client is None or client.operator is None:
                raise IllegalStateError(
                    "transaction ID must be set, or an operator must be provided with freeze_with()")
            transaction_id = TransactionId.generate(client.operator.account_id)

        node_account_ids = self._node_account_ids
        if not node_account_ids:
            if client is None:
                raise IllegalStateError(
                    "node_account_ids must be set, or a client must be provided with freeze_with()")
            node_account_ids = client.node_account_ids
            if not node_account_ids:
                raise IllegalStateError("the client has no nodes to take node_account_ids from")

        fee = self._max_transaction_fee
        if fee is None:
            if client is not None and client.default_max_transaction_fee is not None:
                fee = client.default_max_transaction_fee
            else:
                fee = self.default_max_transaction_fee

        body = self._body.model_copy(deep=True)
        self._on_freeze(body, transaction_id)

        bodies = [
            TransactionBody(
                transaction_id=transaction_id,
                node_account_id=node_account_id,
                transaction_fee=fee.as_tinybar(),
                transaction_valid_duration=self._transaction_valid_duration,
                memo=self._memo,
                data=body.model_copy(deep=True),
            )
            for node_account_id in node_account_ids
        ]
        frozen = FrozenTransaction(type(self), bodies)

        # Nothing on the builder changes unless the freeze succeeds
        self._transaction_id = transaction_id
        self._node_account_ids = list(node_account_ids)
        self._max_transaction_fee = fee
        self._body = body
        self._frozen = frozen
        logger.debug(f"Froze {self.tx_type} {transaction_id} for {len(bodies)} node(s)")
        return frozen

    def _on_freeze(self, body: BodyT, transaction_id: TransactionId) -> None:
        """Fill operation defaults on `body` that depend on the framing."""
        pass

    # ------------------------------------------------------------------
    # Delegation to the frozen transaction
    # ------------------------------------------------------------------

    def _require_frozen(self, action: str) -> FrozenTransaction:
        if self._frozen is None:
            raise IllegalStateError(f"{action} requires the transaction to be frozen")
        return self._frozen

    def sign(self, private_key: PrivateKey) -> FrozenTransaction:
        return self._require_frozen("Signing").sign(private_key)

    def sign_with(self, public_key: PublicKey, signer) -> FrozenTransaction:
        return self._require_frozen("Signing").sign_with(public_key, signer)

    def to_bytes(self) -> bytes:
        return self._require_frozen("Serialization").to_bytes()

    def execute(self, client: Client):
        """Freeze with `client`, sign with its operator and submit."""
        return self.freeze_with(client).sign_with_operator(client).execute(client)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def build_scheduled_body(self) -> SchedulableTransactionBody:
        """The operation, fee and memo as they would be placed in a schedule."""
        fee = self._max_transaction_fee or self.default_max_transaction_fee
        return SchedulableTransactionBody(
            transaction_fee=fee.as_tinybar(),
            memo=self._memo,
            data=self._body.model_copy(deep=True),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> FrozenTransaction:
        """
        Decode a signed transaction list.

        Called on a subclass, the decoded operation must be of that kind.

        Raises:
            DecodeError: If the bytes are malformed, the nodes disagree, or
                the operation is of another kind
        """
        frozen = FrozenTransaction.from_bytes(data)
        if cls is not Transaction and not issubclass(frozen.transaction_type, cls):
            raise DecodeError(f"expected {cls.__name__}, got {frozen.transaction_type.__name__}")
        return frozen

    @classmethod
    def _builder_for(cls, operation: Optional[OperationBody]) -> Transaction:
        from .registry import lookup_builder

        if operation is None:
            raise DecodeError("transaction body has no operation")
        builder_cls = lookup_builder(operation.kind)
        if cls is not Transaction and not issubclass(builder_cls, cls):
            raise DecodeError(f"expected {cls.__name__}, got {builder_cls.__name__}")
        builder = builder_cls()
        builder._body = operation.model_copy(deep=True)
        return builder

    @classmethod
    def from_transaction_body(cls, body: Union[TransactionBody, bytes]) -> Transaction:
        """A mutable builder holding everything `body` carries."""
        if isinstance(body, bytes):
            body = TransactionBody.from_bytes(body)
        builder = cls._builder_for(body.data)
        builder._transaction_id = body.transaction_id
        if body.node_account_id is not None:
            builder._node_account_ids = [body.node_account_id]
        builder._max_transaction_fee = Hbar.from_tinybar(body.transaction_fee)
        if body.transaction_valid_duration is not None:
            builder._transaction_valid_duration = body.transaction_valid_duration
        builder._memo = body.memo
        return builder

    @classmethod
    def from_scheduled_transaction(cls, scheduled: Union[SchedulableTransactionBody, bytes]) -> Transaction:
        """
        A mutable builder for the operation inside a schedule.

        Node ids and transaction id are left unset.
        """
        if isinstance(scheduled, bytes):
            scheduled = SchedulableTransactionBody.from_bytes(scheduled)
        builder = cls._builder_for(scheduled.data)
        builder._max_transaction_fee = Hbar.from_tinybar(scheduled.transaction_fee)
        builder._memo = scheduled.memo
        return builder

    def __repr__(self) -> str:
        state = "frozen" if self._frozen is not None else "building"
        return f"{self.tx_type}({state}, transaction_id={self._transaction_id}, body={self._body!r})"


__all__ = [
    "Transaction",
    "BuilderError",
    "DEFAULT_MAX_TRANSACTION_FEE",
    "DEFAULT_TRANSACTION_VALID_DURATION",
]
