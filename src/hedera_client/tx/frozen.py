"""
Frozen transactions: immutable bodies plus the signatures collected on them.

Each node gets its own body (they differ only in the node account id). The
encoded body bytes are fixed at freeze or decode time and never re-encoded, so
signatures stay valid and `to_bytes(from_bytes(b)) == b` holds.

Envelope layout (protobuf):
    TransactionList { repeated Transaction transaction_list = 1 }
    Transaction { bytes signedTransactionBytes = 5 }
    SignedTransaction { bytes bodyBytes = 1; SignatureMap sigMap = 2 }
    SignatureMap { repeated SignaturePair sigPair = 1 }
    SignaturePair { bytes pubKeyPrefix = 1; bytes ed25519 = 3 }
"""

from __future__ import annotations
import hashlib
import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple, Type

from ..codec import ProtoWriter, iter_fields, expect_bytes
from ..hbar import Hbar
from ..ids import AccountId
from ..keys import PrivateKey, PublicKey
from ..runtime.errors import BadKeyError, DecodeError, IllegalStateError
from .bodies import OperationBody, TransactionBody
from .transaction_id import TransactionId

if TYPE_CHECKING:
    from ..client import Client
    from .builders.base import Transaction
    from .execute import TransactionResponse

logger = logging.getLogger(__name__)

Signer = Callable[[bytes], bytes]

_LIST_FIELD = 1
_SIGNED_TRANSACTION_FIELD = 5
# legacy Transaction fields, still accepted when decoding
_LEGACY_SIG_MAP_FIELD = 3
_LEGACY_BODY_BYTES_FIELD = 4


def _encode_signed_transaction(body_bytes: bytes, signatures: Dict[PublicKey, bytes]) -> bytes:
    sig_map = ProtoWriter()
    for public_key, signature in signatures.items():
        pair = ProtoWriter()
        pair.bytes(1, public_key.to_bytes_raw())
        pair.bytes(3, signature)
        sig_map.message(1, pair.to_bytes())
    w = ProtoWriter()
    w.bytes(1, body_bytes)
    w.message(2, sig_map.to_bytes())
    return w.to_bytes()


def _decode_signature_map(data: bytes) -> Dict[PublicKey, bytes]:
    signatures: Dict[PublicKey, bytes] = {}
    for field, wire_type, value in iter_fields(data):
        if field != 1:
            continue
        prefix = signature = None
        for inner, inner_type, inner_value in iter_fields(expect_bytes(field, wire_type, value)):
            if inner == 1:
                prefix = expect_bytes(inner, inner_type, inner_value)
            elif inner == 3:
                signature = expect_bytes(inner, inner_type, inner_value)
            elif inner in (2, 4, 5, 6):
                raise DecodeError(f"unsupported signature type in SignaturePair field {inner}")
        if prefix is None or len(prefix) != 32:
            raise DecodeError("SignaturePair must carry the full 32-byte Ed25519 public key")
        if signature is None:
            raise DecodeError("SignaturePair without a signature")
        try:
            signatures[PublicKey(prefix)] = signature
        except BadKeyError as e:
            raise DecodeError("SignaturePair holds an invalid Ed25519 public key", cause=e)
    return signatures


def _decode_transaction(data: bytes) -> Tuple[bytes, Dict[PublicKey, bytes]]:
    """Body bytes and signatures of one protobuf Transaction."""
    body_bytes = None
    signatures: Dict[PublicKey, bytes] = {}
    for field, wire_type, value in iter_fields(data):
        if field == _SIGNED_TRANSACTION_FIELD:
            for inner, inner_type, inner_value in iter_fields(expect_bytes(field, wire_type, value)):
                if inner == 1:
                    body_bytes = expect_bytes(inner, inner_type, inner_value)
                elif inner == 2:
                    signatures = _decode_signature_map(expect_bytes(inner, inner_type, inner_value))
        elif field == _LEGACY_BODY_BYTES_FIELD:
            body_bytes = expect_bytes(field, wire_type, value)
        elif field == _LEGACY_SIG_MAP_FIELD:
            signatures = _decode_signature_map(expect_bytes(field, wire_type, value))
    if body_bytes is None:
        raise DecodeError("Transaction carries no body bytes")
    return body_bytes, signatures


def _split_transaction_list(data: bytes) -> List[bytes]:
    """
    The Transaction messages in `data`.

    Accepts a TransactionList or a single Transaction; the two are told apart
    by their field numbers.
    """
    fields = list(iter_fields(data))
    if not fields:
        raise DecodeError("empty transaction bytes")
    if all(field == _LIST_FIELD for field, _, _ in fields):
        return [expect_bytes(field, wire_type, value) for field, wire_type, value in fields]
    return [data]


class FrozenTransaction:
    """
    A transaction whose bodies can no longer change.

    Exposes signing and serialization only. Obtained from a builder's
    `freeze()` / `freeze_with()` or from `Transaction.from_bytes()`.
    """

    def __init__(self, transaction_type: Type[Transaction], bodies: List[TransactionBody],
                 body_bytes: Optional[List[bytes]] = None,
                 signatures: Optional[List[Dict[PublicKey, bytes]]] = None):
        if not bodies:
            raise IllegalStateError("a frozen transaction needs at least one node")
        self._transaction_type = transaction_type
        self._bodies = bodies
        self._body_bytes = body_bytes if body_bytes is not None else [b.to_bytes() for b in bodies]
        self._signatures = signatures if signatures is not None else [{} for _ in bodies]

    @classmethod
    def from_bytes(cls, data: bytes) -> FrozenTransaction:
        """
        Decode a TransactionList (or a single Transaction).

        Raises:
            DecodeError: On malformed bytes, an unsupported operation, or
                nodes that disagree on the transaction id or the operation
        """
        from .builders.registry import lookup_builder

        bodies: List[TransactionBody] = []
        body_bytes: List[bytes] = []
        signatures: List[Dict[PublicKey, bytes]] = []
        for transaction in _split_transaction_list(data):
            raw_body, node_signatures = _decode_transaction(transaction)
            bodies.append(TransactionBody.from_bytes(raw_body))
            body_bytes.append(raw_body)
            signatures.append(node_signatures)

        first = bodies[0]
        if first.data is None:
            raise DecodeError("transaction body has no operation")
        for body in bodies[1:]:
            if body.transaction_id != first.transaction_id:
                raise DecodeError(
                    f"transaction list mixes transaction ids {first.transaction_id} and {body.transaction_id}")
            if body.model_copy(update={"node_account_id": None}) != first.model_copy(update={"node_account_id": None}):
                raise DecodeError("transaction list bodies differ in more than the node account id")

        return cls(lookup_builder(first.data.kind), bodies, body_bytes, signatures)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def transaction_type(self) -> Type[Transaction]:
        return self._transaction_type

    @property
    def transaction_id(self) -> Optional[TransactionId]:
        return self._bodies[0].transaction_id

    @property
    def node_account_ids(self) -> List[AccountId]:
        return [b.node_account_id for b in self._bodies]

    @property
    def max_transaction_fee(self) -> Hbar:
        return Hbar.from_tinybar(self._bodies[0].transaction_fee)

    @property
    def transaction_valid_duration(self) -> Optional[timedelta]:
        return self._bodies[0].transaction_valid_duration

    @property
    def transaction_memo(self) -> str:
        return self._bodies[0].memo

    @property
    def operation(self) -> OperationBody:
        """A copy of the operation body."""
        return self._bodies[0].data.model_copy(deep=True)

    def get_signatures(self) -> Dict[AccountId, Dict[PublicKey, bytes]]:
        """Signatures per node, keyed by signer public key."""
        return {
            body.node_account_id: dict(signatures)
            for body, signatures in zip(self._bodies, self._signatures)
        }

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign(self, private_key: PrivateKey) -> FrozenTransaction:
        return self.sign_with(private_key.public_key, private_key.sign)

    def sign_with(self, public_key: PublicKey, signer: Signer) -> FrozenTransaction:
        """
        Sign every node's body with `signer`.

        A public key that already signed is skipped.
        """
        added = 0
        for body_bytes, signatures in zip(self._body_bytes, self._signatures):
            if public_key in signatures:
                continue
            signatures[public_key] = signer(body_bytes)
            added += 1
        if added:
            logger.debug(f"Signed {self.transaction_id} with {public_key.to_string_raw()[:16]}... "
                         f"for {added} node(s)")
        return self

    def sign_with_operator(self, client: Client) -> FrozenTransaction:
        operator = client.operator
        if operator is None:
            raise IllegalStateError("client must have an operator to sign with the operator")
        return self.sign_with(operator.public_key, operator.sign)

    def add_signature(self, public_key: PublicKey, signature: bytes) -> FrozenTransaction:
        """
        Attach a signature produced elsewhere.

        Only meaningful for a transaction bound to a single node, since each
        node's body is signed separately.
        """
        if len(self._bodies) != 1:
            raise IllegalStateError(
                "add_signature requires a transaction frozen for exactly one node "
                f"(this one has {len(self._bodies)})")
        self._signatures[0].setdefault(public_key, bytes(signature))
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _index_of(self, node_account_id: AccountId) -> int:
        for index, body in enumerate(self._bodies):
            if body.node_account_id == node_account_id:
                return index
        raise IllegalStateError(f"transaction is not bound to node {node_account_id}")

    def _signed_transaction_bytes(self, index: int) -> bytes:
        return _encode_signed_transaction(self._body_bytes[index], self._signatures[index])

    def _transaction_bytes(self, index: int) -> bytes:
        w = ProtoWriter()
        w.bytes(_SIGNED_TRANSACTION_FIELD, self._signed_transaction_bytes(index))
        return w.to_bytes()

    def body_bytes_for(self, node_account_id: AccountId) -> bytes:
        """The exact body bytes signatures for `node_account_id` cover."""
        return self._body_bytes[self._index_of(node_account_id)]

    def transaction_bytes_for(self, node_account_id: AccountId) -> bytes:
        """The single protobuf Transaction submitted to `node_account_id`."""
        return self._transaction_bytes(self._index_of(node_account_id))

    def to_bytes(self) -> bytes:
        """Encode as a TransactionList, one entry per node."""
        w = ProtoWriter()
        for index in range(len(self._bodies)):
            w.message(_LIST_FIELD, self._transaction_bytes(index))
        return w.to_bytes()

    def get_transaction_hash(self) -> bytes:
        """SHA-384 of the first node's signed transaction bytes."""
        return hashlib.sha384(self._signed_transaction_bytes(0)).digest()

    def get_transaction_hash_for(self, node_account_id: AccountId) -> bytes:
        return hashlib.sha384(self._signed_transaction_bytes(self._index_of(node_account_id))).digest()

    def get_transaction_hash_per_node(self) -> Dict[AccountId, bytes]:
        return {
            body.node_account_id: hashlib.sha384(self._signed_transaction_bytes(index)).digest()
            for index, body in enumerate(self._bodies)
        }

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def execute(self, client: Client) -> TransactionResponse:
        """Submit to the network through `client`; see `tx.execute`."""
        from .execute import execute_transaction

        return execute_transaction(self, client)

    def __str__(self) -> str:
        first = self._bodies[0]
        signers = []
        for body, signatures in zip(self._bodies, self._signatures):
            keys = ", ".join(sorted(k.to_string_raw() for k in signatures))
            signers.append(f"{body.node_account_id}: [{keys}]")
        return (
            f"{self._transaction_type.__name__}("
            f"node_account_ids=[{', '.join(str(n) for n in self.node_account_ids)}], "
            f"transaction_id={first.transaction_id}, "
            f"max_transaction_fee={self.max_transaction_fee}, "
            f"transaction_valid_duration={first.transaction_valid_duration!r}, "
            f"memo={first.memo!r}, "
            f"operation={first.data!r}, "
            f"signatures={{{'; '.join(signers)}}})"
        )

    def __repr__(self) -> str:
        return f"<FrozenTransaction {self._transaction_type.__name__} {self.transaction_id}>"


__all__ = ["FrozenTransaction", "Signer"]
