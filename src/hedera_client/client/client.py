"""
Hedera client.

Holds what transactions need from their environment: the nodes to submit to
(each behind a NodeChannel), the ledger id ids are checksummed against, the
operator that pays for and signs transactions, and the retry budget.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from ..hbar import Hbar
from ..ids import AccountId, LedgerId
from ..keys import PrivateKey, PublicKey
from ..recovery.retry import ExponentialBackoff, RetryPolicy
from ..runtime.errors import IllegalStateError
from .channel import NodeChannel
from .config import ClientConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operator:
    """The account paying for transactions, and its signing key."""

    account_id: AccountId
    private_key: PrivateKey

    @property
    def public_key(self) -> PublicKey:
        return self.private_key.public_key

    def sign(self, message: bytes) -> bytes:
        return self.private_key.sign(message)


class Client:
    """
    Entry point for executing transactions.

    Example:
        >>> client = Client({AccountId(3): channel}, ledger_id="testnet")
        >>> client.set_operator(AccountId(1001), PrivateKey.generate())
        >>> receipt = transfer.execute(client).get_receipt(client)
    """

    def __init__(
        self,
        network: Mapping[Union[AccountId, str], NodeChannel],
        ledger_id: Optional[Union[LedgerId, str]] = None,
        operator: Optional[Operator] = None,
        default_max_transaction_fee: Optional[Hbar] = None,
        max_attempts: Optional[int] = None,
        backoff: Optional[RetryPolicy] = None,
    ):
        """
        Initialize the client.

        Args:
            network: Node account id to channel
            ledger_id: Network identity, as LedgerId, name or hex
            operator: Default payer and signer
            default_max_transaction_fee: Fee cap for transactions that set none
            max_attempts: Attempts per submission and per receipt query
                (default 10, or the attempts of `backoff`)
            backoff: Policy deciding whether and when to try again

        Raises:
            ValueError: If `max_attempts` is below 1 or disagrees with `backoff`
        """
        if backoff is None:
            backoff = ExponentialBackoff(max_attempts=10 if max_attempts is None else max_attempts)
        elif max_attempts is not None and max_attempts != backoff.max_attempts:
            raise ValueError(
                f"max_attempts={max_attempts} disagrees with the backoff policy ({backoff.max_attempts})")
        self._network: Dict[AccountId, NodeChannel] = {
            node if isinstance(node, AccountId) else AccountId.from_string(node): channel
            for node, channel in network.items()
        }
        self._ledger_id = LedgerId.of(ledger_id) if ledger_id is not None else None
        self._operator = operator
        self._default_max_transaction_fee = default_max_transaction_fee
        self._backoff = backoff

    @classmethod
    def from_config(cls, config: Union[ClientConfig, Dict[str, Any]],
                    network: Mapping[Union[AccountId, str], NodeChannel]) -> Client:
        """
        Build a client from configuration.

        Args:
            config: ClientConfig or a dictionary with its (camelCase) keys
            network: Node account id to channel
        """
        if not isinstance(config, ClientConfig):
            config = ClientConfig.model_validate(config)

        operator = None
        if config.operator_account_id is not None:
            operator = Operator(config.operator_account_id, PrivateKey.from_string(config.operator_key))

        fee = None
        if config.default_max_transaction_fee is not None:
            fee = Hbar.from_tinybar(config.default_max_transaction_fee)

        client = cls(
            network,
            ledger_id=config.resolve_ledger_id(),
            operator=operator,
            default_max_transaction_fee=fee,
            max_attempts=config.max_attempts,
            backoff=ExponentialBackoff(
                max_attempts=config.max_attempts,
                base_delay=config.min_backoff,
                max_delay=config.max_backoff,
            ),
        )
        logger.debug(f"Client configured for {client.ledger_id} with {len(client.network)} node(s)")
        return client

    @property
    def network(self) -> Dict[AccountId, NodeChannel]:
        return dict(self._network)

    @property
    def node_account_ids(self) -> List[AccountId]:
        return sorted(self._network)

    def channel_for(self, node_account_id: AccountId) -> NodeChannel:
        """
        Get the channel to a node.

        Raises:
            IllegalStateError: If the node is not part of this client's network
        """
        try:
            return self._network[node_account_id]
        except KeyError:
            raise IllegalStateError(f"node {node_account_id} is not in the client's network") from None

    @property
    def ledger_id(self) -> Optional[LedgerId]:
        return self._ledger_id

    def set_ledger_id(self, ledger_id: Union[LedgerId, str]) -> Client:
        self._ledger_id = LedgerId.of(ledger_id)
        return self

    @property
    def operator(self) -> Optional[Operator]:
        return self._operator

    @property
    def operator_account_id(self) -> Optional[AccountId]:
        return self._operator.account_id if self._operator else None

    @property
    def operator_public_key(self) -> Optional[PublicKey]:
        return self._operator.public_key if self._operator else None

    def set_operator(self, account_id: Union[AccountId, str], private_key: PrivateKey) -> Client:
        """Set the account that pays for and signs transactions by default."""
        if isinstance(account_id, str):
            account_id = AccountId.from_string(account_id)
        if self._ledger_id is not None:
            account_id.validate_checksum(self._ledger_id)
        self._operator = Operator(account_id, private_key)
        return self

    @property
    def default_max_transaction_fee(self) -> Optional[Hbar]:
        return self._default_max_transaction_fee

    def set_default_max_transaction_fee(self, fee: Hbar) -> Client:
        if fee < Hbar.ZERO:
            raise ValueError(f"default max transaction fee must not be negative, got {fee}")
        self._default_max_transaction_fee = fee
        return self

    @property
    def max_attempts(self) -> int:
        """Attempts per submission and per receipt query, as set on the backoff policy."""
        return self._backoff.max_attempts

    @property
    def backoff(self) -> RetryPolicy:
        return self._backoff

    def __repr__(self) -> str:
        return f"Client(ledger_id={self._ledger_id}, nodes={len(self._network)}, operator={self.operator_account_id})"


__all__ = ["Client", "Operator"]
