"""
Transaction submission and receipt polling.

Provides the submit-then-wait flow on top of the client's node channels:
    1. execute_transaction() sends the signed bytes to one of the
       transaction's nodes, moving on to the next node while nodes report
       they are busy
    2. TransactionResponse.get_receipt() polls that node until the receipt
       status is final
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..ids import AccountId
from ..runtime.errors import ErrorHandler, MaxAttemptsExceededError, NetworkError, PrecheckStatusError
from ..runtime.status import Status
from .receipt import TransactionReceipt
from .transaction_id import TransactionId

if TYPE_CHECKING:
    from ..client import Client
    from .frozen import FrozenTransaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionResponse:
    """
    Acknowledgement that a node accepted a transaction for consensus.

    Acceptance is not success: the receipt carries the final status.
    """

    node_id: AccountId
    transaction_id: TransactionId
    transaction_hash: bytes

    def get_receipt(self, client: Client, validate_status: bool = True) -> TransactionReceipt:
        """
        Wait for the receipt of this transaction.

        Args:
            client: Client whose channel to `node_id` is queried
            validate_status: Raise on a final status other than SUCCESS

        Returns:
            The final receipt

        Raises:
            ReceiptStatusError: If the final status is not SUCCESS
            MaxAttemptsExceededError: If the status never became final
        """
        return wait_for_receipt(client, self.node_id, self.transaction_id, validate_status)

    def __str__(self) -> str:
        return f"TransactionResponse(node_id={self.node_id}, transaction_id={self.transaction_id}, " \
               f"transaction_hash={self.transaction_hash.hex()})"


def execute_transaction(transaction: FrozenTransaction, client: Client) -> TransactionResponse:
    """
    Submit a frozen, signed transaction.

    Nodes are tried in the transaction's order. The client's backoff policy
    decides whether a failed attempt is repeated: busy statuses and transport
    failures move on to the next node after a delay, any other non-OK
    precheck status is final.

    Raises:
        PrecheckStatusError: If a node rejected the transaction
        MaxAttemptsExceededError: If every attempt met a busy node
    """
    nodes = transaction.node_account_ids
    policy = client.backoff
    attempt = 0

    while True:
        attempt += 1
        node_id = nodes[(attempt - 1) % len(nodes)]
        channel = client.channel_for(node_id)
        logger.debug(f"Submitting {transaction.transaction_id} to node {node_id} (attempt {attempt})")

        try:
            status = channel.submit_transaction(transaction.transaction_bytes_for(node_id))
        except NetworkError as e:
            error: Exception = e
            logger.warning(f"Node {node_id} unreachable for {transaction.transaction_id}: {e}")
        else:
            if status == Status.OK:
                logger.info(f"Transaction {transaction.transaction_id} accepted by node {node_id}")
                return TransactionResponse(
                    node_id=node_id,
                    transaction_id=transaction.transaction_id,
                    transaction_hash=transaction.get_transaction_hash_for(node_id),
                )
            error = PrecheckStatusError(status, transaction.transaction_id)
            logger.warning(f"Node {node_id} answered {status.name} for {transaction.transaction_id}")

        if not ErrorHandler.is_retryable(error):
            raise error
        if not policy.should_retry(attempt, error):
            raise MaxAttemptsExceededError(attempt, error,
                                           {"transaction_id": str(transaction.transaction_id)})
        policy.backoff(attempt, str(error))


def wait_for_receipt(client: Client, node_id: AccountId, transaction_id: TransactionId,
                     validate_status: bool = True) -> TransactionReceipt:
    """
    Poll `node_id` until the receipt of `transaction_id` is final.

    UNKNOWN, OK, BUSY, RECEIPT_NOT_FOUND, RECORD_NOT_FOUND and
    PLATFORM_NOT_ACTIVE mean "ask again"; anything else is the outcome.
    """
    channel = client.channel_for(node_id)
    policy = client.backoff
    last_error: Optional[Exception] = None

    for attempt in range(1, policy.max_attempts + 1):
        try:
            receipt = channel.get_transaction_receipt(transaction_id)
        except NetworkError as e:
            last_error = e
            logger.warning(f"Receipt query for {transaction_id} to node {node_id} failed: {e}")
        else:
            if not receipt.status.is_receipt_pending:
                logger.debug(f"Receipt for {transaction_id}: {receipt.status.name}")
                if validate_status:
                    receipt.validate_status(transaction_id)
                return receipt
            logger.debug(f"Receipt for {transaction_id} not final yet ({receipt.status.name})")

        if attempt < policy.max_attempts:
            policy.backoff(attempt, f"receipt pending for {transaction_id}")

    raise MaxAttemptsExceededError(policy.max_attempts, last_error,
                                   {"transaction_id": str(transaction_id), "node_id": str(node_id)})


__all__ = ["TransactionResponse", "execute_transaction", "wait_for_receipt"]
