"""
Node channel interface.

The transport to a consensus node is supplied by the caller; the SDK only
needs these two calls. Implementations report transport failures as
NetworkError so the execution layer can try another node.
"""

from abc import ABC, abstractmethod

from ..runtime.status import Status
from ..tx.receipt import TransactionReceipt
from ..tx.transaction_id import TransactionId


class NodeChannel(ABC):
    """One consensus node's transaction and receipt endpoints."""

    @abstractmethod
    def submit_transaction(self, transaction_bytes: bytes) -> Status:
        """
        Submit one encoded protobuf Transaction.

        Returns:
            The node's precheck status
        """
        pass

    @abstractmethod
    def get_transaction_receipt(self, transaction_id: TransactionId) -> TransactionReceipt:
        """Ask the node for the current receipt of `transaction_id`."""
        pass


__all__ = ["NodeChannel"]
