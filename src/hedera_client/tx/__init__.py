"""
Transaction lifecycle for the Hedera network.

Key components:
- transaction_id.py: Timestamp and TransactionId
- bodies.py: operation bodies and TransactionBody / SchedulableTransactionBody
- builders/: one mutable builder per operation kind
- frozen.py: FrozenTransaction, signing and serialization
- receipt.py: TransactionReceipt
- execute.py: submission and receipt polling
"""

from .transaction_id import Timestamp, TransactionId
from .bodies import (
    OperationBody,
    HbarTransfer,
    TokenTransfer,
    NftTransfer,
    TokenTransferList,
    CryptoTransferBody,
    AccountCreateBody,
    TokenType,
    TokenSupplyType,
    TokenCreateBody,
    TokenMintBody,
    TokenWipeBody,
    TokenAssociateBody,
    TokenGrantKycBody,
    TokenPauseBody,
    TokenUnpauseBody,
    TransactionBody,
    SchedulableTransactionBody,
)
from .frozen import FrozenTransaction
from .receipt import TransactionReceipt
from .execute import TransactionResponse, execute_transaction, wait_for_receipt
from .builders import (
    Transaction,
    BuilderError,
    AccountCreateTransaction,
    TransferTransaction,
    TokenCreateTransaction,
    TokenMintTransaction,
    TokenWipeTransaction,
    TokenAssociateTransaction,
    TokenGrantKycTransaction,
    TokenPauseTransaction,
    TokenUnpauseTransaction,
)

__all__ = [
    "Timestamp",
    "TransactionId",
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
    "TransactionBody",
    "SchedulableTransactionBody",
    "FrozenTransaction",
    "TransactionReceipt",
    "TransactionResponse",
    "execute_transaction",
    "wait_for_receipt",
    "Transaction",
    "BuilderError",
    "AccountCreateTransaction",
    "TransferTransaction",
    "TokenCreateTransaction",
    "TokenMintTransaction",
    "TokenWipeTransaction",
    "TokenAssociateTransaction",
    "TokenGrantKycTransaction",
    "TokenPauseTransaction",
    "TokenUnpauseTransaction",
]
