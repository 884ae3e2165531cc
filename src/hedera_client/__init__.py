"""
Hedera Python SDK

This package provides the client-side model for building, signing,
serializing and submitting transactions to a Hedera network: checksummed
entity ids, the exact Hbar value type and the transaction lifecycle.
"""

# Values and identifiers
from .hbar import Hbar, HbarUnit
from .ids import LedgerId, EntityId, AccountId, TokenId, NftId
from .endpoint import Endpoint
from .keys import PrivateKey, PublicKey

# Errors and statuses
from .runtime.errors import *
from .runtime.status import Status

# Transactions
from .tx import *

# Client
from .client import Client, ClientConfig, NodeChannel, Operator

# Error recovery
from .recovery import RetryPolicy, ExponentialBackoff, FixedBackoff

__version__ = "0.1.0"
__all__ = [
    # Values and identifiers
    "Hbar",
    "HbarUnit",
    "LedgerId",
    "EntityId",
    "AccountId",
    "TokenId",
    "NftId",
    "Endpoint",
    "PrivateKey",
    "PublicKey",

    # Errors and statuses
    "ErrorCode",
    "HederaError",
    "HbarRangeError",
    "BadEntityIdError",
    "ChecksumMismatchError",
    "BadLedgerIdError",
    "IllegalStateError",
    "DecodeError",
    "BadKeyError",
    "NetworkError",
    "MaxAttemptsExceededError",
    "PrecheckStatusError",
    "ReceiptStatusError",
    "ErrorHandler",
    "Status",

    # Transactions
    "Timestamp",
    "TransactionId",
    "TransactionBody",
    "SchedulableTransactionBody",
    "TokenType",
    "TokenSupplyType",
    "Transaction",
    "BuilderError",
    "FrozenTransaction",
    "TransactionReceipt",
    "TransactionResponse",
    "AccountCreateTransaction",
    "TransferTransaction",
    "TokenCreateTransaction",
    "TokenMintTransaction",
    "TokenWipeTransaction",
    "TokenAssociateTransaction",
    "TokenGrantKycTransaction",
    "TokenPauseTransaction",
    "TokenUnpauseTransaction",

    # Client
    "Client",
    "ClientConfig",
    "NodeChannel",
    "Operator",

    # Error recovery
    "RetryPolicy",
    "ExponentialBackoff",
    "FixedBackoff",
]
