"""
Transaction builders for the Hedera network.

One builder per operation kind, all sharing the freeze/sign lifecycle of
`Transaction`.
"""

from .base import Transaction, BuilderError, DEFAULT_MAX_TRANSACTION_FEE, DEFAULT_TRANSACTION_VALID_DURATION
from .accounts import AccountCreateTransaction
from .transfer import TransferTransaction
from .tokens import (
    TokenCreateTransaction,
    TokenMintTransaction,
    TokenWipeTransaction,
    TokenAssociateTransaction,
    TokenGrantKycTransaction,
    TokenPauseTransaction,
    TokenUnpauseTransaction,
)
from .registry import BUILDER_REGISTRY, lookup_builder

__all__ = [
    "Transaction",
    "BuilderError",
    "DEFAULT_MAX_TRANSACTION_FEE",
    "DEFAULT_TRANSACTION_VALID_DURATION",
    "AccountCreateTransaction",
    "TransferTransaction",
    "TokenCreateTransaction",
    "TokenMintTransaction",
    "TokenWipeTransaction",
    "TokenAssociateTransaction",
    "TokenGrantKycTransaction",
    "TokenPauseTransaction",
    "TokenUnpauseTransaction",
    "BUILDER_REGISTRY",
    "lookup_builder",
]
