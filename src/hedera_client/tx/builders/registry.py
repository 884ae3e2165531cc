"""
Transaction builder registry.

Maps the operation kind found in a decoded body to the builder class that
represents it.
"""

from typing import Dict, Type

from ...runtime.errors import DecodeError
from .base import Transaction
from .accounts import AccountCreateTransaction
from .transfer import TransferTransaction
from .tokens import (
    TokenAssociateTransaction,
    TokenCreateTransaction,
    TokenGrantKycTransaction,
    TokenMintTransaction,
    TokenPauseTransaction,
    TokenUnpauseTransaction,
    TokenWipeTransaction,
)

# Builder registry - maps operation kinds to builder classes
BUILDER_REGISTRY: Dict[str, Type[Transaction]] = {
    "crypto_transfer": TransferTransaction,
    "crypto_create_account": AccountCreateTransaction,
    "token_creation": TokenCreateTransaction,
    "token_mint": TokenMintTransaction,
    "token_wipe": TokenWipeTransaction,
    "token_associate": TokenAssociateTransaction,
    "token_grant_kyc": TokenGrantKycTransaction,
    "token_pause": TokenPauseTransaction,
    "token_unpause": TokenUnpauseTransaction,
}


def lookup_builder(kind: str) -> Type[Transaction]:
    """
    Get the builder class for an operation kind.

    Raises:
        DecodeError: If no builder handles `kind`
    """
    try:
        return BUILDER_REGISTRY[kind]
    except KeyError:
        raise DecodeError(f"unsupported transaction kind: {kind}") from None


__all__ = ["BUILDER_REGISTRY", "lookup_builder"]
