"""
Token transaction builders for the Hedera Token Service.

Provides builders for token creation, supply changes, account association,
KYC and pausing.
"""

from __future__ import annotations
from datetime import timedelta
from typing import ClassVar, List, Optional, Type, Union

from ...hbar import Hbar
from ...ids import AccountId, TokenId
from ...keys import PublicKey
from ..bodies import (
    DEFAULT_AUTO_RENEW_PERIOD,
    TokenAssociateBody,
    TokenCreateBody,
    TokenGrantKycBody,
    TokenMintBody,
    TokenPauseBody,
    TokenSupplyType,
    TokenType,
    TokenUnpauseBody,
    TokenWipeBody,
)
from ..transaction_id import Timestamp, TransactionId
from .base import Transaction

TokenLike = Union[TokenId, str]
AccountLike = Union[AccountId, str]


class TokenCreateTransaction(Transaction[TokenCreateBody]):
    """
    Builder for TokenCreation transactions.

    The auto-renew period defaults to about 90 days; when it is set and no
    auto-renew account is, the payer of the transaction renews the token.
    """

    default_max_transaction_fee: ClassVar[Hbar] = Hbar(40)

    def __init__(self):
        super().__init__()
        self._body.auto_renew_period = DEFAULT_AUTO_RENEW_PERIOD

    @property
    def body_cls(self) -> Type[TokenCreateBody]:
        return TokenCreateBody

    def set_token_name(self, name: str) -> TokenCreateTransaction:
        return self.with_field("name", name)

    def set_token_symbol(self, symbol: str) -> TokenCreateTransaction:
        return self.with_field("symbol", symbol)

    def set_decimals(self, decimals: int) -> TokenCreateTransaction:
        return self.with_field("decimals", decimals)

    def set_initial_supply(self, supply: int) -> TokenCreateTransaction:
        return self.with_field("initial_supply", supply)

    def set_treasury_account_id(self, account_id: AccountLike) -> TokenCreateTransaction:
        return self.with_field("treasury_account_id", account_id)

    def set_admin_key(self, key: PublicKey) -> TokenCreateTransaction:
        return self.with_field("admin_key", key)

    def set_kyc_key(self, key: PublicKey) -> TokenCreateTransaction:
        return self.with_field("kyc_key", key)

    def set_freeze_key(self, key: PublicKey) -> TokenCreateTransaction:
        return self.with_field("freeze_key", key)

    def set_wipe_key(self, key: PublicKey) -> TokenCreateTransaction:
        return self.with_field("wipe_key", key)

    def set_supply_key(self, key: PublicKey) -> TokenCreateTransaction:
        return self.with_field("supply_key", key)

    def set_fee_schedule_key(self, key: PublicKey) -> TokenCreateTransaction:
        return self.with_field("fee_schedule_key", key)

    def set_pause_key(self, key: PublicKey) -> TokenCreateTransaction:
        return self.with_field("pause_key", key)

    def set_freeze_default(self, freeze_default: bool) -> TokenCreateTransaction:
        return self.with_field("freeze_default", freeze_default)

    def set_expiration_time(self, expiration: Timestamp) -> TokenCreateTransaction:
        """Set a fixed expiry; clears the auto-renew period."""
        self.with_field("expiration_time", expiration)
        return self.with_field("auto_renew_period", None)

    def set_auto_renew_account_id(self, account_id: AccountLike) -> TokenCreateTransaction:
        return self.with_field("auto_renew_account_id", account_id)

    def set_auto_renew_period(self, period: timedelta) -> TokenCreateTransaction:
        return self.with_field("auto_renew_period", period)

    def set_token_memo(self, memo: str) -> TokenCreateTransaction:
        return self.with_field("memo", memo)

    def set_token_type(self, token_type: TokenType) -> TokenCreateTransaction:
        return self.with_field("token_type", token_type)

    def set_supply_type(self, supply_type: TokenSupplyType) -> TokenCreateTransaction:
        return self.with_field("supply_type", supply_type)

    def set_max_supply(self, max_supply: int) -> TokenCreateTransaction:
        return self.with_field("max_supply", max_supply)

    def _on_freeze(self, body: TokenCreateBody, transaction_id: TransactionId) -> None:
        if body.auto_renew_period is not None and body.auto_renew_account_id is None:
            body.auto_renew_account_id = transaction_id.account_id


class TokenMintTransaction(Transaction[TokenMintBody]):
    """Builder for TokenMint transactions."""

    @property
    def body_cls(self) -> Type[TokenMintBody]:
        return TokenMintBody

    @property
    def token_id(self) -> Optional[TokenId]:
        return self._body.token_id

    def set_token_id(self, token_id: TokenLike) -> TokenMintTransaction:
        return self.with_field("token_id", token_id)

    def set_amount(self, amount: int) -> TokenMintTransaction:
        """Fungible units to mint, in the token's smallest denomination."""
        return self.with_field("amount", amount)

    def set_metadata(self, metadata: List[bytes]) -> TokenMintTransaction:
        """One metadata entry per NFT to mint."""
        return self.with_field("metadata", list(metadata))

    def add_metadata(self, metadata: bytes) -> TokenMintTransaction:
        return self.with_field("metadata", [*self._body.metadata, metadata])


class TokenWipeTransaction(Transaction[TokenWipeBody]):
    """Builder for TokenWipe transactions."""

    @property
    def body_cls(self) -> Type[TokenWipeBody]:
        return TokenWipeBody

    @property
    def token_id(self) -> Optional[TokenId]:
        return self._body.token_id

    def set_token_id(self, token_id: TokenLike) -> TokenWipeTransaction:
        return self.with_field("token_id", token_id)

    def set_account_id(self, account_id: AccountLike) -> TokenWipeTransaction:
        return self.with_field("account_id", account_id)

    def set_amount(self, amount: int) -> TokenWipeTransaction:
        return self.with_field("amount", amount)

    def set_serials(self, serials: List[int]) -> TokenWipeTransaction:
        return self.with_field("serials", list(serials))

    def add_serial(self, serial: int) -> TokenWipeTransaction:
        return self.with_field("serials", [*self._body.serials, serial])


class TokenAssociateTransaction(Transaction[TokenAssociateBody]):
    """Builder for TokenAssociate transactions."""

    @property
    def body_cls(self) -> Type[TokenAssociateBody]:
        return TokenAssociateBody

    def set_account_id(self, account_id: AccountLike) -> TokenAssociateTransaction:
        return self.with_field("account_id", account_id)

    def set_token_ids(self, token_ids: List[TokenLike]) -> TokenAssociateTransaction:
        return self.with_field("token_ids", list(token_ids))


class TokenGrantKycTransaction(Transaction[TokenGrantKycBody]):
    """Builder for TokenGrantKyc transactions."""

    @property
    def body_cls(self) -> Type[TokenGrantKycBody]:
        return TokenGrantKycBody

    def set_token_id(self, token_id: TokenLike) -> TokenGrantKycTransaction:
        return self.with_field("token_id", token_id)

    def set_account_id(self, account_id: AccountLike) -> TokenGrantKycTransaction:
        return self.with_field("account_id", account_id)


class TokenPauseTransaction(Transaction[TokenPauseBody]):
    """Builder for TokenPause transactions."""

    @property
    def body_cls(self) -> Type[TokenPauseBody]:
        return TokenPauseBody

    @property
    def token_id(self) -> Optional[TokenId]:
        return self._body.token_id

    def set_token_id(self, token_id: TokenLike) -> TokenPauseTransaction:
        return self.with_field("token_id", token_id)


class TokenUnpauseTransaction(Transaction[TokenUnpauseBody]):
    """Builder for TokenUnpause transactions."""

    @property
    def body_cls(self) -> Type[TokenUnpauseBody]:
        return TokenUnpauseBody

    @property
    def token_id(self) -> Optional[TokenId]:
        return self._body.token_id

    def set_token_id(self, token_id: TokenLike) -> TokenUnpauseTransaction:
        return self.with_field("token_id", token_id)


__all__ = [
    "TokenCreateTransaction",
    "TokenMintTransaction",
    "TokenWipeTransaction",
    "TokenAssociateTransaction",
    "TokenGrantKycTransaction",
    "TokenPauseTransaction",
    "TokenUnpauseTransaction",
]
