"""
Account transaction builders.
"""

from __future__ import annotations
from datetime import timedelta
from decimal import Decimal
from typing import ClassVar, Type, Union

from ...hbar import Hbar
from ...keys import PublicKey
from ..bodies import AccountCreateBody
from .base import Transaction


class AccountCreateTransaction(Transaction[AccountCreateBody]):
    """Builder for CryptoCreateAccount transactions."""

    default_max_transaction_fee: ClassVar[Hbar] = Hbar(5)

    @property
    def body_cls(self) -> Type[AccountCreateBody]:
        return AccountCreateBody

    @property
    def key(self):
        return self._body.key

    def set_key(self, key: PublicKey) -> AccountCreateTransaction:
        """Set the key that must sign for the new account."""
        return self.with_field("key", key)

    @property
    def initial_balance(self) -> Hbar:
        return self._body.initial_balance

    def set_initial_balance(self, balance: Union[Hbar, int, Decimal]) -> AccountCreateTransaction:
        """Set the hbar moved from the payer into the new account."""
        return self.with_field("initial_balance", balance)

    def set_receiver_signature_required(self, required: bool) -> AccountCreateTransaction:
        return self.with_field("receiver_signature_required", required)

    def set_auto_renew_period(self, period: timedelta) -> AccountCreateTransaction:
        return self.with_field("auto_renew_period", period)

    def set_account_memo(self, memo: str) -> AccountCreateTransaction:
        return self.with_field("memo", memo)

    def set_max_automatic_token_associations(self, count: int) -> AccountCreateTransaction:
        return self.with_field("max_automatic_token_associations", count)
