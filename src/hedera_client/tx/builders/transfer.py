"""
Transfer transaction builder.

Moves hbar, fungible tokens and NFTs between accounts in one atomic
transaction. Hbar and fungible amounts for the same account are merged, so the
body carries one entry per account.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Type, Union

from ...hbar import Hbar
from ...ids import AccountId, NftId, TokenId
from ..bodies import CryptoTransferBody, HbarTransfer, NftTransfer, TokenTransfer, TokenTransferList
from .base import Transaction, BuilderError


class TransferTransaction(Transaction[CryptoTransferBody]):
    """Builder for CryptoTransfer transactions."""

    @property
    def body_cls(self) -> Type[CryptoTransferBody]:
        return CryptoTransferBody

    @property
    def hbar_transfers(self) -> Dict[AccountId, Hbar]:
        return {t.account_id: t.amount for t in self._body.hbar_transfers}

    @property
    def token_transfers(self) -> Dict[TokenId, Dict[AccountId, int]]:
        return {
            tl.token_id: {t.account_id: t.amount for t in tl.transfers}
            for tl in self._body.token_transfers
            if tl.transfers
        }

    @property
    def token_nft_transfers(self) -> Dict[TokenId, List[NftTransfer]]:
        return {
            tl.token_id: list(tl.nft_transfers)
            for tl in self._body.token_transfers
            if tl.nft_transfers
        }

    def add_hbar_transfer(self, account_id: AccountId, amount: Hbar,
                          is_approved: bool = False) -> TransferTransaction:
        """
        Debit (negative) or credit (positive) an account.

        All hbar amounts in a transfer must sum to zero for the network to
        accept it.
        """
        self._require_not_frozen()
        if not isinstance(amount, Hbar):
            raise BuilderError(f"amount must be Hbar, got {type(amount).__name__}")
        transfers = list(self._body.hbar_transfers)
        for index, transfer in enumerate(transfers):
            if transfer.account_id == account_id:
                transfers[index] = HbarTransfer(
                    account_id=account_id,
                    amount=Hbar.from_tinybar(transfer.amount.as_tinybar() + amount.as_tinybar()),
                    is_approved=transfer.is_approved or is_approved,
                )
                break
        else:
            transfers.append(HbarTransfer(account_id=account_id, amount=amount, is_approved=is_approved))
        return self.with_field("hbar_transfers", transfers)

    def add_approved_hbar_transfer(self, account_id: AccountId, amount: Hbar) -> TransferTransaction:
        """Spend from `account_id` under an allowance granted to the payer."""
        return self.add_hbar_transfer(account_id, amount, is_approved=True)

    def _token_list(self, lists: List[TokenTransferList], token_id: TokenId) -> TokenTransferList:
        for token_list in lists:
            if token_list.token_id == token_id:
                return token_list
        token_list = TokenTransferList(token_id=token_id)
        lists.append(token_list)
        return token_list

    def add_token_transfer(self, token_id: TokenId, account_id: AccountId, amount: int,
                           expected_decimals: Optional[int] = None,
                           is_approved: bool = False) -> TransferTransaction:
        """Debit or credit a fungible token, in its smallest unit."""
        self._require_not_frozen()
        lists = [tl.model_copy(deep=True) for tl in self._body.token_transfers]
        token_list = self._token_list(lists, token_id)
        if expected_decimals is not None:
            if token_list.expected_decimals not in (None, expected_decimals):
                raise BuilderError(
                    f"expected decimals for {token_id} already set to {token_list.expected_decimals}")
            token_list.expected_decimals = expected_decimals
        for index, transfer in enumerate(token_list.transfers):
            if transfer.account_id == account_id:
                token_list.transfers[index] = TokenTransfer(
                    account_id=account_id,
                    amount=transfer.amount + amount,
                    is_approved=transfer.is_approved or is_approved,
                )
                break
        else:
            token_list.transfers.append(
                TokenTransfer(account_id=account_id, amount=amount, is_approved=is_approved))
        return self.with_field("token_transfers", lists)

    def add_token_transfer_with_decimals(self, token_id: TokenId, account_id: AccountId,
                                         amount: int, decimals: int) -> TransferTransaction:
        """Like add_token_transfer, rejected by the network if `decimals` is wrong."""
        return self.add_token_transfer(token_id, account_id, amount, expected_decimals=decimals)

    def add_nft_transfer(self, nft_id: Union[NftId, str], sender: AccountId, receiver: AccountId,
                         is_approved: bool = False) -> TransferTransaction:
        """Move one NFT serial from `sender` to `receiver`."""
        self._require_not_frozen()
        if isinstance(nft_id, str):
            nft_id = NftId.from_string(nft_id)
        lists = [tl.model_copy(deep=True) for tl in self._body.token_transfers]
        token_list = self._token_list(lists, nft_id.token_id)
        token_list.nft_transfers.append(NftTransfer(
            sender_account_id=sender,
            receiver_account_id=receiver,
            serial=nft_id.serial,
            is_approved=is_approved,
        ))
        return self.with_field("token_transfers", lists)


__all__ = ["TransferTransaction"]
