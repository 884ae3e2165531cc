"""
Network response codes.

Values follow the ledger's ResponseCodeEnum. Codes the SDK does not list are
still decoded, as pseudo-members named UNRECOGNIZED_<n>, so a newer network
never breaks receipt parsing.
"""

from __future__ import annotations
from enum import IntEnum


class Status(IntEnum):
    """Response code returned by pre-check and carried in receipts."""

    OK = 0
    INVALID_TRANSACTION = 1
    PAYER_ACCOUNT_NOT_FOUND = 2
    INVALID_NODE_ACCOUNT = 3
    TRANSACTION_EXPIRED = 4
    INVALID_TRANSACTION_START = 5
    INVALID_TRANSACTION_DURATION = 6
    INVALID_SIGNATURE = 7
    MEMO_TOO_LONG = 8
    INSUFFICIENT_TX_FEE = 9
    INSUFFICIENT_PAYER_BALANCE = 10
    DUPLICATE_TRANSACTION = 11
    BUSY = 12
    NOT_SUPPORTED = 13
    INVALID_FILE_ID = 14
    INVALID_ACCOUNT_ID = 15
    INVALID_CONTRACT_ID = 16
    INVALID_TRANSACTION_ID = 17
    RECEIPT_NOT_FOUND = 18
    RECORD_NOT_FOUND = 19
    INVALID_SOLIDITY_ID = 20
    UNKNOWN = 21
    SUCCESS = 22
    FAIL_INVALID = 23
    FAIL_FEE = 24
    FAIL_BALANCE = 25
    KEY_REQUIRED = 26
    BAD_ENCODING = 27
    INSUFFICIENT_ACCOUNT_BALANCE = 28
    INVALID_ACCOUNT_AMOUNTS = 48
    EMPTY_TRANSACTION_BODY = 49
    INVALID_TRANSACTION_BODY = 50
    ACCOUNT_ID_DOES_NOT_EXIST = 60
    TRANSACTION_OVERSIZE = 64
    PLATFORM_NOT_ACTIVE = 67
    KEY_PREFIX_MISMATCH = 68
    PLATFORM_TRANSACTION_NOT_CREATED = 69
    INVALID_PAYER_ACCOUNT_ID = 71
    ACCOUNT_DELETED = 72
    ACCOUNT_REPEATED_IN_ACCOUNT_AMOUNTS = 74
    INVALID_INITIAL_BALANCE = 85

    # Token service
    ACCOUNT_FROZEN_FOR_TOKEN = 165
    TOKENS_PER_ACCOUNT_LIMIT_EXCEEDED = 166
    INVALID_TOKEN_ID = 167
    INVALID_TOKEN_DECIMALS = 168
    INVALID_TOKEN_INITIAL_SUPPLY = 169
    INVALID_TREASURY_ACCOUNT_FOR_TOKEN = 170
    INVALID_TOKEN_SYMBOL = 171
    TOKEN_HAS_NO_FREEZE_KEY = 172
    TRANSFERS_NOT_ZERO_SUM_FOR_TOKEN = 173
    MISSING_TOKEN_SYMBOL = 174
    TOKEN_SYMBOL_TOO_LONG = 175
    ACCOUNT_KYC_NOT_GRANTED_FOR_TOKEN = 176
    TOKEN_HAS_NO_KYC_KEY = 177
    INSUFFICIENT_TOKEN_BALANCE = 178
    TOKEN_WAS_DELETED = 179
    TOKEN_HAS_NO_SUPPLY_KEY = 180
    TOKEN_HAS_NO_WIPE_KEY = 181
    INVALID_TOKEN_MINT_AMOUNT = 182
    INVALID_TOKEN_BURN_AMOUNT = 183
    TOKEN_NOT_ASSOCIATED_TO_ACCOUNT = 184
    CANNOT_WIPE_TOKEN_TREASURY_ACCOUNT = 185
    INVALID_KYC_KEY = 186
    INVALID_WIPE_KEY = 187
    INVALID_FREEZE_KEY = 188
    INVALID_SUPPLY_KEY = 189
    MISSING_TOKEN_NAME = 190
    TOKEN_NAME_TOO_LONG = 191
    INVALID_WIPING_AMOUNT = 192
    TOKEN_IS_IMMUTABLE = 193
    TOKEN_ALREADY_ASSOCIATED_TO_ACCOUNT = 194
    INVALID_NFT_ID = 226
    SENDER_DOES_NOT_OWN_NFT_SERIAL_NO = 237

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int) or isinstance(value, bool):
            return None
        member = int.__new__(cls, value)
        member._name_ = f"UNRECOGNIZED_{value}"
        member._value_ = value
        return member

    @property
    def is_success(self) -> bool:
        """True for the one terminal success code."""
        return self is Status.SUCCESS

    @property
    def is_receipt_pending(self) -> bool:
        """True while a receipt query should keep polling."""
        return self in _RECEIPT_PENDING

    @property
    def is_busy(self) -> bool:
        """True when a submission may be sent to another node unchanged."""
        return self in _NODE_BUSY


_RECEIPT_PENDING = frozenset({
    Status.OK,
    Status.UNKNOWN,
    Status.BUSY,
    Status.RECEIPT_NOT_FOUND,
    Status.RECORD_NOT_FOUND,
    Status.PLATFORM_NOT_ACTIVE,
})

_NODE_BUSY = frozenset({
    Status.BUSY,
    Status.PLATFORM_TRANSACTION_NOT_CREATED,
    Status.PLATFORM_NOT_ACTIVE,
})


__all__ = ["Status"]
