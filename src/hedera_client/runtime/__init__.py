"""Runtime helpers for the Hedera Python SDK"""

from .errors import (
    ErrorCode,
    HederaError,
    HbarRangeError,
    BadEntityIdError,
    ChecksumMismatchError,
    BadLedgerIdError,
    IllegalStateError,
    DecodeError,
    BadKeyError,
    NetworkError,
    MaxAttemptsExceededError,
    PrecheckStatusError,
    ReceiptStatusError,
    ErrorHandler,
)
from .status import Status

__all__ = [
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
]
