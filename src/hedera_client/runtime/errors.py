"""
Hedera Error Model

This module provides the error handling framework for the Hedera Python SDK.
Every failure raised by the SDK is a HederaError carrying an ErrorCode, so
callers can tell a malformed id from a checksum mismatch, or a lifecycle
misuse from a ledger rejection.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, TYPE_CHECKING
from enum import IntEnum

if TYPE_CHECKING:
    from .status import Status


class ErrorCode(IntEnum):
    """SDK error codes, grouped by concern."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    ILLEGAL_STATE = 3
    ILLEGAL_ARGUMENT = 4

    # Value errors (100-199)
    HBAR_RANGE = 100

    # Identifier errors (200-299)
    BAD_ENTITY_ID = 200
    CHECKSUM_MISMATCH = 201
    BAD_LEDGER_ID = 202

    # Encoding errors (300-399)
    DECODE_ERROR = 300
    BAD_KEY = 301

    # Network errors (400-499)
    NETWORK_ERROR = 400
    MAX_ATTEMPTS_EXCEEDED = 401

    # Ledger outcome errors (500-599)
    PRECHECK_FAILED = 500
    RECEIPT_FAILED = 501


class HederaError(Exception):
    """
    Base class for all Hedera SDK errors.

    Provides structured error information: a code, a message, optional details
    and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Hedera error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class HbarRangeError(HederaError):
    """An amount has no exact, in-range tinybar equivalent."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.HBAR_RANGE, details, cause)


class BadEntityIdError(HederaError):
    """Entity id text does not follow `shard.realm.num[-checksum]`."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BAD_ENTITY_ID, details, cause)


class ChecksumMismatchError(HederaError):
    """
    The checksum attached to an id was computed for a different network.

    Not a BadEntityIdError: the id itself is well formed.
    """

    def __init__(self, entity_id: str, present_checksum: str, expected_checksum: str,
                 ledger_name: str):
        super().__init__(
            f"Checksum mismatch for {entity_id}: expected {expected_checksum} "
            f"on {ledger_name}, got {present_checksum}",
            ErrorCode.CHECKSUM_MISMATCH,
            {
                "entity_id": entity_id,
                "present_checksum": present_checksum,
                "expected_checksum": expected_checksum,
                "ledger": ledger_name,
            },
        )
        self.entity_id = entity_id
        self.present_checksum = present_checksum
        self.expected_checksum = expected_checksum


class BadLedgerIdError(HederaError):
    """Unknown network name or malformed ledger id."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BAD_LEDGER_ID, details, cause)


class IllegalStateError(HederaError):
    """Lifecycle misuse: mutating a frozen transaction, signing an unfrozen one."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.ILLEGAL_STATE, details, cause)


class DecodeError(HederaError):
    """Malformed or unsupported binary input."""

    def __init__(self, message: str = "Decode error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECODE_ERROR, details, cause)


class BadKeyError(HederaError):
    """Key material could not be parsed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BAD_KEY, details, cause)


class NetworkError(HederaError):
    """Transport-level failure reported by a node channel."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class MaxAttemptsExceededError(HederaError):
    """The retry budget of a request ran out."""

    def __init__(self, attempts: int, last_error: Optional[Exception] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Exceeded maximum attempts ({attempts})",
                         ErrorCode.MAX_ATTEMPTS_EXCEEDED, details, last_error)
        self.attempts = attempts
        self.last_error = last_error


class PrecheckStatusError(HederaError):
    """A node rejected the transaction before it reached consensus."""

    def __init__(self, status: "Status", transaction_id: Any = None):
        super().__init__(
            f"Hedera transaction `{transaction_id}` failed pre-check with the status `{status.name}`",
            ErrorCode.PRECHECK_FAILED,
            {"status": status.name, "transaction_id": str(transaction_id)},
        )
        self.status = status
        self.transaction_id = transaction_id


class ReceiptStatusError(HederaError):
    """
    The network reached consensus on the transaction and it failed.

    Retrying the same signed bytes cannot succeed; a corrected transaction
    must be built instead.
    """

    def __init__(self, status: "Status", transaction_id: Any = None, receipt: Any = None):
        super().__init__(
            f"receipt for transaction {transaction_id} contained error status {status.name}",
            ErrorCode.RECEIPT_FAILED,
            {"status": status.name, "transaction_id": str(transaction_id)},
        )
        self.status = status
        self.transaction_id = transaction_id
        self.receipt = receipt


class ErrorHandler:
    """
    Utility class for handling and categorizing errors.
    """

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Check if an error is retryable by the submission layer.

        Args:
            error: Exception to check

        Returns:
            True if the request may be sent again unchanged
        """
        if isinstance(error, NetworkError):
            return True
        if isinstance(error, PrecheckStatusError):
            return error.status.is_busy
        # Lifecycle, encoding, range and receipt errors need a different request
        return False


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
]
