"""
Recovery helpers for the Hedera Python SDK.

Backoff policies used while submitting to busy nodes and polling receipts.
"""

from .retry import RetryPolicy, ExponentialBackoff, FixedBackoff

__all__ = [
    "RetryPolicy",
    "ExponentialBackoff",
    "FixedBackoff",
]
