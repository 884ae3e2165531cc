"""
Key management for the Hedera Python SDK.
"""

from .ed25519 import PublicKey, PrivateKey

__all__ = [
    "PublicKey",
    "PrivateKey",
]
