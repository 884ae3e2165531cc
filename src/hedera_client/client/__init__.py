"""
Client for the Hedera network.

Provides the Client that transactions are frozen and executed with, its
configuration model, and the NodeChannel interface callers implement.
"""

from .channel import NodeChannel
from .config import ClientConfig
from .client import Client, Operator

__all__ = [
    "Client",
    "ClientConfig",
    "NodeChannel",
    "Operator",
]
