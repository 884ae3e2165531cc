from .mocks import FakeLedger, FakeNodeChannel, ScriptedNodeChannel
from .factories import OPERATOR_ID, DEFAULT_NODES, mk_ed25519_keypair, mk_transaction_id, mk_client

__all__ = [
    "FakeLedger",
    "FakeNodeChannel",
    "ScriptedNodeChannel",
    "OPERATOR_ID",
    "DEFAULT_NODES",
    "mk_ed25519_keypair",
    "mk_transaction_id",
    "mk_client",
]
