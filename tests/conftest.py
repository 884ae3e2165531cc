"""
Shared fixtures: deterministic keys, fixed transaction ids and a client wired
to an in-memory ledger.
"""

import pytest

from hedera_client import AccountId, TokenId

from helpers import FakeLedger, mk_client, mk_ed25519_keypair, mk_transaction_id


@pytest.fixture
def fake_keypair():
    """Provide a deterministic Ed25519 key pair for testing."""
    return mk_ed25519_keypair("alice")


@pytest.fixture
def second_keypair():
    return mk_ed25519_keypair("bob")


@pytest.fixture
def transaction_id():
    """A transaction id with a fixed valid start."""
    return mk_transaction_id()


@pytest.fixture
def node_ids():
    return [AccountId(3), AccountId(4)]


@pytest.fixture
def token_id():
    return TokenId(5005)


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def client(ledger):
    """A client on testnet whose nodes all talk to `ledger`."""
    return mk_client(ledger)
