"""
Tests for client construction and configuration.
"""

import pytest

from pydantic import ValidationError

from hedera_client import (
    AccountId,
    ChecksumMismatchError,
    Client,
    ClientConfig,
    FixedBackoff,
    Hbar,
    IllegalStateError,
    LedgerId,
    PrivateKey,
)

from helpers import FakeLedger, FakeNodeChannel


def _network(ledger, *nums):
    return {AccountId(num): FakeNodeChannel(ledger, AccountId(num)) for num in nums}


class TestClientConfig:
    """Test the configuration model."""

    def test_camel_case_keys(self):
        key = PrivateKey.from_seed("operator")
        config = ClientConfig.model_validate({
            "network": "testnet",
            "operatorAccountId": "0.0.1001",
            "operatorKey": key.to_string_der(),
            "maxAttempts": 3,
            "defaultMaxTransactionFee": 100,
        })
        assert config.operator_account_id == AccountId(1001)
        assert config.max_attempts == 3
        assert config.resolve_ledger_id() == LedgerId.TESTNET

    def test_python_names(self):
        config = ClientConfig(ledger_id="02", max_backoff=1.0, min_backoff=0.5)
        assert config.resolve_ledger_id() == LedgerId.PREVIEWNET

    def test_operator_fields_go_together(self):
        with pytest.raises(ValidationError):
            ClientConfig(operator_account_id="0.0.1001")

    def test_backoff_bounds(self):
        with pytest.raises(ValidationError):
            ClientConfig(minBackoff=2.0, maxBackoff=1.0)

    def test_to_dict_omits_key(self):
        config = ClientConfig(network="mainnet", operator_account_id="0.0.2",
                              operator_key=PrivateKey.from_seed("k").to_string_der())
        data = config.to_dict()
        assert data["operatorAccountId"] == "0.0.2"
        assert "operatorKey" not in data


class TestClient:
    """Test the client."""

    def test_from_config(self):
        ledger = FakeLedger()
        key = PrivateKey.from_seed("operator")
        client = Client.from_config(
            {"network": "testnet", "operatorAccountId": "0.0.1001", "operatorKey": key.to_string_der(),
             "defaultMaxTransactionFee": 150_000_000, "maxAttempts": 4, "minBackoff": 0, "maxBackoff": 0},
            network=_network(ledger, 3, 4),
        )
        assert client.ledger_id == LedgerId.TESTNET
        assert client.operator_account_id == AccountId(1001)
        assert client.operator_public_key == key.public_key
        assert client.default_max_transaction_fee == Hbar.from_tinybar(150_000_000)
        assert client.max_attempts == 4
        assert client.node_account_ids == [AccountId(3), AccountId(4)]

    def test_string_node_ids(self):
        client = Client({"0.0.3": FakeNodeChannel(FakeLedger(), AccountId(3))})
        assert client.node_account_ids == [AccountId(3)]

    def test_unknown_node(self):
        client = Client(_network(FakeLedger(), 3))
        with pytest.raises(IllegalStateError):
            client.channel_for(AccountId(99))

    def test_operator_checksum_checked_against_ledger(self):
        client = Client(_network(FakeLedger(), 3), ledger_id="testnet")
        with pytest.raises(ChecksumMismatchError):
            client.set_operator("0.0.123-vfmkw", PrivateKey.from_seed("x"))
        client.set_operator("0.0.123-esxsf", PrivateKey.from_seed("x"))
        assert client.operator_account_id == AccountId(123)

    def test_operator_signs(self):
        key = PrivateKey.from_seed("op")
        client = Client(_network(FakeLedger(), 3)).set_operator(AccountId(2), key)
        assert key.public_key.verify(b"m", client.operator.sign(b"m"))

    def test_attempts_come_from_backoff(self):
        client = Client(_network(FakeLedger(), 3), backoff=FixedBackoff(max_attempts=7, delay=0.0))
        assert client.max_attempts == 7
        assert Client(_network(FakeLedger(), 3)).max_attempts == 10
        assert Client(_network(FakeLedger(), 3), max_attempts=2).backoff.max_attempts == 2

    def test_attempts_must_agree_with_backoff(self):
        with pytest.raises(ValueError):
            Client(_network(FakeLedger(), 3), max_attempts=3, backoff=FixedBackoff(max_attempts=5))
