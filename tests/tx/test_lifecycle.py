"""
Tests for the build -> freeze -> sign lifecycle.
"""

from datetime import timedelta

import pytest

from hedera_client import (
    AccountId,
    BuilderError,
    Client,
    FrozenTransaction,
    Hbar,
    IllegalStateError,
    PrivateKey,
    TokenCreateTransaction,
    TokenPauseTransaction,
    TokenId,
    TransferTransaction,
    AccountCreateTransaction,
)
from hedera_client.tx.builders import DEFAULT_MAX_TRANSACTION_FEE


def _pause(token_id, transaction_id, node_ids):
    return (
        TokenPauseTransaction()
        .set_node_account_ids(node_ids)
        .set_transaction_id(transaction_id)
        .set_token_id(token_id)
    )


class TestBuilding:
    """Test mutation while building."""

    def test_setters_chain(self, token_id, transaction_id, node_ids):
        builder = _pause(token_id, transaction_id, node_ids).set_transaction_memo("hello")
        assert builder.token_id == token_id
        assert builder.transaction_id == transaction_id
        assert builder.node_account_ids == node_ids
        assert builder.transaction_memo == "hello"
        assert not builder.is_frozen

    def test_string_ids_accepted(self):
        builder = TokenPauseTransaction().set_token_id("0.0.5005")
        assert builder.token_id == TokenId(5005)

    def test_invalid_field_value(self):
        with pytest.raises(BuilderError):
            TokenPauseTransaction().set_token_id(12.5)

    def test_negative_fee_rejected(self):
        with pytest.raises(BuilderError):
            TokenPauseTransaction().set_max_transaction_fee(Hbar(-1))

    def test_empty_node_list_rejected(self):
        with pytest.raises(BuilderError):
            TokenPauseTransaction().set_node_account_ids([])


class TestFreezing:
    """Test the Building -> Frozen transition."""

    def test_freeze_returns_frozen_transaction(self, token_id, transaction_id, node_ids):
        frozen = _pause(token_id, transaction_id, node_ids).freeze()
        assert isinstance(frozen, FrozenTransaction)
        assert frozen.transaction_id == transaction_id
        assert frozen.node_account_ids == node_ids
        assert frozen.max_transaction_fee == DEFAULT_MAX_TRANSACTION_FEE
        assert frozen.transaction_valid_duration == timedelta(seconds=120)

    def test_freeze_is_idempotent(self, token_id, transaction_id, node_ids):
        builder = _pause(token_id, transaction_id, node_ids)
        assert builder.freeze() is builder.freeze()

    def test_mutation_after_freeze_fails(self, token_id, transaction_id, node_ids):
        builder = _pause(token_id, transaction_id, node_ids)
        builder.freeze()
        with pytest.raises(IllegalStateError):
            builder.set_token_id(TokenId(1))
        with pytest.raises(IllegalStateError):
            builder.set_transaction_memo("late")
        with pytest.raises(IllegalStateError):
            builder.set_max_transaction_fee(Hbar(1))
        with pytest.raises(IllegalStateError):
            builder.set_node_account_ids([AccountId(9)])
        assert builder.token_id == token_id

    def test_frozen_transaction_has_no_mutators(self, token_id, transaction_id, node_ids):
        frozen = _pause(token_id, transaction_id, node_ids).freeze()
        assert not hasattr(frozen, "set_token_id")
        assert not hasattr(frozen, "set_transaction_memo")

    def test_freeze_requires_transaction_id(self, token_id, node_ids):
        builder = TokenPauseTransaction().set_node_account_ids(node_ids).set_token_id(token_id)
        with pytest.raises(IllegalStateError):
            builder.freeze()

    def test_freeze_requires_nodes(self, token_id, transaction_id):
        builder = TokenPauseTransaction().set_transaction_id(transaction_id).set_token_id(token_id)
        with pytest.raises(IllegalStateError):
            builder.freeze()

    def test_freeze_with_client_fills_framing(self, client, token_id):
        frozen = TokenPauseTransaction().set_token_id(token_id).freeze_with(client)
        assert frozen.transaction_id.account_id == client.operator_account_id
        assert frozen.node_account_ids == client.node_account_ids

    def test_client_default_fee(self, client, token_id):
        client.set_default_max_transaction_fee(Hbar(7))
        frozen = TokenPauseTransaction().set_token_id(token_id).freeze_with(client)
        assert frozen.max_transaction_fee == Hbar(7)

    def test_kind_specific_default_fees(self, transaction_id, node_ids):
        create = TokenCreateTransaction().set_transaction_id(transaction_id).set_node_account_ids(node_ids)
        assert create.freeze().max_transaction_fee == Hbar(40)
        account = AccountCreateTransaction().set_transaction_id(transaction_id).set_node_account_ids(node_ids)
        assert account.freeze().max_transaction_fee == Hbar(5)

    def test_explicit_fee_wins(self, token_id, transaction_id, node_ids):
        frozen = _pause(token_id, transaction_id, node_ids).set_max_transaction_fee(Hbar(3)).freeze()
        assert frozen.max_transaction_fee == Hbar(3)

    def test_token_create_renews_from_payer(self, transaction_id, node_ids):
        frozen = (
            TokenCreateTransaction()
            .set_transaction_id(transaction_id)
            .set_node_account_ids(node_ids)
            .set_token_name("Coin")
            .set_token_symbol("C")
            .freeze()
        )
        assert frozen.operation.auto_renew_account_id == transaction_id.account_id

    def test_failed_freeze_leaves_builder_unchanged(self):
        client = Client({}, ledger_id="testnet")
        client.set_operator(AccountId(1001), PrivateKey.from_seed("operator"))
        builder = TokenCreateTransaction().set_token_name("Coin").set_token_symbol("C")
        with pytest.raises(IllegalStateError):
            builder.freeze_with(client)
        assert not builder.is_frozen
        assert builder.transaction_id is None
        assert builder.node_account_ids == []
        assert builder.max_transaction_fee is None
        assert builder.body.auto_renew_account_id is None

    def test_builder_can_freeze_after_failure(self, client, token_id):
        builder = TokenPauseTransaction().set_token_id(token_id)
        with pytest.raises(IllegalStateError):
            builder.freeze()
        frozen = builder.freeze_with(client)
        assert builder.transaction_id == frozen.transaction_id
        assert builder.node_account_ids == client.node_account_ids


class TestSigning:
    """Test signatures on frozen transactions."""

    def test_sign_before_freeze_fails(self, fake_keypair, token_id):
        private_key, _ = fake_keypair
        with pytest.raises(IllegalStateError):
            TokenPauseTransaction().set_token_id(token_id).sign(private_key)

    def test_sign_covers_every_node(self, fake_keypair, token_id, transaction_id, node_ids):
        private_key, public_key = fake_keypair
        frozen = _pause(token_id, transaction_id, node_ids).freeze().sign(private_key)
        signatures = frozen.get_signatures()
        assert set(signatures) == set(node_ids)
        for node_id, by_key in signatures.items():
            assert public_key.verify(frozen.body_bytes_for(node_id), by_key[public_key])

    def test_signing_is_idempotent(self, fake_keypair, token_id, transaction_id, node_ids):
        private_key, _ = fake_keypair
        frozen = _pause(token_id, transaction_id, node_ids).freeze()
        once = frozen.sign(private_key).to_bytes()
        twice = frozen.sign(private_key).to_bytes()
        assert once == twice
        assert all(len(by_key) == 1 for by_key in frozen.get_signatures().values())

    def test_builder_sign_after_freeze_delegates(self, fake_keypair, token_id, transaction_id, node_ids):
        private_key, public_key = fake_keypair
        builder = _pause(token_id, transaction_id, node_ids)
        frozen = builder.freeze()
        assert builder.sign(private_key) is frozen
        assert public_key in frozen.get_signatures()[node_ids[0]]

    def test_multiple_signers(self, fake_keypair, second_keypair, token_id, transaction_id, node_ids):
        frozen = _pause(token_id, transaction_id, node_ids).freeze()
        frozen.sign(fake_keypair[0]).sign(second_keypair[0])
        assert set(frozen.get_signatures()[node_ids[1]]) == {fake_keypair[1], second_keypair[1]}

    def test_sign_with_callable(self, fake_keypair, token_id, transaction_id, node_ids):
        private_key, public_key = fake_keypair
        calls = []

        def signer(message):
            calls.append(message)
            return private_key.sign(message)

        frozen = _pause(token_id, transaction_id, node_ids).freeze().sign_with(public_key, signer)
        assert len(calls) == len(node_ids)
        assert calls[0] == frozen.body_bytes_for(node_ids[0])

    def test_sign_with_operator(self, client, token_id):
        frozen = TokenPauseTransaction().set_token_id(token_id).freeze_with(client).sign_with_operator(client)
        for by_key in frozen.get_signatures().values():
            assert client.operator_public_key in by_key

    def test_add_signature_single_node(self, fake_keypair, token_id, transaction_id):
        private_key, public_key = fake_keypair
        frozen = _pause(token_id, transaction_id, [AccountId(3)]).freeze()
        signature = private_key.sign(frozen.body_bytes_for(AccountId(3)))
        frozen.add_signature(public_key, signature)
        assert frozen.get_signatures()[AccountId(3)][public_key] == signature

    def test_add_signature_rejects_multiple_nodes(self, fake_keypair, token_id, transaction_id, node_ids):
        private_key, public_key = fake_keypair
        frozen = _pause(token_id, transaction_id, node_ids).freeze()
        with pytest.raises(IllegalStateError):
            frozen.add_signature(public_key, private_key.sign(b"x"))


class TestTransfers:
    """Test transfer accumulation."""

    def test_hbar_amounts_merge_per_account(self):
        transfer = (
            TransferTransaction()
            .add_hbar_transfer(AccountId(1001), Hbar(-3))
            .add_hbar_transfer(AccountId(1002), Hbar(3))
            .add_hbar_transfer(AccountId(1001), Hbar(-1))
        )
        assert transfer.hbar_transfers == {AccountId(1001): Hbar(-4), AccountId(1002): Hbar(3)}

    def test_token_and_nft_transfers(self, token_id):
        nft_token = TokenId(6006)
        transfer = (
            TransferTransaction()
            .add_token_transfer(token_id, AccountId(1001), -10)
            .add_token_transfer(token_id, AccountId(1002), 10)
            .add_nft_transfer(nft_token.nft(1), AccountId(1001), AccountId(1002))
            .add_nft_transfer("0.0.6006@2", AccountId(1001), AccountId(1002))
        )
        assert transfer.token_transfers == {token_id: {AccountId(1001): -10, AccountId(1002): 10}}
        assert [t.serial for t in transfer.token_nft_transfers[nft_token]] == [1, 2]

    def test_expected_decimals_conflict(self, token_id):
        transfer = TransferTransaction().add_token_transfer_with_decimals(token_id, AccountId(1), -1, 2)
        with pytest.raises(BuilderError):
            transfer.add_token_transfer_with_decimals(token_id, AccountId(2), 1, 3)

    def test_hbar_amount_must_be_hbar(self):
        with pytest.raises(BuilderError):
            TransferTransaction().add_hbar_transfer(AccountId(1), 5)

    def test_frozen_transfer_rejects_additions(self, transaction_id, node_ids):
        transfer = TransferTransaction().set_transaction_id(transaction_id).set_node_account_ids(node_ids)
        transfer.freeze()
        with pytest.raises(IllegalStateError):
            transfer.add_hbar_transfer(AccountId(1), Hbar(1))
