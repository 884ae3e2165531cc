"""
Tests for operation bodies and the TransactionBody framing.
"""

from datetime import timedelta

import pytest
from pydantic import TypeAdapter, ValidationError

from hedera_client import (
    AccountCreateBody,
    AccountId,
    CryptoTransferBody,
    DecodeError,
    Hbar,
    HbarTransfer,
    NftTransfer,
    SchedulableTransactionBody,
    TokenCreateBody,
    TokenMintBody,
    TokenPauseBody,
    TokenSupplyType,
    TokenTransfer,
    TokenTransferList,
    TokenType,
    TokenWipeBody,
    Transaction,
    TransactionBody,
)
from hedera_client.codec import ProtoWriter
from hedera_client.tx.bodies import AnyOperationBody


class TestOperationBodies:
    """Test individual operation bodies."""

    def test_transfer_body_decodes_what_it_encodes(self, token_id):
        body = CryptoTransferBody(
            hbar_transfers=[
                HbarTransfer(account_id=AccountId(1001), amount=Hbar(-1)),
                HbarTransfer(account_id=AccountId(1002), amount=Hbar(1)),
            ],
            token_transfers=[
                TokenTransferList(
                    token_id=token_id,
                    transfers=[TokenTransfer(account_id=AccountId(1001), amount=-5, is_approved=True)],
                    nft_transfers=[NftTransfer(sender_account_id=AccountId(1001),
                                               receiver_account_id=AccountId(1002), serial=3)],
                    expected_decimals=2,
                ),
            ],
        )
        assert CryptoTransferBody.from_bytes(body.to_bytes()) == body

    def test_token_create_keys_and_enums(self, fake_keypair):
        _, public_key = fake_keypair
        body = TokenCreateBody(
            name="Coin",
            symbol="C",
            treasury_account_id=AccountId(1001),
            admin_key=public_key,
            supply_key=public_key,
            token_type=TokenType.NON_FUNGIBLE_UNIQUE,
            supply_type=TokenSupplyType.FINITE,
            max_supply=100,
        )
        decoded = TokenCreateBody.from_bytes(body.to_bytes())
        assert decoded.admin_key == public_key
        assert decoded.supply_key == public_key
        assert decoded.kyc_key is None
        assert decoded.token_type is TokenType.NON_FUNGIBLE_UNIQUE
        assert decoded.max_supply == 100

    def test_account_create_auto_renew_period(self):
        body = AccountCreateBody(initial_balance=Hbar(10))
        assert body.auto_renew_period == timedelta(seconds=7_890_000)
        decoded = AccountCreateBody.from_bytes(body.to_bytes())
        assert decoded.auto_renew_period == body.auto_renew_period
        assert decoded.initial_balance == Hbar(10)

    def test_mint_metadata(self, token_id):
        body = TokenMintBody(token_id=token_id, metadata=[b"one", b"two"])
        assert TokenMintBody.from_bytes(body.to_bytes()).metadata == [b"one", b"two"]

    def test_wipe_serials(self, token_id):
        body = TokenWipeBody(token_id=token_id, account_id=AccountId(1002), serials=[1, 2, 300])
        assert TokenWipeBody.from_bytes(body.to_bytes()).serials == [1, 2, 300]

    def test_nft_serial_must_be_positive(self):
        with pytest.raises(ValidationError):
            NftTransfer(sender_account_id=AccountId(1), receiver_account_id=AccountId(2), serial=0)

    def test_unknown_token_type_is_decode_error(self):
        w = ProtoWriter()
        w.string(1, "Coin")
        w.int32(17, 7)
        with pytest.raises(DecodeError):
            TokenCreateBody.from_bytes(w.to_bytes())

    def test_unknown_supply_type_is_decode_error(self):
        w = ProtoWriter()
        w.int32(18, 9)
        with pytest.raises(DecodeError):
            TokenCreateBody.from_bytes(w.to_bytes())

    def test_out_of_range_field_is_decode_error(self):
        w = ProtoWriter()
        w.int64(19, -5)
        with pytest.raises(DecodeError) as excinfo:
            TokenCreateBody.from_bytes(w.to_bytes())
        assert isinstance(excinfo.value.cause, ValidationError)

    def test_zero_nft_serial_is_decode_error(self):
        w = ProtoWriter()
        w.message(1, AccountId(1).to_bytes())
        w.message(2, AccountId(2).to_bytes())
        with pytest.raises(DecodeError):
            NftTransfer.from_bytes(w.to_bytes())

    def test_key_list_is_decode_error(self, fake_keypair):
        _, public_key = fake_keypair
        key_list = ProtoWriter()
        key_list.message(1, public_key.to_proto_key())
        key = ProtoWriter()
        key.message(6, key_list.to_bytes())  # Key.keyList
        body = ProtoWriter()
        body.message(1, key.to_bytes())
        with pytest.raises(DecodeError):
            AccountCreateBody.from_bytes(body.to_bytes())

    def test_assignment_is_validated(self):
        body = TokenPauseBody()
        with pytest.raises(ValidationError):
            body.token_id = 3.5


class TestDiscriminatedUnion:
    """Test the `kind` tag on operation bodies."""

    def test_validate_from_dict(self):
        adapter = TypeAdapter(AnyOperationBody)
        body = adapter.validate_python({"kind": "token_pause", "token_id": "0.0.5005"})
        assert isinstance(body, TokenPauseBody)
        assert str(body.token_id) == "0.0.5005"

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(AnyOperationBody).validate_python({"kind": "contract_call"})

    def test_kinds_are_distinct(self):
        kinds = {cls.model_fields["kind"].default for cls in
                 (CryptoTransferBody, AccountCreateBody, TokenCreateBody, TokenMintBody,
                  TokenWipeBody, TokenPauseBody)}
        assert len(kinds) == 6


class TestTransactionBody:
    """Test the framing around an operation."""

    def _body(self, transaction_id, token_id):
        return TransactionBody(
            transaction_id=transaction_id,
            node_account_id=AccountId(3),
            transaction_fee=Hbar(2).as_tinybar(),
            transaction_valid_duration=timedelta(seconds=120),
            memo="memo",
            data=TokenPauseBody(token_id=token_id),
        )

    def test_framing_decodes(self, transaction_id, token_id):
        body = self._body(transaction_id, token_id)
        decoded = TransactionBody.from_bytes(body.to_bytes())
        assert decoded == body
        assert isinstance(decoded.data, TokenPauseBody)

    def test_operation_field_number(self, transaction_id, token_id):
        w = ProtoWriter()
        w.message(TokenPauseBody.BODY_FIELD, TokenPauseBody(token_id=token_id).to_bytes())
        assert TransactionBody.from_bytes(w.to_bytes()).data.token_id == token_id

    def test_unsupported_operation(self):
        w = ProtoWriter()
        w.message(8, b"\x08\x01")  # contractCall
        with pytest.raises(DecodeError):
            TransactionBody.from_bytes(w.to_bytes())

    def test_two_operations(self, token_id):
        w = ProtoWriter()
        w.message(TokenPauseBody.BODY_FIELD, TokenPauseBody(token_id=token_id).to_bytes())
        w.message(CryptoTransferBody.BODY_FIELD, CryptoTransferBody().to_bytes())
        with pytest.raises(DecodeError):
            TransactionBody.from_bytes(w.to_bytes())

    def test_extension_fields_ignored(self, transaction_id, token_id):
        body = self._body(transaction_id, token_id)
        w = ProtoWriter()
        w.message(1001, b"\x08\x01")
        assert TransactionBody.from_bytes(body.to_bytes() + w.to_bytes()) == body

    def test_negative_fee_rejected(self):
        with pytest.raises(ValidationError):
            TransactionBody(transaction_fee=-1)


class TestSchedulableTransactionBody:
    """Test schedule-embedded operations."""

    def test_uses_schedule_field_numbers(self, token_id):
        scheduled = SchedulableTransactionBody(
            transaction_fee=100, memo="later", data=TokenPauseBody(token_id=token_id))
        w = ProtoWriter()
        w.message(TokenPauseBody.SCHEDULE_FIELD, TokenPauseBody(token_id=token_id).to_bytes())
        assert w.to_bytes() in scheduled.to_bytes()
        assert SchedulableTransactionBody.from_bytes(scheduled.to_bytes()) == scheduled

    def test_body_field_is_not_schedule_field(self, token_id):
        w = ProtoWriter()
        w.message(TokenPauseBody.BODY_FIELD, TokenPauseBody(token_id=token_id).to_bytes())
        with pytest.raises(DecodeError):
            SchedulableTransactionBody.from_bytes(w.to_bytes())

    def test_scheduled_key_list_is_decode_error(self, fake_keypair):
        _, public_key = fake_keypair
        key_list = ProtoWriter()
        key_list.message(1, public_key.to_proto_key())
        key = ProtoWriter()
        key.message(6, key_list.to_bytes())
        body = ProtoWriter()
        body.message(1, key.to_bytes())
        scheduled = ProtoWriter()
        scheduled.message(AccountCreateBody.SCHEDULE_FIELD, body.to_bytes())
        with pytest.raises(DecodeError):
            Transaction.from_scheduled_transaction(scheduled.to_bytes())
