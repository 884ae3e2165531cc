"""
Tests for entity identifiers and network checksums.
"""

import pytest

from pydantic import BaseModel

from hedera_client import (
    AccountId,
    BadEntityIdError,
    ChecksumMismatchError,
    DecodeError,
    LedgerId,
    NftId,
    TokenId,
)
from hedera_client.ids import checksum


class TestParsing:
    """Test the `shard.realm.num[-checksum]` grammar."""

    def test_parse_and_print(self):
        account_id = AccountId.from_string("0.0.123")
        assert (account_id.shard, account_id.realm, account_id.num) == (0, 0, 123)
        assert str(account_id) == "0.0.123"
        assert account_id.checksum is None

    def test_number_only_constructor(self):
        assert AccountId(5005) == AccountId(0, 0, 5005)

    def test_checksum_is_kept_but_not_printed(self):
        account_id = AccountId.from_string("0.0.123-vfmkw")
        assert account_id.checksum == "vfmkw"
        assert str(account_id) == "0.0.123"

    @pytest.mark.parametrize("text", [
        "",
        "0.0",
        "0.0.0.0",
        "a.b.c",
        "0.0.-1",
        "0.0.01",
        "0.0.123-VFMKW",
        "0.0.123-vfmk",
        "0.0.123-",
        " 0.0.1x",
        "0.0.1\u0662",
        "\u0660.0.5",
        "0.0.\uff11\uff12",
    ])
    def test_malformed_text(self, text):
        with pytest.raises(BadEntityIdError):
            AccountId.from_string(text)

    def test_equality_ignores_checksum(self):
        assert AccountId.from_string("0.0.123-vfmkw") == AccountId(123)
        assert hash(AccountId.from_string("0.0.123-vfmkw")) == hash(AccountId(123))

    def test_account_and_token_ids_differ(self):
        assert AccountId(7) != TokenId(7)

    def test_ordering(self):
        ids = [AccountId(1, 0, 0), AccountId(0, 0, 9), AccountId(0, 2, 1)]
        assert sorted(ids) == [AccountId(0, 0, 9), AccountId(0, 2, 1), AccountId(1, 0, 0)]


class TestChecksum:
    """Test HIP-15 checksums against each network."""

    def test_known_values(self):
        assert checksum(LedgerId.MAINNET, "0.0.123") == "vfmkw"
        assert checksum(LedgerId.TESTNET, "0.0.123") == "esxsf"

    def test_to_string_with_checksum(self):
        assert AccountId(123).to_string_with_checksum("mainnet") == "0.0.123-vfmkw"
        assert AccountId(123).to_string_with_checksum(LedgerId.TESTNET) == "0.0.123-esxsf"

    def test_checksum_depends_on_network(self):
        account_id = AccountId(0, 0, 123)
        assert account_id.compute_checksum("mainnet") != account_id.compute_checksum("previewnet")

    def test_validates_on_own_network(self):
        text = TokenId(5005).to_string_with_checksum("testnet")
        TokenId.from_string(text).validate_checksum("testnet")

    def test_mismatch_on_other_network(self):
        account_id = AccountId.from_string("0.0.123-vfmkw")
        with pytest.raises(ChecksumMismatchError) as exc_info:
            account_id.validate_checksum(LedgerId.TESTNET)
        assert exc_info.value.expected_checksum == "esxsf"
        assert not isinstance(exc_info.value, BadEntityIdError)

    def test_no_checksum_always_validates(self):
        AccountId(123).validate_checksum("previewnet")

    def test_client_as_network(self, client):
        AccountId.from_string("0.0.123-esxsf").validate_checksum(client)


class TestBinary:
    """Test protobuf encodings."""

    def test_round_trip(self):
        for entity_id in (AccountId(0), AccountId(1, 2, 3), TokenId(2**63 - 1)):
            assert type(entity_id).from_bytes(entity_id.to_bytes()) == entity_id

    def test_zero_components_are_omitted(self):
        assert AccountId(0).to_bytes() == b""
        assert AccountId(3).to_bytes() == bytes.fromhex("1803")

    def test_negative_component_rejected(self):
        encoded = bytes.fromhex("18") + bytes.fromhex("ffffffffffffffffff01")
        with pytest.raises(DecodeError):
            AccountId.from_bytes(encoded)

    def test_truncated_bytes(self):
        with pytest.raises(DecodeError):
            AccountId.from_bytes(bytes.fromhex("18"))


class TestNftId:
    """Test NFT ids."""

    def test_parse_and_print(self):
        nft_id = NftId.from_string("0.0.5005@1234")
        assert nft_id == TokenId(5005).nft(1234)
        assert str(nft_id) == "0.0.5005@1234"
        assert NftId.from_string("0.0.5005/1234") == nft_id

    def test_known_encoding(self):
        assert TokenId(5005).nft(4920).to_bytes().hex() == "0a03188d2710b826"
        assert NftId.from_bytes(bytes.fromhex("0a03188d2710b826")) == NftId(TokenId(5005), 4920)

    @pytest.mark.parametrize("text", [
        "0.0.5005", "0.0.5005@", "0.0.5005@-1", "0.0.5005@0", "0.0.5005@1@2", "0.0.5005@\u0663",
    ])
    def test_malformed(self, text):
        with pytest.raises(BadEntityIdError):
            NftId.from_string(text)

    def test_checksum(self):
        text = TokenId(5005).nft(7).to_string_with_checksum("mainnet")
        nft_id = NftId.from_string(text)
        nft_id.validate_checksum("mainnet")
        with pytest.raises(ChecksumMismatchError):
            nft_id.validate_checksum("testnet")


class TestPydanticFields:
    """Test ids as pydantic field types."""

    class Holder(BaseModel):
        account: AccountId
        nft: NftId

    def test_accepts_strings_and_instances(self):
        holder = self.Holder(account="0.0.42", nft=TokenId(9).nft(1))
        assert holder.account == AccountId(42)
        assert holder.nft == NftId.from_string("0.0.9@1")

    def test_serializes_to_text(self):
        holder = self.Holder(account=AccountId(42), nft="0.0.9@1")
        assert holder.model_dump(mode="json") == {"account": "0.0.42", "nft": "0.0.9@1"}
