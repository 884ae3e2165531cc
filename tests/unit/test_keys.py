"""
Tests for Ed25519 keys.
"""

import pytest

from hedera_client import BadKeyError, PrivateKey, PublicKey


class TestPrivateKey:
    """Test private key encodings and signing."""

    def test_sign_and_verify(self, fake_keypair):
        private_key, public_key = fake_keypair
        signature = private_key.sign(b"body")
        assert len(signature) == 64
        assert public_key.verify(b"body", signature)
        assert not public_key.verify(b"other", signature)

    def test_der_round_trip(self, fake_keypair):
        private_key, _ = fake_keypair
        restored = PrivateKey.from_string(private_key.to_string_der())
        assert restored.to_bytes_raw() == private_key.to_bytes_raw()
        assert PrivateKey.from_bytes(private_key.to_bytes_raw()).public_key == private_key.public_key

    def test_seed_is_deterministic(self):
        assert PrivateKey.from_seed("x").public_key == PrivateKey.from_seed("x").public_key
        assert PrivateKey.from_seed("x").public_key != PrivateKey.from_seed("y").public_key

    def test_bad_lengths(self):
        with pytest.raises(BadKeyError):
            PrivateKey(b"\x00" * 31)
        with pytest.raises(BadKeyError):
            PrivateKey.from_string("zz")


class TestPublicKey:
    """Test public key encodings."""

    def test_raw_and_der(self, fake_keypair):
        _, public_key = fake_keypair
        assert PublicKey.from_string(public_key.to_string_raw()) == public_key
        assert PublicKey.from_string(public_key.to_string_der()) == public_key
        assert public_key.to_string_der().startswith("302a300506032b6570032100")

    def test_proto_key(self, fake_keypair):
        _, public_key = fake_keypair
        encoded = public_key.to_proto_key()
        assert encoded[:2] == bytes.fromhex("1220")
        assert PublicKey.from_proto_key(encoded) == public_key

    def test_proto_key_without_ed25519(self):
        with pytest.raises(BadKeyError):
            PublicKey.from_proto_key(bytes.fromhex("0a00"))
