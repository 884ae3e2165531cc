r"""
Ed25519 keys for signing Hedera transactions.

Provides key generation, signing, verification and the raw/DER/protobuf
encodings the network uses.
"""

from __future__ import annotations
import hashlib
from typing import Any, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..codec import ProtoWriter, iter_fields, expect_bytes
from ..runtime.errors import BadKeyError

# DER headers of PKCS#8 private keys and SubjectPublicKeyInfo public keys
PRIVATE_KEY_DER_PREFIX = bytes.fromhex("302e020100300506032b657004220420")
PUBLIC_KEY_DER_PREFIX = bytes.fromhex("302a300506032b6570032100")

# protobuf Key.ed25519
_KEY_ED25519_FIELD = 2


def _decode_hex(text: str) -> bytes:
    text = text.strip()
    if text.startswith("0x"):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise BadKeyError(f"Invalid hex string: {e}", cause=e)


class PublicKey:
    """
    Ed25519 public key.

    Provides verification operations and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Args:
            public_key_bytes: 32-byte Ed25519 public key

        Raises:
            BadKeyError: If key is invalid
        """
        if len(public_key_bytes) != 32:
            raise BadKeyError(f"Ed25519 public key must be 32 bytes, got {len(public_key_bytes)}")

        self._key_bytes = bytes(public_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise BadKeyError(f"Invalid Ed25519 public key: {e}", cause=e)

    @classmethod
    def from_bytes(cls, data: bytes) -> PublicKey:
        """Create public key from raw or DER bytes."""
        if len(data) == 32:
            return cls(data)
        if data.startswith(PUBLIC_KEY_DER_PREFIX):
            return cls(data[len(PUBLIC_KEY_DER_PREFIX):])
        try:
            loaded = serialization.load_der_public_key(data)
        except ValueError as e:
            raise BadKeyError(f"Unsupported public key encoding: {e}", cause=e)
        if not isinstance(loaded, CryptoEd25519PublicKey):
            raise BadKeyError(f"Only Ed25519 keys are supported, got {type(loaded).__name__}")
        return cls(loaded.public_bytes(serialization.Encoding.Raw, serialization.PublicFormat.Raw))

    @classmethod
    def from_string(cls, text: str) -> PublicKey:
        """Create public key from raw or DER hex."""
        return cls.from_bytes(_decode_hex(text))

    @classmethod
    def from_proto_key(cls, data: bytes) -> PublicKey:
        """Decode a protobuf Key holding an Ed25519 key."""
        for field, wire_type, value in iter_fields(data):
            if field == _KEY_ED25519_FIELD:
                return cls(expect_bytes(field, wire_type, value))
        raise BadKeyError("Key message does not hold an Ed25519 key")

    def to_bytes_raw(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def to_bytes_der(self) -> bytes:
        return PUBLIC_KEY_DER_PREFIX + self._key_bytes

    def to_string_raw(self) -> str:
        return self._key_bytes.hex()

    def to_string_der(self) -> str:
        return self.to_bytes_der().hex()

    def to_proto_key(self) -> bytes:
        """Encode as a protobuf Key."""
        w = ProtoWriter()
        w.bytes(_KEY_ED25519_FIELD, self._key_bytes)
        return w.to_bytes()

    def verify(self, message: bytes, signature: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            message: Message that was signed
            signature: 64-byte Ed25519 signature

        Returns:
            True if signature is valid
        """
        if len(signature) != 64:
            return False
        try:
            self._crypto_key.verify(signature, message)
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __str__(self) -> str:
        return self.to_string_der()

    def __repr__(self) -> str:
        return f"PublicKey.from_string('{self.to_string_raw()}')"


class PrivateKey:
    """
    Ed25519 private key.

    Provides signing operations and key derivation.
    """

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize from 32-byte private key seed.

        Args:
            private_key_bytes: 32-byte Ed25519 private key seed

        Raises:
            BadKeyError: If key is invalid
        """
        if len(private_key_bytes) != 32:
            raise BadKeyError(f"Ed25519 private key must be 32 bytes, got {len(private_key_bytes)}")

        self._key_bytes = bytes(private_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(self._key_bytes)
        except ValueError as e:
            raise BadKeyError(f"Invalid Ed25519 private key: {e}", cause=e)
        self._public_key = PublicKey(
            self._crypto_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    @classmethod
    def generate(cls) -> PrivateKey:
        """Generate a new random Ed25519 private key."""
        crypto_key = CryptoEd25519PrivateKey.generate()
        return cls(crypto_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        ))

    @classmethod
    def from_bytes(cls, data: bytes) -> PrivateKey:
        """
        Create a private key from raw (32 bytes), seed+public (64 bytes) or
        PKCS#8 DER bytes.
        """
        if len(data) == 32:
            return cls(data)
        if len(data) == 64:
            return cls(data[:32])
        if data.startswith(PRIVATE_KEY_DER_PREFIX):
            return cls(data[len(PRIVATE_KEY_DER_PREFIX):])
        try:
            loaded = serialization.load_der_private_key(data, password=None)
        except (ValueError, TypeError) as e:
            raise BadKeyError(f"Unsupported private key encoding: {e}", cause=e)
        if not isinstance(loaded, CryptoEd25519PrivateKey):
            raise BadKeyError(f"Only Ed25519 keys are supported, got {type(loaded).__name__}")
        return cls(loaded.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        ))

    @classmethod
    def from_string(cls, text: str) -> PrivateKey:
        """Create a private key from raw or DER hex."""
        return cls.from_bytes(_decode_hex(text))

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> PrivateKey:
        """
        Derive private key from seed using SHA-256.

        For deterministic test keys.
        """
        if isinstance(seed, str):
            seed = seed.encode('utf-8')
        return cls(hashlib.sha256(seed).digest())

    @property
    def public_key(self) -> PublicKey:
        """Get the corresponding public key."""
        return self._public_key

    def to_bytes_raw(self) -> bytes:
        """Get the 32-byte private key seed."""
        return self._key_bytes

    def to_bytes_der(self) -> bytes:
        return PRIVATE_KEY_DER_PREFIX + self._key_bytes

    def to_string_der(self) -> str:
        return self.to_bytes_der().hex()

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Message to sign

        Returns:
            64-byte Ed25519 signature
        """
        return self._crypto_key.sign(message)

    def __str__(self) -> str:
        return f"PrivateKey(public={self._public_key.to_string_raw()})"

    def __repr__(self) -> str:
        return f"PrivateKey(public={self._public_key.to_string_raw()})"


__all__ = [
    "PublicKey",
    "PrivateKey",
    "PRIVATE_KEY_DER_PREFIX",
    "PUBLIC_KEY_DER_PREFIX",
]
