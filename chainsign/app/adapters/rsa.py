"""RSA signing adapter (PKCS#1 v1.5 over SHA-256)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from chainsign.app.ports import AlgorithmPort
from chainsign.errors import (
    KeyGenerationError,
    KeyMarshalError,
    KeyPairTypeMismatchError,
    KeyUnmarshalError,
    SigningError,
)

logger = logging.getLogger(__name__)

DEFAULT_KEY_SIZE = 1024
DEFAULT_PUBLIC_EXPONENT = 65537


@dataclass(frozen=True, slots=True, eq=False)
class RSAKeyPair:
    """RSA private key together with its public half."""

    private: rsa.RSAPrivateKey
    public: rsa.RSAPublicKey

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RSAKeyPair):
            return NotImplemented
        return self.private.private_numbers() == other.private.private_numbers()


class RSAAlgorithm(AlgorithmPort):
    """Adapter producing RSA key pairs and PKCS#1 v1.5 signatures.

    Keys are serialized as PKCS#1 PEM: ``RSA PRIVATE KEY`` and
    ``RSA PUBLIC KEY`` blocks.
    """

    name = "RSA"

    def __init__(
        self,
        *,
        key_size: int = DEFAULT_KEY_SIZE,
        public_exponent: int = DEFAULT_PUBLIC_EXPONENT,
    ) -> None:
        self.key_size = key_size
        self.public_exponent = public_exponent

    def create_key_pair(self) -> RSAKeyPair:
        try:
            private = rsa.generate_private_key(
                public_exponent=self.public_exponent,
                key_size=self.key_size,
            )
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise KeyGenerationError(f"RSA key generation failed: {exc}") from exc

        logger.debug("Generated %d-bit RSA key pair", self.key_size)
        return RSAKeyPair(private=private, public=private.public_key())

    def sign(self, message: bytes, key_pair: RSAKeyPair) -> bytes:
        pair = self._require(key_pair)
        try:
            return pair.private.sign(message, padding.PKCS1v15(), hashes.SHA256())
        except (ValueError, TypeError) as exc:
            raise SigningError(f"RSA signing failed: {exc}") from exc

    def verify(self, message: bytes, signature: bytes, key_pair: RSAKeyPair) -> bool:
        pair = self._require(key_pair)
        try:
            pair.public.verify(signature, message, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature:
            return False
        return True

    def marshal(self, key_pair: RSAKeyPair) -> tuple[bytes, bytes]:
        pair = self._require(key_pair)
        try:
            private_pem = pair.private.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.TraditionalOpenSSL,
                encryption_algorithm=serialization.NoEncryption(),
            )
            public_pem = pair.public.public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.PKCS1,
            )
        except (ValueError, TypeError) as exc:
            raise KeyMarshalError(f"RSA could not marshal key pair: {exc}") from exc

        return public_pem, private_pem

    def unmarshal(self, private_bytes: bytes) -> RSAKeyPair:
        try:
            private = serialization.load_pem_private_key(private_bytes, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyUnmarshalError(f"RSA could not parse private key: {exc}") from exc

        if not isinstance(private, rsa.RSAPrivateKey):
            raise KeyUnmarshalError(
                f"RSA expected an RSA private key, got {type(private).__name__}"
            )

        return RSAKeyPair(private=private, public=private.public_key())

    def _require(self, key_pair: object) -> RSAKeyPair:
        if not isinstance(key_pair, RSAKeyPair):
            raise KeyPairTypeMismatchError(self.name, key_pair)
        return key_pair
