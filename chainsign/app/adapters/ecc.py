"""Elliptic-curve signing adapter (ECDSA over SHA-256, raw ``r || s`` output)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from chainsign.app.ports import AlgorithmPort
from chainsign.errors import (
    KeyGenerationError,
    KeyMarshalError,
    KeyPairTypeMismatchError,
    KeyUnmarshalError,
    SigningError,
)

logger = logging.getLogger(__name__)

CURVES: dict[str, type[ec.EllipticCurve]] = {
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}
DEFAULT_CURVE = "P-384"


@dataclass(frozen=True, slots=True, eq=False)
class ECCKeyPair:
    """Elliptic-curve private key together with its public half."""

    private: ec.EllipticCurvePrivateKey
    public: ec.EllipticCurvePublicKey

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ECCKeyPair):
            return NotImplemented
        return self.private.private_numbers() == other.private.private_numbers()


def _scalar_size(key: ec.EllipticCurvePrivateKey | ec.EllipticCurvePublicKey) -> int:
    """Byte length of one signature scalar on the key's curve."""
    return (key.curve.key_size + 7) // 8


class ECCAlgorithm(AlgorithmPort):
    """Adapter producing ECDSA key pairs and fixed-width ``r || s`` signatures.

    The DER signature returned by the backend is unwrapped so the output
    carries no ASN.1 framing; each scalar is left-padded to the curve size.
    Keys are serialized as an SEC1 ``EC PRIVATE KEY`` block and a
    SubjectPublicKeyInfo ``PUBLIC KEY`` block.
    """

    name = "ECC"

    def __init__(self, *, curve: str = DEFAULT_CURVE) -> None:
        if curve not in CURVES:
            raise ValueError(f"Unsupported curve '{curve}' (choose from {sorted(CURVES)})")
        self.curve = curve

    def create_key_pair(self) -> ECCKeyPair:
        try:
            private = ec.generate_private_key(CURVES[self.curve]())
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise KeyGenerationError(f"ECC key generation failed: {exc}") from exc

        logger.debug("Generated %s ECC key pair", self.curve)
        return ECCKeyPair(private=private, public=private.public_key())

    def sign(self, message: bytes, key_pair: ECCKeyPair) -> bytes:
        pair = self._require(key_pair)
        try:
            der = pair.private.sign(message, ec.ECDSA(hashes.SHA256()))
        except (ValueError, TypeError) as exc:
            raise SigningError(f"ECC signing failed: {exc}") from exc

        r, s = decode_dss_signature(der)
        size = _scalar_size(pair.private)
        return r.to_bytes(size, "big") + s.to_bytes(size, "big")

    def verify(self, message: bytes, signature: bytes, key_pair: ECCKeyPair) -> bool:
        pair = self._require(key_pair)
        size = _scalar_size(pair.public)
        if len(signature) != 2 * size:
            return False

        r = int.from_bytes(signature[:size], "big")
        s = int.from_bytes(signature[size:], "big")
        try:
            pair.public.verify(encode_dss_signature(r, s), message, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            return False
        return True

    def marshal(self, key_pair: ECCKeyPair) -> tuple[bytes, bytes]:
        pair = self._require(key_pair)
        try:
            private_pem = pair.private.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.TraditionalOpenSSL,
                encryption_algorithm=serialization.NoEncryption(),
            )
            public_pem = pair.public.public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        except (ValueError, TypeError) as exc:
            raise KeyMarshalError(f"ECC could not marshal key pair: {exc}") from exc

        return public_pem, private_pem

    def unmarshal(self, private_bytes: bytes) -> ECCKeyPair:
        try:
            private = serialization.load_pem_private_key(private_bytes, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyUnmarshalError(f"ECC could not parse private key: {exc}") from exc

        if not isinstance(private, ec.EllipticCurvePrivateKey):
            raise KeyUnmarshalError(
                f"ECC expected an elliptic-curve private key, got {type(private).__name__}"
            )

        return ECCKeyPair(private=private, public=private.public_key())

    def _require(self, key_pair: object) -> ECCKeyPair:
        if not isinstance(key_pair, ECCKeyPair):
            raise KeyPairTypeMismatchError(self.name, key_pair)
        return key_pair
