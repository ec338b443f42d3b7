"""Algorithm port interface for pluggable signing schemes."""

from typing import Any, Protocol, TypeAlias

KeyPair: TypeAlias = Any
"""Scheme-specific key pair; opaque to everything except its own provider."""


class AlgorithmPort(Protocol):
    """Port interface for one signing scheme.

    Adapters implementing this port must provide:
    - Key pair generation
    - SHA-256 based signing and verification
    - PEM serialization of both key halves and private-key-only parsing

    Implementations are stateless; the service selects them by registry name,
    never by inspecting key pair types.

    Side effects: None (pure computation).
    """

    name: str

    def create_key_pair(self) -> KeyPair:
        """Generate a fresh key pair for this scheme.

        Raises:
            KeyGenerationError: If the crypto backend fails
        """
        ...

    def sign(self, message: bytes, key_pair: KeyPair) -> bytes:
        """Sign the SHA-256 digest of ``message``.

        Args:
            message: Bytes to sign
            key_pair: Key pair produced by this provider

        Returns:
            Raw signature bytes

        Raises:
            KeyPairTypeMismatchError: If ``key_pair`` belongs to another scheme
            SigningError: If the signing primitive fails
        """
        ...

    def verify(self, message: bytes, signature: bytes, key_pair: KeyPair) -> bool:
        """Verify a signature produced by :meth:`sign`.

        Returns:
            True if ``signature`` is valid for ``message``
        """
        ...

    def marshal(self, key_pair: KeyPair) -> tuple[bytes, bytes]:
        """Serialize a key pair.

        Returns:
            Tuple of (public PEM bytes, private PEM bytes)

        Raises:
            KeyMarshalError: If either half cannot be serialized
        """
        ...

    def unmarshal(self, private_bytes: bytes) -> KeyPair:
        """Rebuild a key pair from private PEM bytes.

        The public half is always derived from the private key.

        Raises:
            KeyUnmarshalError: If the PEM cannot be parsed for this scheme
        """
        ...
