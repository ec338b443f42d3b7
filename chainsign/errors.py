"""Error taxonomy for signature devices and the signing chain.

Every failure surfaced by the service layer derives from :class:`ChainSignError`.
Adapters translate library exceptions into these types at the seam so callers
never need to know which crypto or storage backend is wired in.
"""

from __future__ import annotations

from uuid import UUID


class ChainSignError(Exception):
    """Base class for all chainsign domain errors."""


class ConfigurationError(ChainSignError):
    """Raised when the service cannot be constructed from the given wiring."""


class UnknownAlgorithmError(ChainSignError):
    """Raised when an algorithm name is not present in the registry."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"Algorithm '{algorithm}' is not registered")
        self.algorithm = algorithm


class DeviceNotFoundError(ChainSignError):
    """Raised when no device exists for the requested identifier."""

    def __init__(self, device_id: UUID) -> None:
        super().__init__(f"Device {device_id} not found")
        self.device_id = device_id


class IdentifierGenerationError(ChainSignError):
    """Raised when a fresh unique device identifier cannot be produced."""


class KeyGenerationError(ChainSignError):
    """Raised when a provider fails to create a key pair."""


class KeyMarshalError(ChainSignError):
    """Raised when a key pair cannot be serialized to PEM."""


class KeyUnmarshalError(ChainSignError):
    """Raised when PEM bytes cannot be parsed back into a key pair."""


class SigningError(ChainSignError):
    """Raised when the underlying signing primitive fails."""


class KeyPairTypeMismatchError(ChainSignError, TypeError):
    """Raised when a key pair is handed to a provider that did not create it."""

    def __init__(self, provider: str, key_pair: object) -> None:
        super().__init__(
            f"{provider} cannot use key pair of type {type(key_pair).__name__}"
        )
        self.provider = provider


class RepositoryError(ChainSignError):
    """Raised when the device repository cannot read or write records."""


class InvalidTextError(ChainSignError, ValueError):
    """Raised when caller text cannot be encoded as UTF-8."""

    def __init__(self, field: str, position: int) -> None:
        super().__init__(
            f"{field} is not valid UTF-8 text (bad character at position {position})"
        )
        self.field = field
        self.position = position


__all__ = [
    "ChainSignError",
    "ConfigurationError",
    "UnknownAlgorithmError",
    "DeviceNotFoundError",
    "IdentifierGenerationError",
    "KeyGenerationError",
    "KeyMarshalError",
    "KeyUnmarshalError",
    "SigningError",
    "KeyPairTypeMismatchError",
    "RepositoryError",
    "InvalidTextError",
]
