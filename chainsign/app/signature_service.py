"""Signature device orchestration.

Creates devices bound to a registered algorithm and signs client data while
maintaining a per-device hash chain. Persistence and cryptography are
delegated to the repository and algorithm ports.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from uuid import UUID, uuid4

from chainsign.app.chain import build_signing_payload
from chainsign.app.codec import SignatureChainCodec
from chainsign.app.device import Device, DeviceInfo, SignatureResult
from chainsign.app.locks import DeviceSigningLocks, SigningLocks
from chainsign.app.ports import AlgorithmPort, DeviceRepositoryPort, PersistedDevice
from chainsign.app.registry import AlgorithmRegistry
from chainsign.errors import (
    ChainSignError,
    DeviceNotFoundError,
    IdentifierGenerationError,
    InvalidTextError,
)
from chainsign.utils.encoding import decode_bytes, encode_bytes

logger = logging.getLogger(__name__)

MAX_IDENTIFIER_ATTEMPTS = 8


def _require_utf8(field: str, text: str) -> None:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidTextError(field, exc.start) from exc


def _project(record: PersistedDevice) -> DeviceInfo:
    return DeviceInfo(
        id=record.id,
        label=record.label,
        algorithm=record.algorithm,
        signature_counter=record.signature_counter,
    )


class SignatureService:
    """Manage signature devices and their signature chains.

    Signing holds the lock for the device from load through persist, so
    signatures on one device are totally ordered and the counter never
    repeats. Device creation only serializes identifier assignment with the
    repository write. Reads take no service lock and rely on the repository
    returning whole records.
    """

    def __init__(
        self,
        algorithms: Mapping[str, AlgorithmPort],
        repository: DeviceRepositoryPort,
        *,
        locks: SigningLocks | None = None,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        """Initialize signature service.

        Args:
            algorithms: Algorithm providers keyed by name (must not be empty)
            repository: Device persistence port
            locks: Lock strategy for signing (defaults to per-device locks)
            id_factory: Source of fresh device identifiers

        Raises:
            ConfigurationError: If ``algorithms`` is empty
        """
        if isinstance(algorithms, AlgorithmRegistry):
            self.algorithms = algorithms
        else:
            self.algorithms = AlgorithmRegistry(algorithms)
        self.repository = repository
        self.codec = SignatureChainCodec(self.algorithms)
        self._locks = locks or DeviceSigningLocks()
        self._id_factory = id_factory
        self._create_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Device lifecycle
    # ------------------------------------------------------------------

    def create_device(self, algorithm: str, label: str = "") -> UUID:
        """Create and persist a new device.

        Args:
            algorithm: Registry name of the signing algorithm
            label: Display label for the device

        Returns:
            Identifier of the new device

        Raises:
            UnknownAlgorithmError: If ``algorithm`` is not registered
            KeyGenerationError: If the provider cannot create a key pair
            IdentifierGenerationError: If no unused identifier can be produced
            InvalidTextError: If ``label`` cannot be encoded as UTF-8
        """
        try:
            _require_utf8("label", label)
            provider = self.algorithms.resolve(algorithm)
            key_pair = provider.create_key_pair()

            with self._create_lock, self.repository.locked():
                device_id = self._new_identifier()
                device = Device(id=device_id, algorithm=algorithm, key_pair=key_pair, label=label)
                self.repository.save(self.codec.encode(device))
        except ChainSignError as exc:
            logger.warning("Device creation failed (algorithm=%s): %s", algorithm, exc)
            raise

        logger.info("Created %s device %s", algorithm, device_id)
        return device_id

    def _new_identifier(self) -> UUID:
        for _ in range(MAX_IDENTIFIER_ATTEMPTS):
            try:
                candidate = self._id_factory()
            except (OSError, NotImplementedError) as exc:
                raise IdentifierGenerationError(
                    f"Could not generate a device identifier: {exc}"
                ) from exc
            if not self.repository.exists(candidate):
                return candidate
            logger.debug("Identifier %s already taken, retrying", candidate)

        raise IdentifierGenerationError(
            f"No unused device identifier after {MAX_IDENTIFIER_ATTEMPTS} attempts"
        )

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign(self, device_id: UUID, message: str) -> SignatureResult:
        """Sign ``message`` with the device and extend its chain.

        The payload embeds the counter before increment. The counter and last
        signature are only persisted once signing succeeds.

        Returns:
            Base64 signature plus the exact payload that was signed

        Raises:
            DeviceNotFoundError: If the device does not exist
            UnknownAlgorithmError: If the device's algorithm is no longer registered
            SigningError: If the signing primitive fails
            InvalidTextError: If ``message`` cannot be encoded as UTF-8
        """
        if not self.repository.exists(device_id):
            logger.warning("Sign requested for unknown device %s", device_id)
            raise DeviceNotFoundError(device_id)

        try:
            _require_utf8("message", message)
            with self._locks.lock_for(device_id), self.repository.locked(device_id):
                device = self.codec.decode(self.repository.get_by_id(device_id))
                provider = self.algorithms.resolve(device.algorithm)

                payload = build_signing_payload(
                    device.signature_counter,
                    message,
                    device.last_signature,
                    device.id,
                )
                logger.debug(
                    "Signing payload for device %s at counter %d",
                    device_id,
                    device.signature_counter,
                )

                signature = encode_bytes(provider.sign(payload.encode("utf-8"), device.key_pair))
                updated = device.advance(signature)
                self.repository.save(self.codec.encode(updated))
        except ChainSignError as exc:
            logger.warning("Signing failed for device %s: %s", device_id, exc)
            raise

        logger.info("Device %s signed (counter=%d)", device_id, updated.signature_counter)
        return SignatureResult(signature=signature, signed_data=payload)

    def verify_signature(self, device_id: UUID, signed_data: str, signature: str) -> bool:
        """Check ``signature`` (base64) over ``signed_data`` with the device key.

        Malformed base64 or text that is not UTF-8 is reported as an invalid
        signature.

        Raises:
            DeviceNotFoundError: If the device does not exist
        """
        device = self.codec.decode(self.repository.get_by_id(device_id))
        provider = self.algorithms.resolve(device.algorithm)
        try:
            raw = decode_bytes(signature)
            data = signed_data.encode("utf-8")
        except ValueError:
            return False
        return provider.verify(data, raw, device.key_pair)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def list_devices(self) -> list[DeviceInfo]:
        """Return a projection of every device (order unspecified)."""
        return [_project(record) for record in self.repository.get_all()]

    def get_device(self, device_id: UUID) -> DeviceInfo:
        """Return the projection of one device.

        Raises:
            DeviceNotFoundError: If the device does not exist
        """
        return _project(self.repository.get_by_id(device_id))

    def public_key(self, device_id: UUID) -> bytes:
        """Return the device's PEM public key."""
        return self.repository.get_by_id(device_id).public_key

    def algorithm_names(self) -> list[str]:
        """Return the sorted names of registered algorithms."""
        return self.algorithms.names()
