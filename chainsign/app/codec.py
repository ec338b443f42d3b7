"""Conversion between live devices and their persisted records."""

from __future__ import annotations

from dataclasses import dataclass

from chainsign.app.device import Device
from chainsign.app.ports import PersistedDevice
from chainsign.app.registry import AlgorithmRegistry
from chainsign.errors import RepositoryError


@dataclass(slots=True)
class SignatureChainCodec:
    """Marshal devices to :class:`PersistedDevice` and back.

    Key serialization is delegated to the provider registered under the
    device's algorithm name. Loading only trusts the private key blob; the
    public half is rebuilt from it.
    """

    algorithms: AlgorithmRegistry

    def encode(self, device: Device) -> PersistedDevice:
        """Project ``device`` to its at-rest form.

        Raises:
            UnknownAlgorithmError: If the device's algorithm is not registered
            KeyMarshalError: If the provider cannot serialize the key pair
        """
        provider = self.algorithms.resolve(device.algorithm)
        public_key, private_key = provider.marshal(device.key_pair)
        return PersistedDevice(
            id=device.id,
            algorithm=device.algorithm,
            label=device.label,
            signature_counter=device.signature_counter,
            last_signature=device.last_signature,
            public_key=public_key,
            private_key=private_key,
        )

    def decode(self, record: PersistedDevice) -> Device:
        """Rebuild a live device from ``record``.

        Raises:
            UnknownAlgorithmError: If the record's algorithm is not registered
            KeyUnmarshalError: If the provider cannot parse the private key
            RepositoryError: If the record violates the counter/signature invariant
        """
        provider = self.algorithms.resolve(record.algorithm)
        key_pair = provider.unmarshal(record.private_key)
        try:
            return Device(
                id=record.id,
                algorithm=record.algorithm,
                key_pair=key_pair,
                label=record.label,
                signature_counter=record.signature_counter,
                last_signature=record.last_signature,
            )
        except ValueError as exc:
            raise RepositoryError(f"Stored device {record.id} is inconsistent: {exc}") from exc
