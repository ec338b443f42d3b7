"""Repository port interface for persisted signature devices."""

from contextlib import AbstractContextManager
from typing import Protocol
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PersistedDevice(BaseModel):
    """At-rest projection of a signature device.

    Identical metadata to the in-memory device, with the key pair replaced by
    the PEM blobs produced by the owning algorithm provider.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(..., description="Device identifier")
    algorithm: str = Field(..., description="Registry name of the signing algorithm")
    label: str = Field(default="", description="Caller-supplied display label")
    signature_counter: int = Field(
        default=0, ge=0, description="Number of signatures produced so far"
    )
    last_signature: str = Field(
        default="", description="Base64 text of the most recent signature (empty before first)"
    )
    public_key: bytes = Field(..., description="PEM-armored public key")
    private_key: bytes = Field(..., description="PEM-armored private key")


class DeviceRepositoryPort(Protocol):
    """Port interface for device persistence.

    Abstracts the storage backend so durable stores can be substituted
    without touching the signature service.

    Side effects: Reads/writes device records.
    """

    def locked(self, device_id: UUID | None = None) -> AbstractContextManager[None]:
        """Hold exclusive write access for a read-modify-write.

        With ``device_id`` the hold covers at least that record; without it,
        the whole store. Reads and saves made by the holder see every earlier
        save, including those from other processes sharing the store.
        Re-entrant for the holding thread.
        """
        ...

    def save(self, record: PersistedDevice) -> None:
        """Insert or replace a device record keyed by its identifier.

        The write must be atomic per record.

        Raises:
            RepositoryError: If the record cannot be written
        """
        ...

    def get_by_id(self, device_id: UUID) -> PersistedDevice:
        """Return the record for ``device_id``.

        Raises:
            DeviceNotFoundError: If no record exists
        """
        ...

    def get_all(self) -> list[PersistedDevice]:
        """Return all records in no particular order."""
        ...

    def exists(self, device_id: UUID) -> bool:
        """Return True if a record exists for ``device_id``."""
        ...
