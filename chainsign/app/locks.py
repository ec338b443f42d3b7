"""Lock strategies serializing the sign read-modify-write span."""

from __future__ import annotations

import threading
from typing import Literal, Protocol
from uuid import UUID

LockStrategy = Literal["global", "device"]


class SigningLocks(Protocol):
    """Hands out the lock guarding one device's sequencing state."""

    def lock_for(self, device_id: UUID) -> threading.Lock:
        ...


class GlobalSigningLock:
    """One exclusive lock shared by every device."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def lock_for(self, device_id: UUID) -> threading.Lock:
        return self._lock


class DeviceSigningLocks:
    """Independent lock per device identifier.

    Unrelated devices sign concurrently; calls on the same device are
    totally ordered. Locks are created on first use and never discarded.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[UUID, threading.Lock] = {}

    def lock_for(self, device_id: UUID) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(device_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[device_id] = lock
            return lock


def create_signing_locks(strategy: LockStrategy) -> SigningLocks:
    """Return the lock provider for ``strategy``."""
    if strategy == "global":
        return GlobalSigningLock()
    if strategy == "device":
        return DeviceSigningLocks()
    raise ValueError(f"Unknown lock strategy '{strategy}' (expected 'global' or 'device')")
