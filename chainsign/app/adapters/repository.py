"""Device repository adapters: in-process map and durable JSONL file."""

from __future__ import annotations

import fcntl
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TextIO
from uuid import UUID

from pydantic import ValidationError

from chainsign.app.ports import DeviceRepositoryPort, PersistedDevice
from chainsign.errors import DeviceNotFoundError, RepositoryError
from chainsign.utils.encoding import decode_bytes, encode_bytes
from chainsign.utils.jsonl import atomic_write_jsonl, read_jsonl

logger = logging.getLogger(__name__)


class InMemoryDeviceRepository(DeviceRepositoryPort):
    """Store device records in local memory.

    Useful for tests or single-process deployments. Data is not persisted
    across process restarts. Records are immutable, so readers always see
    a whole record even while a writer replaces it.
    """

    def __init__(self) -> None:
        self._devices: dict[UUID, PersistedDevice] = {}
        self._lock = threading.Lock()
        self._write_locks: dict[UUID | None, threading.RLock] = {}

    @contextmanager
    def locked(self, device_id: UUID | None = None) -> Iterator[None]:
        with self._lock:
            lock = self._write_locks.setdefault(device_id, threading.RLock())
        with lock:
            yield

    def save(self, record: PersistedDevice) -> None:
        with self._lock:
            self._devices[record.id] = record

    def get_by_id(self, device_id: UUID) -> PersistedDevice:
        with self._lock:
            record = self._devices.get(device_id)
        if record is None:
            raise DeviceNotFoundError(device_id)
        return record

    def get_all(self) -> list[PersistedDevice]:
        with self._lock:
            return list(self._devices.values())

    def exists(self, device_id: UUID) -> bool:
        with self._lock:
            return device_id in self._devices


class JSONLDeviceRepository(DeviceRepositoryPort):
    """Persist device records to a JSONL file, one record per line.

    Every save rewrites the file atomically, so a crash mid-write leaves the
    previous table intact. Key blobs are stored base64-encoded.

    Several processes may share one file. Each operation holds an exclusive
    ``flock`` on a sibling ``.lock`` file and re-reads the table before
    touching it, so a save merges into what other processes wrote.
    :meth:`locked` extends that hold across a caller's read-modify-write.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self._lock = threading.RLock()
        self._depth = 0
        self._lock_handle: TextIO | None = None
        self._devices: dict[UUID, PersistedDevice] = {}
        # Load now so an unreadable file fails at construction
        with self.locked():
            pass

    # ------------------------------------------------------------------
    @contextmanager
    def locked(self, device_id: UUID | None = None) -> Iterator[None]:
        """Hold the file lock, which covers the whole table.

        Nested entries from the owning thread are free.
        """
        with self._lock:
            if self._depth == 0:
                self._acquire_file_lock()
                try:
                    self._devices = self._load()
                except RepositoryError:
                    self._release_file_lock()
                    raise
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
                if self._depth == 0:
                    self._release_file_lock()

    def _acquire_file_lock(self) -> None:
        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            handle = self.lock_path.open("a", encoding="utf-8")
        except OSError as exc:
            raise RepositoryError(f"Could not open lock file {self.lock_path}: {exc}") from exc
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        self._lock_handle = handle

    def _release_file_lock(self) -> None:
        handle, self._lock_handle = self._lock_handle, None
        if handle is not None:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
            handle.close()

    def _load(self) -> dict[UUID, PersistedDevice]:
        if not self.path.exists():
            return {}

        devices: dict[UUID, PersistedDevice] = {}
        try:
            for row in read_jsonl(self.path):
                record = _from_row(row)
                devices[record.id] = record
        except (OSError, ValueError, ValidationError) as exc:
            raise RepositoryError(f"Could not load devices from {self.path}: {exc}") from exc

        logger.debug("Loaded %d device records from %s", len(devices), self.path)
        return devices

    def _flush(self, devices: dict[UUID, PersistedDevice]) -> None:
        try:
            atomic_write_jsonl(self.path, (_to_row(record) for record in devices.values()))
        except (OSError, UnicodeEncodeError) as exc:
            raise RepositoryError(f"Could not write devices to {self.path}: {exc}") from exc

    # ------------------------------------------------------------------
    def save(self, record: PersistedDevice) -> None:
        with self.locked():
            updated = dict(self._devices)
            updated[record.id] = record
            self._flush(updated)
            self._devices = updated
        logger.debug("Saved device %s to %s", record.id, self.path)

    def get_by_id(self, device_id: UUID) -> PersistedDevice:
        with self.locked():
            record = self._devices.get(device_id)
        if record is None:
            raise DeviceNotFoundError(device_id)
        return record

    def get_all(self) -> list[PersistedDevice]:
        with self.locked():
            return list(self._devices.values())

    def exists(self, device_id: UUID) -> bool:
        with self.locked():
            return device_id in self._devices


def _to_row(record: PersistedDevice) -> dict[str, Any]:
    row = record.model_dump(mode="json", exclude={"public_key", "private_key"})
    row["public_key"] = encode_bytes(record.public_key)
    row["private_key"] = encode_bytes(record.private_key)
    return row


def _from_row(row: dict[str, Any]) -> PersistedDevice:
    data = dict(row)
    data["public_key"] = decode_bytes(data.get("public_key", ""))
    data["private_key"] = decode_bytes(data.get("private_key", ""))
    return PersistedDevice.model_validate(data)
