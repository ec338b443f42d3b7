"""Pytest configuration and fixtures."""

import hashlib
import shutil
import tempfile
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import pytest

from chainsign.app import SignatureService
from chainsign.app.adapters import ECCAlgorithm, InMemoryDeviceRepository, RSAAlgorithm
from chainsign.config import Settings
from chainsign.errors import KeyPairTypeMismatchError


@dataclass(frozen=True)
class DummyKeyPair:
    """Key pair stand-in; every instance is interchangeable."""

    tag: str = "dummy"


class DummyAlgorithm:
    """Deterministic algorithm whose signature is the SHA-256 digest of the message.

    Lets tests compute the exact expected signature for a chain payload.
    """

    name = "Dummy"

    def create_key_pair(self) -> DummyKeyPair:
        return DummyKeyPair()

    def sign(self, message: bytes, key_pair: DummyKeyPair) -> bytes:
        if not isinstance(key_pair, DummyKeyPair):
            raise KeyPairTypeMismatchError(self.name, key_pair)
        return hashlib.sha256(message).digest()

    def verify(self, message: bytes, signature: bytes, key_pair: DummyKeyPair) -> bool:
        return hashlib.sha256(message).digest() == signature

    def marshal(self, key_pair: DummyKeyPair) -> tuple[bytes, bytes]:
        return b"dummy-public", f"dummy-private:{key_pair.tag}".encode()

    def unmarshal(self, private_bytes: bytes) -> DummyKeyPair:
        return DummyKeyPair(tag=private_bytes.decode().split(":", 1)[1])


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated chainsign settings scoped to tests."""

    import chainsign.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    data_dir = temp_dir / "appdata"
    data_dir.mkdir(parents=True, exist_ok=True)

    settings = config_module.Settings(
        data_dir=data_dir,
        repository_backend="jsonl",
    )

    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings


@pytest.fixture
def dummy_algorithm() -> DummyAlgorithm:
    return DummyAlgorithm()


@pytest.fixture
def repository() -> InMemoryDeviceRepository:
    return InMemoryDeviceRepository()


@pytest.fixture
def service(
    dummy_algorithm: DummyAlgorithm, repository: InMemoryDeviceRepository
) -> SignatureService:
    """Signature service wired with the deterministic dummy algorithm."""
    return SignatureService({"Dummy": dummy_algorithm}, repository)


@pytest.fixture(scope="session")
def rsa_algorithm() -> RSAAlgorithm:
    return RSAAlgorithm()


@pytest.fixture(scope="session")
def ecc_algorithm() -> ECCAlgorithm:
    return ECCAlgorithm()


@pytest.fixture(params=["RSA", "ECC"])
def algorithm(request, rsa_algorithm: RSAAlgorithm, ecc_algorithm: ECCAlgorithm):
    """Each real signing scheme in turn."""
    return {"RSA": rsa_algorithm, "ECC": ecc_algorithm}[request.param]
