"""Tests for application wiring."""

from __future__ import annotations

from pathlib import Path

import pytest

from chainsign.app.adapters import (
    ECCAlgorithm,
    InMemoryDeviceRepository,
    JSONLDeviceRepository,
    RSAAlgorithm,
)
from chainsign.app.locks import GlobalSigningLock
from chainsign.bootstrap import bootstrap_application
from chainsign.config import Settings
from chainsign.errors import ConfigurationError


def test_bootstrap_defaults(temp_dir: Path) -> None:
    container = bootstrap_application(Settings(data_dir=temp_dir))

    assert container.algorithms.names() == ["ECC", "RSA"]
    assert isinstance(container.algorithms.resolve("RSA"), RSAAlgorithm)
    assert isinstance(container.algorithms.resolve("ECC"), ECCAlgorithm)
    assert isinstance(container.repository, InMemoryDeviceRepository)
    assert container.signature_service.algorithm_names() == ["ECC", "RSA"]


def test_bootstrap_applies_algorithm_settings(temp_dir: Path) -> None:
    settings = Settings(data_dir=temp_dir, rsa_key_size=2048, ecc_curve="P-256")

    container = bootstrap_application(settings)

    assert container.algorithms.resolve("RSA").key_size == 2048
    assert container.algorithms.resolve("ECC").curve == "P-256"


def test_bootstrap_jsonl_backend(override_settings: Settings) -> None:
    container = bootstrap_application()

    assert isinstance(container.repository, JSONLDeviceRepository)
    assert container.repository.path == override_settings.get_devices_path()

    device_id = container.signature_service.create_device("ECC", "durable")
    reloaded = bootstrap_application()
    assert [d.id for d in reloaded.signature_service.list_devices()] == [device_id]


def test_bootstrap_global_lock_strategy(temp_dir: Path) -> None:
    container = bootstrap_application(Settings(data_dir=temp_dir, lock_strategy="global"))

    assert isinstance(container.signature_service._locks, GlobalSigningLock)


@pytest.mark.parametrize("enabled", [[], ["DSA"], ["RSA", "DSA"]])
def test_bootstrap_rejects_bad_algorithm_list(temp_dir: Path, enabled: list[str]) -> None:
    with pytest.raises(ConfigurationError):
        bootstrap_application(Settings(data_dir=temp_dir, enabled_algorithms=enabled))
