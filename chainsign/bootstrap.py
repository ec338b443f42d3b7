"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from chainsign.app import SignatureService
from chainsign.app.adapters import (
    ECCAlgorithm,
    InMemoryDeviceRepository,
    JSONLDeviceRepository,
    RSAAlgorithm,
)
from chainsign.app.locks import create_signing_locks
from chainsign.app.ports import AlgorithmPort, DeviceRepositoryPort
from chainsign.app.registry import AlgorithmRegistry
from chainsign.config import Settings, get_settings
from chainsign.errors import ConfigurationError

logger = logging.getLogger(__name__)

ALGORITHM_FACTORIES: dict[str, Callable[[Settings], AlgorithmPort]] = {
    "RSA": lambda settings: RSAAlgorithm(
        key_size=settings.rsa_key_size,
        public_exponent=settings.rsa_public_exponent,
    ),
    "ECC": lambda settings: ECCAlgorithm(curve=settings.ecc_curve),
}


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    algorithms: AlgorithmRegistry
    repository: DeviceRepositoryPort
    signature_service: SignatureService


def _create_algorithms(settings: Settings) -> AlgorithmRegistry:
    providers: list[AlgorithmPort] = []
    for name in settings.enabled_algorithms:
        factory = ALGORITHM_FACTORIES.get(name)
        if factory is None:
            raise ConfigurationError(
                f"Unknown algorithm '{name}' in enabled_algorithms "
                f"(available: {', '.join(sorted(ALGORITHM_FACTORIES))})"
            )
        providers.append(factory(settings))
    return AlgorithmRegistry.from_providers(providers)


def _create_repository(settings: Settings) -> DeviceRepositoryPort:
    if settings.repository_backend == "jsonl":
        path = settings.get_devices_path()
        logger.debug("Using JSONL device repository at %s", path)
        return JSONLDeviceRepository(path)
    return InMemoryDeviceRepository()


def bootstrap_application(settings: Settings | None = None) -> ApplicationContainer:
    """Instantiate adapters and services for CLI consumption.

    Raises:
        ConfigurationError: If no usable algorithm is configured
    """

    active_settings = settings or get_settings()

    algorithms = _create_algorithms(active_settings)
    repository = _create_repository(active_settings)
    signature_service = SignatureService(
        algorithms,
        repository,
        locks=create_signing_locks(active_settings.lock_strategy),
    )

    return ApplicationContainer(
        settings=active_settings,
        algorithms=algorithms,
        repository=repository,
        signature_service=signature_service,
    )
