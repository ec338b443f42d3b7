from __future__ import annotations

import pytest

from chainsign.app import AlgorithmRegistry
from chainsign.errors import ConfigurationError, UnknownAlgorithmError


def test_registry_resolves_by_name(dummy_algorithm) -> None:
    registry = AlgorithmRegistry.from_providers([dummy_algorithm])

    assert registry.resolve("Dummy") is dummy_algorithm
    assert registry.names() == ["Dummy"]
    assert "Dummy" in registry
    assert len(registry) == 1


def test_registry_unknown_name(dummy_algorithm) -> None:
    registry = AlgorithmRegistry({"Dummy": dummy_algorithm})

    with pytest.raises(UnknownAlgorithmError) as excinfo:
        registry.resolve("DSA")
    assert excinfo.value.algorithm == "DSA"


def test_registry_requires_a_provider() -> None:
    with pytest.raises(ConfigurationError):
        AlgorithmRegistry({})


def test_registry_is_a_snapshot(dummy_algorithm) -> None:
    source = {"Dummy": dummy_algorithm}
    registry = AlgorithmRegistry(source)

    source["Other"] = dummy_algorithm

    assert registry.names() == ["Dummy"]
