"""Read-only registry of signing algorithms keyed by name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from chainsign.app.ports import AlgorithmPort
from chainsign.errors import ConfigurationError, UnknownAlgorithmError


class AlgorithmRegistry(Mapping[str, AlgorithmPort]):
    """Fixed mapping from algorithm name to provider.

    Construction fails with :class:`ConfigurationError` when no providers
    are supplied; the mapping cannot be modified afterwards.
    """

    def __init__(self, algorithms: Mapping[str, AlgorithmPort]) -> None:
        if not algorithms:
            raise ConfigurationError("At least one signing algorithm must be registered")
        self._algorithms = MappingProxyType(dict(algorithms))

    @classmethod
    def from_providers(cls, providers: Iterable[AlgorithmPort]) -> AlgorithmRegistry:
        """Build a registry keyed by each provider's ``name``."""
        return cls({provider.name: provider for provider in providers})

    def resolve(self, name: str) -> AlgorithmPort:
        """Return the provider registered as ``name``.

        Raises:
            UnknownAlgorithmError: If ``name`` is not registered
        """
        try:
            return self._algorithms[name]
        except KeyError:
            raise UnknownAlgorithmError(name) from None

    def names(self) -> list[str]:
        return sorted(self._algorithms)

    def __getitem__(self, name: str) -> AlgorithmPort:
        return self._algorithms[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._algorithms)

    def __len__(self) -> int:
        return len(self._algorithms)
