"""Port interfaces for the chainsign application layer.

These protocol interfaces define contracts for adapters.
Service logic depends on these ports, never on concrete implementations.
"""

__all__ = [
    "AlgorithmPort",
    "KeyPair",
    "DeviceRepositoryPort",
    "PersistedDevice",
]

from chainsign.app.ports.algorithm import AlgorithmPort, KeyPair
from chainsign.app.ports.repository import DeviceRepositoryPort, PersistedDevice
