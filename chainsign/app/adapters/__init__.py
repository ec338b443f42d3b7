"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .ecc import ECCAlgorithm, ECCKeyPair
from .repository import InMemoryDeviceRepository, JSONLDeviceRepository
from .rsa import RSAAlgorithm, RSAKeyPair

__all__ = [
    "RSAAlgorithm",
    "RSAKeyPair",
    "ECCAlgorithm",
    "ECCKeyPair",
    "InMemoryDeviceRepository",
    "JSONLDeviceRepository",
]
