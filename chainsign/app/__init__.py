"""Application layer for chainsign.

This layer orchestrates signing logic without direct filesystem I/O or
crypto library calls. All side effects are delegated to adapters via port
interfaces.
"""

__all__ = [
    "AlgorithmRegistry",
    "Device",
    "DeviceInfo",
    "SignatureChainCodec",
    "SignatureResult",
    "SignatureService",
    "build_signing_payload",
]

from chainsign.app.chain import build_signing_payload
from chainsign.app.codec import SignatureChainCodec
from chainsign.app.device import Device, DeviceInfo, SignatureResult
from chainsign.app.registry import AlgorithmRegistry
from chainsign.app.signature_service import SignatureService
