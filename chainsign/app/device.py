"""Signature device entities."""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from chainsign.app.ports import KeyPair


@dataclass(frozen=True, slots=True)
class Device:
    """In-memory signature device holding a live key pair.

    Instances are immutable; :meth:`advance` returns the successor state
    after a signature so a failed operation can never leave a half-updated
    device behind.
    """

    id: UUID
    algorithm: str
    key_pair: KeyPair
    label: str = ""
    signature_counter: int = 0
    last_signature: str = ""

    def __post_init__(self) -> None:
        if self.signature_counter < 0:
            raise ValueError("signature_counter must be non-negative")
        if (self.signature_counter == 0) != (self.last_signature == ""):
            raise ValueError(
                "last_signature must be empty exactly when signature_counter is 0 "
                f"(counter={self.signature_counter})"
            )

    def advance(self, signature: str) -> Device:
        """Return the device state after producing ``signature``."""
        return replace(
            self,
            signature_counter=self.signature_counter + 1,
            last_signature=signature,
        )

    def info(self) -> DeviceInfo:
        return DeviceInfo(
            id=self.id,
            label=self.label,
            algorithm=self.algorithm,
            signature_counter=self.signature_counter,
        )


class DeviceInfo(BaseModel):
    """Read-only projection of a device for listing and display."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    label: str
    algorithm: str
    signature_counter: int = Field(..., ge=0)


class SignatureResult(BaseModel):
    """Outcome of a signing operation."""

    model_config = ConfigDict(frozen=True)

    signature: str = Field(..., description="Base64-encoded signature")
    signed_data: str = Field(..., description="Exact chain payload that was signed")
