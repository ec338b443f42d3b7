"""Chain payload construction for signature devices.

Each signature covers ``<counter>_<message>_<link>`` where ``link`` is the
base64 device identifier for the first signature and the previous
signature's base64 text for every later one. Altering or reordering any
signature therefore breaks every signature after it, and the embedded
counter makes replay at another position detectable.
"""

from __future__ import annotations

from uuid import UUID

from chainsign.utils.encoding import encode_bytes


def build_signing_payload(
    counter: int,
    message: str,
    last_signature: str,
    device_id: UUID,
) -> str:
    """Return the exact string to sign for the next link in a device's chain.

    Args:
        counter: Device signature counter before this signature
        message: Client-supplied data
        last_signature: Base64 text of the previous signature (ignored at 0)
        device_id: Device identifier, used as the link for the first signature

    Returns:
        Chain payload string
    """
    if counter < 0:
        raise ValueError(f"counter must be non-negative, got {counter}")

    if counter == 0:
        return f"0_{message}_{encode_bytes(device_id.bytes)}"
    return f"{counter}_{message}_{last_signature}"
