"""Base64 helpers shared by the chain payload, codec, and file repository."""

from __future__ import annotations

import base64
import binascii


def encode_bytes(data: bytes) -> str:
    """Encode binary data as standard base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode_bytes(encoded: str) -> bytes:
    """Decode data produced by :func:`encode_bytes`.

    Raises:
        ValueError: If ``encoded`` is not valid base64.
    """
    try:
        return base64.b64decode(encoded.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError(f"Invalid base64 data: {exc}") from exc
