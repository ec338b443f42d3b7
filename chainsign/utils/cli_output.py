"""Minimal CLI JSON output wrapper.

Wraps CLI JSON payloads with schema metadata (schema_id, schema_version,
producer, produced_at) so scripted consumers can detect format changes.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from chainsign import __version__


def json_response(
    schema_id: str,
    schema_version: int,
    **data: Any,
) -> str:
    """Create schema-wrapped JSON response for CLI output.

    Args:
        schema_id: Identifier for the output type (e.g., "device_list").
        schema_version: Integer version for backward compatibility.
        **data: Payload data to include in the response.

    Returns:
        JSON string with schema metadata and payload.

    Example:
        >>> json_response("device_list", 1, devices=[])
        {
          "schema_id": "device_list",
          "schema_version": 1,
          "producer": "chainsign-0.1.0",
          "produced_at": "2026-10-18T10:30:00+00:00",
          "devices": []
        }
    """
    wrapped = {
        "schema_id": schema_id,
        "schema_version": schema_version,
        "producer": f"chainsign-{__version__}",
        "produced_at": datetime.now(UTC).isoformat(),
        **data,
    }
    return json.dumps(wrapped, indent=2, default=str)
