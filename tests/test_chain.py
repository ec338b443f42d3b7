"""Tests for chain payload construction."""

import base64
from uuid import uuid4

import pytest

from chainsign.app.chain import build_signing_payload


def test_first_payload_links_to_device_id() -> None:
    """Counter 0 uses the base64 of the raw device id bytes as the link."""
    device_id = uuid4()
    last_signature = base64.b64encode(b"last signature").decode()

    payload = build_signing_payload(0, "this is the data", last_signature, device_id)

    expected_link = base64.b64encode(device_id.bytes).decode()
    assert payload == f"0_this is the data_{expected_link}"


def test_later_payload_links_to_last_signature() -> None:
    """Counters above 0 use the previous signature as the link."""
    device_id = uuid4()
    last_signature = base64.b64encode(b"last signature").decode()

    payload = build_signing_payload(1, "this is the data", last_signature, device_id)

    assert payload == f"1_this is the data_{last_signature}"


def test_payload_keeps_underscores_in_message() -> None:
    device_id = uuid4()
    payload = build_signing_payload(7, "a_b_c", "sig==", device_id)
    assert payload == "7_a_b_c_sig=="


def test_empty_message_is_allowed() -> None:
    device_id = uuid4()
    payload = build_signing_payload(3, "", "sig", device_id)
    assert payload == "3__sig"


def test_negative_counter_rejected() -> None:
    with pytest.raises(ValueError):
        build_signing_payload(-1, "data", "", uuid4())
