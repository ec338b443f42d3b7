"""Tests for device persistence conversion."""

from __future__ import annotations

from uuid import uuid4

import pytest

from chainsign.app import AlgorithmRegistry, Device, SignatureChainCodec
from chainsign.errors import RepositoryError, UnknownAlgorithmError


@pytest.fixture
def codec(dummy_algorithm) -> SignatureChainCodec:
    return SignatureChainCodec(AlgorithmRegistry({"Dummy": dummy_algorithm}))


def test_encode_decode_preserves_device(codec: SignatureChainCodec, dummy_algorithm) -> None:
    device = Device(
        id=uuid4(),
        algorithm="Dummy",
        key_pair=dummy_algorithm.create_key_pair(),
        label="counter 3",
        signature_counter=3,
        last_signature="bGFzdA==",
    )

    record = codec.encode(device)

    assert record.public_key == b"dummy-public"
    assert record.private_key == b"dummy-private:dummy"
    assert codec.decode(record) == device


def test_decode_unknown_algorithm(codec: SignatureChainCodec, dummy_algorithm) -> None:
    device = Device(id=uuid4(), algorithm="Dummy", key_pair=dummy_algorithm.create_key_pair())
    record = codec.encode(device).model_copy(update={"algorithm": "RSA"})

    with pytest.raises(UnknownAlgorithmError):
        codec.decode(record)


def test_decode_inconsistent_record(codec: SignatureChainCodec, dummy_algorithm) -> None:
    """A stored counter of zero with a last signature is rejected."""
    device = Device(id=uuid4(), algorithm="Dummy", key_pair=dummy_algorithm.create_key_pair())
    record = codec.encode(device).model_copy(update={"last_signature": "c2ln"})

    with pytest.raises(RepositoryError):
        codec.decode(record)


def test_device_invariants(dummy_algorithm) -> None:
    key_pair = dummy_algorithm.create_key_pair()

    with pytest.raises(ValueError):
        Device(id=uuid4(), algorithm="Dummy", key_pair=key_pair, signature_counter=-1)
    with pytest.raises(ValueError):
        Device(id=uuid4(), algorithm="Dummy", key_pair=key_pair, signature_counter=2)

    advanced = Device(id=uuid4(), algorithm="Dummy", key_pair=key_pair).advance("c2ln")
    assert advanced.signature_counter == 1
    assert advanced.last_signature == "c2ln"
