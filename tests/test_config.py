import pytest
from pydantic import ValidationError

from chainsign.config import Settings


def test_defaults(tmp_path):
    settings = Settings(data_dir=tmp_path / "data")

    assert settings.repository_backend == "memory"
    assert settings.lock_strategy == "device"
    assert settings.enabled_algorithms == ["RSA", "ECC"]
    assert settings.rsa_key_size == 1024
    assert settings.ecc_curve == "P-384"
    assert settings.log_level == "WARNING"


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("CHAINSIGN_REPOSITORY_BACKEND", "jsonl")
    monkeypatch.setenv("CHAINSIGN_LOCK_STRATEGY", "global")
    monkeypatch.setenv("CHAINSIGN_ENABLED_ALGORITHMS", '["ECC"]')
    monkeypatch.setenv("CHAINSIGN_ECC_CURVE", "P-256")
    monkeypatch.setenv("CHAINSIGN_LOG_LEVEL", "debug")

    settings = Settings(data_dir=tmp_path / "data")

    assert settings.repository_backend == "jsonl"
    assert settings.lock_strategy == "global"
    assert settings.enabled_algorithms == ["ECC"]
    assert settings.ecc_curve == "P-256"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [
        {"rsa_key_size": 512},
        {"rsa_public_exponent": 4},
        {"ecc_curve": "P-192"},
        {"repository_backend": "sqlite"},
        {"lock_strategy": "none"},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_values_rejected(tmp_path, overrides):
    with pytest.raises(ValidationError):
        Settings(data_dir=tmp_path / "data", **overrides)


def test_devices_path_under_data_dir(tmp_path):
    data_dir = tmp_path / "data"
    settings = Settings(data_dir=data_dir)

    assert settings.get_devices_path() == data_dir / "devices.jsonl"
    assert data_dir.is_dir()


def test_xdg_data_home_used_by_default(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("CHAINSIGN_DATA_DIR", raising=False)

    settings = Settings()

    assert settings.get_data_dir() == tmp_path / "xdg" / "chainsign"


def test_assignment_is_validated(tmp_path):
    settings = Settings(data_dir=tmp_path / "data")

    settings.log_level = "debug"
    settings.repository_backend = "jsonl"
    assert settings.log_level == "DEBUG"
    assert settings.repository_backend == "jsonl"

    with pytest.raises(ValidationError):
        settings.repository_backend = "sqlite"
    with pytest.raises(ValidationError):
        settings.log_level = "LOUD"
    assert settings.repository_backend == "jsonl"
    assert settings.log_level == "DEBUG"
