"""Configuration management with Pydantic and XDG base directory support."""

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_xdg_data_home() -> Path:
    """Get XDG_DATA_HOME directory, defaulting to ~/.local/share."""
    xdg_data = os.getenv("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


RepositoryBackend = Literal["memory", "jsonl"]
LockStrategyName = Literal["global", "device"]
CurveName = Literal["P-256", "P-384", "P-521"]


class Settings(BaseSettings):
    """chainsign configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAINSIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    data_dir: Path | None = Field(
        default=None,
        description="Override data directory (defaults to XDG_DATA_HOME/chainsign)",
    )

    repository_backend: RepositoryBackend = Field(
        default="memory",
        description="Device store: in-process memory or a JSONL file under data_dir",
    )

    lock_strategy: LockStrategyName = Field(
        default="device",
        description="Serialize signing globally or per device identifier",
    )

    enabled_algorithms: list[str] = Field(
        default_factory=lambda: ["RSA", "ECC"],
        description="Algorithm names registered at startup",
    )

    rsa_key_size: int = Field(
        default=1024,
        ge=1024,
        description="RSA modulus size in bits (illustrative strength)",
    )

    rsa_public_exponent: int = Field(
        default=65537,
        description="RSA public exponent",
    )

    ecc_curve: CurveName = Field(
        default="P-384",
        description="NIST curve used for ECC devices",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root logging level for the CLI",
    )

    _resolved_data_dir: Path | None = PrivateAttr(default=None)

    @field_validator("rsa_public_exponent")
    @classmethod
    def _check_exponent(cls, value: int) -> int:
        if value not in (3, 65537):
            raise ValueError("rsa_public_exponent must be 3 or 65537")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Invalid log level '{value}'")
        return level

    def get_data_dir(self) -> Path:
        """Get the data directory, creating if necessary."""
        if self._resolved_data_dir is not None:
            return self._resolved_data_dir

        if self.data_dir:
            data_dir = self.data_dir
            data_dir.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = data_dir
            return data_dir

        primary_dir = get_xdg_data_home() / "chainsign"
        try:
            primary_dir.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = primary_dir
            return primary_dir
        except PermissionError as exc:
            fallback = Path.cwd() / ".chainsign-data"
            fallback.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = fallback
            print(
                f"Warning: cannot create data directory at {primary_dir} ({exc}). "
                f"Using local '{fallback}' instead. Pass --data-dir to override.",
                file=sys.stderr,
            )
            return fallback

    def get_devices_path(self) -> Path:
        """Get path to the JSONL device store."""
        return self.get_data_dir() / "devices.jsonl"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
