"""Configuration management for devicepanel.

Loads settings from a YAML configuration file with environment variable
overrides (the device URL in particular). Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/devicepanel.yaml")

# Identifier reserved for the stats-reset handler in the command bindings.
RESET_STATS_ID = "reset-stats"


class DeviceConfig(BaseModel):
    base_url: str = Field(
        default="http://localhost:8080",
        description="Origin of the companion device's HTTP API",
    )

    @field_validator("base_url")
    @classmethod
    def _require_scheme(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {value!r}")
        return value.rstrip("/")


class SimulatorConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


def _default_commands() -> dict[str, str]:
    return {"ping": "PING", "reboot": "reboot"}


class Settings(BaseSettings):
    """Root configuration for devicepanel.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "DEVICEPANEL_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    device: DeviceConfig = Field(default_factory=DeviceConfig)
    # Operator-facing identifier -> command string the device understands
    commands: dict[str, str] = Field(default_factory=_default_commands)
    simulator: SimulatorConfig = Field(default_factory=SimulatorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("commands")
    @classmethod
    def _check_commands(cls, value: dict[str, str]) -> dict[str, str]:
        if RESET_STATS_ID in value:
            raise ValueError(f"{RESET_STATS_ID!r} is reserved and cannot be bound to a command")
        for ident, cmd in value.items():
            if not cmd:
                raise ValueError(f"command {ident!r} is bound to an empty string")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML arrives as init kwargs and must rank below env and .env
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    # Load .env file manually for non-prefixed vars
    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply environment variable overrides for non-prefixed vars."""
    device_url = os.environ.get("DEVICE_URL", "")
    if not device_url:
        return

    if "device" not in yaml_data or yaml_data["device"] is None:
        yaml_data["device"] = {}
    yaml_data["device"]["base_url"] = device_url
