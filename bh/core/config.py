"""
Configuration Management.

Loads per-user values from the environment (and an optional user .env
file) and static settings from the YAML files bundled in bh/core/settings/.

Environment (BOUNTYHUB_ prefix):
    BOUNTYHUB_TOKEN      - Personal access token (starts with "bhv")
    BOUNTYHUB_URL        - Service base URL (default from application.yaml)
    BOUNTYHUB_LOG_LEVEL  - Default log level when no -v/--debug flag is given
    BOUNTYHUB_LOG_FILE   - Optional JSONL log file

Settings (YAML):
    application.yaml   - API defaults, timeouts, retry policy, transfer tuning
    logging.yaml       - Logging configuration
"""

import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bh.core.config_schema import ApplicationSchema, LoggingSchema

SETTINGS_DIR = Path(__file__).resolve().parent / "settings"

CONFIG_DIR_NAME = "bountyhub"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_user_config_dir() -> Path:
    """Per-user configuration directory (XDG on Linux, native elsewhere)."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / CONFIG_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / CONFIG_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / CONFIG_DIR_NAME
    return Path.home() / ".config" / CONFIG_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a bundled YAML configuration file from bh/core/settings/."""
    config_path = SETTINGS_DIR / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Per-user values read from BOUNTYHUB_* variables and the user .env file."""

    token: str | None = None
    url: str | None = None
    log_level: str | None = None
    log_file: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="BOUNTYHUB_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str | None) -> str | None:
        if not value:
            return None
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from the bundled YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached per-user settings. Real environment variables win over the .env file."""
    return Settings(_env_file=str(get_user_env_file()))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_api_base_url() -> str:
    """
    Resolve the service base URL.

    Returns:
        BOUNTYHUB_URL when set, otherwise the default from application.yaml,
        without a trailing slash.
    """
    url = get_settings().url or get_app_config().application.api.default_url
    return url.rstrip("/")
