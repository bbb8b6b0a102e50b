"""Unit tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from bh.core import config as config_module
from bh.core.config import (
    AppConfig,
    Settings,
    get_api_base_url,
    get_app_config,
    get_settings,
    get_user_config_dir,
    load_yaml_config,
)
from bh.core.config_schema import RetrySchema


class TestUserConfigDir:
    """Tests for the per-user configuration directory."""

    def test_uses_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """XDG_CONFIG_HOME wins on Linux."""
        monkeypatch.setattr(config_module.sys, "platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_user_config_dir() == tmp_path / "bountyhub"

    def test_falls_back_to_dot_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without XDG_CONFIG_HOME the directory lives under ~/.config."""
        monkeypatch.setattr(config_module.sys, "platform", "linux")
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_user_config_dir() == tmp_path / ".config" / "bountyhub"


class TestYamlConfig:
    """Tests for the bundled YAML files."""

    def test_application_yaml_loads(self) -> None:
        data = load_yaml_config("application.yaml")
        assert data["api"]["default_url"] == "https://bountyhub.org"
        assert data["api"]["prefix"] == "/api/v0"

    def test_missing_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_yaml_config("does-not-exist.yaml")

    def test_app_config_is_typed(self) -> None:
        """AppConfig exposes validated models."""
        app_config = AppConfig()
        assert app_config.application.retry.attempts == 3
        assert app_config.application.transfer.partial_suffix == ".part"
        assert app_config.logging.level == "WARNING"
        assert app_config.logging.handlers.file.enabled is False

    def test_get_app_config_is_cached(self) -> None:
        assert get_app_config() is get_app_config()

    def test_schema_rejects_unknown_keys(self) -> None:
        with pytest.raises(PydanticValidationError):
            RetrySchema(attempts=3, wait_min=0.5, wait_max=4, jitter=True)

    def test_invalid_yaml_reports_filename(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Schema failures are reported against the offending file."""
        monkeypatch.setattr(config_module, "load_yaml_config", lambda filename: {"name": "bh"})
        with pytest.raises(ValueError, match="application.yaml"):
            AppConfig()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults_are_empty(self) -> None:
        settings = get_settings()
        assert settings.token is None
        assert settings.url is None
        assert settings.log_level is None
        assert settings.log_file is None

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOUNTYHUB_TOKEN", "bhv123")
        monkeypatch.setenv("BOUNTYHUB_URL", "https://example.test")
        settings = get_settings()
        assert settings.token == "bhv123"
        assert settings.url == "https://example.test"

    def test_reads_user_env_file(self, user_config_dir: Path) -> None:
        """Values in ~/.config/bountyhub/.env are picked up."""
        user_config_dir.mkdir(parents=True)
        (user_config_dir / ".env").write_text("BOUNTYHUB_TOKEN=bhvfromfile\n")
        assert get_settings().token == "bhvfromfile"

    def test_environment_beats_env_file(
        self, user_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        user_config_dir.mkdir(parents=True)
        (user_config_dir / ".env").write_text("BOUNTYHUB_TOKEN=bhvfromfile\n")
        monkeypatch.setenv("BOUNTYHUB_TOKEN", "bhvfromenv")
        assert get_settings().token == "bhvfromenv"

    def test_log_level_is_normalized(self) -> None:
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_empty_log_level_means_unset(self) -> None:
        assert Settings(log_level="").log_level is None

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")


class TestApiBaseUrl:
    """Tests for base URL resolution."""

    def test_default_url(self) -> None:
        assert get_api_base_url() == "https://bountyhub.org"

    def test_override_strips_trailing_slash(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOUNTYHUB_URL", "http://localhost:8080/")
        assert get_api_base_url() == "http://localhost:8080"
