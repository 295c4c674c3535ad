"""Tests for configuration system."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from dtool.config import get_config, reset_config
from dtool.config.defaults import get_config_path
from dtool.config.loader import load_config
from dtool.config.schema import DToolConfig
from dtool.exceptions import ConfigError, ConfigValidationError
from dtool.output.base import OutputFormat


class TestDToolConfig:
    """Tests for DToolConfig schema."""

    def test_default_config(self, default_config: DToolConfig) -> None:
        """Test default configuration values."""
        assert default_config.output.default_format == OutputFormat.PLAIN
        assert default_config.output.color is True
        assert default_config.logging.level == "WARNING"
        assert default_config.logging.file is None
        assert default_config.logging.json_format is False

    def test_config_from_dict(self) -> None:
        """Test creating config from dictionary."""
        data = {
            "output": {"default_format": "rich", "color": False},
            "logging": {"level": "INFO"},
        }
        config = DToolConfig.model_validate(data)

        assert config.output.default_format == OutputFormat.RICH
        assert config.output.color is False
        assert config.logging.level == "INFO"

    def test_level_is_normalized(self) -> None:
        config = DToolConfig.model_validate({"logging": {"level": "debug"}})
        assert config.logging.level == "DEBUG"

    def test_unknown_level(self) -> None:
        with pytest.raises(ValidationError):
            DToolConfig.model_validate({"logging": {"level": "chatty"}})


class TestConfigLoader:
    """Tests for configuration loader."""

    def test_load_config_creates_default(self, temp_dir: Path) -> None:
        """Test that load_config creates default config file when asked."""
        config_path = temp_dir / "sub" / "config.toml"
        config = load_config(config_path, create_if_missing=True)

        assert config_path.exists()
        assert config.output.default_format == OutputFormat.PLAIN

    def test_load_config_from_file(self, config_file: Path) -> None:
        """Test loading config from existing file."""
        config = load_config(config_file)

        assert config.output.default_format == OutputFormat.JSON
        assert config.output.color is False
        assert config.logging.level == "DEBUG"

    def test_load_config_without_file(self, temp_dir: Path) -> None:
        """Test that a missing file yields defaults and is not written."""
        config_path = temp_dir / "nonexistent.toml"
        config = load_config(config_path)

        assert not config_path.exists()
        assert config.output.default_format == OutputFormat.PLAIN

    def test_invalid_toml(self, temp_dir: Path) -> None:
        """Test that malformed TOML is a config error."""
        config_path = temp_dir / "config.toml"
        config_path.write_text("[output\n")

        with pytest.raises(ConfigError):
            load_config(config_path)

    def test_invalid_values(self, temp_dir: Path) -> None:
        """Test that schema violations are validation errors."""
        config_path = temp_dir / "config.toml"
        config_path.write_text('[output]\ndefault_format = "xml"\n')

        with pytest.raises(ConfigValidationError):
            load_config(config_path)


class TestEnvOverrides:
    """Tests for environment variable overrides."""

    def test_config_path_from_env(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DTOOL_CONFIG", str(temp_dir / "other.toml"))
        assert get_config_path() == temp_dir / "other.toml"

    def test_config_path_from_xdg(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("DTOOL_CONFIG")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        assert get_config_path() == temp_dir / "dtool" / "config.toml"

    def test_default_config_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DTOOL_CONFIG")
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_config_path() == Path.home() / ".config" / "dtool" / "config.toml"

    def test_log_level_override(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DTOOL_LOG_LEVEL", "error")
        config = load_config(config_file)
        assert config.logging.level == "ERROR"

    def test_unknown_log_level_override(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DTOOL_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigValidationError):
            load_config(temp_dir / "missing.toml")

    def test_env_keeps_other_file_values(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        config = load_config(config_file)
        assert config.output.default_format == OutputFormat.JSON
        assert config.logging.level == "DEBUG"

    def test_format_override(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DTOOL_FORMAT", "JSON")
        config = load_config(temp_dir / "missing.toml")
        assert config.output.default_format == OutputFormat.JSON

    def test_unknown_format_override_is_ignored(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DTOOL_FORMAT", "yaml")
        config = load_config(temp_dir / "missing.toml")
        assert config.output.default_format == OutputFormat.PLAIN

    def test_no_color(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        config = load_config(temp_dir / "missing.toml")
        assert config.output.color is False


class TestConfigSingleton:
    """Tests for the config singleton."""

    def test_get_config_is_cached(self) -> None:
        assert get_config() is get_config()

    def test_reset_config(self) -> None:
        first = get_config()
        reset_config()
        assert get_config() is not first
