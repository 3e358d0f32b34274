"""Tests for configuration loading."""

from pathlib import Path

import pytest
import toml

pytestmark = [pytest.mark.unit, pytest.mark.config]

from torrentmeta.config.config import (
    ConfigManager,
    get_config,
    init_config,
    reload_config,
    set_config,
)
from torrentmeta.models import Config, DecoderConfig, LogLevel
from torrentmeta.utils.exceptions import ConfigurationError


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_defaults(self, tmp_path, monkeypatch):
        """Without a file or environment the defaults apply."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        manager = ConfigManager(setup_logs=False)
        assert manager.config_file is None
        assert manager.config.decoder.max_depth == 64
        assert manager.config.observability.log_level == LogLevel.WARNING

    def test_loads_toml_file(self, tmp_path):
        """Values come from the TOML file."""
        path = tmp_path / "custom.toml"
        path.write_text(
            "[decoder]\nmax_depth = 12\n\n[observability]\nlog_level = \"DEBUG\"\n",
            encoding="utf-8",
        )
        manager = ConfigManager(path, setup_logs=False)
        assert manager.config_file == path
        assert manager.config.decoder.max_depth == 12
        assert manager.config.observability.log_level == LogLevel.DEBUG

    def test_finds_file_in_cwd(self, tmp_path, monkeypatch):
        """torrentmeta.toml in the working directory is picked up."""
        (tmp_path / "torrentmeta.toml").write_text(
            "[decoder]\nmax_depth = 9\n", encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)
        manager = ConfigManager(setup_logs=False)
        assert manager.config_file == Path.cwd() / "torrentmeta.toml"
        assert manager.config.decoder.max_depth == 9

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Environment variables win over the file."""
        path = tmp_path / "custom.toml"
        path.write_text("[decoder]\nmax_depth = 12\n", encoding="utf-8")
        monkeypatch.setenv("TORRENTMETA_MAX_DEPTH", "20")
        monkeypatch.setenv("TORRENTMETA_LOG_LEVEL", "info")
        monkeypatch.setenv("TORRENTMETA_STRUCTURED_LOGGING", "true")
        manager = ConfigManager(path, setup_logs=False)
        assert manager.config.decoder.max_depth == 20
        assert manager.config.observability.log_level == LogLevel.INFO
        assert manager.config.observability.structured_logging is True

    def test_invalid_value_raises(self, tmp_path):
        """Out-of-range values are configuration errors."""
        path = tmp_path / "custom.toml"
        path.write_text("[decoder]\nmax_depth = 0\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigManager(path, setup_logs=False)

    def test_unreadable_toml_falls_back(self, tmp_path, caplog):
        """A broken file is logged and ignored."""
        path = tmp_path / "broken.toml"
        path.write_text("[decoder\nmax_depth = ", encoding="utf-8")
        manager = ConfigManager(path, setup_logs=False)
        assert manager.config.decoder.max_depth == 64
        assert "Failed to load config file" in caplog.text

    def test_export(self, tmp_path):
        """Exported TOML loads back to the same config."""
        path = tmp_path / "custom.toml"
        path.write_text("[decoder]\nmax_depth = 33\n", encoding="utf-8")
        manager = ConfigManager(path, setup_logs=False)
        exported = toml.loads(manager.export())
        assert Config(**exported) == manager.config


class TestGlobalConfig:
    """Test cases for the module-level helpers."""

    def test_init_and_get(self, tmp_path):
        """init_config() installs the global manager."""
        path = tmp_path / "custom.toml"
        path.write_text("[decoder]\nmax_depth = 7\n", encoding="utf-8")
        init_config(path)
        assert get_config().decoder.max_depth == 7

    def test_reload(self, tmp_path):
        """reload_config() re-reads the file."""
        path = tmp_path / "custom.toml"
        path.write_text("[decoder]\nmax_depth = 7\n", encoding="utf-8")
        init_config(path)
        path.write_text("[decoder]\nmax_depth = 8\n", encoding="utf-8")
        assert reload_config().decoder.max_depth == 8

    def test_reload_requires_init(self):
        """reload_config() needs an initialized manager."""
        with pytest.raises(ConfigurationError):
            reload_config()

    def test_set_config(self, tmp_path, monkeypatch):
        """set_config() replaces the active config."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        set_config(Config(decoder=DecoderConfig(max_depth=5)))
        assert get_config().decoder.max_depth == 5
