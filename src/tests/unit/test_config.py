"""Tests for gono.core.config module."""

import importlib
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import gono.core.config as config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload the config module under a patched environment."""

    def _reload(**env):
        for key, value in env.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


class TestEnvHelpers:
    """Tests for environment variable helpers."""

    def test_get_env_returns_value(self, monkeypatch):
        """Returns the variable when it is set."""
        monkeypatch.setenv("TEST_VAR", "test_value")

        assert config.get_env("TEST_VAR") == "test_value"

    def test_get_env_returns_default(self, monkeypatch):
        """Returns the default when the variable is unset."""
        monkeypatch.delenv("NONEXISTENT_VAR", raising=False)

        assert config.get_env("NONEXISTENT_VAR", "default") == "default"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("True", True),
            ("1", True),
            ("yes", True),
            ("false", False),
            ("0", False),
            ("no", False),
        ],
    )
    def test_get_env_bool_parses_known_values(self, monkeypatch, value, expected):
        """Parses the usual true and false spellings."""
        monkeypatch.setenv("BOOL_VAR", value)

        assert config.get_env_bool("BOOL_VAR") is expected

    @pytest.mark.parametrize("default", [True, False])
    def test_get_env_bool_default(self, monkeypatch, default):
        """Unknown values fall back to the default."""
        monkeypatch.setenv("BOOL_VAR", "maybe")

        assert config.get_env_bool("BOOL_VAR", default) is default


class TestPaths:
    """Tests for settings read from the environment."""

    def test_registry_defaults_under_storage_root(self, reload_config, tmp_path):
        """The registry file lives in the storage root by default."""
        cfg = reload_config(GONO_STORAGE_ROOT=str(tmp_path), GONO_REGISTRY_FILE=None)

        assert cfg.STORAGE_ROOT == tmp_path
        assert cfg.REGISTRY_PATH == tmp_path / ".gono_vaults.json"

    def test_registry_override(self, reload_config, tmp_path):
        """GONO_REGISTRY_FILE moves the registry file."""
        target = tmp_path / "elsewhere.json"

        cfg = reload_config(GONO_REGISTRY_FILE=str(target))

        assert cfg.REGISTRY_PATH == target

    def test_storage_root_defaults_to_home(self, reload_config, monkeypatch, tmp_path):
        """The storage root defaults to the home directory."""
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        cfg = reload_config(GONO_STORAGE_ROOT=None)

        assert cfg.STORAGE_ROOT == tmp_path

    def test_storage_root_falls_back_to_cwd(self, monkeypatch):
        """Without a home directory the storage root is the cwd."""

        def no_home(cls):
            raise RuntimeError("no home")

        monkeypatch.setattr(Path, "home", classmethod(no_home))

        assert config.default_storage_root() == Path(".")

    @pytest.mark.parametrize(
        "value,expected", [("1", True), ("no", False), (None, False)]
    )
    def test_gono_debug_from_environment(self, reload_config, value, expected):
        """GONO_DEBUG is read as a boolean."""
        cfg = reload_config(GONO_DEBUG=value)

        assert cfg.DEBUG is expected


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.fixture
    def basic_config(self, monkeypatch):
        mock = MagicMock()
        monkeypatch.setattr(config.logging, "basicConfig", mock)
        monkeypatch.setattr(config, "LOG_FILE", None)
        monkeypatch.setattr(config, "DEBUG", False)
        return mock

    def test_debug_forces_debug_level(self, basic_config, monkeypatch):
        """debug=True overrides LOG_LEVEL."""
        monkeypatch.setattr(config, "LOG_LEVEL", "ERROR")

        logger = config.setup_logging(debug=True)

        assert logger.name == "gono"
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_gono_debug_forces_debug_level(self, basic_config, monkeypatch):
        """GONO_DEBUG overrides LOG_LEVEL."""
        monkeypatch.setattr(config, "LOG_LEVEL", "ERROR")
        monkeypatch.setattr(config, "DEBUG", True)

        config.setup_logging()

        assert basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_uses_log_level(self, basic_config, monkeypatch):
        """LOG_LEVEL sets the level and logs go to stderr."""
        monkeypatch.setattr(config, "LOG_LEVEL", "error")

        config.setup_logging()

        assert basic_config.call_args.kwargs["level"] == logging.ERROR
        assert "filename" not in basic_config.call_args.kwargs

    def test_unknown_level_falls_back_to_warning(self, basic_config, monkeypatch):
        """An unknown LOG_LEVEL falls back to WARNING."""
        monkeypatch.setattr(config, "LOG_LEVEL", "chatty")

        config.setup_logging()

        assert basic_config.call_args.kwargs["level"] == logging.WARNING

    def test_log_file(self, basic_config, monkeypatch, tmp_path):
        """GONO_LOG_FILE sends logs to a file."""
        log_file = tmp_path / "gono.log"
        monkeypatch.setattr(config, "LOG_FILE", str(log_file))

        config.setup_logging()

        assert basic_config.call_args.kwargs["filename"] == str(log_file)
        assert basic_config.call_args.kwargs["format"] == config.LOG_FORMAT
