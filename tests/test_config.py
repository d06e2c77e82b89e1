"""Tests for configuration loading."""

import logging
import tomllib
from pathlib import Path

import pytest

from config import Config, get_config_path, load_config
from logger import get_logger, setup_logging


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    return tmp_path


class TestLoadConfig:
    """Tests for load_config."""

    def test_creates_default_file(self, home):
        """Test that a default config file is written on first load."""
        config = load_config()

        assert get_config_path() == home / ".config" / "ledgerwise.toml"
        assert get_config_path().exists()
        assert config.base_dir == home / "data" / "ledgerwise"
        assert config.llm_enabled is False
        assert config.llm_provider == "openrouter"
        assert config.llm_openrouter_api_key is None

    def test_default_file_has_no_api_key(self, home, monkeypatch):
        """Test that the API key is never written to the default file."""
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-env")

        config = load_config()

        with open(get_config_path(), "rb") as f:
            data = tomllib.load(f)
        assert "openrouter_api_key" not in data["llm"]
        assert config.llm_openrouter_api_key == "sk-or-env"

    def test_reads_llm_section(self, home):
        """Test that the llm section of an existing file is read."""
        config_path = home / ".config" / "ledgerwise.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text(
            'base_dir = "/srv/ledgerwise"\n'
            "[llm]\n"
            "enabled = true\n"
            'openrouter_api_key = "sk-or-file"\n'
            'openrouter_model = "anthropic/claude-3.5-sonnet"\n'
            'app_title = "My Budget"\n'
        )

        config = load_config()

        assert config.base_dir == Path("/srv/ledgerwise")
        assert config.log_dir == Path("/srv/ledgerwise/logs")
        assert config.llm_enabled is True
        assert config.llm_openrouter_api_key == "sk-or-file"
        assert config.llm_openrouter_model == "anthropic/claude-3.5-sonnet"
        assert config.llm_app_title == "My Budget"

    def test_env_api_key_fallback(self, home, monkeypatch):
        """Test that OPENROUTER_API_KEY fills in a missing key."""
        config_path = home / ".config" / "ledgerwise.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[llm]\nenabled = true\n")
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-env")

        assert load_config().llm_openrouter_api_key == "sk-or-env"


class TestSetupLogging:
    def test_creates_dated_log_file(self, tmp_path):
        """Test that logging writes to a dated file."""
        config = Config(base_dir=tmp_path, log_level="INFO", log_dir=tmp_path / "logs")

        logger = setup_logging(config)
        logger.info("hello")

        assert logger is get_logger()
        assert len(list((tmp_path / "logs").glob("ledgerwise-*.log"))) == 1
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
