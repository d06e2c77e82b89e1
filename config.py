"""Configuration management for Ledgerwise.

Reads configuration from ~/.config/ledgerwise.toml and creates default config if needed.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w


DEFAULT_OPENROUTER_MODEL = "openai/gpt-4o-mini"
DEFAULT_APP_URL = "https://ledgerwise.app"
DEFAULT_APP_TITLE = "Ledgerwise"


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    log_level: str
    log_dir: Path
    llm_enabled: bool = False
    llm_provider: Optional[str] = "openrouter"
    llm_openrouter_api_key: Optional[str] = None
    llm_openrouter_model: str = DEFAULT_OPENROUTER_MODEL
    llm_app_url: str = DEFAULT_APP_URL
    llm_app_title: str = DEFAULT_APP_TITLE

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "ledgerwise"
        return cls(
            base_dir=base_dir,
            log_level="INFO",
            log_dir=base_dir / "logs",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "ledgerwise.toml"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    The OpenRouter API key falls back to the OPENROUTER_API_KEY environment
    variable when the file doesn't set one.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        config.llm_openrouter_api_key = os.environ.get("OPENROUTER_API_KEY") or None
        return config

    # Load existing config
    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "ledgerwise"))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    llm_config = data.get("llm", {})
    api_key = llm_config.get("openrouter_api_key") or os.environ.get(
        "OPENROUTER_API_KEY"
    )

    return Config(
        base_dir=base_dir,
        log_level=log_level,
        log_dir=log_dir,
        llm_enabled=llm_config.get("enabled", False),
        llm_provider=llm_config.get("provider", "openrouter"),
        llm_openrouter_api_key=api_key or None,
        llm_openrouter_model=llm_config.get(
            "openrouter_model", DEFAULT_OPENROUTER_MODEL
        ),
        llm_app_url=llm_config.get("app_url", DEFAULT_APP_URL),
        llm_app_title=llm_config.get("app_title", DEFAULT_APP_TITLE),
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    The API key is never written; it is expected in the environment or
    added to the file by hand.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert config to TOML structure
    data = {
        "base_dir": str(config.base_dir),
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "llm": {
            "enabled": config.llm_enabled,
            "provider": config.llm_provider or "openrouter",
            "openrouter_model": config.llm_openrouter_model,
            "app_url": config.llm_app_url,
            "app_title": config.llm_app_title,
        },
    }

    # Write TOML file
    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
