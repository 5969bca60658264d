"""Configuration management for the CLI."""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from openmic.config import DEFAULT_CONFIG


@dataclass
class Config:
    """CLI configuration."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_CONFIG.base_url
    default_output: str = "table"


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return Path.home() / ".openmic"


def get_config_path() -> Path:
    """Get the configuration file path."""
    return get_config_dir() / "config.json"


def get_state_path() -> Path:
    """Default SQLite file holding the watch command's watermarks."""
    return get_config_dir() / "watermarks.db"


def load_config() -> Config:
    """Load configuration from file."""
    config_path = get_config_path()

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, "r") as f:
            data = json.load(f)
            return Config(
                api_key=data.get("api_key"),
                base_url=data.get("base_url", DEFAULT_CONFIG.base_url),
                default_output=data.get("default_output", "table"),
            )
    except (json.JSONDecodeError, IOError):
        return Config()


def save_config(config: Config) -> Path:
    """Save configuration to file, readable by the owner only."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_path.touch(mode=0o600, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(asdict(config), f, indent=2)
    return config_path


def delete_config() -> bool:
    """Remove the stored configuration. Returns False if there was none."""
    config_path = get_config_path()
    if not config_path.exists():
        return False
    os.remove(config_path)
    return True
