"""Configuration loading utilities."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from flynode.config.schema import Config


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".flynode" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return Config()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return Config.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning(f"Failed to load config from {path}: {e}; using default configuration")
        return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file (camelCase keys)."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.model_dump(by_alias=True), f, indent=2)
