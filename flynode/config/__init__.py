"""Configuration module for flynode."""

from flynode.config.loader import get_config_path, load_config
from flynode.config.schema import Config, NodeConfig

__all__ = ["Config", "NodeConfig", "load_config", "get_config_path"]
