"""Configuration loading and schema."""

from dotmanager.config.loader import ConfigError, load_config
from dotmanager.config.schema import DotManagerConfig

__all__ = [
    "ConfigError",
    "DotManagerConfig",
    "load_config",
]
