"""Configuration loading, schema, and defaults."""

from difftree.config.loader import ConfigError, load_config
from difftree.config.schema import DiffTreeConfig

__all__ = [
    "ConfigError",
    "DiffTreeConfig",
    "load_config",
]
