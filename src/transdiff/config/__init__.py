"""Configuration loading, schema, and defaults."""

from transdiff.config.loader import CONFIG_FILE, ConfigError, load_config
from transdiff.config.schema import TransdiffConfig

__all__ = [
    "CONFIG_FILE",
    "ConfigError",
    "TransdiffConfig",
    "load_config",
]
