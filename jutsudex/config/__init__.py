"""Configuration module - exports Settings and load_config."""

from jutsudex.config.loader import load_config
from jutsudex.config.settings import Settings

__all__ = ["Settings", "load_config"]
