"""Configuration defaults, loading and validation."""

from .defaults import AppConfig, get_default_config
from .loader import ConfigLoader
from .validation import ConfigValidator, ValidationError

__all__ = ["AppConfig", "ConfigLoader", "ConfigValidator", "ValidationError", "get_default_config"]
