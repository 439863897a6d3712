"""Configuration loading, validation and typed settings."""

from .loader import load_config, validate_config, get_config_value
from .settings import FilteringConfig, MatchingConfig

__all__ = [
    "load_config",
    "validate_config",
    "get_config_value",
    "FilteringConfig",
    "MatchingConfig",
]
