"""Configuration loading for fml."""

from .base import BaseDomainConfig
from .cache import clear_config_cache, get_cached_config
from .domains import InterpolationConfig, ResolutionConfig
from .manager import ConfigManager

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "ResolutionConfig",
    "InterpolationConfig",
    "get_cached_config",
    "clear_config_cache",
]
