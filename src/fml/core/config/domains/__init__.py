"""Domain-specific configuration accessors."""

from .resolution import InterpolationConfig, ResolutionConfig

__all__ = ["ResolutionConfig", "InterpolationConfig"]
