"""Path resolution helpers."""

from .resolver import resolve_base_dir, resolve_path

__all__ = ["resolve_path", "resolve_base_dir"]
