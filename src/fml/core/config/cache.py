"""Centralized configuration caching.

All domain configs read through ``get_cached_config`` so a resolution call
loads YAML at most once per project root.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}

ENV_PREFIX = "FML_"
PROJECT_CONFIG_NAMES = ("fml.yaml", ".fml.yaml")


def _normalize_project_root(project_root: Optional[Path]) -> Path:
    if project_root is None:
        return Path.cwd().resolve()
    return Path(project_root).expanduser().resolve()


def _cache_key(project_root: Path) -> str:
    # Env overrides and project file mtimes are part of the key so edits are
    # picked up without an explicit clear.
    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = []
    for name in PROJECT_CONFIG_NAMES:
        p = project_root / name
        try:
            st = p.stat()
            files.append((name, int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            continue
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{project_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same project root (treat as
    immutable).
    """
    normalized_root = _normalize_project_root(project_root)
    key = _cache_key(normalized_root)

    if key not in _config_cache:
        # Lazy import to avoid circular dependency
        from .manager import ConfigManager

        manager = ConfigManager(project_root=normalized_root)
        _config_cache[key] = manager._load_config_uncached(validate=True)
    return _config_cache[key]


def clear_config_cache() -> None:
    """Drop every cached configuration."""
    _config_cache.clear()


def is_cached(project_root: Optional[Path] = None) -> bool:
    """Check if config for ``project_root`` is cached."""
    return _cache_key(_normalize_project_root(project_root)) in _config_cache


__all__ = [
    "ENV_PREFIX",
    "PROJECT_CONFIG_NAMES",
    "get_cached_config",
    "clear_config_cache",
    "is_cached",
]
