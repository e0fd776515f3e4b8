"""
fml configuration management (YAML + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import jsonschema

from fml.core.config.cache import (
    ENV_PREFIX,
    PROJECT_CONFIG_NAMES,
    _normalize_project_root,
    get_cached_config,
)
from fml.core.exceptions import ConfigurationError
from fml.core.utils.io import read_yaml
from fml.core.utils.merge import deep_merge
from fml.data import read_json
from fml.data import read_yaml as read_data_yaml

logger = logging.getLogger(__name__)


class ConfigManager:
    """Load, merge, and validate fml configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: FML_<section>__<key>
    2. Project config: <project_root>/fml.yaml (or .fml.yaml)
    3. Bundled defaults: fml.data/config/defaults.yaml
    """

    def __init__(self, project_root: Optional[Path] = None) -> None:
        self.project_root = _normalize_project_root(project_root)

    @property
    def project_config_path(self) -> Optional[Path]:
        """First existing project config file, if any."""
        for name in PROJECT_CONFIG_NAMES:
            candidate = self.project_root / name
            if candidate.is_file():
                return candidate
        return None

    # ---------- env overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        if value.strip().lower() in {"null", "none"}:
            return None
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            segs = [s.lower() for s in raw.split("__")]
            if not raw or any(s == "" for s in segs):
                logger.warning("Ignoring malformed %s* key: %s", ENV_PREFIX, key)
                continue
            yield segs, self._coerce_type(os.environ[key])

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, value in self._iter_env_overrides():
            cur = cfg
            for part in path[:-1]:
                nxt = cur.get(part)
                if not isinstance(nxt, dict):
                    nxt = {}
                    cur[part] = nxt
                cur = nxt
            cur[path[-1]] = value

    # ---------- loading ----------

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_json("schemas", "config.schema.json")
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigurationError(
                f"Invalid configuration at {location}: {exc.message}",
                context={"key": location},
            ) from exc

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        cfg = deep_merge({}, read_data_yaml("config", "defaults.yaml"))

        project_path = self.project_config_path
        if project_path is not None:
            try:
                data = read_yaml(project_path, default={}, raise_on_error=True)
            except Exception as exc:
                raise ConfigurationError(
                    f"Cannot load {project_path}: {exc}",
                    context={"key": str(project_path)},
                ) from exc
            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"{project_path} must contain a mapping",
                    context={"key": str(project_path)},
                )
            logger.debug("Loaded project config %s", project_path)
            cfg = deep_merge(cfg, data)

        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self) -> Dict[str, Any]:
        """Load validated configuration through the central cache (treat result as immutable)."""
        return get_cached_config(project_root=self.project_root)

    def get_all(self) -> Dict[str, Any]:
        return self.load_config()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('resolution.max_depth')
            32
        """
        current: Any = self.load_config()
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager"]
