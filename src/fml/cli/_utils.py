"""Shared CLI utilities."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from fml.core.composition import PromptResolver
from fml.core.exceptions import ConfigurationError
from fml.core.utils.io import read_yaml


def configure_logging(verbose: bool = False) -> None:
    """Send library logs to stderr (WARNING, or DEBUG with --verbose)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def get_base_dir(
    args: argparse.Namespace, resolver: Optional[PromptResolver] = None
) -> Optional[Path]:
    """Base directory for the root document.

    Search order: --base-dir, then ``resolution.base_dir`` from the resolver's
    configuration (returns None so the resolver applies it), then the current
    directory.
    """
    raw = getattr(args, "base_dir", None)
    if raw:
        return Path(raw).expanduser().resolve()
    if resolver is not None and resolver.resolution.base_dir is not None:
        return None
    return Path.cwd()


def get_project_root(args: argparse.Namespace) -> Optional[Path]:
    raw = getattr(args, "project_root", None)
    return Path(raw).expanduser().resolve() if raw else None


def get_resolver(args: argparse.Namespace) -> PromptResolver:
    return PromptResolver(project_root=get_project_root(args))


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_variables(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge --vars-file and --var NAME=VALUE entries (later wins).

    Raises:
        ConfigurationError: malformed --var entry or vars file
    """
    variables: Dict[str, Any] = {}

    vars_file = getattr(args, "vars_file", None)
    if vars_file:
        path = Path(vars_file).expanduser()
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            raise ConfigurationError(
                f"Cannot read variables file {path}: {exc}",
                context={"key": "vars_file"},
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Variables file {path} must contain a mapping",
                context={"key": "vars_file"},
            )
        variables.update(data)

    for entry in getattr(args, "vars", None) or []:
        name, sep, value = entry.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ConfigurationError(
                f"Invalid --var '{entry}': expected NAME=VALUE",
                context={"key": "var"},
            )
        variables[name] = _parse_value(value)

    return variables


__all__ = [
    "configure_logging",
    "get_base_dir",
    "get_project_root",
    "get_resolver",
    "parse_variables",
]
