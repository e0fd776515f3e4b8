"""File reading helpers.

Documents are always UTF-8. Every file is opened, read in full and closed
before the caller continues, so no handle outlives a single read.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

from fml.core.exceptions import IncludeNotFoundError, IncludeReadError


def read_document(
    path: Path,
    *,
    included_from: Optional[Path] = None,
    chain: Sequence[Path] = (),
) -> str:
    """Read a UTF-8 document.

    Args:
        path: Absolute document path
        included_from: Including document, used in error messages
        chain: Include chain leading to ``path``, used in error messages

    Raises:
        IncludeNotFoundError: When ``path`` does not exist
        IncludeReadError: When ``path`` is not a readable UTF-8 file
    """
    if not path.exists():
        raise IncludeNotFoundError(path, included_from=included_from, chain=chain)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise IncludeReadError(path, f"not valid UTF-8 ({exc.reason})", included_from=included_from) from exc
    except OSError as exc:
        raise IncludeReadError(path, exc.strerror or str(exc), included_from=included_from) from exc


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Args:
        path: YAML file path to read
        default: Value to return if file missing or invalid (default: None)
        raise_on_error: If True, propagate exceptions instead of returning default.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


__all__ = ["read_document", "read_yaml"]
