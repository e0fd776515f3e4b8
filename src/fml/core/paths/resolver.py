"""Document path resolution.

Relative include paths are anchored to the directory of the document that
contains the directive, never to the root document or the process cwd.
The root document's base directory must be supplied explicitly (argument or
configuration); it is never inferred from the caller's stack.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from fml.core.exceptions import ConfigurationError

PathLike = Union[str, Path]


def resolve_path(base_dir: Path, path: PathLike) -> Path:
    """Resolve ``path`` against ``base_dir`` into an absolute document identity.

    Absolute input is returned normalised; ``~`` is expanded. The result is
    canonical (symlinks resolved) so the same file reached through different
    spellings has a single identity for cycle detection.
    """
    target = Path(path).expanduser()
    if not target.is_absolute():
        target = Path(base_dir) / target
    return target.resolve()


def resolve_base_dir(
    path: PathLike,
    base_dir: Optional[PathLike] = None,
    *,
    configured: Optional[Path] = None,
) -> Path:
    """Determine the base directory for the root document.

    Search order:
    1. ``base_dir`` argument
    2. ``configured`` (``resolution.base_dir`` setting)
    3. the parent of ``path`` when ``path`` is already absolute

    Raises:
        ConfigurationError: When none of the above applies.
    """
    if base_dir is not None:
        return Path(base_dir).expanduser().resolve()
    if configured is not None:
        return Path(configured).expanduser().resolve()

    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate.parent.resolve()

    raise ConfigurationError(
        f"Cannot resolve relative document path '{path}': no base directory supplied. "
        "Pass base_dir=... or set resolution.base_dir in fml.yaml.",
        context={"key": "resolution.base_dir", "path": str(path)},
    )


__all__ = ["resolve_path", "resolve_base_dir"]
