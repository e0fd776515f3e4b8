"""Document tree helpers for resolution tests."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping


def write_tree(root: Path, files: Mapping[str, str]) -> Dict[str, Path]:
    """Write ``files`` (relative name -> text) under ``root``.

    Returns:
        Mapping of relative name to canonical absolute path.
    """
    written: Dict[str, Path] = {}
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        written[rel] = path.resolve()
    return written
