"""Ancestor chain for include cycle detection.

The chain is immutable: ``extend`` returns a new chain and leaves the
receiver untouched. Each recursive include call gets its own snapshot, so
siblings never see each other's entries and a document may appear in two
unrelated branches (a diamond) without being mistaken for a cycle.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Tuple

from fml.core.exceptions import CircularDependencyError, IncludeDepthError, format_chain


@dataclass(frozen=True)
class AncestorChain:
    paths: Tuple[Path, ...] = ()

    @classmethod
    def root(cls, path: Path) -> "AncestorChain":
        return cls((path,))

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def depth(self) -> int:
        """Nesting depth below the root document (root = 0)."""
        return max(len(self.paths) - 1, 0)

    @property
    def current(self) -> Path:
        return self.paths[-1]

    def extend(self, path: Path, *, max_depth: int | None = None) -> "AncestorChain":
        """Return a new chain with ``path`` appended.

        Raises:
            CircularDependencyError: ``path`` is already an ancestor
            IncludeDepthError: the new chain would nest deeper than ``max_depth``
        """
        if path in self.paths:
            raise CircularDependencyError(self.paths + (path,))
        extended = AncestorChain(self.paths + (path,))
        if max_depth is not None and extended.depth > max_depth:
            raise IncludeDepthError(max_depth, extended.paths)
        return extended

    def __str__(self) -> str:
        return format_chain(self.paths)


__all__ = ["AncestorChain"]
