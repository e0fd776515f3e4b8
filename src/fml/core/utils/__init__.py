"""Shared utilities."""

from .io import read_document, read_yaml
from .merge import deep_merge

__all__ = ["read_document", "read_yaml", "deep_merge"]
