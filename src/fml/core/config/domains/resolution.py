"""Resolution and interpolation configuration domains.

Typed accessors over the ``resolution`` and ``interpolation`` sections of
the merged configuration.
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class ResolutionConfig(BaseDomainConfig):
    """Include resolution settings."""

    def _config_section(self) -> str:
        return "resolution"

    @cached_property
    def base_dir(self) -> Optional[Path]:
        raw = self.section.get("base_dir")
        if not raw:
            return None
        return Path(str(raw)).expanduser()

    @cached_property
    def max_depth(self) -> int:
        return int(self.section.get("max_depth", 32))

    @cached_property
    def trim_documents(self) -> bool:
        return bool(self.section.get("trim_documents", True))


class InterpolationConfig(BaseDomainConfig):
    """Variable interpolation settings."""

    def _config_section(self) -> str:
        return "interpolation"

    @cached_property
    def json_indent(self) -> int:
        return int(self.section.get("json_indent", 2))


__all__ = ["ResolutionConfig", "InterpolationConfig"]
