"""Base class for content transformers.

A resolution is a pipeline of transformers applied in a fixed order:

1. INCLUDES   - <include src="..."/> and <include src="...">...</include>
2. VARIABLES  - {{ name }} placeholders, exactly once over the assembled text

Includes are always fully expanded before any variable is substituted.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Set

logger = logging.getLogger(__name__)


@dataclass
class TransformContext:
    """Context provided to transformers during processing.

    Settings are fixed for the whole call. The tracking fields only record
    what happened; no transformer reads them back, so they never influence
    how sibling includes resolve.
    """

    # Paths
    base_dir: Optional[Path] = None  # Directory of the root document
    root_path: Optional[Path] = None  # Root document (None for in-memory text)

    # Variables supplied by the caller (None = interpolation skipped)
    variables: Optional[Mapping[str, Any]] = None

    # Settings
    max_depth: int = 32
    trim_documents: bool = True
    json_indent: int = 2

    # Tracking for reports
    includes_resolved: List[Path] = field(default_factory=list)
    variables_substituted: Set[str] = field(default_factory=set)
    variables_missing: Set[str] = field(default_factory=set)

    def record_include(self, path: Path) -> None:
        """Record that an include was resolved (first visit order, no duplicates)."""
        if path not in self.includes_resolved:
            self.includes_resolved.append(path)

    def record_variable(self, name: str, resolved: bool) -> None:
        """Record variable resolution result."""
        if resolved:
            self.variables_substituted.add(name)
        else:
            self.variables_missing.add(name)


class ContentTransformer(ABC):
    """Abstract base class for content transformers.

    Transformers are stateless and receive context through ``transform()``.
    """

    @abstractmethod
    def transform(self, content: str, context: TransformContext) -> str:
        """Transform content using this transformer's rules."""
        ...

    def get_name(self) -> str:
        """Get transformer name for logging/debugging."""
        return self.__class__.__name__


class TransformerPipeline:
    """Execute a sequence of transformers on content.

    Example:
        pipeline = TransformerPipeline([IncludeResolver(), VariableTransformer()])
        result = pipeline.execute(content, context)
    """

    def __init__(self, transformers: List[ContentTransformer]) -> None:
        self.transformers = transformers

    def execute(self, content: str, context: TransformContext) -> str:
        result = content
        for transformer in self.transformers:
            logger.debug("Running %s", transformer.get_name())
            result = transformer.transform(result, context)
        return result


__all__ = ["TransformContext", "ContentTransformer", "TransformerPipeline"]
