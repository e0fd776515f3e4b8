"""Resolution engine.

Pipeline: read root -> expand includes (recursive, cycle-checked) ->
interpolate variables (once) -> optionally extract role messages.

Example:
    resolver = PromptResolver()
    text = resolver.resolve("prompts/onboarding.fml", {"name": "Bo"}, base_dir=Path.cwd())
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from fml.core.config.domains import InterpolationConfig, ResolutionConfig
from fml.core.exceptions import ConfigurationError
from fml.core.paths import resolve_base_dir, resolve_path
from fml.core.paths.resolver import PathLike
from fml.core.utils.io import read_document

from .messages import Message, extract_messages
from .transformers import (
    IncludeResolver,
    TransformContext,
    TransformerPipeline,
    VariableTransformer,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """Resolved text plus what it was assembled from."""

    content: str
    path: Optional[Path] = None
    dependencies: List[Path] = field(default_factory=list)
    missing_variables: List[str] = field(default_factory=list)


class PromptResolver:
    """Resolve FML documents with a fixed configuration.

    Args:
        project_root: Directory holding ``fml.yaml`` (defaults to cwd)
        config: Pre-loaded configuration mapping; skips file loading
    """

    def __init__(
        self,
        *,
        project_root: Optional[Path] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.resolution = ResolutionConfig(project_root, config=config)
        self.interpolation = InterpolationConfig(project_root, config=config)
        self.pipeline = TransformerPipeline([IncludeResolver(), VariableTransformer()])

    def _context(
        self,
        *,
        base_dir: Optional[Path],
        root_path: Optional[Path],
        variables: Optional[Mapping[str, Any]],
    ) -> TransformContext:
        return TransformContext(
            base_dir=base_dir,
            root_path=root_path,
            # Read-only view: the same mapping serves every document in the tree.
            variables=MappingProxyType(dict(variables)) if variables is not None else None,
            max_depth=self.resolution.max_depth,
            trim_documents=self.resolution.trim_documents,
            json_indent=self.interpolation.json_indent,
        )

    def _run(self, text: str, context: TransformContext) -> ResolutionResult:
        if self.resolution.trim_documents:
            text = text.strip()
        content = self.pipeline.execute(text, context)
        if context.variables_missing:
            logger.debug("Missing variables: %s", ", ".join(sorted(context.variables_missing)))
        return ResolutionResult(
            content=content,
            path=context.root_path,
            dependencies=list(context.includes_resolved),
            missing_variables=sorted(context.variables_missing),
        )

    def resolve_document(
        self,
        path: PathLike,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        base_dir: Optional[PathLike] = None,
    ) -> ResolutionResult:
        """Resolve the document at ``path``.

        Raises:
            ConfigurationError: ``path`` is relative and no base directory is known
            IncludeNotFoundError: the root document or an include target is missing
            IncludeReadError: a document cannot be read as UTF-8
            CircularDependencyError: a document includes one of its ancestors
            IncludeDepthError: nesting exceeds ``resolution.max_depth``
            MalformedDirectiveError: an include directive cannot be parsed
        """
        root_base = resolve_base_dir(path, base_dir, configured=self.resolution.base_dir)
        root_path = resolve_path(root_base, path)
        logger.debug("Resolving %s", root_path)
        text = read_document(root_path)
        context = self._context(base_dir=root_base, root_path=root_path, variables=variables)
        return self._run(text, context)

    def resolve(
        self,
        path: PathLike,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        base_dir: Optional[PathLike] = None,
    ) -> str:
        return self.resolve_document(path, variables, base_dir=base_dir).content

    def resolve_text(
        self,
        text: str,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        base_dir: Optional[PathLike] = None,
    ) -> str:
        """Resolve in-memory text; includes are anchored to ``base_dir``."""
        if base_dir is not None:
            root_base = Path(base_dir).expanduser().resolve()
        elif self.resolution.base_dir is not None:
            root_base = self.resolution.base_dir.resolve()
        else:
            raise ConfigurationError(
                "resolve_text() needs base_dir (or resolution.base_dir) to anchor includes",
                context={"key": "resolution.base_dir"},
            )
        context = self._context(base_dir=root_base, root_path=None, variables=variables)
        return self._run(text, context).content

    def parse(
        self,
        path: PathLike,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        base_dir: Optional[PathLike] = None,
    ) -> List[Message]:
        """Resolve ``path`` and split the result into role messages."""
        result = self.resolve_document(path, variables, base_dir=base_dir)
        return extract_messages(result.content, source=result.path)


def resolve_document(
    path: PathLike,
    variables: Optional[Mapping[str, Any]] = None,
    *,
    base_dir: Optional[PathLike] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> ResolutionResult:
    return PromptResolver(config=config).resolve_document(path, variables, base_dir=base_dir)


def resolve(
    path: PathLike,
    variables: Optional[Mapping[str, Any]] = None,
    *,
    base_dir: Optional[PathLike] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> str:
    """Resolve includes and variables of the document at ``path``."""
    return PromptResolver(config=config).resolve(path, variables, base_dir=base_dir)


def resolve_text(
    text: str,
    variables: Optional[Mapping[str, Any]] = None,
    *,
    base_dir: Optional[PathLike] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> str:
    return PromptResolver(config=config).resolve_text(text, variables, base_dir=base_dir)


def parse_fml(
    path: PathLike,
    variables: Optional[Mapping[str, Any]] = None,
    *,
    base_dir: Optional[PathLike] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> List[Message]:
    """Resolve ``path`` and return its role messages."""
    return PromptResolver(config=config).parse(path, variables, base_dir=base_dir)


__all__ = [
    "PromptResolver",
    "ResolutionResult",
    "resolve",
    "resolve_document",
    "resolve_text",
    "parse_fml",
]
