"""Include transformer.

Handles:
- <include src="path"/>            - Include entire file
- <include src="path">...</include> - Same, the body is discarded

Included documents are expanded recursively but never interpolated here;
variables are substituted once, later, over the fully assembled text.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fml.core.composition.ancestry import AncestorChain
from fml.core.composition.scanner import find_include
from fml.core.exceptions import ConfigurationError
from fml.core.paths import resolve_path
from fml.core.utils.io import read_document

from .base import ContentTransformer, TransformContext

logger = logging.getLogger(__name__)

# Identity used for the ancestor chain when the root is in-memory text.
INLINE_DOCUMENT = "<string>"


class IncludeResolver(ContentTransformer):
    """Resolve include directives recursively.

    Every include is resolved relative to the directory of the document that
    contains it. Cycle detection uses an immutable ancestor chain: each
    recursive call receives its own extended copy, so repeated but non-cyclic
    (diamond) includes are allowed.

    Any failure aborts the whole resolution; nothing is replaced with an
    error marker.
    """

    def transform(self, content: str, context: TransformContext) -> str:
        if context.root_path is not None:
            root = context.root_path
            current_dir = root.parent
        elif context.base_dir is not None:
            current_dir = context.base_dir
            root = current_dir / INLINE_DOCUMENT
        else:
            raise ConfigurationError(
                "Include resolution needs a root document path or a base directory",
                context={"key": "resolution.base_dir"},
            )
        return self._expand(content, root, current_dir, AncestorChain.root(root), context)

    def _expand(
        self,
        content: str,
        document: Path,
        current_dir: Path,
        chain: AncestorChain,
        context: TransformContext,
    ) -> str:
        """Replace every include directive in ``content``, left to right.

        After each replacement the text is re-scanned from the start; the
        inserted text is already fully expanded, and the cycle check bounds
        the recursion.
        """
        text = content
        while True:
            directive = find_include(text, path=self._display_path(document))
            if directive is None:
                return text

            target = resolve_path(current_dir, directive.src)
            branch = chain.extend(target, max_depth=context.max_depth)
            expanded = self._load(target, document, branch, context)
            text = text[: directive.start] + expanded + text[directive.end :]

    def _load(
        self,
        target: Path,
        document: Path,
        branch: AncestorChain,
        context: TransformContext,
    ) -> str:
        # The file is read and closed before descending into it.
        raw = read_document(
            target,
            included_from=self._display_path(document),
            chain=tuple(branch)[:-1],
        )
        if context.trim_documents:
            raw = raw.strip()
        context.record_include(target)
        logger.debug("Including %s (depth %d)", target, branch.depth)
        return self._expand(raw, target, target.parent, branch, context)

    @staticmethod
    def _display_path(document: Path) -> Optional[Path]:
        return None if document.name == INLINE_DOCUMENT else document


__all__ = ["IncludeResolver", "INLINE_DOCUMENT"]
