from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence


class FmlError(Exception):
    """Base exception for prompt markup resolution."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


def format_chain(chain: Sequence[Path]) -> str:
    """Render an include chain as ``a -> b -> c``."""
    return " -> ".join(str(p) for p in chain)


class ConfigurationError(FmlError, ValueError):
    """Raised when configuration is invalid or a base directory cannot be determined."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FmlError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class IncludeNotFoundError(FmlError, FileNotFoundError):
    """Raised when an include target (or the root document) does not exist."""

    def __init__(
        self,
        path: Path,
        *,
        included_from: Optional[Path] = None,
        chain: Sequence[Path] = (),
    ) -> None:
        if included_from is not None:
            message = f"Include not found: {path} (from {included_from})"
        else:
            message = f"Document not found: {path}"
        if chain:
            message += f". Chain: {format_chain(chain)}"
        ctx = {
            "path": str(path),
            "included_from": str(included_from) if included_from else None,
            "chain": [str(p) for p in chain],
        }
        FmlError.__init__(self, message, context=ctx)
        FileNotFoundError.__init__(self, message)
        self.path = path


class IncludeReadError(FmlError, OSError):
    """Raised when an include target exists but cannot be read as UTF-8 text."""

    def __init__(self, path: Path, reason: str, *, included_from: Optional[Path] = None) -> None:
        message = f"Failed to read {path}: {reason}"
        ctx = {
            "path": str(path),
            "included_from": str(included_from) if included_from else None,
        }
        FmlError.__init__(self, message, context=ctx)
        OSError.__init__(self, message)
        self.path = path


class CircularDependencyError(FmlError, RuntimeError):
    """Raised when a document includes one of its own ancestors."""

    def __init__(self, chain: Sequence[Path]) -> None:
        self.chain = tuple(chain)
        message = f"Circular include detected: {format_chain(self.chain)}"
        FmlError.__init__(self, message, context={"chain": [str(p) for p in self.chain]})
        RuntimeError.__init__(self, message)


class IncludeDepthError(FmlError, RuntimeError):
    """Raised when nesting exceeds ``resolution.max_depth``."""

    def __init__(self, max_depth: int, chain: Sequence[Path]) -> None:
        self.chain = tuple(chain)
        message = f"Include depth exceeded (>{max_depth}). Chain: {format_chain(self.chain)}"
        FmlError.__init__(
            self,
            message,
            context={"max_depth": max_depth, "chain": [str(p) for p in self.chain]},
        )
        RuntimeError.__init__(self, message)


class MalformedDirectiveError(FmlError, ValueError):
    """Raised when an include directive has no parsable ``src`` or is unterminated."""

    def __init__(self, reason: str, *, path: Optional[Path] = None, offset: Optional[int] = None) -> None:
        where = str(path) if path is not None else "<string>"
        message = f"Malformed include directive in {where}"
        if offset is not None:
            message += f" at offset {offset}"
        message += f": {reason}"
        FmlError.__init__(
            self,
            message,
            context={"path": str(path) if path else None, "offset": offset},
        )
        ValueError.__init__(self, message)


class MalformedDocumentError(FmlError, ValueError):
    """Raised when role blocks are nested inside one another."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        role: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        FmlError.__init__(self, message, context={"source": source, "role": role, "line": line})
        ValueError.__init__(self, message)


class DocumentSyntaxError(FmlError, SyntaxError):
    """Raised when role tags are unbalanced."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        tag: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        FmlError.__init__(self, message, context={"source": source, "tag": tag, "line": line})
        SyntaxError.__init__(self, message)
        # Message already names the document; only the line goes on the SyntaxError fields.
        self.lineno = line


__all__ = [
    "FmlError",
    "ConfigurationError",
    "IncludeNotFoundError",
    "IncludeReadError",
    "CircularDependencyError",
    "IncludeDepthError",
    "MalformedDirectiveError",
    "MalformedDocumentError",
    "DocumentSyntaxError",
    "format_chain",
]
