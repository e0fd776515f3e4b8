"""
fml - prompt markup resolver

Resolves FML documents (XML-flavoured prompt files with ``<include>``
directives and ``{{ variable }}`` placeholders) into final prompt text or
role-tagged chat messages.
"""

from __future__ import annotations

__version__ = "1.0.0"

from fml.core.composition.chat import to_chat_format
from fml.core.composition.engine import (
    PromptResolver,
    ResolutionResult,
    parse_fml,
    resolve,
    resolve_document,
    resolve_text,
)
from fml.core.composition.messages import Message, extract_messages, strip_comments
from fml.core.exceptions import (
    CircularDependencyError,
    ConfigurationError,
    DocumentSyntaxError,
    FmlError,
    IncludeDepthError,
    IncludeNotFoundError,
    IncludeReadError,
    MalformedDirectiveError,
    MalformedDocumentError,
)

__all__ = [
    "__version__",
    "PromptResolver",
    "ResolutionResult",
    "resolve",
    "resolve_document",
    "resolve_text",
    "parse_fml",
    "Message",
    "extract_messages",
    "strip_comments",
    "to_chat_format",
    "FmlError",
    "ConfigurationError",
    "IncludeNotFoundError",
    "IncludeReadError",
    "CircularDependencyError",
    "IncludeDepthError",
    "MalformedDirectiveError",
    "MalformedDocumentError",
    "DocumentSyntaxError",
]
