"""Document composition: include expansion, interpolation, message extraction."""

from .ancestry import AncestorChain
from .chat import to_chat_format
from .engine import (
    PromptResolver,
    ResolutionResult,
    parse_fml,
    resolve,
    resolve_document,
    resolve_text,
)
from .messages import Message, extract_messages, strip_comments
from .scanner import IncludeDirective, find_include

__all__ = [
    "AncestorChain",
    "IncludeDirective",
    "find_include",
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
]
