"""Role-block extraction.

Splits resolved text into ordered chat messages:

    <system>You are terse.</system>
    <user>Hi {{ name }}</user>

becomes ``[Message("system", "You are terse."), Message("user", "Hi Bo")]``.

Only top-level ``<system>``, ``<user>`` and ``<assistant>`` blocks are recognised;
role tags wrapped in any other element (``<examples>``, ``<comment>``) are not.
Text outside them is dropped. Repeated roles stay separate messages.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

from fml.core.exceptions import DocumentSyntaxError, MalformedDocumentError

from .scanner import Tag, find_closing, is_tag_start, line_of, read_tag

logger = logging.getLogger(__name__)

Role = Literal["system", "user", "assistant"]
ROLES: tuple[str, ...] = ("system", "user", "assistant")
COMMENT_TAG = "comment"


@dataclass(frozen=True)
class Message:
    """One conversational turn."""

    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


class ExtractorState(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    IN_BLOCK = "in_block"
    EMIT = "emit"
    DONE = "done"


class MessageExtractor:
    """State machine over resolved text.

    IDLE -> SCANNING -> IN_BLOCK -> EMIT -> SCANNING ... -> DONE

    Raises:
        MalformedDocumentError: a role block opens inside another role block
        DocumentSyntaxError: a role block is never closed, closed by the wrong
            tag, or a closing tag appears with no open block
    """

    def __init__(self, text: str, *, source: Optional[Union[str, Path]] = None) -> None:
        self.text = text
        self.source = str(source) if source is not None else "<string>"
        self.state = ExtractorState.IDLE

    def _next_role_tag(self, pos: int) -> Optional[Tag]:
        text = self.text
        while True:
            idx = text.find("<", pos)
            if idx < 0:
                return None
            if any(is_tag_start(text, idx, role) for role in ROLES):
                tag = read_tag(text, idx)
                if tag is not None and tag.name in ROLES:
                    return tag
            pos = idx + 1

    def _next_top_level_role_tag(self, pos: int) -> Optional[Tag]:
        """Next role tag outside any other element; other elements are skipped whole."""
        text = self.text
        while True:
            idx = text.find("<", pos)
            if idx < 0:
                return None
            tag = read_tag(text, idx)
            if tag is None:
                pos = idx + 1
                continue
            if tag.name in ROLES:
                return tag
            if tag.closing or tag.self_closing:
                pos = tag.end
                continue
            end = find_closing(text, tag.end, tag.name)
            # An element that is never closed is plain text.
            pos = end if end is not None else tag.end

    def _unclosed(self, opened: Tag) -> DocumentSyntaxError:
        return DocumentSyntaxError(
            f"Unclosed <{opened.name}> block in {self.source}",
            source=self.source,
            tag=opened.name,
            line=line_of(self.text, opened.start),
        )

    def run(self) -> List[Message]:
        messages: List[Message] = []
        pos = 0
        opened: Optional[Tag] = None
        content = ""
        self.state = ExtractorState.SCANNING

        while self.state is not ExtractorState.DONE:
            if self.state is ExtractorState.SCANNING:
                tag = self._next_top_level_role_tag(pos)
                if tag is None:
                    self.state = ExtractorState.DONE
                    continue
                if tag.closing:
                    raise DocumentSyntaxError(
                        f"Unexpected </{tag.name}> with no open <{tag.name}> block in {self.source}",
                        source=self.source,
                        tag=tag.name,
                        line=line_of(self.text, tag.start),
                    )
                opened = tag
                pos = tag.end
                if tag.self_closing:
                    content = ""
                    self.state = ExtractorState.EMIT
                else:
                    self.state = ExtractorState.IN_BLOCK

            elif self.state is ExtractorState.IN_BLOCK and opened is not None:
                tag = self._next_role_tag(pos)
                if tag is None:
                    raise self._unclosed(opened)
                if not tag.closing:
                    raise MalformedDocumentError(
                        f"Nested <{tag.name}> inside <{opened.name}> in {self.source}",
                        source=self.source,
                        role=tag.name,
                        line=line_of(self.text, tag.start),
                    )
                if tag.name != opened.name:
                    raise DocumentSyntaxError(
                        f"Mismatched </{tag.name}> closing <{opened.name}> in {self.source}",
                        source=self.source,
                        tag=tag.name,
                        line=line_of(self.text, tag.start),
                    )
                content = self.text[opened.end : tag.start]
                pos = tag.end
                self.state = ExtractorState.EMIT

            elif self.state is ExtractorState.EMIT and opened is not None:
                message = Message(opened.name, content.strip())  # type: ignore[arg-type]
                messages.append(message)
                logger.debug("Extracted %s message (%d chars)", message.role, len(message.content))
                opened = None
                self.state = ExtractorState.SCANNING

            else:
                raise RuntimeError(f"Extractor entered {self.state.value} with no open block")

        return messages


def extract_messages(text: str, *, source: Optional[Union[str, Path]] = None) -> List[Message]:
    """Decompose resolved text into role-tagged messages.

    Args:
        text: Fully resolved (and interpolated) document text
        source: Document the text came from, used in error messages
    """
    return MessageExtractor(text, source=source).run()


def strip_comments(text: str) -> str:
    """Remove ``<comment>...</comment>`` blocks.

    Plain resolution keeps comments; this is for consumers that send the
    text to a model.

    Raises:
        DocumentSyntaxError: a ``<comment>`` block is never closed
    """
    out: List[str] = []
    pos = 0
    scan = 0
    while True:
        idx = text.find("<" + COMMENT_TAG, scan)
        if idx < 0:
            break
        tag = read_tag(text, idx) if is_tag_start(text, idx, COMMENT_TAG) else None
        if tag is None or tag.name != COMMENT_TAG or tag.closing:
            scan = idx + 1
            continue
        if tag.self_closing:
            end = tag.end
        else:
            found = find_closing(text, tag.end, COMMENT_TAG)
            if found is None:
                raise DocumentSyntaxError(
                    "Unclosed <comment> block",
                    tag=COMMENT_TAG,
                    line=line_of(text, idx),
                )
            end = found
        out.append(text[pos:idx])
        pos = scan = end
    out.append(text[pos:])
    return "".join(out)


__all__ = [
    "Message",
    "Role",
    "ROLES",
    "ExtractorState",
    "MessageExtractor",
    "extract_messages",
    "strip_comments",
]
