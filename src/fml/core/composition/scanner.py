"""Tag scanner for FML documents.

A small hand-written lexer instead of regular expressions: it walks the
text once per lookup, never backtracks, and recognises exactly the two
include forms:

- ``<include src="PATH"/>`` (self-closing; single quotes and unquoted values work too)
- ``<include src="PATH">...</include>`` (paired; the body is discarded)

Anything that is not a well-formed tag is treated as plain text.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from fml.core.exceptions import MalformedDirectiveError

INCLUDE_TAG = "include"

_NAME_CHARS = frozenset("_-:.")
_ATTR_STOP = frozenset("=/>\"'<")


@dataclass(frozen=True)
class Tag:
    """A single lexed tag."""

    name: str
    start: int
    end: int
    closing: bool = False
    self_closing: bool = False
    attributes: Dict[str, str] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class IncludeDirective:
    """An include directive and the span it occupies in its parent text."""

    src: str
    start: int
    end: int
    self_closing: bool


def line_of(text: str, offset: int) -> int:
    """1-based line number of ``offset`` in ``text``."""
    return text.count("\n", 0, offset) + 1


def read_tag(text: str, pos: int) -> Optional[Tag]:
    """Lex the tag starting at ``text[pos]`` (which must be ``<``).

    Returns None when the characters at ``pos`` do not form a complete tag.
    """
    n = len(text)
    if pos >= n or text[pos] != "<":
        return None
    i = pos + 1
    closing = False
    if i < n and text[i] == "/":
        closing = True
        i += 1

    name_start = i
    if i >= n or not (text[i].isalpha() or text[i] == "_"):
        return None
    while i < n and (text[i].isalnum() or text[i] in _NAME_CHARS):
        i += 1
    name = text[name_start:i]

    attrs: Dict[str, str] = {}
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch == ">":
            return Tag(name, pos, i + 1, closing, False, attrs)
        if ch == "/" and text.startswith("/>", i):
            return Tag(name, pos, i + 2, closing, True, attrs)
        if closing:
            return None

        attr_start = i
        while i < n and not text[i].isspace() and text[i] not in _ATTR_STOP:
            i += 1
        if i == attr_start:
            return None
        attr = text[attr_start:i]

        while i < n and text[i].isspace():
            i += 1
        value = ""
        if i < n and text[i] == "=":
            i += 1
            while i < n and text[i].isspace():
                i += 1
            if i >= n:
                return None
            quote = text[i]
            if quote in "\"'":
                close = text.find(quote, i + 1)
                if close < 0:
                    return None
                value = text[i + 1 : close]
                i = close + 1
            else:
                value_start = i
                while (
                    i < n
                    and not text[i].isspace()
                    and text[i] not in ">\"'<"
                    and not text.startswith("/>", i)
                ):
                    i += 1
                value = text[value_start:i]
        attrs[attr] = value
    return None


def is_tag_start(text: str, idx: int, name: str) -> bool:
    """True when ``text[idx:]`` starts an opening or closing tag called ``name``."""
    j = idx + 1
    if text.startswith("/", j):
        j += 1
    if not text.startswith(name, j):
        return False
    after = j + len(name)
    return after >= len(text) or text[after].isspace() or text[after] in "/>"


def find_closing(text: str, pos: int, name: str) -> Optional[int]:
    """Offset just past the ``</name>`` matching an already-open ``<name>``."""
    depth = 1
    while True:
        idx = text.find("<", pos)
        if idx < 0:
            return None
        if is_tag_start(text, idx, name):
            tag = read_tag(text, idx)
            if tag is not None and tag.name == name:
                if tag.closing:
                    depth -= 1
                    if depth == 0:
                        return tag.end
                elif not tag.self_closing:
                    depth += 1
                pos = tag.end
                continue
        pos = idx + 1


def find_include(text: str, start: int = 0, *, path: Optional[Path] = None) -> Optional[IncludeDirective]:
    """Return the first include directive at or after ``start``, or None.

    Args:
        text: Document text
        start: Offset to scan from
        path: Document path, used in error messages only

    Raises:
        MalformedDirectiveError: An ``<include`` tag is unterminated, has no
            usable ``src`` attribute, or a paired form is never closed.
    """
    pos = start
    while True:
        idx = text.find("<" + INCLUDE_TAG, pos)
        if idx < 0:
            return None
        if not is_tag_start(text, idx, INCLUDE_TAG):
            # e.g. <includes>, some other tag sharing the prefix
            pos = idx + 1
            continue

        tag = read_tag(text, idx)
        if tag is None:
            raise MalformedDirectiveError("unterminated <include> tag", path=path, offset=idx)
        src = tag.attributes.get("src", "").strip()
        if not src:
            raise MalformedDirectiveError("missing or empty src attribute", path=path, offset=idx)

        if tag.self_closing:
            return IncludeDirective(src, idx, tag.end, True)

        end = find_closing(text, tag.end, INCLUDE_TAG)
        if end is None:
            raise MalformedDirectiveError("<include> has no matching </include>", path=path, offset=idx)
        return IncludeDirective(src, idx, end, False)


__all__ = [
    "Tag",
    "IncludeDirective",
    "read_tag",
    "is_tag_start",
    "find_closing",
    "find_include",
    "line_of",
    "INCLUDE_TAG",
]
