"""Map extracted messages to chat-completion request shapes.

Pure functions; nothing here touches the filesystem or the network.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from fml.core.exceptions import ConfigurationError

from .messages import Message, strip_comments as _strip_comments

PROVIDERS = ("openai", "anthropic")


def _content(message: Message, strip_comments: bool) -> str:
    if strip_comments:
        return _strip_comments(message.content).strip()
    return message.content


def to_chat_format(
    messages: Iterable[Message],
    *,
    provider: str = "openai",
    strip_comments: bool = False,
) -> Any:
    """Convert messages to a provider's chat payload.

    - ``openai``: ``[{"role": ..., "content": ...}, ...]``
    - ``anthropic``: ``{"system": "...", "messages": [...]}``; system turns are
      joined with a blank line and ``system`` is omitted when there are none.

    Raises:
        ConfigurationError: unknown provider
    """
    items = list(messages)
    if provider == "openai":
        return [{"role": m.role, "content": _content(m, strip_comments)} for m in items]

    if provider == "anthropic":
        system_parts = [_content(m, strip_comments) for m in items if m.role == "system"]
        turns: List[Dict[str, str]] = [
            {"role": m.role, "content": _content(m, strip_comments)}
            for m in items
            if m.role != "system"
        ]
        payload: Dict[str, Any] = {"messages": turns}
        if system_parts:
            payload["system"] = "\n\n".join(system_parts)
        return payload

    raise ConfigurationError(
        f"Unknown chat provider '{provider}' (expected one of: {', '.join(PROVIDERS)})",
        context={"provider": provider},
    )


__all__ = ["to_chat_format", "PROVIDERS"]
