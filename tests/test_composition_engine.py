from __future__ import annotations

from pathlib import Path

import pytest

from fml import Message, parse_fml, resolve, to_chat_format

ROOT = Path(__file__).resolve().parent.parent

NO_TAGS = "This file has no tags at all."
INCLUDE_EXPANDED = "\n".join(
    ["This file contains an include in different xml formats", NO_TAGS, NO_TAGS, NO_TAGS]
)


def _p(rel: str) -> Path:
    return ROOT / "tests" / "context" / "fml_samples" / rel


def test_document_without_tags_is_unchanged():
    assert resolve(_p("no-tags.fml")) == NO_TAGS


def test_all_include_forms():
    assert resolve(_p("include.fml")) == INCLUDE_EXPANDED


def test_nested_include():
    expected = f"This file contains a nested include\n<tag>\n{INCLUDE_EXPANDED}\n</tag>"
    assert resolve(_p("nested-include.fml")) == expected


def test_simple_variable():
    out = resolve(_p("simple.fml"), {"name": "Ada"})
    assert out.startswith("Welcome, Ada! Let me walk you through the basics.\n<instructions>")


def test_placeholders_survive_without_variables():
    assert "{{name}}" in resolve(_p("simple.fml"))


def test_nested_include_with_variable_resolves_relative_to_partial():
    expected = (
        "This file contains a nested include with variables\n"
        "<tag>\n"
        "This file contains an include\n"
        "Hello, Ada! Let me walk you through the basics.\n"
        "</tag>"
    )
    assert resolve(_p("nested-include-with-var.fml"), {"name": "Ada"}) == expected


def test_onboarding_messages():
    messages = parse_fml(
        _p("onboarding.fml"),
        {"name": "Ada", "product": "Acme", "profile": {"plan": "pro", "seats": 3}},
    )
    assert messages == [
        Message(
            "system",
            "You are a friendly onboarding guide for Acme.\n"
            "<comment>Keep the persona short.</comment>",
        ),
        Message("user", "Hi, I am Ada."),
        Message("assistant", "Welcome, Ada!"),
        Message("user", 'My profile:\n{\n  "plan": "pro",\n  "seats": 3\n}'),
    ]


@pytest.mark.parametrize("provider", ["openai", "anthropic"])
def test_onboarding_chat_payload_without_comments(provider: str):
    messages = parse_fml(_p("onboarding.fml"), {"name": "Ada", "product": "Acme", "profile": {}})
    payload = to_chat_format(messages, provider=provider, strip_comments=True)
    if provider == "openai":
        system = payload[0]["content"]
        assert len(payload) == 4
    else:
        system = payload["system"]
        assert [m["role"] for m in payload["messages"]] == ["user", "assistant", "user"]
    assert system == "You are a friendly onboarding guide for Acme."
