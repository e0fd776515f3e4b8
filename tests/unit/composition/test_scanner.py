from __future__ import annotations

import pytest

from fml.core.composition.scanner import (
    IncludeDirective,
    find_closing,
    find_include,
    line_of,
    read_tag,
)
from fml.core.exceptions import MalformedDirectiveError


def test_self_closing_directive_span():
    directive_text = '<include src="a.fml"/>'
    text = f"abc {directive_text} def"
    directive = find_include(text)
    assert directive == IncludeDirective("a.fml", 4, 4 + len(directive_text), True)
    assert text[directive.start : directive.end] == directive_text


@pytest.mark.parametrize(
    "directive_text",
    [
        '<include src="a.fml" />',
        "<include src='a.fml'/>",
        "<include src=a.fml />",
        '<include  src = "a.fml"  />',
        '<include id="x" src="a.fml"/>',
    ],
)
def test_self_closing_variants(directive_text: str):
    directive = find_include(directive_text)
    assert directive is not None
    assert directive.src == "a.fml"
    assert directive.self_closing
    assert directive.end == len(directive_text)


def test_paired_directive_spans_body_and_closing_tag():
    text = 'x<include src="a.fml">ignored body</include>y'
    directive = find_include(text)
    assert directive is not None
    assert not directive.self_closing
    assert directive.start == 1
    assert directive.end == len(text) - 1


def test_paired_directive_with_nested_include_in_body():
    text = '<include src="a"><include src="b"></include></include>!'
    directive = find_include(text)
    assert directive is not None
    assert directive.src == "a"
    assert directive.end == len(text) - 1


def test_src_is_stripped():
    directive = find_include('<include src="  a.fml  "/>')
    assert directive is not None
    assert directive.src == "a.fml"


def test_tags_sharing_the_prefix_are_not_directives():
    assert find_include("<includes>x</includes> <include-me/>") is None


def test_start_offset_skips_earlier_directives():
    text = '<include src="a"/><include src="b"/>'
    first = find_include(text)
    assert first is not None
    second = find_include(text, first.end)
    assert second is not None
    assert second.src == "b"


def test_no_directive_returns_none():
    assert find_include("plain <b>text</b> and {{ var }}") is None


@pytest.mark.parametrize(
    "text, reason",
    [
        ("<include/>", "src"),
        ("<include>body</include>", "src"),
        ('<include src=""/>', "src"),
        ('<include href="a.fml"/>', "src"),
        ('before <include src="a.fml"', "unterminated"),
        ('<include src="a.fml>', "unterminated"),
        ('<include src="a.fml">never closed', "matching"),
    ],
)
def test_malformed_directives(text: str, reason: str):
    with pytest.raises(MalformedDirectiveError) as exc:
        find_include(text)
    assert reason in str(exc.value)


def test_malformed_directive_reports_offset():
    with pytest.raises(MalformedDirectiveError) as exc:
        find_include("0123<include/>")
    assert exc.value.context["offset"] == 4


def test_read_tag_attributes():
    tag = read_tag('<user name="a" flag data-x=\'1\'>', 0)
    assert tag is not None
    assert tag.name == "user"
    assert not tag.closing
    assert tag.attributes == {"name": "a", "flag": "", "data-x": "1"}


def test_read_tag_closing():
    tag = read_tag("</assistant >", 0)
    assert tag is not None
    assert tag.closing
    assert tag.name == "assistant"
    assert tag.end == len("</assistant >")


@pytest.mark.parametrize("text", ["< user>", "<1abc>", '<a href="x', "<a", "</a b>", "plain"])
def test_read_tag_rejects_non_tags(text: str):
    assert read_tag(text, 0) is None


def test_find_closing_tracks_depth():
    text = "<c>a<c>b</c>c</c>tail"
    end = find_closing(text, len("<c>"), "c")
    assert text[:end] == "<c>a<c>b</c>c</c>"


def test_find_closing_missing():
    assert find_closing("<c>never", 3, "c") is None


def test_line_of():
    assert line_of("a\nb\nc", 0) == 1
    assert line_of("a\nb\nc", 4) == 3
