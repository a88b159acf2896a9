"""Unit tests for core/parse.py"""

import pytest

from htmlvega.core.composite import CompositeState
from htmlvega.core.models import FontStyleEnum, FontWeightEnum, SpacingContextEnum, TextDecorationEnum
from htmlvega.core.parse import HTMLParser
from htmlvega.core.registry import create_minimal_registry
from htmlvega.core.strategies.base import TagStrategy
from htmlvega.core.strategies.inline import ColorTagStrategy


class ExplodingStrategy(TagStrategy):
    tag_names = ('boom',)

    def parse(self, context):
        raise RuntimeError("kaboom")


def test_plain_text_default_style(parser):
    """Untagged text is one segment with every default style axis."""
    result = parser.parse_html("just text")
    assert result.errors == []
    assert len(result.segments) == 1
    seg = result.segments[0]
    assert seg.text == "just text"
    assert seg.font_weight == FontWeightEnum.normal
    assert seg.font_style == FontStyleEnum.normal
    assert seg.color == "#000000"
    assert seg.text_decoration == TextDecorationEnum.none


def test_bold_then_italic_scenario(parser):
    """Two styled words separated by a space are tag-to-tag with a space after the first."""
    result = parser.parse_html("<b>Hello</b> <i>World</i>")
    hello, world = result.segments
    assert (hello.text, hello.font_weight) == ("Hello", FontWeightEnum.bold)
    assert (world.text, world.font_style) == ("World", FontStyleEnum.italic)
    assert hello.has_space_after is True
    assert hello.spacing_context == SpacingContextEnum.tag_to_tag
    assert world.has_space_after is False


def test_nested_styles_combine(parser):
    """Nested tags combine their style changes and unwind on close."""
    result = parser.parse_html("<b>a<i>b</i>c</b>")
    a, b, c = result.segments
    assert b.font_weight == FontWeightEnum.bold and b.font_style == FontStyleEnum.italic
    assert c.font_weight == FontWeightEnum.bold and c.font_style == FontStyleEnum.normal


@pytest.mark.parametrize("markup", [
    "<b>x</b>",
    "<p><b>a</b> <span style='color: red'>b</span></p><ul><li>c</li></ul>",
    "<h1>T</h1><br>tail",
])
def test_stack_balanced_after_well_formed_input(parser, markup):
    """Well-formed input leaves only the default style on the stack."""
    assert parser.parse_with_details(markup).style_stack_depth == 1


def test_unclosed_tag_keeps_content(parser):
    """An unclosed tag is reported but its content is still parsed and styled."""
    result = parser.parse_html("<b>Unclosed bold")
    assert "Unclosed tags: b" in result.errors
    assert result.segments[0].text == "Unclosed bold"
    assert result.segments[0].font_weight == FontWeightEnum.bold


def test_unsupported_tag_is_skipped(parser):
    """Unknown tags are errors and do not change the style."""
    result = parser.parse_html("<blink>x</blink>")
    assert "Unsupported tag: blink" in result.errors
    assert "Unsupported closing tag: blink" in result.errors
    assert result.segments[0].font_weight == FontWeightEnum.normal


def test_mismatched_closing_tag(parser):
    """A closing tag that is not the innermost open one is reported."""
    assert "Mismatched closing tag: </b>" in parser.validate_html("<b><i>x</b></i>").errors


def test_self_closing_tags_not_tracked(parser):
    """br does not need a closing tag."""
    assert parser.validate_html("a<br>b").is_valid


def test_validate_empty_input(parser):
    """Empty input fails validation and parses to no segments."""
    assert parser.validate_html("").errors == ["Input must be a non-empty string"]
    result = parser.parse_html("")
    assert result.segments == []
    assert result.errors == ["Input must be a non-empty string"]


def test_closing_br_error(parser):
    """</br> is reported and leaves the style stack alone."""
    result = parser.parse_html("<b>a</br>b</b>")
    assert "Unexpected closing tag for self-closing <br> element" in result.errors
    assert all(s.font_weight == FontWeightEnum.bold for s in result.segments)


def test_exception_falls_back_to_plain_text():
    """A failing strategy yields one plain segment holding the whole input."""
    parser = HTMLParser(custom_strategies=[ExplodingStrategy()])
    result = parser.parse_html("<b>x</b><boom>y</boom>")
    assert [s.text for s in result.segments] == ["<b>x</b><boom>y</boom>"]
    assert result.segments[0].font_weight == FontWeightEnum.normal
    assert result.errors == ["Parse error: kaboom"]


def test_custom_strategy_registration(parser):
    """Registered strategies are used by later parses and can be removed."""
    parser.register_tag_strategy(ColorTagStrategy())
    assert parser.is_tag_supported("green")
    assert parser.parse_html("<green>go</green>").segments[0].color == "#00FF00"
    assert parser.remove_tag_strategy("green") is True
    assert not parser.is_tag_supported("green")


def test_registry_preset():
    """A parser over the minimal registry treats headings as unsupported."""
    parser = HTMLParser(create_minimal_registry())
    assert "Unsupported tag: h1" in parser.parse_html("<h1>x</h1>").errors


def test_parse_with_details(parser):
    """Details report used tags in source order and the supported vocabulary."""
    details = parser.parse_with_details("<p><b>x</b><B>y</B></p><blink>z</blink>")
    assert details.used_tags == ["p", "b", "blink"]
    assert "li" in details.supported_tags
    assert details.warnings == []
    assert "Unsupported tag: blink" in details.errors


def test_caller_state_is_reset(parser):
    """A caller-owned composite state is reset before each parse."""
    state = CompositeState()
    state.push("list", "ol", needs_counter=True)
    state.next_count("list", "ol", 1)
    result = parser.parse_html("<ol><li>a</li></ol>", state=state)
    assert result.segments[0].text == "1."
    assert state.depth("list") == 0


def test_independent_parses_do_not_leak_list_state(parser):
    """An unclosed list in one parse does not affect the next."""
    parser.parse_html("<ol><li>a<ol><li>b")
    result = parser.parse_html("<ol><li>c</li></ol>")
    assert [s.text for s in result.segments] == ["1.", "c"]


def test_entities_decoded(parser):
    """Character references become their characters."""
    assert parser.parse_html("<b>Tom &amp; Jerry</b>").segments[0].text == "Tom & Jerry"
