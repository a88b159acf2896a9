"""Integration tests for the parse → layout → export pipeline.

Each test runs the converter against the canonical markup below and asserts
stable expected values. Read this file top-to-bottom as a reference for what
each stage produces with default settings (14px Arial, start at (10, 30),
line height 19.6, wrap width 400, approximate measurement).

Canonical markup
----------------
    <h1>Title</h1><p><b>Hello</b> <i>World</i></p>

Segments after parse (4, newline sentinel included):
    "Title"  bold 32px            has_space_after=False
    "\\n"
    "Hello"  bold                 has_space_after=True   tag-to-tag
    "World"  italic               has_space_after=False

Boxes after layout (newline produces none):
    "Title"  x=10     y=30    w=110.4  h=32
    "Hello"  x=10     y=71.2  w=48.3   h=14    (30 + heading gap 16 + line 19.6 + 5.6)
    "World"  x=67.96  y=71.2  w=44.1   h=14    (bold space 9.66 beats the 7px minimum)

Bounds: 140.4 x 95.2. Spec: three text layers, no rule layers.
"""

import logging

import pytest

from htmlvega.config import Settings
from htmlvega.core.models import FontWeightEnum, SpacingContextEnum
from htmlvega.core.pipeline import HTMLToVegaLite, convert
from htmlvega.core.strategies.inline import ColorTagStrategy


CANONICAL_HTML = "<h1>Title</h1><p><b>Hello</b> <i>World</i></p>"


# --- fixtures ---

@pytest.fixture(name="converter")
def converter_fixture():
    return HTMLToVegaLite()


# --- parse ---

def test_parse_segments(converter):
    """Canonical markup parses to heading, newline and two styled words."""
    segments = converter.parse_html(CANONICAL_HTML).segments
    assert [s.text for s in segments] == ["Title", "\n", "Hello", "World"]
    assert segments[0].font_size == 32
    assert segments[2].font_weight == FontWeightEnum.bold
    assert segments[2].has_space_after is True
    assert segments[2].spacing_context == SpacingContextEnum.tag_to_tag


# --- layout ---

def test_layout_boxes(converter):
    """Boxes land at the documented positions."""
    boxes = converter.layout_segments(converter.parse_html(CANONICAL_HTML).segments)
    got = [(b.text, b.x, b.y, b.width) for b in boxes]
    expected = [("Title", 10, 30, 110.4), ("Hello", 10, 71.2, 48.3), ("World", 67.96, 71.2, 44.1)]
    for (text, x, y, w), (etext, ex, ey, ew) in zip(got, expected):
        assert text == etext
        assert (x, y, w) == (pytest.approx(ex), pytest.approx(ey), pytest.approx(ew))


# --- export ---

def test_convert_spec(converter):
    """The spec is sized to the bounds and has one text layer per style."""
    spec = converter.convert(CANONICAL_HTML)
    assert spec["width"] == pytest.approx(140.4)
    assert spec["height"] == pytest.approx(95.2)
    assert [layer["mark"]["type"] for layer in spec["layer"]] == ["text", "text", "text"]
    assert [layer["mark"]["fontSize"] for layer in spec["layer"]] == [32, 14, 14]


def test_convert_width_capped(converter):
    """A narrow max_width wraps text and caps the spec width."""
    spec = converter.convert("<p>" + "word " * 40 + "</p>", max_width=120)
    assert spec["width"] <= 120
    values = spec["layer"][0]["data"]["values"]
    assert len({v["y"] for v in values}) > 1


def test_convert_font_size_override(converter):
    """An explicit font_size replaces every layer's size."""
    spec = converter.convert(CANONICAL_HTML, font_size=20)
    assert {layer["mark"]["fontSize"] for layer in spec["layer"]} == {20}


def test_convert_decorations_add_rules(converter):
    """Underlined and struck-through text adds rule layers."""
    spec = converter.convert("<u>under</u> and <del>gone</del>")
    assert [layer["mark"]["type"] for layer in spec["layer"]].count("rule") == 2


def test_convert_link_href(converter):
    """Links carry their href into the spec data."""
    spec = converter.convert('<a href="https://example.com">site</a>')
    assert spec["layer"][0]["data"]["values"][0]["href"] == "https://example.com"


@pytest.mark.parametrize("markup", ["", None, 42])
def test_convert_rejects_empty_input(converter, markup):
    """Empty or non-string input is an error."""
    with pytest.raises(ValueError, match="Input must be a non-empty string"):
        converter.convert(markup)


def test_convert_logs_parse_errors(converter, caplog):
    """Recoverable parse errors are logged and the spec is still produced."""
    with caplog.at_level(logging.WARNING, logger="htmlvega.core.pipeline"):
        spec = converter.convert("<blink>x</blink>")
    assert "Unsupported tag: blink" in caplog.text
    assert spec["layer"][0]["data"]["values"][0]["text"] == "x"


# --- options and registry ---

def test_update_options(converter):
    """A new base font size re-derives the line height."""
    converter.update_options(font_size=20)
    opts = converter.options()
    assert opts["font_size"] == 20
    assert opts["line_height"] == pytest.approx(28)
    assert converter.layout_engine.line_height == pytest.approx(28)


def test_register_tag_strategy(converter):
    """Custom strategies are used by later conversions and can be removed."""
    converter.register_tag_strategy(ColorTagStrategy())
    assert "red" in converter.registered_tags()
    spec = converter.convert("<red>alert</red>")
    assert spec["layer"][0]["mark"]["color"] == "#FF0000"
    assert converter.unregister_tag_strategy("red") is True
    assert "red" not in converter.registered_tags()


def test_minimal_preset():
    """The minimal preset reports headings as unsupported."""
    converter = HTMLToVegaLite(Settings(registry_preset="minimal"))
    assert not converter.validate_html("<h1>x</h1>").is_valid


def test_create_minimal():
    """The minimal spec does not parse its text."""
    spec = HTMLToVegaLite.create_minimal("<b>raw</b>")
    assert spec["layer"][0]["data"]["values"][0]["text"] == "<b>raw</b>"


def test_module_convert():
    """The one-shot convert builds settings from keyword options."""
    spec = convert("<b>x</b>", background="white")
    assert spec["background"] == "white"
