"""Unit tests for core/utils/css.py"""

import pytest

from htmlvega.core.models import FontStyleEnum, FontWeightEnum, TextDecorationEnum, TextStyle
from htmlvega.core.utils.css import (
    apply_declarations,
    extract_style_attribute,
    parse_declarations,
    validate_style_attribute,
)


def test_extract_style_attribute():
    """The style attribute value is returned regardless of quote style."""
    assert extract_style_attribute(' id="a" style=\'color: red\'') == "color: red"
    assert extract_style_attribute(' id="a"') is None
    assert extract_style_attribute(' data-style="x" style="color: blue"') == "color: blue"


def test_parse_declarations():
    """Declarations are split on ';' and ':' with lowercased property names."""
    assert parse_declarations("Color: red;font-weight : bold;;") == {"color": "red", "font-weight": "bold"}


@pytest.mark.parametrize("css, field, expected", [
    ("font-weight: bold", "font_weight", FontWeightEnum.bold),
    ("font-weight: 600", "font_weight", FontWeightEnum.bold),
    ("font-weight: 500", "font_weight", FontWeightEnum.normal),
    ("font-style: oblique", "font_style", FontStyleEnum.italic),
    ("font-style: normal", "font_style", FontStyleEnum.normal),
    ("text-decoration: underline dotted", "text_decoration", TextDecorationEnum.underline),
    ("text-decoration: line-through", "text_decoration", TextDecorationEnum.none),
    ("color: #336699", "color", "#336699"),
])
def test_apply_declarations(css, field, expected):
    """Each supported declaration maps onto its style axis."""
    assert getattr(apply_declarations(TextStyle(), css), field) == expected


def test_apply_declarations_ignores_unknown():
    """Unsupported properties leave the style unchanged."""
    assert apply_declarations(TextStyle(), "margin: 4px") == TextStyle()


@pytest.mark.parametrize("css, error", [
    ("font-weight: heavy", "Invalid font-weight value: heavy"),
    ("font-style: slanted", "Invalid font-style value: slanted"),
    ("text-decoration: wavy", "Invalid text-decoration value: wavy"),
    ("color: #12", "Invalid color value: #12"),
    ("margin: 4px", "Unsupported CSS property: margin"),
])
def test_validate_style_attribute_errors(css, error):
    """Invalid values and unsupported properties are reported."""
    result = validate_style_attribute(f'style="{css}"')
    assert not result.is_valid
    assert result.errors == [error]


def test_validate_style_attribute_valid():
    """A fully supported style, or no style attribute at all, is valid."""
    assert validate_style_attribute('style="color: red; font-weight: 700"').is_valid
    assert validate_style_attribute('class="x"').is_valid
