"""Inline formatting strategies: emphasis, spans, links, code, small text and colour tags"""

import re
from typing import Optional
from urllib.parse import urlparse

from htmlvega.core.constants import (
    CODE_COLOR,
    COLOR_MAP,
    DEFAULT_FONT_SIZE,
    HIGHLIGHT_COLOR,
    LINK_COLOR,
    MUTED_COLOR,
    SMALL_TEXT_SCALE,
    SUBSCRIPT_SHIFT,
    SUPERSCRIPT_SHIFT,
)
from htmlvega.core.models import (
    FontStyleEnum,
    FontWeightEnum,
    TextDecorationEnum,
    TextStyle,
    ValidationResult,
)
from htmlvega.core.strategies.base import TagStrategy
from htmlvega.core.utils.css import apply_declarations, extract_style_attribute, validate_style_attribute


HREF_RE = re.compile(r'(?<![\w-])href\s*=\s*(["\'])(.*?)\1', re.IGNORECASE | re.DOTALL)


class BoldTagStrategy(TagStrategy):
    tag_names = ('b', 'strong')

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle(font_weight=FontWeightEnum.bold)


class ItalicTagStrategy(TagStrategy):
    tag_names = ('i', 'em')

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle(font_style=FontStyleEnum.italic)


class UnderlineTagStrategy(TagStrategy):
    tag_names = ('u',)

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle(text_decoration=TextDecorationEnum.underline)


class SpanTagStrategy(TagStrategy):
    """<span style="..."> with color, font-weight, font-style and text-decoration."""
    tag_names = ('span',)

    def apply_style(self, style, attributes='', tag_name=None):
        style_str = extract_style_attribute(attributes)
        if not style_str:
            return style.restyle()
        return apply_declarations(style.restyle(), style_str)

    def validate_attributes(self, attributes: str) -> ValidationResult:
        return validate_style_attribute(attributes)


def extract_href(attributes: str) -> Optional[str]:
    m = HREF_RE.search(attributes or '')
    return m.group(2) if m else None


def is_valid_url(url: str) -> bool:
    """Accept relative paths, absolute http(s) URLs with a host, other schemes, fragments and queries."""
    if url.startswith(('/', './', '../')):
        return True
    if url.startswith(('http://', 'https://')):
        return bool(urlparse(url).netloc)
    if '://' in url:
        return True
    return url.startswith(('#', '?'))


class HyperlinkTagStrategy(TagStrategy):
    tag_names = ('a',)

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle(
            color=LINK_COLOR,
            text_decoration=TextDecorationEnum.underline,
            href=extract_href(attributes),
        )

    def validate_attributes(self, attributes: str) -> ValidationResult:
        href = extract_href(attributes)
        if href is None:
            return ValidationResult()
        if not href.strip():
            return ValidationResult(False, ["Hyperlink has empty href attribute"])
        if not is_valid_url(href):
            return ValidationResult(False, ["Invalid URL in href attribute"])
        return ValidationResult()


class CodeTagStrategy(TagStrategy):
    tag_names = ('code', 'pre', 'kbd', 'samp')

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle(color=CODE_COLOR)


class HighlightTagStrategy(TagStrategy):
    tag_names = ('mark',)

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle(color=HIGHLIGHT_COLOR)


class StrikethroughTagStrategy(TagStrategy):
    tag_names = ('s', 'strike', 'del')

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle(text_decoration=TextDecorationEnum.line_through, color=MUTED_COLOR)


class SmallTextTagStrategy(TagStrategy):
    """<small>, <sub> and <sup>: 75% size; sub/sup shift vertically, small is muted."""
    tag_names = ('small', 'sub', 'sup')

    def apply_style(self, style, attributes='', tag_name=None):
        base = style.font_size or DEFAULT_FONT_SIZE
        smaller = base * SMALL_TEXT_SCALE
        tag = (tag_name or '').lower()
        if tag == 'sub':
            return style.restyle(font_size=smaller, vertical_offset=base * SUBSCRIPT_SHIFT)
        if tag == 'sup':
            return style.restyle(font_size=smaller, vertical_offset=base * SUPERSCRIPT_SHIFT)
        if tag == 'small':
            return style.restyle(font_size=smaller, color=MUTED_COLOR)
        return style.restyle()


class ColorTagStrategy(TagStrategy):
    """Colour shortcut tags such as <red> or <blue>; not part of the default registry."""

    def __init__(self, colors: Optional[dict[str, str]] = None) -> None:
        self.colors = dict(colors if colors is not None else COLOR_MAP)
        self.tag_names = tuple(self.colors)

    def apply_style(self, style: TextStyle, attributes: str = '', tag_name: Optional[str] = None) -> TextStyle:
        return style.restyle(color=self.colors.get((tag_name or '').lower(), style.color))
