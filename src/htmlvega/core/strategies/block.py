"""Block-level strategies: headings, paragraphs and line breaks"""

from htmlvega.core.constants import HEADING_SIZES
from htmlvega.core.models import FontWeightEnum
from htmlvega.core.strategies.base import (
    ParseContext,
    ParsedOutput,
    TagStrategy,
    close_block,
    newline,
    open_block,
)


class HeadingTagStrategy(TagStrategy):
    tag_names = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')

    def apply_style(self, style, attributes='', tag_name=None):
        if tag_name:
            size = HEADING_SIZES.get(tag_name.lower(), 16)
        else:
            size = style.font_size or 16
        return style.restyle(font_weight=FontWeightEnum.bold, font_size=size)

    def is_line_break(self) -> bool:
        return True

    def parse(self, context: ParseContext) -> ParsedOutput:
        if context.is_closing_tag:
            return close_block(context)
        return open_block(self, context)


class ParagraphTagStrategy(TagStrategy):
    tag_names = ('p',)

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle()

    def is_line_break(self) -> bool:
        return True

    def parse(self, context: ParseContext) -> ParsedOutput:
        if context.is_closing_tag:
            return close_block(context)
        return open_block(self, context)


class LineBreakTagStrategy(TagStrategy):
    """<br>: emits one newline sentinel and leaves the style stack alone."""
    tag_names = ('br',)

    def is_line_break(self) -> bool:
        return True

    def parse(self, context: ParseContext) -> ParsedOutput:
        if context.is_closing_tag:
            return ParsedOutput(
                updated_style=context.current_style,
                errors=["Unexpected closing tag for self-closing <br> element"],
            )
        return ParsedOutput(
            updated_style=context.current_style,
            new_segments=[newline(context.current_style)],
        )
