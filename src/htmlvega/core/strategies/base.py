"""Tag strategy contract, parse context/output records and shared block-level helpers"""

from dataclasses import dataclass, field
from typing import Optional

from htmlvega.core.composite import CompositeState
from htmlvega.core.models import TextSegment, TextStyle, ValidationResult
from htmlvega.core.utils.text import has_more_content, needs_line_break
from htmlvega.core.utils.tokens import Token


@dataclass
class ParseContext:
    """Everything a strategy may read for one tag occurrence; not persisted."""
    current_style: TextStyle
    style_stack: tuple[TextStyle, ...]
    segments: list[TextSegment]
    attributes: str
    tag_name: str
    is_closing_tag: bool
    remaining: list[Token]
    index: int
    state: CompositeState = field(default_factory=CompositeState)


@dataclass
class ParsedOutput:
    """A strategy's answer: segments to append and what to do with the style stack."""
    updated_style: TextStyle
    new_segments: list[TextSegment] = field(default_factory=list)
    push_style: bool = False
    pop_style: bool = False
    errors: list[str] = field(default_factory=list)


class TagStrategy:
    """Handles one or more tag names.

    Subclasses set ``tag_names`` and usually only override ``apply_style``;
    the default ``parse`` pushes the derived style on open and pops on close.
    """

    tag_names: tuple[str, ...] = ()

    def get_tag_names(self) -> list[str]:
        return list(self.tag_names)

    def apply_style(self, style: TextStyle, attributes: str = '', tag_name: Optional[str] = None) -> TextStyle:
        """Return the style for content inside this tag; must not mutate style."""
        return style

    def validate_attributes(self, attributes: str) -> ValidationResult:
        return ValidationResult()

    def is_line_break(self) -> bool:
        return False

    def parse(self, context: ParseContext) -> ParsedOutput:
        if context.is_closing_tag:
            return close_inline(context)
        return open_inline(self, context)


def attribute_errors(strategy: TagStrategy, attributes: str) -> list[str]:
    result = strategy.validate_attributes(attributes)
    return [] if result.is_valid else list(result.errors)


def newline(style: TextStyle) -> TextSegment:
    """The forced line-break sentinel carrying the ambient style."""
    return TextSegment.from_style('\n', style)


def open_inline(strategy: TagStrategy, context: ParseContext) -> ParsedOutput:
    return ParsedOutput(
        updated_style=strategy.apply_style(context.current_style, context.attributes, context.tag_name),
        push_style=True,
        errors=attribute_errors(strategy, context.attributes),
    )


def close_inline(context: ParseContext) -> ParsedOutput:
    return ParsedOutput(updated_style=context.current_style, pop_style=True)


def open_block(strategy: TagStrategy, context: ParseContext) -> ParsedOutput:
    """Open a block element: break the line first if visible text precedes it."""
    out = open_inline(strategy, context)
    if needs_line_break(context.segments):
        out.new_segments.append(newline(context.current_style))
    return out


def close_block(context: ParseContext) -> ParsedOutput:
    """Close a block element: break the line only if something follows."""
    out = close_inline(context)
    if has_more_content(context.remaining):
        out.new_segments.append(newline(context.current_style))
    return out
