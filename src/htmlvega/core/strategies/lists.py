"""List family: ul/ol containers and li items, wired together by make_list_strategy()"""

import re

from htmlvega.core.composite import apply_list_context, list_item_prefix
from htmlvega.core.constants import DEFAULT_COLOR, LIST_FAMILY
from htmlvega.core.models import (
    FontStyleEnum,
    FontWeightEnum,
    ListTypeEnum,
    SpacingContextEnum,
    TextDecorationEnum,
    TextSegment,
    ValidationResult,
)
from htmlvega.core.strategies.base import (
    ParseContext,
    ParsedOutput,
    TagStrategy,
    attribute_errors,
    close_block,
    close_inline,
    newline,
    open_block,
)
from htmlvega.core.strategies.composite import CompositeStrategy
from htmlvega.core.utils.text import needs_line_break


LIST_ATTRS_RE = re.compile(r'^(\s*(class|id|style|type|start)\s*=\s*["\'][^"\']*["\']\s*)*$', re.IGNORECASE)
START_ATTR_RE = re.compile(r'start\s*=\s*["\']\s*(-?\d+)\s*["\']', re.IGNORECASE)


def validate_list_attributes(attributes: str) -> ValidationResult:
    if LIST_ATTRS_RE.match(attributes or ''):
        return ValidationResult()
    return ValidationResult(False, ["Invalid or unsupported attributes for list tag"])


class ListContainerStrategy(TagStrategy):
    """<ul> and <ol>: block bracketing only; the family stack is handled by the composite."""

    def __init__(self, list_type: ListTypeEnum) -> None:
        self.list_type = list_type
        self.tag_names = (list_type.value,)

    def validate_attributes(self, attributes: str) -> ValidationResult:
        return validate_list_attributes(attributes)

    def is_line_break(self) -> bool:
        return True

    def parse(self, context: ParseContext) -> ParsedOutput:
        if context.is_closing_tag:
            return close_block(context)

        out = open_block(self, context)
        if self.list_type is ListTypeEnum.ol:
            m = START_ATTR_RE.search(context.attributes or '')
            if m:
                depth = context.state.depth(LIST_FAMILY)
                context.state.set_counter(LIST_FAMILY, self.list_type.value, depth, int(m.group(1)) - 1)
        return out


class ListItemStrategy(TagStrategy):
    """<li>: emits its own plain-styled prefix segment, then pushes the list-item style."""
    tag_names = ('li',)

    def apply_style(self, style, attributes='', tag_name=None):
        return style.restyle(is_list_item=True)

    def validate_attributes(self, attributes: str) -> ValidationResult:
        return validate_list_attributes(attributes)

    def is_line_break(self) -> bool:
        return True

    def parse(self, context: ParseContext) -> ParsedOutput:
        if context.is_closing_tag:
            return close_inline(context)

        item_style = apply_list_context(context.current_style, context.state)
        out = ParsedOutput(
            updated_style=item_style,
            push_style=True,
            errors=attribute_errors(self, context.attributes),
        )
        if needs_line_break(context.segments):
            out.new_segments.append(newline(context.current_style))

        prefix = list_item_prefix(context.state)
        if prefix:
            plain = item_style.restyle(
                font_weight=FontWeightEnum.normal,
                font_style=FontStyleEnum.normal,
                color=DEFAULT_COLOR,
                text_decoration=TextDecorationEnum.none,
                href=None,
            )
            out.new_segments.append(TextSegment.from_style(
                prefix, plain,
                has_space_after=True,
                spacing_context=SpacingContextEnum.list_prefix,
            ))
        return out


def make_list_strategy() -> CompositeStrategy:
    """Build the composite serving ul, ol and li under the "list" family."""
    return CompositeStrategy(
        LIST_FAMILY,
        children={
            'ul': ListContainerStrategy(ListTypeEnum.ul),
            'ol': ListContainerStrategy(ListTypeEnum.ol),
            'li': ListItemStrategy(),
        },
        stack_config={
            'ul': (True, False),
            'ol': (True, True),
            'li': (False, False),
        },
    )
