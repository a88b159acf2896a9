"""Composite strategy: one registry entry routing a family of related tags to child strategies"""

from dataclasses import replace

from htmlvega.core.strategies.base import ParseContext, ParsedOutput, TagStrategy


class CompositeStrategy(TagStrategy):
    """Routes each tag of a family to its child and tracks container nesting.

    ``stack_config`` maps a tag name to ``(manage_stack, needs_counter)``.
    Containers with ``manage_stack`` are pushed onto the family stack before
    their child runs and popped after it returns on close; counters are
    dropped on close when ``needs_counter`` is set.
    """

    def __init__(
        self,
        family: str,
        children: dict[str, TagStrategy],
        stack_config: dict[str, tuple[bool, bool]] | None = None,
    ) -> None:
        self.family = family
        self.children = {name.lower(): child for name, child in children.items()}
        self.stack_config = {name.lower(): cfg for name, cfg in (stack_config or {}).items()}
        self.tag_names = tuple(self.children)

    def child_for(self, tag_name: str) -> TagStrategy | None:
        return self.children.get((tag_name or '').lower())

    def parse(self, context: ParseContext) -> ParsedOutput:
        tag = context.tag_name.lower()
        child = self.child_for(tag)
        if child is None:
            return ParsedOutput(
                updated_style=context.current_style,
                errors=[f"Unknown tag in composite strategy: {tag}"],
            )

        manage_stack, needs_counter = self.stack_config.get(tag, (False, False))
        if context.is_closing_tag:
            out = child.parse(context)
            if manage_stack:
                context.state.pop(self.family, cleanup_counters=needs_counter)
            return out

        if manage_stack:
            context.state.push(self.family, tag, needs_counter=needs_counter)
        return child.parse(replace(context, tag_name=tag))

    def apply_style(self, style, attributes='', tag_name=None):
        child = self.child_for(tag_name or '')
        return child.apply_style(style, attributes, tag_name) if child else style

    def is_line_break(self) -> bool:
        return True
