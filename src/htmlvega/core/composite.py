"""Nesting and counter state for composite tag families (lists, and any future family)

A CompositeState is owned by whoever drives a parse pass and is handed to the
strategies through the ParseContext, so independent parses never share state.
"""

from typing import Optional

from htmlvega.core.constants import (
    BULLET_PREFIX,
    LIST_FAMILY,
    LIST_INDENT_BASE,
    LIST_INDENT_STEP,
    NUMBER_SUFFIX,
)
from htmlvega.core.models import ListTypeEnum, TextStyle


class CompositeState:
    """Per-family stacks of open container tags plus depth-scoped counters."""

    def __init__(self) -> None:
        self._stacks: dict[str, list[str]] = {}
        self._counters: dict[str, dict[str, int]] = {}

    def reset(self, family: Optional[str] = None) -> None:
        """Clear one family, or every family when none is given."""
        if family is None:
            self._stacks.clear()
            self._counters.clear()
        else:
            self._stacks.pop(family, None)
            self._counters.pop(family, None)

    @staticmethod
    def counter_key(family: str, tag_type: str, depth: int) -> str:
        return f"{family}-{tag_type}-{depth}"

    def push(self, family: str, tag_type: str, needs_counter: bool = False) -> None:
        """Enter a container; counted containers start a fresh counter at their depth."""
        stack = self._stacks.setdefault(family, [])
        stack.append(tag_type)
        if needs_counter:
            counters = self._counters.setdefault(family, {})
            counters[self.counter_key(family, tag_type, len(stack))] = 0

    def pop(self, family: str, cleanup_counters: bool = False) -> Optional[str]:
        """Leave the innermost container, deleting its counter when asked."""
        stack = self._stacks.get(family)
        if not stack:
            return None
        popped = stack.pop()
        if cleanup_counters and family in self._counters:
            self._counters[family].pop(self.counter_key(family, popped, len(stack) + 1), None)
        return popped

    def depth(self, family: str) -> int:
        return len(self._stacks.get(family, []))

    def parent(self, family: str) -> Optional[str]:
        stack = self._stacks.get(family)
        return stack[-1] if stack else None

    def in_context(self, family: str) -> bool:
        return self.depth(family) > 0

    def stack(self, family: str) -> tuple[str, ...]:
        return tuple(self._stacks.get(family, []))

    def counters(self, family: str) -> dict[str, int]:
        return dict(self._counters.get(family, {}))

    def set_counter(self, family: str, tag_type: str, depth: int, value: int) -> None:
        self._counters.setdefault(family, {})[self.counter_key(family, tag_type, depth)] = value

    def next_count(self, family: str, tag_type: str, depth: int) -> int:
        """Increment and return the counter for (family, tag_type, depth)."""
        counters = self._counters.get(family)
        if counters is None:
            return 1
        key = self.counter_key(family, tag_type, depth)
        counters[key] = counters.get(key, 0) + 1
        return counters[key]


# --- list family ---

def list_item_prefix(state: CompositeState) -> str:
    """Bullet for an unordered parent, "<n>. " for an ordered one, "" outside any list."""
    parent = state.parent(LIST_FAMILY)
    if parent == ListTypeEnum.ul.value:
        return BULLET_PREFIX
    if parent == ListTypeEnum.ol.value:
        depth = state.depth(LIST_FAMILY)
        return f"{state.next_count(LIST_FAMILY, ListTypeEnum.ol.value, depth)}{NUMBER_SUFFIX}"
    return ''


def apply_list_context(style: TextStyle, state: CompositeState) -> TextStyle:
    """Mark style as a list item at the current nesting depth."""
    parent = state.parent(LIST_FAMILY)
    depth = state.depth(LIST_FAMILY)
    return style.restyle(
        is_list_item=True,
        list_nesting_level=depth or None,
        list_type=ListTypeEnum(parent) if parent in ('ul', 'ol') else None,
    )


def list_indentation(nesting_level: Optional[int]) -> float:
    """Left indent in px for a list nesting level (20, 40, 60, ...)."""
    if not nesting_level or nesting_level <= 0:
        return 0
    return LIST_INDENT_BASE + (nesting_level - 1) * LIST_INDENT_STEP
