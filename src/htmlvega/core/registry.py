"""Tag strategy registry: case-insensitive tag name -> strategy lookup, plus presets"""

import logging
from typing import Optional

from htmlvega.core.strategies.base import TagStrategy
from htmlvega.core.strategies.block import HeadingTagStrategy, LineBreakTagStrategy, ParagraphTagStrategy
from htmlvega.core.strategies.inline import (
    BoldTagStrategy,
    CodeTagStrategy,
    HighlightTagStrategy,
    HyperlinkTagStrategy,
    ItalicTagStrategy,
    SmallTextTagStrategy,
    SpanTagStrategy,
    StrikethroughTagStrategy,
    UnderlineTagStrategy,
)
from htmlvega.core.strategies.lists import make_list_strategy


logger = logging.getLogger(__name__)


class TagStrategyRegistry:
    """Maps each tag name to the most recently registered strategy declaring it."""

    def __init__(self) -> None:
        self._strategies: dict[str, TagStrategy] = {}

    def register(self, strategy: TagStrategy) -> None:
        for name in strategy.get_tag_names():
            key = name.lower()
            if key in self._strategies:
                logger.debug("Replacing strategy for <%s> with %s", key, type(strategy).__name__)
            self._strategies[key] = strategy
        logger.debug("Registered %s for %s", type(strategy).__name__, strategy.get_tag_names())

    def remove(self, tag_name: str) -> bool:
        """Drop one tag name; returns False if it was not registered."""
        removed = self._strategies.pop(tag_name.lower(), None) is not None
        if removed:
            logger.debug("Removed strategy for <%s>", tag_name.lower())
        return removed

    def unregister(self, strategy: TagStrategy) -> None:
        """Drop every tag name the strategy declares, if it still owns it."""
        for name in strategy.get_tag_names():
            if self._strategies.get(name.lower()) is strategy:
                self.remove(name)

    def get(self, tag_name: str) -> Optional[TagStrategy]:
        return self._strategies.get(tag_name.lower())

    def is_supported(self, tag_name: str) -> bool:
        return tag_name.lower() in self._strategies

    def supported_tags(self) -> list[str]:
        return list(self._strategies)

    def clear(self) -> None:
        self._strategies.clear()

    def __len__(self) -> int:
        return len(self._strategies)


def _build(strategies: list[TagStrategy]) -> TagStrategyRegistry:
    registry = TagStrategyRegistry()
    for strategy in strategies:
        registry.register(strategy)
    return registry


def create_default_registry() -> TagStrategyRegistry:
    """Registry with every built-in strategy except the colour-shortcut tags."""
    return _build([
        BoldTagStrategy(),
        ItalicTagStrategy(),
        UnderlineTagStrategy(),
        SpanTagStrategy(),
        HeadingTagStrategy(),
        ParagraphTagStrategy(),
        HyperlinkTagStrategy(),
        LineBreakTagStrategy(),
        CodeTagStrategy(),
        SmallTextTagStrategy(),
        HighlightTagStrategy(),
        StrikethroughTagStrategy(),
        make_list_strategy(),
    ])


def create_minimal_registry() -> TagStrategyRegistry:
    """Registry with only b/strong, i/em, u and span."""
    return _build([
        BoldTagStrategy(),
        ItalicTagStrategy(),
        UnderlineTagStrategy(),
        SpanTagStrategy(),
    ])


def create_registry(preset: str = "default") -> TagStrategyRegistry:
    if preset == "minimal":
        return create_minimal_registry()
    if preset == "default":
        return create_default_registry()
    raise ValueError(f"Unknown registry preset: {preset}")
