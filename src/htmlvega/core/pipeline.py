"""Conversion facade: parse -> layout -> bounds -> Vega-Lite spec"""

import logging
from typing import Any, Optional

from htmlvega.config import Settings
from htmlvega.core.export import VegaLiteGenerator
from htmlvega.core.layout import TextLayoutEngine
from htmlvega.core.measure import MeasureFn
from htmlvega.core.models import Bounds, ParseResult, PositionedTextSegment, TextSegment, ValidationResult
from htmlvega.core.parse import HTMLParser
from htmlvega.core.registry import TagStrategyRegistry, create_registry
from htmlvega.core.strategies.base import TagStrategy


logger = logging.getLogger(__name__)


class HTMLToVegaLite:
    """Holds one parser, layout engine and generator configured from Settings."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        measure: Optional[MeasureFn] = None,
        registry: Optional[TagStrategyRegistry] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.parser = HTMLParser(registry if registry is not None else create_registry(self.settings.registry_preset))
        self.layout_engine = TextLayoutEngine.from_settings(self.settings, measure)
        self.generator = VegaLiteGenerator(self.settings.font_size, self.settings.font_family)

    def convert(self, markup: str, **overrides: Any) -> dict:
        """Convert markup to a Vega-Lite spec; parse errors are logged, not raised."""
        if not isinstance(markup, str) or not markup:
            raise ValueError("Input must be a non-empty string")

        opts = self.settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})
        result = self.parser.parse_html(markup)
        if result.errors:
            logger.warning("HTML parsing warnings: %s", "; ".join(result.errors))

        positioned = self.layout_engine.layout_segments(result.segments, opts.max_width)
        bounds = self.layout_engine.calculate_bounds(positioned)
        return self.generator.generate_spec(
            positioned,
            bounds,
            max_width=opts.max_width,
            # only an explicit override replaces each group's own size
            font_size=overrides.get("font_size"),
            font_family=opts.font_family,
            background=opts.background,
        )

    def parse_html(self, markup: str) -> ParseResult:
        return self.parser.parse_html(markup)

    def layout_segments(self, segments: list[TextSegment], max_width: Optional[float] = None) -> list[PositionedTextSegment]:
        return self.layout_engine.layout_segments(segments, max_width)

    def generate_spec(self, segments: list[PositionedTextSegment], bounds: Bounds, **options: Any) -> dict:
        return self.generator.generate_spec(segments, bounds, **options)

    def update_options(self, **options: Any) -> None:
        """Merge options into settings; a new font_size without line_height re-derives line height."""
        changes = {k: v for k, v in options.items() if v is not None}
        if "font_size" in changes and "line_height" not in changes:
            changes["line_height"] = None
        self.settings = self.settings.model_copy(update=changes)
        self.layout_engine.update_options(**options)
        self.generator.update_options(options.get("font_size"), options.get("font_family"))

    def options(self) -> dict[str, Any]:
        opts = self.settings.model_dump()
        opts["line_height"] = self.settings.resolved_line_height
        return opts

    def register_tag_strategy(self, strategy: TagStrategy) -> None:
        self.parser.register_tag_strategy(strategy)

    def unregister_tag_strategy(self, tag_name: str) -> bool:
        return self.parser.remove_tag_strategy(tag_name)

    def registered_tags(self) -> list[str]:
        return self.parser.supported_tags()

    @property
    def strategy_registry(self) -> TagStrategyRegistry:
        return self.parser.strategy_registry

    def validate_html(self, markup: str) -> ValidationResult:
        return self.parser.validate_html(markup)

    @staticmethod
    def create_minimal(text: str, settings: Optional[Settings] = None) -> dict:
        settings = settings or Settings()
        return VegaLiteGenerator(settings.font_size, settings.font_family).generate_minimal_spec(text)


def convert(markup: str, **options: Any) -> dict:
    """One-shot conversion with Settings built from options."""
    settings = Settings(**{k: v for k, v in options.items() if v is not None})
    return HTMLToVegaLite(settings).convert(markup)
