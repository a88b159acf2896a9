"""HTML scanning: token stream -> styled segments via the tag strategy registry"""

import logging
from typing import Iterable, Optional

from htmlvega.core.composite import CompositeState
from htmlvega.core.constants import SELF_CLOSING_TAGS
from htmlvega.core.models import ParseDetails, ParseResult, TextSegment, TextStyle, ValidationResult
from htmlvega.core.registry import TagStrategyRegistry, create_default_registry
from htmlvega.core.spacing import analyze_spacing
from htmlvega.core.strategies.base import ParseContext, TagStrategy
from htmlvega.core.utils.tokens import CloseTag, OpenTag, Text, Token, iter_tags, tokenize


logger = logging.getLogger(__name__)


class HTMLParser:
    """Turns formatted markup into TextSegments; never raises on bad markup."""

    def __init__(
        self,
        registry: Optional[TagStrategyRegistry] = None,
        custom_strategies: Iterable[TagStrategy] = (),
    ) -> None:
        self.registry = registry if registry is not None else create_default_registry()
        for strategy in custom_strategies:
            self.registry.register(strategy)

    def parse_html(self, markup: str, state: Optional[CompositeState] = None) -> ParseResult:
        """Parse markup into spaced segments plus every structural and attribute error found."""
        result, _ = self._parse(markup, state)
        return result

    def _parse(self, markup: str, state: Optional[CompositeState]) -> tuple[ParseResult, int]:
        validation = self.validate_html(markup)
        errors = list(validation.errors)
        if not isinstance(markup, str):
            return ParseResult(segments=[], errors=errors), 1

        if state is None:
            state = CompositeState()
        else:
            state.reset()

        try:
            segments, scan_errors, depth = self._scan(tokenize(markup), state)
            errors.extend(scan_errors)
            return ParseResult(segments=analyze_spacing(segments, markup), errors=errors), depth
        except Exception as e:
            logger.warning("Parse failed, returning input as plain text: %s", e)
            fallback = TextSegment.from_style(markup, TextStyle())
            return ParseResult(segments=[fallback], errors=[f"Parse error: {e}"]), 1

    def _scan(self, tokens: list[Token], state: CompositeState) -> tuple[list[TextSegment], list[str], int]:
        """Walk the token stream keeping the style stack; returns (segments, errors, final depth)."""
        stack = [TextStyle()]
        segments: list[TextSegment] = []
        errors: list[str] = []

        for i, tok in enumerate(tokens):
            if isinstance(tok, Text):
                if tok.text.strip():
                    segments.append(TextSegment.from_style(tok.text, stack[-1]))
                continue

            closing = isinstance(tok, CloseTag)
            strategy = self.registry.get(tok.name)
            if strategy is None:
                logger.debug("No strategy for <%s%s>", '/' if closing else '', tok.name)
                errors.append(f"Unsupported closing tag: {tok.name}" if closing else f"Unsupported tag: {tok.name}")
                continue

            out = strategy.parse(ParseContext(
                current_style=stack[-1],
                style_stack=tuple(stack),
                segments=segments,
                attributes=tok.attributes if isinstance(tok, OpenTag) else '',
                tag_name=tok.name,
                is_closing_tag=closing,
                remaining=tokens[i + 1:],
                index=i,
                state=state,
            ))
            segments.extend(out.new_segments)
            errors.extend(out.errors)

            if closing:
                if out.pop_style and len(stack) > 1:
                    stack.pop()
            elif out.push_style:
                stack.append(out.updated_style)

        return segments, errors, len(stack)

    def validate_html(self, markup: str) -> ValidationResult:
        """Check tag balance and support without building segments."""
        if not isinstance(markup, str) or not markup:
            return ValidationResult(False, ["Input must be a non-empty string"])

        errors: list[str] = []
        open_tags: list[str] = []
        for closing, name in iter_tags(markup):
            if closing:
                if not open_tags or open_tags[-1] != name:
                    errors.append(f"Mismatched closing tag: </{name}>")
                else:
                    open_tags.pop()
                continue
            if name not in SELF_CLOSING_TAGS:
                open_tags.append(name)
            if not self.registry.is_supported(name):
                errors.append(f"Unsupported tag: {name}")

        if open_tags:
            errors.append(f"Unclosed tags: {', '.join(open_tags)}")
        return ValidationResult(is_valid=not errors, errors=errors)

    def parse_with_details(self, markup: str) -> ParseDetails:
        """Parse and report registry coverage alongside the result."""
        result, depth = self._parse(markup, None)
        used = list(dict.fromkeys(name for _, name in iter_tags(markup))) if isinstance(markup, str) else []
        return ParseDetails(
            segments=result.segments,
            errors=result.errors,
            warnings=[],
            supported_tags=self.supported_tags(),
            used_tags=used,
            style_stack_depth=depth,
        )

    def register_tag_strategy(self, strategy: TagStrategy) -> None:
        self.registry.register(strategy)

    def remove_tag_strategy(self, tag_name: str) -> bool:
        return self.registry.remove(tag_name)

    def supported_tags(self) -> list[str]:
        return self.registry.supported_tags()

    def is_tag_supported(self, tag_name: str) -> bool:
        return self.registry.is_supported(tag_name)

    @property
    def strategy_registry(self) -> TagStrategyRegistry:
        return self.registry
