"""Layout engine: place segments on lines with wrapping, list indentation and heading rhythm"""

import logging
from typing import Any, Optional

from htmlvega.core.composite import list_indentation
from htmlvega.core.constants import (
    DEFAULT_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    HEADING_BY_SIZE,
    HEADING_SIZES,
    LINE_HEIGHT_RATIO,
)
from htmlvega.core.measure import ApproxMeasurer, MeasureFn, make_measurer
from htmlvega.core.models import (
    Bounds,
    FontStyleEnum,
    FontWeightEnum,
    PositionedTextSegment,
    SpacingContextEnum,
    TextDecorationEnum,
    TextMeasurement,
    TextSegment,
    TextStyle,
)


logger = logging.getLogger(__name__)

DEFAULT_WRAP_WIDTH = 400
UNSTYLED_OFFSET = 2
BOUNDS_PADDING_X = 20
BOUNDS_PADDING_Y = 10

TEXT_TO_TAG_MIN = 8
SHARED_PARENT_MAX = 5
TAG_TO_TAG_MIN = 7
WRAPPED_TAG_TO_TAG_MIN = 10
TAG_TO_TEXT_MAX = 6
LIST_PREFIX_SPACE = 5


def is_unstyled(seg: TextStyle) -> bool:
    """Default weight, style, decoration and colour; font size is not considered."""
    return (
        seg.font_weight == FontWeightEnum.normal
        and seg.font_style == FontStyleEnum.normal
        and seg.text_decoration == TextDecorationEnum.none
        and (not seg.color or seg.color.lower() in (DEFAULT_COLOR, 'black'))
    )


def heading_type(seg: TextStyle) -> Optional[str]:
    """h1..h6 when the segment is bold at a heading-table size, else None."""
    if seg.font_weight != FontWeightEnum.bold or seg.font_size is None:
        return None
    return HEADING_BY_SIZE.get(seg.font_size)


def shares_parent_styling(current: TextStyle, nxt: TextStyle) -> bool:
    """Heuristic: both carry the same non-default weight, colour or font size."""
    weight = current.font_weight == nxt.font_weight and current.font_weight != FontWeightEnum.normal
    color = (current.color or DEFAULT_COLOR) == (nxt.color or DEFAULT_COLOR) and (current.color or DEFAULT_COLOR) != DEFAULT_COLOR
    cur_size = current.font_size or DEFAULT_FONT_SIZE
    size = cur_size == (nxt.font_size or DEFAULT_FONT_SIZE) and cur_size != DEFAULT_FONT_SIZE
    return weight or color or size


def indentation(seg: TextSegment) -> float:
    return list_indentation(seg.list_nesting_level) if seg.is_list_item else 0


class TextLayoutEngine:
    """Cursor-based line layout. Never raises on empty or odd input."""

    def __init__(
        self,
        font_size: float = DEFAULT_FONT_SIZE,
        font_family: str = DEFAULT_FONT_FAMILY,
        start_x: float = 10,
        start_y: float = 30,
        line_height: Optional[float] = None,
        measure: Optional[MeasureFn] = None,
    ) -> None:
        self.font_size = font_size
        self.font_family = font_family
        self.start_x = start_x
        self.start_y = start_y
        self.line_height = line_height if line_height is not None else font_size * LINE_HEIGHT_RATIO
        self.measure = measure or ApproxMeasurer(font_size)

    @classmethod
    def from_settings(cls, settings, measure: Optional[MeasureFn] = None) -> "TextLayoutEngine":
        if measure is None:
            measure = make_measurer(settings.measure_backend, settings.font_size,
                                    settings.font_family, settings.font_path)
        return cls(
            font_size=settings.font_size,
            font_family=settings.font_family,
            start_x=settings.start_x,
            start_y=settings.start_y,
            line_height=settings.line_height,
            measure=measure,
        )

    def measure_text(self, text: str, style: TextStyle) -> TextMeasurement:
        """Measure at the segment's own size, or the engine's base size when unset."""
        if style.font_size is None:
            style = style.restyle(font_size=self.font_size)
        return self.measure(text, style)

    def _space_width(self, seg: TextSegment, following: Optional[TextSegment], tag_to_tag_min: float) -> float:
        base = self.measure_text(' ', seg).width
        ctx = seg.spacing_context
        if ctx == SpacingContextEnum.text_to_tag:
            return max(base, TEXT_TO_TAG_MIN)
        if ctx == SpacingContextEnum.tag_to_tag:
            if following is not None and shares_parent_styling(seg, following):
                return min(base, SHARED_PARENT_MAX)
            return max(base, tag_to_tag_min)
        if ctx == SpacingContextEnum.tag_to_text:
            return min(base, TAG_TO_TEXT_MAX)
        if ctx == SpacingContextEnum.list_prefix:
            return LIST_PREFIX_SPACE
        return base

    def _is_end_of_heading_block(self, segments: list[TextSegment], index: int, current: str) -> bool:
        for seg in segments[index + 1:]:
            if seg.is_newline or not seg.text.strip():
                continue
            return heading_type(seg) != current
        return True

    def _place(self, seg: TextSegment, text: str, x: float, y: float, m: TextMeasurement) -> PositionedTextSegment:
        return PositionedTextSegment(
            **{**seg.model_dump(), "text": text},
            x=x, y=y, width=m.width, height=m.height,
        )

    def layout_segments(self, segments: list[TextSegment], max_width: Optional[float] = None) -> list[PositionedTextSegment]:
        """Position every non-newline segment; newline sentinels only move the cursor."""
        wrap_width = max_width if max_width is not None else DEFAULT_WRAP_WIDTH
        positioned: list[PositionedTextSegment] = []
        x, y = self.start_x, self.start_y

        for i, seg in enumerate(segments):
            if seg.is_newline:
                x = self.start_x
                y += self.line_height
                continue

            m = self.measure_text(seg.text, seg)
            seg_line_height = max(self.line_height, m.height)

            if x + m.width > wrap_width and x > self.start_x:
                x = self.start_x
                y += seg_line_height

            offset_y = seg.vertical_offset or 0
            indent = indentation(seg)

            if m.width > wrap_width and ' ' in seg.text:
                line = ''
                for word in seg.text.split(' '):
                    if not word:
                        continue
                    candidate = f"{line} {word}" if line else word
                    if self.measure_text(candidate, seg).width > wrap_width and line:
                        positioned.append(self._place(seg, line, x + indent, y + offset_y, self.measure_text(line, seg)))
                        x = self.start_x
                        y += self.line_height
                        line = word
                    else:
                        line = candidate

                if line:
                    lm = self.measure_text(line, seg)
                    offset_x = UNSTYLED_OFFSET if is_unstyled(seg) and not seg.is_list_item and x == self.start_x else 0
                    positioned.append(self._place(seg, line, x + indent + offset_x, y + offset_y, lm))
                    x += lm.width
                    if seg.has_space_after:
                        following = next((s for s in segments[i + 1:] if s.text.strip()), None)
                        x += self._space_width(seg, following, WRAPPED_TAG_TO_TAG_MIN)
            else:
                offset_x = UNSTYLED_OFFSET if is_unstyled(seg) and not seg.is_list_item else 0
                positioned.append(self._place(
                    seg, seg.text,
                    x + indent + offset_x,
                    y + (seg_line_height - m.height) + offset_y,
                    m,
                ))
                x += m.width
                if seg.has_space_after:
                    following = segments[i + 1] if i + 1 < len(segments) else None
                    x += self._space_width(seg, following, TAG_TO_TAG_MIN)

            level = heading_type(seg)
            if level and self._is_end_of_heading_block(segments, i, level):
                y += HEADING_SIZES[level] / 2

        logger.debug("Laid out %d segments into %d boxes (wrap width %s)", len(segments), len(positioned), wrap_width)
        return positioned

    def calculate_bounds(self, segments: list[PositionedTextSegment]) -> Bounds:
        if not segments:
            return Bounds(0, 0)
        return Bounds(
            width=max(s.x + s.width for s in segments) + BOUNDS_PADDING_X,
            height=max(s.y + s.height for s in segments) + BOUNDS_PADDING_Y,
        )

    def update_options(self, **options: Any) -> None:
        """Change layout options; a new font_size re-derives line height unless one is given."""
        if options.get("font_size") is not None:
            self.font_size = options["font_size"]
            self.line_height = self.font_size * LINE_HEIGHT_RATIO
            if isinstance(self.measure, ApproxMeasurer):
                self.measure.base_font_size = self.font_size
        for name in ("font_family", "start_x", "start_y", "line_height"):
            if options.get(name) is not None:
                setattr(self, name, options[name])

    def options(self) -> dict[str, Any]:
        return {
            "font_size": self.font_size,
            "font_family": self.font_family,
            "start_x": self.start_x,
            "start_y": self.start_y,
            "line_height": self.line_height,
        }
