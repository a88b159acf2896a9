"""Spacing analysis: decide hasSpaceAfter and spacing context from the source whitespace

Any run of one or more whitespace characters between two segments in the
source becomes exactly one rendered space; no whitespace means no space.
"""

import re
from typing import Optional

from htmlvega.core.constants import DEFAULT_FONT_SIZE
from htmlvega.core.models import (
    FontStyleEnum,
    FontWeightEnum,
    SpacingContextEnum,
    TextDecorationEnum,
    TextSegment,
)
from htmlvega.core.utils.text import collapse_whitespace, normalize_segments, spacing_haystack


DEFAULT_COLORS = {'#000000', 'black'}

Span = Optional[tuple[int, int]]


def is_styled(seg: TextSegment) -> bool:
    """True when any style axis differs from the default."""
    return (
        seg.font_weight == FontWeightEnum.bold
        or seg.font_style == FontStyleEnum.italic
        or (bool(seg.color) and seg.color.lower() not in DEFAULT_COLORS)
        or seg.text_decoration != TextDecorationEnum.none
        or (bool(seg.font_size) and seg.font_size != DEFAULT_FONT_SIZE)
    )


def spacing_context(current: TextSegment, nxt: Optional[TextSegment]) -> SpacingContextEnum:
    if nxt is None:
        return SpacingContextEnum.text_to_text
    cur_styled, next_styled = is_styled(current), is_styled(nxt)
    if cur_styled and next_styled:
        return SpacingContextEnum.tag_to_tag
    if cur_styled:
        return SpacingContextEnum.tag_to_text
    if next_styled:
        return SpacingContextEnum.text_to_tag
    return SpacingContextEnum.text_to_text


def locate_segments(segments: list[TextSegment], haystack: str) -> list[Span]:
    """Find each segment in haystack in order; None where the text cannot be found.

    Newlines and list prefixes get an empty span at the cursor and do not advance it.
    """
    spans: list[Span] = []
    cursor = 0
    for seg in segments:
        needle = collapse_whitespace(seg.text)
        if seg.is_newline or not needle or seg.spacing_context == SpacingContextEnum.list_prefix:
            spans.append((cursor, cursor))
            continue
        idx = haystack.find(needle, cursor)
        if idx == -1:
            spans.append(None)
            continue
        cursor = idx + len(needle)
        spans.append((idx, cursor))
    return spans


def pattern_has_space(current: TextSegment, nxt: TextSegment, haystack: str) -> bool:
    """Fallback: look for "current <punct?> whitespace <punct?> next" anywhere in haystack."""
    cur, following = collapse_whitespace(current.text), collapse_whitespace(nxt.text)
    if not cur or not following:
        return False
    m = re.search(re.escape(cur) + r'([^\w\s]*)(\s+)([^\w\s]*)' + re.escape(following), haystack, re.IGNORECASE)
    return bool(m and m.group(2))


def has_space_between(
    current: TextSegment, nxt: TextSegment, spans: tuple[Span, Span], haystack: str,
) -> bool:
    if current.is_newline or nxt.is_newline:
        return False
    cur_span, next_span = spans
    if cur_span is None or next_span is None:
        return pattern_has_space(current, nxt, haystack)
    between = haystack[cur_span[1]:next_span[0]]
    return any(ch.isspace() for ch in between)


def analyze_spacing(segments: list[TextSegment], markup: str) -> list[TextSegment]:
    """Return normalized segments with has_space_after and spacing_context assigned."""
    normalized = normalize_segments(segments)
    if not normalized:
        return []

    haystack = spacing_haystack(markup)
    spans = locate_segments(normalized, haystack)

    spaced = []
    last = len(normalized) - 1
    for i, seg in enumerate(normalized):
        if seg.spacing_context == SpacingContextEnum.list_prefix:
            spaced.append(seg.model_copy(update={"has_space_after": True}))
            continue
        if i == last:
            spaced.append(seg.model_copy(update={
                "has_space_after": False,
                "spacing_context": spacing_context(seg, None),
            }))
            continue
        nxt = normalized[i + 1]
        spaced.append(seg.model_copy(update={
            "has_space_after": has_space_between(seg, nxt, (spans[i], spans[i + 1]), haystack),
            "spacing_context": spacing_context(seg, nxt),
        }))
    return spaced
