"""Whitespace helpers shared by the strategies and the spacing analyzer"""

import html
import re

from htmlvega.core.models import TextSegment
from htmlvega.core.utils.tokens import Text, Token, mask_tags


WHITESPACE_RE = re.compile(r'\s+')


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and strip the ends."""
    return WHITESPACE_RE.sub(' ', text).strip()


def needs_line_break(segments: list[TextSegment]) -> bool:
    """True when the last emitted segment is visible text (not blank, not a break)."""
    if not segments:
        return False
    last = segments[-1]
    return not last.is_newline and last.text.strip() != ''


def has_more_content(remaining: list[Token]) -> bool:
    """True when any tag or non-blank text follows."""
    return any(not isinstance(tok, Text) or tok.text.strip() for tok in remaining)


def normalize_segments(segments: list[TextSegment]) -> list[TextSegment]:
    """Trim every text segment, dropping those left empty; newline sentinels pass through."""
    normalized = []
    for seg in segments:
        if seg.is_newline:
            normalized.append(seg)
            continue
        text = seg.text.strip()
        if text:
            normalized.append(seg if text == seg.text else seg.model_copy(update={"text": text}))
    return normalized


def spacing_haystack(markup: str) -> str:
    """Build the search copy of markup: tags masked, entities decoded, whitespace collapsed."""
    return collapse_whitespace(html.unescape(mask_tags(markup)))
