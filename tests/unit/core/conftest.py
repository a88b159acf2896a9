"""Shared fixtures for core unit tests"""

import pytest

from htmlvega.core.composite import CompositeState
from htmlvega.core.layout import TextLayoutEngine
from htmlvega.core.models import TextSegment, TextStyle
from htmlvega.core.parse import HTMLParser
from htmlvega.core.strategies.base import ParseContext
from htmlvega.core.utils.tokens import tokenize


@pytest.fixture(name="parser")
def parser_fixture():
    return HTMLParser()


@pytest.fixture(name="engine")
def engine_fixture():
    return TextLayoutEngine()


@pytest.fixture(name="default_style")
def default_style_fixture():
    return TextStyle()


@pytest.fixture(name="make_context")
def make_context_fixture(default_style):
    """Factory for a ParseContext around one tag occurrence."""
    def _make(tag_name, closing=False, attributes='', segments=None, remaining='',
              style=None, state=None):
        current = style or default_style
        return ParseContext(
            current_style=current,
            style_stack=(default_style, current),
            segments=segments if segments is not None else [],
            attributes=attributes,
            tag_name=tag_name,
            is_closing_tag=closing,
            remaining=tokenize(remaining),
            index=0,
            state=state or CompositeState(),
        )
    return _make


@pytest.fixture(name="segment")
def segment_fixture():
    """Factory for a TextSegment with keyword style fields."""
    def _make(text, **fields):
        return TextSegment(text=text, **fields)
    return _make
