"""Unit tests for core/registry.py"""

import pytest

from htmlvega.core.registry import (
    TagStrategyRegistry,
    create_default_registry,
    create_minimal_registry,
    create_registry,
)
from htmlvega.core.strategies.inline import BoldTagStrategy, ColorTagStrategy, ItalicTagStrategy


DEFAULT_TAGS = {
    'b', 'strong', 'i', 'em', 'u', 'span', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'p', 'a', 'br',
    'code', 'pre', 'kbd', 'samp', 'small', 'sub', 'sup', 'mark', 's', 'strike', 'del', 'ul', 'ol', 'li',
}


def test_default_registry_vocabulary():
    """The default preset serves the full built-in vocabulary and no colour tags."""
    registry = create_default_registry()
    assert set(registry.supported_tags()) == DEFAULT_TAGS
    assert not registry.is_supported("red")


def test_minimal_registry_vocabulary():
    """The minimal preset only serves emphasis and span."""
    assert set(create_minimal_registry().supported_tags()) == {'b', 'strong', 'i', 'em', 'u', 'span'}


def test_lookup_is_case_insensitive():
    """Tag names match regardless of case."""
    registry = create_default_registry()
    assert registry.is_supported("STRONG")
    assert registry.get("Em") is registry.get("i")


def test_last_registration_wins():
    """Registering a strategy for a claimed name replaces the previous owner."""
    registry = TagStrategyRegistry()
    first, second = BoldTagStrategy(), BoldTagStrategy()
    registry.register(first)
    registry.register(second)
    assert registry.get("b") is second
    assert len(registry) == 2


def test_remove():
    """remove reports whether the name was registered."""
    registry = create_minimal_registry()
    assert registry.remove("U") is True
    assert registry.remove("u") is False
    assert not registry.is_supported("u")


def test_unregister_only_owned_names():
    """unregister drops the names a strategy still owns."""
    registry = TagStrategyRegistry()
    italic = ItalicTagStrategy()
    registry.register(italic)
    replacement = BoldTagStrategy()
    replacement.tag_names = ('em',)
    registry.register(replacement)
    registry.unregister(italic)
    assert registry.supported_tags() == ['em']
    assert registry.get('em') is replacement


def test_register_colour_tags():
    """Custom strategies extend the vocabulary."""
    registry = create_minimal_registry()
    registry.register(ColorTagStrategy())
    assert registry.is_supported("purple")


def test_clear():
    """clear empties the registry."""
    registry = create_default_registry()
    registry.clear()
    assert registry.supported_tags() == []


def test_create_registry_unknown_preset():
    """Unknown preset names are rejected."""
    with pytest.raises(ValueError, match="Unknown registry preset"):
        create_registry("huge")
