"""Inline CSS support for style attributes: extraction, parsing and validation"""

import re
from typing import Optional

from htmlvega.core.constants import (
    SUPPORTED_CSS_PROPERTIES,
    VALID_FONT_STYLES,
    VALID_FONT_WEIGHTS,
    VALID_TEXT_DECORATIONS,
)
from htmlvega.core.models import (
    FontStyleEnum,
    FontWeightEnum,
    TextDecorationEnum,
    TextStyle,
    ValidationResult,
)


STYLE_ATTR_RE = re.compile(r'(?<![\w-])style\s*=\s*(["\'])(.*?)\1', re.IGNORECASE | re.DOTALL)
COLOR_VALUE_RE = re.compile(r'^(#[0-9a-f]{3,6}|[a-z]+|rgb\(.*\))$', re.IGNORECASE)


def extract_style_attribute(attributes: str) -> Optional[str]:
    """Return the raw value of a style="..." attribute, or None if absent/empty."""
    m = STYLE_ATTR_RE.search(attributes or '')
    return m.group(2) if m and m.group(2) else None


def parse_declarations(style_str: str) -> dict[str, str]:
    """Split "a: b; c: d" into {"a": "b", "c": "d"}; later duplicates win."""
    decls: dict[str, str] = {}
    for chunk in style_str.split(';'):
        prop, sep, value = chunk.partition(':')
        if sep and prop.strip() and value.strip():
            decls[prop.strip().lower()] = value.strip()
    return decls


def _font_weight(value: str) -> FontWeightEnum:
    if value == 'bold':
        return FontWeightEnum.bold
    digits = re.match(r'\d+', value)
    if digits and int(digits.group()) >= 600:
        return FontWeightEnum.bold
    return FontWeightEnum.normal


def apply_declarations(style: TextStyle, style_str: str) -> TextStyle:
    """Apply the supported declarations of style_str to style; anything else is ignored."""
    decls = parse_declarations(style_str)
    changes = {}
    if 'color' in decls:
        changes['color'] = decls['color']
    if 'font-weight' in decls:
        changes['font_weight'] = _font_weight(decls['font-weight'])
    if 'font-style' in decls:
        italic = decls['font-style'] in ('italic', 'oblique')
        changes['font_style'] = FontStyleEnum.italic if italic else FontStyleEnum.normal
    if 'text-decoration' in decls:
        underline = 'underline' in decls['text-decoration']
        changes['text_decoration'] = TextDecorationEnum.underline if underline else TextDecorationEnum.none
    return style.restyle(**changes) if changes else style


def validate_property(prop: str, value: str) -> list[str]:
    """Return errors for a single supported CSS declaration."""
    if prop == 'font-weight' and value not in VALID_FONT_WEIGHTS:
        return [f"Invalid font-weight value: {value}"]
    if prop == 'font-style' and value not in VALID_FONT_STYLES:
        return [f"Invalid font-style value: {value}"]
    if prop == 'text-decoration' and not any(d in value for d in VALID_TEXT_DECORATIONS):
        return [f"Invalid text-decoration value: {value}"]
    if prop == 'color' and not COLOR_VALUE_RE.match(value):
        return [f"Invalid color value: {value}"]
    return []


def validate_style_attribute(attributes: str) -> ValidationResult:
    """Validate every declaration in a style attribute; a missing attribute is valid."""
    style_str = extract_style_attribute(attributes)
    if not style_str:
        return ValidationResult()

    errors: list[str] = []
    for prop, value in parse_declarations(style_str).items():
        if prop not in SUPPORTED_CSS_PROPERTIES:
            errors.append(f"Unsupported CSS property: {prop}")
        else:
            errors.extend(validate_property(prop, value))
    return ValidationResult(is_valid=not errors, errors=errors)
