"""Text measurement: character-count approximation and Pillow font metrics"""

import logging
from typing import Callable, Optional

from PIL import ImageFont

from htmlvega.core.constants import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE
from htmlvega.core.models import FontStyleEnum, FontWeightEnum, TextMeasurement, TextStyle


logger = logging.getLogger(__name__)

CHAR_WIDTH_RATIO = 0.6
BOLD_WIDTH_FACTOR = 1.15
ITALIC_WIDTH_FACTOR = 1.05
FALLBACK_FONT_FILES = ("DejaVuSans.ttf",)

# (text, style) -> TextMeasurement
MeasureFn = Callable[[str, TextStyle], TextMeasurement]


def approximate_measure(text: str, style: TextStyle, base_font_size: float = DEFAULT_FONT_SIZE) -> TextMeasurement:
    """Width from character count at 0.6 em per char, widened for bold and italic."""
    size = style.font_size or base_font_size
    char_width = size * CHAR_WIDTH_RATIO
    if style.font_weight == FontWeightEnum.bold:
        char_width *= BOLD_WIDTH_FACTOR
    if style.font_style == FontStyleEnum.italic:
        char_width *= ITALIC_WIDTH_FACTOR
    return TextMeasurement(width=len(text) * char_width, height=size)


class ApproxMeasurer:
    def __init__(self, base_font_size: float = DEFAULT_FONT_SIZE) -> None:
        self.base_font_size = base_font_size

    def __call__(self, text: str, style: TextStyle) -> TextMeasurement:
        return approximate_measure(text, style, self.base_font_size)


def _font_candidates(family: str, weight: FontWeightEnum, font_style: FontStyleEnum) -> list[str]:
    """Truetype file names to try for a CSS-like family list such as "Arial, sans-serif"."""
    suffix = ''
    if weight == FontWeightEnum.bold:
        suffix += 'Bold'
    if font_style == FontStyleEnum.italic:
        suffix += 'Italic'
    names = []
    for name in (n.strip().strip('"\'') for n in family.split(',')):
        if not name or name in ('serif', 'sans-serif', 'monospace'):
            continue
        stem = name.replace(' ', '')
        if suffix:
            names.append(f"{stem}-{suffix}.ttf")
        names.append(f"{stem}.ttf")
        names.append(name)
    if suffix:
        names.append(f"DejaVuSans-{'Bold' if 'Bold' in suffix else 'Oblique'}.ttf")
    names.extend(FALLBACK_FONT_FILES)
    return names


class PillowTextMeasurer:
    """Measures with Pillow truetype fonts; falls back to the approximation when none loads."""

    def __init__(
        self,
        base_font_size: float = DEFAULT_FONT_SIZE,
        font_family: str = DEFAULT_FONT_FAMILY,
        font_path: Optional[str] = None,
    ) -> None:
        self.base_font_size = base_font_size
        self.font_family = font_family
        self.font_path = font_path
        self._font_cache: dict[tuple, Optional[ImageFont.FreeTypeFont]] = {}

    def font(self, size: float, weight: FontWeightEnum, font_style: FontStyleEnum) -> Optional[ImageFont.FreeTypeFont]:
        key = (size, weight, font_style)
        if key in self._font_cache:
            return self._font_cache[key]

        candidates = _font_candidates(self.font_family, weight, font_style)
        if self.font_path:
            candidates.insert(0, self.font_path)
        font = None
        for candidate in candidates:
            try:
                font = ImageFont.truetype(candidate, size)
                break
            except OSError:
                continue
        if font is None:
            logger.debug("No truetype font found for %r; using approximate widths", self.font_family)
        self._font_cache[key] = font
        return font

    def __call__(self, text: str, style: TextStyle) -> TextMeasurement:
        size = style.font_size or self.base_font_size
        font = self.font(size, style.font_weight, style.font_style)
        if font is None:
            return approximate_measure(text, style, self.base_font_size)
        return TextMeasurement(width=float(font.getlength(text)), height=size)


def make_measurer(backend: str = "approx", base_font_size: float = DEFAULT_FONT_SIZE,
                  font_family: str = DEFAULT_FONT_FAMILY, font_path: Optional[str] = None) -> MeasureFn:
    if backend == "pillow":
        return PillowTextMeasurer(base_font_size, font_family, font_path)
    if backend == "approx":
        return ApproxMeasurer(base_font_size)
    raise ValueError(f"Unknown measure backend: {backend}")
