"""Style model: text styles, segments, positioned segments and parse results"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from htmlvega.core.constants import DEFAULT_COLOR


class FontWeightEnum(str, Enum):
    normal = "normal"
    bold = "bold"


class FontStyleEnum(str, Enum):
    normal = "normal"
    italic = "italic"


class TextDecorationEnum(str, Enum):
    none = "none"
    underline = "underline"
    line_through = "line-through"


class ListTypeEnum(str, Enum):
    ul = "ul"
    ol = "ol"


class SpacingContextEnum(str, Enum):
    """Styled/unstyled relationship across a segment boundary"""
    tag_to_tag = "tag-to-tag"
    text_to_tag = "text-to-tag"
    tag_to_text = "tag-to-text"
    text_to_text = "text-to-text"
    list_prefix = "list-prefix"


class TextStyle(BaseModel):
    """Resolved style in effect for a run of text."""
    model_config = ConfigDict(frozen=True)

    font_weight: FontWeightEnum = FontWeightEnum.normal
    font_style: FontStyleEnum = FontStyleEnum.normal
    color: str = DEFAULT_COLOR
    text_decoration: TextDecorationEnum = TextDecorationEnum.none
    font_size: Optional[float] = None          # px; None means the layout base size
    vertical_offset: Optional[float] = None    # px; negative raises (sup), positive lowers (sub)
    is_list_item: bool = False
    list_nesting_level: Optional[int] = Field(default=None, ge=1)
    list_type: Optional[ListTypeEnum] = None
    href: Optional[str] = None

    def style_fields(self) -> dict[str, Any]:
        """Return only the TextStyle attributes, dropping any subclass fields."""
        return {name: getattr(self, name) for name in TextStyle.model_fields}

    def restyle(self, **changes) -> "TextStyle":
        """Return a plain TextStyle with the given attributes replaced."""
        return TextStyle(**{**self.style_fields(), **changes})


class TextSegment(TextStyle):
    """One run of identically styled text, or the "\\n" forced-break sentinel."""
    text: str
    has_space_after: Optional[bool] = None
    spacing_context: Optional[SpacingContextEnum] = None

    @classmethod
    def from_style(cls, text: str, style: TextStyle, **extra) -> "TextSegment":
        return cls(text=text, **style.style_fields(), **extra)

    @property
    def is_newline(self) -> bool:
        return self.text == "\n"


class PositionedTextSegment(TextSegment):
    """A TextSegment placed in layout space; produced only by the layout engine."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextMeasurement:
    width: float
    height: float


@dataclass(frozen=True)
class Bounds:
    width: float
    height: float


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)


class ParseResult(BaseModel):
    """Public output of the parse stage."""
    segments: list[TextSegment] = []
    errors: list[str] = []


class ParseDetails(BaseModel):
    """Debugging view of a parse: result plus registry and source tag usage."""
    segments: list[TextSegment] = []
    errors: list[str] = []
    warnings: list[str] = []
    supported_tags: list[str] = []
    used_tags: list[str] = []
    style_stack_depth: int = 1
