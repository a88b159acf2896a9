"""Fixed tables shared by the strategies, spacing analyzer and layout engine"""

DEFAULT_FONT_SIZE = 14
DEFAULT_FONT_FAMILY = "Arial, sans-serif"
DEFAULT_COLOR = "#000000"
LINE_HEIGHT_RATIO = 1.4

HEADING_SIZES: dict[str, float] = {
    "h1": 32,
    "h2": 24,
    "h3": 18.72,
    "h4": 16,
    "h5": 13.28,
    "h6": 10.72,
}
HEADING_BY_SIZE: dict[float, str] = {size: tag for tag, size in HEADING_SIZES.items()}

COLOR_MAP: dict[str, str] = {
    "red": "#FF0000",
    "green": "#00FF00",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "orange": "#FFA500",
    "purple": "#800080",
    "black": "#000000",
}

LINK_COLOR = "#0066CC"
CODE_COLOR = "#d63384"
HIGHLIGHT_COLOR = "#212529"
MUTED_COLOR = "#6c757d"

SMALL_TEXT_SCALE = 0.75
SUBSCRIPT_SHIFT = 0.15
SUPERSCRIPT_SHIFT = -0.35

SELF_CLOSING_TAGS = frozenset({"br", "hr", "img", "input", "meta", "link"})

LIST_FAMILY = "list"
BULLET_PREFIX = "• "
NUMBER_SUFFIX = ". "
LIST_INDENT_BASE = 20
LIST_INDENT_STEP = 20

VALID_FONT_WEIGHTS = frozenset({"normal", "bold", "100", "200", "300", "400", "500", "600", "700", "800", "900"})
VALID_FONT_STYLES = frozenset({"normal", "italic", "oblique"})
VALID_TEXT_DECORATIONS = ("none", "underline", "line-through")
SUPPORTED_CSS_PROPERTIES = frozenset({"color", "font-weight", "font-style", "text-decoration"})

VEGA_LITE_SCHEMA = "https://vega.github.io/schema/vega-lite/v5.json"
