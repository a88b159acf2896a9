"""Vega-Lite export: positioned segments -> layered text/rule spec, and spec file writing"""

import json
from pathlib import Path
from typing import Any, Optional

from htmlvega.core.constants import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, VEGA_LITE_SCHEMA
from htmlvega.core.models import Bounds, PositionedTextSegment, TextDecorationEnum


ESTIMATED_CHAR_WIDTH = 0.6
UNDERLINE_GAP = 1
STRIKE_POSITION = 0.5


def _style_key(seg: PositionedTextSegment) -> tuple:
    return (seg.font_weight.value, seg.font_style.value, seg.color, seg.text_decoration.value, seg.font_size)


def _axis(field: str, domain: list[float]) -> dict:
    return {"field": field, "type": "quantitative", "axis": None, "scale": {"domain": domain}}


def _root(width: float, height: float, background: str, layers: list[dict]) -> dict:
    return {
        "$schema": VEGA_LITE_SCHEMA,
        "width": width,
        "height": height,
        "background": background,
        "padding": 0,
        "autosize": "none",
        "config": {"view": {"stroke": None}},
        "resolve": {"scale": {"x": "independent", "y": "independent"}},
        "layer": layers,
    }


class VegaLiteGenerator:
    """Groups segments by style and emits one text layer (plus a rule layer if decorated) per group."""

    def __init__(self, font_size: float = DEFAULT_FONT_SIZE, font_family: str = DEFAULT_FONT_FAMILY) -> None:
        self.font_size = font_size
        self.font_family = font_family

    def group_by_style(self, segments: list[PositionedTextSegment]) -> dict[tuple, dict]:
        groups: dict[tuple, dict] = {}
        for i, seg in enumerate(segments):
            group = groups.setdefault(_style_key(seg), {
                "style": {
                    "font_weight": seg.font_weight.value,
                    "font_style": seg.font_style.value,
                    "color": seg.color,
                    "text_decoration": seg.text_decoration,
                    "font_size": seg.font_size or self.font_size,
                },
                "data": [],
            })
            datum = {"id": i, "text": seg.text, "x": seg.x, "y": seg.y, "width": seg.width, "height": seg.height}
            if seg.href:
                datum["href"] = seg.href
            group["data"].append(datum)
        return groups

    def text_layer(self, group: dict, bounds: Bounds, font_size: Optional[float], font_family: str) -> dict:
        style = group["style"]
        encoding: dict[str, Any] = {
            "x": _axis("x", [0, bounds.width]),
            "y": _axis("y", [bounds.height, 0]),
            "text": {"field": "text", "type": "nominal"},
        }
        if any("href" in d for d in group["data"]):
            encoding["href"] = {"field": "href", "type": "nominal"}
        return {
            "data": {"values": group["data"]},
            "mark": {
                "type": "text",
                "fontSize": font_size or style["font_size"],
                "fontFamily": font_family,
                "fontWeight": style["font_weight"],
                "fontStyle": style["font_style"],
                "color": style["color"],
                "align": "left",
                "baseline": "top",
            },
            "encoding": encoding,
        }

    def rule_layer(self, group: dict, bounds: Bounds, font_size: Optional[float]) -> Optional[dict]:
        """Underline below the text box or line-through at its middle; None when undecorated."""
        decoration = group["style"]["text_decoration"]
        if decoration not in (TextDecorationEnum.underline, TextDecorationEnum.line_through):
            return None
        size = font_size or group["style"]["font_size"]
        lines = []
        for d in group["data"]:
            height = d["height"] or size
            if decoration == TextDecorationEnum.underline:
                y = d["y"] + height + UNDERLINE_GAP
            else:
                y = d["y"] + height * STRIKE_POSITION
            width = d["width"] or len(d["text"]) * size * ESTIMATED_CHAR_WIDTH
            lines.append({"id": d["id"], "x": d["x"], "x2": d["x"] + width, "y": y})
        return {
            "data": {"values": lines},
            "mark": {"type": "rule", "color": group["style"]["color"], "strokeWidth": 1},
            "encoding": {
                "x": _axis("x", [0, bounds.width]),
                "x2": {"field": "x2", "type": "quantitative"},
                "y": _axis("y", [bounds.height, 0]),
            },
        }

    def generate_spec(
        self,
        segments: list[PositionedTextSegment],
        bounds: Bounds,
        max_width: Optional[float] = None,
        font_size: Optional[float] = None,
        font_family: Optional[str] = None,
        background: Optional[str] = None,
    ) -> dict:
        """Build the full layered spec; font_size, when given, overrides every group's size."""
        family = font_family or self.font_family
        layers = []
        for group in self.group_by_style(segments).values():
            layers.append(self.text_layer(group, bounds, font_size, family))
            rule = self.rule_layer(group, bounds, font_size)
            if rule:
                layers.append(rule)
        width = min(bounds.width, max_width) if max_width else bounds.width
        return _root(width, bounds.height, background or "transparent", layers)

    def generate_minimal_spec(self, text: str) -> dict:
        """A fixed 200x50 single-layer spec showing text in the default style."""
        spec = _root(200, 50, "transparent", [{
            "data": {"values": [{"id": 0, "text": text, "x": 10, "y": 20}]},
            "mark": {
                "type": "text",
                "fontSize": self.font_size,
                "fontFamily": self.font_family,
                "fontWeight": "normal",
                "fontStyle": "normal",
                "color": "#000000",
                "align": "left",
                "baseline": "top",
            },
            "encoding": {
                "x": _axis("x", [0, 200]),
                "y": _axis("y", [0, 50]),
                "text": {"field": "text", "type": "nominal"},
            },
        }])
        del spec["resolve"]
        return spec

    def update_options(self, font_size: Optional[float] = None, font_family: Optional[str] = None) -> None:
        if font_size is not None:
            self.font_size = font_size
        if font_family is not None:
            self.font_family = font_family


def write_spec(spec: dict, path: Path) -> Path:
    """Write spec as indented JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(spec, indent=2, ensure_ascii=False), encoding="utf-8")
    return path
