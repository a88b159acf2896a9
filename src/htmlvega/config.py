"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from htmlvega.core.constants import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, LINE_HEIGHT_RATIO


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "HTMLVEGA_"


class Settings(BaseModel):
    font_size:   float = Field(default=DEFAULT_FONT_SIZE, gt=0, description="Base font size in px")
    font_family: str   = Field(default=DEFAULT_FONT_FAMILY, description="Font family passed through to the spec")
    start_x:     float = Field(default=10, description="Left edge of the first line")
    start_y:     float = Field(default=30, description="Top of the first line")
    line_height: Optional[float] = Field(default=None, gt=0, description="Line height in px; unset = font_size * 1.4")
    max_width:   float = Field(default=400, gt=0, description="Wrap width in px")
    background:  str   = Field(default="transparent", description="Spec background colour")
    measure_backend: str = Field(default="approx", pattern="^(approx|pillow)$", description="approx or pillow")
    font_path:   Optional[str] = Field(default=None, description="Truetype file for the pillow backend")
    registry_preset: str = Field(default="default", pattern="^(default|minimal)$", description="default or minimal")

    @property
    def resolved_line_height(self) -> float:
        return self.line_height if self.line_height is not None else self.font_size * LINE_HEIGHT_RATIO


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then HTMLVEGA_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
