from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib
from typing import Any

from .errors import PlotConfigError


RGBA = tuple[int, int, int, int]

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)
RED: RGBA = (255, 0, 0, 255)


@dataclass(frozen=True)
class RenderConfig:
    width: int = 640
    height: int = 480
    background: RGBA = WHITE
    accent_color: RGBA = RED
    mesh_color: RGBA = (0, 0, 0, 26)
    axis_color: RGBA = BLACK
    text_color: RGBA = BLACK
    legend_background: RGBA = (255, 255, 255, 204)
    legend_border: RGBA = BLACK
    font_family: str = "sans-serif"
    caption_font_px: float = 25.0
    tick_font_px: float = 12.0
    margin: int = 5
    x_label_area: int = 30
    y_label_area: int = 30
    line_width: int = 1
    draw_legend: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise PlotConfigError("width and height must be > 0")
        if self.caption_font_px <= 0 or self.tick_font_px <= 0:
            raise PlotConfigError("font sizes must be > 0")
        if self.margin < 0 or self.x_label_area < 0 or self.y_label_area < 0:
            raise PlotConfigError("margin and label areas must be >= 0")
        if self.line_width <= 0:
            raise PlotConfigError("line_width must be > 0")

    def with_overrides(self, **overrides: Any) -> "RenderConfig":
        unknown = set(overrides) - _FIELD_NAMES
        if unknown:
            raise PlotConfigError(f"unknown render option(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: _coerce_field(k, v) for k, v in overrides.items()})


_FIELD_TYPES = {f.name: f.type for f in fields(RenderConfig)}
_FIELD_NAMES = frozenset(_FIELD_TYPES)


def load_render_config(path: str | Path, *, base: RenderConfig | None = None) -> RenderConfig:
    """Read a ``[render]`` table from a TOML file on top of ``base``."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"render config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise PlotConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    table = raw.get("render", {})
    if not isinstance(table, dict):
        raise PlotConfigError("[render] must be a table")
    return (base or RenderConfig()).with_overrides(**table)


def _coerce_field(name: str, value: Any) -> Any:
    kind = _FIELD_TYPES[name]
    if kind == "RGBA":
        return _coerce_color(value, name)
    if kind == "bool":
        if not isinstance(value, bool):
            raise PlotConfigError(f"{name} must be a boolean")
        return value
    if kind == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise PlotConfigError(f"{name} must be an integer")
        return value
    if kind == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PlotConfigError(f"{name} must be a number")
        return float(value)
    if not isinstance(value, str):
        raise PlotConfigError(f"{name} must be a string")
    return value


def _coerce_color(value: Any, name: str) -> RGBA:
    if not isinstance(value, (list, tuple)) or len(value) not in (3, 4):
        raise PlotConfigError(f"{name} must be [r, g, b] or [r, g, b, a]")
    channels = list(value)
    if any(isinstance(c, bool) or not isinstance(c, int) or not 0 <= c <= 255 for c in channels):
        raise PlotConfigError(f"{name} channels must be integers in [0, 255]")
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = channels
    return (r, g, b, a)
