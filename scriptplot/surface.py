from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from typing import Protocol

import numpy as np

from .config import RGBA, RenderConfig
from .errors import PlotRenderError
from .raster import (
    draw_hline,
    draw_polyline,
    draw_text,
    draw_vline,
    fill,
    fill_rect,
    new_canvas,
    stroke_rect,
    text_size,
)
from .scales import DataLimits, PlotTransform, build_transform, format_ticks_for_axis, generate_nice_ticks
from .targets import DisplayFrame, MemoryTarget, RenderTarget


LOGGER = logging.getLogger(__name__)


class ChartRegion(Protocol):
    def draw_mesh(self) -> None:
        ...

    def draw_series(self, points: Sequence[tuple[float, float]], color: RGBA, *, label: str = "") -> None:
        ...

    def draw_series_labels(self, *, background: RGBA, border: RGBA) -> None:
        ...


class DrawingSurface(Protocol):
    def fill(self, color: RGBA) -> None:
        ...

    def build_chart(
        self,
        *,
        title: str,
        x_range: tuple[float, float],
        y_range: tuple[float, float],
    ) -> ChartRegion:
        ...

    def present(self) -> None:
        ...


@dataclass(frozen=True)
class SeriesEntry:
    label: str
    color: RGBA
    point_count: int


@dataclass
class RasterChart:
    """Cartesian chart region drawn straight onto a surface canvas."""

    canvas: np.ndarray
    config: RenderConfig
    title: str
    limits: DataLimits
    plot_rect: tuple[int, int, int, int]
    transform: PlotTransform
    series: list[SeriesEntry] = field(default_factory=list)

    @property
    def clip(self) -> tuple[int, int, int, int]:
        x0, y0, w, h = self.plot_rect
        return (x0, y0, x0 + w - 1, y0 + h - 1)

    def to_pixel(self, x: float, y: float) -> tuple[float, float]:
        return self.transform.apply(x, y)

    def draw_mesh(self) -> None:
        cfg = self.config
        x0, y0, x1, y1 = self.clip
        plot_w = x1 - x0 + 1
        plot_h = y1 - y0 + 1
        tick_x = generate_nice_ticks(self.limits.xmin, self.limits.xmax, max(2, plot_w // 60))
        tick_y = generate_nice_ticks(self.limits.ymin, self.limits.ymax, max(2, plot_h // 50))

        for value, label in zip(tick_x.tolist(), format_ticks_for_axis(tick_x)):
            px = int(round(self.to_pixel(value, self.limits.ymin)[0]))
            draw_vline(self.canvas, px, y0, y1, cfg.mesh_color)
            draw_vline(self.canvas, px, y1 + 1, y1 + 5, cfg.axis_color)
            w, _ = text_size(label, font_family=cfg.font_family, font_size_px=cfg.tick_font_px)
            draw_text(
                self.canvas,
                px - w // 2,
                y1 + 8,
                label,
                cfg.text_color,
                font_family=cfg.font_family,
                font_size_px=cfg.tick_font_px,
            )

        for value, label in zip(tick_y.tolist(), format_ticks_for_axis(tick_y)):
            py = int(round(self.to_pixel(self.limits.xmin, value)[1]))
            draw_hline(self.canvas, x0, x1, py, cfg.mesh_color)
            draw_hline(self.canvas, x0 - 5, x0 - 1, py, cfg.axis_color)
            w, h = text_size(label, font_family=cfg.font_family, font_size_px=cfg.tick_font_px)
            draw_text(
                self.canvas,
                x0 - 8 - w,
                py - h // 2,
                label,
                cfg.text_color,
                font_family=cfg.font_family,
                font_size_px=cfg.tick_font_px,
            )

        draw_vline(self.canvas, x0, y0, y1, cfg.axis_color)
        draw_hline(self.canvas, x0, x1, y1, cfg.axis_color)

    def draw_series(self, points: Sequence[tuple[float, float]], color: RGBA, *, label: str = "") -> None:
        pixels = [self.to_pixel(x, y) for x, y in points]
        draw_polyline(self.canvas, pixels, color, clip=self.clip, width=self.config.line_width)
        self.series.append(SeriesEntry(label=label, color=color, point_count=len(pixels)))

    def draw_series_labels(self, *, background: RGBA, border: RGBA) -> None:
        cfg = self.config
        entries = [entry for entry in self.series if entry.label]
        if not entries:
            return
        font_px = cfg.tick_font_px
        swatch_w = 20
        pad = 6
        gap = 6
        sizes = [text_size(entry.label, font_family=cfg.font_family, font_size_px=font_px) for entry in entries]
        item_h = max(int(font_px), max(h for _, h in sizes)) + 4
        box_w = pad * 2 + swatch_w + gap + max(w for w, _ in sizes)
        box_h = pad * 2 + item_h * len(entries)
        _, y0, x1, _ = self.clip
        bx0 = max(0, x1 - 10 - box_w)
        by0 = y0 + 10
        fill_rect(self.canvas, bx0, by0, bx0 + box_w, by0 + box_h, background)
        stroke_rect(self.canvas, bx0, by0, bx0 + box_w, by0 + box_h, border)
        for i, (entry, (_, h)) in enumerate(zip(entries, sizes)):
            row_y = by0 + pad + i * item_h
            mid_y = row_y + item_h // 2
            draw_hline(self.canvas, bx0 + pad, bx0 + pad + swatch_w, mid_y, entry.color)
            draw_text(
                self.canvas,
                bx0 + pad + swatch_w + gap,
                mid_y - h // 2,
                entry.label,
                cfg.text_color,
                font_family=cfg.font_family,
                font_size_px=font_px,
            )


class RasterSurface:
    """Numpy RGBA canvas that presents finished frames to a render target."""

    def __init__(self, config: RenderConfig | None = None, target: RenderTarget | None = None) -> None:
        self.config = config or RenderConfig()
        self.target = target if target is not None else MemoryTarget()
        self.canvas = new_canvas(self.config.width, self.config.height, self.config.background)
        self.charts: list[RasterChart] = []
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    def fill(self, color: RGBA) -> None:
        fill(self.canvas, color)
        self.charts.clear()

    def build_chart(
        self,
        *,
        title: str,
        x_range: tuple[float, float],
        y_range: tuple[float, float],
    ) -> RasterChart:
        cfg = self.config
        limits = DataLimits(xmin=float(x_range[0]), xmax=float(x_range[1]), ymin=float(y_range[0]), ymax=float(y_range[1]))

        top = cfg.margin
        if title:
            title_w, title_h = text_size(title, font_family=cfg.font_family, font_size_px=cfg.caption_font_px)
            draw_text(
                self.canvas,
                (cfg.width - title_w) // 2,
                top,
                title,
                cfg.text_color,
                font_family=cfg.font_family,
                font_size_px=cfg.caption_font_px,
            )
            top += max(title_h, int(cfg.caption_font_px)) + cfg.margin
        x0 = cfg.margin + cfg.y_label_area
        width = cfg.width - x0 - cfg.margin
        height = cfg.height - top - cfg.margin - cfg.x_label_area
        try:
            transform = build_transform(limits, x0, top, width, height)
        except ValueError as exc:
            raise PlotRenderError(f"cannot build chart: {exc}") from exc

        chart = RasterChart(
            canvas=self.canvas,
            config=cfg,
            title=title,
            limits=limits,
            plot_rect=(x0, top, width, height),
            transform=transform,
        )
        self.charts.append(chart)
        return chart

    def present(self) -> None:
        self._revision += 1
        frame = DisplayFrame.from_canvas(self.canvas, revision=self._revision)
        try:
            self.target.present_frame(frame)
        except (OSError, ValueError) as exc:
            raise PlotRenderError(f"cannot present frame to {self.target.describe()}: {exc}") from exc
        LOGGER.info(
            "presented frame revision=%d size=%dx%d to %s",
            frame.revision,
            frame.width,
            frame.height,
            self.target.describe(),
        )
