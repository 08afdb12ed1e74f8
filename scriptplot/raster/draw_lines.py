from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from scriptplot.raster.canvas import RGBA, draw_pixel


def draw_polyline(
    dst: np.ndarray,
    points: Sequence[tuple[float, float]],
    color: RGBA,
    *,
    clip: tuple[int, int, int, int],
    width: int = 1,
) -> int:
    """Draw connected segments in pixel space, clipped to ``clip`` (x0, y0, x1, y1).

    Returns the number of segments that survived clipping.
    """
    drawn = 0
    for (xa, ya), (xb, yb) in zip(points[:-1], points[1:]):
        segment = clip_segment(xa, ya, xb, yb, clip)
        if segment is None:
            continue
        x0, y0, x1, y1 = segment
        _draw_line_segment(dst, int(round(x0)), int(round(y0)), int(round(x1)), int(round(y1)), color=color, width=width)
        drawn += 1
    return drawn


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    clip: tuple[int, int, int, int],
) -> tuple[float, float, float, float] | None:
    # Liang-Barsky against an inclusive pixel rect.
    xmin, ymin, xmax, ymax = clip
    dx = x1 - x0
    dy = y1 - y0
    t0 = 0.0
    t1 = 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
