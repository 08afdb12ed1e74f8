from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math

import numpy as np


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    def validate(self) -> None:
        for name, value in (("x", self.xmin), ("x", self.xmax), ("y", self.ymin), ("y", self.ymax)):
            if not math.isfinite(value):
                raise ValueError(f"{name} range must be finite, got {value!r}")
        if self.xmin == self.xmax:
            raise ValueError(f"x range is empty: left == right == {self.xmin!r}")
        if self.ymin == self.ymax:
            raise ValueError(f"y range is empty: bottom == top == {self.ymin!r}")


@dataclass(frozen=True)
class PlotTransform:
    sx: float
    tx: float
    sy: float
    ty: float

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.sx + self.tx, y * self.sy + self.ty)


def build_transform(limits: DataLimits, x0: int, y0: int, width: int, height: int) -> PlotTransform:
    """Map data coordinates onto the pixel rect at (x0, y0); y grows upward in data space."""
    if width <= 1 or height <= 1:
        raise ValueError("plot viewport width/height must be > 1")
    limits.validate()
    sx = (width - 1) / (limits.xmax - limits.xmin)
    tx = x0 - limits.xmin * sx
    sy = -(height - 1) / (limits.ymax - limits.ymin)
    ty = y0 + (height - 1) - limits.ymin * sy
    return PlotTransform(sx=sx, tx=tx, sy=sy, ty=ty)


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Round-valued ticks covering [min(vmin, vmax), max(vmin, vmax)]."""
    if target <= 0:
        raise ValueError("target must be > 0")
    lo, hi = min(vmin, vmax), max(vmin, vmax)
    if lo == hi:
        return np.asarray([lo], dtype=np.float64)

    span = _nice_number(hi - lo, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.ceil(lo / step) * step
    tick_max = np.floor(hi / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
