from __future__ import annotations

from collections.abc import Sequence
import types
from typing import Any

import numpy as np

from .commands import PlotXY, Title, Xlim, Ylim
from .errors import PlotInputError
from .recorder import CommandRecorder


MODULE_NAME = "pyplotter"


class PlotBindings:
    """Script-facing plot calls that record into one recorder.

    Host values are coerced to 32-bit floats here; anything non-numeric or
    non-finite is rejected with :class:`PlotInputError` and never recorded.
    """

    def __init__(self, recorder: CommandRecorder) -> None:
        self.recorder = recorder

    def plot(self, x: Any, y: Any, *, label: Any = None) -> None:
        xs = _coerce_sequence(x, name="x")
        ys = _coerce_sequence(y, name="y")
        # Non-string labels are dropped rather than rejected.
        text = label if isinstance(label, str) else ""
        self.recorder.append(PlotXY(x=xs, y=ys, label=text))

    def title(self, text: Any) -> None:
        if not isinstance(text, str):
            raise PlotInputError(f"title must be a string, got {type(text).__name__}")
        self.recorder.append(Title(text))

    def xlim(self, left: Any, right: Any) -> None:
        self.recorder.append(Xlim(left=_coerce_scalar(left, name="left"), right=_coerce_scalar(right, name="right")))

    def ylim(self, bottom: Any, top: Any) -> None:
        self.recorder.append(Ylim(bottom=_coerce_scalar(bottom, name="bottom"), top=_coerce_scalar(top, name="top")))


def make_module(bindings: PlotBindings, name: str = MODULE_NAME) -> types.ModuleType:
    """Build the module object scripts import to reach ``bindings``."""
    module = types.ModuleType(name, "Record plot commands for the host to render.")
    module.plot = bindings.plot
    module.title = bindings.title
    module.xlim = bindings.xlim
    module.ylim = bindings.ylim
    module.__all__ = ["plot", "title", "xlim", "ylim"]
    return module


_FLOAT32_MAX = float(np.finfo(np.float32).max)


def _to_float32(value: Any) -> float:
    """Round ``value`` to the nearest 32-bit float; ValueError when not finite there."""
    if isinstance(value, (str, bytes, bytearray)) or value is None:
        raise TypeError(f"not a number: {value!r}")
    as_double = float(value)
    if not np.isfinite(as_double) or abs(as_double) > _FLOAT32_MAX:
        raise ValueError(f"not finite as a 32-bit float: {value!r}")
    return float(np.float32(as_double))


def _coerce_scalar(value: Any, *, name: str) -> float:
    try:
        return _to_float32(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise PlotInputError(f"{name} must be a finite number, got {value!r}") from exc


def _coerce_sequence(value: Any, *, name: str) -> tuple[float, ...]:
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotInputError(f"{name} must be 1-D")
        raw = value.tolist()
    elif isinstance(value, (str, bytes, bytearray, dict)):
        raise PlotInputError(f"unsupported {name} input type: {type(value)!r}")
    elif isinstance(value, Sequence):
        raw = list(value)
    else:
        try:
            raw = list(iter(value))
        except TypeError as exc:
            raise PlotInputError(f"unsupported {name} input type: {type(value)!r}") from exc

    out: list[float] = []
    for i, item in enumerate(raw):
        try:
            out.append(_to_float32(item))
        except (TypeError, ValueError, OverflowError) as exc:
            raise PlotInputError(f"{name} contains an invalid value at index {i}: {item!r}") from exc
    return tuple(out)
