from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class Title:
    text: str


@dataclass(frozen=True)
class PlotXY:
    """One line series. ``x``/``y`` are zipped; a length mismatch keeps the shared prefix."""

    x: tuple[float, ...]
    y: tuple[float, ...]
    label: str = ""

    def points(self) -> list[tuple[float, float]]:
        return list(zip(self.x, self.y))


@dataclass(frozen=True)
class Xlim:
    left: float
    right: float


@dataclass(frozen=True)
class Ylim:
    bottom: float
    top: float


PlotCommand: TypeAlias = Title | PlotXY | Xlim | Ylim
