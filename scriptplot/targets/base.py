from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
import torch


@dataclass(frozen=True)
class DisplayFrame:
    revision: int
    width: int
    height: int
    rgba: torch.Tensor

    @classmethod
    def from_canvas(cls, canvas: np.ndarray, revision: int) -> "DisplayFrame":
        if canvas.dtype != np.uint8:
            raise ValueError("canvas must be uint8")
        if canvas.ndim != 3 or canvas.shape[2] != 4:
            raise ValueError("canvas must have shape (H, W, 4)")
        height, width, _ = canvas.shape
        tensor = torch.from_numpy(np.ascontiguousarray(canvas).copy())
        return cls(revision=revision, width=width, height=height, rgba=tensor)


class RenderTarget(ABC):
    """Output sink a surface presents its finished frame to."""

    @abstractmethod
    def present_frame(self, frame: DisplayFrame) -> None:
        raise NotImplementedError

    def describe(self) -> str:
        return type(self).__name__
