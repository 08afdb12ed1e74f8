from __future__ import annotations

from collections import deque

import torch

from .base import DisplayFrame, RenderTarget


class MemoryTarget(RenderTarget):
    """Keeps the most recent ``max_frames`` presented frames, newest last."""

    def __init__(self, max_frames: int = 1) -> None:
        if max_frames <= 0:
            raise ValueError("max_frames must be > 0")
        self.frames: deque[DisplayFrame] = deque(maxlen=max_frames)

    def present_frame(self, frame: DisplayFrame) -> None:
        self.frames.append(frame)

    @property
    def last_frame(self) -> DisplayFrame | None:
        return self.frames[-1] if self.frames else None

    def last_rgba(self) -> torch.Tensor:
        if not self.frames:
            raise LookupError("no frame has been presented")
        return self.frames[-1].rgba
