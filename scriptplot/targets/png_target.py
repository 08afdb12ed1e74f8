from __future__ import annotations

from pathlib import Path

from PIL import Image

from .base import DisplayFrame, RenderTarget


class PngFileTarget(RenderTarget):
    def __init__(self, path: str | Path, *, make_parents: bool = False) -> None:
        self.path = Path(path)
        self.make_parents = make_parents
        self.frames_written = 0

    def present_frame(self, frame: DisplayFrame) -> None:
        if self.make_parents:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        image = Image.fromarray(frame.rgba.numpy())
        image.save(self.path, format="PNG")
        self.frames_written += 1

    def describe(self) -> str:
        return f"png:{self.path}"
