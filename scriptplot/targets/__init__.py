from .base import DisplayFrame, RenderTarget
from .memory_target import MemoryTarget
from .png_target import PngFileTarget

__all__ = ["DisplayFrame", "MemoryTarget", "PngFileTarget", "RenderTarget"]
