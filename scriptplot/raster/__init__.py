from .canvas import draw_hline, draw_vline, fill, fill_rect, new_canvas, stroke_rect
from .draw_lines import clip_segment, draw_polyline
from .draw_text import draw_text, text_size

__all__ = [
    "clip_segment",
    "draw_hline",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill",
    "fill_rect",
    "new_canvas",
    "stroke_rect",
    "text_size",
]
