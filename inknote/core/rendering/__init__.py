"""
Raster rendering of strokes for display and export.
"""
from .live_renderer import LiveRenderer
from .stroke_painter import (
    image_to_png,
    paint_stroke,
    paint_strokes,
    rasterize_strokes,
)

__all__ = [
    'LiveRenderer',
    'image_to_png',
    'paint_stroke',
    'paint_strokes',
    'rasterize_strokes',
]
