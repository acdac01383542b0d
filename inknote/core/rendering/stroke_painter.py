"""
Stroke painting shared by the live renderer and the export compositor.
"""
import logging
import math
from typing import Iterable, Optional, Tuple

from PyQt5.QtCore import QBuffer, QByteArray, QIODevice, Qt
from PyQt5.QtGui import QColor, QImage, QPainter, QPainterPath, QPen, QTransform

from ...config import Config
from ..annotations.models import Stroke
from ..geometry import check_surface, denormalize, scaled_stroke_width

logger = logging.getLogger(__name__)


def stroke_color(stroke: Stroke) -> QColor:
    """Get the paint color of a stroke, falling back to the default pen color."""
    color = QColor(stroke.color)
    if not color.isValid():
        logger.warning("Invalid stroke color %r, using %s", stroke.color, Config.DEFAULT_PEN_COLOR)
        color = QColor(Config.DEFAULT_PEN_COLOR)
    return color


def build_stroke_path(stroke: Stroke, width: float, height: float) -> QPainterPath:
    """Build a polyline path through the stroke's points on a width x height surface."""
    path = QPainterPath()
    first_x, first_y = denormalize(stroke.points[0], width, height)
    path.moveTo(first_x, first_y)
    for point in stroke.points[1:]:
        x, y = denormalize(point, width, height)
        path.lineTo(x, y)
    return path


def paint_stroke(painter: QPainter, stroke: Stroke, width: float, height: float,
                 reference_width: Optional[float] = Config.REFERENCE_SURFACE_WIDTH) -> None:
    """
    Paint one stroke in logical surface units.

    Ink strokes paint over whatever is already drawn. Erase strokes clear
    the pixels they cover to full transparency.
    """
    if not stroke.is_renderable:
        return

    line_width = scaled_stroke_width(stroke.width, width, reference_width)
    if stroke.is_erase:
        painter.setCompositionMode(QPainter.CompositionMode_Clear)
        pen = QPen(QColor(Qt.black), line_width)
    else:
        painter.setCompositionMode(QPainter.CompositionMode_SourceOver)
        pen = QPen(stroke_color(stroke), line_width)

    pen.setCapStyle(Qt.RoundCap)
    pen.setJoinStyle(Qt.RoundJoin)
    painter.setPen(pen)
    painter.setBrush(Qt.NoBrush)
    painter.drawPath(build_stroke_path(stroke, width, height))


def paint_strokes(painter: QPainter, strokes: Iterable[Stroke], width: float, height: float,
                  in_progress: Optional[Stroke] = None,
                  reference_width: Optional[float] = Config.REFERENCE_SURFACE_WIDTH) -> None:
    """
    Paint committed strokes oldest to newest, then the in-progress stroke.

    The painter is left in normal source-over mode.
    """
    check_surface(width, height)
    painter.setRenderHint(QPainter.Antialiasing)

    for stroke in strokes:
        paint_stroke(painter, stroke, width, height, reference_width)
    if in_progress is not None:
        paint_stroke(painter, in_progress, width, height, reference_width)

    painter.setCompositionMode(QPainter.CompositionMode_SourceOver)


def physical_size(logical: float, scale: float) -> int:
    """Pixel count needed to hold a logical length at a scale factor."""
    return max(1, int(math.ceil(logical * scale - 1e-9)))


def rasterize_strokes(strokes: Iterable[Stroke], width: float, height: float,
                      scale: float = 1.0,
                      reference_width: Optional[float] = Config.REFERENCE_SURFACE_WIDTH,
                      image_size: Optional[Tuple[float, float]] = None,
                      transform: Optional[QTransform] = None) -> QImage:
    """
    Rasterize strokes onto a new transparent image.

    Args:
        strokes: Strokes in paint order
        width, height: Logical surface size the strokes are placed on
        scale: Pixels per logical unit
        reference_width: Page width stroke widths refer to
        image_size: Logical size of the image, defaults to width x height
        transform: Mapping from surface units to image units, applied
            before scaling

    Returns:
        ARGB image of size image_size * scale
    """
    check_surface(width, height)
    image_width, image_height = image_size or (width, height)
    check_surface(image_width, image_height)
    image = QImage(physical_size(image_width, scale), physical_size(image_height, scale),
                   QImage.Format_ARGB32_Premultiplied)
    image.fill(Qt.transparent)

    painter = QPainter(image)
    try:
        painter.scale(scale, scale)
        if transform is not None:
            painter.setTransform(transform, True)
        paint_strokes(painter, strokes, width, height, reference_width=reference_width)
    finally:
        painter.end()
    return image


def image_to_png(image: QImage) -> bytes:
    """Encode an image as lossless PNG bytes."""
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.WriteOnly)
    try:
        if not image.save(buffer, "PNG"):
            raise ValueError("PNG encoding failed")
    finally:
        buffer.close()
    return bytes(data)
