"""Helpers for building documents, strokes and inspecting rasters in tests."""

import fitz
from PyQt5.QtCore import QCoreApplication
from PyQt5.QtGui import QImage

from inknote.core.annotations import Stroke, ToolKind
from inknote.core.geometry import Point

A4 = (595.0, 842.0)


def make_pdf(page_count: int = 3, width: float = A4[0], height: float = A4[1]) -> bytes:
    """Build a small PDF with a line of text on every page."""
    doc = fitz.open()
    for index in range(page_count):
        page = doc.new_page(width=width, height=height)
        page.insert_text((36, 36), f"Page {index + 1}")
    data = doc.tobytes()
    doc.close()
    return data


def make_stroke(points, tool: ToolKind = ToolKind.INK, color: str = "#ff0000",
                width: float = 4.0) -> Stroke:
    """Build a stroke from (x, y) tuples in normalized space."""
    return Stroke(tuple(Point(x, y) for x, y in points), tool, color, width)


def horizontal_points(count: int, y: float = 0.5, start: float = 0.1, end: float = 0.9):
    """Evenly spaced points along a horizontal line."""
    step = (end - start) / (count - 1)
    return [(start + step * i, y) for i in range(count)]


def count_painted(image: QImage) -> int:
    """Number of pixels with any opacity."""
    return sum(
        1
        for y in range(image.height())
        for x in range(image.width())
        if image.pixelColor(x, y).alpha() > 0
    )


def drain_events(session) -> None:
    """Wait for a session's workers and deliver their queued results."""
    assert session.wait_for_workers(30000)
    QCoreApplication.sendPostedEvents()
    QCoreApplication.processEvents()
