"""
Live rendering of a page's strokes onto a transparent overlay buffer.
"""
import logging
from typing import Optional, Tuple

from PyQt5.QtCore import QObject, Qt, pyqtSignal
from PyQt5.QtGui import QImage, QPainter

from ...config import Config
from ..annotations.manager import StrokeModel
from ..geometry import check_surface
from .stroke_painter import paint_strokes, physical_size

logger = logging.getLogger(__name__)


class LiveRenderer(QObject):
    """
    Draws one page's strokes, plus the in-progress stroke, for display.

    The renderer subscribes to the stroke model and repaints whenever the
    page's strokes or the in-progress stroke change. A repaint depends only
    on the surface size, the pixel ratio and the model state, so calling
    render() again with the same inputs yields the same image.
    """

    # Signals
    repainted = pyqtSignal(int)  # page index

    def __init__(self, model: StrokeModel, page_index: int = 0,
                 reference_width: Optional[float] = Config.REFERENCE_SURFACE_WIDTH,
                 parent: QObject = None):
        super().__init__(parent)
        self.model = model
        self.page_index = page_index
        self.reference_width = reference_width

        self._buffer: Optional[QImage] = None
        self._surface: Optional[Tuple[float, float]] = None
        self._pixel_ratio: float = 1.0

        self.model.strokes_changed.connect(self._on_model_changed)
        self.model.preview_changed.connect(self._on_model_changed)

    @property
    def image(self) -> Optional[QImage]:
        """The most recently rendered buffer."""
        return self._buffer

    def set_page(self, page_index: int) -> None:
        """Switch the renderer to another page and repaint if a surface is known."""
        if page_index == self.page_index:
            return
        self.page_index = page_index
        self.refresh()

    def render(self, width: float, height: float, pixel_ratio: float = 1.0) -> QImage:
        """
        Render the page's strokes onto a buffer sized for the surface.

        Args:
            width, height: Logical surface size
            pixel_ratio: Device pixel ratio of the display (clamped to the
                configured range)

        Returns:
            Transparent ARGB image of (width * ratio) x (height * ratio)
            pixels with its device pixel ratio set

        Raises:
            InvalidSurface: If either dimension is not positive
        """
        check_surface(width, height)
        ratio = min(max(pixel_ratio, Config.MIN_PIXEL_RATIO), Config.MAX_PIXEL_RATIO)

        pixel_width = physical_size(width, ratio)
        pixel_height = physical_size(height, ratio)
        if (self._buffer is None or self._buffer.width() != pixel_width
                or self._buffer.height() != pixel_height):
            logger.debug("Resizing overlay buffer for page %d to %dx%d",
                         self.page_index, pixel_width, pixel_height)
            self._buffer = QImage(pixel_width, pixel_height, QImage.Format_ARGB32_Premultiplied)

        # Painting is scaled explicitly, so the buffer must not scale again
        self._buffer.setDevicePixelRatio(1.0)
        self._buffer.fill(Qt.transparent)

        painter = QPainter(self._buffer)
        try:
            painter.scale(ratio, ratio)
            paint_strokes(
                painter,
                self.model.strokes_for_page(self.page_index),
                width,
                height,
                in_progress=self.model.in_progress(self.page_index),
                reference_width=self.reference_width
            )
        finally:
            painter.end()

        self._buffer.setDevicePixelRatio(ratio)
        self._surface = (width, height)
        self._pixel_ratio = ratio
        self.repainted.emit(self.page_index)
        return self._buffer

    def refresh(self) -> Optional[QImage]:
        """Repaint with the last surface size, if one is known."""
        if self._surface is None:
            return None
        return self.render(self._surface[0], self._surface[1], self._pixel_ratio)

    def _on_model_changed(self, page_index: int) -> None:
        if page_index == self.page_index:
            self.refresh()
