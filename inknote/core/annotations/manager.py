"""
Stroke model that owns the annotations of an editing session.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from ...config import Config
from ..errors import NoOpenStroke, StrokeAlreadyOpen
from ..geometry import Point
from .models import AnnotationSet, Stroke, ToolKind

logger = logging.getLogger(__name__)


@dataclass
class _OpenStroke:
    handle: int
    page_index: int
    tool: ToolKind
    color: str
    width: float
    points: List[Point] = field(default_factory=list)

    def as_stroke(self) -> Stroke:
        return Stroke(tuple(self.points), self.tool, self.color, self.width)


class StrokeModel(QObject):
    """
    Manages all strokes of a document, page by page.

    At most one stroke is in progress at a time. Consumers outside the
    session only ever see snapshots.
    """

    # Signals
    strokes_changed = pyqtSignal(int)  # page index whose committed strokes changed
    preview_changed = pyqtSignal(int)  # page index of the in-progress stroke

    def __init__(self, parent: QObject = None):
        super().__init__(parent)
        self._pages: Dict[int, List[Stroke]] = {}
        self._open: Optional[_OpenStroke] = None
        self._next_handle = 1
        self.current_page: int = 0
        self.has_unsaved_changes: bool = False
        self.revision: int = 0  # Bumped on every change to committed strokes

    def set_current_page(self, page_index: int) -> None:
        """
        Set the page new strokes are drawn on.

        Args:
            page_index: 0-based page index
        """
        if page_index < 0:
            raise ValueError(f"Invalid page index: {page_index}")
        self.current_page = page_index

    # ==================== Stroke protocol ====================

    def begin_stroke(self, tool: ToolKind = ToolKind.INK,
                     color: str = Config.DEFAULT_PEN_COLOR,
                     width: float = Config.DEFAULT_PEN_WIDTH,
                     page_index: Optional[int] = None) -> int:
        """
        Open a new in-progress stroke.

        Args:
            tool: Ink or erase
            color: Stroke color as a hex string (ignored for erase)
            width: Stroke width at the reference page width
            page_index: Page to draw on, defaults to the current page

        Returns:
            Handle of the open stroke

        Raises:
            StrokeAlreadyOpen: If another stroke is still in progress
        """
        if self._open is not None:
            raise StrokeAlreadyOpen(
                f"Stroke {self._open.handle} is still open on page {self._open.page_index}"
            )
        if page_index is None:
            page_index = self.current_page

        handle = self._next_handle
        self._next_handle += 1
        self._open = _OpenStroke(handle, page_index, tool, color, float(width))
        logger.debug("Began %s stroke %d on page %d", tool.value, handle, page_index)
        return handle

    def extend_stroke(self, handle: int, point: Point) -> bool:
        """
        Append a point to the open stroke.

        Consecutive duplicate points are kept. Points outside the unit
        square are dropped.

        Args:
            handle: Handle returned by begin_stroke
            point: Point in normalized page space

        Returns:
            True if the point was appended
        """
        open_stroke = self._require_open(handle)
        if not point.is_normalized:
            logger.debug("Dropped out-of-page point (%.3f, %.3f)", point.x, point.y)
            return False

        open_stroke.points.append(point)
        self.preview_changed.emit(open_stroke.page_index)
        return True

    def commit_stroke(self, handle: int) -> Optional[Stroke]:
        """
        Close the open stroke and record it.

        Returns:
            The recorded stroke, or None if it had fewer than two points
        """
        open_stroke = self._require_open(handle)
        self._open = None

        stroke = open_stroke.as_stroke()
        if not stroke.is_renderable:
            logger.debug("Pruned stroke %d with %d point(s)", handle, len(stroke.points))
            self.preview_changed.emit(open_stroke.page_index)
            return None

        self._pages.setdefault(open_stroke.page_index, []).append(stroke)
        self.revision += 1
        self.has_unsaved_changes = True
        logger.debug("Committed stroke %d with %d points on page %d",
                     handle, len(stroke.points), open_stroke.page_index)
        self.preview_changed.emit(open_stroke.page_index)
        self.strokes_changed.emit(open_stroke.page_index)
        return stroke

    def restyle_stroke(self, handle: int, color: Optional[str] = None,
                       width: Optional[float] = None) -> None:
        """
        Change the colour or width of the open stroke.

        Args:
            handle: Handle of the open stroke
            color: New colour, or None to keep the current one
            width: New width, or None to keep the current one
        """
        open_stroke = self._require_open(handle)
        if color is not None:
            open_stroke.color = color
        if width is not None:
            open_stroke.width = float(width)
        self.preview_changed.emit(open_stroke.page_index)

    def cancel_stroke(self, handle: int) -> None:
        """Discard the open stroke without recording it."""
        open_stroke = self._require_open(handle)
        self._open = None
        self.preview_changed.emit(open_stroke.page_index)

    def _require_open(self, handle: int) -> _OpenStroke:
        if self._open is None or self._open.handle != handle:
            raise NoOpenStroke(f"Stroke {handle} is not open")
        return self._open

    @property
    def open_handle(self) -> Optional[int]:
        """Handle of the in-progress stroke, if any."""
        return self._open.handle if self._open else None

    def in_progress(self, page_index: int) -> Optional[Stroke]:
        """
        Get the in-progress stroke if it is drawn on the given page.

        Args:
            page_index: 0-based page index

        Returns:
            A copy of the open stroke, or None
        """
        if self._open is None or self._open.page_index != page_index:
            return None
        return self._open.as_stroke()

    # ==================== Queries ====================

    def strokes_for_page(self, page_index: int) -> Tuple[Stroke, ...]:
        """Get the committed strokes of a page, oldest first."""
        return tuple(self._pages.get(page_index, ()))

    def snapshot(self) -> AnnotationSet:
        """Get an immutable copy of all committed strokes."""
        return AnnotationSet(self._pages)

    def get_stroke_count(self) -> int:
        """Get total number of committed strokes."""
        return sum(len(strokes) for strokes in self._pages.values())

    # ==================== Bulk changes ====================

    def load(self, annotations: AnnotationSet) -> None:
        """
        Replace all strokes with the contents of an annotation set.

        Any open stroke is discarded. The loaded state counts as saved.
        """
        if self._open is not None:
            self.cancel_stroke(self._open.handle)

        affected = set(self._pages) | set(annotations.pages)
        self._pages = {
            page_index: list(strokes) for page_index, strokes in annotations.items()
        }
        self.current_page = 0
        self.revision += 1
        self.mark_saved()
        for page_index in sorted(affected):
            self.strokes_changed.emit(page_index)

    def clear_page(self, page_index: int) -> None:
        """Remove every stroke of one page."""
        if self._pages.pop(page_index, None):
            self.revision += 1
            self.has_unsaved_changes = True
            self.strokes_changed.emit(page_index)

    def clear_all(self) -> None:
        """Clear all strokes and reset state."""
        self.load(AnnotationSet())

    def mark_saved(self) -> None:
        """Mark all changes as saved."""
        self.has_unsaved_changes = False
