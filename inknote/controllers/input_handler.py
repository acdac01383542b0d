"""
Pointer input handling for drawing on a page surface.
"""
import logging
from typing import Optional, Tuple

from ..core.annotations import Stroke
from ..core.geometry import check_surface, is_inside_surface, normalize
from .session import EditingSession

logger = logging.getLogger(__name__)


class PointerInputHandler:
    """
    Turns surface-relative pointer events into strokes.

    Events are ignored outside edit mode. Positions outside the surface are
    dropped before normalization.
    """

    def __init__(self, session: EditingSession):
        self.session = session
        self.surface_size: Optional[Tuple[float, float]] = None
        self._handle: Optional[int] = None

    def set_surface_size(self, width: float, height: float) -> None:
        """
        Set the on-screen size of the page surface.

        Raises:
            InvalidSurface: If either dimension is not positive
        """
        check_surface(width, height)
        self.surface_size = (width, height)

    @property
    def is_drawing(self) -> bool:
        self._drop_stale_handle()
        return self._handle is not None

    def _drop_stale_handle(self) -> None:
        """Forget a stroke the session discarded, e.g. by opening another document."""
        if self._handle is not None and self.session.stroke_model.open_handle != self._handle:
            logger.debug("Stroke %d was discarded by the session", self._handle)
            self._handle = None

    def press(self, x: float, y: float) -> bool:
        """
        Start a stroke at a pointer position.

        Returns:
            True if a stroke was started
        """
        self._drop_stale_handle()
        if not self.session.edit_mode or self.session.artifact is None:
            return False
        if self.surface_size is None or self._handle is not None:
            return False
        if not is_inside_surface(x, y, *self.surface_size):
            return False

        self._handle = self.session.begin_stroke()
        self.session.extend_stroke(self._handle, normalize(x, y, *self.surface_size))
        return True

    def move(self, x: float, y: float) -> bool:
        """
        Extend the current stroke.

        Returns:
            True if a point was added
        """
        self._drop_stale_handle()
        if self._handle is None:
            return False
        if not is_inside_surface(x, y, *self.surface_size):
            return False
        return self.session.extend_stroke(self._handle, normalize(x, y, *self.surface_size))

    def release(self) -> Optional[Stroke]:
        """
        Finish the current stroke.

        Returns:
            The recorded stroke, or None if nothing was recorded
        """
        self._drop_stale_handle()
        if self._handle is None:
            return None
        handle, self._handle = self._handle, None
        return self.session.commit_stroke(handle)

    def leave(self) -> Optional[Stroke]:
        """Pointer left the surface: finish the stroke like a release."""
        return self.release()
