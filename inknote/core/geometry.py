"""
Conversion between surface pixel coordinates and normalized page space.

Normalized page space puts (0, 0) at the top-left corner of a page and
(1, 1) at its bottom-right corner, independent of zoom, screen density or
export resolution.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import Config
from .errors import InvalidSurface


@dataclass(frozen=True)
class Point:
    """A coordinate in normalized page space."""
    x: float
    y: float

    @property
    def is_normalized(self) -> bool:
        """Check if the point lies inside the unit square."""
        return 0.0 <= self.x <= 1.0 and 0.0 <= self.y <= 1.0

    def to_dict(self):
        return {'x': self.x, 'y': self.y}

    @staticmethod
    def from_dict(data) -> 'Point':
        return Point(float(data['x']), float(data['y']))


def check_surface(width: float, height: float) -> None:
    """Raise InvalidSurface unless both dimensions are positive."""
    if width <= 0 or height <= 0:
        raise InvalidSurface(width, height)


def is_inside_surface(raw_x: float, raw_y: float, width: float, height: float) -> bool:
    """
    Check if a surface-relative pointer position lies on the surface.

    Args:
        raw_x, raw_y: Pointer position relative to the surface's top-left
        width, height: Surface dimensions

    Returns:
        True if the position is within [0, width] x [0, height]
    """
    return 0.0 <= raw_x <= width and 0.0 <= raw_y <= height


def normalize(raw_x: float, raw_y: float, surface_width: float,
              surface_height: float) -> Point:
    """
    Map a surface-relative pointer position to normalized page space.

    Args:
        raw_x, raw_y: Pointer position relative to the surface's top-left
        surface_width, surface_height: Current surface dimensions

    Returns:
        The normalized point

    Raises:
        InvalidSurface: If either dimension is not positive
    """
    check_surface(surface_width, surface_height)
    return Point(raw_x / surface_width, raw_y / surface_height)


def denormalize(point: Point, target_width: float,
                target_height: float) -> Tuple[float, float]:
    """
    Place a normalized point on a surface of arbitrary size.

    Args:
        point: Point in normalized page space
        target_width, target_height: Dimensions of the target surface

    Returns:
        (x, y) in target surface units

    Raises:
        InvalidSurface: If either dimension is not positive
    """
    check_surface(target_width, target_height)
    return point.x * target_width, point.y * target_height


def scaled_stroke_width(width: float, surface_width: float,
                        reference_width: Optional[float] = Config.REFERENCE_SURFACE_WIDTH) -> float:
    """
    Derive the on-surface line width for a stroke.

    Stroke widths are stored at a reference page width, so a stroke keeps
    the same thickness relative to the page on every surface.

    Args:
        width: Stored stroke width
        surface_width: Logical width of the surface being drawn on
        reference_width: Page width the stored width refers to. None keeps
            the stored width unchanged.

    Returns:
        Line width in surface units
    """
    if not reference_width:
        return width
    return width * surface_width / reference_width
