"""
Annotation data models: strokes and per-page annotation sets.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from ...config import Config
from ..geometry import Point

logger = logging.getLogger(__name__)


class ToolKind(Enum):
    INK = "ink"
    ERASE = "erase"

    @staticmethod
    def from_value(value) -> 'ToolKind':
        """
        Parse a stored tool value.

        Accepts "ink"/"erase" as well as the older "PEN"/"ERASER" values.
        A missing value means ink.
        """
        if value is None:
            return ToolKind.INK
        if isinstance(value, ToolKind):
            return value
        text = str(value).lower()
        if text in ("ink", "pen"):
            return ToolKind.INK
        if text in ("erase", "eraser"):
            return ToolKind.ERASE
        raise ValueError(f"Unknown tool kind: {value!r}")


@dataclass(frozen=True)
class Stroke:
    """A freehand ink or erase stroke on one page."""
    points: Tuple[Point, ...]
    tool: ToolKind = ToolKind.INK
    color: str = Config.DEFAULT_PEN_COLOR  # Ignored for erase strokes
    width: float = Config.DEFAULT_PEN_WIDTH

    @property
    def is_erase(self) -> bool:
        return self.tool == ToolKind.ERASE

    @property
    def is_renderable(self) -> bool:
        """A stroke needs at least two points to leave a mark."""
        return len(self.points) >= 2

    def to_dict(self):
        """Convert stroke to dictionary for JSON serialization."""
        return {
            'tool': self.tool.value,
            'color': self.color,
            'width': self.width,
            'points': [p.to_dict() for p in self.points]
        }

    @staticmethod
    def from_dict(data) -> 'Stroke':
        """
        Create stroke from dictionary.

        Points outside the unit square are dropped, so the result may have
        fewer than two points.
        """
        tool = ToolKind.from_value(data.get('tool', data.get('type')))
        raw_points = data.get('points') or []

        points = []
        for raw in raw_points:
            point = Point.from_dict(raw)
            if point.is_normalized:
                points.append(point)

        dropped = len(raw_points) - len(points)
        if dropped:
            logger.warning("Dropped %d out-of-page point(s) from stored stroke", dropped)

        return Stroke(
            points=tuple(points),
            tool=tool,
            color=str(data.get('color', Config.DEFAULT_PEN_COLOR)),
            width=float(data.get('width', Config.DEFAULT_PEN_WIDTH))
        )


class AnnotationSet:
    """
    Immutable mapping of 0-based page index to the page's ordered strokes.

    Stroke order is paint order. Pages without strokes are not stored.
    """

    def __init__(self, pages: Mapping[int, Iterable[Stroke]] = None):
        self._pages: Dict[int, Tuple[Stroke, ...]] = {}
        for page_index, strokes in (pages or {}).items():
            strokes = tuple(strokes)
            if strokes:
                self._pages[int(page_index)] = strokes

    def strokes_for_page(self, page_index: int) -> Tuple[Stroke, ...]:
        """Get the strokes of a page, oldest first."""
        return self._pages.get(page_index, ())

    @property
    def pages(self) -> List[int]:
        """Sorted indices of pages that carry strokes."""
        return sorted(self._pages)

    @property
    def stroke_count(self) -> int:
        return sum(len(strokes) for strokes in self._pages.values())

    def is_empty(self) -> bool:
        return not self._pages

    def items(self) -> Iterator[Tuple[int, Tuple[Stroke, ...]]]:
        for page_index in self.pages:
            yield page_index, self._pages[page_index]

    def __contains__(self, page_index) -> bool:
        return page_index in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AnnotationSet):
            return NotImplemented
        return self._pages == other._pages

    def __repr__(self) -> str:
        return f"AnnotationSet(pages={self.pages}, strokes={self.stroke_count})"

    def to_dict(self):
        """Convert to a JSON-ready mapping keyed by page index strings."""
        return {
            str(page_index): [stroke.to_dict() for stroke in strokes]
            for page_index, strokes in self.items()
        }

    @staticmethod
    def from_dict(data) -> 'AnnotationSet':
        """
        Create an annotation set from its serialized mapping.

        Strokes left with fewer than two valid points are pruned.

        Raises:
            ValueError: If the mapping structure is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Annotations must be a mapping of page index to strokes")

        pages: Dict[int, List[Stroke]] = {}
        pruned = 0
        for key, stroke_list in data.items():
            try:
                page_index = int(key)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid page index: {key!r}")
            if page_index < 0:
                raise ValueError(f"Invalid page index: {key!r}")
            if not isinstance(stroke_list, list):
                raise ValueError(f"Strokes for page {key} must be a list")

            for stroke_data in stroke_list:
                if not isinstance(stroke_data, dict):
                    raise ValueError(f"Invalid stroke on page {key}")
                try:
                    stroke = Stroke.from_dict(stroke_data)
                except (KeyError, TypeError) as e:
                    raise ValueError(f"Invalid stroke on page {key}: {e}")
                if stroke.is_renderable:
                    pages.setdefault(page_index, []).append(stroke)
                else:
                    pruned += 1

        if pruned:
            logger.warning("Pruned %d stored stroke(s) with fewer than two points", pruned)

        return AnnotationSet(pages)
