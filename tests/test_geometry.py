"""Unit tests for normalized page geometry.

Tests:
    - normalize / denormalize: mapping between surface and page space
    - is_inside_surface: pointer filtering at surface edges
    - scaled_stroke_width: on-surface line widths
"""

import unittest

from inknote.core.errors import InvalidSurface
from inknote.core.geometry import (
    Point,
    denormalize,
    is_inside_surface,
    normalize,
    scaled_stroke_width,
)


class TestNormalize(unittest.TestCase):
    """Tests for normalize and denormalize."""

    def test_corners_map_to_unit_square(self):
        """Top-left is (0, 0) and bottom-right is (1, 1)."""
        self.assertEqual(normalize(0, 0, 400, 300), Point(0.0, 0.0))
        self.assertEqual(normalize(400, 300, 400, 300), Point(1.0, 1.0))

    def test_divides_by_surface_dimensions(self):
        point = normalize(100, 75, 400, 300)
        self.assertAlmostEqual(point.x, 0.25)
        self.assertAlmostEqual(point.y, 0.25)

    def test_round_trip_identity(self):
        """denormalize(normalize(p)) returns p for many surface sizes."""
        sizes = [(1, 1), (3, 7), (595, 842), (800, 1131.36), (0.5, 2.25), (4096, 17)]
        for width, height in sizes:
            for fx in (0.0, 0.13, 0.5, 0.999, 1.0):
                for fy in (0.0, 0.37, 0.71, 1.0):
                    raw = (fx * width, fy * height)
                    x, y = denormalize(normalize(raw[0], raw[1], width, height), width, height)
                    self.assertAlmostEqual(x, raw[0], places=9)
                    self.assertAlmostEqual(y, raw[1], places=9)

    def test_denormalize_places_on_any_surface(self):
        point = Point(0.5, 0.25)
        self.assertEqual(denormalize(point, 200, 400), (100.0, 100.0))
        self.assertEqual(denormalize(point, 595, 842), (297.5, 210.5))

    def test_zero_surface_fails(self):
        with self.assertRaises(InvalidSurface):
            normalize(1, 1, 0, 100)
        with self.assertRaises(InvalidSurface):
            normalize(1, 1, 100, 0)
        with self.assertRaises(InvalidSurface):
            denormalize(Point(0.5, 0.5), 0, 0)

    def test_negative_surface_fails(self):
        with self.assertRaises(InvalidSurface):
            normalize(1, 1, -10, 100)

    def test_invalid_surface_is_value_error(self):
        """Programmer errors surface as ValueError as well."""
        with self.assertRaises(ValueError):
            denormalize(Point(0, 0), 10, -1)


class TestPoint(unittest.TestCase):
    """Tests for Point."""

    def test_is_normalized(self):
        self.assertTrue(Point(0, 0).is_normalized)
        self.assertTrue(Point(1, 1).is_normalized)
        self.assertFalse(Point(1.01, 0.5).is_normalized)
        self.assertFalse(Point(0.5, -0.01).is_normalized)

    def test_dict_round_trip(self):
        point = Point(0.125, 0.75)
        self.assertEqual(Point.from_dict(point.to_dict()), point)


class TestSurfaceHelpers(unittest.TestCase):
    """Tests for is_inside_surface and scaled_stroke_width."""

    def test_edges_are_inside(self):
        self.assertTrue(is_inside_surface(0, 0, 100, 50))
        self.assertTrue(is_inside_surface(100, 50, 100, 50))

    def test_outside_positions(self):
        self.assertFalse(is_inside_surface(-1, 10, 100, 50))
        self.assertFalse(is_inside_surface(10, 50.5, 100, 50))

    def test_width_scales_with_surface(self):
        self.assertAlmostEqual(scaled_stroke_width(4, 400, 800), 2.0)
        self.assertAlmostEqual(scaled_stroke_width(4, 1600, 800), 8.0)

    def test_width_unscaled_without_reference(self):
        self.assertEqual(scaled_stroke_width(4, 123, None), 4)


if __name__ == '__main__':
    unittest.main()
