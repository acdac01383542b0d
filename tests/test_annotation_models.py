"""Unit tests for Stroke and AnnotationSet serialization."""

import unittest

from inknote.core.annotations import AnnotationSet, Stroke, ToolKind
from inknote.core.geometry import Point

from support import make_stroke


class TestToolKind(unittest.TestCase):
    """Tests for ToolKind.from_value."""

    def test_current_values(self):
        self.assertIs(ToolKind.from_value("ink"), ToolKind.INK)
        self.assertIs(ToolKind.from_value("erase"), ToolKind.ERASE)

    def test_older_values(self):
        """Containers written by earlier releases use PEN and ERASER."""
        self.assertIs(ToolKind.from_value("PEN"), ToolKind.INK)
        self.assertIs(ToolKind.from_value("ERASER"), ToolKind.ERASE)

    def test_missing_value_is_ink(self):
        self.assertIs(ToolKind.from_value(None), ToolKind.INK)

    def test_unknown_value(self):
        with self.assertRaises(ValueError):
            ToolKind.from_value("highlighter")


class TestStroke(unittest.TestCase):
    """Tests for Stroke."""

    def test_renderable_needs_two_points(self):
        self.assertFalse(make_stroke([(0.5, 0.5)]).is_renderable)
        self.assertTrue(make_stroke([(0.5, 0.5), (0.5, 0.5)]).is_renderable)

    def test_from_dict_reads_legacy_type_key(self):
        stroke = Stroke.from_dict({
            'type': 'ERASER',
            'color': '#000000',
            'width': 20,
            'points': [{'x': 0.1, 'y': 0.1}, {'x': 0.2, 'y': 0.2}]
        })
        self.assertTrue(stroke.is_erase)
        self.assertEqual(stroke.width, 20.0)

    def test_from_dict_drops_out_of_page_points(self):
        with self.assertLogs('inknote.core.annotations.models', level='WARNING'):
            stroke = Stroke.from_dict({
                'tool': 'ink',
                'color': '#ef4444',
                'width': 4,
                'points': [{'x': 0.1, 'y': 0.1}, {'x': 1.5, 'y': 0.2}, {'x': 0.3, 'y': 0.3}]
            })
        self.assertEqual(stroke.points, (Point(0.1, 0.1), Point(0.3, 0.3)))


class TestAnnotationSet(unittest.TestCase):
    """Tests for AnnotationSet."""

    def setUp(self):
        self.ink = make_stroke([(0.1, 0.1), (0.2, 0.2), (0.2, 0.2)], color="#3b82f6")
        self.erase = make_stroke([(0.1, 0.2), (0.3, 0.4)], tool=ToolKind.ERASE, width=20)
        self.annotations = AnnotationSet({0: [self.ink, self.erase], 4: [self.ink]})

    def test_dict_round_trip_preserves_order(self):
        restored = AnnotationSet.from_dict(self.annotations.to_dict())
        self.assertEqual(restored, self.annotations)
        self.assertEqual(restored.strokes_for_page(0), (self.ink, self.erase))

    def test_keys_are_page_index_strings(self):
        self.assertEqual(sorted(self.annotations.to_dict()), ["0", "4"])

    def test_empty_pages_are_not_stored(self):
        annotations = AnnotationSet({0: [], 1: [self.ink]})
        self.assertEqual(annotations.pages, [1])
        self.assertNotIn(0, annotations)

    def test_counts(self):
        self.assertEqual(self.annotations.stroke_count, 3)
        self.assertEqual(len(self.annotations), 2)
        self.assertTrue(AnnotationSet().is_empty())

    def test_short_strokes_are_pruned(self):
        data = {
            "2": [
                {'tool': 'ink', 'color': '#000', 'width': 2, 'points': [{'x': 0.5, 'y': 0.5}]},
                self.ink.to_dict()
            ]
        }
        with self.assertLogs('inknote.core.annotations.models', level='WARNING'):
            annotations = AnnotationSet.from_dict(data)
        self.assertEqual(annotations.strokes_for_page(2), (self.ink,))

    def test_invalid_structure(self):
        for data in ([], {"abc": []}, {"-1": []}, {"0": {}}, {"0": ["x"]}, {"0": [{'tool': 'marker'}]}):
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    AnnotationSet.from_dict(data)

    def test_snapshot_is_isolated_from_source(self):
        pages = {0: [self.ink]}
        annotations = AnnotationSet(pages)
        pages[0].append(self.erase)
        self.assertEqual(annotations.strokes_for_page(0), (self.ink,))


if __name__ == '__main__':
    unittest.main()
