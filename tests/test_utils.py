"""Tests for file naming and logging helpers."""

import logging
import os
import tempfile
import unittest
from unittest.mock import patch

from inknote.config import Config
from inknote.utils import (
    container_file_name,
    exported_file_name,
    setup_logging,
    strip_extension,
    write_atomic,
)


class TestNaming(unittest.TestCase):
    """Tests for container and export file names."""

    def test_container_name(self):
        self.assertEqual(container_file_name("lecture.pdf"), "lecture.note")
        self.assertEqual(container_file_name("Lecture.PDF"), "Lecture.note")
        self.assertEqual(container_file_name("lecture.note"), "lecture.note")
        self.assertEqual(container_file_name("scan"), "scan.note")

    def test_exported_name(self):
        self.assertEqual(exported_file_name("lecture.pdf"), "lecture_edited.pdf")
        self.assertEqual(exported_file_name("lecture.note"), "lecture_edited.pdf")
        self.assertEqual(exported_file_name("scan"), "scan_edited.pdf")

    def test_strip_extension(self):
        self.assertEqual(strip_extension("a.b.pdf", ".pdf"), "a.b")
        self.assertEqual(strip_extension("a.pdf.txt", ".pdf"), "a.pdf.txt")


class TestWriteAtomic(unittest.TestCase):
    """Tests for write_atomic."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.temp_dir.name, "lecture.note")

    def tearDown(self):
        self.temp_dir.cleanup()

    def read(self):
        with open(self.path, 'rb') as f:
            return f.read()

    def test_writes_and_replaces(self):
        write_atomic(b"first", self.path)
        write_atomic(b"second", self.path, suffix=".note")
        self.assertEqual(self.read(), b"second")
        self.assertEqual(os.listdir(self.temp_dir.name), ["lecture.note"])

    def test_creates_missing_directories(self):
        path = os.path.join(self.temp_dir.name, "a", "b", "out.pdf")
        write_atomic(b"data", path)
        self.assertTrue(os.path.isfile(path))

    def test_failure_keeps_existing_file(self):
        write_atomic(b"previous", self.path)
        with patch('inknote.utils.files.shutil.move', side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                write_atomic(b"truncated", self.path)
        self.assertEqual(self.read(), b"previous")
        self.assertEqual(os.listdir(self.temp_dir.name), ["lecture.note"])


class TestLogging(unittest.TestCase):
    """Tests for setup_logging."""

    def setUp(self):
        self.root = logging.getLogger()
        self.level = self.root.level
        self.handlers = list(self.root.handlers)

    def tearDown(self):
        self.root.setLevel(self.level)
        for handler in list(self.root.handlers):
            if handler not in self.handlers:
                self.root.removeHandler(handler)

    def test_single_handler(self):
        setup_logging("debug")
        setup_logging("warning")
        named = [h for h in self.root.handlers if h.get_name() == "inknote-console"]
        self.assertEqual(len(named), 1)
        self.assertEqual(self.root.level, logging.WARNING)


class TestToolPalette(unittest.TestCase):
    """Tests for the tool choices offered to the surrounding UI."""

    def test_defaults_are_offered(self):
        self.assertIn(Config.DEFAULT_PEN_COLOR, Config.PEN_COLORS)
        self.assertIn(Config.DEFAULT_PEN_WIDTH, Config.PEN_WIDTHS)
        self.assertIn(Config.DEFAULT_ERASER_WIDTH, Config.ERASER_WIDTHS)


if __name__ == '__main__':
    unittest.main()
