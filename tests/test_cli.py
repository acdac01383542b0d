"""Tests for the command-line entry."""

import logging

import fitz  # PyMuPDF
import pytest

from inknote.core.annotations import AnnotationSet
from inknote.core.container import ContainerCodec
from inknote.core.document import DocumentArtifact
from inknote.main import main

from support import horizontal_points, make_pdf, make_stroke


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)


@pytest.fixture
def container_path(tmp_path):
    annotations = AnnotationSet({1: [make_stroke(horizontal_points(4))]})
    path = tmp_path / "lecture.note"
    ContainerCodec.save_to_file(DocumentArtifact(make_pdf(3), "lecture.pdf"), annotations,
                                str(path))
    return path


def test_export_next_to_container(container_path, capsys):
    assert main(["export", str(container_path)]) == 0

    output = container_path.parent / "lecture_edited.pdf"
    assert capsys.readouterr().out.strip() == str(output)
    doc = fitz.open(str(output))
    try:
        assert doc.page_count == 3
        assert len(doc[1].get_images()) == 1
    finally:
        doc.close()


def test_export_to_given_path(container_path, tmp_path):
    output = tmp_path / "out.pdf"
    assert main(["export", str(container_path), str(output)]) == 0
    assert output.exists()


def test_info(container_path, capsys):
    assert main(["info", str(container_path)]) == 0
    out = capsys.readouterr().out
    assert "Name: lecture.pdf" in out
    assert "Strokes: 1" in out
    assert "page 2: 1" in out


@pytest.mark.parametrize("argv", [[], ["convert", "x.note"], ["info"], ["export"]])
def test_usage_errors(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "usage: inknote" in capsys.readouterr().err


def test_missing_file(tmp_path):
    assert main(["info", str(tmp_path / "missing.note")]) == 1


def test_malformed_container(tmp_path):
    path = tmp_path / "broken.note"
    path.write_bytes(b"not a container")
    assert main(["export", str(path)]) == 1
