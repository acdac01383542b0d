"""
PDF document loading and page geometry.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import fitz  # PyMuPDF

from ..errors import DocumentParseFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentArtifact:
    """Original document bytes and the name shown for them. Never modified."""
    data: bytes
    name: str

    def __repr__(self) -> str:
        return f"DocumentArtifact(name={self.name!r}, size={len(self.data)})"


def open_pdf(data: bytes) -> fitz.Document:
    """
    Open PDF bytes with PyMuPDF.

    Args:
        data: Raw PDF bytes

    Returns:
        The opened document. The caller is responsible for closing it.

    Raises:
        DocumentParseFailure: If the bytes are not a usable PDF
    """
    if not data:
        raise DocumentParseFailure("Document is empty")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise DocumentParseFailure(f"Not a valid PDF document: {e}") from e

    if doc.needs_pass:
        doc.close()
        raise DocumentParseFailure("Document is password protected")
    if doc.page_count == 0:
        doc.close()
        raise DocumentParseFailure("Document has no pages")
    return doc


class PDFDocumentReader:
    """Holds the open document of a session and answers page geometry queries."""

    def __init__(self):
        self.doc: Optional[fitz.Document] = None
        self.artifact: Optional[DocumentArtifact] = None
        self.total_pages: int = 0
        self._page_sizes: List[Tuple[float, float]] = []

    def load_document(self, artifact: DocumentArtifact) -> int:
        """
        Load a document, replacing the current one only on success.

        Args:
            artifact: Document to open

        Returns:
            Number of pages

        Raises:
            DocumentParseFailure: If the bytes are not a valid PDF
        """
        doc = open_pdf(artifact.data)
        sizes = [(page.rect.width, page.rect.height) for page in doc]

        if self.doc:
            self.close_document()

        self.doc = doc
        self.artifact = artifact
        self.total_pages = doc.page_count
        self._page_sizes = sizes
        logger.info("Opened %s (%d pages)", artifact.name, self.total_pages)
        return self.total_pages

    def close_document(self) -> None:
        """Close the current PDF document and clear all state."""
        if self.doc:
            self.doc.close()
            self.doc = None

        self.artifact = None
        self.total_pages = 0
        self._page_sizes = []

    def get_page_size(self, page_index: int) -> Tuple[float, float]:
        """
        Get the size of a page in points.

        Args:
            page_index: 0-based index of the page

        Returns:
            Tuple of (width, height) in points, (0.0, 0.0) if out of range
        """
        if 0 <= page_index < len(self._page_sizes):
            return self._page_sizes[page_index]
        return 0.0, 0.0

    def is_loaded(self) -> bool:
        """Check if a document is currently loaded."""
        return self.doc is not None

    def get_page_count(self) -> int:
        """Get the total number of pages."""
        return self.total_pages
