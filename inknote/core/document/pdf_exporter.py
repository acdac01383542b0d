"""
Flattening of strokes into a new PDF document.
"""
import logging

import fitz  # PyMuPDF
from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtGui import QTransform

from ...config import Config
from ...utils import write_atomic
from ..annotations.models import AnnotationSet
from ..errors import DocumentParseFailure, ExportFailure
from ..rendering.stroke_painter import image_to_png, rasterize_strokes
from .pdf_document import DocumentArtifact, open_pdf

logger = logging.getLogger(__name__)


class PDFExporter(QObject):
    """
    Rasterizes each annotated page's strokes at print resolution and draws
    the raster as a full-page image over the original page content.
    """

    # Signal for progress updates
    progress_signal = pyqtSignal(int, int)  # current, total

    def __init__(self, scale: float = Config.EXPORT_SCALE,
                 reference_width=Config.REFERENCE_SURFACE_WIDTH, parent: QObject = None):
        super().__init__(parent)
        self.scale = scale
        self.reference_width = reference_width

    def export(self, artifact: DocumentArtifact, annotations: AnnotationSet) -> bytes:
        """
        Produce a flattened copy of a document.

        Pages without strokes are left as they are. The artifact itself is
        never modified.

        Args:
            artifact: Original document
            annotations: Snapshot of the strokes to flatten

        Returns:
            Bytes of the new PDF

        Raises:
            ExportFailure: If the document cannot be opened or any page fails
        """
        try:
            doc = open_pdf(artifact.data)
        except DocumentParseFailure as e:
            raise ExportFailure(str(e), cause=e) from e

        try:
            pages = [index for index in annotations.pages if index < doc.page_count]
            skipped = len(annotations.pages) - len(pages)
            if skipped:
                logger.warning("Ignoring strokes on %d page(s) past the end of %s",
                               skipped, artifact.name)

            total_pages = len(pages)
            for current_page, page_index in enumerate(pages):
                self.progress_signal.emit(current_page, total_pages)
                self._flatten_page(doc, page_index, annotations)
            self.progress_signal.emit(total_pages, total_pages)

            try:
                # Untouched pages keep their original stream bytes
                result = doc.tobytes()
            except Exception as e:
                raise ExportFailure(f"Could not write document: {e}", cause=e) from e
        finally:
            doc.close()

        logger.info("Exported %s with %d annotated page(s)", artifact.name, total_pages)
        return result

    def export_to_file(self, artifact: DocumentArtifact, annotations: AnnotationSet,
                       output_path: str) -> None:
        """
        Export to a file, replacing it only once the export has succeeded.

        Args:
            artifact: Original document
            annotations: Snapshot of the strokes to flatten
            output_path: Destination path
        """
        self.write_file(self.export(artifact, annotations), output_path)

    @staticmethod
    def write_file(data: bytes, output_path: str) -> None:
        """Write export bytes through a temporary file in the destination directory."""
        try:
            write_atomic(data, output_path, suffix=Config.PDF_EXTENSION)
        except OSError as e:
            raise ExportFailure(f"Could not write {output_path}: {e}", cause=e) from e

    def _flatten_page(self, doc, page_index: int, annotations: AnnotationSet) -> None:
        """Draw one page's strokes over the page as a PNG overlay."""
        page = doc[page_index]
        rect = page.rect
        try:
            # Strokes are placed on the page as displayed; the overlay is
            # drawn and inserted in unrotated page space
            derotate = page.derotation_matrix
            unrotated = rect * derotate
            target = fitz.Rect(0, 0, unrotated.width, unrotated.height)
            transform = QTransform(derotate.a, derotate.b, derotate.c, derotate.d,
                                   derotate.e - unrotated.x0, derotate.f - unrotated.y0)
            image = rasterize_strokes(
                annotations.strokes_for_page(page_index),
                rect.width,
                rect.height,
                scale=self.scale,
                reference_width=self.reference_width,
                image_size=(unrotated.width, unrotated.height),
                transform=transform
            )
            png = image_to_png(image)
            page.insert_image(target, stream=png, keep_proportion=False, overlay=True)
        except Exception as e:
            logger.error("Failed to flatten page %d: %s", page_index + 1, e)
            raise ExportFailure(str(e), page_index=page_index, cause=e) from e

        logger.debug("Flattened page %d (%.1fx%.1f pt, rotation %d, %dx%d px)",
                     page_index + 1, rect.width, rect.height, page.rotation,
                     image.width(), image.height())
