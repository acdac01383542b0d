"""
Background worker that flattens annotations into a new PDF.
"""
import logging
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from ..annotations.models import AnnotationSet
from ..document.pdf_document import DocumentArtifact
from ..document.pdf_exporter import PDFExporter

logger = logging.getLogger(__name__)


class ExportWorker(QThread):
    """Worker thread for exporting annotations to PDF without freezing the UI."""

    # Signals
    completed = pyqtSignal(int, object)  # request id, exported PDF bytes
    failed = pyqtSignal(int, str)  # request id, message
    progress = pyqtSignal(str)  # status message
    page_progress = pyqtSignal(int, int)  # current, total pages

    def __init__(self, request_id: int, artifact: DocumentArtifact,
                 annotations: AnnotationSet, output_path: Optional[str] = None,
                 parent=None):
        super().__init__(parent)
        self.request_id = request_id
        self.artifact = artifact
        self.annotations = annotations
        self.output_path = output_path
        self.error: Optional[Exception] = None
        self.exporter = PDFExporter()

    def run(self):
        """Execute the export in a background thread."""
        try:
            self.exporter.progress_signal.connect(self._on_page_progress)

            self.progress.emit("Exporting annotations...")
            data = self.exporter.export(self.artifact, self.annotations)

            if self.output_path:
                self.progress.emit("Finalizing...")
                self.exporter.write_file(data, self.output_path)

            self.completed.emit(self.request_id, data)
        except Exception as e:
            logger.error("Export of %s failed: %s", self.artifact.name, e)
            self.error = e
            self.failed.emit(self.request_id, f"Error during export: {e}")

    def _on_page_progress(self, current, total):
        """Handle page-level progress updates."""
        self.page_progress.emit(current, total)
