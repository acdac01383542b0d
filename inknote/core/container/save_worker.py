"""
Background worker that encodes a container.
"""
import logging
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from ..annotations.models import AnnotationSet
from ..document.pdf_document import DocumentArtifact
from .codec import ContainerCodec

logger = logging.getLogger(__name__)


class SaveWorker(QThread):
    """Worker thread for encoding containers without freezing the UI."""

    # Signals
    completed = pyqtSignal(int, object)  # request id, container bytes
    failed = pyqtSignal(int, str)  # request id, message

    def __init__(self, request_id: int, artifact: DocumentArtifact,
                 annotations: AnnotationSet, output_path: Optional[str] = None,
                 parent=None):
        super().__init__(parent)
        self.request_id = request_id
        self.artifact = artifact
        self.annotations = annotations
        self.output_path = output_path
        self.error: Optional[Exception] = None

    def run(self):
        """Encode (and optionally write) the container in a background thread."""
        try:
            data = ContainerCodec.encode(self.artifact, self.annotations)

            if self.output_path:
                ContainerCodec.write_file(data, self.output_path)

            self.completed.emit(self.request_id, data)
        except Exception as e:
            logger.error("Saving %s failed: %s", self.artifact.name, e)
            self.error = e
            self.failed.emit(self.request_id, f"Error during save: {e}")
