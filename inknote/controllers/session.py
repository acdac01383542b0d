"""
Editing session: the boundary the surrounding application talks to.

The session owns the stroke model and the open document. Saving and
exporting work on immutable snapshots, either synchronously or on
background workers.
"""
import logging
import os
from typing import Dict, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal, pyqtSlot
from PyQt5.QtGui import QImage

from ..config import Config
from ..core.annotations import AnnotationSet, Stroke, StrokeModel, ToolKind
from ..core.container import ContainerCodec, SaveWorker
from ..core.document import DocumentArtifact, PDFDocumentReader, PDFExporter
from ..core.errors import NoDocumentOpen, OperationInProgress
from ..core.export import ExportWorker
from ..core.geometry import Point
from ..core.rendering import LiveRenderer

logger = logging.getLogger(__name__)

SAVE = "save"
EXPORT = "export"


class EditingSession(QObject):
    """Coordinates a document, its strokes, live rendering, saving and export."""

    # Signals
    document_opened = pyqtSignal(str)  # display name
    document_closed = pyqtSignal()
    tool_changed = pyqtSignal()
    save_finished = pyqtSignal(object)  # container bytes
    export_finished = pyqtSignal(object)  # PDF bytes
    operation_failed = pyqtSignal(str, str)  # kind, message

    def __init__(self, parent: QObject = None):
        super().__init__(parent)
        self.reader = PDFDocumentReader()
        self.stroke_model = StrokeModel(self)
        self.renderer = LiveRenderer(self.stroke_model, parent=self)
        self.exporter = PDFExporter(parent=self)

        # Tool state
        self.edit_mode = False
        self.active_tool = ToolKind.INK
        self.pen_color = Config.DEFAULT_PEN_COLOR
        self.pen_width = Config.DEFAULT_PEN_WIDTH
        self.eraser_width = Config.DEFAULT_ERASER_WIDTH

        # Background work
        self._generation = 0  # Bumped whenever a different document is opened
        self._next_request_id = 1
        self._requests: Dict[int, Tuple[str, int, int]] = {}  # id -> (kind, generation, revision)
        self._active: Dict[str, int] = {}  # kind -> request id
        self._workers: Dict[int, QObject] = {}
        self.last_error: Optional[str] = None

    # ==================== Document ====================

    @property
    def artifact(self) -> Optional[DocumentArtifact]:
        return self.reader.artifact

    @property
    def display_name(self) -> Optional[str]:
        return self.artifact.name if self.artifact else None

    @property
    def page_count(self) -> int:
        return self.reader.get_page_count()

    def open_document(self, data: bytes, name: str,
                      is_container: Optional[bool] = None) -> DocumentArtifact:
        """
        Open a plain PDF or a container.

        Nothing in the session changes unless opening succeeds.

        Args:
            data: File bytes
            name: File name the bytes came from
            is_container: Whether the bytes are a container; detected from
                the content when omitted

        Returns:
            The opened document

        Raises:
            MalformedContainer: If a container is missing required entries
            DocumentParseFailure: If the document bytes are not a valid PDF
        """
        data = bytes(data)
        if is_container is None:
            is_container = ContainerCodec.is_container(data)

        if is_container:
            artifact, annotations, _ = ContainerCodec.decode(data, source_name=name)
        else:
            artifact = DocumentArtifact(data, name)
            annotations = AnnotationSet()

        self.reader.load_document(artifact)

        self._generation += 1
        self.stroke_model.load(annotations)
        self.renderer.set_page(0)
        self.document_opened.emit(artifact.name)
        return artifact

    def open_file(self, file_path: str) -> DocumentArtifact:
        """Open a PDF or container from disk."""
        with open(file_path, 'rb') as f:
            data = f.read()
        name = os.path.basename(file_path)
        is_container = None
        if name.lower().endswith(Config.CONTAINER_EXTENSION):
            is_container = True
        return self.open_document(data, name, is_container)

    def close_document(self) -> None:
        """Close the document and drop all strokes."""
        self.reader.close_document()
        self._generation += 1
        self.stroke_model.clear_all()
        self.document_closed.emit()

    def _require_document(self) -> DocumentArtifact:
        if self.artifact is None:
            raise NoDocumentOpen("No document is open")
        return self.artifact

    def set_current_page(self, page_index: int) -> None:
        """
        Select the page that receives new strokes and is live rendered.

        Raises:
            IndexError: If the page does not exist
        """
        self._require_document()
        if not 0 <= page_index < self.page_count:
            raise IndexError(f"Page {page_index} out of range (0-{self.page_count - 1})")
        self.stroke_model.set_current_page(page_index)
        self.renderer.set_page(page_index)

    def get_page_size(self, page_index: int) -> Tuple[float, float]:
        """Native page size in points."""
        return self.reader.get_page_size(page_index)

    # ==================== Tools ====================

    def set_edit_mode(self, enabled: bool) -> None:
        self.edit_mode = enabled
        self.tool_changed.emit()

    def set_tool(self, tool: ToolKind) -> None:
        self.active_tool = tool
        self._restyle_open_stroke()
        self.tool_changed.emit()

    def set_pen(self, color: Optional[str] = None, width: Optional[float] = None) -> None:
        """Change the pen color and/or width."""
        if color is not None:
            self.pen_color = color
        if width is not None:
            self.pen_width = float(width)
        self._restyle_open_stroke()
        self.tool_changed.emit()

    def set_eraser_width(self, width: float) -> None:
        self.eraser_width = float(width)
        self._restyle_open_stroke()
        self.tool_changed.emit()

    @property
    def current_width(self) -> float:
        """Width of the active tool."""
        return self.eraser_width if self.active_tool == ToolKind.ERASE else self.pen_width

    def _restyle_open_stroke(self) -> None:
        """Apply the active tool style to the in-progress stroke, which triggers a repaint."""
        handle = self.stroke_model.open_handle
        if handle is None:
            return
        open_stroke = self.stroke_model.in_progress(self.stroke_model.current_page)
        if open_stroke is None or open_stroke.tool != self.active_tool:
            return
        self.stroke_model.restyle_stroke(handle, color=self.pen_color, width=self.current_width)

    # ==================== Strokes ====================

    def begin_stroke(self, tool: Optional[ToolKind] = None, color: Optional[str] = None,
                     width: Optional[float] = None) -> int:
        """
        Start a stroke on the current page.

        Unspecified values come from the active tool settings.

        Raises:
            NoDocumentOpen: If no document is open
            StrokeAlreadyOpen: If a stroke is already in progress
        """
        self._require_document()
        if tool is None:
            tool = self.active_tool
        if color is None:
            color = self.pen_color
        if width is None:
            width = self.eraser_width if tool == ToolKind.ERASE else self.pen_width
        return self.stroke_model.begin_stroke(tool, color, width)

    def extend_stroke(self, handle: int, point: Point) -> bool:
        return self.stroke_model.extend_stroke(handle, point)

    def commit_stroke(self, handle: int) -> Optional[Stroke]:
        return self.stroke_model.commit_stroke(handle)

    @property
    def has_unsaved_changes(self) -> bool:
        return self.stroke_model.has_unsaved_changes

    # ==================== Rendering ====================

    def render(self, width: float, height: float, pixel_ratio: float = 1.0) -> QImage:
        """
        Render the current page's overlay.

        Raises:
            InvalidSurface: If either dimension is not positive
        """
        return self.renderer.render(width, height, pixel_ratio)

    # ==================== Save / export ====================

    def save(self) -> bytes:
        """Encode the document and its strokes as a container."""
        artifact = self._require_document()
        data = ContainerCodec.encode(artifact, self.stroke_model.snapshot())
        self.stroke_model.mark_saved()
        return data

    def export(self) -> bytes:
        """
        Flatten the strokes into a new PDF.

        Raises:
            ExportFailure: If any page fails; the session is unchanged
        """
        artifact = self._require_document()
        return self.exporter.export(artifact, self.stroke_model.snapshot())

    def start_save(self, output_path: Optional[str] = None) -> int:
        """
        Save on a background worker.

        Returns:
            Request id, reported back through save_finished/operation_failed

        Raises:
            OperationInProgress: If a save is already running
        """
        artifact = self._require_document()
        return self._start(SAVE, SaveWorker, artifact, output_path)

    def start_export(self, output_path: Optional[str] = None) -> int:
        """
        Export on a background worker.

        Returns:
            Request id, reported back through export_finished/operation_failed

        Raises:
            OperationInProgress: If an export is already running
        """
        artifact = self._require_document()
        return self._start(EXPORT, ExportWorker, artifact, output_path)

    def is_busy(self, kind: str) -> bool:
        return kind in self._active

    def _start(self, kind: str, worker_class, artifact: DocumentArtifact,
               output_path: Optional[str]) -> int:
        if kind in self._active:
            raise OperationInProgress(kind)

        request_id = self._next_request_id
        self._next_request_id += 1
        snapshot = self.stroke_model.snapshot()
        self._requests[request_id] = (kind, self._generation, self.stroke_model.revision)
        self._active[kind] = request_id

        worker = worker_class(request_id, artifact, snapshot, output_path)
        worker.completed.connect(self._on_worker_completed)
        worker.failed.connect(self._on_worker_failed)
        worker.finished.connect(self._on_worker_finished)
        self._workers[request_id] = worker
        logger.debug("Started %s request %d", kind, request_id)
        worker.start()
        return request_id

    def _finish_request(self, request_id: int) -> Optional[Tuple[str, int, int]]:
        request = self._requests.pop(request_id, None)
        if request is None:
            return None
        kind, generation, _ = request
        if self._active.get(kind) == request_id:
            del self._active[kind]
        if generation != self._generation:
            logger.warning("Ignoring %s result for a document that is no longer open", kind)
            return None
        return request

    @pyqtSlot(int, object)
    def _on_worker_completed(self, request_id: int, data) -> None:
        request = self._finish_request(request_id)
        if request is None:
            return
        kind, _, revision = request
        if kind == SAVE:
            if revision == self.stroke_model.revision:
                self.stroke_model.mark_saved()
            self.save_finished.emit(data)
        else:
            self.export_finished.emit(data)

    @pyqtSlot(int, str)
    def _on_worker_failed(self, request_id: int, message: str) -> None:
        request = self._finish_request(request_id)
        if request is None:
            return
        self.last_error = message
        self.operation_failed.emit(request[0], message)

    @pyqtSlot()
    def _on_worker_finished(self) -> None:
        worker = self.sender()
        if worker is not None:
            self._workers.pop(worker.request_id, None)
            worker.deleteLater()

    def wait_for_workers(self, timeout_ms: int = 30000) -> bool:
        """Block until running workers finish. Results are delivered by the event loop."""
        return all(worker.wait(timeout_ms) for worker in list(self._workers.values()))
