"""
Error types raised by the annotation core.
"""
from typing import Optional


class InknoteError(Exception):
    """Base class for all annotation core errors."""


class InvalidSurface(InknoteError, ValueError):
    """A render or normalization target has a zero or negative dimension."""

    def __init__(self, width: float, height: float):
        super().__init__(f"Surface must have positive dimensions, got {width}x{height}")
        self.width = width
        self.height = height


class StrokeAlreadyOpen(InknoteError):
    """A stroke was started while another one is still in progress."""


class NoOpenStroke(InknoteError):
    """A stroke handle was used that does not refer to the open stroke."""


class NoDocumentOpen(InknoteError):
    """An operation needs a document but the session has none."""


class MalformedContainer(InknoteError):
    """A container archive is missing required entries or cannot be read."""


class MetadataCorrupt(InknoteError):
    """The metadata entry of a container could not be parsed."""


class DocumentParseFailure(InknoteError):
    """The document bytes are not a valid PDF."""


class OperationInProgress(InknoteError):
    """A save or export of the same kind is already running."""

    def __init__(self, kind: str):
        super().__init__(f"A {kind} operation is already in progress")
        self.kind = kind


class ExportFailure(InknoteError):
    """Flattening annotations into the document failed."""

    def __init__(self, message: str, page_index: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        if page_index is not None:
            message = f"Page {page_index + 1}: {message}"
        super().__init__(message)
        self.page_index = page_index
        self.cause = cause
