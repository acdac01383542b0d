"""
Core business logic for Inknote.
"""
from .annotations import AnnotationSet, Stroke, StrokeModel, ToolKind
from .container import ContainerCodec
from .document import DocumentArtifact, PDFDocumentReader, PDFExporter
from .geometry import Point, denormalize, normalize
from .rendering import LiveRenderer

__all__ = [
    'AnnotationSet',
    'ContainerCodec',
    'DocumentArtifact',
    'LiveRenderer',
    'PDFDocumentReader',
    'PDFExporter',
    'Point',
    'Stroke',
    'StrokeModel',
    'ToolKind',
    'denormalize',
    'normalize',
]
