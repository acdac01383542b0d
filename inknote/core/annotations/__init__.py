"""
Annotation system for PDF documents.
"""
from .models import AnnotationSet, Stroke, ToolKind
from .manager import StrokeModel

__all__ = [
    'AnnotationSet',
    'Stroke',
    'StrokeModel',
    'ToolKind',
]
