"""
Background export of flattened documents.
"""
from .export_worker import ExportWorker

__all__ = ['ExportWorker']
