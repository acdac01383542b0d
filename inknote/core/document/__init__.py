"""
PDF document handling.
"""
from .pdf_document import DocumentArtifact, PDFDocumentReader, open_pdf
from .pdf_exporter import PDFExporter

__all__ = ['DocumentArtifact', 'PDFDocumentReader', 'PDFExporter', 'open_pdf']
