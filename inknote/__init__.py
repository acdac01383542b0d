"""
Inknote - freehand ink annotations for PDF documents.
"""

__version__ = "1.0.0"
