"""
File name helpers for containers and exported documents.
"""
from ..config import Config


def strip_extension(name: str, extension: str) -> str:
    """Remove a case-insensitive extension from the end of a file name."""
    if name.lower().endswith(extension.lower()):
        return name[:-len(extension)]
    return name


def container_file_name(name: str) -> str:
    """
    Get the container file name for a document.

    Args:
        name: Display name of the document (e.g. "lecture.pdf")

    Returns:
        "lecture.note" for PDFs, the name itself if it already is a
        container, otherwise the name with the container extension appended
    """
    if name.lower().endswith(Config.PDF_EXTENSION):
        return strip_extension(name, Config.PDF_EXTENSION) + Config.CONTAINER_EXTENSION
    if name.lower().endswith(Config.CONTAINER_EXTENSION):
        return name
    return name + Config.CONTAINER_EXTENSION


def exported_file_name(name: str) -> str:
    """
    Get the file name for a flattened export of a document.

    Args:
        name: Display name of the document

    Returns:
        "<stem>_edited.pdf"
    """
    stem = strip_extension(name, Config.PDF_EXTENSION)
    stem = strip_extension(stem, Config.CONTAINER_EXTENSION)
    return f"{stem}{Config.EXPORT_SUFFIX}{Config.PDF_EXTENSION}"
