"""
Global configuration for Inknote.
"""

from typing import Final, Tuple


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Inknote"

    # Container format
    FORMAT_VERSION: Final[int] = 1
    CONTAINER_EXTENSION: Final[str] = ".note"
    DOCUMENT_ENTRY: Final[str] = "document.pdf"
    ANNOTATIONS_ENTRY: Final[str] = "annotations.json"
    METADATA_ENTRY: Final[str] = "metadata.json"

    # Export
    EXPORT_SCALE: Final[int] = 2  # Oversampling factor for flattened overlays
    EXPORT_SUFFIX: Final[str] = "_edited"
    PDF_EXTENSION: Final[str] = ".pdf"

    # Drawing defaults
    DEFAULT_PEN_COLOR: Final[str] = "#ef4444"
    DEFAULT_PEN_WIDTH: Final[float] = 4.0
    DEFAULT_ERASER_WIDTH: Final[float] = 10.0

    PEN_COLORS: Final[Tuple[str, ...]] = (
        "#ef4444",
        "#3b82f6",
        "#10b981",
        "#f59e0b",
        "#1e293b",
    )
    PEN_WIDTHS: Final[Tuple[float, ...]] = (2.0, 4.0, 6.0, 8.0)
    ERASER_WIDTHS: Final[Tuple[float, ...]] = (10.0, 20.0, 30.0, 40.0)

    # Stroke widths are expressed at this logical page width
    REFERENCE_SURFACE_WIDTH: Final[float] = 800.0

    # Live rendering
    MIN_PIXEL_RATIO: Final[float] = 1.0
    MAX_PIXEL_RATIO: Final[float] = 2.0

    # Logging
    DEBUG_ENV_VAR: Final[str] = "INKNOTE_DEBUG"
    LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
