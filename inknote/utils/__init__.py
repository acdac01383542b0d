"""
Utility functions and helpers.
"""
from .files import write_atomic
from .logging_config import setup_logging
from .naming import container_file_name, exported_file_name, strip_extension

__all__ = [
    # Logging
    'setup_logging',

    # Files
    'write_atomic',

    # File naming
    'container_file_name',
    'exported_file_name',
    'strip_extension',
]
