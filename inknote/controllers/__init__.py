"""
Controllers that connect user input and the surrounding application to the core.
"""
from .session import EditingSession
from .input_handler import PointerInputHandler

__all__ = [
    'EditingSession',
    'PointerInputHandler',
]
