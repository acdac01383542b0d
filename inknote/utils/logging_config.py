"""
Logging setup for the application and command-line entry.
"""
import logging
import os
from typing import Optional, Union

from ..config import Config

_HANDLER_NAME = "inknote-console"


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Configure the root logger with a single console handler.

    Calling this more than once replaces the level but never adds a
    second handler.

    Args:
        level: Log level name or number. When omitted, DEBUG is used if the
            INKNOTE_DEBUG environment variable is set, INFO otherwise.

    Returns:
        The configured root logger
    """
    if level is None:
        level = logging.DEBUG if os.environ.get(Config.DEBUG_ENV_VAR) else logging.INFO
    elif isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return root_logger

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(Config.LOG_FORMAT))
    root_logger.addHandler(handler)
    return root_logger
