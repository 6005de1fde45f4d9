"""Utility exports for the chess_insights package."""

from .local_time import local_datetime
from .logger import funclogger, get_logger, set_level
from .normalize_string import normalize_string
from .now import Now

__all__ = [
    "Now",
    "funclogger",
    "get_logger",
    "local_datetime",
    "normalize_string",
    "set_level",
]
