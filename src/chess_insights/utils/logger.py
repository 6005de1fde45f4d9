"""Logger configuration and convenience helpers."""

from __future__ import annotations

import logging
import sys
import time
from functools import wraps

_DEFAULT_LOGGER_NAME = "chess_insights"
_DEFAULT_LOG_LEVEL = logging.INFO
_DEFAULT_FORMATTER = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
_DEFAULT_HANDLER = logging.StreamHandler(sys.stdout)
_DEFAULT_HANDLER.setFormatter(_DEFAULT_FORMATTER)


def _configure_logger(logger: logging.Logger, level: int) -> None:
    """
    Configures a logger with the specified logging level and default handler.

    If the logger's level is not set, this function sets it to the provided level.
    It also ensures that a default handler is attached if no handlers are present,
    and disables propagation to ancestor loggers.

    Parameters
    ----------
    logger : logging.Logger
        The logger instance to configure.
    level : int
        The logging level to set if the logger's level is not already set.

    Returns
    -------
    None

    Examples
    --------
    >>> import logging
    >>> from chess_insights.utils.logger import _configure_logger
    >>> logger = logging.getLogger("my_logger")
    >>> _configure_logger(logger, logging.INFO)
    >>> logger.info("This is an info message.")
    """
    if logger.level == logging.NOTSET:
        logger.setLevel(level)
    if not logger.handlers:
        logger.addHandler(_DEFAULT_HANDLER)
    logger.propagate = False


def get_logger(name: str | None = None, level: int = _DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Return a configured logger for the given name."""
    logger = logging.getLogger(name or _DEFAULT_LOGGER_NAME)
    _configure_logger(logger, level)
    return logger


def set_level(level: int | str, logger_names: list[str] | None = None) -> None:
    """Set the log level for one or more logger names."""
    names = logger_names or [_DEFAULT_LOGGER_NAME, "uvicorn"]
    for name in names:
        logging.getLogger(name).setLevel(level)


def funclogger(func):
    """Decorator to add logging to functions:

    Logs the function path/module/name.
    Logs the start and end of the function execution.
    Loops through args and kwargs to log their values.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        module_name = func.__module__
        function_name = func.__qualname__
        function_path = f"{module_name}.{function_name}".replace("<", "").replace(">", "")

        logger = get_logger(function_path)
        if not logger.isEnabledFor(logging.DEBUG):
            return func(*args, **kwargs)

        logger.debug("Path: %s", function_path)
        for i, arg in enumerate(args):
            logger.debug(" %s. %s (%s)", i, _short_repr(arg), type(arg).__name__)
        for key, value in kwargs.items():
            logger.debug(" - %s (%s): %s", key, type(value).__name__, _short_repr(value))

        logger.debug("Starting %s", function_name)
        start_time = time.time()
        result = func(*args, **kwargs)
        elapsed_time = time.time() - start_time
        logger.debug("Finished %s in %.4f seconds", function_name, elapsed_time)
        logger.debug("Return Value: %s (%s)", _short_repr(result), type(result).__name__)
        return result

    return wrapper


def _short_repr(value: object, limit: int = 200) -> str:
    text = repr(value)
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"
