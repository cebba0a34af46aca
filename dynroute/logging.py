"""Centralized logging configuration for DynRoute.

Every module obtains its logger through :func:`get_logger`, so all output hangs
off a single ``dynroute`` root logger with one console handler. The initial
level can be overridden with the ``DYNROUTE_LOG_LEVEL`` environment variable
(e.g. ``DEBUG`` or ``WARNING``).
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "dynroute"
LEVEL_ENV_VAR = "DYNROUTE_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_root_configured = False


def _level_from_env(default: int) -> int:
    """Return the level named by ``DYNROUTE_LOG_LEVEL`` or ``default``."""
    name = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a single handler to the ``dynroute`` logger.

    Repeated calls are no-ops until :func:`reset_logging` is called.

    Args:
        level: Logging level used when the environment does not override it.
        format_string: Custom format string. Defaults to ``DEFAULT_FORMAT``.
        handler: Custom handler. Defaults to a stdout ``StreamHandler``.
    """
    global _root_configured

    if _root_configured:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(_level_from_env(level))
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Keep propagation so pytest's caplog sees records.
    root_logger.propagate = True

    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``dynroute`` hierarchy.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.

    Returns:
        Logger that inherits level and handlers from the ``dynroute`` root.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``dynroute`` root logger and its handlers."""
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Switch all DynRoute loggers to DEBUG."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Switch all DynRoute loggers back to INFO."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop handlers and forget configuration (used by tests)."""
    global _root_configured
    _root_configured = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
