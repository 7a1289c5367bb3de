# report_export/utils/logger.py
"""
Logging for the export core.

Every logger made by setup_logger gets one stdout handler. The handlers are
tracked so a runtime change to `server.log_level` or `server.log_format`
reaches loggers that already exist.
"""

import logging
import sys
from typing import Dict, Optional

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# logger name -> handler installed by setup_logger
_handlers: Dict[str, logging.Handler] = {}
# loggers created with an explicit level keep it
_pinned_levels = set()


def _server_defaults():
    # Import here: config may still be initializing
    try:
        from report_export.config import SERVER
        return SERVER.log_level, SERVER.log_format
    except ImportError:
        return DEFAULT_LEVEL, DEFAULT_FORMAT


def setup_logger(name: str, level: str = None, log_format: str = None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Log level; follows the server setting when omitted
        log_format: Format string; follows the server setting when omitted
    """
    logger = logging.getLogger(name)
    if name in _handlers:
        return logger

    default_level, default_format = _server_defaults()
    if level:
        _pinned_levels.add(name)
    level = (level or default_level).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(log_format or default_format))
    logger.addHandler(handler)
    logger.setLevel(level)
    _handlers[name] = handler

    return logger


def apply_logging_settings(level: Optional[str] = None, log_format: Optional[str] = None) -> int:
    """
    Push a new level and/or format to every logger from setup_logger.

    Returns how many loggers were updated.
    """
    for name, handler in _handlers.items():
        if level and name not in _pinned_levels:
            logging.getLogger(name).setLevel(level.upper())
        if log_format:
            handler.setFormatter(logging.Formatter(log_format))
    return len(_handlers)
