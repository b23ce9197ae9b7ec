"""
Logging for ipinvite. Every module asks for its logger with get_logger(__name__). The starting level comes from
IPINVITE_LOG_LEVEL and set_log_level changes it at runtime (the CLI's --log-level).
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from ipinvite.core.formats import CONFIG

__all__ = ["get_logger", "set_log_level", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s]: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.WARNING


def get_logger(name: str, log_level: str = CONFIG.LOG_LEVEL, log_file: Optional[Path] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Return the named logger, configured on first request.

    Args:
        name: Logger name, normally the calling module's __name__
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Unknown names fall back to WARNING
        log_file: Optional file that receives the same records
        format_string: Optional format replacing LOG_FORMAT

    Records go to stderr; stdout is left to command output.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(_level(log_level))
    formatter = logging.Formatter(format_string or LOG_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(stream=sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _loggers[name] = logger
    return logger


def set_log_level(log_level: str) -> None:
    """Change the level of every logger handed out so far"""
    level = _level(log_level)
    for logger in _loggers.values():
        logger.setLevel(level)
