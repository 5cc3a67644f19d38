"""
Basic logging configuration for the application.

``setup_logging`` configures the root logger with a console handler and
an optional file handler.  The format includes the timestamp, logger
name, log level and message.

The function may run several times in one process (every ``create_app``
call does, the tests build many apps).  Handlers installed here are
tagged so that a later call reuses the console handler, reapplies the
level and swaps the file handler when ``LOG_FILE`` changes.  Handlers
added by anything else (pytest's ``caplog`` for instance) are left alone.
"""

import logging
from pathlib import Path
from typing import Optional


FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attribute marking the handlers owned by this module.
_OWNER_ATTR = "_school_schedule_handler"


def _owned(logger: logging.Logger, kind: str) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if getattr(handler, _OWNER_ATTR, None) == kind:
            return handler
    return None


def _install(logger: logging.Logger, handler: logging.Handler, kind: str) -> None:
    handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _OWNER_ATTR, kind)
    logger.addHandler(handler)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, any file handler
        installed by a previous call is closed and removed.
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if _owned(logger, "console") is None:
        _install(logger, logging.StreamHandler(), "console")

    current = _owned(logger, "file")
    target = str(Path(logfile).resolve()) if logfile else None
    if current is not None and getattr(current, "baseFilename", None) == target:
        return
    if current is not None:
        logger.removeHandler(current)
        current.close()
    if target:
        _install(logger, logging.FileHandler(target, encoding="utf-8"), "file")
