"""Logging setup for the job-fit CLI and engine.

Library modules only call `get_logger`; handlers are installed once, by the
CLI, through `configure_logging`.
"""

import logging
import sys

LOGGER_NAME = "job_fit"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks the stderr handler installed by configure_logging.
_HANDLER_FLAG = "_job_fit_handler"


def _level(name: str | None) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None) -> logging.Logger:
    """Install (or re-level) the stderr handler on the `job_fit` logger.

    Unknown level names fall back to INFO. Calling again only changes the
    level; it never stacks a second handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    log_level = _level(level)
    logger.setLevel(log_level)

    handler = next(
        (h for h in logger.handlers if getattr(h, _HANDLER_FLAG, False)), None
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)
        logger.propagate = False
    handler.setLevel(log_level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger `job_fit.<name>`."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Drop all handlers and restore propagation (test isolation)."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
