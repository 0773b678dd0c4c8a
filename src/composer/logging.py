from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LEVEL_ENV = "COMPOSER_LOG_LEVEL"

_configured = False


def _ensure_base_logger() -> None:
    global _configured
    if _configured:
        return
    level = os.getenv(LEVEL_ENV, "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    _configured = True


def set_verbose(verbose: bool = True) -> None:
    """Log the task and tool loggers at DEBUG; otherwise leave the configured level."""
    _ensure_base_logger()
    if not verbose:
        return
    for name in ("composer", "buildtasks"):
        logging.getLogger(name).setLevel(logging.DEBUG)


def get_logger(name: str, log_file: Path | None = None) -> logging.Logger:
    """Logger under the shared format; ``log_file`` adds a rotating file copy."""
    _ensure_base_logger()
    logger = logging.getLogger(name)
    if log_file and not any(
        isinstance(h, RotatingFileHandler)
        and h.baseFilename == os.path.abspath(log_file)
        for h in logger.handlers
    ):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
