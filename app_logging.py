"""Logging setup shared by the clipboard translator modules."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOGGER_NAME = "clipboard_translator"
LOG_FILE_NAME = "clipboard_translator.log"
LOG_MAX_BYTES = 2_097_152
LOG_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def get_logger(log_dir: Optional[Path] = None, *, level: int = logging.INFO) -> logging.Logger:
    """Return the application logger, attaching handlers on first use.

    Module loggers live below ``clipboard_translator`` and propagate here.
    When ``log_dir`` cannot be created only the console handler is attached.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)
    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_dir / LOG_FILE_NAME,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            pass
        else:
            handler.setFormatter(formatter)
            logger.addHandler(handler)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)
    return logger
