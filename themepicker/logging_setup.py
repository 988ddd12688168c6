"""Logging configuration shared by the CLI and the picker window."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

LOGGER_NAME = "themepicker"
LOG_FILE_NAME = "theme-picker.log"
_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(log_dir: Path | None, *, verbose: bool = False) -> logging.Logger:
    """Attach a rotating file handler (and a stderr handler when verbose).

    Calling it again is a no-op once handlers are installed.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    formatter = logging.Formatter(_FORMAT)

    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_dir / LOG_FILE_NAME,
                maxBytes=512_000,
                backupCount=3,
                encoding="utf-8",
            )
        except OSError as exc:
            sys.stderr.write(f"warning: file logging disabled: {exc}\n")
        else:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    if verbose:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(formatter)
        logger.addHandler(stream)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
