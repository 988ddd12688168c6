"""Persist rendered configuration files."""

from __future__ import annotations

import logging
from pathlib import Path

from themepicker.errors import io_error

logger = logging.getLogger(__name__)


def write_config(path: Path, text: str) -> Path:
    """Write ``text`` to ``path``, creating missing parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise io_error("Failed to write config", path, exc) from exc
    logger.info("wrote %s", path)
    return path


def read_template(path: Path) -> str:
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise io_error("Could not read template", path, exc) from exc
