"""Well-known filesystem locations, all derived from HOME."""

from __future__ import annotations

import os
from pathlib import Path

from themepicker.errors import ErrorCode, ThemeError

APP_DIR_NAME = "theme-picker"
CURRENT_LINK_NAME = "current"
THEME_VARIABLES_FILE = "theme-variables.scss"
THEME_META_FILE = "meta.toml"
WALLPAPERS_DIR = "wallpapers"


def home_path() -> Path:
    """Return the user's home directory from the HOME environment variable.

    Raises ``ThemeError(MISSING_ENVIRONMENT)`` when HOME is unset or empty.
    """
    home = os.environ.get("HOME", "").strip()
    if not home:
        raise ThemeError(ErrorCode.MISSING_ENVIRONMENT)
    return Path(home)


def themes_root(home: Path) -> Path:
    """Directory holding one folder per theme plus the ``current`` link."""
    return home / ".local" / "share" / APP_DIR_NAME


def settings_path(home: Path) -> Path:
    return home / ".config" / APP_DIR_NAME / "config.yaml"


def log_dir(home: Path) -> Path:
    return home / ".local" / "state" / APP_DIR_NAME / "logs"


def current_theme_link(root: Path) -> Path:
    return root / CURRENT_LINK_NAME


def theme_variables_path(theme_dir: Path) -> Path:
    return theme_dir / THEME_VARIABLES_FILE


def current_wallpapers_dir(root: Path) -> Path:
    return current_theme_link(root) / WALLPAPERS_DIR
