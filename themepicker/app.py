"""QApplication bootstrap for the theme picker window."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from themepicker.config.settings import AppSettings
from themepicker.core.switcher import ThemeSwitcher
from themepicker.errors import ThemeError, format_error_for_user
from themepicker.logging_setup import configure_logging
from themepicker.themes.registry import ThemeRegistry
from themepicker.ui.picker_window import ThemePickerWindow


def run_app() -> int:
    """Initialize and run the picker."""
    try:
        settings = AppSettings.load()
    except ThemeError as exc:
        print(f"Error: {format_error_for_user(exc)}", file=sys.stderr)
        return 1

    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("Theme Picker")
    logger = configure_logging(settings.log_dir)
    logger.info("startup themes_root=%s", settings.themes_root)

    registry = ThemeRegistry(settings.themes_root)
    window = ThemePickerWindow(registry, ThemeSwitcher(settings))
    errors = registry.load_errors()
    if errors:
        logger.warning("theme load warnings: %s", " | ".join(errors[:6]))
    window.show()

    return app.exec()
