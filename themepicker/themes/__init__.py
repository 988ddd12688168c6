"""Theme directory discovery exports."""

from themepicker.themes.loader import load_theme_directory
from themepicker.themes.models import ThemeDirectory
from themepicker.themes.registry import ThemeRegistry

__all__ = [
    "ThemeDirectory",
    "ThemeRegistry",
    "load_theme_directory",
]
