"""Theme directory discovery."""

from __future__ import annotations

from pathlib import Path

from themepicker.errors import ThemeError
from themepicker.themes.loader import load_theme_directory
from themepicker.themes.models import ThemeDirectory

_MAX_THEME_DIR_CANDIDATES = 512


class ThemeRegistry:
    """Lists the themes installed under one root directory.

    Nothing is cached between ``reload()`` calls; callers reload when they
    want to see changes on disk.
    """

    def __init__(self, root: Path) -> None:
        self._root = root
        self._themes: dict[str, ThemeDirectory] = {}
        self._load_errors: list[str] = []

    @property
    def root(self) -> Path:
        return self._root

    def reload(self) -> None:
        self._themes = {}
        self._load_errors = []
        if not self._root.exists():
            self._load_errors.append(f"Themes directory does not exist: {self._root}")
            return
        try:
            entries = sorted(self._root.iterdir())
        except OSError as exc:
            self._load_errors.append(f"Failed to read files in the config directory: {exc}")
            return

        # The "current" link and stray files are skipped quietly.
        candidates = [path for path in entries if path.is_dir() and not path.is_symlink()]
        if len(candidates) > _MAX_THEME_DIR_CANDIDATES:
            self._load_errors.append(
                f"Theme directory limit exceeded in {self._root}; "
                f"only first {_MAX_THEME_DIR_CANDIDATES} folders were scanned."
            )
            candidates = candidates[:_MAX_THEME_DIR_CANDIDATES]

        for theme_dir in candidates:
            try:
                theme = load_theme_directory(theme_dir)
            except ThemeError as exc:
                self._load_errors.append(str(exc))
                continue
            self._themes[theme.dir_name] = theme

    def list_themes(self) -> list[ThemeDirectory]:
        return sorted(self._themes.values(), key=lambda theme: (theme.name, theme.dir_name))

    def get_theme(self, dir_name: str) -> ThemeDirectory | None:
        return self._themes.get(dir_name)

    def load_errors(self) -> list[str]:
        return list(self._load_errors)
