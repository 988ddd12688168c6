"""Application settings backed by an optional YAML file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from themepicker import runtime_paths
from themepicker.errors import ErrorCode, ThemeError

DEFAULT_WALLPAPER_ATTEMPTS = 5
DEFAULT_WALLPAPER_DELAY = 1.0


class AppSettings:
    """Resolves target paths and retry policy.

    Every value has a default derived from the home directory; entries in
    ``~/.config/theme-picker/config.yaml`` override them.
    """

    def __init__(self, home: Path, overrides: Mapping[str, Any] | None = None) -> None:
        self._home = home
        self._values: dict[str, Any] = dict(overrides or {})

    @classmethod
    def load(cls, home: Path | None = None) -> AppSettings:
        """Build settings for ``home`` (default: $HOME), reading the YAML file if present."""
        home = home if home is not None else runtime_paths.home_path()
        path = runtime_paths.settings_path(home)
        if not path.exists():
            return cls(home)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ThemeError(ErrorCode.IO_ERROR, message=f"Could not read file: {exc}", path=path) from exc
        except yaml.YAMLError as exc:
            raise ThemeError(ErrorCode.CONFIG_INVALID, path=path, details={"yaml": exc}) from exc
        if data is None:
            return cls(home)
        if not isinstance(data, dict):
            raise ThemeError(
                ErrorCode.CONFIG_INVALID,
                message="Expected a mapping at the top of the configuration file.",
                path=path,
            )
        return cls(home, data)

    @property
    def home(self) -> Path:
        return self._home

    # -- theme sources --

    @property
    def themes_root(self) -> Path:
        return self._path("themes_root", runtime_paths.themes_root(self._home))

    @property
    def current_theme_link(self) -> Path:
        return runtime_paths.current_theme_link(self.themes_root)

    @property
    def wallpapers_dir(self) -> Path:
        return runtime_paths.current_wallpapers_dir(self.themes_root)

    # -- generated artifacts --

    @property
    def hypr_config(self) -> Path:
        return self._path("hypr_config", self._home / ".config/hypr/style-variables.conf")

    @property
    def kitty_theme(self) -> Path:
        return self._path("kitty_theme", self._home / ".config/kitty/theme.conf")

    @property
    def kitty_template(self) -> Path:
        return self._path("kitty_template", self._home / ".config/kitty/theme-template.conf")

    @property
    def waybar_style_source(self) -> Path:
        return self._path("waybar_style_source", self.themes_root / "waybar-style.scss")

    @property
    def waybar_style_target(self) -> Path:
        return self._path("waybar_style_target", self._home / ".config/waybar/style.css")

    # -- wallpaper retry policy --

    @property
    def wallpaper_attempts(self) -> int:
        raw = self._values.get("wallpaper_attempts", DEFAULT_WALLPAPER_ATTEMPTS)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return DEFAULT_WALLPAPER_ATTEMPTS
        return value if value >= 1 else DEFAULT_WALLPAPER_ATTEMPTS

    @property
    def wallpaper_delay(self) -> float:
        raw = self._values.get("wallpaper_delay", DEFAULT_WALLPAPER_DELAY)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return DEFAULT_WALLPAPER_DELAY
        return value if value >= 0 else DEFAULT_WALLPAPER_DELAY

    # -- helpers --

    @property
    def log_dir(self) -> Path:
        return runtime_paths.log_dir(self._home)

    def _path(self, key: str, default: Path) -> Path:
        raw = self._values.get(key)
        if not isinstance(raw, str) or not raw.strip():
            return default
        text = raw.strip()
        if text.startswith("~"):
            # Expand against the configured home, not the process environment.
            return (self._home / text[1:].lstrip("/")).absolute()
        return Path(text).absolute()
