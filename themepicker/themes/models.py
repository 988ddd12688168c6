"""Theme directory models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from themepicker import runtime_paths


@dataclass(frozen=True, slots=True)
class ThemeDirectory:
    """A theme folder under the themes root, described by its meta.toml."""

    dir_name: str
    name: str
    description: str
    path: Path

    @property
    def variables_path(self) -> Path:
        return runtime_paths.theme_variables_path(self.path)

    @property
    def wallpapers_dir(self) -> Path:
        return self.path / runtime_paths.WALLPAPERS_DIR
