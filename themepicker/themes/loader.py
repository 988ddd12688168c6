"""Theme metadata parsing."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping
import tomllib

from themepicker import runtime_paths
from themepicker.errors import ErrorCode, ThemeError
from themepicker.themes.models import ThemeDirectory

_MAX_META_BYTES = 32 * 1024


def load_theme_directory(theme_dir: Path) -> ThemeDirectory:
    """Load ``meta.toml`` from a theme folder.

    Raises ``ThemeError(THEME_INVALID)`` for anything that is not a plain
    directory with a readable ``name``/``description`` record.
    """
    if not theme_dir.is_dir():
        raise ThemeError(ErrorCode.THEME_INVALID, message="Theme path is not a directory", path=theme_dir)
    if theme_dir.is_symlink():
        raise ThemeError(ErrorCode.THEME_INVALID, message="Theme directory cannot be a symlink", path=theme_dir)

    meta_path = theme_dir / runtime_paths.THEME_META_FILE
    data = _load_toml(meta_path)
    return ThemeDirectory(
        dir_name=theme_dir.name,
        name=_required_str(data, "name", meta_path),
        description=_required_str(data, "description", meta_path),
        path=theme_dir,
    )


def _load_toml(path: Path) -> Mapping[str, object]:
    try:
        if path.stat().st_size > _MAX_META_BYTES:
            raise ThemeError(ErrorCode.THEME_INVALID, message="meta.toml is too large", path=path)
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ThemeError(
            ErrorCode.THEME_INVALID,
            message=f"Unable to read meta.toml: {exc.strerror or exc}",
            path=path,
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ThemeError(ErrorCode.THEME_INVALID, message=f"Invalid TOML: {exc}", path=path) from exc


def _required_str(data: Mapping[str, object], key: str, path: Path) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ThemeError(
            ErrorCode.THEME_INVALID,
            message=f"field {key!r} must be a string",
            path=path,
        )
    return value
