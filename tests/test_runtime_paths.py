from __future__ import annotations

from pathlib import Path

import pytest

from themepicker import runtime_paths
from themepicker.errors import ErrorCode, ThemeError


def test_home_path_reads_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert runtime_paths.home_path() == tmp_path


@pytest.mark.parametrize("value", ["", "   "])
def test_home_path_blank(value: str, monkeypatch) -> None:
    monkeypatch.setenv("HOME", value)
    with pytest.raises(ThemeError) as excinfo:
        runtime_paths.home_path()
    assert excinfo.value.code is ErrorCode.MISSING_ENVIRONMENT
    assert str(excinfo.value) == "Could not get home dir: HOME is not set."


def test_home_path_unset(monkeypatch) -> None:
    monkeypatch.delenv("HOME", raising=False)
    with pytest.raises(ThemeError):
        runtime_paths.home_path()


def test_derived_locations() -> None:
    home = Path("/home/ada")
    root = runtime_paths.themes_root(home)
    assert root == Path("/home/ada/.local/share/theme-picker")
    assert runtime_paths.current_theme_link(root) == root / "current"
    assert runtime_paths.current_wallpapers_dir(root) == root / "current" / "wallpapers"
    assert runtime_paths.settings_path(home) == Path("/home/ada/.config/theme-picker/config.yaml")
    assert runtime_paths.log_dir(home) == Path("/home/ada/.local/state/theme-picker/logs")
    assert runtime_paths.theme_variables_path(root / "nord").name == "theme-variables.scss"
