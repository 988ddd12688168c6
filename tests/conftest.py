"""Shared fixtures: a temporary HOME, theme folders and a fake command runner."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

from themepicker.config.settings import AppSettings
from themepicker.core.processes import CommandResult
from themepicker.errors import ErrorCode, ThemeError

DEFAULT_VARIABLES = """\
// Nord
$background: rgba(46, 52, 64, 1);
$foreground: rgba(216, 222, 233, 1);
$accent: rgba(136, 192, 208, 0.8);
$gaps: 5 10 5 10;
"""

KITTY_TEMPLATE = """\
background #__background__
foreground #__foreground__
cursor #__accent__
font_size 11
"""


class FakeRunner:
    """Records commands instead of running them.

    ``ln -s`` really creates the link so later steps can follow ``current``.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[str, ...]]] = []
        self.stdout: dict[str, list[str]] = {}
        self.returncodes: dict[str, int] = {}
        self.missing: set[str] = set()

    def run(self, args) -> CommandResult:
        argv = tuple(str(arg) for arg in args)
        self.calls.append(("run", argv))
        self._check_missing(argv)
        returncode = self.returncodes.get(argv[0], 0)
        if argv[0] == "ln" and returncode == 0:
            os.symlink(argv[2], argv[3])
        return CommandResult(argv, returncode, self._next_stdout(argv[0]), "")

    def spawn(self, args) -> None:
        argv = tuple(str(arg) for arg in args)
        self.calls.append(("spawn", argv))
        self._check_missing(argv)

    def programs(self) -> list[str]:
        return [argv[0] for _kind, argv in self.calls]

    def calls_to(self, program: str) -> list[tuple[str, ...]]:
        return [argv for _kind, argv in self.calls if argv[0] == program]

    def _next_stdout(self, program: str) -> str:
        outputs = self.stdout.get(program)
        if not outputs:
            return ""
        if len(outputs) > 1:
            return outputs.pop(0)
        return outputs[0]

    def _check_missing(self, argv: tuple[str, ...]) -> None:
        if argv[0] in self.missing:
            raise ThemeError(
                ErrorCode.PROCESS_SPAWN_FAILED,
                message=f"Failed to run {argv[0]}: No such file or directory",
            )


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps) -> Callable[[float], None]:
    return sleeps.append


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def settings(home) -> AppSettings:
    app_settings = AppSettings(home)
    app_settings.themes_root.mkdir(parents=True)
    app_settings.kitty_template.parent.mkdir(parents=True)
    app_settings.kitty_template.write_text(KITTY_TEMPLATE, encoding="utf-8")
    return app_settings


@pytest.fixture
def make_theme(settings) -> Callable[..., Path]:
    def _make(
        dir_name: str,
        *,
        name: str | None = None,
        description: str = "A test theme",
        variables: str = DEFAULT_VARIABLES,
        wallpapers: tuple[str, ...] = ("one.png", "two.jpg"),
    ) -> Path:
        theme_dir = settings.themes_root / dir_name
        theme_dir.mkdir(parents=True)
        (theme_dir / "theme-variables.scss").write_text(variables, encoding="utf-8")
        (theme_dir / "meta.toml").write_text(
            f'name = "{name or dir_name.title()}"\ndescription = "{description}"\n',
            encoding="utf-8",
        )
        if wallpapers:
            wallpaper_dir = theme_dir / "wallpapers"
            wallpaper_dir.mkdir()
            for image in wallpapers:
                (wallpaper_dir / image).write_bytes(b"\x89PNG")
        return theme_dir

    return _make
