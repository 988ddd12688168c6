"""Theme activation pipeline.

A switch walks a fixed table of steps. Each step belongs to one state of the
pipeline and is either fatal (an error ends the switch in ``FAILED``) or
best-effort (an error is logged, kept as a warning, and the switch goes on).
Nothing is rolled back: a failure after files were written leaves them in
place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import os
from pathlib import Path
import random
import time
from typing import Callable

from themepicker import runtime_paths
from themepicker.config.settings import AppSettings
from themepicker.core.processes import CommandRunner
from themepicker.core.renderer import render_style_variables, render_terminal_theme
from themepicker.core.resolver import VariableTable, resolve_variables
from themepicker.core.wallpaper import change_wallpaper
from themepicker.core.writer import read_template, write_config
from themepicker.errors import ErrorCode, ThemeError

logger = logging.getLogger(__name__)


class SwitchState(Enum):
    IDLE = "idle"
    RESOLVING_VARIABLES = "resolving-variables"
    RENDERING_CONFIGS = "rendering-configs"
    WRITING_FILES = "writing-files"
    UPDATING_SYMLINK = "updating-symlink"
    RELOADING_CONSUMERS = "reloading-consumers"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SwitchReport:
    """What happened during one theme activation."""

    theme_dir: Path
    state: SwitchState = SwitchState.IDLE
    history: list[SwitchState] = field(default_factory=lambda: [SwitchState.IDLE])
    error: ThemeError | None = None
    warnings: list[ThemeError] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    wallpaper: Path | None = None

    @property
    def ok(self) -> bool:
        return self.state is SwitchState.DONE

    def enter(self, state: SwitchState) -> None:
        if state is not self.state:
            self.state = state
            self.history.append(state)


@dataclass
class _SwitchContext:
    """Working data passed from step to step within a single switch."""

    theme_dir: Path
    variables: VariableTable = field(default_factory=VariableTable)
    rendered: dict[Path, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SwitchStep:
    state: SwitchState
    name: str
    action: Callable[[_SwitchContext, SwitchReport], None]
    fatal: bool


class ThemeSwitcher:
    """Activates a theme directory: regenerate configs, relink, reload consumers."""

    def __init__(
        self,
        settings: AppSettings,
        runner: CommandRunner | None = None,
        *,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings
        self._runner = runner or CommandRunner()
        self._rng = rng
        self._sleep = sleep

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def theme_path(self, dir_name: str) -> Path:
        return self._settings.themes_root / dir_name

    def steps(self) -> list[SwitchStep]:
        return [
            SwitchStep(SwitchState.RESOLVING_VARIABLES, "resolve variables", self._resolve, fatal=True),
            SwitchStep(SwitchState.RENDERING_CONFIGS, "render configs", self._render, fatal=True),
            SwitchStep(SwitchState.WRITING_FILES, "write configs", self._write, fatal=True),
            SwitchStep(SwitchState.UPDATING_SYMLINK, "update current theme link", self._relink, fatal=True),
            SwitchStep(SwitchState.RELOADING_CONSUMERS, "reload kitty", self._reload_terminal, fatal=False),
            SwitchStep(SwitchState.RELOADING_CONSUMERS, "reload waybar", self._reload_status_bar, fatal=False),
            SwitchStep(SwitchState.RELOADING_CONSUMERS, "change wallpaper", self._change_wallpaper, fatal=False),
        ]

    def switch(self, theme_dir: Path) -> SwitchReport:
        """Run every step for ``theme_dir`` and report the outcome."""
        report = SwitchReport(theme_dir=theme_dir)
        context = _SwitchContext(theme_dir=theme_dir)
        logger.info("switching theme to %s", theme_dir)

        for step in self.steps():
            report.enter(step.state)
            try:
                step.action(context, report)
            except ThemeError as exc:
                if step.fatal:
                    logger.error("%s failed: %s", step.name, exc)
                    report.error = exc
                    report.enter(SwitchState.FAILED)
                    return report
                logger.warning("%s failed: %s", step.name, exc)
                report.warnings.append(exc)

        report.enter(SwitchState.DONE)
        logger.info("theme %s applied with %d warning(s)", theme_dir.name, len(report.warnings))
        return report

    # -- fatal steps --

    def _resolve(self, context: _SwitchContext, report: SwitchReport) -> None:
        link = self._settings.current_theme_link
        if context.theme_dir.absolute() == link.absolute():
            # Relinking "current" to itself would leave a self-referencing link.
            raise ThemeError(
                ErrorCode.THEME_INVALID,
                message="The current theme link cannot be activated as a theme",
                path=context.theme_dir,
            )
        context.variables = resolve_variables(runtime_paths.theme_variables_path(context.theme_dir))
        logger.debug("resolved %d variables", len(context.variables))

    def _render(self, context: _SwitchContext, report: SwitchReport) -> None:
        source = runtime_paths.theme_variables_path(context.theme_dir)
        template = read_template(self._settings.kitty_template)
        # Both renders finish before anything is written.
        context.rendered = {
            self._settings.hypr_config: render_style_variables(context.variables, source),
            self._settings.kitty_theme: render_terminal_theme(context.variables, template, source),
        }

    def _write(self, context: _SwitchContext, report: SwitchReport) -> None:
        for path, text in context.rendered.items():
            report.written.append(write_config(path, text))

    def _relink(self, context: _SwitchContext, report: SwitchReport) -> None:
        link = self._settings.current_theme_link
        if os.path.lexists(link):
            try:
                link.unlink()
            except OSError as exc:
                raise ThemeError(
                    ErrorCode.SYMLINK_REMOVAL_FAILED,
                    message=f"Failed to remove current theme dir: {exc.strerror or exc}",
                    path=link,
                ) from exc
        # A relative target would resolve against the link's own directory.
        target = context.theme_dir.absolute()
        self._runner.run(["ln", "-s", str(target), str(link)]).check()

    # -- best-effort consumer reloads --

    def _reload_terminal(self, context: _SwitchContext, report: SwitchReport) -> None:
        self._runner.spawn(["kitty", "@", "--no-response", "load-config"])

    def _reload_status_bar(self, context: _SwitchContext, report: SwitchReport) -> None:
        self._runner.run(
            [
                "sass",
                "--no-source-map",
                str(self._settings.waybar_style_source),
                str(self._settings.waybar_style_target),
            ]
        ).check()
        # pkill exits 1 when no waybar is running; only a spawn failure matters.
        self._runner.run(["pkill", "waybar"])
        self._runner.spawn(["nohup", "waybar"])

    def _change_wallpaper(self, context: _SwitchContext, report: SwitchReport) -> None:
        report.wallpaper = change_wallpaper(
            self._runner,
            self._settings.wallpapers_dir,
            rng=self._rng,
            attempts=self._settings.wallpaper_attempts,
            delay=self._settings.wallpaper_delay,
            sleep=self._sleep,
        )
