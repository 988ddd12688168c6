"""Command-line entry point: ``themectl``."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Callable, Sequence

from themepicker.config.settings import AppSettings
from themepicker.core.processes import CommandRunner
from themepicker.core.switcher import ThemeSwitcher
from themepicker.core.wallpaper import reload_wallpaper
from themepicker.errors import ThemeError, format_error_for_user
from themepicker.logging_setup import configure_logging
from themepicker.themes.registry import ThemeRegistry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="themectl", description="Desktop theme manager")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    theme = commands.add_parser("theme", help="Apply a theme by directory name")
    theme.add_argument("name", help="Theme directory name under the themes root")

    wallpaper = commands.add_parser("wallpaper", help="Wallpaper actions")
    wallpaper_actions = wallpaper.add_subparsers(dest="action", required=True)
    wallpaper_actions.add_parser("reload", help="Reload a random wallpaper from the current theme")

    commands.add_parser("list", help="List installed themes")
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    runner: CommandRunner | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = AppSettings.load()
    except ThemeError as exc:
        print(f"Error: {format_error_for_user(exc)}", file=sys.stderr)
        return 1
    configure_logging(settings.log_dir, verbose=args.verbose)
    runner = runner or CommandRunner()

    if args.command == "theme":
        return _apply_theme(settings, runner, args.name, sleep)
    if args.command == "wallpaper":
        return _reload_wallpaper(settings, runner, sleep)
    return _list_themes(settings)


def _apply_theme(
    settings: AppSettings,
    runner: CommandRunner,
    name: str,
    sleep: Callable[[float], None],
) -> int:
    switcher = ThemeSwitcher(settings, runner, sleep=sleep)
    report = switcher.switch(switcher.theme_path(name))
    for warning in report.warnings:
        print(f"warning: {format_error_for_user(warning)}", file=sys.stderr)
    if report.error is not None:
        print(f"Error setting theme: {format_error_for_user(report.error)}", file=sys.stderr)
        return 1
    print("The theme was set successfully")
    return 0


def _reload_wallpaper(
    settings: AppSettings,
    runner: CommandRunner,
    sleep: Callable[[float], None],
) -> int:
    try:
        reload_wallpaper(
            runner,
            settings.wallpapers_dir,
            attempts=settings.wallpaper_attempts,
            delay=settings.wallpaper_delay,
            sleep=sleep,
        )
    except ThemeError as exc:
        logger.error("wallpaper reload failed: %s", exc)
        print(f"Error reloading wallpaper: {format_error_for_user(exc)}", file=sys.stderr)
        return 1
    print("The wallpaper was reloaded")
    return 0


def _list_themes(settings: AppSettings) -> int:
    registry = ThemeRegistry(settings.themes_root)
    registry.reload()
    for message in registry.load_errors():
        logger.warning("theme load warning: %s", message)
    for theme in registry.list_themes():
        print(f"{theme.dir_name}\t{theme.name}\t{theme.description}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
