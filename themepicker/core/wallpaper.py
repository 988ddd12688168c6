"""Pick a wallpaper from the active theme and hand it to hyprpaper."""

from __future__ import annotations

import logging
from pathlib import Path
import random
import time
from typing import Callable

from themepicker.core.processes import (
    DEFAULT_ATTEMPTS,
    DEFAULT_DELAY_SECONDS,
    CommandResult,
    CommandRunner,
    invoke_with_retry,
    stdout_is_empty,
    stdout_is_ok,
)
from themepicker.errors import ErrorCode, ThemeError, io_error

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp"}


def list_images(directory: Path) -> list[Path]:
    """Return image files directly inside ``directory``, sorted by name."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise io_error("Failed to read theme directory", directory, exc) from exc
    return [path for path in entries if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS]


def pick_random_image(directory: Path, rng: random.Random | None = None) -> Path:
    """Uniformly choose one image from ``directory``."""
    images = list_images(directory)
    if not images:
        raise ThemeError(ErrorCode.NO_IMAGES_FOUND, path=directory)
    return (rng or random).choice(images)


def _wallpaper_arg(image: Path) -> str:
    # Empty monitor name: apply to every monitor.
    return f",{image}"


def change_wallpaper(
    runner: CommandRunner,
    wallpapers_dir: Path,
    *,
    rng: random.Random | None = None,
    attempts: int = DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> Path:
    """Set a random wallpaper with ``hyprctl hyprpaper wallpaper``.

    Succeeds when hyprctl prints nothing. Used by the theme switch.
    """
    image = pick_random_image(wallpapers_dir, rng)
    _invoke(runner, "wallpaper", image, stdout_is_empty, attempts, delay, sleep)
    return image


def reload_wallpaper(
    runner: CommandRunner,
    wallpapers_dir: Path,
    *,
    rng: random.Random | None = None,
    attempts: int = DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> Path:
    """Reload a random wallpaper with ``hyprctl hyprpaper reload``.

    Succeeds when hyprctl answers ``ok``. Used by ``themectl wallpaper reload``.
    """
    image = pick_random_image(wallpapers_dir, rng)
    _invoke(runner, "reload", image, stdout_is_ok, attempts, delay, sleep)
    return image


def _invoke(
    runner: CommandRunner,
    action: str,
    image: Path,
    accept: Callable[[str], bool],
    attempts: int,
    delay: float,
    sleep: Callable[[float], None],
) -> CommandResult:
    logger.info("setting wallpaper %s via hyprpaper %s", image, action)
    try:
        return invoke_with_retry(
            runner,
            ["hyprctl", "hyprpaper", action, _wallpaper_arg(image)],
            accept=accept,
            attempts=attempts,
            delay=delay,
            sleep=sleep,
        )
    except ThemeError as exc:
        exc.message = f"Failed to set wallpaper: {exc.message}"
        raise
