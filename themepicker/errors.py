"""Error codes and error handling utilities for theme-picker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for theme-picker operations."""

    # Environment and file system errors
    IO_ERROR = auto()
    MISSING_ENVIRONMENT = auto()
    CONFIG_INVALID = auto()

    # Theme compilation errors
    NO_VARIABLES_FOUND = auto()
    IMPORT_CYCLE = auto()
    INVALID_COLOR_FORMAT = auto()
    COLOR_CONVERSION_FAILED = auto()
    THEME_INVALID = auto()

    # Activation errors
    SYMLINK_REMOVAL_FAILED = auto()
    PROCESS_SPAWN_FAILED = auto()
    COMMAND_FAILED = auto()
    NO_IMAGES_FOUND = auto()
    EXHAUSTED_RETRIES = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.IO_ERROR: "A file could not be read or written.",
    ErrorCode.MISSING_ENVIRONMENT: "Could not get home dir: HOME is not set.",
    ErrorCode.CONFIG_INVALID: "The configuration file is invalid.",

    ErrorCode.NO_VARIABLES_FOUND: "No SCSS variables found.",
    ErrorCode.IMPORT_CYCLE: "The theme variables import themselves.",
    ErrorCode.INVALID_COLOR_FORMAT: "The value is not an rgba(r, g, b, a) color.",
    ErrorCode.COLOR_CONVERSION_FAILED: "A template placeholder could not be converted to a color.",
    ErrorCode.THEME_INVALID: "The theme directory is invalid.",

    ErrorCode.SYMLINK_REMOVAL_FAILED: "Failed to remove current theme dir.",
    ErrorCode.PROCESS_SPAWN_FAILED: "An external command could not be started.",
    ErrorCode.COMMAND_FAILED: "An external command reported an error.",
    ErrorCode.NO_IMAGES_FOUND: "No image files found in theme directory.",
    ErrorCode.EXHAUSTED_RETRIES: "The command did not succeed after several attempts.",
}


@dataclass
class ThemeError(Exception):
    """Base exception for theme-picker with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f" ({self.path})")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f" [{details_str}]")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
        }


def io_error(action: str, path: Path, exc: Exception) -> ThemeError:
    """Wrap an OSError (or decode error) raised while touching ``path``."""
    reason = getattr(exc, "strerror", None) or exc
    return ThemeError(
        ErrorCode.IO_ERROR,
        message=f"{action}: {reason}",
        path=path,
    )


def format_error_for_user(error: ThemeError | Exception) -> str:
    """Format an error as the single line printed on stderr."""
    if isinstance(error, ThemeError):
        return " ".join(str(error).split())
    return f"{type(error).__name__}: {error}"
