"""rgba() to hex color conversion."""

from __future__ import annotations

from dataclasses import dataclass

from themepicker.errors import ErrorCode, ThemeError


@dataclass(frozen=True, slots=True)
class RGBColor:
    """An opaque 8-bit RGB color. Alpha is never carried over from the source."""

    red: int
    green: int
    blue: int

    def hex(self) -> str:
        """Return six lowercase hex digits, ``rrggbb``, without a leading ``#``."""
        return f"{self.red:02x}{self.green:02x}{self.blue:02x}"


def _parse_channel(token: str) -> int | None:
    token = token.strip()
    if token.startswith("+"):
        token = token[1:]
    if not token or not token.isascii() or not token.isdigit():
        return None
    value = int(token)
    if value > 255:
        return None
    return value


def parse_rgba(text: str) -> RGBColor:
    """Parse ``rgba(r, g, b, a)`` into an opaque color.

    Tokens that are not 8-bit unsigned integers are dropped; the first three
    that remain become red, green and blue.
    """
    body = text.replace("rgba(", "").replace(")", "")
    channels = [value for value in map(_parse_channel, body.split(",")) if value is not None]
    if len(channels) < 3:
        raise ThemeError(
            ErrorCode.INVALID_COLOR_FORMAT,
            message=f"Invalid string: {text}",
        )
    return RGBColor(channels[0], channels[1], channels[2])


def to_hex(text: str) -> str:
    """Convert ``rgba(r, g, b, a)`` to ``rrggbb`` (lowercase)."""
    return parse_rgba(text).hex()
