"""Color helpers for item shading and label contrast.

Colors travel as ``#rrggbb`` strings (the server assigns them that way);
internally they are 24-bit integers.
"""

from __future__ import annotations

DARK_TEXT = "#000000"
LIGHT_TEXT = "#FFFFFF"
LUMINANCE_THRESHOLD = 128


def parse_hex(color: str) -> int:
    """Parse ``#rrggbb`` (or ``rrggbb``) into a 24-bit integer."""
    value = int(color.lstrip("#"), 16)
    if not 0 <= value <= 0xFFFFFF:
        raise ValueError(f"Not a 24-bit color: {color!r}")
    return value


def to_hex(value: int) -> str:
    return f"#{value & 0xFFFFFF:06x}"


def to_rgb(color: str) -> tuple[int, int, int]:
    n = parse_hex(color)
    return (n >> 16) & 0xFF, (n >> 8) & 0xFF, n & 0xFF


def _shift(color: str, amount: int) -> str:
    if not amount:
        return color
    r, g, b = to_rgb(color)
    r = max(0, min(255, r + amount))
    g = max(0, min(255, g + amount))
    b = max(0, min(255, b + amount))
    return to_hex((r << 16) | (g << 8) | b)


def lighten(color: str, percent: float) -> str:
    return _shift(color, round(2.55 * percent))


def darken(color: str, percent: float) -> str:
    return _shift(color, -round(2.55 * percent))


def luminance(color: str) -> float:
    r, g, b = to_rgb(color)
    return (r * 299 + g * 587 + b * 114) / 1000


def contrast_color(color: str | None) -> str:
    """Text color readable on ``color``: dark on light bases, light on dark."""
    if not color or not color.startswith("#"):
        return LIGHT_TEXT
    try:
        lum = luminance(color)
    except ValueError:
        return LIGHT_TEXT
    return DARK_TEXT if lum >= LUMINANCE_THRESHOLD else LIGHT_TEXT
