"""
Log level styles and ANSI color utilities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LogLevel(str, Enum):
    DEBUG = "debug"
    NORMAL = "normal"
    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class LogMedium(str, Enum):
    """Target medium of a formatted message."""

    TERMINAL = "terminal"
    BROWSER = "browser"
    FILE = "file"


@dataclass(frozen=True)
class StyleEntry:
    """Display style of a log level.

    Attributes:
        icon: Glyph shown in front of the namespace
        color_name: Symbolic color name, resolved by ``paint``
        color_rgb: Color used for browser-style CSS tints
    """

    icon: str
    color_name: str
    color_rgb: tuple[int, int, int]


STYLES: dict[LogLevel, StyleEntry] = {
    LogLevel.DEBUG: StyleEntry(icon="🔧", color_name="cyan", color_rgb=(100, 100, 100)),
    LogLevel.NORMAL: StyleEntry(icon="📝", color_name="cyan", color_rgb=(0, 128, 255)),
    LogLevel.INFORMATION: StyleEntry(icon="ℹ️ ", color_name="magenta", color_rgb=(255, 100, 150)),
    LogLevel.WARNING: StyleEntry(icon="⚠️ ", color_name="yellow", color_rgb=(200, 100, 30)),
    LogLevel.ERROR: StyleEntry(icon="🚨", color_name="red", color_rgb=(230, 70, 50)),
    LogLevel.FATAL: StyleEntry(icon="🔥", color_name="bgRed", color_rgb=(255, 60, 0)),
}


def style(level: LogLevel | str) -> StyleEntry:
    """Look up the style of a log level."""
    return STYLES[LogLevel(level)]


# =============================================================================
# ANSI Color Codes (for terminal medium)
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "underline": "\033[4m",
    "cyan": "\033[36m",
    "magenta": "\033[35m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "bgRed": "\033[41m",
}


def paint(
    text: str,
    color_name: str,
    *,
    bold: bool = False,
    underline: bool = False,
    enabled: bool = True,
) -> str:
    """Apply ANSI color (and optional emphasis) to text."""
    if not enabled or not text:
        return text
    prefix = COLORS.get(color_name, "")
    if bold:
        prefix += COLORS["bold"]
    if underline:
        prefix += COLORS["underline"]
    return f"{prefix}{text}{COLORS['reset']}"
