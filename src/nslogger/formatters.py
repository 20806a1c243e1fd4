"""
Log message formatters for the terminal, browser-style consoles and log files.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .message import LogMessage, Stopwatch
from .styles import LogLevel, LogMedium, paint

if TYPE_CHECKING:
    from .config import LoggerConfiguration
    from .registry import ConfigurationRegistry

BROWSER_TEMPLATE = "%s %c %s | %c %c%s%c %c%s%c %s"

_DIRECTIVE = re.compile(r"%[sc]")


@dataclass(frozen=True)
class BrowserMessage:
    """A console template with its substitution arguments.

    ``%s`` slots take text, ``%c`` slots take CSS declarations applying to the
    text that follows. Iterating yields the template followed by the
    arguments, ready to be spread into a ``console.log`` style call.
    """

    template: str
    arguments: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        yield self.template
        yield from self.arguments

    def to_plain(self) -> str:
        """Substitute the text slots and drop the style directives."""
        arguments = iter(self.arguments)

        def substitute(match: re.Match[str]) -> str:
            value = next(arguments, "")
            return value if match.group() == "%s" else ""

        return _DIRECTIVE.sub(substitute, self.template).strip()

    def to_html(self) -> str:
        """Render the template as HTML, each ``%c`` opening a styled span."""
        arguments = iter(self.arguments)
        parts: list[str] = []
        open_spans = 0
        position = 0
        for match in _DIRECTIVE.finditer(self.template):
            parts.append(html.escape(self.template[position : match.start()]))
            position = match.end()
            value = next(arguments, "")
            if match.group() == "%s":
                parts.append(html.escape(value))
                continue
            if open_spans:
                parts.append("</span>")
                open_spans -= 1
            if value:
                parts.append(f'<span style="{html.escape(value)}">')
                open_spans += 1
        parts.append(html.escape(self.template[position:]))
        parts.append("</span>" * open_spans)
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_plain()


def _css(rgb: tuple[int, int, int], background: float, foreground: float, weight: str = "normal") -> str:
    color = " ".join(str(channel) for channel in rgb)
    return (
        f"background-color: rgb({color} / {background}); color: rgb({color} / {foreground}); "
        f"padding: 0 0px; font-weight: {weight}"
    )


class MessageFormatter:
    """Renders log calls of one logger into medium-specific output.

    Args:
        configuration: Configuration of the logger the calls belong to
        registry: Registry the namespace thread is looked up in
        stopwatch: Shared elapsed-time cursor
        use_color: Apply ANSI styles to terminal output
    """

    def __init__(
        self,
        configuration: LoggerConfiguration,
        registry: ConfigurationRegistry,
        stopwatch: Stopwatch,
        *,
        use_color: bool = True,
    ) -> None:
        self.configuration = configuration
        self.registry = registry
        self.stopwatch = stopwatch
        self.use_color = use_color

    def build(self, medium: LogMedium, level: LogLevel | str, args: Sequence[Any]) -> LogMessage:
        return LogMessage.build(medium, level, args, self.configuration, self.registry, self.stopwatch)

    def format(self, medium: LogMedium | str, level: LogLevel | str, args: Sequence[Any]) -> str | BrowserMessage:
        medium = LogMedium(medium)
        message = self.build(medium, level, args)

        if medium == LogMedium.BROWSER:
            return self.format_browser(message)
        if medium == LogMedium.FILE:
            return self.format_file(message)
        return self.format_terminal(message)

    def format_terminal(self, message: LogMessage) -> str:
        color = message.color_name
        enabled = self.use_color
        parts = [
            message.icon,
            paint(message.namespace, color, underline=not message.thread, enabled=enabled),
            "|",
            message.title and paint(message.title, color, bold=True, enabled=enabled),
            message.body and paint(message.body, color, enabled=enabled),
            message.timestamp,
        ]
        return " ".join(part for part in parts if part).strip()

    @staticmethod
    def format_browser(message: LogMessage) -> BrowserMessage:
        rgb = message.color_rgb
        arguments = (
            message.icon,
            _css(rgb, 0.2, 0.8),
            message.namespace,
            "",
            message.title and _css(rgb, 0.0, 1.0, "bold"),
            message.title,
            "",
            message.body and _css(rgb, 0.1, 1.0),
            message.body,
            message.timestamp and _css(rgb, 0.0, 0.5),
            message.timestamp,
        )
        return BrowserMessage(template=BROWSER_TEMPLATE, arguments=arguments)

    @staticmethod
    def format_file(message: LogMessage) -> str:
        parts = [
            message.level.value.upper(),
            message.medium.value.capitalize(),
            "|",
            message.namespace,
            message.title,
            message.body,
        ]
        return " ".join(part for part in parts if part).strip()
