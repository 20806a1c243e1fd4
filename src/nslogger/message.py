"""
Log message model.

A ``LogMessage`` is built once per log call and medium. It carries the level
style, the caller namespace, the namespace "thread" and the title, body and
optional elapsed-time timestamp derived from the raw call arguments.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .inspector import RECORD, SEQUENCE, classify, inspect_value
from .styles import LogLevel, LogMedium, style

if TYPE_CHECKING:
    from .config import LoggerConfiguration
    from .registry import ConfigurationRegistry


class Stopwatch:
    """Cursor for the elapsed time between timestamped messages.

    One stopwatch is shared by every logger of a runtime, so the elapsed time
    is measured across namespaces, from one timestamped message to the next.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._last: float | None = None
        self._lock = threading.Lock()

    def lap(self) -> float:
        """Milliseconds since the previous lap (0.0 on the first one)."""
        with self._lock:
            now = self._clock()
            if self._last is None:
                self._last = now
            elapsed = (now - self._last) * 1000.0
            self._last = now
            return elapsed

    def reset(self) -> None:
        with self._lock:
            self._last = None


def indent_width(medium: LogMedium, namespace: str) -> int:
    """Width of the message prefix that structured values are aligned to."""
    if medium == LogMedium.BROWSER:
        return len(f"i  [{namespace}]  ")
    return len(f"i [{namespace}] ")


def render_sequence(values: Any, indent: int) -> str:
    pad = " " * indent
    item_pad = " " * (indent + 2)
    items = f",\n{item_pad}".join(str(value) for value in values)
    return f"\n{pad}[\n{item_pad}{items}\n{pad}]"


def render_record(value: Any, indent: int) -> str:
    return f"\n{inspect_value(value)}".replace("\n", "\n" + " " * indent)


def expand_arguments(args: Sequence[Any], indent: int) -> list[Any]:
    """Replace structured arguments by indented text blocks.

    The argument in front of a structured one is turned into a string. The
    input sequence is left untouched.
    """
    values = list(args)
    for index, value in enumerate(args):
        kind = classify(value)
        if kind == SEQUENCE:
            values[index] = render_sequence(value, indent)
        elif kind == RECORD:
            values[index] = render_record(value, indent)
        else:
            continue
        if index > 0:
            values[index - 1] = str(values[index - 1])
    return values


def split_title_body(values: Sequence[Any]) -> tuple[str, str]:
    """Split expanded arguments into a title and a body.

    With several arguments the first is the title and the rest, joined by
    spaces, the body. A single argument, a falsy title or a title equal to the
    body all end up as a title with an empty body.
    """
    title: Any = ""
    rest = list(values)
    if len(rest) > 1:
        title = rest.pop(0)

    body = " ".join(str(value) for value in rest)

    if not title:
        title = body
    title = str(title)

    # Compared as text: 5 and "5" count as equal.
    if title == body:
        body = ""

    return title, body


@dataclass(frozen=True)
class LogMessage:
    medium: LogMedium
    level: LogLevel
    icon: str
    color_rgb: tuple[int, int, int]
    color_name: str
    namespace: str
    thread: int
    title: str
    body: str
    timestamp: str

    @classmethod
    def build(
        cls,
        medium: LogMedium,
        level: LogLevel | str,
        args: Sequence[Any],
        configuration: LoggerConfiguration,
        registry: ConfigurationRegistry,
        stopwatch: Stopwatch,
    ) -> LogMessage:
        level = LogLevel(level)
        medium = LogMedium(medium)
        entry = style(level)

        namespace = configuration.namespace

        # Alternate between namespaces by their registration order. A namespace
        # that is not registered has index -1, and -1 & 1 == 1.
        thread = registry.index_of(namespace) & 1

        values = expand_arguments(args, indent_width(medium, namespace))
        title, body = split_title_body(values)

        timestamp = f"{stopwatch.lap():.4f} ms" if configuration.timestamp else ""

        return cls(
            medium=medium,
            level=level,
            icon=entry.icon,
            color_rgb=entry.color_rgb,
            color_name=entry.color_name,
            namespace=namespace,
            thread=thread,
            title=title,
            body=body,
            timestamp=timestamp,
        )
