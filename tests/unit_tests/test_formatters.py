from __future__ import annotations

from pathlib import Path

import pytest

from conftest import fake_clock
from nslogger.config import LoggerConfiguration
from nslogger.formatters import BROWSER_TEMPLATE, BrowserMessage, MessageFormatter
from nslogger.message import Stopwatch
from nslogger.registry import ConfigurationRegistry
from nslogger.styles import COLORS, LogLevel, LogMedium


def _formatter(
    namespace: str = "app|…/main.py",
    *,
    registered: tuple[str, ...] = ("app|…/main.py",),
    timestamp: bool = False,
    use_color: bool = False,
    stopwatch: Stopwatch | None = None,
) -> MessageFormatter:
    registry = ConfigurationRegistry()
    for name in registered:
        registry.register(name, LoggerConfiguration(namespace=name, logfile=Path("/tmp/app.log")))
    configuration = LoggerConfiguration(namespace=namespace, timestamp=timestamp, logfile=Path("/tmp/app.log"))
    return MessageFormatter(configuration, registry, stopwatch or Stopwatch(), use_color=use_color)


class TestTerminalFormat:
    def test_plain_layout(self) -> None:
        output = _formatter().format(LogMedium.TERMINAL, LogLevel.NORMAL, ["hello", "big", "world"])
        assert output == "📝 app|…/main.py | hello big world"

    def test_single_argument(self) -> None:
        output = _formatter().format(LogMedium.TERMINAL, LogLevel.ERROR, ["failed"])
        assert output == "🚨 app|…/main.py | failed"

    def test_namespace_underlined_on_even_thread(self) -> None:
        output = _formatter(use_color=True).format(LogMedium.TERMINAL, LogLevel.NORMAL, ["hello"])

        styled_namespace = f"{COLORS['cyan']}{COLORS['underline']}app|…/main.py{COLORS['reset']}"
        assert output.count(styled_namespace) == 1
        assert f"{COLORS['cyan']}{COLORS['bold']}hello{COLORS['reset']}" in output

    def test_namespace_plain_on_odd_thread(self) -> None:
        formatter = _formatter("b", registered=("a", "b"), use_color=True)
        output = formatter.format(LogMedium.TERMINAL, LogLevel.NORMAL, ["hello"])

        assert output.count(f"{COLORS['cyan']}b{COLORS['reset']}") == 1
        assert COLORS["underline"] not in output

    def test_unregistered_namespace_uses_odd_thread(self) -> None:
        formatter = _formatter("z", registered=("a",), use_color=True)
        output = formatter.format(LogMedium.TERMINAL, LogLevel.NORMAL, ["hello"])
        assert COLORS["underline"] not in output

    def test_timestamp_ends_the_line(self) -> None:
        formatter = _formatter(timestamp=True, stopwatch=Stopwatch(clock=fake_clock(1.0, 1.0)))
        output = formatter.format(LogMedium.TERMINAL, LogLevel.NORMAL, ["hello", "world"])
        assert output.endswith("world 0.0000 ms")

    def test_no_timestamp_segment_when_disabled(self) -> None:
        output = _formatter().format(LogMedium.TERMINAL, LogLevel.NORMAL, ["hello"])
        assert not output.endswith("ms")

    @pytest.mark.parametrize("level", list(LogLevel))
    def test_idempotent(self, level: LogLevel) -> None:
        formatter = _formatter(use_color=True)
        args = ["state", {"ready": True}, [1, 2]]
        assert formatter.format(LogMedium.TERMINAL, level, args) == formatter.format(LogMedium.TERMINAL, level, args)


class TestFileFormat:
    def test_layout(self) -> None:
        output = _formatter().format(LogMedium.FILE, LogLevel.WARNING, ["disk", "almost full"])
        assert output == "WARNING File | app|…/main.py disk almost full"

    def test_no_color_codes(self) -> None:
        output = _formatter(use_color=True).format(LogMedium.FILE, LogLevel.FATAL, ["boom"])
        assert "\033[" not in output
        assert output == "FATAL File | app|…/main.py boom"

    def test_timestamp_is_not_written(self) -> None:
        output = _formatter(timestamp=True).format(LogMedium.FILE, LogLevel.NORMAL, ["hello"])
        assert output == "NORMAL File | app|…/main.py hello"

    def test_structured_argument_block(self) -> None:
        output = _formatter("ns", registered=("ns",)).format(LogMedium.FILE, LogLevel.NORMAL, ["header", [1, 2, 3]])
        assert output == "NORMAL File | ns header \n       [\n         1,\n         2,\n         3\n       ]"


class TestBrowserFormat:
    def test_arguments_align_with_template(self) -> None:
        output = _formatter().format(LogMedium.BROWSER, LogLevel.NORMAL, ["hello", "world"])

        assert isinstance(output, BrowserMessage)
        assert output.template == BROWSER_TEMPLATE
        assert len(output.arguments) == BROWSER_TEMPLATE.count("%")
        assert output.arguments[0] == "📝"
        assert output.arguments[2] == "app|…/main.py"
        assert output.arguments[5] == "hello"
        assert output.arguments[8] == "world"

    def test_styles_use_level_color(self) -> None:
        output = _formatter().format(LogMedium.BROWSER, LogLevel.NORMAL, ["hello", "world"])

        assert output.arguments[1].startswith("background-color: rgb(0 128 255 / 0.2); color: rgb(0 128 255 / 0.8)")
        assert "font-weight: bold" in output.arguments[4]
        assert output.arguments[7].startswith("background-color: rgb(0 128 255 / 0.1)")

    def test_absent_fields_leave_empty_slots(self) -> None:
        output = _formatter().format(LogMedium.BROWSER, LogLevel.NORMAL, ["hello"])

        assert len(output.arguments) == 11
        assert output.arguments[6:] == ("", "", "", "", "")

    def test_iteration_spreads_template_and_arguments(self) -> None:
        output = _formatter().format(LogMedium.BROWSER, LogLevel.NORMAL, ["hello"])
        assert list(output) == [output.template, *output.arguments]

    def test_plain_text(self) -> None:
        output = _formatter().format(LogMedium.BROWSER, LogLevel.NORMAL, ["hello", "world"])
        assert str(output) == "📝  app|…/main.py |  hello world"

    def test_html(self) -> None:
        output = _formatter("ns", registered=("ns",)).format(LogMedium.BROWSER, LogLevel.NORMAL, ["hello"])
        rendered = output.to_html()

        assert rendered.startswith('📝 <span style="background-color: rgb(0 128 255 / 0.2);')
        assert "> ns | </span>" in rendered
        assert rendered.count("<span") == rendered.count("</span>")
        assert "hello" in rendered
