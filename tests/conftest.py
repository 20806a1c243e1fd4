import io
import typing as t
from pathlib import Path

import pytest

from nslogger.config import LoggerSettings
from nslogger.message import Stopwatch
from nslogger.packages import CallerIdentity, ProjectMetadata
from nslogger.runtime import LoggingRuntime
from nslogger.sinks import ConsoleSink


class RecordingWriter:
    """Stands in for FileWriter and keeps every submitted message."""

    def __init__(self) -> None:
        self.messages: list[tuple[Path, str]] = []

    def submit(self, path: t.Any, message: str) -> None:
        self.messages.append((Path(path), message))

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class RecordingDiagnostics:
    """Stands in for the structlog diagnostics logger."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, t.Any]]] = []

    def __getattr__(self, method: str) -> t.Callable[..., None]:
        def record(event: str, **kw: t.Any) -> None:
            self.events.append((method, event, kw))

        return record


def fake_clock(*values: float) -> t.Callable[[], float]:
    ticks = iter(values)
    return lambda: next(ticks)


@pytest.fixture
def project(tmp_path: Path) -> ProjectMetadata:
    root = tmp_path / "my-app"
    root.mkdir()
    (root / "pyproject.toml").write_text('[project]\nname = "my-app"\n', encoding="utf-8")
    return ProjectMetadata(root=root, name="my-app")


@pytest.fixture
def local_caller(project: ProjectMetadata) -> CallerIdentity:
    return CallerIdentity(name="my_app.server", path=project.root / "src" / "my_app" / "server.py")


@pytest.fixture
def third_party_caller(tmp_path: Path) -> CallerIdentity:
    path = tmp_path / "venv" / "lib" / "site-packages" / "acme_widgets" / "core.py"
    return CallerIdentity(name="acme_widgets.core", path=path)


@pytest.fixture
def console() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_runtime(tmp_path: Path, project: ProjectMetadata, console: io.StringIO):
    """Factory for isolated runtimes; keyword arguments override settings."""
    runtimes: list[LoggingRuntime] = []

    def factory(*, writer: t.Any = None, stopwatch: Stopwatch | None = None, diagnostics: t.Any = None, **overrides: t.Any) -> LoggingRuntime:
        values: dict[str, t.Any] = {
            "debug": False,
            "nolog": False,
            "log_dir": tmp_path / "logs",
            "color": "never",
            "host": "process",
        }
        values.update(overrides)
        runtime = LoggingRuntime(
            settings=LoggerSettings(**values),
            project=project,
            console=ConsoleSink(console),
            writer=writer,
            stopwatch=stopwatch,
            diagnostics=diagnostics or RecordingDiagnostics(),
        )
        runtimes.append(runtime)
        return runtime

    yield factory

    for runtime in runtimes:
        runtime.close()


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def runtime(make_runtime, writer: RecordingWriter) -> LoggingRuntime:
    return make_runtime(writer=writer)
