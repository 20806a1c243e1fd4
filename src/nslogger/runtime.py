"""
Shared logging runtime.

Everything loggers share lives on one explicitly owned ``LoggingRuntime``:
the configuration registry, the elapsed-time stopwatch, the file writer,
the console sink, the root project and the environment settings. Loggers
receive a runtime when they are created; by default they share the
process-wide one returned by ``get_runtime()``.
"""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .config import LoggerConfiguration, LoggerSettings, load_settings
from .diagnostics import get_diagnostics_logger
from .exceptions import MetadataError
from .message import Stopwatch
from .packages import CallerIdentity, PackageResolver, ProjectMetadata, read_project_metadata, resolve_root_path
from .paths import default_logfile
from .registry import ConfigurationRegistry
from .sinks import ConsoleSink, FileWriter, header_block


def is_embedded_host() -> bool:
    """True inside an IPython/Jupyter kernel, whose output is rendered by a browser front end."""
    return "ipykernel" in sys.modules


class LoggingRuntime:
    """State shared by a family of loggers.

    Args:
        settings: Environment settings (default: read from the environment)
        registry: Configuration registry
        stopwatch: Elapsed-time cursor for timestamped messages
        console: Console sink (default: stdout)
        writer: Log file writer
        project: Root project metadata (default: discovered from ``__main__``/cwd)
        host_predicate: Tells whether output is rendered by an embedded GUI host
        diagnostics: Logger for internal failures (default: structlog on stderr)
    """

    def __init__(
        self,
        *,
        settings: LoggerSettings | None = None,
        registry: ConfigurationRegistry | None = None,
        stopwatch: Stopwatch | None = None,
        console: ConsoleSink | None = None,
        writer: FileWriter | None = None,
        project: ProjectMetadata | None = None,
        host_predicate: Callable[[], bool] | None = None,
        diagnostics: Any = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.diagnostics = diagnostics or get_diagnostics_logger(fmt=self.settings.diagnostics_format)
        self.registry = registry or ConfigurationRegistry()
        self.stopwatch = stopwatch or Stopwatch()
        self.console = console or ConsoleSink()
        self.writer = writer or FileWriter(self.diagnostics)
        self.project = project or self._discover_project()
        self.resolver = PackageResolver(self.project)
        self._host_predicate = host_predicate or is_embedded_host

    def _discover_project(self) -> ProjectMetadata:
        root = resolve_root_path()
        try:
            return read_project_metadata(root)
        except MetadataError as exc:
            self.diagnostics.warning("project_metadata_unreadable", code=exc.code, **exc.details)
            return ProjectMetadata(root=root, name=root.name)

    # =========================================================================
    # Environment
    # =========================================================================

    @property
    def app_label(self) -> str:
        return self.settings.app_name or self.project.label

    @property
    def debug_enabled(self) -> bool:
        return self.settings.debug

    @property
    def write_enabled(self) -> bool:
        return not self.settings.nolog

    def default_logfile(self) -> Path:
        return default_logfile(self.app_label, self.settings.log_dir)

    def is_embedded(self) -> bool:
        if self.settings.host == "embedded":
            return True
        if self.settings.host == "process":
            return False
        return self._host_predicate()

    def use_color(self) -> bool:
        if self.settings.color == "always":
            return True
        if self.settings.color == "never" or os.environ.get("NO_COLOR"):
            return False
        return self.console.isatty()

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, identity: CallerIdentity, configuration: LoggerConfiguration) -> None:
        """Register a caller; the first registration starts the log file with a header."""
        first = self.registry.register(identity.key, configuration)
        if first and configuration.write and self.write_enabled:
            self.writer.submit(configuration.logfile, header_block())

    def close(self) -> None:
        self.writer.close()


# =============================================================================
# Process-wide runtime
# =============================================================================

_runtime: LoggingRuntime | None = None
_runtime_lock = threading.Lock()


def get_runtime() -> LoggingRuntime:
    global _runtime
    with _runtime_lock:
        if _runtime is None:
            _runtime = LoggingRuntime()
        return _runtime


def set_runtime(runtime: LoggingRuntime | None) -> LoggingRuntime | None:
    """Replace the process-wide runtime (``None`` resets it); returns the previous one."""
    global _runtime
    with _runtime_lock:
        previous, _runtime = _runtime, runtime
        return previous
