"""
Logger instances and the logger factory.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .config import LoggerConfiguration, merge_options, resolve_configuration
from .exceptions import ConfigurationError
from .formatters import MessageFormatter
from .packages import CallerIdentity, CallerInfo
from .runtime import LoggingRuntime, get_runtime
from .sinks import FileSink
from .styles import LogLevel, LogMedium


def compute_namespace(caller: CallerInfo, root_name: str) -> str:
    """Namespace of a caller.

    Examples:
        LOCAL module:        "my-app|…/server.py"
        THIRD-PARTY module:  "requests|sessions.py"
    """
    if caller.is_local:
        return f"{root_name}|…/{caller.filename}"
    return f"{caller.package_name}|{caller.filename}"


class Logger:
    """Namespaced logger bound to one caller module.

    Each level method accepts any number of arguments. The first becomes the
    message title and the rest its body; lists, mappings and objects are
    expanded into indented blocks.
    """

    def __init__(self, identity: CallerIdentity, configuration: LoggerConfiguration, runtime: LoggingRuntime):
        self.identity = identity
        self.configuration = configuration
        self.runtime = runtime
        self._file = FileSink(configuration.logfile, runtime.writer)

    def __repr__(self) -> str:
        return f"<Logger namespace={self.configuration.namespace!r}>"

    def __call__(self, options: Mapping[str, Any] | None = None, **overrides: Any) -> Logger:
        """Create a new logger for the same caller with other options."""
        return create_logger(self.identity, merge_options(overrides, options or {}), runtime=self.runtime)

    def debug(self, *args: Any) -> None:
        self._emit(LogLevel.DEBUG, args)

    def log(self, *args: Any) -> None:
        self._emit(LogLevel.NORMAL, args)

    def info(self, *args: Any) -> None:
        self._emit(LogLevel.INFORMATION, args)

    def warn(self, *args: Any) -> None:
        self._emit(LogLevel.WARNING, args)

    def error(self, *args: Any) -> None:
        self._emit(LogLevel.ERROR, args)

    def fatal(self, *args: Any) -> None:
        self._emit(LogLevel.FATAL, args)

    def format(self, level: LogLevel | str, *args: Any) -> str:
        """Render a message for the terminal without emitting it."""
        formatter = self._formatter()
        return formatter.format_terminal(formatter.build(LogMedium.TERMINAL, level, args))

    def _formatter(self) -> MessageFormatter:
        runtime = self.runtime
        return MessageFormatter(
            self.configuration,
            runtime.registry,
            runtime.stopwatch,
            use_color=runtime.use_color(),
        )

    def _emit(self, level: LogLevel, args: tuple[Any, ...]) -> None:
        if not args:
            return
        if level == LogLevel.DEBUG and not self.runtime.debug_enabled:
            return

        runtime = self.runtime
        try:
            formatter = self._formatter()
            medium = LogMedium.BROWSER if runtime.is_embedded() else LogMedium.TERMINAL
            runtime.console.emit(formatter.format(medium, level, args))

            if self.configuration.write and runtime.write_enabled:
                self._file.emit(formatter.format(LogMedium.FILE, level, args))
        except Exception:
            runtime.diagnostics.exception(
                "log_call_failed",
                namespace=self.configuration.namespace,
                level=level.value,
            )


def create_logger(
    identity: CallerIdentity,
    options: Mapping[str, Any] | None = None,
    *,
    runtime: LoggingRuntime | None = None,
    register: bool = True,
) -> Logger:
    """Create and register the logger of a caller.

    Options are deep-merged over the defaults (``write=False``,
    ``timestamp=False``, ``logfile=<user log dir>/<app>.log``). The namespace
    is derived from the caller unless a non-empty ``namespace`` option is
    given. Invalid options are reported on the diagnostics channel and the
    defaults are used instead. With ``register=False`` the logger stays out
    of the registry: it neither takes a thread slot nor writes the header.
    """
    runtime = runtime or get_runtime()
    caller = runtime.resolver.resolve(identity)

    options = dict(options or {})
    computed = compute_namespace(caller, runtime.project.name)
    namespace = options.pop("namespace", None) or computed

    defaults = {
        "write": False,
        "timestamp": False,
        "namespace": caller.package_name,
        "logfile": runtime.default_logfile(),
    }

    try:
        configuration = resolve_configuration({**options, "namespace": namespace}, defaults)
    except ConfigurationError as exc:
        runtime.diagnostics.warning("logger_options_invalid", caller=identity.name, code=exc.code, **exc.details)
        configuration = resolve_configuration({"namespace": computed}, defaults)

    if register:
        runtime.register(identity, configuration)
    return Logger(identity, configuration, runtime)


def get_logger(
    name: str,
    path: str | Path | None = None,
    options: Mapping[str, Any] | None = None,
    *,
    runtime: LoggingRuntime | None = None,
    **overrides: Any,
) -> Logger:
    """Get a logger for a module.

    Usage:
        logger = get_logger(__name__, __file__, write=True)
        logger.info("server started", {"port": 8080})

    Args:
        name: Module name of the caller (``__name__``)
        path: Module file of the caller (``__file__``); looked up in
            ``sys.modules`` when omitted
        options: Logger options (write, timestamp, namespace, logfile)
        runtime: Runtime to register with (default: the process-wide one)
        **overrides: Options taking precedence over ``options``
    """
    identity = CallerIdentity.from_module(name, path)
    return create_logger(identity, merge_options(overrides, options or {}), runtime=runtime)


# =============================================================================
# Default logger
# =============================================================================

_default_logger: Logger | None = None


def default_logger() -> Logger:
    """Unregistered logger of the nslogger package itself, recreated when the runtime changes."""
    global _default_logger
    runtime = get_runtime()
    if _default_logger is None or _default_logger.runtime is not runtime:
        identity = CallerIdentity.from_module(__package__ or "nslogger")
        _default_logger = create_logger(identity, runtime=runtime, register=False)
    return _default_logger
