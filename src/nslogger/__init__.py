"""
Namespaced, multi-target logging.

Formats leveled messages for a terminal, a browser-style console or a log
file, tags each message with the namespace of the calling module and
alternates namespace styling between modules ("threads"):

    import nslogger

    logger = nslogger.get_logger(__name__, __file__, write=True, timestamp=True)
    logger.info("connected", {"host": "localhost", "port": 5432})

The module-level functions log through the package's own default logger.
"""

from typing import Any

from .config import LoggerConfiguration, LoggerSettings
from .core import Logger, create_logger, default_logger, get_logger
from .formatters import BrowserMessage, MessageFormatter
from .packages import CallerIdentity
from .registry import ConfigurationRegistry
from .runtime import LoggingRuntime, get_runtime, set_runtime
from .styles import LogLevel, LogMedium


def debug(*args: Any) -> None:
    default_logger().debug(*args)


def log(*args: Any) -> None:
    default_logger().log(*args)


def info(*args: Any) -> None:
    default_logger().info(*args)


def warn(*args: Any) -> None:
    default_logger().warn(*args)


def error(*args: Any) -> None:
    default_logger().error(*args)


def fatal(*args: Any) -> None:
    default_logger().fatal(*args)


def format(level: LogLevel | str, *args: Any) -> str:
    return default_logger().format(level, *args)


__all__ = [
    "BrowserMessage",
    "CallerIdentity",
    "ConfigurationRegistry",
    "LogLevel",
    "LogMedium",
    "Logger",
    "LoggerConfiguration",
    "LoggerSettings",
    "LoggingRuntime",
    "MessageFormatter",
    "create_logger",
    "debug",
    "error",
    "fatal",
    "format",
    "get_logger",
    "get_runtime",
    "info",
    "log",
    "set_runtime",
    "warn",
]
