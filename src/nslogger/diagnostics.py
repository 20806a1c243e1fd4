"""
Internal diagnostics channel.

Failures inside nslogger (unwritable log files, malformed project metadata,
invalid settings) are reported here instead of being raised into the host
application. The channel is a private structlog logger printing to stderr; it
never touches the host's global structlog or stdlib logging configuration.

Library: structlog for the processor pipeline, orjson for the JSON format.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Literal

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger

DiagnosticsFormat = Literal["console", "json"]


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


class _StderrProxy:
    """Resolves ``sys.stderr`` on every write so redirected streams are honoured."""

    def write(self, s: str) -> int:
        return sys.stderr.write(s)

    def flush(self) -> None:
        sys.stderr.flush()


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["logger"] = event_dict.pop("_name", "nslogger")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def render_console(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render as ``timestamp | LEVEL | logger | message key=value ...``."""
    level = str(event_dict.pop("level", method_name)).upper()
    message = str(event_dict.pop("message", ""))
    logger_name = str(event_dict.pop("logger", "nslogger"))
    timestamp = str(event_dict.pop("timestamp", ""))

    extras = " ".join(f"{k}={v}" for k, v in event_dict.items())
    if extras:
        message = f"{message} {extras}"

    return " | ".join([timestamp, f"{level:>8}", logger_name, message])


def render_json(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    return orjson_dumps(event_dict)


# =============================================================================
# Public API
# =============================================================================


def get_diagnostics_logger(
    name: str = "nslogger",
    *,
    fmt: DiagnosticsFormat = "console",
    stream: Any = None,
) -> Any:
    """Build the diagnostics logger.

    Args:
        name: Logger name shown in each record
        fmt: "console" (aligned text) or "json"
        stream: Output stream (default: the current ``sys.stderr``)
    """
    renderer = render_json if fmt == "json" else render_console
    return structlog.wrap_logger(
        structlog.PrintLogger(file=stream or _StderrProxy()),
        processors=[
            structlog.processors.add_log_level,
            add_timestamp,
            add_logger_name,
            rename_event_key,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        _name=name,
    )
