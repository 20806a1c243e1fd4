"""
Exceptions raised inside nslogger.

None of these reach code that calls a logging method; they are caught at the
sink or factory boundary and reported on the diagnostics channel.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class NsLoggerError(Exception):
    """Base class of all nslogger errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(NsLoggerError):
    """Logger options or environment settings could not be validated."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIGURATION_INVALID", details=details)


class MetadataError(NsLoggerError):
    """Project metadata (pyproject.toml) is missing or malformed."""

    def __init__(self, *, path: str, reason: str) -> None:
        super().__init__(
            f"Cannot read project metadata from '{path}': {reason}",
            code="METADATA_UNREADABLE",
            details={"path": path, "reason": reason},
        )


class SinkError(NsLoggerError):
    """A message could not be delivered to its sink."""

    def __init__(self, *, sink: str, target: str, reason: str) -> None:
        super().__init__(
            f"{sink} failed for '{target}': {reason}",
            code="SINK_FAILED",
            details={"sink": sink, "target": target, "reason": reason},
        )
