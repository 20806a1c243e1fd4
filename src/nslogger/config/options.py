"""
Per-caller logger configuration and option merging.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import ConfigurationError


class LoggerConfiguration(BaseModel):
    """Resolved configuration of one logger.

    Created once per caller when its logger is built and never changed
    afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    write: bool = False
    timestamp: bool = False
    namespace: str = ""
    logfile: Path


def merge_options(options: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge ``options`` over ``defaults``.

    Mappings present on both sides are merged recursively; any other value
    supplied in ``options`` (including sequences) replaces the default
    wholesale. Neither input is modified.
    """
    merged: dict[str, Any] = dict(defaults)
    for key, value in options.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_options(value, current)
        else:
            merged[key] = value
    return merged


def resolve_configuration(options: Mapping[str, Any], defaults: Mapping[str, Any]) -> LoggerConfiguration:
    """Merge options over defaults and validate the result.

    Raises:
        ConfigurationError: The merged options do not form a valid configuration.
    """
    merged = merge_options(options, defaults)
    try:
        return LoggerConfiguration.model_validate(merged)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid logger options: {', '.join(str(e['loc'][0]) for e in exc.errors() if e['loc'])}",
            details={"options": {k: repr(v) for k, v in options.items()}, "errors": exc.error_count()},
        ) from exc
