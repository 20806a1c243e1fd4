"""
nslogger Configuration Module.

Two orthogonal concerns:

- ``LoggerSettings``: process-wide gates and overrides read from the
  environment (prefix ``NSLOG_``), e.g. ``DEBUG=1`` or ``NSLOG_LOG_DIR``.
- ``LoggerConfiguration``: the per-caller options (write, timestamp,
  namespace, logfile) resolved when a logger is created.

Usage:
    from nslogger.config import load_settings

    settings = load_settings()
    settings.debug  # False
"""

from .options import LoggerConfiguration, merge_options, resolve_configuration
from .settings import LoggerSettings, load_settings

__all__ = [
    "LoggerConfiguration",
    "LoggerSettings",
    "load_settings",
    "merge_options",
    "resolve_configuration",
]
