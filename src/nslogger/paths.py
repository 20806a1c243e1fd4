"""
Platform log locations.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path


def user_log_dir(app_name: str) -> Path:
    """
    Resolve the per-user log directory of an application.

    Standards:
    - macOS: ~/Library/Logs/<app>
    - Windows: %LOCALAPPDATA%/<app>/Logs
    - Linux and others: $XDG_CACHE_HOME/<app>/log (default ~/.cache/<app>/log)

    The directory is not created here; the file writer creates it on the
    first write.
    """
    home = Path(os.path.expanduser("~"))

    if sys.platform == "darwin":
        return home / "Library" / "Logs" / app_name

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return Path(base) / app_name / "Logs"
        return home / "AppData" / "Local" / app_name / "Logs"

    cache = os.environ.get("XDG_CACHE_HOME")
    base_dir = Path(cache) if cache else home / ".cache"
    return base_dir / app_name / "log"


def default_logfile(app_name: str, log_dir: Path | None = None) -> Path:
    """``<log dir>/<app>.log``, the log dir defaulting to ``user_log_dir``."""
    return (log_dir or user_log_dir(app_name)) / f"{app_name}.log"
