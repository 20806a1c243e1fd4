"""
Registry of logger configurations, keyed by caller path.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import LoggerConfiguration


class ConfigurationRegistry:
    """Insertion-ordered map of caller path to logger configuration.

    Registration order is what message threads are derived from: the n-th
    registered namespace gets thread ``n & 1``. Overwriting an existing caller
    path keeps its original position.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._configurations: dict[str, LoggerConfiguration] = {}

    def register(self, caller_path: str, configuration: LoggerConfiguration) -> bool:
        """Insert or overwrite a configuration.

        Returns:
            True if this was the first registration (the registry was empty).
        """
        with self._lock:
            first = not self._configurations
            self._configurations[caller_path] = configuration
            return first

    def namespaces(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(configuration.namespace for configuration in self._configurations.values())

    def index_of(self, namespace: str) -> int:
        """Registration index of a namespace, -1 when not registered."""
        namespaces = self.namespaces()
        return namespaces.index(namespace) if namespace in namespaces else -1

    def get(self, caller_path: str) -> LoggerConfiguration | None:
        with self._lock:
            return self._configurations.get(caller_path)

    def size(self) -> int:
        with self._lock:
            return len(self._configurations)

    def clear(self) -> None:
        with self._lock:
            self._configurations.clear()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, caller_path: object) -> bool:
        with self._lock:
            return caller_path in self._configurations
