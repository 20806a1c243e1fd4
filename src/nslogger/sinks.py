"""
Output sinks: the console and serialized log file appends.
"""

from __future__ import annotations

import atexit
import queue
import sys
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any

from .exceptions import SinkError

LOGFILE_TIMESTAMP_FORMAT = "%Y-%d-%m %H:%M:%S"
HEADER_RULE = "▔" * 80


def logfile_timestamp(now: datetime | None = None) -> str:
    """Local time as written in front of every log file line (day before month)."""
    return (now or datetime.now()).strftime(LOGFILE_TIMESTAMP_FORMAT)


def header_block(now: datetime | None = None) -> str:
    return f"\nLOG STARTED ({logfile_timestamp(now)})\n{HEADER_RULE}"


def prefix_lines(message: str, timestamp: str) -> str:
    """One ``[timestamp] line`` per line of the message."""
    return "".join(f"[{timestamp}] {line}\n" for line in message.split("\n"))


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, message: Any) -> None:
        """Emit a formatted message to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class ConsoleSink(BaseSink):
    """Synchronous console output.

    Args:
        stream: Output stream (default: the current ``sys.stdout``)
    """

    def __init__(self, stream: Any = None):
        self._stream = stream

    @property
    def stream(self) -> Any:
        return self._stream or sys.stdout

    def isatty(self) -> bool:
        return bool(getattr(self.stream, "isatty", lambda: False)())

    def emit(self, message: Any) -> None:
        stream = self.stream
        stream.write(f"{message}\n")
        stream.flush()

    def close(self) -> None:
        pass


class FileWriter:
    """Appends to log files from a single background worker.

    Every job goes through one FIFO queue, so lines reach each file in the
    order the calls were made. Each job creates the parent directory when
    needed, opens the file in append mode, writes and closes it. Failures are
    reported on the diagnostics channel and never raised.

    Args:
        diagnostics: Logger receiving write failures
    """

    def __init__(self, diagnostics: Any):
        self._diagnostics = diagnostics
        self._queue: queue.Queue[tuple[Path, str] | None] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._exit_hook_registered = False

    def submit(self, path: str | Path, message: str) -> None:
        """Queue a message; each of its lines is prefixed with the current time."""
        self._ensure_started()
        self._queue.put((Path(path), prefix_lines(message, logfile_timestamp())))

    def flush(self) -> None:
        """Block until every queued message has been written."""
        if self._thread is not None:
            self._queue.join()

    def close(self) -> None:
        """Drain the queue and stop the worker.

        The lock is held until the worker has exited, so a concurrent
        ``submit`` waits and then starts a fresh worker.
        """
        with self._lock:
            thread = self._thread
            if thread is None:
                return
            self._queue.put(None)
            thread.join()
            self._thread = None

    def _ensure_started(self) -> None:
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run, name="nslogger-file-writer", daemon=True)
            self._thread.start()
            if not self._exit_hook_registered:
                atexit.register(self.close)
                self._exit_hook_registered = True

    def _run(self) -> None:
        while True:
            job = self._queue.get()
            try:
                if job is None:
                    return
                self._append(*job)
            finally:
                self._queue.task_done()

    def _append(self, path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8", errors="replace") as f:
                f.write(text)
        except OSError as exc:
            error = SinkError(sink="FileWriter", target=str(path), reason=str(exc))
            self._diagnostics.error("logfile_write_failed", code=error.code, **error.details)


class FileSink(BaseSink):
    """Log file of one logger, written through a shared ``FileWriter``."""

    def __init__(self, path: str | Path, writer: FileWriter):
        self._path = Path(path)
        self._writer = writer

    @property
    def path(self) -> Path:
        return self._path

    def emit(self, message: Any) -> None:
        self._writer.submit(self._path, str(message))

    def close(self) -> None:
        self._writer.flush()
