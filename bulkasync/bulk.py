"""Group commands into bulks and log them from a pool of worker threads.

Commands are collected per connection. A bulk is emitted when it reaches the
configured size, or when a dynamic block opened with ``{`` is closed with the
matching ``}``. Bulks are printed to the console and appended to a log file
by background worker threads.
"""

from __future__ import annotations

import queue
import sys
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TextIO

OPEN_BLOCK = "{"
CLOSE_BLOCK = "}"
DEFAULT_THREADS = 3


class InvalidContextError(LookupError):
    """Raised when a context is not (or no longer) connected."""


@dataclass
class BulkData:
    """A group of commands and the second at which it was emitted."""

    commands: list[str] = field(default_factory=list)
    timestamp: int = 0

    def format(self) -> str:
        return "bulk: " + ", ".join(self.commands)


class Logger:
    """Writes bulks to the console and to a single log file.

    The log file is named after the timestamp of the first bulk it receives;
    every later bulk is appended to that same file.
    """

    def __init__(self, directory: str | Path = ".", stream: TextIO | None = None) -> None:
        self.directory = Path(directory)
        self._stream = stream
        self._console_lock = threading.Lock()
        self._file_lock = threading.Lock()
        self.filename: Path | None = None

    def log_to_console(self, data: BulkData) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        with self._console_lock:
            print(data.format(), file=stream, flush=True)

    def log_to_file(self, data: BulkData) -> None:
        with self._file_lock:
            if self.filename is None:
                self.filename = self.directory / f"bulk{data.timestamp}.log"
            try:
                with self.filename.open("a", encoding="utf-8") as log_file:
                    log_file.write(data.format() + "\n")
            except OSError as exc:
                print(
                    f"Logger: could not write to '{self.filename}': {exc}",
                    file=sys.stderr,
                )


class _BulkSink(Protocol):
    def enqueue(self, data: BulkData) -> None: ...


_STOP = object()


class LoggerPool:
    """A fixed set of threads that pass queued bulks to a logger."""

    def __init__(self, logger: Logger, num_threads: int = DEFAULT_THREADS) -> None:
        if num_threads < 1:
            raise ValueError("a logger pool needs at least one thread")
        self.logger = logger
        self._queue: queue.Queue[object] = queue.Queue()
        self._lock = threading.Lock()
        self._stopped = False
        self._threads = [
            threading.Thread(target=self._work, name=f"bulk-logger-{n}", daemon=True)
            for n in range(num_threads)
        ]
        for thread in self._threads:
            thread.start()

    @property
    def stopped(self) -> bool:
        return self._stopped

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            assert isinstance(item, BulkData)
            self.logger.log_to_console(item)
            self.logger.log_to_file(item)

    def enqueue(self, data: BulkData) -> None:
        with self._lock:
            if self._stopped:
                raise RuntimeError("logger pool is stopped")
            self._queue.put(data)

    def stop(self) -> None:
        """Log every bulk still queued, then end the worker threads."""
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            for _ in self._threads:
                self._queue.put(_STOP)
        for thread in self._threads:
            thread.join()

    def __enter__(self) -> LoggerPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


class BulkContext:
    """Collects the commands of one connection into bulks."""

    def __init__(self, bulk_size: int, pool: _BulkSink) -> None:
        if bulk_size < 0:
            raise ValueError("bulk size must not be negative")
        self.bulk_size = bulk_size
        self._pool = pool
        self._depth = 0
        self._commands: list[str] = []

    @property
    def in_dynamic_block(self) -> bool:
        return self._depth > 0

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._commands)

    def process_command(self, command: str) -> None:
        if command == OPEN_BLOCK:
            if self._depth == 0:
                self._emit()
            self._depth += 1
        elif command == CLOSE_BLOCK:
            if self._depth == 0:
                return
            self._depth -= 1
            if self._depth == 0:
                self._emit()
        else:
            self._commands.append(command)
            if not self.in_dynamic_block and len(self._commands) == self.bulk_size:
                self._emit()

    def flush(self) -> None:
        """Emit whatever commands are pending, even inside a dynamic block."""
        self._emit()

    def _emit(self) -> None:
        if not self._commands:
            return
        data = BulkData(commands=self._commands, timestamp=int(time.time()))
        self._commands = []
        self._pool.enqueue(data)


_registry_lock = threading.Lock()
_contexts: set[BulkContext] = set()
_pool: LoggerPool | None = None


def connect(bulk_size: int) -> BulkContext:
    """Open a new connection that groups commands into bulks of this size."""
    global _pool
    with _registry_lock:
        if _pool is None:
            _pool = LoggerPool(Logger())
        context = BulkContext(bulk_size, _pool)
        _contexts.add(context)
        return context


def receive(context: BulkContext, data: str | bytes) -> None:
    """Pass one command to a connected context."""
    command = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    with _registry_lock:
        if context not in _contexts:
            raise InvalidContextError("receive() on a context that is not connected")
        context.process_command(command)


def disconnect(context: BulkContext) -> None:
    """Flush and close a context; the last disconnect drains the logger pool."""
    global _pool
    with _registry_lock:
        try:
            if context not in _contexts:
                raise InvalidContextError("disconnect() on a context that is not connected")
            context.flush()
            _contexts.discard(context)
        finally:
            if not _contexts and _pool is not None:
                _pool.stop()
                _pool = None