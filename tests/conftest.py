"""
Shared pytest fixtures for magekit tests.

This module provides:
- RecordingLogger: ILogger that keeps every record for assertions
- FakeSpawner / FakeHandle: in-memory process doubles for executor tests
- reset_container: autouse fixture isolating the DI container per test
"""

import io
import threading
from dataclasses import dataclass, field
from typing import Any

import pytest

from magekit.core.bootstrap import reset
from magekit.core.interfaces.logger import ILogger
from magekit.core.models.process import ProcessSpec


@dataclass
class LogRecord:
    level: str
    message: str
    attrs: dict[str, Any] = field(default_factory=dict)


class RecordingLogger(ILogger):
    """Logger that records (level, formatted message, attributes)."""

    def __init__(self) -> None:
        self.records: list[LogRecord] = []
        self._lock = threading.Lock()

    def _record(self, level: str, message: str, args: tuple, attrs: dict[str, Any]) -> None:
        if args:
            message = message % args
        with self._lock:
            self.records.append(LogRecord(level, message, attrs))

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("debug", message, args, kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("info", message, args, kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", message, args, kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", message, args, kwargs)

    def set_level(self, level: str) -> None:
        pass

    def messages(self, level: str) -> list[str]:
        return [r.message for r in self.records if r.level == level]


class FakeHandle:
    """
    In-memory IProcessHandle.

    By default wait() returns ``returncode`` immediately. With
    ``block=True`` it blocks until terminate() or kill() is called.
    """

    def __init__(
        self,
        stdout: bytes = b"",
        stderr: bytes = b"",
        returncode: int = 0,
        block: bool = False,
        wait_error: OSError | None = None,
        ignore_terminate: bool = False,
    ) -> None:
        self.pid = 4242
        self.stdout = io.BytesIO(stdout)
        self.stderr = io.BytesIO(stderr)
        self._returncode = returncode
        self._exited = threading.Event()
        self._wait_error = wait_error
        self._ignore_terminate = ignore_terminate
        self.terminated = False
        self.killed = False
        self.returncode: int | None = None
        if not block:
            self._exit(returncode)

    def _exit(self, code: int) -> None:
        self.returncode = code
        self._exited.set()

    def wait(self, timeout: float | None = None) -> int:
        if self._wait_error is not None:
            raise self._wait_error
        self._exited.wait(timeout if timeout is not None else 10)
        assert self.returncode is not None, "fake process never exited"
        return self.returncode

    def poll(self) -> int | None:
        return self.returncode

    def terminate(self) -> None:
        self.terminated = True
        if not self._ignore_terminate:
            self._exit(-15)

    def kill(self) -> None:
        self.killed = True
        self._exit(-9)


class FakeSpawner:
    """IProcessSpawner returning a prepared FakeHandle and recording specs."""

    def __init__(self, handle: FakeHandle | None = None, error: Exception | None = None) -> None:
        self.handle = handle or FakeHandle()
        self.error = error
        self.specs: list[ProcessSpec] = []

    def spawn(self, spec: ProcessSpec) -> FakeHandle:
        self.specs.append(spec)
        if self.error is not None:
            raise self.error
        return self.handle


@pytest.fixture(autouse=True)
def reset_container():
    """Reset the DI container before and after each test."""
    reset()
    yield
    reset()


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def make_handle():
    """Factory for FakeHandle instances."""
    return FakeHandle


@pytest.fixture
def make_spawner():
    """Factory for FakeSpawner instances."""
    return FakeSpawner
