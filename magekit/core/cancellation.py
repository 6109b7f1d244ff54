"""
Cancellation context for long-running tool invocations.

A CancellationContext is handed down from the CLI (or any caller) to the
process executor. Consumers poll it cooperatively; the executor subscribes
to it so that the child process can be terminated as soon as the context is
cancelled or its deadline passes.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from .exceptions import Cancelled, DeadlineExceeded


class CancellationContext:
    """
    Thread-safe cancellation handle with an optional deadline.

    Usage:
        ctx = CancellationContext.with_timeout(30)
        executor.run(ctx, "helm", False, "repo", "update")
        ...
        ctx.cancel()  # from another thread or a signal handler
    """

    def __init__(self, deadline: float | None = None) -> None:
        """
        Initialize the context.

        Args:
            deadline: Absolute ``time.monotonic()`` value after which the
                context counts as cancelled, or None for no deadline.
        """
        self._deadline = deadline
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._cause: BaseException | None = None
        self._callbacks: list[Callable[[BaseException], None]] = []
        self._timer: threading.Timer | None = None

        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self.cancel(DeadlineExceeded())
            else:
                self._timer = threading.Timer(remaining, self._expire)
                self._timer.daemon = True
                self._timer.start()

    @classmethod
    def background(cls) -> CancellationContext:
        """Create a context that is only cancelled explicitly."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> CancellationContext:
        """Create a context that cancels itself after ``seconds``."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cause(self) -> BaseException | None:
        """The reason the context was cancelled, or None."""
        return self._cause

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def err(self) -> BaseException | None:
        """Return the cancellation cause if cancelled, else None."""
        if self._event.is_set():
            return self._cause
        return None

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or timeout; returns True if cancelled."""
        return self._event.wait(timeout)

    def cancel(self, cause: BaseException | None = None) -> None:
        """
        Cancel the context.

        Only the first call takes effect; later calls keep the original cause.
        Registered callbacks run on the cancelling thread.
        """
        with self._lock:
            if self._event.is_set():
                return
            self._cause = cause if cause is not None else Cancelled()
            self._event.set()
            callbacks = list(self._callbacks)
            self._callbacks.clear()
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

        for callback in callbacks:
            callback(self._cause)

    def on_cancel(self, callback: Callable[[BaseException], None]) -> Callable[[], None]:
        """
        Register a callback invoked once when the context is cancelled.

        If the context is already cancelled the callback runs immediately.

        Returns:
            A function that unregisters the callback.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._remove_callback(callback)
            cause = self._cause

        callback(cause)  # type: ignore[arg-type]
        return lambda: None

    def _remove_callback(self, callback: Callable[[BaseException], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def _expire(self) -> None:
        self.cancel(DeadlineExceeded())
