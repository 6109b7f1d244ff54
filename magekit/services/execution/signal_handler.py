"""
Signal handler for graceful interrupt handling during tool execution.

The first Ctrl-C cancels the running invocation's context, which makes the
executor terminate the child's process group and report cancellation. A
second Ctrl-C aborts immediately with exit code 130.
"""

import signal
import sys
from collections.abc import Callable
from signal import Handlers

from ...core.cancellation import CancellationContext
from ...core.exceptions import Cancelled
from ...core.interfaces.logger import ILogger


class ProcessSignalHandler:
    """
    Manages SIGINT handling for child process execution.

    Usable as a context manager:
        with ProcessSignalHandler(ctx):
            executor.run(ctx, "go", False, "test", "./...")
    """

    def __init__(
        self,
        ctx: CancellationContext,
        on_abort: Callable[[], None] | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize signal handler.

        Args:
            ctx: Context cancelled on the first interrupt
            on_abort: Callback when second Ctrl-C is received (abort)
            logger: Logger for internal diagnostics
        """
        self._ctx = ctx
        self._interrupt_count = 0
        self._on_abort = on_abort
        self._original_handler: Handlers | None = None
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def __enter__(self) -> "ProcessSignalHandler":
        self.install()
        return self

    def __exit__(self, *exc_info) -> None:
        self.restore()

    def install(self) -> None:
        """Install the SIGINT handler."""
        self.logger.debug("Installing SIGINT handler")
        self._original_handler = signal.signal(signal.SIGINT, self._handle_signal)  # type: ignore[assignment]

    def restore(self) -> None:
        """Restore the original SIGINT handler."""
        if self._original_handler is not None:
            self.logger.debug("Restoring original SIGINT handler")
            signal.signal(signal.SIGINT, self._original_handler)
            self._original_handler = None

    def is_interrupted(self) -> bool:
        """Check if execution was interrupted."""
        return self._interrupt_count > 0

    def get_interrupt_count(self) -> int:
        """Get number of times interrupted."""
        return self._interrupt_count

    def _handle_signal(self, signum: int, frame) -> None:
        """Handle SIGINT signal."""
        self._interrupt_count += 1
        self.logger.debug("SIGINT received: interrupt_count=%d", self._interrupt_count)

        if self._interrupt_count == 1:
            self.logger.warning("Interrupted, stopping (press Ctrl-C again to abort)")
            self._ctx.cancel(Cancelled("interrupted"))
        else:
            if self._on_abort:
                self._on_abort()
            sys.exit(130)  # Standard exit code for SIGINT
