"""
Shared base for tool runners.

A runner turns option models into argument lists and hands them to an
IExecutor. Runners never spawn processes themselves, so tests inject a
mock executor and assert on the exact argument vector.
"""

import time
from collections.abc import Mapping, Sequence
from typing import Any

from ...core.cancellation import CancellationContext
from ...core.exceptions import OptionValidationError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.process import IExecutor


def require(value: Any, option: str, message: str) -> None:
    """Raise OptionValidationError if ``value`` is empty."""
    if not value:
        raise OptionValidationError(message, option=option)


class ToolRunner:
    """Base class holding the executor, logger, and streaming preference."""

    def __init__(
        self,
        executor: IExecutor | None = None,
        logger: ILogger | None = None,
        stream_to_log: bool = False,
    ) -> None:
        """
        Initialize runner.

        Args:
            executor: Executor used for every invocation (default: ProcessExecutor)
            logger: Logger for progress messages
            stream_to_log: Forward tool output to the logger instead of the terminal
        """
        self._executor = executor
        self._logger = logger
        self.stream_to_log = stream_to_log

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def executor(self) -> IExecutor:
        """Get executor, resolving from container or creating a ProcessExecutor."""
        if self._executor is None:
            from ...core.di import resolve_or_default
            from ..execution import ProcessExecutor

            self._executor = resolve_or_default(IExecutor, ProcessExecutor)  # type: ignore[type-abstract]
        return self._executor

    def _exec(
        self,
        ctx: CancellationContext | None,
        program: str,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> None:
        if env:
            self.executor.run(ctx, program, self.stream_to_log, *args, env=env)
        else:
            self.executor.run(ctx, program, self.stream_to_log, *args)

    def _timed(
        self,
        ctx: CancellationContext | None,
        program: str,
        args: Sequence[str],
        start_message: str,
        done_message: str,
        env: Mapping[str, str] | None = None,
        **attrs: Any,
    ) -> None:
        """Log, run one command, and log completion with its duration."""
        self.logger.info(start_message, **attrs)
        start = time.monotonic()
        self._exec(ctx, program, args, env=env)
        self.logger.info(done_message, duration=time.monotonic() - start)
