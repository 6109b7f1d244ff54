"""
Process executor.

Runs one external program to completion: spawns it, drains stdout and
stderr on two threads, waits for exit, and maps the outcome to
ProcessStartError / ProcessRunError / ProcessCancelledError.
"""

import sys
import threading
from collections.abc import Callable, Mapping
from typing import IO, Any

from ...core.cancellation import CancellationContext
from ...core.exceptions import ProcessCancelledError, ProcessRunError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.process import IProcessHandle, IProcessSpawner
from ...core.models.process import ProcessSpec
from .spawner import SubprocessSpawner
from .streams import (
    INITIAL_BUFFER_SIZE,
    MAX_LINE_SIZE,
    binary_sink,
    copy_stream,
    drain_to_log,
)


class ProcessExecutor:
    """
    Executes tool commands and streams their output.

    Follows the IExecutor protocol. Output either goes to the logger, one
    record per line (stdout at INFO, stderr at ERROR), or is passed through
    unchanged to the caller's stdout/stderr.

    Both stream consumers are started before waiting on the child, so a
    child that fills one pipe while the other is being read cannot
    deadlock. Both are joined before run() returns or raises.

    Usage:
        executor = ProcessExecutor()
        executor.run(ctx, "helm", False, "repo", "update")
    """

    def __init__(
        self,
        spawner: IProcessSpawner | None = None,
        logger: ILogger | None = None,
        kill_grace_seconds: float = 5.0,
        stdin: IO[Any] | int | None = None,
        stdout: IO[bytes] | None = None,
        stderr: IO[bytes] | None = None,
        initial_buffer_size: int = INITIAL_BUFFER_SIZE,
        max_line_size: int = MAX_LINE_SIZE,
    ) -> None:
        """
        Initialize the executor.

        Args:
            spawner: Process spawner (defaults to SubprocessSpawner)
            logger: Logger for streamed output and diagnostics
            kill_grace_seconds: Delay between SIGTERM and SIGKILL on cancel
            stdin: Child stdin; None inherits the caller's standard input
            stdout: Passthrough sink for child stdout (default: sys.stdout)
            stderr: Passthrough sink for child stderr (default: sys.stderr)
            initial_buffer_size: Initial line buffer when streaming to log
            max_line_size: Longest accepted line when streaming to log
        """
        self._logger = logger
        self._spawner = spawner or SubprocessSpawner(logger=logger)
        self._kill_grace_seconds = kill_grace_seconds
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self._initial_buffer_size = initial_buffer_size
        self._max_line_size = max_line_size

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def run(
        self,
        ctx: CancellationContext | None,
        program: str,
        stream_to_log: bool,
        *args: str,
        cwd: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """
        Run ``program`` with ``args`` and wait for it to finish.

        Args:
            ctx: Cancellation context, or None for no cancellation
            program: Executable name or path
            stream_to_log: Forward output to the logger instead of the terminal
            *args: Command-line arguments
            cwd: Working directory for the child
            env: Environment variables overlaid on the caller's environment

        Raises:
            ProcessStartError: If the program could not be started
            ProcessRunError: If the program exited non-zero
            ProcessCancelledError: If ctx was cancelled and the program
                did not exit cleanly
        """
        spec = ProcessSpec(
            program=program,
            args=tuple(args),
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdin=self._stdin,
            stdout_sink=self._stdout,
            stderr_sink=self._stderr,
        )
        self.execute(ctx, spec, stream_to_log)

    def execute(
        self,
        ctx: CancellationContext | None,
        spec: ProcessSpec,
        stream_to_log: bool,
    ) -> None:
        """Run a prebuilt ProcessSpec. See run() for semantics."""
        if ctx is not None and ctx.is_cancelled():
            raise ProcessCancelledError(
                f"command {spec.program!r} canceled before start: {ctx.cause}",
                program=spec.program,
                cause=ctx.cause,
            )

        handle = self._spawner.spawn(spec)

        consumers = self._start_consumers(ctx, spec, handle, stream_to_log)

        kill_timers: list[threading.Timer] = []
        unsubscribe: Callable[[], None] = lambda: None
        if ctx is not None:
            unsubscribe = ctx.on_cancel(
                lambda cause: self._terminate(handle, cause, kill_timers)
            )

        wait_error: OSError | None = None
        try:
            try:
                returncode = handle.wait()
            except OSError as e:
                wait_error = e
                returncode = -1
        except BaseException:
            # Interrupted while waiting (e.g. SystemExit from a second Ctrl-C)
            handle.kill()
            raise
        finally:
            # Descendants may still hold the pipes after the leader exits, so
            # cancellation and the SIGKILL timer stay armed until both
            # consumers have finished.
            for consumer in consumers:
                consumer.join()
            unsubscribe()
            for timer in kill_timers:
                timer.cancel()
            self._close_pipes(handle)

        self.logger.debug("Process exited: program=%s code=%d", spec.program, returncode)

        if returncode == 0 and wait_error is None:
            return

        cause = ctx.err() if ctx is not None else None
        if cause is not None:
            raise ProcessCancelledError(
                f"command {spec.program!r} canceled: {cause}",
                program=spec.program,
                context={"returncode": returncode},
                cause=cause,
            )
        if wait_error is not None:
            raise ProcessRunError(
                f"command {spec.program!r} failed: {wait_error}",
                program=spec.program,
                cause=wait_error,
            )
        raise ProcessRunError(
            f"command {spec.program!r} failed with exit code {returncode}",
            program=spec.program,
            returncode=returncode,
        )

    def _start_consumers(
        self,
        ctx: CancellationContext | None,
        spec: ProcessSpec,
        handle: IProcessHandle,
        stream_to_log: bool,
    ) -> list[threading.Thread]:
        if stream_to_log:
            targets = [
                (drain_to_log, (handle.stdout, self.logger.info, "stdout", ctx, self.logger,
                                self._initial_buffer_size, self._max_line_size)),
                (drain_to_log, (handle.stderr, self.logger.error, "stderr", ctx, self.logger,
                                self._initial_buffer_size, self._max_line_size)),
            ]
        else:
            stdout_sink = spec.stdout_sink or binary_sink(sys.stdout)
            stderr_sink = spec.stderr_sink or binary_sink(sys.stderr)
            targets = [
                (copy_stream, (handle.stdout, stdout_sink, "stdout", ctx, self.logger)),
                (copy_stream, (handle.stderr, stderr_sink, "stderr", ctx, self.logger)),
            ]

        consumers = []
        for target, args in targets:
            thread = threading.Thread(
                target=target,
                args=args,
                name=f"magekit-{spec.program}-{args[2]}",
                daemon=True,
            )
            thread.start()
            consumers.append(thread)
        return consumers

    def _terminate(
        self,
        handle: IProcessHandle,
        cause: BaseException,
        kill_timers: list[threading.Timer],
    ) -> None:
        """
        Stop the child's process group when the context is cancelled.

        The group is signalled even if the leader has already exited, since
        a forked descendant can outlive it. SIGKILL follows after the grace
        period unless both consumers finish first.
        """
        self.logger.warning("Terminating process", pid=handle.pid, reason=cause)
        handle.terminate()

        timer = threading.Timer(self._kill_grace_seconds, self._kill_group, args=(handle,))
        timer.daemon = True
        kill_timers.append(timer)
        timer.start()

    def _kill_group(self, handle: IProcessHandle) -> None:
        self.logger.warning("Process ignored SIGTERM, killing", pid=handle.pid)
        handle.kill()

    @staticmethod
    def _close_pipes(handle: IProcessHandle) -> None:
        for stream in (handle.stdout, handle.stderr):
            if stream is None:
                continue
            try:
                stream.close()
            except OSError:
                pass
