"""
Subprocess spawner.

The only place magekit touches subprocess.Popen. Children are started in
their own session so cancellation can signal the whole process group
(the tool plus anything it forked).
"""

import os
import signal
import subprocess
from typing import IO

from ...core.exceptions import ProcessStartError
from ...core.interfaces.logger import ILogger
from ...core.models.process import ProcessSpec

_POSIX = os.name == "posix"


class SubprocessHandle:
    """IProcessHandle backed by a subprocess.Popen object."""

    def __init__(self, proc: subprocess.Popen) -> None:
        self._proc = proc

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def stdout(self) -> IO[bytes]:
        return self._proc.stdout  # type: ignore[return-value]

    @property
    def stderr(self) -> IO[bytes]:
        return self._proc.stderr  # type: ignore[return-value]

    @property
    def returncode(self) -> int | None:
        return self._proc.returncode

    def wait(self, timeout: float | None = None) -> int:
        return self._proc.wait(timeout)

    def poll(self) -> int | None:
        return self._proc.poll()

    def terminate(self) -> None:
        """Send SIGTERM to the child's process group."""
        self._signal(signal.SIGTERM)

    def kill(self) -> None:
        """Send SIGKILL to the child's process group."""
        self._signal(signal.SIGKILL if _POSIX else signal.SIGTERM)

    def _signal(self, sig: int) -> None:
        # The group outlives a reaped leader while any member is alive, and
        # its id cannot be reused until the last member exits.
        try:
            if _POSIX:
                os.killpg(self._proc.pid, sig)
            else:
                self._proc.send_signal(sig)
        except ProcessLookupError:
            # Whole group already gone
            pass


class SubprocessSpawner:
    """
    Starts child processes with piped stdout/stderr.

    Follows the IProcessSpawner protocol.
    """

    def __init__(self, logger: ILogger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def spawn(self, spec: ProcessSpec) -> SubprocessHandle:
        """
        Start the process described by spec.

        Raises:
            ProcessStartError: If the program is empty, cannot be found,
                or cannot be executed
        """
        if not spec.program:
            raise ProcessStartError("program name is required")

        env = None
        if spec.env is not None:
            env = {**os.environ, **spec.env}

        self.logger.debug("Spawning: %s", spec.display())
        try:
            proc = subprocess.Popen(
                spec.argv,
                stdin=spec.stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=spec.cwd,
                env=env,
                start_new_session=_POSIX,
            )
        except OSError as e:
            raise ProcessStartError(
                f"failed to start command {spec.program!r}: {e.strerror or e}",
                program=spec.program,
                cause=e,
            ) from e

        self.logger.debug("Process started: pid=%d", proc.pid)
        return SubprocessHandle(proc)
