"""
Service protocol definitions for process execution.

The spawner protocol is the single seam between magekit and the operating
system: tests substitute a fake spawner with canned streams and exit codes.
"""

from collections.abc import Mapping
from typing import IO, Protocol, runtime_checkable

from ..cancellation import CancellationContext
from ..models.process import ProcessSpec


@runtime_checkable
class IProcessHandle(Protocol):
    """A started child process."""

    @property
    def pid(self) -> int:
        """Process id of the child."""
        ...

    @property
    def stdout(self) -> IO[bytes]:
        """Readable pipe connected to the child's standard output."""
        ...

    @property
    def stderr(self) -> IO[bytes]:
        """Readable pipe connected to the child's standard error."""
        ...

    def wait(self, timeout: float | None = None) -> int:
        """Block until the child exits and return its exit status."""
        ...

    def poll(self) -> int | None:
        """Return the exit status if the child has exited, else None."""
        ...

    def terminate(self) -> None:
        """Ask the child (and its process group) to stop."""
        ...

    def kill(self) -> None:
        """Forcefully stop the child (and its process group)."""
        ...


@runtime_checkable
class IProcessSpawner(Protocol):
    """Protocol for starting child processes."""

    def spawn(self, spec: ProcessSpec) -> IProcessHandle:
        """
        Start a process with piped stdout and stderr.

        Raises:
            ProcessStartError: If the program cannot be located or spawned
        """
        ...


@runtime_checkable
class IExecutor(Protocol):
    """Protocol for running a tool to completion."""

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
        Run a program and forward its output.

        Raises:
            ProcessStartError: If the program could not be started
            ProcessRunError: If the program exited non-zero
            ProcessCancelledError: If ctx was cancelled
        """
        ...
