"""
Process invocation models.

ProcessSpec describes one external program invocation. It is built fresh
for every call and owned by the executor until the call returns.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import IO, Any


@dataclass(frozen=True)
class ProcessSpec:
    """
    A single command invocation.

    Attributes:
        program: Executable name (resolved via PATH) or path
        args: Ordered command-line arguments, excluding the program
        cwd: Working directory, or None for the caller's
        env: Variables overlaid on the caller's environment, or None
        stdin: Input source; None inherits the caller's standard input
        stdout_sink: Destination for raw stdout when not streaming to the log
        stderr_sink: Destination for raw stderr when not streaming to the log
    """

    program: str
    args: Sequence[str] = field(default_factory=tuple)
    cwd: str | None = None
    env: Mapping[str, str] | None = None
    stdin: IO[Any] | int | None = None
    stdout_sink: IO[bytes] | None = None
    stderr_sink: IO[bytes] | None = None

    @property
    def argv(self) -> list[str]:
        """Full argument vector, program first."""
        return [self.program, *self.args]

    def display(self) -> str:
        """Human-readable command line for log messages."""
        return " ".join(self.argv)
