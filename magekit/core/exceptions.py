"""
Custom exception hierarchy for magekit.

Every failure a wrapped tool can produce is raised as one of these typed
exceptions so callers (and the CLI) can tell a bad option apart from a tool
that could not start, a tool that failed, and a cancelled invocation.
"""

from __future__ import annotations


class MagekitException(Exception):
    """
    Base exception for all magekit errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (program, exit code, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Validation Errors
# =============================================================================


class MagekitValidationError(MagekitException, ValueError):
    """
    Base class for input validation errors.

    Inherits from ValueError so plain ``except ValueError`` handlers work.
    """

    pass


class OptionValidationError(MagekitValidationError):
    """
    A required tool option was empty or missing.

    Raised by the tool runners before any process is spawned.
    """

    exit_code: int = 2

    def __init__(
        self,
        message: str,
        *,
        option: str | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if option:
            ctx["option"] = option
        super().__init__(message, context=ctx, cause=cause)
        self.option = option


# =============================================================================
# Execution Errors
# =============================================================================


class ExecutionError(MagekitException):
    """
    Base class for process execution errors.

    Attributes:
        program: Name or path of the program that was executed
        phase: One of 'start', 'stream', 'run', 'cancelled'
    """

    phase: str = "run"

    def __init__(
        self,
        message: str,
        *,
        program: str | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if program:
            ctx["program"] = program
        super().__init__(message, context=ctx, cause=cause)
        self.program = program


class ProcessStartError(ExecutionError):
    """
    The program could not be spawned.

    Raised for a missing executable, a permission error, or an empty
    program name. No process is running when this is raised.
    """

    phase = "start"
    exit_code: int = 127


class StreamReadError(ExecutionError):
    """
    Reading one of the child's output streams failed.

    Raised inside a stream consumer when a line exceeds the maximum buffer
    size or the pipe read fails. Consumers log it and stop reading that
    stream; it never fails the invocation on its own.
    """

    phase = "stream"

    def __init__(
        self,
        message: str,
        *,
        program: str | None = None,
        stream: str | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if stream:
            ctx["stream"] = stream
        super().__init__(message, program=program, context=ctx, cause=cause)
        self.stream = stream


class ProcessRunError(ExecutionError):
    """
    The program exited with a non-zero status.

    Attributes:
        returncode: Exit status reported by the process (negative for signals)
    """

    phase = "run"

    def __init__(
        self,
        message: str,
        *,
        program: str | None = None,
        returncode: int | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if returncode is not None:
            ctx["returncode"] = returncode
        super().__init__(message, program=program, context=ctx, cause=cause)
        self.returncode = returncode


class ProcessCancelledError(ExecutionError):
    """
    The governing cancellation context was cancelled while the program ran.

    The cancellation cause (e.g. DeadlineExceeded, an interrupt) is chained
    as ``__cause__``.
    """

    phase = "cancelled"
    exit_code: int = 130


class DeadlineExceeded(MagekitException):
    """Cancellation cause used when a context's deadline passes."""

    exit_code: int = 124

    def __init__(self, message: str = "context deadline exceeded", **kwargs) -> None:
        super().__init__(message, **kwargs)


class Cancelled(MagekitException):
    """Default cancellation cause when a context is cancelled explicitly."""

    exit_code: int = 130

    def __init__(self, message: str = "context cancelled", **kwargs) -> None:
        super().__init__(message, **kwargs)
