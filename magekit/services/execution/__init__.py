"""Process execution services: spawning, output streaming, and cancellation."""

from .executor import ProcessExecutor
from .signal_handler import ProcessSignalHandler
from .spawner import SubprocessHandle, SubprocessSpawner
from .streams import INITIAL_BUFFER_SIZE, MAX_LINE_SIZE, LineReader

__all__ = [
    "INITIAL_BUFFER_SIZE",
    "MAX_LINE_SIZE",
    "LineReader",
    "ProcessExecutor",
    "ProcessSignalHandler",
    "SubprocessHandle",
    "SubprocessSpawner",
]
