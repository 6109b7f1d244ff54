"""
Core infrastructure for magekit.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- CancellationContext for cooperative cancellation
- Protocol definitions for service interfaces
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .cancellation import CancellationContext
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    Cancelled,
    DeadlineExceeded,
    ExecutionError,
    MagekitException,
    MagekitValidationError,
    OptionValidationError,
    ProcessCancelledError,
    ProcessRunError,
    ProcessStartError,
    StreamReadError,
)

__all__ = [
    "CancellationContext",
    "Cancelled",
    "DeadlineExceeded",
    "ExecutionError",
    "MagekitException",
    "MagekitValidationError",
    "OptionValidationError",
    "ProcessCancelledError",
    "ProcessRunError",
    "ProcessStartError",
    "ServiceContainer",
    "StreamReadError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "resolve",
    "try_resolve",
]
