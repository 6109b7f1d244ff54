"""
Protocol definitions for magekit's service interfaces.

These protocols define the contracts that implementations must follow,
enabling dependency inversion and test doubles for the process layer.
"""

from .logger import ILogger
from .process import IExecutor, IProcessHandle, IProcessSpawner

__all__ = [
    "IExecutor",
    "ILogger",
    "IProcessHandle",
    "IProcessSpawner",
]
