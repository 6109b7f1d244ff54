"""
Click command implementations for magekit CLI.

Each module corresponds to a top-level magekit command (e.g., helm.py
implements 'magekit helm ...').
"""

from .exec import exec_
from .go import go
from .helm import helm
from .ko import ko

COMMANDS = [
    exec_,
    go,
    helm,
    ko,
]

__all__ = [
    "COMMANDS",
    "exec_",
    "go",
    "helm",
    "ko",
]
