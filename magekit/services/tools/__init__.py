"""Runners for the wrapped command-line tools (go, helm, ko)."""

from .base import ToolRunner
from .golang import GoRunner
from .helm import HelmRunner
from .ko import KoRunner

__all__ = [
    "GoRunner",
    "HelmRunner",
    "KoRunner",
    "ToolRunner",
]
