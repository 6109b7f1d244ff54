"""
Pydantic models for magekit.

This package provides typed, validated models for tool options,
configuration, and process invocations.
"""

from .base import MagekitBaseModel
from .config import (
    ExecutionConfig,
    LoggingConfig,
    MagekitConfig,
    ToolsConfig,
)
from .options import (
    GoBuildOptions,
    HelmInstallOptions,
    HelmUpgradeOptions,
    KoApplyOptions,
    KoBuildOptions,
    KoDeleteOptions,
)
from .process import ProcessSpec

__all__ = [
    "ExecutionConfig",
    "GoBuildOptions",
    "HelmInstallOptions",
    "HelmUpgradeOptions",
    "KoApplyOptions",
    "KoBuildOptions",
    "KoDeleteOptions",
    "LoggingConfig",
    "MagekitBaseModel",
    "MagekitConfig",
    "ProcessSpec",
    "ToolsConfig",
]
