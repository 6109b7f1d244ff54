"""
magekit - build automation helpers for Go, Helm and ko.

Runs external tools with live output, typed options and cooperative
cancellation. Library users build runners directly:

    from magekit import CancellationContext, HelmRunner, HelmUpgradeOptions

    HelmRunner().upgrade(HelmUpgradeOptions(release_name="api", chart="./chart"))
"""

from .core.cancellation import CancellationContext
from .core.exceptions import (
    ExecutionError,
    MagekitException,
    OptionValidationError,
    ProcessCancelledError,
    ProcessRunError,
    ProcessStartError,
    StreamReadError,
)
from .core.models import (
    GoBuildOptions,
    HelmInstallOptions,
    HelmUpgradeOptions,
    KoApplyOptions,
    KoBuildOptions,
    KoDeleteOptions,
)
from .services.execution import ProcessExecutor
from .services.tools import GoRunner, HelmRunner, KoRunner

__all__ = [
    "CancellationContext",
    "ExecutionError",
    "GoBuildOptions",
    "GoRunner",
    "HelmInstallOptions",
    "HelmRunner",
    "HelmUpgradeOptions",
    "KoApplyOptions",
    "KoBuildOptions",
    "KoDeleteOptions",
    "KoRunner",
    "MagekitException",
    "OptionValidationError",
    "ProcessCancelledError",
    "ProcessExecutor",
    "ProcessRunError",
    "ProcessStartError",
    "StreamReadError",
]
