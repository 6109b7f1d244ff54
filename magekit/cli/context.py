"""
Click context extension for magekit CLI.

Provides MagekitContext dataclass that holds magekit-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.cancellation import CancellationContext

if TYPE_CHECKING:
    from ..core.container import ServiceContainer
    from ..core.interfaces.process import IExecutor
    from ..core.settings import MagekitSettings
    from ..services.tools import GoRunner, HelmRunner, KoRunner


@dataclass
class MagekitContext:
    """Extended context passed through Click command chain.

    Attributes:
        settings: Merged settings (TOML, environment, CLI flags)
        container: Bootstrapped service container
        timeout: Seconds before an invocation is cancelled (None = no limit)
    """

    settings: MagekitSettings
    container: ServiceContainer
    timeout: float | None = None

    @classmethod
    def create(
        cls,
        log_level: str | None = None,
        stream_to_log: bool | None = None,
        timeout: float | None = None,
    ) -> MagekitContext:
        """Load settings, apply CLI overrides, and bootstrap the container.

        Args:
            log_level: Overrides logging.level
            stream_to_log: Overrides execution.stream_to_log
            timeout: Overrides execution.timeout

        Returns:
            Configured MagekitContext instance
        """
        from ..core.bootstrap import bootstrap
        from ..core.settings import load_settings

        settings = load_settings()
        if log_level is not None:
            settings.logging.level = log_level  # type: ignore[assignment]
        if stream_to_log is not None:
            settings.execution.stream_to_log = stream_to_log
        if timeout is not None:
            settings.execution.timeout = timeout

        container = bootstrap(settings)

        if settings.config_error:
            from ..core.interfaces.logger import ILogger

            container.resolve(ILogger).warning(settings.config_error)  # type: ignore[type-abstract]

        return cls(
            settings=settings,
            container=container,
            timeout=settings.execution.timeout,
        )

    def new_cancellation_context(self) -> CancellationContext:
        """Create the context governing one CLI invocation."""
        if self.timeout:
            return CancellationContext.with_timeout(self.timeout)
        return CancellationContext.background()

    @property
    def executor(self) -> IExecutor:
        from ..core.interfaces.process import IExecutor

        return self.container.resolve(IExecutor)  # type: ignore[type-abstract]

    @property
    def stream_to_log(self) -> bool:
        return self.settings.execution.stream_to_log

    @property
    def go(self) -> GoRunner:
        from ..services.tools import GoRunner

        return self.container.resolve(GoRunner)

    @property
    def helm(self) -> HelmRunner:
        from ..services.tools import HelmRunner

        return self.container.resolve(HelmRunner)

    @property
    def ko(self) -> KoRunner:
        from ..services.tools import KoRunner

        return self.container.resolve(KoRunner)
