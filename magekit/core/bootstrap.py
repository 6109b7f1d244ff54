"""
Application bootstrap for magekit.

Initializes the DI container with the logger, the process executor and the
tool runners. Call once at application startup; library users can skip it
and construct runners with an explicit executor instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.process import IExecutor, IProcessSpawner

if TYPE_CHECKING:
    from .settings import MagekitSettings

_initialized = False


def bootstrap(settings: MagekitSettings | None = None) -> ServiceContainer:
    """
    Bootstrap the magekit application.

    Args:
        settings: Loaded settings (default: load_settings())

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    if settings is None:
        from .settings import load_settings

        settings = load_settings()

    _register_core_services(container, settings)
    _register_tool_runners(container, settings)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: MagekitSettings) -> None:
    """Register logger, spawner and executor."""
    from ..services.execution import ProcessExecutor, SubprocessSpawner
    from ..services.logging import MagekitLogger

    def create_logger() -> ILogger:
        return MagekitLogger(
            level=settings.logging.level,
            console_enabled=settings.logging.console,
            file_enabled=settings.logging.file,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]

    def create_spawner() -> IProcessSpawner:
        return SubprocessSpawner(logger=container.resolve(ILogger))  # type: ignore[type-abstract]

    container.register_singleton(IProcessSpawner, factory=create_spawner)  # type: ignore[type-abstract]

    def create_executor() -> IExecutor:
        return ProcessExecutor(
            spawner=container.resolve(IProcessSpawner),  # type: ignore[type-abstract]
            logger=container.resolve(ILogger),  # type: ignore[type-abstract]
            kill_grace_seconds=settings.execution.kill_grace_seconds,
        )

    container.register_singleton(IExecutor, factory=create_executor)  # type: ignore[type-abstract]


def _register_tool_runners(container: ServiceContainer, settings: MagekitSettings) -> None:
    """Register the go, helm and ko runners."""
    from ..services.tools import GoRunner, HelmRunner, KoRunner

    for runner_cls in (GoRunner, HelmRunner, KoRunner):

        def create_runner(cls=runner_cls):
            return cls(
                executor=container.resolve(IExecutor),  # type: ignore[type-abstract]
                logger=container.resolve(ILogger),  # type: ignore[type-abstract]
                stream_to_log=settings.execution.stream_to_log,
                tools=settings.tools,
            )

        container.register_singleton(runner_cls, factory=create_runner)


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
