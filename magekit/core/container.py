"""
Dependency injection container for magekit.

Uses dependency-injector for DI with support for:
- Singleton and transient lifetimes
- Factory registration
- Interface-based resolution
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """
    Dependency injection container for magekit.

    Maps interface types to dependency-injector providers. The process
    spawner, executor, logger and tool runners are registered here by
    bootstrap(); tests override individual providers.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        """Initialize the container with no providers."""
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the application container instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the application container (for testing)."""
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface/protocol type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def register_transient(
        self,
        interface: type[T],
        factory: Callable[..., T],
    ) -> None:
        """
        Register a transient service (new instance per resolve).

        Args:
            interface: The interface/protocol type
            factory: Factory function or class
        """
        self._providers[interface] = providers.Factory(factory)

    def register_class(
        self,
        interface: type[T],
        implementation: type[T],
        scope: str = "singleton",
    ) -> None:
        """
        Register a class implementation.

        Args:
            interface: The interface/protocol type
            implementation: Concrete class type
            scope: 'singleton' or 'transient'
        """
        if scope == "singleton":
            self._providers[interface] = providers.Singleton(implementation)
        else:
            self._providers[interface] = providers.Factory(implementation)

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Try to resolve a service, returning None if not registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    def is_registered(self, interface: type) -> bool:
        return interface in self._providers

    def override(self, interface: type[T], provider: providers.Provider) -> None:
        """
        Override a registered provider (useful for testing).

        Args:
            interface: The interface to override
            provider: The new provider to use
        """
        self._providers[interface] = provider


def get_container() -> ServiceContainer:
    """Get the application service container instance."""
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Resolve a service from the application container."""
    return get_container().resolve(interface)


def try_resolve(interface: type[T]) -> T | None:
    """Try to resolve a service, returning None if not registered."""
    return get_container().try_resolve(interface)
