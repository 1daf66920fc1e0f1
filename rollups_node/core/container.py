"""
Dependency injection container for the rollups node.

Uses dependency-injector for DI with support for:
- Singleton registration of pre-built instances or lazy factories
- Interface-based resolution
- A registry of service variants, keyed by service name

The container is built once by ``bootstrap()`` and passed down
explicitly; there is no process-wide instance.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from dependency_injector import providers

from .exceptions import ConfigValidationError
from .interfaces.service import IService

T = TypeVar("T")

ServiceFactory = Callable[..., IService]


class ServiceContainer:
    """
    Dependency injection container for the node.

    Combines dependency-injector's providers for core collaborators
    (config, logger) with a registry of service variants.
    """

    def __init__(self) -> None:
        """Initialize the container with empty registries."""
        # Dynamic provider storage (interface -> provider)
        self._providers: dict[type, providers.Provider] = {}

        # Service variants (name -> class or factory)
        self._service_variants: dict[str, ServiceFactory] = {}
        self._service_options: dict[str, dict[str, Any]] = {}

    # -------------------------------------------------------------------------
    # Core service registration (uses dependency-injector providers)
    # -------------------------------------------------------------------------

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface/model type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            # Use Object provider for pre-created instances
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            # Use Singleton provider with factory for lazy initialization
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    # -------------------------------------------------------------------------
    # Service variant registry
    # -------------------------------------------------------------------------

    def register_service(self, name: str, factory: ServiceFactory, **options: Any) -> None:
        """
        Register a service variant.

        Args:
            name: Service name (e.g., 'graphql-server')
            factory: Class or callable accepting ``logger`` and
                ``shutdown_timeout`` keyword arguments
            **options: Extra keyword arguments bound to this variant only
                (e.g., the port it listens on)
        """
        self._service_variants[name] = factory
        self._service_options[name] = options

    def get_service_factory(self, name: str) -> ServiceFactory:
        """
        Get a registered service variant by name.

        Raises:
            KeyError: If no variant is registered under ``name``
        """
        if name not in self._service_variants:
            raise KeyError(f"No service registered: {name}")
        return self._service_variants[name]

    def list_services(self) -> list[str]:
        """List registered service names in registration order."""
        return list(self._service_variants.keys())

    def create_services(self, names: list[str] | tuple[str, ...], **kwargs: Any) -> list[IService]:
        """
        Instantiate the named service variants.

        Args:
            names: Service names, in the order they should be supervised
            **kwargs: Passed to every variant factory

        Raises:
            ConfigValidationError: If a name is not registered
        """
        unknown = [name for name in names if name not in self._service_variants]
        if unknown:
            raise ConfigValidationError(
                f"unknown service(s): {', '.join(unknown)}",
                context={"available": self.list_services()},
            )
        return [
            self._service_variants[name](**self._service_options[name], **kwargs)
            for name in names
        ]
