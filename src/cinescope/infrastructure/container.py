"""Dependency injection container."""

import inspect
import logging
from typing import Any, Dict, Optional, Type, TypeVar

from ..config import Config, ConfigManager
from ..core.interfaces import ISearchService, ISessionProvider, IWatchlistService

T = TypeVar("T")


class Container:
    """Per-invocation registry wiring the CLI's services together.

    Every registration is a singleton: the first ``get`` builds the
    implementation, filling constructor parameters from their annotations.
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None) -> None:
        """Initialize container.

        Args:
            config_manager: Configuration manager instance. If None, creates default.
        """
        self._implementations: Dict[Type, Type] = {}
        self._instances: Dict[Type, Any] = {}
        self._config_manager = config_manager or ConfigManager()
        self._config: Optional[Config] = None
        self._logger = logging.getLogger(__name__)

    def register_singleton(self, interface: Type[T], implementation: Type[Any]) -> None:
        """Register the class built the first time ``interface`` is requested."""
        self._implementations[interface] = implementation
        self._logger.debug(
            f"Registered singleton: {interface.__name__} -> {implementation.__name__}"
        )

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """Register a pre-built instance, replacing any class registration."""
        self._instances[interface] = instance
        self._logger.debug(f"Registered instance: {interface.__name__}")

    def get(self, interface: Type[T]) -> T:
        """Get service instance.

        Args:
            interface: Interface type to resolve.

        Returns:
            Service instance.

        Raises:
            ValueError: If service is not registered.
        """
        if interface in self._instances:
            return self._instances[interface]  # type: ignore

        if interface not in self._implementations:
            raise ValueError(f"Service not registered: {interface.__name__}")

        instance = self._build(self._implementations[interface])
        self._instances[interface] = instance
        return instance  # type: ignore

    def _build(self, implementation: Type[T]) -> T:
        kwargs = {}
        for name, param in inspect.signature(implementation.__init__).parameters.items():
            if name == "self":
                continue
            if param.annotation is Config:
                kwargs[name] = self.get_config()
            elif param.annotation in self._instances or param.annotation in self._implementations:
                kwargs[name] = self.get(param.annotation)
            elif param.default is inspect.Parameter.empty:
                self._logger.warning(
                    f"Cannot resolve dependency: {name} of type {param.annotation}"
                )

        return implementation(**kwargs)

    def get_config(self) -> Config:
        """Get configuration, loading it on first use."""
        if self._config is None:
            self._config = self._config_manager.get_config()
        return self._config

    def configure_default_services(self) -> None:
        """Configure default service registrations."""
        from ..core.services import (
            MovieSearchService,
            Pager,
            SearchOrchestrator,
            TokenSessionProvider,
            WatchlistOverlay,
            WatchlistService,
        )

        # Remote collaborators
        self.register_singleton(ISessionProvider, TokenSessionProvider)  # type: ignore
        self.register_singleton(ISearchService, MovieSearchService)  # type: ignore
        self.register_singleton(IWatchlistService, WatchlistService)  # type: ignore

        # Core components
        self.register_singleton(WatchlistOverlay, WatchlistOverlay)
        self.register_singleton(SearchOrchestrator, SearchOrchestrator)
        self.register_singleton(Pager, Pager)

        self._logger.info("Default services configured")

    async def aclose(self) -> None:
        """Close HTTP sessions held by the services created so far."""
        for instance in list(self._instances.values()):
            close = getattr(instance, "close", None)
            if close is not None and inspect.iscoroutinefunction(close):
                await close()
