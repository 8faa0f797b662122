"""Tests for the dependency injection container."""

import pytest

from cinescope.core.interfaces import ISearchService, ISessionProvider, IWatchlistService
from cinescope.core.services import (
    MovieSearchService,
    Pager,
    SearchOrchestrator,
    TokenSessionProvider,
    WatchlistOverlay,
    WatchlistService,
)


@pytest.mark.unit
def test_default_services_resolve(container):
    """Test that the default registrations build the whole graph."""
    container.configure_default_services()

    assert isinstance(container.get(ISearchService), MovieSearchService)
    assert isinstance(container.get(IWatchlistService), WatchlistService)
    assert isinstance(container.get(ISessionProvider), TokenSessionProvider)

    pager = container.get(Pager)
    orchestrator = container.get(SearchOrchestrator)

    assert isinstance(pager, Pager)
    assert pager.filters is orchestrator.filters
    assert orchestrator.overlay is container.get(WatchlistOverlay)
    assert orchestrator.filters.size == 20


@pytest.mark.unit
def test_registered_instance_wins(container, search_service):
    """Test that pre-built instances are injected into dependents."""
    container.configure_default_services()
    container.register_instance(ISearchService, search_service)

    assert container.get(ISearchService) is search_service


@pytest.mark.unit
def test_unregistered_service(container):
    """Test that resolving an unknown service fails."""
    with pytest.raises(ValueError):
        container.get(Pager)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_aclose_closes_http_clients(container):
    """Test that closing the container closes created clients."""
    container.configure_default_services()
    service = container.get(IWatchlistService)
    service._get_client()

    await container.aclose()

    assert service._client is None


@pytest.mark.unit
def test_instances_injected_into_dependents(container, search_service, watchlist_service):
    """Test that registered instances are passed to the services built from them."""
    container.configure_default_services()
    container.register_instance(ISearchService, search_service)
    container.register_instance(IWatchlistService, watchlist_service)

    orchestrator = container.get(SearchOrchestrator)

    assert orchestrator._search_service is search_service
    assert orchestrator.overlay._watchlist_service is watchlist_service
    assert container.get(SearchOrchestrator) is orchestrator


@pytest.mark.unit
def test_config_loaded_once(container):
    """Test that the container hands out one configuration object."""
    assert container.get_config() is container.get_config()
    assert container.get_config().search.default_page_size == 20
