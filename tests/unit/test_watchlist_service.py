"""Unit tests for the watchlist service."""

import json

import httpx
import pytest

from cinescope.core.models import MembershipState, WatchlistStatus
from cinescope.core.services import WatchlistOverlay
from cinescope.core.services.watchlist_service import WatchlistService
from cinescope.utils import AuthenticationRequiredError, WatchlistServiceError

BASE = "http://localhost:8080/api/watchlist"


def _entry(entry_id=1, movie_id=603, status="WANT_TO_WATCH"):
    return {
        "id": entry_id,
        "userId": 7,
        "movieId": movie_id,
        "movieTitle": "The Matrix",
        "movieReleaseYear": 1999,
        "status": status,
        "addedAt": "2024-05-01T10:00:00",
    }


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def make_service(config, session, requests_seen):
    """Build a WatchlistService whose HTTP client answers with ``handler``."""

    def build(handler):
        def record(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        service = WatchlistService(config, session)
        service._client = httpx.AsyncClient(transport=httpx.MockTransport(record))
        return service

    return build


@pytest.mark.unit
@pytest.mark.asyncio
async def test_is_member_sends_bearer_token(make_service, requests_seen):
    """Test membership check and authentication header."""
    service = make_service(lambda request: httpx.Response(200, json=True))

    assert await service.is_member(603) is True

    request = requests_seen[0]
    assert request.method == "GET"
    assert str(request.url) == f"{BASE}/check/603"
    assert request.headers["Authorization"] == "Bearer test-token"
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_add_posts_movie_and_status(make_service, requests_seen):
    """Test adding a movie with its initial status."""
    service = make_service(lambda request: httpx.Response(201, json=_entry()))

    entry = await service.add(603, WatchlistStatus.WATCHING)

    request = requests_seen[0]
    assert request.method == "POST"
    assert request.url.params["movieId"] == "603"
    assert request.url.params["status"] == "WATCHING"
    assert entry.movie_id == 603
    assert entry.movie_title == "The Matrix"
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_add_conflict_is_reported(make_service):
    """Test that HTTP errors are wrapped with their status."""
    service = make_service(lambda request: httpx.Response(409, text="duplicate"))

    with pytest.raises(WatchlistServiceError) as exc_info:
        await service.add(603)

    assert exc_info.value.status_code == 409
    assert "Error 409" in str(exc_info.value)
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_add_is_not_retried(make_service, requests_seen):
    """Test that a failed write is sent once."""

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    service = make_service(handler)

    with pytest.raises(WatchlistServiceError, match="Cannot connect to server."):
        await service.add(603)

    assert len(requests_seen) == 1
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_lookup_retries_transport_errors(make_service, requests_seen):
    """Test that idempotent reads are retried on connection failures."""
    calls = {"count": 0}

    def handler(request):
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json=False)

    service = make_service(handler)

    assert await service.is_member(603) is False
    assert len(requests_seen) == 2
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_entries_by_status(make_service, requests_seen):
    """Test listing one status page by page."""
    body = {
        "content": [_entry(1), _entry(2, movie_id=604)],
        "totalPages": 1,
        "totalElements": 2,
        "size": 10,
        "number": 0,
    }
    service = make_service(lambda request: httpx.Response(200, json=body))

    page = await service.list_entries(page=0, size=10, status=WatchlistStatus.WANT_TO_WATCH)

    request = requests_seen[0]
    assert request.url.path == "/api/watchlist/status/WANT_TO_WATCH"
    assert request.url.params["size"] == "10"
    assert [entry.movie_id for entry in page.content] == [603, 604]
    assert page.total_elements == 2
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_entry_not_found(make_service):
    """Test that a movie without entry gives None."""
    service = make_service(lambda request: httpx.Response(404))

    assert await service.get_entry(603) is None
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_status_and_details(make_service, requests_seen):
    """Test changing an entry."""
    service = make_service(lambda request: httpx.Response(200, json=_entry(status="WATCHED")))

    entry = await service.update_status(1, WatchlistStatus.WATCHED)
    await service.update_details(1, is_public=False, notes="rewatch")

    assert entry.status == WatchlistStatus.WATCHED
    assert requests_seen[0].method == "PUT"
    assert requests_seen[0].url.params["status"] == "WATCHED"
    assert requests_seen[1].method == "PATCH"
    assert requests_seen[1].url.path == "/api/watchlist/1/details"
    assert requests_seen[1].url.params["isPublic"] == "false"
    assert requests_seen[1].url.params["notes"] == "rewatch"
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_remove_and_stats(make_service, requests_seen):
    """Test removing an entry and reading counts."""

    def handler(request):
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, content=json.dumps({"totalCount": 3, "watchedCount": 1}))

    service = make_service(handler)

    await service.remove(5)
    stats = await service.get_stats()

    assert requests_seen[0].method == "DELETE"
    assert requests_seen[0].url.path == "/api/watchlist/5"
    assert stats.total_count == 3
    assert stats.watched_count == 1
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_requests_need_a_token(make_service, session, requests_seen):
    """Test that no request is sent without a session."""
    session.logout()
    service = make_service(lambda request: httpx.Response(200, json=True))

    with pytest.raises(AuthenticationRequiredError):
        await service.is_member(603)

    assert requests_seen == []
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unexpected_body(make_service):
    """Test that a body that is not JSON is reported."""
    service = make_service(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(WatchlistServiceError, match="Unexpected watchlist response"):
        await service.get_stats()
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_undecodable_response_is_reported_once(make_service, requests_seen):
    """Test that a body httpx cannot decode becomes a service error and is not retried."""

    def handler(request):
        raise httpx.DecodingError("bad gzip stream", request=request)

    service = make_service(handler)

    with pytest.raises(WatchlistServiceError, match="Request failed: bad gzip stream"):
        await service.is_member(603)

    assert len(requests_seen) == 1
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_redirect_loop_is_reported(make_service):
    """Test that too many redirects become a service error."""

    def handler(request):
        raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)

    service = make_service(handler)

    with pytest.raises(WatchlistServiceError, match="Request failed"):
        await service.add(603)
    await service.close()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_undecodable_lookup_leaves_movie_retryable(make_service, session):
    """Test that a lookup failing to decode is dropped and retried on the next refresh."""
    calls = {"count": 0}

    def handler(request):
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.DecodingError("bad gzip stream", request=request)
        return httpx.Response(200, json=True)

    service = make_service(handler)
    overlay = WatchlistOverlay(service, session)

    overlay.refresh([5])
    await overlay.wait_idle()

    assert overlay.cache.get(5) == MembershipState.ABSENT
    assert overlay.is_in_watchlist(5) is False

    assert len(overlay.refresh([5])) == 1
    await overlay.wait_idle()

    assert overlay.cache.get(5) == MembershipState.IN_WATCHLIST
    await service.close()
