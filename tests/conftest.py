"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

import io
import json
from collections.abc import Callable, Sequence

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache


@pytest.fixture
def user(db):
    """Return a regular (non-admin) user."""

    user_model = get_user_model()
    return user_model.objects.create_user(username="alice", password="password")


@pytest.fixture(autouse=True)
def _clear_cache():
    """Start every test with an empty market-data cache."""

    cache.clear()
    yield
    cache.clear()


class _FakeResponse(io.BytesIO):
    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@pytest.fixture
def fake_feed(monkeypatch, settings) -> Callable[[dict[str, object]], list[str]]:
    """Serve canned JSON for market-data URLs instead of the network.

    Returns:
        A function taking a `{url: payload}` mapping that installs the fake
        `urlopen` and returns the list that records requested URLs.
    """

    settings.NUMORA_MARKET_DATA_URL = "https://feed.test/market-data"
    settings.NUMORA_ORDER_BOOK_URL = "https://feed.test/book/{symbol}"
    requested: list[str] = []

    def install(responses: dict[str, object]) -> list[str]:
        def fake_urlopen(request, timeout=None):
            url = request.full_url
            requested.append(url)
            if url not in responses:
                raise OSError(f"unexpected url {url}")
            payload = responses[url]
            body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
            return _FakeResponse(body)

        monkeypatch.setattr("core.market_feed.urllib.request.urlopen", fake_urlopen)
        return requested

    return install


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, database, views, commands, or IO.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
