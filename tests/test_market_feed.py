"""Tests for the cached market-data fetch interface."""

from __future__ import annotations

import pytest

from analysis.dto import OrderBookLevel
from core.market_feed import MarketFeedError, fetch_market_tickers, fetch_order_book

pytestmark = pytest.mark.integration

MARKET_URL = "https://feed.test/market-data"
MARKET_PAYLOAD = {
    "marketData": [
        {"symbol": "BTC-PERP", "price": "97000", "change24h": "1.5", "volume24h": "1000"},
        {"symbol": "ETH-PERP", "price": "3000", "change24h": "-2.0", "volume24h": "500"},
    ]
}


def test_fetch_market_tickers_parses_and_caches(fake_feed) -> None:
    """One upstream request serves repeated reads within the cache window."""

    requested = fake_feed({MARKET_URL: MARKET_PAYLOAD})

    first = fetch_market_tickers()
    second = fetch_market_tickers()

    assert [ticker.symbol for ticker in first] == ["BTC-PERP", "ETH-PERP"]
    assert second == first
    assert requested == [MARKET_URL]


def test_fetch_market_tickers_bypasses_cache_on_request(fake_feed) -> None:
    """`use_cache=False` always hits the endpoint."""

    requested = fake_feed({MARKET_URL: MARKET_PAYLOAD})
    fetch_market_tickers()
    fetch_market_tickers(use_cache=False)
    assert requested == [MARKET_URL, MARKET_URL]


def test_fetch_market_tickers_without_url_returns_empty(settings, monkeypatch) -> None:
    """No configured URL means no network access and no tickers."""

    settings.NUMORA_MARKET_DATA_URL = ""

    def fail(*args, **kwargs):
        raise AssertionError("urlopen must not be called")

    monkeypatch.setattr("core.market_feed.urllib.request.urlopen", fail)
    assert fetch_market_tickers() == ()


def test_fetch_market_tickers_network_error_raises_feed_error(fake_feed) -> None:
    """Transport failures surface as MarketFeedError."""

    fake_feed({})
    with pytest.raises(MarketFeedError):
        fetch_market_tickers()


def test_fetch_market_tickers_invalid_json_raises_feed_error(fake_feed) -> None:
    """Undecodable bodies surface as MarketFeedError."""

    fake_feed({MARKET_URL: b"<html>not json</html>"})
    with pytest.raises(MarketFeedError):
        fetch_market_tickers()


def test_fetch_market_tickers_unknown_shape_raises_feed_error(fake_feed) -> None:
    """Payloads without a row list surface as MarketFeedError."""

    fake_feed({MARKET_URL: {"status": "ok"}})
    with pytest.raises(MarketFeedError):
        fetch_market_tickers()


def test_fetch_order_book_parses_levels_payload(fake_feed) -> None:
    """`{"levels": [bids, asks]}` payloads are parsed into levels."""

    fake_feed(
        {
            "https://feed.test/book/BTC-PERP": {
                "coin": "BTC",
                "levels": [
                    [{"px": "97000", "sz": "1.5", "n": 2}],
                    [{"px": "97010", "sz": "0.5", "n": 1}],
                ],
            }
        }
    )
    bids, asks = fetch_order_book("BTC-PERP")
    assert bids == (OrderBookLevel(97000.0, 1.5),)
    assert asks == (OrderBookLevel(97010.0, 0.5),)


def test_fetch_order_book_parses_bids_asks_payload(fake_feed) -> None:
    """`{"bids": [...], "asks": [...]}` payloads are parsed into levels."""

    fake_feed({"https://feed.test/book/ETH": {"bids": [["3000", "2"]], "asks": [["3001", "1"]]}})
    bids, asks = fetch_order_book("ETH")
    assert bids == (OrderBookLevel(3000.0, 2.0),)
    assert asks == (OrderBookLevel(3001.0, 1.0),)


def test_fetch_order_book_rejects_payload_without_levels(fake_feed) -> None:
    """A payload with neither shape is an error."""

    fake_feed({"https://feed.test/book/BTC": {"coin": "BTC"}})
    with pytest.raises(MarketFeedError):
        fetch_order_book("BTC")


def test_fetch_order_book_quotes_symbol_in_url(fake_feed) -> None:
    """Symbols are URL-quoted before substitution."""

    requested = fake_feed({"https://feed.test/book/BTC%2FUSD": {"bids": [], "asks": []}})
    assert fetch_order_book("BTC/USD") == ((), ())
    assert requested == ["https://feed.test/book/BTC%2FUSD"]
