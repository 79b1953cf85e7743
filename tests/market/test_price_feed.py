"""Tests for the mock price feed and ticker."""

import random
import time
from datetime import datetime, timezone

import pytest

from journal_app.config.defaults import PriceFeedParams
from journal_app.market.feed import MarketQuote, MockPriceFeed, PriceHistory, PriceTicker

NOW = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def params() -> PriceFeedParams:
    return PriceFeedParams()


@pytest.fixture
def feed(params) -> MockPriceFeed:
    return MockPriceFeed(params, rng=random.Random(42), clock=lambda: NOW)


def make_quote(price: float, change: float = 0.0) -> MarketQuote:
    return MarketQuote(symbol="XAUUSD", price=price, change=change, change_percent=0.0, timestamp=NOW)


class TestMockPriceFeed:
    """Test MockPriceFeed."""

    def test_quotes_stay_in_band(self, feed, params):
        for _ in range(200):
            quote = feed.fetch()
            assert abs(quote.price - params.base_price) <= params.price_jitter / 2
            assert abs(quote.change) <= params.change_jitter / 2
            assert abs(quote.change_percent) <= params.change_pct_jitter / 2
            assert quote.symbol == "XAUUSD"
            assert quote.timestamp == NOW

    def test_seeded_feeds_repeat(self, params):
        a = MockPriceFeed(params, rng=random.Random(7), clock=lambda: NOW)
        b = MockPriceFeed(params, rng=random.Random(7), clock=lambda: NOW)
        assert [a.fetch() for _ in range(5)] == [b.fetch() for _ in range(5)]

    def test_midpoint(self, params):
        """u = 0.5 yields the base price with no change."""
        rng = random.Random()
        rng.random = lambda: 0.5
        quote = MockPriceFeed(params, rng=rng, clock=lambda: NOW).fetch()
        assert quote.price == params.base_price
        assert quote.change == 0.0

    def test_is_positive(self):
        assert make_quote(1.0, change=0.0).is_positive is True
        assert make_quote(1.0, change=-0.1).is_positive is False


class TestPriceHistory:
    """Test PriceHistory."""

    def test_keeps_most_recent(self):
        history = PriceHistory(maxlen=3)
        for price in [1.0, 2.0, 3.0, 4.0, 5.0]:
            history.add(make_quote(price))

        assert len(history) == 3
        assert [p.price for p in history.points()] == [3.0, 4.0, 5.0]

    def test_point_label(self):
        point = PriceHistory().add(make_quote(2020.0))
        assert len(point.time) == 5
        assert point.time[2] == ":"


class TestPriceTicker:
    """Test PriceTicker."""

    def test_defaults_from_params(self, feed, params):
        ticker = PriceTicker(feed)
        assert ticker.interval_seconds == params.poll_interval_seconds
        assert ticker.latest is None

    def test_poll_once(self, feed):
        ticker = PriceTicker(feed, history=PriceHistory(maxlen=2))
        first = ticker.poll_once()
        second = ticker.poll_once()
        third = ticker.poll_once()

        assert ticker.latest == third
        assert [p.price for p in ticker.history.points()] == [second.price, third.price]
        assert first != third

    def test_start_and_stop(self, feed):
        ticker = PriceTicker(feed, interval_seconds=0.01)
        ticker.start()
        try:
            deadline = time.monotonic() + 2.0
            while len(ticker.history) < 2 and time.monotonic() < deadline:
                time.sleep(0.01)
            assert ticker.running is True
        finally:
            ticker.stop(timeout=1.0)

        assert ticker.running is False
        assert len(ticker.history) >= 2

    def test_failed_poll_keeps_running(self, params):
        class BrokenFeed(MockPriceFeed):
            def fetch(self):
                raise RuntimeError("feed down")

        ticker = PriceTicker(BrokenFeed(params), interval_seconds=0.01)
        ticker.start()
        try:
            time.sleep(0.05)
            assert ticker.running is True
        finally:
            ticker.stop(timeout=1.0)
        assert ticker.latest is None
