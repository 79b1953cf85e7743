"""
Mock market price feed and rolling price history.

Each quote is drawn uniformly from a band around the configured base price:

    price          = base_price + (u - 0.5) * price_jitter
    change         = (u - 0.5) * change_jitter
    change_percent = (u - 0.5) * change_pct_jitter
"""

import random
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import structlog

from ..config.defaults import PriceFeedParams
from ..utils.time import format_time_label, utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MarketQuote:
    """A single price quote."""
    symbol: str
    price: float
    change: float
    change_percent: float
    timestamp: datetime

    @property
    def is_positive(self) -> bool:
        return self.change >= 0


@dataclass(frozen=True)
class PricePoint:
    """One point on the ticker chart."""
    time: str        # HH:MM local time
    price: float


class MockPriceFeed:
    """Generates random quotes around a base price."""

    def __init__(
        self,
        params: PriceFeedParams,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.params = params
        self._rng = rng or random.Random()
        self._clock = clock

    def fetch(self) -> MarketQuote:
        """Produce the next quote."""
        p = self.params
        return MarketQuote(
            symbol=p.symbol,
            price=p.base_price + (self._rng.random() - 0.5) * p.price_jitter,
            change=(self._rng.random() - 0.5) * p.change_jitter,
            change_percent=(self._rng.random() - 0.5) * p.change_pct_jitter,
            timestamp=self._clock(),
        )


class PriceHistory:
    """Rolling window of the most recent price points."""

    def __init__(self, maxlen: int = 20):
        self._points: deque[PricePoint] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def add(self, quote: MarketQuote) -> PricePoint:
        point = PricePoint(time=format_time_label(quote.timestamp), price=quote.price)
        with self._lock:
            self._points.append(point)
        return point

    def points(self) -> list[PricePoint]:
        """Oldest first."""
        with self._lock:
            return list(self._points)

    def __len__(self) -> int:
        return len(self._points)


class PriceTicker:
    """Polls a feed on a background thread and keeps the latest quote."""

    def __init__(
        self,
        feed: MockPriceFeed,
        history: Optional[PriceHistory] = None,
        interval_seconds: Optional[float] = None
    ):
        self.feed = feed
        self.history = history or PriceHistory(feed.params.history_size)
        self.interval_seconds = interval_seconds or feed.params.poll_interval_seconds
        self.latest: Optional[MarketQuote] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def poll_once(self) -> MarketQuote:
        """Fetch one quote and record it."""
        quote = self.feed.fetch()
        self.latest = quote
        self.history.add(quote)
        return quote

    def _run(self) -> None:
        # First quote immediately, then every interval
        while not self._stop.is_set():
            try:
                self.poll_once()
            except Exception as e:
                logger.error("Price poll failed", symbol=self.feed.params.symbol, error=str(e))
            self._stop.wait(self.interval_seconds)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="price-ticker", daemon=True)
        self._thread.start()
        logger.info("Price ticker started", symbol=self.feed.params.symbol,
                    interval_seconds=self.interval_seconds)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Price ticker stopped", symbol=self.feed.params.symbol)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
