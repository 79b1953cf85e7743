"""
Market price ticker.

A mocked quote source polled on a timer. Quotes are informational only and
never feed into P&L.
"""

from .feed import MarketQuote, MockPriceFeed, PriceHistory, PricePoint, PriceTicker

__all__ = ["MarketQuote", "MockPriceFeed", "PriceHistory", "PricePoint", "PriceTicker"]
