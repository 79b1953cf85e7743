"""Pytest configuration and shared fixtures."""

import itertools
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

import pytest

from journal_app.config.defaults import AuthParams, JournalConfig, get_default_config
from journal_app.ledger.engine import Ledger
from journal_app.ledger.models import Direction, TradeInput
from journal_app.persistence.kv_store import KeyValueStore

FIXED_NOW = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns the same instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Predictable trade ids: t1, t2, ..."""
    counter = itertools.count(1)
    return lambda: f"t{next(counter)}"


@pytest.fixture
def make_ledger(fixed_clock, id_factory) -> Callable[..., Ledger]:
    """Factory for ledgers with a fixed clock and predictable ids."""
    def _make(starting_balance: float = 10000.0) -> Ledger:
        return Ledger(starting_balance=starting_balance, clock=fixed_clock, id_factory=id_factory)
    return _make


@pytest.fixture
def long_trade() -> TradeInput:
    """Long XAUUSD 2000 -> 2010, one lot (P&L +10)."""
    return TradeInput(
        symbol="xauusd",
        direction=Direction.LONG,
        entry_price=2000.0,
        exit_price=2010.0,
        lot_size=1.0,
    )


@pytest.fixture
def short_trade() -> TradeInput:
    """Short XAUUSD 2010 -> 2005, two lots (P&L +10)."""
    return TradeInput(
        symbol="XAUUSD",
        direction=Direction.SHORT,
        entry_price=2010.0,
        exit_price=2005.0,
        lot_size=2.0,
    )


@pytest.fixture
def kv_store(tmp_path) -> KeyValueStore:
    """Key-value store in a temporary SQLite file."""
    return KeyValueStore(str(tmp_path / "journal.db"))


@pytest.fixture
def journal_config(tmp_path) -> JournalConfig:
    """Default configuration with known credentials and a temporary database."""
    config = get_default_config()
    return replace(
        config,
        auth=AuthParams(username="trader", password="secret"),
        storage=replace(config.storage, db_path=str(tmp_path / "journal.db")),
    )
