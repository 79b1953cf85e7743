"""Tests for P&L and running balance arithmetic."""

import math

import pytest

from journal_app.ledger.models import Direction
from journal_app.ledger.pnl import compute_pnl, derive_running_balances


class TestComputePnl:
    """Test compute_pnl function."""

    def test_long_profit(self):
        """Long trades earn (exit - entry) * lot."""
        assert compute_pnl(Direction.LONG, 100.0, 110.0, 2.0) == 20.0

    def test_short_mirror_of_long(self):
        """Short trades earn (entry - exit) * lot."""
        assert compute_pnl(Direction.SHORT, 100.0, 110.0, 2.0) == -20.0

    def test_short_profit(self):
        assert compute_pnl(Direction.SHORT, 2010.0, 2005.0, 2.0) == 10.0

    def test_fractional_lot(self):
        assert compute_pnl(Direction.LONG, 1.1000, 1.1050, 0.5) == pytest.approx(0.0025)

    @pytest.mark.parametrize("entry,exit_,lot", [
        (100.0, 110.0, 0.0),
        (0.0, 110.0, 2.0),
        (100.0, 0.0, 2.0),
        (100.0, 110.0, math.nan),
        (None, 110.0, 2.0),
    ])
    def test_falsy_input_quirk_yields_zero(self, entry, exit_, lot):
        """Known quirk: any zero, NaN or missing input gives 0 instead of an error."""
        assert compute_pnl(Direction.LONG, entry, exit_, lot) == 0.0
        assert compute_pnl(Direction.SHORT, entry, exit_, lot) == 0.0


class TestDeriveRunningBalances:
    """Test derive_running_balances function."""

    def test_empty_sequence(self):
        assert derive_running_balances(10000.0, []) == []

    def test_cumulative_sum_from_start(self):
        assert derive_running_balances(100.0, [10.0, -5.0, 2.5]) == [110.0, 105.0, 107.5]

    def test_accepts_generator(self):
        balances = derive_running_balances(0.0, (p for p in [1.0, 1.0]))
        assert balances == [1.0, 2.0]
