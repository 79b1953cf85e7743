"""
P&L and running balance arithmetic.

Pure functions shared by append, rebase and restore.
"""

import math
from typing import Iterable, Optional

from .models import Direction


def _is_falsy(value: Optional[float]) -> bool:
    return value is None or value == 0 or (isinstance(value, float) and math.isnan(value))


def compute_pnl(
    direction: Direction,
    entry_price: Optional[float],
    exit_price: Optional[float],
    lot_size: Optional[float]
) -> float:
    """
    Compute the P&L of a closed trade.

    Long trades earn (exit - entry) * lot, short trades (entry - exit) * lot.
    If any of the three inputs is zero, NaN or missing the result is 0.0
    rather than an error. Journals written before validation existed depend
    on this, so it is kept as is.

    Args:
        direction: Long or short
        entry_price: Entry price
        exit_price: Exit price
        lot_size: Position size

    Returns:
        P&L in account currency
    """
    if _is_falsy(entry_price) or _is_falsy(exit_price) or _is_falsy(lot_size):
        return 0.0

    if direction is Direction.LONG:
        return (exit_price - entry_price) * lot_size
    return (entry_price - exit_price) * lot_size


def derive_running_balances(starting_balance: float, pnls: Iterable[float]) -> list[float]:
    """
    Running balance after each trade.

    The first balance is starting_balance + pnls[0], each later one is the
    previous balance plus its own pnl.
    """
    balances = []
    balance = starting_balance
    for pnl in pnls:
        balance = balance + pnl
        balances.append(balance)
    return balances
