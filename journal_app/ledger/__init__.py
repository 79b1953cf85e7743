"""
Balance and P&L ledger.

Owns the ordered trade records and the starting balance. Derives P&L per
trade on append and re-derives every running balance on rebase.
"""

from .engine import Ledger
from .models import Direction, LedgerSnapshot, TradeInput, TradeRecord
from .pnl import compute_pnl, derive_running_balances
from .summary import EquityPoint, LedgerSummary, equity_curve, summarize

__all__ = [
    "Ledger",
    "Direction",
    "LedgerSnapshot",
    "TradeInput",
    "TradeRecord",
    "compute_pnl",
    "derive_running_balances",
    "EquityPoint",
    "LedgerSummary",
    "equity_curve",
    "summarize",
]
