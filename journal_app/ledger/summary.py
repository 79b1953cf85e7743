"""Read-only aggregates over the ledger for the display layer."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..utils.time import local_date, utc_now
from .models import TradeRecord


@dataclass(frozen=True)
class LedgerSummary:
    """Headline numbers shown above the trade table."""
    trade_count: int
    total_pnl: float
    winning_trades: int
    losing_trades: int
    current_balance: float
    trades_today: int

    @property
    def win_rate(self) -> float:
        """Share of trades with positive P&L, 0.0 for an empty ledger."""
        if self.trade_count == 0:
            return 0.0
        return self.winning_trades / self.trade_count

    @property
    def win_rate_pct(self) -> float:
        return self.win_rate * 100.0


@dataclass(frozen=True)
class EquityPoint:
    """One point of the account performance chart."""
    trade_number: int      # 1-based
    balance: float
    pnl: float
    date: date


def summarize(
    records: Sequence[TradeRecord],
    starting_balance: float,
    today: Optional[datetime] = None
) -> LedgerSummary:
    """
    Compute display aggregates from the record sequence.

    Args:
        records: Ledger records in insertion order
        starting_balance: Ledger starting balance
        today: Reference time for the trades-today count, defaults to now
    """
    reference_day = local_date(today or utc_now())

    return LedgerSummary(
        trade_count=len(records),
        total_pnl=sum(r.pnl for r in records),
        winning_trades=sum(1 for r in records if r.pnl > 0),
        losing_trades=sum(1 for r in records if r.pnl < 0),
        current_balance=records[-1].running_balance if records else starting_balance,
        trades_today=sum(1 for r in records if local_date(r.timestamp) == reference_day),
    )


def equity_curve(records: Sequence[TradeRecord]) -> list[EquityPoint]:
    """Running balance after each trade, numbered from 1."""
    return [
        EquityPoint(
            trade_number=index,
            balance=record.running_balance,
            pnl=record.pnl,
            date=local_date(record.timestamp),
        )
        for index, record in enumerate(records, start=1)
    ]
