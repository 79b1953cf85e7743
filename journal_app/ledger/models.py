"""
Ledger data models.

Trade records are immutable. The running balance is the only derived field
that changes after creation, and it does so by replacing the record with a
copy rather than mutating it.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    """Trade direction."""
    LONG = "long"
    SHORT = "short"

    @property
    def label(self) -> str:
        """Journal label shown to users and persisted ("Buy"/"Sell")."""
        return "Buy" if self is Direction.LONG else "Sell"

    @classmethod
    def parse(cls, value: "str | Direction") -> "Direction":
        """Accept a Direction, its value, or a Buy/Sell label (case-insensitive)."""
        if isinstance(value, Direction):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Direction must be a string, got {type(value).__name__}")

        normalized = value.strip().lower()
        if normalized in ("long", "buy"):
            return cls.LONG
        if normalized in ("short", "sell"):
            return cls.SHORT
        raise ValueError(f"Unknown trade direction: {value!r}")


@dataclass(frozen=True)
class TradeInput:
    """Caller-supplied fields for a new trade."""
    symbol: str
    direction: Direction
    entry_price: Optional[float] = None
    exit_price: Optional[float] = None
    lot_size: Optional[float] = None
    notes: str = ""
    override_pnl: Optional[float] = None     # Skips price-derived P&L when set


@dataclass(frozen=True)
class TradeRecord:
    """A single journal entry."""
    id: str
    timestamp: datetime
    symbol: str
    direction: Direction
    entry_price: float
    exit_price: float
    lot_size: float
    pnl: float
    running_balance: float
    notes: str = ""
    pnl_is_override: bool = False

    def with_running_balance(self, running_balance: float) -> "TradeRecord":
        """Copy of this record with a new running balance; everything else kept."""
        if running_balance == self.running_balance:
            return self
        return replace(self, running_balance=running_balance)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of the full ledger state."""
    starting_balance: float
    records: tuple[TradeRecord, ...] = field(default_factory=tuple)
    version: int = 0
