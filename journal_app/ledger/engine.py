"""
Ledger engine.

Holds the ordered trade records and the starting balance, and keeps the
running-balance chain consistent:

    records[0].running_balance == starting_balance + records[0].pnl
    records[i].running_balance == records[i-1].running_balance + records[i].pnl

Appending reads only the last record. Rebasing and restoring walk the whole
sequence. The engine is synchronous and holds no lock; callers sharing a
ledger between threads serialise access themselves and can use the version
counter to detect lost updates.
"""

import math
import uuid
from typing import Any, Callable, Optional

from ..errors import ValidationError, VersionConflictError
from ..logging.config import get_ledger_logger, log_ledger_mutation
from ..utils.time import utc_now
from .models import Direction, LedgerSnapshot, TradeInput, TradeRecord
from .pnl import compute_pnl, derive_running_balances

ledger_logger = get_ledger_logger(__name__)

DEFAULT_STARTING_BALANCE = 10000.0


def new_trade_id() -> str:
    return uuid.uuid4().hex


def _require_finite(value: Any, field: str) -> float:
    """Return value as float, rejecting non-numbers and NaN/inf."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            f"{field} must be a number, got {type(value).__name__}",
            field=field,
            value=value
        )
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be finite", field=field, value=value)
    return float(value)


def _optional_finite(value: Any, field: str) -> Optional[float]:
    if value is None:
        return None
    return _require_finite(value, field)


class Ledger:
    """Ordered trade records plus the starting balance they build on."""

    def __init__(
        self,
        starting_balance: float = DEFAULT_STARTING_BALANCE,
        clock: Callable[[], Any] = utc_now,
        id_factory: Callable[[], str] = new_trade_id
    ) -> None:
        self._starting_balance = _require_finite(starting_balance, "starting_balance")
        self._records: list[TradeRecord] = []
        self._version = 0
        self._clock = clock
        self._id_factory = id_factory

    @property
    def starting_balance(self) -> float:
        return self._starting_balance

    @property
    def records(self) -> tuple[TradeRecord, ...]:
        """Records in insertion order (read-only view)."""
        return tuple(self._records)

    @property
    def version(self) -> int:
        """Incremented on every mutation that changes state."""
        return self._version

    @property
    def current_balance(self) -> float:
        """Running balance of the last record, or the starting balance when empty."""
        if self._records:
            return self._records[-1].running_balance
        return self._starting_balance

    def __len__(self) -> int:
        return len(self._records)

    def _check_version(self, expected_version: Optional[int], operation: str) -> None:
        if expected_version is not None and expected_version != self._version:
            raise VersionConflictError(
                f"{operation} expected ledger version {expected_version}, found {self._version}",
                expected_version=expected_version,
                actual_version=self._version
            )

    def append_trade(self, trade: TradeInput, expected_version: Optional[int] = None) -> TradeRecord:
        """
        Record a closed trade and extend the running balance.

        Args:
            trade: Trade fields supplied by the caller
            expected_version: If given, the ledger version the caller last saw

        Returns:
            The newly created record

        Raises:
            ValidationError: If a field is missing, empty or non-finite
            VersionConflictError: If expected_version does not match
        """
        self._check_version(expected_version, "append_trade")

        # Validate everything before touching state
        symbol = trade.symbol.strip().upper() if isinstance(trade.symbol, str) else ""
        if not symbol:
            raise ValidationError("symbol must be a non-empty string", field="symbol", value=trade.symbol)

        try:
            direction = Direction.parse(trade.direction)
        except ValueError as e:
            raise ValidationError(str(e), field="direction", value=trade.direction) from e

        entry_price = _optional_finite(trade.entry_price, "entry_price")
        exit_price = _optional_finite(trade.exit_price, "exit_price")
        lot_size = _optional_finite(trade.lot_size, "lot_size")
        override_pnl = _optional_finite(trade.override_pnl, "override_pnl")

        notes = "" if trade.notes is None else trade.notes
        if not isinstance(notes, str):
            raise ValidationError("notes must be text", field="notes", value=trade.notes)

        if override_pnl is not None:
            pnl = override_pnl
        else:
            for name, value in (("entry_price", entry_price), ("exit_price", exit_price),
                                ("lot_size", lot_size)):
                if value is None:
                    raise ValidationError(
                        f"{name} is required when no P&L override is given",
                        field=name,
                        value=None
                    )
            pnl = compute_pnl(direction, entry_price, exit_price, lot_size)

        record = TradeRecord(
            id=self._id_factory(),
            timestamp=self._clock(),
            symbol=symbol,
            direction=direction,
            entry_price=entry_price if entry_price is not None else 0.0,
            exit_price=exit_price if exit_price is not None else 0.0,
            lot_size=lot_size if lot_size is not None else 0.0,
            pnl=pnl,
            running_balance=self.current_balance + pnl,
            notes=notes,
            pnl_is_override=override_pnl is not None,
        )

        self._records.append(record)
        self._version += 1

        log_ledger_mutation(
            ledger_logger,
            operation="append_trade",
            version=self._version,
            context={
                "trade_id": record.id,
                "symbol": record.symbol,
                "direction": record.direction.value,
                "pnl": record.pnl,
                "pnl_is_override": record.pnl_is_override,
                "running_balance": record.running_balance,
            }
        )
        return record

    def rebase(self, new_starting_balance: float, expected_version: Optional[int] = None) -> None:
        """
        Change the starting balance and re-derive every running balance.

        P&L values are never touched. Calling rebase twice with the same
        value leaves the ledger exactly as after the first call.

        Raises:
            ValidationError: If the balance is not a finite number
            VersionConflictError: If expected_version does not match
        """
        self._check_version(expected_version, "rebase")
        new_starting_balance = _require_finite(new_starting_balance, "starting_balance")

        previous = self._starting_balance
        rebuilt = self._rebuild(new_starting_balance, self._records)

        if new_starting_balance == previous and rebuilt == self._records:
            return

        self._starting_balance = new_starting_balance
        self._records = rebuilt
        self._version += 1

        log_ledger_mutation(
            ledger_logger,
            operation="rebase",
            version=self._version,
            context={
                "previous_starting_balance": previous,
                "starting_balance": new_starting_balance,
                "records": len(rebuilt),
                "current_balance": self.current_balance,
            }
        )

    def snapshot(self) -> LedgerSnapshot:
        """Immutable copy of the full ledger state for persistence."""
        return LedgerSnapshot(
            starting_balance=self._starting_balance,
            records=tuple(self._records),
            version=self._version,
        )

    def restore(self, snapshot: LedgerSnapshot) -> int:
        """
        Replace the ledger state with a snapshot.

        Stored running balances are not trusted: the chain is re-derived from
        the starting balance and each record's P&L.

        Returns:
            Number of records whose stored running balance had to be corrected

        Raises:
            ValidationError: If the snapshot holds a non-finite balance or P&L
        """
        starting_balance = _require_finite(snapshot.starting_balance, "starting_balance")
        for index, record in enumerate(snapshot.records):
            _require_finite(record.pnl, f"records[{index}].pnl")

        rebuilt = self._rebuild(starting_balance, snapshot.records)
        healed = sum(1 for old, new in zip(snapshot.records, rebuilt) if old is not new)

        self._starting_balance = starting_balance
        self._records = rebuilt
        self._version = max(self._version, snapshot.version) + 1

        if healed:
            ledger_logger.warning(
                "Corrected stored running balances on restore",
                healed_records=healed,
                records=len(rebuilt)
            )

        log_ledger_mutation(
            ledger_logger,
            operation="restore",
            version=self._version,
            context={
                "starting_balance": starting_balance,
                "records": len(rebuilt),
                "current_balance": self.current_balance,
            }
        )
        return healed

    def rollback(self, snapshot: LedgerSnapshot) -> None:
        """
        Return to a snapshot taken earlier from this same ledger.

        Unlike restore, nothing is re-derived and the version goes back to
        the snapshot's, so a mutation that could not be persisted leaves no
        trace.
        """
        discarded = len(self._records) - len(snapshot.records)
        self._starting_balance = snapshot.starting_balance
        self._records = list(snapshot.records)
        self._version = snapshot.version

        ledger_logger.warning(
            "Ledger rolled back",
            ledger_version=self._version,
            discarded_records=max(discarded, 0),
            starting_balance=self._starting_balance
        )

    @classmethod
    def from_snapshot(cls, snapshot: LedgerSnapshot, **kwargs: Any) -> "Ledger":
        """Build a new ledger from a snapshot, re-deriving running balances."""
        ledger = cls(starting_balance=snapshot.starting_balance, **kwargs)
        ledger.restore(snapshot)
        return ledger

    @staticmethod
    def _rebuild(starting_balance: float, records: "tuple[TradeRecord, ...] | list[TradeRecord]") -> list[TradeRecord]:
        balances = derive_running_balances(starting_balance, (r.pnl for r in records))
        return [record.with_running_balance(balance) for record, balance in zip(records, balances)]
