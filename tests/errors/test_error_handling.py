"""
Error handling tests for the trading journal.

Tests cover the error classification hierarchy and how the ledger and the
repository react to bad input and corrupted storage.
"""

import pytest

from journal_app.errors import (
    AccessError,
    AuthenticationError,
    AuthorizationError,
    DataQualityError,
    MalformedDataError,
    MissingDataError,
    PersistenceError,
    RecoverableError,
    SystemFailureError,
    ValidationError,
    VersionConflictError,
)
from journal_app.ledger.models import Direction, TradeInput
from journal_app.persistence.repository import TRADES_KEY, LedgerRepository


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Data quality errors are recoverable and carry context."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        validation_error = ValidationError("bad lot", field="lot_size", value=-1)
        assert isinstance(validation_error, DataQualityError)
        assert validation_error.field == "lot_size"
        assert validation_error.value == -1

        missing_error = MissingDataError("missing data", data_type="symbol")
        assert isinstance(missing_error, DataQualityError)
        assert missing_error.data_type == "symbol"

        malformed_error = MalformedDataError("bad json", raw_data="{", expected_format="JSON list")
        assert malformed_error.raw_data == "{"
        assert malformed_error.expected_format == "JSON list"

    def test_context_passes_through(self):
        error = ValidationError("bad", field="x", context={"trade_id": "t1"})
        assert error.context == {"trade_id": "t1"}

    def test_system_failure_error_hierarchy(self):
        """System failures are not recoverable."""
        error = PersistenceError("disk gone", operation="set", target="journal.db")
        assert isinstance(error, SystemFailureError)
        assert error.recoverable is False
        assert error.operation == "set"
        assert error.target == "journal.db"

    def test_recovery_hierarchy(self):
        error = VersionConflictError("stale", expected_version=1, actual_version=3)
        assert isinstance(error, RecoverableError)
        assert error.recoverable is True
        assert error.expected_version == 1
        assert error.actual_version == 3
        assert error.retry_count == 0
        assert error.max_retries == 3

    def test_access_hierarchy(self):
        auth_error = AuthenticationError("nope", username="bob")
        assert isinstance(auth_error, AccessError)
        assert auth_error.username == "bob"

        authz_error = AuthorizationError("login first", action="add trades")
        assert isinstance(authz_error, AccessError)
        assert authz_error.action == "add trades"
        assert authz_error.username is None


class TestLedgerInputErrors:
    """Rejected input never changes the ledger."""

    @pytest.mark.parametrize("trade", [
        TradeInput(symbol="X", direction=Direction.LONG, entry_price=float("nan"),
                   exit_price=1.0, lot_size=1.0),
        TradeInput(symbol="X", direction=Direction.LONG, entry_price=1.0,
                   exit_price=float("inf"), lot_size=1.0),
        TradeInput(symbol="  ", direction=Direction.LONG, override_pnl=1.0),
        TradeInput(symbol="X", direction=Direction.SHORT, entry_price=1.0, exit_price=2.0),
        TradeInput(symbol="X", direction=Direction.SHORT, override_pnl=float("-inf")),
    ])
    def test_rejected_trade(self, make_ledger, trade):
        ledger = make_ledger()

        with pytest.raises(ValidationError):
            ledger.append_trade(trade)

        assert ledger.records == ()
        assert ledger.version == 0

    def test_rejected_rebase(self, make_ledger, long_trade):
        ledger = make_ledger()
        ledger.append_trade(long_trade)
        version = ledger.version

        with pytest.raises(ValidationError):
            ledger.rebase(float("nan"))

        assert ledger.starting_balance == 10000.0
        assert ledger.records[0].running_balance == 10010.0
        assert ledger.version == version


class TestCorruptedStorage:
    """The repository fails closed on unreadable data."""

    def test_garbage_trades(self, kv_store):
        kv_store.set(TRADES_KEY, "not json at all")
        ledger = LedgerRepository(kv_store).load(default_balance=10000.0)
        assert ledger.records == ()

    def test_trades_not_a_list(self, kv_store):
        kv_store.set(TRADES_KEY, '{"id": "t1"}')
        ledger = LedgerRepository(kv_store).load(default_balance=10000.0)
        assert ledger.records == ()
