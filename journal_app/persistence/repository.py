"""
Maps ledger state onto the key-value store.

Three independent keys hold the ledger, and a fourth the saved login:

- ``tradingTrades``: JSON list of trade records
- ``tradingBalance``: starting balance as text
- ``hasSetInitialBalance``: ``"true"`` once a balance has been set explicitly
- ``tradingAuth``: JSON login session

Loading fails closed. Unreadable trades become an empty ledger and an
unreadable balance falls back to the default, so a damaged store never
prevents the journal from opening.
"""

import json
import math
from typing import Any, Optional

import structlog

from ..auth.gate import AuthSession
from ..errors import DataQualityError, MalformedDataError
from ..ledger.engine import Ledger
from ..ledger.models import LedgerSnapshot
from .codec import records_from_json, records_to_json
from .kv_store import KeyValueStore

logger = structlog.get_logger(__name__)

TRADES_KEY = "tradingTrades"
BALANCE_KEY = "tradingBalance"
INITIAL_BALANCE_FLAG_KEY = "hasSetInitialBalance"
AUTH_KEY = "tradingAuth"


class LedgerRepository:
    """Loads and saves ledger state and the login session."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.logger = logger

    def save(self, ledger: Ledger) -> None:
        """Persist the ledger's records and starting balance."""
        snapshot = ledger.snapshot()
        self.store.set_many({
            TRADES_KEY: records_to_json(snapshot.records),
            BALANCE_KEY: repr(snapshot.starting_balance),
        })
        self.logger.debug(
            "Ledger saved",
            records=len(snapshot.records),
            starting_balance=snapshot.starting_balance,
            version=snapshot.version
        )

    def load(self, default_balance: float, **ledger_kwargs: Any) -> Ledger:
        """
        Rebuild the ledger from storage.

        Running balances are always re-derived from the stored starting
        balance and each record's P&L.

        Args:
            default_balance: Starting balance when none is stored or it is unreadable
            ledger_kwargs: Passed through to the Ledger constructor (clock, id_factory)
        """
        starting_balance = self._load_balance(default_balance)
        records = self._load_records()

        try:
            ledger = Ledger.from_snapshot(
                LedgerSnapshot(starting_balance=starting_balance, records=tuple(records)),
                **ledger_kwargs
            )
        except DataQualityError as e:
            self.logger.error("Stored trades rejected, starting with an empty ledger", error=str(e))
            return Ledger(starting_balance=starting_balance, **ledger_kwargs)

        self.logger.info(
            "Ledger loaded",
            records=len(ledger),
            starting_balance=ledger.starting_balance,
            current_balance=ledger.current_balance
        )
        return ledger

    def _load_balance(self, default_balance: float) -> float:
        raw = self.store.get(BALANCE_KEY)
        if raw is None:
            return default_balance

        try:
            value = float(raw)
        except ValueError:
            value = math.nan

        if not math.isfinite(value):
            self.logger.error("Stored balance unreadable, using default",
                              raw_value=raw[:50], default_balance=default_balance)
            return default_balance
        return value

    def _load_records(self) -> list:
        raw = self.store.get(TRADES_KEY)
        if raw is None:
            return []

        try:
            return records_from_json(raw)
        except MalformedDataError as e:
            self.logger.error(
                "Stored trades unreadable, starting with an empty ledger",
                error=str(e),
                expected_format=e.expected_format
            )
            return []

    def has_set_initial_balance(self) -> bool:
        """Whether a starting balance has ever been set explicitly."""
        return self.store.get(INITIAL_BALANCE_FLAG_KEY) == "true"

    def mark_initial_balance_set(self) -> None:
        self.store.set(INITIAL_BALANCE_FLAG_KEY, "true")

    def save_auth(self, session: AuthSession) -> None:
        """Remember a login across restarts."""
        self.store.set(AUTH_KEY, json.dumps({
            "username": session.username,
            "isAuthenticated": session.is_authenticated,
        }))

    def load_auth(self) -> Optional[AuthSession]:
        """Saved login, or None if absent or unreadable."""
        raw = self.store.get(AUTH_KEY)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except ValueError as e:
            self.logger.warning("Saved login unreadable, ignoring", error=str(e))
            return None

        if not isinstance(data, dict) or not isinstance(data.get("username"), str):
            self.logger.warning("Saved login has unexpected shape, ignoring")
            return None

        return AuthSession(
            username=data["username"],
            is_authenticated=data.get("isAuthenticated") is True,
        )

    def clear_auth(self) -> None:
        self.store.delete(AUTH_KEY)
