"""
Trading journal coordinator.

Ties together configuration, the persisted ledger and the login gate:

    form input → TradeInput → Ledger.append_trade → save
    balance setting → Ledger.rebase → mark initial balance set → save

Mutations require an authenticated session. Reads are always available so
that the trade table and statistics can be shown in public mode.
"""

import threading
from pathlib import Path
from typing import Any, Optional

import structlog

from .auth.gate import AuthGate, AuthSession
from .config.defaults import JournalConfig
from .config.loader import load_config
from .errors import AuthorizationError, PersistenceError
from .ledger.engine import Ledger
from .ledger.models import LedgerSnapshot, TradeInput, TradeRecord
from .ledger.summary import EquityPoint, LedgerSummary, equity_curve, summarize
from .logging import configure_logging
from .persistence.kv_store import KeyValueStore
from .persistence.repository import LedgerRepository

logger = structlog.get_logger(__name__)


class TradingJournal:
    """
    Single-user trading journal session.

    All mutations go through one lock so a journal can be shared with
    background threads (e.g. the price ticker) without lost updates.
    """

    def __init__(
        self,
        config: JournalConfig,
        repository: LedgerRepository,
        ledger: Ledger,
        session: Optional[AuthSession] = None
    ) -> None:
        self.config = config
        self.repository = repository
        self.ledger = ledger
        self.gate = AuthGate(config.auth)
        self.session = session or AuthSession.anonymous()
        self._lock = threading.Lock()

    @classmethod
    def open(
        cls,
        config: Optional[JournalConfig] = None,
        store: Optional[KeyValueStore] = None,
        config_dir: Optional[Path] = None,
        setup_logging: bool = False,
        **ledger_kwargs: Any
    ) -> "TradingJournal":
        """
        Open a journal, loading persisted state.

        Args:
            config: Journal configuration, loaded from journal.yaml and the
                JOURNAL_* environment when omitted
            store: Key-value store, created from config.storage when omitted
            config_dir: Directory holding journal.yaml, used when config is omitted
            setup_logging: Configure structlog from config.logging first
            ledger_kwargs: Passed through to the Ledger (clock, id_factory)
        """
        if config is None:
            config = load_config(config_dir)
        if setup_logging:
            configure_logging(level=config.logging.level, format_json=config.logging.format_json)
        if store is None:
            store = KeyValueStore(config.storage.db_path, config.storage.timeout_seconds)

        repository = LedgerRepository(store)
        ledger = repository.load(config.ledger.default_starting_balance, **ledger_kwargs)
        session = repository.load_auth()

        journal = cls(config, repository, ledger, session)
        logger.info(
            "Journal opened",
            records=len(ledger),
            authenticated=journal.is_authenticated,
            needs_initial_balance=journal.needs_initial_balance
        )
        return journal

    # Session

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    @property
    def is_public_mode(self) -> bool:
        return not self.session.is_authenticated

    def login(self, username: str, password: str) -> AuthSession:
        """
        Log in and remember the session.

        Raises:
            AuthenticationError: If the credentials do not match
        """
        session = self.gate.login(username, password)
        self.session = session
        self.repository.save_auth(session)
        return session

    def logout(self) -> None:
        self.session = AuthSession.anonymous()
        self.repository.clear_auth()
        logger.info("Logged out")

    @property
    def needs_initial_balance(self) -> bool:
        """Logged in, but no starting balance has been set yet."""
        return self.is_authenticated and not self.repository.has_set_initial_balance()

    def _require_login(self, action: str) -> None:
        if not self.is_authenticated:
            raise AuthorizationError(f"Login required to {action}", action=action)

    # Mutations

    def _save_or_rollback(self, before: LedgerSnapshot) -> None:
        try:
            self.repository.save(self.ledger)
        except PersistenceError:
            self.ledger.rollback(before)
            raise

    def add_trade(self, trade: TradeInput, expected_version: Optional[int] = None) -> TradeRecord:
        """
        Append a trade and persist the ledger.

        Raises:
            AuthorizationError: If not logged in
            ValidationError: If the trade is rejected by the ledger
            VersionConflictError: If expected_version is stale
            PersistenceError: If the ledger could not be saved; the ledger
                is left as it was before the call
        """
        self._require_login("add trades")
        with self._lock:
            before = self.ledger.snapshot()
            record = self.ledger.append_trade(trade, expected_version=expected_version)
            self._save_or_rollback(before)
        return record

    def update_balance(self, new_balance: float, expected_version: Optional[int] = None) -> None:
        """
        Set the starting balance, re-derive running balances and persist.

        Raises:
            AuthorizationError: If not logged in
            ValidationError: If the balance is not a finite number
            VersionConflictError: If expected_version is stale
            PersistenceError: If the ledger could not be saved; the ledger
                is left as it was before the call
        """
        self._require_login("update the balance")
        with self._lock:
            before = self.ledger.snapshot()
            self.ledger.rebase(new_balance, expected_version=expected_version)
            self._save_or_rollback(before)
            self.repository.mark_initial_balance_set()

    # Reads

    @property
    def records(self) -> tuple[TradeRecord, ...]:
        return self.ledger.records

    def summary(self) -> LedgerSummary:
        return summarize(self.ledger.records, self.ledger.starting_balance)

    def equity_curve(self) -> list[EquityPoint]:
        return equity_curve(self.ledger.records)
