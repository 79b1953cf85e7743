"""Default configuration parameters for the trading journal."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerParams:
    """Ledger engine parameters."""
    default_starting_balance: float = 10000.0        # Used until a balance is explicitly set


@dataclass(frozen=True)
class StorageParams:
    """Key-value store parameters."""
    db_path: str = "journal.db"
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class AuthParams:
    """Static login gate credentials."""
    username: str = "trader"
    password: str = "changeme"


@dataclass(frozen=True)
class PriceFeedParams:
    """Mock market price feed parameters."""
    symbol: str = "XAUUSD"
    base_price: float = 2020.45
    price_jitter: float = 10.0                       # Full width of the price band
    change_jitter: float = 20.0                      # Full width of the change band
    change_pct_jitter: float = 2.0                   # Full width of the change % band
    poll_interval_seconds: float = 3.0
    history_size: int = 20                           # Points kept for the ticker chart


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class JournalConfig:
    """Complete journal configuration."""
    ledger: LedgerParams
    storage: StorageParams
    auth: AuthParams
    price_feed: PriceFeedParams
    logging: LoggingParams


def get_default_config() -> JournalConfig:
    """Get the default configuration instance."""
    return JournalConfig(
        ledger=LedgerParams(),
        storage=StorageParams(),
        auth=AuthParams(),
        price_feed=PriceFeedParams(),
        logging=LoggingParams(),
    )
