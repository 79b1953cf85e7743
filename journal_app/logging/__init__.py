"""
Logging configuration and utilities for the trading journal.
"""
from .config import configure_logging, get_ledger_logger, get_logger, log_ledger_mutation

__all__ = ["configure_logging", "get_logger", "get_ledger_logger", "log_ledger_mutation"]
