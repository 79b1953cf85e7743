"""
Persistence layer.

A SQLite-backed key-value store and the repository that maps ledger state
onto its keys.
"""

from .kv_store import KeyValueStore
from .repository import LedgerRepository

__all__ = ["KeyValueStore", "LedgerRepository"]
