"""
Login gate.

A static credential check that decides whether ledger-mutating actions are
available. It is a convenience gate for a single local user, not a security
boundary.
"""

from .gate import AuthGate, AuthSession

__all__ = ["AuthGate", "AuthSession"]
