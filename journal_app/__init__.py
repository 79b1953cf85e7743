"""
Trading Journal - Balance and P&L Ledger

A single-user trading journal. Records manually entered trades, derives
profit/loss per trade and a running account balance, and re-derives the
balance sequence whenever the starting balance is edited.
"""

__version__ = "0.1.0"
__author__ = "Trading Journal Team"
