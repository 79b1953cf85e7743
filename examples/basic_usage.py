#!/usr/bin/env python3
"""
Basic Usage Example - Trading Journal Ledger

This script demonstrates the basic usage of the trading journal with a
throwaway database. It shows how to:
- Open a journal and log in
- Set the initial balance
- Add trades from form input
- Rebase the starting balance and watch running balances follow

Run: python examples/basic_usage.py
"""

import tempfile
from dataclasses import replace
from pathlib import Path

from journal_app.config.defaults import AuthParams, LoggingParams, get_default_config
from journal_app.data.parsers import parse_balance, parse_trade_form
from journal_app.journal import TradingJournal
from journal_app.persistence.kv_store import KeyValueStore


def print_ledger(journal: TradingJournal) -> None:
    """Print the trade table and headline numbers."""
    print(f"   Starting balance: {journal.ledger.starting_balance:.2f}")
    for record in journal.records:
        print(f"   {record.symbol:<8} {record.direction.label:<4} "
              f"pnl={record.pnl:>8.2f}  balance={record.running_balance:>10.2f}")
    summary = journal.summary()
    print(f"   Total P&L: {summary.total_pnl:.2f}  "
          f"Win rate: {summary.win_rate_pct:.1f}% ({summary.winning_trades}W / {summary.losing_trades}L)  "
          f"Balance: {summary.current_balance:.2f}")


def main():
    """Run the demo."""
    print("📒 Trading Journal Demo")
    print("=" * 50)

    with tempfile.TemporaryDirectory() as tmp:
        config = replace(
            get_default_config(),
            auth=AuthParams(username="demo", password="demo"),
            logging=LoggingParams(level="WARNING"),
        )
        store = KeyValueStore(str(Path(tmp) / "journal.db"))

        print("1. Opening journal and logging in...")
        journal = TradingJournal.open(config, store, setup_logging=True)
        journal.login("demo", "demo")
        print(f"   Needs initial balance: {journal.needs_initial_balance}")
        print()

        print("2. Setting initial balance to 10000...")
        journal.update_balance(parse_balance("10000"))
        print()

        print("3. Adding trades...")
        journal.add_trade(parse_trade_form({
            "symbol": "xauusd", "tradeType": "Buy",
            "entryPrice": "2000", "exitPrice": "2010", "lotSize": "1",
        }))
        journal.add_trade(parse_trade_form({
            "symbol": "xauusd", "tradeType": "Sell",
            "entryPrice": "2010", "exitPrice": "2005", "lotSize": "2",
        }))
        journal.add_trade(parse_trade_form({
            "symbol": "eurusd", "tradeType": "Buy", "customPnL": "-7.5",
            "notes": "closed manually, P&L from broker statement",
        }))
        print_ledger(journal)
        print()

        print("4. Rebasing starting balance to 5000...")
        journal.update_balance(5000.0)
        print_ledger(journal)
        print()

        print("5. Reopening from storage...")
        reopened = TradingJournal.open(config, store)
        print_ledger(reopened)
        print()

    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
