"""
Form input parsing.

Turns raw text submitted through the add-trade and balance forms into the
typed values the ledger accepts.
"""
