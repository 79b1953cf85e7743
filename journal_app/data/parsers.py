"""
Parsers for raw form input.

The ledger assumes it receives real numbers. Everything that arrives as text
(empty fields, "abc", negative prices, "1e999") is rejected here first.

Expected add-trade fields, all strings:

    {"symbol": "xauusd", "tradeType": "Buy", "entryPrice": "2000",
     "exitPrice": "2010", "lotSize": "1", "notes": "", "customPnL": ""}

``customPnL`` is optional. When it is filled in, the price fields may be left
empty and the given value is recorded as the trade's P&L.
"""

import math
from typing import Any, Mapping, Optional

from ..errors import MissingDataError, ValidationError
from ..ledger.models import Direction, TradeInput
from ..ledger.pnl import compute_pnl

PRICE_FIELDS = ("entryPrice", "exitPrice", "lotSize")


def _text(fields: Mapping[str, Any], key: str) -> str:
    value = fields.get(key)
    if value is None:
        return ""
    return str(value).strip()


def parse_number(raw: str, field: str, allow_negative: bool = False) -> float:
    """
    Parse a numeric form field.

    Raises:
        ValidationError: If the text is not a finite number, or is negative
            when negatives are not allowed
    """
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} must be a number", field=field, value=raw) from e

    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number", field=field, value=raw)

    if not allow_negative and value < 0:
        raise ValidationError(f"{field} must not be negative", field=field, value=raw)

    return value


def _optional_number(fields: Mapping[str, Any], key: str, allow_negative: bool = False) -> Optional[float]:
    raw = _text(fields, key)
    if not raw:
        return None
    return parse_number(raw, key, allow_negative=allow_negative)


def parse_trade_form(fields: Mapping[str, Any]) -> TradeInput:
    """
    Convert submitted add-trade fields into a TradeInput.

    Raises:
        MissingDataError: If the symbol or a required price field is empty
        ValidationError: If a value is not acceptable
    """
    symbol = _text(fields, "symbol").upper()
    if not symbol:
        raise MissingDataError("symbol is required", data_type="symbol")

    trade_type = _text(fields, "tradeType") or Direction.LONG.label
    try:
        direction = Direction.parse(trade_type)
    except ValueError as e:
        raise ValidationError(str(e), field="tradeType", value=trade_type) from e

    override_pnl = _optional_number(fields, "customPnL", allow_negative=True)

    prices = {key: _optional_number(fields, key) for key in PRICE_FIELDS}
    if override_pnl is None:
        missing = [key for key, value in prices.items() if value is None]
        if missing:
            raise MissingDataError(
                f"Required fields are empty: {', '.join(missing)}",
                data_type="price"
            )

    return TradeInput(
        symbol=symbol,
        direction=direction,
        entry_price=prices["entryPrice"],
        exit_price=prices["exitPrice"],
        lot_size=prices["lotSize"],
        notes=_text(fields, "notes"),
        override_pnl=override_pnl,
    )


def parse_balance(raw: Any) -> float:
    """
    Parse the balance settings field.

    Raises:
        ValidationError: If the value is not a non-negative finite number
    """
    return parse_number(str(raw).strip() if raw is not None else "", "balance")


def preview_pnl(fields: Mapping[str, Any]) -> float:
    """
    Live P&L preview for a partly filled form.

    Never raises. Incomplete or unparsable input previews as 0.0.
    """
    try:
        direction = Direction.parse(_text(fields, "tradeType") or Direction.LONG.label)
        override = _optional_number(fields, "customPnL", allow_negative=True)
        if override is not None:
            return override
        entry, exit_, lots = (_optional_number(fields, key) for key in PRICE_FIELDS)
    except (ValueError, ValidationError):
        return 0.0

    return compute_pnl(direction, entry, exit_, lots)
