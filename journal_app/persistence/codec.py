"""
Serialization of trade records to and from their persisted JSON layout.

The layout keeps the journal's original field names so that previously
saved journals load unchanged:

    {"id": "...", "date": "2024-05-01T10:00:00+00:00", "symbol": "XAUUSD",
     "tradeType": "Buy", "entryPrice": 2000.0, "exitPrice": 2010.0,
     "lotSize": 1.0, "pnl": 10.0, "runningBalance": 10010.0,
     "notes": "", "customPnL": false}
"""

import json
from typing import Any

from ..errors import MalformedDataError
from ..ledger.models import Direction, TradeRecord
from ..utils.time import format_timestamp, parse_timestamp

RECORD_FORMAT = "trade record object"


def record_to_dict(record: TradeRecord) -> dict[str, Any]:
    """Convert a record to its persisted mapping."""
    return {
        "id": record.id,
        "date": format_timestamp(record.timestamp),
        "symbol": record.symbol,
        "tradeType": record.direction.label,
        "entryPrice": record.entry_price,
        "exitPrice": record.exit_price,
        "lotSize": record.lot_size,
        "pnl": record.pnl,
        "runningBalance": record.running_balance,
        "notes": record.notes,
        "customPnL": record.pnl_is_override,
    }


def _number(data: dict[str, Any], key: str, default: Any = None) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedDataError(
            f"Field '{key}' must be a number",
            raw_data=repr(value),
            expected_format="number"
        )
    return float(value)


def record_from_dict(data: Any) -> TradeRecord:
    """
    Convert a persisted mapping back into a record.

    Raises:
        MalformedDataError: If a required field is missing or has the wrong type
    """
    if not isinstance(data, dict):
        raise MalformedDataError(
            "Trade record must be an object",
            raw_data=repr(data)[:200],
            expected_format=RECORD_FORMAT
        )

    missing = [key for key in ("id", "date", "symbol", "tradeType", "pnl") if key not in data]
    if missing:
        raise MalformedDataError(
            f"Trade record is missing fields: {', '.join(missing)}",
            raw_data=repr(data)[:200],
            expected_format=RECORD_FORMAT
        )

    if not isinstance(data["symbol"], str) or not data["symbol"].strip():
        raise MalformedDataError("Field 'symbol' must be a non-empty string",
                                 raw_data=repr(data["symbol"]), expected_format="string")

    try:
        timestamp = parse_timestamp(data["date"])
        direction = Direction.parse(data["tradeType"])
    except ValueError as e:
        raise MalformedDataError(str(e), raw_data=repr(data)[:200], expected_format=RECORD_FORMAT) from e

    notes = data.get("notes") or ""
    if not isinstance(notes, str):
        notes = str(notes)

    return TradeRecord(
        id=str(data["id"]),
        timestamp=timestamp,
        symbol=data["symbol"].strip().upper(),
        direction=direction,
        entry_price=_number(data, "entryPrice", 0.0),
        exit_price=_number(data, "exitPrice", 0.0),
        lot_size=_number(data, "lotSize", 0.0),
        pnl=_number(data, "pnl"),
        # Re-derived on restore; a missing value is not an error
        running_balance=_number(data, "runningBalance", 0.0),
        notes=notes,
        pnl_is_override=bool(data.get("customPnL", False)),
    )


def records_to_json(records: "tuple[TradeRecord, ...] | list[TradeRecord]") -> str:
    """Serialize an ordered record sequence."""
    return json.dumps([record_to_dict(r) for r in records])


def records_from_json(text: str) -> list[TradeRecord]:
    """
    Parse a serialized record sequence.

    Raises:
        MalformedDataError: If the text is not a JSON list of valid records
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedDataError(
            f"Stored trades are not valid JSON: {e}",
            raw_data=str(text)[:200],
            expected_format="json list"
        ) from e

    if not isinstance(payload, list):
        raise MalformedDataError(
            "Stored trades must be a JSON list",
            raw_data=str(text)[:200],
            expected_format="json list"
        )

    return [record_from_dict(item) for item in payload]
