"""
Utility functions and helpers
"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict


PRICE_QUANTUM = Decimal("0.01")
# Largest value a NUMERIC(10, 2) column accepts
MAX_PRICE = Decimal("99999999.99")

_RECORD_ID_PATTERN = re.compile(r"-?[0-9]+")
# Plain ASCII decimal notation only: no digit separators or non-ASCII digits
_PRICE_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_price(value: Any) -> Decimal:
    """
    Coerce a price given as a number or numeric string to a 2-place Decimal.

    Raises:
        ValueError: for booleans, non-numeric text, NaN/Infinity, and values
            that are not positive or do not fit the price column after rounding
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValueError(f"Unsupported price value: {value!r}")

    text = str(value).strip()
    if not _PRICE_PATTERN.fullmatch(text):
        raise ValueError(f"Price is not a number: {value!r}")

    try:
        price = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Price is not a number: {value!r}")

    if not price.is_finite() or price > MAX_PRICE:
        raise ValueError(f"Price out of range: {value!r}")

    price = price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    if price <= 0:
        raise ValueError(f"Price out of range: {value!r}")
    return price


def parse_record_id(value: str) -> int:
    """Parse a path-embedded record id, raising ValueError when it is not an integer"""
    if not isinstance(value, str) or not _RECORD_ID_PATTERN.fullmatch(value.strip()):
        raise ValueError(f"Invalid record id: {value!r}")
    return int(value)


def serialize_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Convert database values into JSON friendly ones"""
    data = dict(row)
    for key, value in data.items():
        if isinstance(value, datetime):
            data[key] = value.isoformat()
        elif isinstance(value, Decimal):
            data[key] = float(value)
    return data
