"""
Display formatting for product cards (Brazilian locale)
"""

from datetime import datetime, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union


def format_currency(value: Union[int, float, Decimal]) -> str:
    """Format a value as Brazilian reais, e.g. 1234.5 -> 'R$ 1.234,50'"""
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.2f}"
    # swap the en-US separators for pt-BR ones
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {grouped}"


def format_timestamp(value: Union[str, datetime], tz: Optional[tzinfo] = None) -> str:
    """
    Format an ISO-8601 timestamp as 'dd/mm/yyyy às HH:MM'.

    The time is converted to ``tz`` (the local timezone when omitted).
    """
    moment = datetime.fromisoformat(value.replace("Z", "+00:00")) if isinstance(value, str) else value
    if moment.tzinfo is not None or tz is not None:
        moment = moment.astimezone(tz)
    return moment.strftime("%d/%m/%Y às %H:%M")
