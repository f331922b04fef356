"""
Card formatting tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from client.formatting import format_currency, format_timestamp


@pytest.mark.parametrize("value,expected", [
    (2.5, "R$ 2,50"),
    (0.75, "R$ 0,75"),
    (1234.5, "R$ 1.234,50"),
    (1000000, "R$ 1.000.000,00"),
])
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_timestamp_converts_to_given_timezone():
    brasilia = timezone(timedelta(hours=-3))
    assert format_timestamp("2024-01-15T13:30:00+00:00", tz=brasilia) == "15/01/2024 às 10:30"


def test_format_timestamp_accepts_zulu_suffix():
    assert format_timestamp("2024-01-15T10:30:00Z", tz=timezone.utc) == "15/01/2024 às 10:30"


def test_format_timestamp_accepts_datetime():
    moment = datetime(2024, 12, 1, 8, 5, tzinfo=timezone.utc)
    assert format_timestamp(moment, tz=timezone.utc) == "01/12/2024 às 08:05"
