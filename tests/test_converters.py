from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from pie_filter.converters import convert_to_base_currency, format_date


@pytest.mark.parametrize(
    "value, expected",
    [
        (datetime(2024, 3, 5, 23, 59, 59), "03/05/2024"),
        (date(1999, 12, 31), "12/31/1999"),
        ("2023-07-04 08:15:00", "07/04/2023"),
        ("2023-07-04T23:30:00+05:00", "07/04/2023"),
    ],
)
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_format_date_ignores_timezone():
    moment = datetime(2024, 1, 1, 0, 30, tzinfo=timezone(timedelta(hours=2)))
    assert format_date(moment) == "01/01/2024"


def test_format_date_rejects_garbage():
    with pytest.raises(ValueError):
        format_date("soon")


def test_convert_to_base_currency():
    assert convert_to_base_currency(10.0, "GBP", 2.0) == 10.0
    assert convert_to_base_currency(10.0, "USD", 0.5) == 5.0
    assert convert_to_base_currency(10.0, "USD", None) == 10.0
    assert convert_to_base_currency(10.0, "EUR", 2.0, base_currency="EUR") == 10.0
