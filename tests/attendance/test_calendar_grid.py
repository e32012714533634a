from datetime import date, timedelta

import pytest

from src.attendance_dashboard.attendance_dashboard.attendance.calendar_grid import (
    MonthCursor,
    day_columns,
    days_in_month,
    is_weekend,
    iso_date,
    month_bounds,
    month_dates,
    month_days,
    month_name,
    year_options,
)
from src.attendance_dashboard.attendance_dashboard.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "year, month, expected",
    [(2024, 2, 29), (2023, 2, 28), (2000, 2, 29), (1900, 2, 28), (2025, 1, 31), (2025, 4, 30), (2025, 12, 31)],
)
def test_days_in_month(year, month, expected):
    assert days_in_month(year, month) == expected


@pytest.mark.parametrize("year, month", [(2024, 2), (2023, 2), (2025, 12), (2026, 6)])
def test_month_dates_are_contiguous_and_increasing(year, month):
    dates = month_dates(year, month)

    assert len(dates) == days_in_month(year, month)
    assert len(set(dates)) == len(dates)
    parsed = [date.fromisoformat(d) for d in dates]
    assert parsed[0] == date(year, month, 1)
    for prev, cur in zip(parsed, parsed[1:]):
        assert cur - prev == timedelta(days=1)


def test_iso_date_is_zero_padded():
    assert iso_date(2024, 2, 9) == "2024-02-09"
    assert iso_date(2024, 11, 30) == "2024-11-30"


def test_is_weekend():
    # 2024-02-03 is a Saturday, 2024-02-04 a Sunday, 2024-02-05 a Monday
    assert is_weekend(2024, 2, 3)
    assert is_weekend(2024, 2, 4)
    assert not is_weekend(2024, 2, 5)


def test_month_helpers():
    assert month_name(1) == "January"
    assert month_name(12) == "December"
    assert year_options(2025) == [2023, 2024, 2025, 2026, 2027]
    assert list(month_days(2024, 2)) == list(range(1, 30))
    assert month_bounds(2024, 2) == ("2024-02-01", "2024-02-29")


@pytest.mark.parametrize("month", [0, 13, -1])
def test_month_name_rejects_out_of_range(month):
    with pytest.raises(ValidationError):
        month_name(month)


def test_day_columns_flag_weekends():
    cols = day_columns(2024, 2)

    assert len(cols) == 29
    assert cols[2].iso == "2024-02-03"
    assert cols[2].weekday == "Sat"
    assert cols[2].is_weekend
    assert not cols[4].is_weekend


def test_cursor_wraps_around_year_end():
    assert MonthCursor(2024, 12).next() == MonthCursor(2025, 1)
    assert MonthCursor(2025, 1).previous() == MonthCursor(2024, 12)
    assert MonthCursor(2025, 6).next() == MonthCursor(2025, 7)
    assert MonthCursor(2025, 6).previous() == MonthCursor(2025, 5)


def test_cursor_today_and_name():
    cursor = MonthCursor.today(date(2024, 2, 15))

    assert cursor == MonthCursor(2024, 2)
    assert cursor.name == "February"


def test_cursor_rejects_invalid_month():
    with pytest.raises(ValidationError):
        MonthCursor(2024, 13)
    with pytest.raises(ValidationError):
        MonthCursor(2024, 0)
