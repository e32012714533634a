"""Calendar grid builder.

Pure date helpers for a month view. Months are numbered 1-12 like
``datetime.date``. ``iso_date`` output is the join key against stored
attendance dates, so its format must not change.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import MONTH_NAMES, YEAR_OPTIONS_SPAN
from ..core.exceptions import ValidationError


def validate_month(year: int, month: int) -> None:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not date.min.year <= int(year) <= date.max.year:
        raise ValidationError("Year is out of range")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(int(year), int(month))[1]


def iso_date(year: int, month: int, day: int) -> str:
    return f"{int(year):04d}-{int(month):02d}-{int(day):02d}"


def is_weekend(year: int, month: int, day: int) -> bool:
    # Saturday=5, Sunday=6
    return date(int(year), int(month), int(day)).weekday() >= 5


def month_name(month: int) -> str:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Month must be between 1 and 12")
    return MONTH_NAMES[int(month) - 1]


def year_options(current_year: int) -> list[int]:
    return list(range(int(current_year) - YEAR_OPTIONS_SPAN, int(current_year) + YEAR_OPTIONS_SPAN + 1))


def month_days(year: int, month: int) -> range:
    return range(1, days_in_month(year, month) + 1)


def month_dates(year: int, month: int) -> list[str]:
    return [iso_date(year, month, d) for d in month_days(year, month)]


def month_bounds(year: int, month: int) -> tuple[str, str]:
    return iso_date(year, month, 1), iso_date(year, month, days_in_month(year, month))


@dataclass(frozen=True)
class DayColumn:
    day: int
    iso: str
    weekday: str
    is_weekend: bool


def day_columns(year: int, month: int) -> list[DayColumn]:
    """Header cells for the month: one per day, with weekday abbreviation."""
    out = []
    for d in month_days(year, month):
        out.append(
            DayColumn(
                day=d,
                iso=iso_date(year, month, d),
                weekday=date(year, month, d).strftime("%a"),
                is_weekend=is_weekend(year, month, d),
            )
        )
    return out


@dataclass(frozen=True)
class MonthCursor:
    """The (year, month) the grid is showing, with wrap-around navigation."""

    year: int
    month: int

    def __post_init__(self):
        validate_month(self.year, self.month)

    def next(self) -> "MonthCursor":
        if self.month == 12:
            return MonthCursor(self.year + 1, 1)
        return MonthCursor(self.year, self.month + 1)

    def previous(self) -> "MonthCursor":
        if self.month == 1:
            return MonthCursor(self.year - 1, 12)
        return MonthCursor(self.year, self.month - 1)

    @classmethod
    def today(cls, today: Optional[date] = None) -> "MonthCursor":
        today = today or date.today()
        return cls(today.year, today.month)

    @property
    def name(self) -> str:
        return month_name(self.month)
