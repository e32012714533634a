"""Derived roster view: search, department filter and pagination."""

from __future__ import annotations

import math
from typing import Optional, Sequence, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE
from ..employees.model import Employee
from .calendar_grid import day_columns, is_weekend, iso_date, month_days
from .grid_state import AttendanceGridState

T = TypeVar("T")


def filter_employees(roster: Sequence[Employee], search_term: str = "", department_name: str = "") -> list[Employee]:
    term = (search_term or "").strip().lower()
    department_name = department_name or ""

    def matches(e: Employee) -> bool:
        if department_name and e.department_name != department_name:
            return False
        if not term:
            return True
        fields = (e.full_name, e.employee_code, e.department_name, e.mobile_number)
        return any(term in (f or "").lower() for f in fields)

    return [e for e in roster if matches(e)]


def paginate(items: Sequence[T], page: int, page_size: int) -> list[T]:
    """1-indexed slice. Out-of-range pages give an empty list."""
    start = (int(page) - 1) * int(page_size)
    if start < 0:
        return []
    return list(items[start:start + int(page_size)])


def total_pages(count: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(count / page_size)


def clamp_page(page: int, count: int, page_size: int) -> int:
    return max(1, min(int(page), total_pages(count, page_size) or 1))


class GridView:
    """Filter and paging state of the roster table.

    Changing the search term or the department filter goes back to page 1.
    """

    def __init__(self, *, page_size: int = DEFAULT_PAGE_SIZE, search_term: str = "", department_name: str = "", page: int = 1):
        self.page_size = int(page_size)
        self._search_term = search_term or ""
        self._department_name = department_name or ""
        self.page = int(page)

    @property
    def search_term(self) -> str:
        return self._search_term

    @search_term.setter
    def search_term(self, value: str) -> None:
        self._search_term = value or ""
        self.page = 1

    @property
    def department_name(self) -> str:
        return self._department_name

    @department_name.setter
    def department_name(self, value: str) -> None:
        self._department_name = value or ""
        self.page = 1

    def filtered(self, roster: Sequence[Employee]) -> list[Employee]:
        return filter_employees(roster, self._search_term, self._department_name)

    def visible(self, roster: Sequence[Employee]) -> list[Employee]:
        """Rows of the current page. Pulls an out-of-range page back in range."""
        filtered = self.filtered(roster)
        self.page = clamp_page(self.page, len(filtered), self.page_size)
        return paginate(filtered, self.page, self.page_size)


def grid_rows(
    grid: AttendanceGridState,
    employees: Sequence[Employee],
    *,
    status_names: Optional[dict[int, str]] = None,
) -> list[dict]:
    status_names = status_names or {}
    rows = []
    for e in employees:
        cells = []
        for d in month_days(grid.year, grid.month):
            status_id = grid.get(e.id, iso_date(grid.year, grid.month, d))
            cells.append(
                {
                    "day": d,
                    "status_id": status_id,
                    "status": status_names.get(status_id, "") if status_id is not None else "",
                    "is_weekend": is_weekend(grid.year, grid.month, d),
                }
            )
        rows.append({"employee": e.to_dict(), "cells": cells})
    return rows


def grid_payload(
    grid: AttendanceGridState,
    visible: Sequence[Employee],
    *,
    view: GridView,
    filtered_count: int,
    status_names: Optional[dict[int, str]] = None,
) -> dict:
    return {
        "year": grid.year,
        "month": grid.month,
        "days": [
            {"day": c.day, "date": c.iso, "weekday": c.weekday, "is_weekend": c.is_weekend}
            for c in day_columns(grid.year, grid.month)
        ],
        "rows": grid_rows(grid, visible, status_names=status_names),
        "page": view.page,
        "page_size": view.page_size,
        "total": filtered_count,
        "total_pages": total_pages(filtered_count, view.page_size),
        "saving": grid.saving,
    }
