from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CategoryCounts, EmployeeAggregateRow, EmployeeDayRow, ReportSummary


class ReportRepository(Protocol):
    """Server-side aggregates behind the report page."""

    def employee_days(self, *, employee_id: int, start_date: str, end_date: str) -> Sequence[EmployeeDayRow]:
        """Per-day rows (date ascending) of one employee; cleared cells excluded."""

        raise NotImplementedError

    def employee_summary(self, *, employee_id: int, start_date: str, end_date: str) -> Optional[CategoryCounts]:
        raise NotImplementedError

    def employee_aggregates(
        self, *, department_id: Optional[int], start_date: str, end_date: str
    ) -> Sequence[EmployeeAggregateRow]:
        """One row per active employee in scope, employees without records included."""

        raise NotImplementedError

    def department_summary(
        self, *, department_id: Optional[int], start_date: str, end_date: str
    ) -> Optional[ReportSummary]:
        raise NotImplementedError
