from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.enums import ReportMode

_CENT = Decimal("0.01")


def attendance_percentage(present: int, total: int) -> Decimal:
    """present / total * 100 to two decimals; 0 when there are no days."""
    if not total:
        return Decimal("0.00")
    return (Decimal(present) * 100 / Decimal(total)).quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ReportQuery:
    start_date: date
    end_date: date
    department_id: Optional[int] = None
    employee_id: Optional[int] = None

    @property
    def mode(self) -> ReportMode:
        return ReportMode.EMPLOYEE if self.employee_id is not None else ReportMode.DEPARTMENT

    @property
    def start_iso(self) -> str:
        return self.start_date.isoformat()

    @property
    def end_iso(self) -> str:
        return self.end_date.isoformat()


@dataclass(frozen=True)
class EmployeeDayRow:
    work_date: str
    status: str
    status_id: Optional[int] = None

    @property
    def weekday(self) -> str:
        return date.fromisoformat(self.work_date).strftime("%A")

    def to_dict(self) -> dict:
        return {"date": self.work_date, "day": self.weekday, "status_id": self.status_id, "status": self.status}


@dataclass(frozen=True)
class CategoryCounts:
    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    holiday_days: int = 0
    leave_days: int = 0
    other_days: int = 0

    @property
    def attendance_percentage(self) -> Decimal:
        return attendance_percentage(self.present_days, self.total_days)

    def to_dict(self) -> dict:
        return {
            "total_days": self.total_days,
            "present_days": self.present_days,
            "absent_days": self.absent_days,
            "holiday_days": self.holiday_days,
            "leave_days": self.leave_days,
            "other_days": self.other_days,
            "attendance_percentage": float(self.attendance_percentage),
        }


@dataclass(frozen=True)
class EmployeeAggregateRow:
    """One employee's category counts over the report range."""

    employee_id: int
    employee_code: str
    full_name: str
    department_name: str
    counts: CategoryCounts
    mobile_number: str = ""

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_code": self.employee_code,
            "full_name": self.full_name,
            "department_name": self.department_name,
            "mobile_number": self.mobile_number,
            **self.counts.to_dict(),
        }


@dataclass(frozen=True)
class ReportSummary:
    """Overall totals of a department (or the whole organisation).

    ``counts`` is None when the backend summary was unavailable; only the
    employee count is known then.
    """

    employee_count: int
    counts: Optional[CategoryCounts] = None

    def to_dict(self) -> dict:
        out: dict = {"employee_count": self.employee_count}
        if self.counts is not None:
            out.update(self.counts.to_dict())
        return out


@dataclass(frozen=True)
class ReportEmployee:
    employee_code: str = "Unknown"
    full_name: str = "Unknown"
    mobile_number: str = ""
    department_name: str = ""


@dataclass(frozen=True)
class EmployeeTimelineReport:
    query: ReportQuery
    employee: ReportEmployee
    days: list[EmployeeDayRow] = field(default_factory=list)
    summary: CategoryCounts = field(default_factory=CategoryCounts)
    employee_found: bool = True
    mode: ReportMode = field(default=ReportMode.EMPLOYEE, init=False)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "start_date": self.query.start_iso,
            "end_date": self.query.end_iso,
            "employee": {
                "employee_code": self.employee.employee_code,
                "full_name": self.employee.full_name,
                "mobile_number": self.employee.mobile_number,
                "department": self.employee.department_name,
            },
            "rows": [d.to_dict() for d in self.days],
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class DepartmentReport:
    query: ReportQuery
    rows: list[EmployeeAggregateRow] = field(default_factory=list)
    summary: ReportSummary = field(default_factory=lambda: ReportSummary(employee_count=0))
    department_name: Optional[str] = None
    mode: ReportMode = field(default=ReportMode.DEPARTMENT, init=False)

    @property
    def all_departments(self) -> bool:
        return self.query.department_id is None

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "start_date": self.query.start_iso,
            "end_date": self.query.end_iso,
            "department": self.department_name,
            "all_departments": self.all_departments,
            "rows": [r.to_dict() for r in self.rows],
            "summary": self.summary.to_dict(),
        }
