"""Flat CSV rendering of the attendance grid and of reports.

Every field, header included, is wrapped in double quotes; embedded quotes
are doubled so the text re-imports unchanged. Lines end with ``\\n``.
"""

from __future__ import annotations

import csv
import io
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..attendance.calendar_grid import iso_date, month_days, month_name
from ..attendance.grid_state import AttendanceGridState
from ..employees.model import Employee
from ..reports.model import DepartmentReport, EmployeeAggregateRow, EmployeeDayRow, EmployeeTimelineReport

DOWNLOAD_ENCODING = "utf-8-sig"


@dataclass(frozen=True)
class Column:
    header: str
    value: Callable[[Any], Any]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def encode(rows: Iterable[Any], columns: Sequence[Column]) -> str:
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([c.header for c in columns])
    for row in rows:
        writer.writerow([_text(c.value(row)) for c in columns])
    return out.getvalue()


def to_download_bytes(text: str) -> bytes:
    return text.encode(DOWNLOAD_ENCODING)


# grid


def grid_columns(grid: AttendanceGridState, status_names: Mapping[int, str]) -> list[Column]:
    columns = [
        Column("Employee ID", lambda e: e.employee_code),
        Column("Full Name", lambda e: e.full_name),
        Column("Department", lambda e: e.department_name),
    ]

    def day_value(work_date: str) -> Callable[[Employee], str]:
        def value(e: Employee) -> str:
            status_id = grid.get(e.id, work_date)
            return status_names.get(status_id, "") if status_id is not None else ""

        return value

    for d in month_days(grid.year, grid.month):
        columns.append(Column(str(d), day_value(iso_date(grid.year, grid.month, d))))
    return columns


def encode_grid(grid: AttendanceGridState, employees: Sequence[Employee], status_names: Mapping[int, str]) -> str:
    return encode(employees, grid_columns(grid, status_names))


def grid_filename(year: int, month: int) -> str:
    return f"attendance_{month_name(month)}_{int(year)}.csv"


# reports

DEPARTMENT_REPORT_COLUMNS = [
    Column("Employee ID", lambda r: r.employee_code),
    Column("Employee Name", lambda r: r.full_name),
    Column("Department", lambda r: r.department_name),
    Column("Total Days", lambda r: r.counts.total_days),
    Column("Present", lambda r: r.counts.present_days),
    Column("Absent", lambda r: r.counts.absent_days),
    Column("Holiday", lambda r: r.counts.holiday_days),
    Column("On Leave", lambda r: r.counts.leave_days),
    Column("Other", lambda r: r.counts.other_days),
    Column("Attendance %", lambda r: f"{r.counts.attendance_percentage}%"),
]


def employee_report_columns(report: EmployeeTimelineReport) -> list[Column]:
    emp = report.employee
    return [
        Column("Employee ID", lambda _: emp.employee_code),
        Column("Employee Name", lambda _: emp.full_name),
        Column("Mobile Number", lambda _: emp.mobile_number),
        Column("Department", lambda _: emp.department_name),
        Column("Date", lambda d: d.work_date),
        Column("Day", lambda d: d.weekday),
        Column("Status", lambda d: d.status),
    ]


def encode_report(report) -> str:
    if isinstance(report, EmployeeTimelineReport):
        rows: Sequence[EmployeeDayRow] = report.days
        return encode(rows, employee_report_columns(report))
    if isinstance(report, DepartmentReport):
        aggregates: Sequence[EmployeeAggregateRow] = report.rows
        return encode(aggregates, DEPARTMENT_REPORT_COLUMNS)
    raise TypeError(f"Unsupported report type: {type(report).__name__}")


_UNSAFE = re.compile(r'[\\/:*?"<>|\r\n]+')


def _filename_part(value: Optional[str]) -> str:
    value = _UNSAFE.sub("_", (value or "").strip())
    return value or "unknown"


def report_filename(report) -> str:
    start, end = report.query.start_iso, report.query.end_iso
    if isinstance(report, EmployeeTimelineReport):
        code = report.employee.employee_code if report.employee_found else None
        return f"attendance_report_{_filename_part(code)}_{start}_to_{end}.csv"
    if report.all_departments:
        return f"all_departments_report_{start}_to_{end}.csv"
    return f"department_report_{_filename_part(report.department_name)}_{start}_to_{end}.csv"
