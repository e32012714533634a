from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.constants import STATUS_CATEGORIES
from ..core.enums import StatusCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import CategoryCounts, EmployeeAggregateRow, EmployeeDayRow, ReportSummary
from .repository import ReportRepository


def _names(category: StatusCategory) -> list[str]:
    return [name for name, c in STATUS_CATEGORIES.items() if c == category.value]


def _category_columns() -> tuple[str, list[Any]]:
    """SUM(CASE ...) columns counting statuses per report category.

    Rows without a status (cleared cells) are not counted at all.
    """
    parts = ["COUNT(s.id) AS total_days"]
    params: list[Any] = []
    for category, alias in (
        (StatusCategory.PRESENT, "present_days"),
        (StatusCategory.ABSENT, "absent_days"),
        (StatusCategory.HOLIDAY, "holiday_days"),
        (StatusCategory.LEAVE, "leave_days"),
    ):
        names = _names(category)
        parts.append(f"COALESCE(SUM(CASE WHEN s.name IN ({in_clause(names)}) THEN 1 ELSE 0 END), 0) AS {alias}")
        params.extend(names)

    known = list(STATUS_CATEGORIES)
    parts.append(
        f"COALESCE(SUM(CASE WHEN s.id IS NOT NULL AND s.name NOT IN ({in_clause(known)}) THEN 1 ELSE 0 END), 0) AS other_days"
    )
    params.extend(known)
    return ",\n               ".join(parts), params


def _to_counts(row: dict) -> CategoryCounts:
    return CategoryCounts(
        total_days=int(row.get("total_days") or 0),
        present_days=int(row.get("present_days") or 0),
        absent_days=int(row.get("absent_days") or 0),
        holiday_days=int(row.get("holiday_days") or 0),
        leave_days=int(row.get("leave_days") or 0),
        other_days=int(row.get("other_days") or 0),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def employee_days(self, *, employee_id: int, start_date: str, end_date: str) -> Sequence[EmployeeDayRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.date AS work_date, a.status_id, s.name AS status
                FROM attendance a
                JOIN attendance_statuses s ON s.id = a.status_id
                WHERE a.employee_id=%s AND a.date BETWEEN %s AND %s
                ORDER BY a.date
                """,
                (int(employee_id), start_date, end_date),
            )
            return [
                EmployeeDayRow(
                    work_date=r["work_date"].strftime("%Y-%m-%d"),
                    status=r["status"] or "",
                    status_id=r.get("status_id"),
                )
                for r in fetchall(cur)
            ]

    def employee_summary(self, *, employee_id: int, start_date: str, end_date: str) -> Optional[CategoryCounts]:
        columns, params = _category_columns()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {columns}
                FROM attendance a
                JOIN attendance_statuses s ON s.id = a.status_id
                WHERE a.employee_id=%s AND a.date BETWEEN %s AND %s
                """,
                (*params, int(employee_id), start_date, end_date),
            )
            row = fetchone(cur)
            if not row or not row.get("total_days"):
                return None
            return _to_counts(row)

    def employee_aggregates(
        self, *, department_id: Optional[int], start_date: str, end_date: str
    ) -> Sequence[EmployeeAggregateRow]:
        columns, params = _category_columns()
        where = "WHERE e.is_active=1"
        # Placeholder order: SELECT list, JOIN dates, WHERE.
        sql_params: list[Any] = [*params, start_date, end_date]
        if department_id is not None:
            where += " AND e.department_id=%s"
            sql_params.append(int(department_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.id AS employee_id, e.employee_code, e.full_name, e.mobile_number,
                       COALESCE(d.name, '') AS department_name,
                       {columns}
                FROM employees e
                LEFT JOIN departments d ON d.id = e.department_id
                LEFT JOIN attendance a ON a.employee_id = e.id AND a.date BETWEEN %s AND %s
                LEFT JOIN attendance_statuses s ON s.id = a.status_id
                {where}
                GROUP BY e.id, e.employee_code, e.full_name, e.mobile_number, d.name
                ORDER BY e.full_name
                """,
                tuple(sql_params),
            )
            return [
                EmployeeAggregateRow(
                    employee_id=int(r["employee_id"]),
                    employee_code=r["employee_code"],
                    full_name=r["full_name"],
                    department_name=r.get("department_name") or "",
                    mobile_number=r.get("mobile_number") or "",
                    counts=_to_counts(r),
                )
                for r in fetchall(cur)
            ]

    def department_summary(
        self, *, department_id: Optional[int], start_date: str, end_date: str
    ) -> Optional[ReportSummary]:
        columns, params = _category_columns()
        where = "WHERE e.is_active=1"
        sql_params: list[Any] = [*params, start_date, end_date]
        if department_id is not None:
            where += " AND e.department_id=%s"
            sql_params.append(int(department_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(DISTINCT e.id) AS total_employees,
                       {columns}
                FROM employees e
                LEFT JOIN attendance a ON a.employee_id = e.id AND a.date BETWEEN %s AND %s
                LEFT JOIN attendance_statuses s ON s.id = a.status_id
                {where}
                """,
                tuple(sql_params),
            )
            row = fetchone(cur)
            if not row:
                return None
            return ReportSummary(employee_count=int(row.get("total_employees") or 0), counts=_to_counts(row))
