from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.employee_id, a.date AS work_date, a.status_id, a.updated_by,
                       e.employee_code, e.full_name
                FROM attendance a
                JOIN employees e ON e.id = a.employee_id
                WHERE a.date BETWEEN %s AND %s
                ORDER BY a.date, a.employee_id
                """,
                (start_date, end_date),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    employee_id=int(r["employee_id"]),
                    work_date=r["work_date"].strftime("%Y-%m-%d"),
                    status_id=int(r["status_id"]) if r.get("status_id") is not None else None,
                    employee_code=r.get("employee_code"),
                    full_name=r.get("full_name"),
                    updated_by=r.get("updated_by"),
                )
                for r in rows
            ]

    def upsert(
        self,
        *,
        employee_id: int,
        work_date: str,
        status_id: Optional[int],
        actor_id: Optional[int],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, status_id, created_by, updated_by)
                VALUES(%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE status_id=VALUES(status_id), updated_by=VALUES(updated_by)
                """,
                (int(employee_id), work_date, status_id, actor_id, actor_id),
            )

    def count_by_status(self, status_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance WHERE status_id=%s", (int(status_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
