from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.id, e.employee_code, e.full_name, e.department_id, e.mobile_number, e.is_active,
           COALESCE(d.name, '') AS department_name
    FROM employees e
    LEFT JOIN departments d ON d.id = e.department_id
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        id=int(row["id"]),
        employee_code=row["employee_code"],
        full_name=row["full_name"],
        department_id=row.get("department_id"),
        department_name=row.get("department_name") or "",
        mobile_number=row.get("mobile_number") or "",
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.is_active=1 ORDER BY e.full_name")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.employee_code=%s", (employee_code,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def create(
        self,
        *,
        employee_code: str,
        full_name: str,
        department_id: int,
        mobile_number: str,
        actor_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_code, full_name, department_id, mobile_number, is_active, created_by, updated_by)
                VALUES(%s, %s, %s, %s, 1, %s, %s)
                """,
                (employee_code, full_name, int(department_id), mobile_number, actor_id, actor_id),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        employee_id: int,
        employee_code: str,
        full_name: str,
        department_id: int,
        mobile_number: str,
        actor_id: Optional[int],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET employee_code=%s, full_name=%s, department_id=%s, mobile_number=%s, updated_by=%s
                WHERE id=%s
                """,
                (employee_code, full_name, int(department_id), mobile_number, actor_id, int(employee_id)),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (int(employee_id),))
            return cur.rowcount > 0

    def count_active_in_department(self, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM employees WHERE department_id=%s AND is_active=1",
                (int(department_id),),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0
