from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_STATUS_COLOR
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceStatusOption, Department
from .repository import DepartmentRepository, StatusRepository


def _to_department(row: dict) -> Department:
    return Department(id=int(row["id"]), name=row["name"], is_active=bool(row.get("is_active", True)))


def _to_status(row: dict) -> AttendanceStatusOption:
    return AttendanceStatusOption(
        id=int(row["id"]),
        name=row["name"],
        color=row.get("color") or DEFAULT_STATUS_COLOR,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, is_active FROM departments ORDER BY name")
            return [_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, is_active FROM departments WHERE id=%s", (int(department_id),))
            row = fetchone(cur)
            return _to_department(row) if row else None

    def create(self, *, name: str, actor_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(name, is_active, created_by, updated_by) VALUES(%s, 1, %s, %s)",
                (name, actor_id, actor_id),
            )
            return int(cur.lastrowid)

    def update(self, *, department_id: int, name: str, is_active: bool, actor_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET name=%s, is_active=%s, updated_by=%s WHERE id=%s",
                (name, int(is_active), actor_id, int(department_id)),
            )
            return cur.rowcount > 0

    def delete(self, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE id=%s", (int(department_id),))
            return cur.rowcount > 0


class MySQLStatusRepository(StatusRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[AttendanceStatusOption]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, color, is_active FROM attendance_statuses WHERE is_active=1 ORDER BY name")
            return [_to_status(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[AttendanceStatusOption]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, color, is_active FROM attendance_statuses ORDER BY name")
            return [_to_status(r) for r in fetchall(cur)]

    def get_by_id(self, status_id: int) -> Optional[AttendanceStatusOption]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, color, is_active FROM attendance_statuses WHERE id=%s", (int(status_id),))
            row = fetchone(cur)
            return _to_status(row) if row else None

    def create(self, *, name: str, color: str, actor_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_statuses(name, color, is_active, created_by, updated_by)
                VALUES(%s, %s, 1, %s, %s)
                """,
                (name, color, actor_id, actor_id),
            )
            return int(cur.lastrowid)

    def update(self, *, status_id: int, name: str, color: str, is_active: bool, actor_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_statuses
                SET name=%s, color=%s, is_active=%s, updated_by=%s
                WHERE id=%s
                """,
                (name, color, int(is_active), actor_id, int(status_id)),
            )
            return cur.rowcount > 0

    def delete(self, status_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_statuses WHERE id=%s", (int(status_id),))
            return cur.rowcount > 0
