from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import FLAG_NAMES, AdminAccount, PermissionSet
from .repository import PermissionRepository

_FLAG_COLUMNS = ", ".join(FLAG_NAMES)


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: int) -> Optional[PermissionSet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_FLAG_COLUMNS} FROM admin_permissions WHERE user_id=%s",
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return PermissionSet.from_dict(row)

    def upsert(self, *, user_id: int, permissions: PermissionSet, updated_by: Optional[int]) -> None:
        flags = permissions.to_dict()
        updates = ", ".join(f"{name}=VALUES({name})" for name in FLAG_NAMES)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO admin_permissions(user_id, {_FLAG_COLUMNS}, updated_by)
                VALUES(%s, %s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE {updates}, updated_by=VALUES(updated_by)
                """,
                (int(user_id), *[int(flags[name]) for name in FLAG_NAMES], updated_by),
            )

    def delete(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM admin_permissions WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_admins(self) -> Sequence[AdminAccount]:
        flag_select = ", ".join(f"p.{name}" for name in FLAG_NAMES)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT u.user_id, u.email, u.created_at, u.last_sign_in_at, {flag_select}
                FROM admin_users u
                LEFT JOIN admin_permissions p ON p.user_id = u.user_id
                ORDER BY u.email
                """
            )
            rows = fetchall(cur)
            return [
                AdminAccount(
                    user_id=int(r["user_id"]),
                    email=r["email"],
                    created_at=r.get("created_at"),
                    last_sign_in_at=r.get("last_sign_in_at"),
                    permissions=PermissionSet.from_dict(r),
                )
                for r in rows
            ]
