from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AdminUser, PasswordResetToken
from .repository import UserRepository


def _to_user(row: dict) -> AdminUser:
    return AdminUser(
        user_id=int(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
        last_sign_in_at=row.get("last_sign_in_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, email, password_hash, created_at, last_sign_in_at
                FROM admin_users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, email, password_hash, created_at, last_sign_in_at
                FROM admin_users
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, email: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO admin_users(email, password_hash) VALUES(%s, %s)",
                (email, password_hash),
            )
            return int(cur.lastrowid)

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE admin_users SET password_hash=%s WHERE user_id=%s",
                (password_hash, int(user_id)),
            )
            return cur.rowcount > 0

    def touch_sign_in(self, user_id: int, *, at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE admin_users SET last_sign_in_at=%s WHERE user_id=%s", (at, int(user_id)))

    def create_reset_token(self, *, user_id: int, token_hash: str, expires_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO password_reset_tokens(user_id, token_hash, expires_at)
                VALUES(%s, %s, %s)
                """,
                (int(user_id), token_hash, expires_at),
            )
            return int(cur.lastrowid)

    def get_reset_token(self, token_id: int) -> Optional[PasswordResetToken]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, token_hash, expires_at, used_at
                FROM password_reset_tokens
                WHERE id=%s
                """,
                (int(token_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return PasswordResetToken(
                token_id=int(row["id"]),
                user_id=int(row["user_id"]),
                token_hash=row["token_hash"],
                expires_at=row["expires_at"],
                used_at=row.get("used_at"),
            )

    def mark_reset_token_used(self, token_id: int, *, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE password_reset_tokens SET used_at=%s WHERE id=%s AND used_at IS NULL",
                (at, int(token_id)),
            )
            return cur.rowcount > 0
