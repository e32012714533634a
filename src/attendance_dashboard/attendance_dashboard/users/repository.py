from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import AdminUser, PasswordResetToken


class UserRepository(Protocol):
    """Repository interface for admin accounts.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[AdminUser]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        raise NotImplementedError

    def create_user(self, *, email: str, password_hash: str) -> int:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def touch_sign_in(self, user_id: int, *, at: datetime) -> None:
        raise NotImplementedError

    def create_reset_token(self, *, user_id: int, token_hash: str, expires_at: datetime) -> int:
        raise NotImplementedError

    def get_reset_token(self, token_id: int) -> Optional[PasswordResetToken]:
        raise NotImplementedError

    def mark_reset_token_used(self, token_id: int, *, at: datetime) -> bool:
        raise NotImplementedError
