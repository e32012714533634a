from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AdminUser:
    """Domain entity: an administrator who can sign in.

    Note: Plain data object (no DB access code).
    """

    user_id: int
    email: str
    password_hash: str
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None


@dataclass(frozen=True)
class PasswordResetToken:
    token_id: int
    user_id: int
    token_hash: str
    expires_at: datetime
    used_at: Optional[datetime] = None
