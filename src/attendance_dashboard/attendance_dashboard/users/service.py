from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_PASSWORD_RESET_TTL_MINUTES, MIN_PASSWORD_LENGTH
from ..core.enums import Capability
from ..core.exceptions import AuthenticationError, ValidationError
from ..permissions.model import PermissionSet
from ..permissions.policy import require
from ..permissions.repository import PermissionRepository
from ..permissions.service import PermissionResolver
from .model import AdminUser
from .repository import UserRepository

logger = logging.getLogger(__name__)

_INVALID_RESET = "Reset link is invalid or has expired"


@dataclass(frozen=True)
class SessionPrincipal:
    """What we store into the Flask session after login."""

    user_id: int
    email: str
    permissions: PermissionSet


def _normalize_email(email: str) -> str:
    email = require_non_empty(email, "Email").lower()
    if "@" not in email:
        raise ValidationError("Email is invalid")
    return email


class AuthService:
    """Use case: sign in, resolve the current principal, reset passwords."""

    def __init__(
        self,
        users: UserRepository,
        permissions: PermissionRepository,
        *,
        reset_ttl_minutes: int = DEFAULT_PASSWORD_RESET_TTL_MINUTES,
    ):
        self._users = users
        self._permissions = permissions
        self._reset_ttl = timedelta(minutes=int(reset_ttl_minutes))

    def authenticate(self, email: str, password: str, *, now: Optional[datetime] = None) -> SessionPrincipal:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.info("Failed sign-in for %s", user.email)
            raise AuthenticationError("Invalid email or password")

        resolver = PermissionResolver(self._permissions)
        permissions = resolver.load(user.user_id)
        self._users.touch_sign_in(user.user_id, at=now or now_local())
        logger.info("Principal %s signed in", user.user_id)

        return SessionPrincipal(user_id=user.user_id, email=user.email, permissions=permissions)

    def current_principal(self, user_id: Optional[int]) -> Optional[AdminUser]:
        """The signed-in account, or None if the session no longer maps to one."""
        if not user_id:
            return None
        return self._users.get_by_id(int(user_id))

    def register_admin(self, *, permissions: PermissionSet, email: str, password: str) -> int:
        require(permissions, Capability.MANAGE_ADMINS)

        email = _normalize_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if self._users.get_by_email(email):
            raise ValidationError("An admin with this email already exists")

        user_id = self._users.create_user(email=email, password_hash=generate_password_hash(password))
        logger.info("Registered admin %s (%s)", user_id, email)
        return user_id

    def request_password_reset(self, email: str, *, now: Optional[datetime] = None) -> Optional[str]:
        """Issue a one-time reset token.

        Returns None for unknown emails so callers respond identically either
        way. Delivering the token is the caller's job.
        """
        user = self._users.get_by_email(_normalize_email(email))
        if not user:
            return None

        now = now or now_local()
        secret = secrets.token_urlsafe(32)
        token_id = self._users.create_reset_token(
            user_id=user.user_id,
            token_hash=generate_password_hash(secret),
            expires_at=now + self._reset_ttl,
        )
        logger.info("Password reset requested for principal %s", user.user_id)
        return f"{token_id}.{secret}"

    def confirm_password_reset(self, token: str, new_password: str, *, now: Optional[datetime] = None) -> None:
        now = now or now_local()
        token_id_s, _, secret = (token or "").partition(".")
        if not token_id_s.isdigit() or not secret:
            raise ValidationError(_INVALID_RESET)

        stored = self._users.get_reset_token(int(token_id_s))
        if not stored or stored.used_at is not None or stored.expires_at < now:
            raise ValidationError(_INVALID_RESET)
        if not check_password_hash(stored.token_hash, secret):
            raise ValidationError(_INVALID_RESET)

        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)

        if not self._users.mark_reset_token_used(stored.token_id, at=now):
            raise ValidationError(_INVALID_RESET)
        self._users.update_password(stored.user_id, password_hash=generate_password_hash(new_password))
        logger.info("Password reset completed for principal %s", stored.user_id)
