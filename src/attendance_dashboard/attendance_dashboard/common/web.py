"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    IntegrityGuardError,
    NotFoundError,
    SaveInProgressError,
    ValidationError,
)
from ..permissions.model import PermissionSet

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS_BY_ERROR = (
    (SaveInProgressError, 409),
    (ValidationError, 400),
    (IntegrityGuardError, 409),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (BackendError, 502),
)


def status_for(e: Exception) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(e, error_type):
            return status
    return 500


def error_response(e: Exception, fallback: str = "Unexpected server error"):
    """JSON error body for an exception caught in a view.

    Call from inside the ``except`` block so unexpected errors keep their
    traceback in the log.
    """
    status = status_for(e)
    if status == 500:
        logger.exception(fallback)
        message = fallback
    else:
        message = str(e)

    body = {"success": False, "message": message}
    if isinstance(e, IntegrityGuardError):
        body["count"] = e.count
    if isinstance(e, AuthenticationError):
        session.clear()
    return jsonify(body), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> Optional[int]:
    user_id = session.get("user_id")
    return int(user_id) if user_id is not None else None


def stored_permissions() -> Optional[PermissionSet]:
    """The set resolved at sign-in, or None while it is not known."""
    data = session.get("permissions")
    if data is None:
        return None
    return PermissionSet.from_dict(data)


def current_permissions() -> PermissionSet:
    return stored_permissions() or PermissionSet.unresolved()


def remember_permissions(permissions: PermissionSet) -> None:
    session["permissions"] = permissions.to_dict()


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def csv_download(app, payload: bytes, filename: str):
    return app.response_class(
        payload,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
