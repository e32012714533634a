from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.web import (
    current_permissions,
    current_user_id,
    error_response,
    json_body,
    login_required,
    remember_permissions,
)
from ..container import Container
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        try:
            principal = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except Exception as e:
            return error_response(e, "System error while signing in")

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        container.grid_store.drop(principal.user_id)

        session["user_id"] = principal.user_id
        session["email"] = principal.email
        remember_permissions(principal.permissions)

        return jsonify(
            {
                "success": True,
                "user": {"user_id": principal.user_id, "email": principal.email},
                "permissions": principal.permissions.effective(),
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        user_id = current_user_id()
        if user_id is not None:
            container.grid_store.drop(user_id)
        session.clear()
        return jsonify({"success": True, "message": "Signed out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        try:
            user = container.auth_service.current_principal(current_user_id())
            if not user:
                raise AuthenticationError("Your session has expired. Please sign in again.")
        except Exception as e:
            return error_response(e)

        permissions = current_permissions()
        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": user.user_id,
                    "email": user.email,
                    "last_sign_in_at": user.last_sign_in_at.isoformat() if user.last_sign_in_at else None,
                },
                "permissions": permissions.effective(),
                "loading": permissions.loading,
            }
        )

    @app.route("/api/auth/password-reset", methods=["POST"], endpoint="password_reset")
    def password_reset():
        data = json_body()
        try:
            token = container.auth_service.request_password_reset(data.get("email", ""))
        except Exception as e:
            return error_response(e, "System error while requesting a password reset")

        body = {"success": True, "message": "If the email is registered, a reset link has been issued."}
        # No mail delivery here; expose the token only outside production.
        if token and (app.config.get("DEBUG") or app.config.get("TESTING")):
            body["reset_token"] = token
        return jsonify(body)

    @app.route("/api/auth/password-reset/confirm", methods=["POST"], endpoint="password_reset_confirm")
    def password_reset_confirm():
        data = json_body()
        try:
            container.auth_service.confirm_password_reset(data.get("token", ""), data.get("password", ""))
        except Exception as e:
            return error_response(e, "System error while resetting the password")
        return jsonify({"success": True, "message": "Password updated. Please sign in."})
