from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    current_user_id,
    error_response,
    json_body,
    login_required,
    remember_permissions,
    stored_permissions,
)
from ..container import Container
from .model import AdminAccount, PermissionSet
from .service import PermissionResolver


def _account_dict(a: AdminAccount) -> dict:
    return {
        "user_id": a.user_id,
        "email": a.email,
        "created_at": a.created_at.isoformat() if a.created_at else None,
        "last_sign_in_at": a.last_sign_in_at.isoformat() if a.last_sign_in_at else None,
        "permissions": a.permissions.to_dict(),
        "effective": a.permissions.effective(),
    }


def register(app: Flask, container: Container) -> None:
    def resolver() -> PermissionResolver:
        return PermissionResolver(
            container.permissions_repo,
            principal_id=current_user_id(),
            current=stored_permissions(),
        )

    @app.route("/api/admins", methods=["GET"], endpoint="admin_list")
    @login_required
    def admin_list():
        try:
            admins = resolver().list_admins()
        except Exception as e:
            return error_response(e, "System error while loading admin users")
        return jsonify({"success": True, "admins": [_account_dict(a) for a in admins]})

    @app.route("/api/admins", methods=["POST"], endpoint="admin_create")
    @login_required
    def admin_create():
        data = json_body()
        r = resolver()
        try:
            user_id = container.auth_service.register_admin(
                permissions=r.current,
                email=data.get("email", ""),
                password=data.get("password", ""),
            )
            if isinstance(data.get("permissions"), dict):
                r.update(user_id, PermissionSet.from_dict(data["permissions"]))
        except Exception as e:
            return error_response(e, "System error while creating the admin user")
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/admins/<int:user_id>/permissions", methods=["PUT"], endpoint="admin_permissions_update")
    @login_required
    def admin_permissions_update(user_id: int):
        r = resolver()
        try:
            updated = r.update(user_id, PermissionSet.from_dict(json_body()))
        except Exception as e:
            return error_response(e, "System error while updating permissions")

        if user_id == current_user_id():
            remember_permissions(r.current)
        return jsonify({"success": True, "permissions": updated.to_dict(), "effective": updated.effective()})

    @app.route("/api/admins/<int:user_id>/permissions", methods=["DELETE"], endpoint="admin_permissions_revoke")
    @login_required
    def admin_permissions_revoke(user_id: int):
        r = resolver()
        try:
            r.revoke(user_id)
        except Exception as e:
            return error_response(e, "System error while removing permissions")

        if user_id == current_user_id():
            remember_permissions(r.current)
        return jsonify({"success": True, "message": "Permissions removed"})
