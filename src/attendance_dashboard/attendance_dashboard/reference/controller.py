from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_permissions, current_user_id, error_response, json_body, login_required
from ..container import Container
from .model import AttendanceStatusOption, Department


def _department_dict(d: Department) -> dict:
    return {"id": d.id, "name": d.name, "is_active": d.is_active}


def _status_dict(s: AttendanceStatusOption) -> dict:
    return {"id": s.id, "name": s.name, "color": s.color, "is_active": s.is_active}


def _flag(value, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def register(app: Flask, container: Container) -> None:
    departments = container.department_service
    statuses = container.status_service

    @app.route("/api/departments", methods=["GET"], endpoint="department_list")
    @login_required
    def department_list():
        try:
            items = departments.list_departments()
        except Exception as e:
            return error_response(e, "System error while loading departments")
        return jsonify({"success": True, "departments": [_department_dict(d) for d in items]})

    @app.route("/api/departments", methods=["POST"], endpoint="department_create")
    @login_required
    def department_create():
        data = json_body()
        try:
            department_id = departments.create(
                permissions=current_permissions(), actor_id=current_user_id(), name=data.get("name", "")
            )
        except Exception as e:
            return error_response(e, "System error while creating the department")
        return jsonify({"success": True, "id": department_id}), 201

    @app.route("/api/departments/<int:department_id>", methods=["PUT"], endpoint="department_update")
    @login_required
    def department_update(department_id: int):
        data = json_body()
        try:
            departments.update(
                permissions=current_permissions(),
                actor_id=current_user_id(),
                department_id=department_id,
                name=data.get("name", ""),
                is_active=_flag(data.get("is_active")),
            )
        except Exception as e:
            return error_response(e, "System error while updating the department")
        return jsonify({"success": True, "message": "Department updated"})

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="department_delete")
    @login_required
    def department_delete(department_id: int):
        try:
            departments.delete(permissions=current_permissions(), department_id=department_id)
        except Exception as e:
            return error_response(e, "System error while deleting the department")
        return jsonify({"success": True, "message": "Department deleted"})

    @app.route("/api/statuses", methods=["GET"], endpoint="status_list")
    @login_required
    def status_list():
        try:
            items = statuses.list_active()
        except Exception as e:
            return error_response(e, "System error while loading attendance statuses")
        return jsonify({"success": True, "statuses": [_status_dict(s) for s in items]})

    @app.route("/api/statuses/all", methods=["GET"], endpoint="status_list_all")
    @login_required
    def status_list_all():
        try:
            items = statuses.list_all(permissions=current_permissions())
        except Exception as e:
            return error_response(e, "System error while loading attendance statuses")
        return jsonify({"success": True, "statuses": [_status_dict(s) for s in items]})

    @app.route("/api/statuses/all", methods=["POST"], endpoint="status_create")
    @login_required
    def status_create():
        data = json_body()
        try:
            status_id = statuses.create(
                permissions=current_permissions(),
                actor_id=current_user_id(),
                name=data.get("name", ""),
                color=data.get("color", ""),
            )
        except Exception as e:
            return error_response(e, "System error while creating the status")
        return jsonify({"success": True, "id": status_id}), 201

    @app.route("/api/statuses/<int:status_id>", methods=["PUT"], endpoint="status_update")
    @login_required
    def status_update(status_id: int):
        data = json_body()
        try:
            statuses.update(
                permissions=current_permissions(),
                actor_id=current_user_id(),
                status_id=status_id,
                name=data.get("name", ""),
                color=data.get("color", ""),
                is_active=_flag(data.get("is_active")),
            )
        except Exception as e:
            return error_response(e, "System error while updating the status")
        return jsonify({"success": True, "message": "Status updated"})

    @app.route("/api/statuses/<int:status_id>", methods=["DELETE"], endpoint="status_delete")
    @login_required
    def status_delete(status_id: int):
        try:
            statuses.delete(permissions=current_permissions(), status_id=status_id)
        except Exception as e:
            return error_response(e, "System error while deleting the status")
        return jsonify({"success": True, "message": "Status deleted"})
