from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_permissions, current_user_id, error_response, json_body, login_required
from ..container import Container
from .service import display_code


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="employee_list")
    @login_required
    def employee_list():
        try:
            roster = container.employee_service.list_roster(permissions=current_permissions())
        except Exception as e:
            return error_response(e, "System error while loading employees")
        return jsonify({"success": True, "employees": [e.to_dict() for e in roster]})

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employee_detail")
    @login_required
    def employee_detail(employee_id: int):
        try:
            employee = container.employee_service.get(permissions=current_permissions(), employee_id=employee_id)
        except Exception as e:
            return error_response(e, "System error while loading the employee")
        return jsonify({"success": True, "employee": {**employee.to_dict(), "display_code": display_code(employee.employee_code)}})

    @app.route("/api/employees", methods=["POST"], endpoint="employee_create")
    @login_required
    def employee_create():
        data = json_body()
        try:
            employee_id = container.employee_service.create(
                permissions=current_permissions(),
                actor_id=current_user_id(),
                employee_code=data.get("employee_code", ""),
                full_name=data.get("full_name", ""),
                department_id=data.get("department_id"),
                mobile_number=data.get("mobile_number", ""),
            )
        except Exception as e:
            return error_response(e, "System error while registering the employee")
        return jsonify({"success": True, "id": employee_id, "message": "Employee registered"}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employee_update")
    @login_required
    def employee_update(employee_id: int):
        data = json_body()
        try:
            container.employee_service.update(
                permissions=current_permissions(),
                actor_id=current_user_id(),
                employee_id=employee_id,
                employee_code=data.get("employee_code", ""),
                full_name=data.get("full_name", ""),
                department_id=data.get("department_id"),
                mobile_number=data.get("mobile_number", ""),
            )
        except Exception as e:
            return error_response(e, "System error while updating the employee")
        return jsonify({"success": True, "message": "Employee updated"})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employee_delete")
    @login_required
    def employee_delete(employee_id: int):
        try:
            container.employee_service.delete(permissions=current_permissions(), employee_id=employee_id)
        except Exception as e:
            return error_response(e, "System error while deleting the employee")
        return jsonify({"success": True, "message": "Employee deleted"})
