from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date_field
from ..common.validators import require_positive_int
from ..common.web import (
    csv_download,
    current_permissions,
    current_user_id,
    error_response,
    json_body,
    login_required,
)
from ..container import Container
from ..core.enums import Capability
from ..core.exceptions import SaveInProgressError
from ..export.csv_encoder import encode_grid, grid_filename, to_download_bytes
from ..permissions.policy import require
from .calendar_grid import MonthCursor, year_options
from .view import GridView, grid_payload

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _cursor_from_args() -> MonthCursor:
        today = MonthCursor.today()
        year = request.args.get("year")
        month = request.args.get("month")
        return MonthCursor(
            require_positive_int(year, "Year") if year else today.year,
            require_positive_int(month, "Month") if month else today.month,
        )

    def _view_from_args() -> GridView:
        page = request.args.get("page")
        page_size = request.args.get("page_size")
        held = session.get("grid_filter") or {}
        view = GridView(
            page_size=require_positive_int(page_size, "Page size") if page_size else container.page_size,
            search_term=held.get("search", ""),
            department_name=held.get("department", ""),
            page=require_positive_int(page, "Page") if page else 1,
        )
        # A changed filter sends the table back to page 1.
        search = request.args.get("search", "")
        department = request.args.get("department", "")
        if search != view.search_term:
            view.search_term = search
        if department != view.department_name:
            view.department_name = department
        return view

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_grid")
    @login_required
    def attendance_grid():
        permissions = current_permissions()
        try:
            cursor = _cursor_from_args()
            view = _view_from_args()

            grid = container.attendance_service.load_month(
                permissions=permissions, year=cursor.year, month=cursor.month
            )
            held = container.grid_store.put(current_user_id(), grid)
            if held is not grid and (held.year, held.month) == (grid.year, grid.month):
                grid = held

            roster = container.employee_service.list_roster(permissions=permissions)
            filtered = view.filtered(roster)
            visible = view.visible(roster)
            status_names = container.status_service.names_by_id()
        except Exception as e:
            return error_response(e, "System error while loading attendance")

        session["grid_filter"] = {"search": view.search_term, "department": view.department_name}

        prev_cursor, next_cursor = cursor.previous(), cursor.next()
        return jsonify(
            {
                "success": True,
                "month_name": cursor.name,
                "previous": {"year": prev_cursor.year, "month": prev_cursor.month},
                "next": {"year": next_cursor.year, "month": next_cursor.month},
                "year_options": year_options(MonthCursor.today().year),
                "permissions": permissions.effective(),
                **grid_payload(grid, visible, view=view, filtered_count=len(filtered), status_names=status_names),
            }
        )

    @app.route("/api/attendance/cell", methods=["PUT"], endpoint="attendance_cell")
    @login_required
    def attendance_cell():
        data = json_body()
        permissions = current_permissions()
        user_id = current_user_id()
        try:
            employee_id = require_positive_int(data.get("employee_id"), "Employee")
            work_date = parse_iso_date_field(data.get("date"), "Date")

            grid = container.grid_store.get(user_id)
            if grid is not None and grid.saving:
                raise SaveInProgressError("Another change is still being saved")
            if grid is None or (grid.year, grid.month) != (work_date.year, work_date.month):
                grid = container.attendance_service.load_month(
                    permissions=permissions, year=work_date.year, month=work_date.month
                )
                # put keeps a grid that is mid-write.
                grid = container.grid_store.put(user_id, grid)

            status_id = container.attendance_service.set_status(
                grid,
                permissions=permissions,
                actor_id=user_id,
                employee_id=employee_id,
                work_date=work_date.isoformat(),
                status_id=data.get("status_id"),
            )
        except Exception as e:
            return error_response(e, "System error while saving attendance")

        return jsonify(
            {
                "success": True,
                "employee_id": employee_id,
                "date": work_date.isoformat(),
                "status_id": status_id,
                "status": container.status_service.name_of(status_id),
            }
        )

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="attendance_export")
    @login_required
    def attendance_export():
        permissions = current_permissions()
        try:
            require(permissions, Capability.EXPORT_DATA)
            cursor = _cursor_from_args()
            view = _view_from_args()

            grid = container.attendance_service.load_month(
                permissions=permissions, year=cursor.year, month=cursor.month
            )
            roster = container.employee_service.list_roster(permissions=permissions)
            text = encode_grid(grid, view.filtered(roster), container.status_service.names_by_id())
        except Exception as e:
            return error_response(e, "System error while exporting attendance")

        filename = grid_filename(cursor.year, cursor.month)
        logger.info("Principal %s exported %s", current_user_id(), filename)
        return csv_download(app, to_download_bytes(text), filename)
