from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import csv_download, current_permissions, current_user_id, error_response, login_required
from ..container import Container
from ..core.enums import Capability
from ..export.csv_encoder import encode_report, report_filename, to_download_bytes
from ..permissions.policy import require

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _generate():
        return container.report_aggregator.generate(
            permissions=current_permissions(),
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
            department_id=request.args.get("department_id"),
            employee_id=request.args.get("employee_id"),
        )

    @app.route("/api/reports", methods=["GET"], endpoint="report_view")
    @login_required
    def report_view():
        try:
            report = _generate()
        except Exception as e:
            return error_response(e, "System error while generating the report")
        return jsonify({"success": True, "report": report.to_dict()})

    @app.route("/api/reports/export.csv", methods=["GET"], endpoint="report_export")
    @login_required
    def report_export():
        try:
            require(current_permissions(), Capability.EXPORT_DATA)
            report = _generate()
            text = encode_report(report)
        except Exception as e:
            return error_response(e, "System error while exporting the report")

        filename = report_filename(report)
        logger.info("Principal %s exported %s", current_user_id(), filename)
        return csv_download(app, to_download_bytes(text), filename)
