from __future__ import annotations

import logging
from typing import Optional, Union

from ..common.datetime_utils import parse_iso_date_field
from ..common.validators import optional_int
from ..core.enums import Capability
from ..core.exceptions import BackendError, ValidationError
from ..employees.repository import EmployeeRepository
from ..permissions.model import PermissionSet
from ..permissions.policy import require
from ..reference.repository import DepartmentRepository
from .model import (
    CategoryCounts,
    DepartmentReport,
    EmployeeTimelineReport,
    ReportEmployee,
    ReportQuery,
    ReportSummary,
)
from .repository import ReportRepository

logger = logging.getLogger(__name__)

Report = Union[EmployeeTimelineReport, DepartmentReport]


def build_query(*, start_date, end_date, department_id=None, employee_id=None) -> ReportQuery:
    """Validate raw report filters. Raises ValidationError before any I/O."""
    start = parse_iso_date_field(start_date, "Start date")
    end = parse_iso_date_field(end_date, "End date")
    if start > end:
        raise ValidationError("Start date cannot be after end date")
    return ReportQuery(
        start_date=start,
        end_date=end,
        department_id=optional_int(department_id, "Department"),
        employee_id=optional_int(employee_id, "Employee"),
    )


class ReportAggregator:
    """Use case: attendance report for one employee or a department scope.

    With an employee id the result is an ``EmployeeTimelineReport`` (per-day
    rows plus that employee's totals); otherwise a ``DepartmentReport`` with
    one row per active employee and an overall summary.
    """

    def __init__(
        self,
        reports: ReportRepository,
        employees: Optional[EmployeeRepository] = None,
        departments: Optional[DepartmentRepository] = None,
    ):
        self._reports = reports
        self._employees = employees
        self._departments = departments

    def generate(
        self,
        *,
        permissions: PermissionSet,
        start_date,
        end_date,
        department_id=None,
        employee_id=None,
    ) -> Report:
        query = build_query(
            start_date=start_date,
            end_date=end_date,
            department_id=department_id,
            employee_id=employee_id,
        )
        require(permissions, Capability.VIEW_ATTENDANCE)

        if query.employee_id is not None:
            return self._employee_report(query)
        return self._department_report(query)

    def _employee_report(self, query: ReportQuery) -> EmployeeTimelineReport:
        days = list(
            self._reports.employee_days(
                employee_id=query.employee_id, start_date=query.start_iso, end_date=query.end_iso
            )
        )
        summary = self._reports.employee_summary(
            employee_id=query.employee_id, start_date=query.start_iso, end_date=query.end_iso
        )

        found = None
        if self._employees is not None:
            found = self._employees.get_by_id(query.employee_id)
        employee = (
            ReportEmployee(
                employee_code=found.employee_code,
                full_name=found.full_name,
                mobile_number=found.mobile_number,
                department_name=found.department_name,
            )
            if found
            else ReportEmployee()
        )

        logger.info(
            "Employee report for %s %s..%s: %d day(s)", query.employee_id, query.start_iso, query.end_iso, len(days)
        )
        return EmployeeTimelineReport(
            query=query,
            employee=employee,
            days=days,
            summary=summary or CategoryCounts(),
            employee_found=found is not None,
        )

    def _department_report(self, query: ReportQuery) -> DepartmentReport:
        rows = list(
            self._reports.employee_aggregates(
                department_id=query.department_id, start_date=query.start_iso, end_date=query.end_iso
            )
        )

        try:
            summary = self._reports.department_summary(
                department_id=query.department_id, start_date=query.start_iso, end_date=query.end_iso
            )
        except BackendError as e:
            logger.warning("Department summary unavailable: %s", e)
            summary = None
        if summary is None:
            summary = ReportSummary(employee_count=len(rows))

        department_name = None
        if query.department_id is not None and self._departments is not None:
            department = self._departments.get_by_id(query.department_id)
            department_name = department.name if department else None

        logger.info(
            "Department report for %s %s..%s: %d employee(s)",
            query.department_id if query.department_id is not None else "all",
            query.start_iso,
            query.end_iso,
            len(rows),
        )
        return DepartmentReport(query=query, rows=rows, summary=summary, department_name=department_name)
