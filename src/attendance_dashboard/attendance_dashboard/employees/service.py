from __future__ import annotations

import logging
from typing import Optional

from ..attendance.grid_state import GridStore
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import EMPLOYEE_CODE_PREFIX
from ..core.enums import Capability
from ..core.exceptions import NotFoundError, ValidationError
from ..permissions.model import PermissionSet
from ..permissions.policy import require
from ..reference.repository import DepartmentRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def normalize_employee_code(value: str) -> str:
    """Return the stored form of an employee code: always ``GMDQS`` + suffix.

    Accepts the bare suffix (what the form shows) or an already-prefixed code.
    """
    code = require_non_empty(value, "Employee ID")
    if code.upper().startswith(EMPLOYEE_CODE_PREFIX):
        code = code[len(EMPLOYEE_CODE_PREFIX):].strip()
    if not code:
        raise ValidationError("Employee ID is required")
    return f"{EMPLOYEE_CODE_PREFIX}{code}"


def display_code(employee_code: str) -> str:
    """The code without its prefix, as shown in the edit form."""
    if employee_code.startswith(EMPLOYEE_CODE_PREFIX):
        return employee_code[len(EMPLOYEE_CODE_PREFIX):]
    return employee_code


class EmployeeService:
    """Use case: roster listing and employee maintenance."""

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        *,
        grid_store: Optional[GridStore] = None,
    ):
        self._employees = employees
        self._departments = departments
        self._grid_store = grid_store

    def list_roster(self, *, permissions: PermissionSet) -> list[Employee]:
        require(permissions, Capability.VIEW_ATTENDANCE)
        return list(self._employees.list_active())

    def get(self, *, permissions: PermissionSet, employee_id: int) -> Employee:
        require(permissions, Capability.VIEW_ATTENDANCE)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create(
        self,
        *,
        permissions: PermissionSet,
        actor_id: Optional[int],
        employee_code: str,
        full_name: str,
        department_id,
        mobile_number: str = "",
    ) -> int:
        require(permissions, Capability.MANAGE_EMPLOYEES)

        code = normalize_employee_code(employee_code)
        full_name = require_non_empty(full_name, "Full name")
        dept_id = self._require_department(department_id)

        if self._employees.get_by_code(code):
            raise ValidationError("An employee with this ID already exists")

        employee_id = self._employees.create(
            employee_code=code,
            full_name=full_name,
            department_id=dept_id,
            mobile_number=(mobile_number or "").strip(),
            actor_id=actor_id,
        )
        logger.info("Employee %s registered as %s", employee_id, code)
        return employee_id

    def update(
        self,
        *,
        permissions: PermissionSet,
        actor_id: Optional[int],
        employee_id: int,
        employee_code: str,
        full_name: str,
        department_id,
        mobile_number: str = "",
    ) -> None:
        require(permissions, Capability.MANAGE_EMPLOYEES)

        code = normalize_employee_code(employee_code)
        full_name = require_non_empty(full_name, "Full name")
        dept_id = self._require_department(department_id)

        # The code may change freely; only the surrogate id is referenced.
        other = self._employees.get_by_code(code)
        if other and other.id != int(employee_id):
            raise ValidationError("An employee with this ID already exists")

        if not self._employees.update(
            employee_id=int(employee_id),
            employee_code=code,
            full_name=full_name,
            department_id=dept_id,
            mobile_number=(mobile_number or "").strip(),
            actor_id=actor_id,
        ):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s updated", employee_id)

    def delete(self, *, permissions: PermissionSet, employee_id: int) -> None:
        require(permissions, Capability.MANAGE_EMPLOYEES)

        if not self._employees.delete(int(employee_id)):
            raise NotFoundError("Employee not found")

        if self._grid_store is not None:
            self._grid_store.purge_employee(int(employee_id))
        logger.info("Employee %s deleted", employee_id)

    def _require_department(self, department_id) -> int:
        dept_id = require_positive_int(department_id, "Department")
        if not self._departments.get_by_id(dept_id):
            raise ValidationError("Department does not exist")
        return dept_id
