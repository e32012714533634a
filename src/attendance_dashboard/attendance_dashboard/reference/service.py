from __future__ import annotations

import logging
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_STATUS_COLOR
from ..core.enums import Capability
from ..core.exceptions import IntegrityGuardError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..permissions.model import PermissionSet
from ..permissions.policy import require
from .cache import LookupCache
from .model import AttendanceStatusOption, Department
from .repository import DepartmentRepository, StatusRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    """Use case: department lookup list and its maintenance."""

    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository):
        self._departments = departments
        self._employees = employees
        self.cache: LookupCache[Department] = LookupCache(
            "departments", departments.list_all, key=lambda d: d.id
        )

    def list_departments(self) -> list[Department]:
        return self.cache.items()

    def get(self, department_id: int) -> Department:
        department = self.cache.get(department_id)
        if not department:
            raise NotFoundError("Department not found")
        return department

    def name_of(self, department_id: Optional[int]) -> str:
        department = self.cache.get(department_id)
        return department.name if department else ""

    def create(self, *, permissions: PermissionSet, actor_id: Optional[int], name: str) -> int:
        require(permissions, Capability.MANAGE_EMPLOYEES)
        name = require_non_empty(name, "Department name")
        self._ensure_unique_name(name)

        department_id = self._departments.create(name=name, actor_id=actor_id)
        self.cache.invalidate()
        logger.info("Department %s created: %s", department_id, name)
        return department_id

    def update(
        self,
        *,
        permissions: PermissionSet,
        actor_id: Optional[int],
        department_id: int,
        name: str,
        is_active: bool = True,
    ) -> None:
        require(permissions, Capability.MANAGE_EMPLOYEES)
        name = require_non_empty(name, "Department name")
        self._ensure_unique_name(name, ignore_id=department_id)

        if not is_active:
            self._guard_in_use(department_id, action="deactivate")

        if not self._departments.update(
            department_id=int(department_id), name=name, is_active=bool(is_active), actor_id=actor_id
        ):
            raise NotFoundError("Department not found")
        self.cache.invalidate()
        logger.info("Department %s updated", department_id)

    def delete(self, *, permissions: PermissionSet, department_id: int) -> None:
        require(permissions, Capability.MANAGE_EMPLOYEES)
        self._guard_in_use(department_id, action="delete")

        if not self._departments.delete(int(department_id)):
            raise NotFoundError("Department not found")
        self.cache.invalidate()
        logger.info("Department %s deleted", department_id)

    def _guard_in_use(self, department_id: int, *, action: str) -> None:
        count = self._employees.count_active_in_department(int(department_id))
        if count > 0:
            name = self.name_of(department_id) or str(department_id)
            raise IntegrityGuardError(
                f'Cannot {action} department "{name}" because it is currently assigned to '
                f"{count} employee(s). Please reassign these employees first.",
                count=count,
            )

    def _ensure_unique_name(self, name: str, *, ignore_id: Optional[int] = None) -> None:
        for d in self.cache.items():
            if d.name.lower() == name.lower() and d.id != ignore_id:
                raise ValidationError("A department with this name already exists")


class StatusCatalogService:
    """Use case: attendance status catalogue.

    Only active statuses are offered for new entries, but the full list is
    still needed to render historic cells.
    """

    def __init__(self, statuses: StatusRepository, attendance: AttendanceRepository):
        self._statuses = statuses
        self._attendance = attendance
        self.cache: LookupCache[AttendanceStatusOption] = LookupCache(
            "statuses", statuses.list_all, key=lambda s: s.id
        )

    def list_active(self) -> list[AttendanceStatusOption]:
        return [s for s in self.cache.items() if s.is_active]

    def list_all(self, *, permissions: PermissionSet) -> list[AttendanceStatusOption]:
        require(permissions, Capability.MANAGE_EMPLOYEES)
        return self.cache.items()

    def name_of(self, status_id: Optional[int]) -> str:
        status = self.cache.get(status_id)
        return status.name if status else ""

    def names_by_id(self) -> dict[int, str]:
        return {status_id: s.name for status_id, s in self.cache.by_id().items()}

    def ensure_selectable(self, status_id: Optional[int]) -> None:
        """Reject ids that are unknown or deactivated. None (clear) always passes."""
        if status_id is None:
            return
        status = self.cache.get(status_id)
        if not status or not status.is_active:
            raise ValidationError("Unknown or inactive attendance status")

    def create(self, *, permissions: PermissionSet, actor_id: Optional[int], name: str, color: str = "") -> int:
        require(permissions, Capability.MANAGE_EMPLOYEES)
        name = require_non_empty(name, "Status name")
        self._ensure_unique_name(name)

        status_id = self._statuses.create(
            name=name, color=(color or "").strip() or DEFAULT_STATUS_COLOR, actor_id=actor_id
        )
        self.cache.invalidate()
        logger.info("Attendance status %s created: %s", status_id, name)
        return status_id

    def update(
        self,
        *,
        permissions: PermissionSet,
        actor_id: Optional[int],
        status_id: int,
        name: str,
        color: str = "",
        is_active: bool = True,
    ) -> None:
        require(permissions, Capability.MANAGE_EMPLOYEES)
        name = require_non_empty(name, "Status name")
        self._ensure_unique_name(name, ignore_id=status_id)

        if not is_active:
            self._guard_in_use(status_id, action="deactivate")

        if not self._statuses.update(
            status_id=int(status_id),
            name=name,
            color=(color or "").strip() or DEFAULT_STATUS_COLOR,
            is_active=bool(is_active),
            actor_id=actor_id,
        ):
            raise NotFoundError("Attendance status not found")
        self.cache.invalidate()
        logger.info("Attendance status %s updated", status_id)

    def delete(self, *, permissions: PermissionSet, status_id: int) -> None:
        require(permissions, Capability.MANAGE_EMPLOYEES)
        self._guard_in_use(status_id, action="delete")

        if not self._statuses.delete(int(status_id)):
            raise NotFoundError("Attendance status not found")
        self.cache.invalidate()
        logger.info("Attendance status %s deleted", status_id)

    def _guard_in_use(self, status_id: int, *, action: str) -> None:
        count = self._attendance.count_by_status(int(status_id))
        if count > 0:
            name = self.name_of(status_id) or str(status_id)
            raise IntegrityGuardError(
                f'Cannot {action} status "{name}" because it is currently used in '
                f"{count} attendance record(s).",
                count=count,
            )

    def _ensure_unique_name(self, name: str, *, ignore_id: Optional[int] = None) -> None:
        for s in self.cache.items():
            if s.name.lower() == name.lower() and s.id != ignore_id:
                raise ValidationError("A status with this name already exists")
