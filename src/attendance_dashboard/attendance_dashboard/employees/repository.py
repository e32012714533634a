from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_active(self) -> Sequence[Employee]:
        """Active employees ordered by full name, joined to department name."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_code: str,
        full_name: str,
        department_id: int,
        mobile_number: str,
        actor_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        employee_code: str,
        full_name: str,
        department_id: int,
        mobile_number: str,
        actor_id: Optional[int],
    ) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        """Hard delete; the backend cascades to attendance rows."""

        raise NotImplementedError

    def count_active_in_department(self, department_id: int) -> int:
        raise NotImplementedError
