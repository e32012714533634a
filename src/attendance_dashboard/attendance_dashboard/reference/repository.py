from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceStatusOption, Department


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        """Ordered by name."""

        raise NotImplementedError

    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def create(self, *, name: str, actor_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(self, *, department_id: int, name: str, is_active: bool, actor_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete(self, department_id: int) -> bool:
        raise NotImplementedError


class StatusRepository(Protocol):
    def list_active(self) -> Sequence[AttendanceStatusOption]:
        """Active statuses ordered by name."""

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceStatusOption]:
        raise NotImplementedError

    def get_by_id(self, status_id: int) -> Optional[AttendanceStatusOption]:
        raise NotImplementedError

    def create(self, *, name: str, color: str, actor_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(self, *, status_id: int, name: str, color: str, is_active: bool, actor_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete(self, status_id: int) -> bool:
        raise NotImplementedError
