from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_range(self, *, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        """All records with start_date <= date <= end_date, joined to employee identity."""

        raise NotImplementedError

    def upsert(
        self,
        *,
        employee_id: int,
        work_date: str,
        status_id: Optional[int],
        actor_id: Optional[int],
    ) -> None:
        """Insert or replace the single record keyed by (employee_id, work_date)."""

        raise NotImplementedError

    def count_by_status(self, status_id: int) -> int:
        raise NotImplementedError
