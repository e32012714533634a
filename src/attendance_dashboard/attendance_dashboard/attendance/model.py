from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance fact for (employee, date).

    ``status_id`` is None for a cell that was explicitly cleared.
    """

    employee_id: int
    work_date: str
    status_id: Optional[int]
    employee_code: Optional[str] = None
    full_name: Optional[str] = None
    updated_by: Optional[int] = None
