from __future__ import annotations

import logging
from typing import Optional, Union

from ..core.enums import Capability
from ..core.exceptions import SaveInProgressError, ValidationError
from ..permissions.model import PermissionSet
from ..permissions.policy import require
from ..reference.service import StatusCatalogService
from .calendar_grid import month_bounds
from .grid_state import AttendanceGridState
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

StatusInput = Union[int, str, None]


def normalize_status(value: StatusInput) -> Optional[int]:
    """None or "" clears the cell; anything else must be a status id."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        status_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Status is invalid")
    if status_id <= 0:
        raise ValidationError("Status is invalid")
    return status_id


class AttendanceGridService:
    """Use case: load a month of attendance and edit single cells.

    Edits are optimistic: the grid changes first, then the upsert is sent,
    and a failed upsert restores the previous cell value.
    """

    def __init__(self, attendance: AttendanceRepository, statuses: Optional[StatusCatalogService] = None):
        self._attendance = attendance
        self._statuses = statuses

    def load_month(self, *, permissions: PermissionSet, year: int, month: int) -> AttendanceGridState:
        require(permissions, Capability.VIEW_ATTENDANCE)

        start, end = month_bounds(year, month)
        records = self._attendance.list_range(start_date=start, end_date=end)
        grid = AttendanceGridState.from_records(year, month, records)
        logger.debug("Loaded %d attendance records for %s..%s", len(records), start, end)
        return grid

    def set_status(
        self,
        grid: AttendanceGridState,
        *,
        permissions: PermissionSet,
        actor_id: Optional[int],
        employee_id: int,
        work_date: str,
        status_id: StatusInput,
    ) -> Optional[int]:
        require(permissions, Capability.WRITE_ATTENDANCE)
        if not grid.try_begin_save():
            raise SaveInProgressError("Another change is still being saved")

        try:
            new_status = normalize_status(status_id)
            if not grid.contains_date(work_date):
                raise ValidationError("Date is outside the month being edited")
            if self._statuses is not None:
                self._statuses.ensure_selectable(new_status)

            entry = grid.apply(employee_id, work_date, new_status)
            try:
                self._attendance.upsert(
                    employee_id=int(employee_id),
                    work_date=work_date,
                    status_id=new_status,
                    actor_id=actor_id,
                )
            except Exception:
                grid.rollback(entry)
                logger.warning(
                    "Attendance write failed for employee %s on %s; restored previous value",
                    employee_id,
                    work_date,
                )
                raise
            grid.commit(entry)
        finally:
            grid.end_save()

        logger.info("Principal %s set employee %s %s -> %s", actor_id, employee_id, work_date, new_status)
        return new_status
