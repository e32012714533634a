from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ..core.constants import MAX_HELD_GRIDS
from .calendar_grid import month_dates, validate_month
from .model import AttendanceRecord


@dataclass(frozen=True)
class UndoEntry:
    """Cell value captured right before an optimistic write.

    ``previous`` None means the cell had no status (key absent).
    """

    employee_id: int
    work_date: str
    previous: Optional[int]


class AttendanceGridState:
    """Sparse map employee_id -> (ISO date -> status_id) for one month.

    Only cells with a status are stored; an absent key reads as empty.
    Writes go through ``apply`` which records an undo entry; the caller
    either ``commit``s it (backend accepted) or ``rollback``s it.
    """

    def __init__(self, year: int, month: int, cells: Optional[Dict[int, Dict[str, int]]] = None):
        validate_month(year, month)
        self.year = int(year)
        self.month = int(month)
        self._saving = False
        self._save_lock = threading.Lock()
        self._cells: Dict[int, Dict[str, int]] = {}
        self._undo: list[UndoEntry] = []
        for employee_id, row in (cells or {}).items():
            for work_date, status_id in row.items():
                self._put(int(employee_id), work_date, status_id)

    @classmethod
    def from_records(cls, year: int, month: int, records: Iterable[AttendanceRecord]) -> "AttendanceGridState":
        grid = cls(year, month)
        for r in records:
            # Keyed by surrogate id, never the display code.
            grid._put(r.employee_id, r.work_date, r.status_id)
        return grid

    def get(self, employee_id: int, work_date: str) -> Optional[int]:
        return self._cells.get(int(employee_id), {}).get(work_date)

    def row(self, employee_id: int) -> Dict[str, int]:
        return dict(self._cells.get(int(employee_id), {}))

    def to_dict(self) -> Dict[int, Dict[str, int]]:
        return {employee_id: dict(row) for employee_id, row in self._cells.items()}

    def employee_ids(self) -> list[int]:
        return list(self._cells)

    def contains_date(self, work_date: str) -> bool:
        return work_date in month_dates(self.year, self.month)

    @property
    def pending(self) -> tuple[UndoEntry, ...]:
        return tuple(self._undo)

    @property
    def saving(self) -> bool:
        return self._saving

    def try_begin_save(self) -> bool:
        """Mark the grid read-only. False if another write already holds it."""
        with self._save_lock:
            if self._saving:
                return False
            self._saving = True
            return True

    def end_save(self) -> None:
        with self._save_lock:
            self._saving = False

    def apply(self, employee_id: int, work_date: str, status_id: Optional[int]) -> UndoEntry:
        entry = UndoEntry(employee_id=int(employee_id), work_date=work_date, previous=self.get(employee_id, work_date))
        self._undo.append(entry)
        self._put(entry.employee_id, work_date, status_id)
        return entry

    def commit(self, entry: UndoEntry) -> None:
        self._undo.remove(entry)

    def rollback(self, entry: UndoEntry) -> None:
        self._put(entry.employee_id, entry.work_date, entry.previous)
        self._undo.remove(entry)

    def purge_employee(self, employee_id: int) -> bool:
        return self._cells.pop(int(employee_id), None) is not None

    def _put(self, employee_id: int, work_date: str, status_id: Optional[int]) -> None:
        if status_id is None:
            row = self._cells.get(employee_id)
            if row is not None:
                row.pop(work_date, None)
                if not row:
                    del self._cells[employee_id]
            return
        self._cells.setdefault(employee_id, {})[work_date] = int(status_id)


class GridStore:
    """The grid each signed-in principal is currently looking at.

    Least recently used grids are evicted past ``max_grids``; a grid with a
    write in flight is never replaced or evicted.
    """

    def __init__(self, max_grids: int = MAX_HELD_GRIDS):
        self._max_grids = int(max_grids)
        self._grids: "OrderedDict[int, AttendanceGridState]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._grids)

    def get(self, principal_id: int) -> Optional[AttendanceGridState]:
        with self._lock:
            grid = self._grids.get(int(principal_id))
            if grid is not None:
                self._grids.move_to_end(int(principal_id))
            return grid

    def put(self, principal_id: int, grid: AttendanceGridState) -> AttendanceGridState:
        """Hold ``grid`` for the principal and return the grid now held."""
        principal_id = int(principal_id)
        with self._lock:
            held = self._grids.get(principal_id)
            if held is not None and held is not grid and held.saving:
                self._grids.move_to_end(principal_id)
                return held
            self._grids[principal_id] = grid
            self._grids.move_to_end(principal_id)
            self._evict()
            return grid

    def drop(self, principal_id: int) -> None:
        with self._lock:
            self._grids.pop(int(principal_id), None)

    def purge_employee(self, employee_id: int) -> None:
        with self._lock:
            grids = list(self._grids.values())
        for grid in grids:
            grid.purge_employee(employee_id)

    def _evict(self) -> None:
        for principal_id in list(self._grids)[:-1]:
            if len(self._grids) <= self._max_grids:
                return
            if not self._grids[principal_id].saving:
                del self._grids[principal_id]
