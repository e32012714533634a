from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_STATUS_COLOR


@dataclass(frozen=True)
class Department:
    id: int
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class AttendanceStatusOption:
    """One value of the backend-managed status catalogue.

    ``color`` is the style token the UI renders for this status id.
    """

    id: int
    name: str
    color: str = DEFAULT_STATUS_COLOR
    is_active: bool = True
