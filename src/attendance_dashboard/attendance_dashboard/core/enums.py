from __future__ import annotations

from enum import Enum


class Capability(str, Enum):
    """One flag of the fixed six-flag permission bundle."""

    VIEW_ATTENDANCE = "can_view_attendance"
    WRITE_ATTENDANCE = "can_write_attendance"
    EXPORT_DATA = "can_export_data"
    MANAGE_EMPLOYEES = "can_manage_employees"
    MANAGE_ADMINS = "can_manage_admins"
    SUPER_ADMIN = "is_super_admin"


class ReportMode(str, Enum):
    """Shape of a generated report."""

    EMPLOYEE = "employee"
    DEPARTMENT = "department"


class StatusCategory(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HOLIDAY = "holiday"
    LEAVE = "leave"
    OTHER = "other"
