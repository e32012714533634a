from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee on the attendance roster.

    ``id`` is the stable surrogate key attendance rows reference;
    ``employee_code`` is the human-facing code and may change.
    """

    id: int
    employee_code: str
    full_name: str
    department_id: Optional[int]
    department_name: str = ""
    mobile_number: str = ""
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_code": self.employee_code,
            "full_name": self.full_name,
            "department_id": self.department_id,
            "department": self.department_name,
            "mobile_number": self.mobile_number,
            "is_active": self.is_active,
        }
