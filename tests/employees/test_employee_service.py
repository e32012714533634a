from __future__ import annotations

from dataclasses import replace

import pytest

from src.attendance_dashboard.attendance_dashboard.attendance.grid_state import AttendanceGridState, GridStore
from src.attendance_dashboard.attendance_dashboard.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.attendance_dashboard.attendance_dashboard.employees.model import Employee
from src.attendance_dashboard.attendance_dashboard.employees.service import (
    EmployeeService,
    display_code,
    normalize_employee_code,
)
from src.attendance_dashboard.attendance_dashboard.permissions.model import PermissionSet
from src.attendance_dashboard.attendance_dashboard.reference.model import Department

MANAGER = PermissionSet(can_view_attendance=True, can_manage_employees=True)
VIEWER = PermissionSet(can_view_attendance=True)


class InMemoryEmployees:
    def __init__(self, employees=None):
        self.items = {e.id: e for e in (employees or [])}

    def list_active(self):
        return sorted((e for e in self.items.values() if e.is_active), key=lambda e: e.full_name)

    def get_by_id(self, employee_id):
        return self.items.get(employee_id)

    def get_by_code(self, employee_code):
        return next((e for e in self.items.values() if e.employee_code == employee_code), None)

    def create(self, *, employee_code, full_name, department_id, mobile_number, actor_id):
        new_id = max(self.items, default=0) + 1
        self.items[new_id] = Employee(new_id, employee_code, full_name, department_id, "", mobile_number)
        return new_id

    def update(self, *, employee_id, employee_code, full_name, department_id, mobile_number, actor_id):
        if employee_id not in self.items:
            return False
        self.items[employee_id] = replace(
            self.items[employee_id],
            employee_code=employee_code,
            full_name=full_name,
            department_id=department_id,
            mobile_number=mobile_number,
        )
        return True

    def delete(self, employee_id):
        return self.items.pop(employee_id, None) is not None

    def count_active_in_department(self, department_id):
        return sum(1 for e in self.items.values() if e.department_id == department_id and e.is_active)


class InMemoryDepartments:
    def __init__(self):
        self.items = {1: Department(1, "Engineering")}

    def get_by_id(self, department_id):
        return self.items.get(department_id)


def _service(employees=None, grid_store=None):
    repo = InMemoryEmployees(employees)
    return repo, EmployeeService(repo, InMemoryDepartments(), grid_store=grid_store)


def test_normalize_employee_code():
    assert normalize_employee_code("001") == "GMDQS001"
    assert normalize_employee_code(" GMDQS001 ") == "GMDQS001"
    assert normalize_employee_code("gmdqs7") == "GMDQS7"
    with pytest.raises(ValidationError):
        normalize_employee_code("GMDQS")
    with pytest.raises(ValidationError):
        normalize_employee_code("  ")


def test_display_code_strips_prefix():
    assert display_code("GMDQS001") == "001"
    assert display_code("X9") == "X9"


def test_create_stores_prefixed_code():
    repo, svc = _service()

    new_id = svc.create(
        permissions=MANAGER, actor_id=1, employee_code="010", full_name=" Hoa ", department_id="1", mobile_number=""
    )

    assert repo.items[new_id].employee_code == "GMDQS010"
    assert repo.items[new_id].full_name == "Hoa"


def test_create_rejects_duplicate_code_and_unknown_department():
    _, svc = _service([Employee(1, "GMDQS001", "A", 1)])

    with pytest.raises(ValidationError):
        svc.create(permissions=MANAGER, actor_id=1, employee_code="001", full_name="B", department_id=1)
    with pytest.raises(ValidationError):
        svc.create(permissions=MANAGER, actor_id=1, employee_code="002", full_name="B", department_id=9)
    with pytest.raises(ValidationError):
        svc.create(permissions=MANAGER, actor_id=1, employee_code="002", full_name="B", department_id="")


def test_mutations_require_manage_employees():
    repo, svc = _service([Employee(1, "GMDQS001", "A", 1)])

    with pytest.raises(AuthorizationError):
        svc.create(permissions=VIEWER, actor_id=1, employee_code="002", full_name="B", department_id=1)
    with pytest.raises(AuthorizationError):
        svc.delete(permissions=VIEWER, employee_id=1)

    assert list(repo.items) == [1]


def test_update_may_change_code_but_keeps_id():
    repo, svc = _service([Employee(1, "GMDQS001", "A", 1), Employee(2, "GMDQS002", "B", 1)])

    svc.update(permissions=MANAGER, actor_id=1, employee_id=1, employee_code="100", full_name="A", department_id=1)
    assert repo.items[1].employee_code == "GMDQS100"

    with pytest.raises(ValidationError):
        svc.update(permissions=MANAGER, actor_id=1, employee_id=1, employee_code="002", full_name="A", department_id=1)
    with pytest.raises(NotFoundError):
        svc.update(permissions=MANAGER, actor_id=1, employee_id=9, employee_code="009", full_name="Z", department_id=1)


def test_delete_purges_grid_state():
    store = GridStore()
    store.put(50, AttendanceGridState(2024, 2, {1: {"2024-02-01": 1}, 2: {"2024-02-01": 2}}))
    repo, svc = _service([Employee(1, "GMDQS001", "A", 1), Employee(2, "GMDQS002", "B", 1)], grid_store=store)

    svc.delete(permissions=MANAGER, employee_id=1)

    assert 1 not in repo.items
    assert store.get(50).to_dict() == {2: {"2024-02-01": 2}}

    with pytest.raises(NotFoundError):
        svc.delete(permissions=MANAGER, employee_id=1)


def test_roster_requires_view():
    _, svc = _service([Employee(1, "GMDQS001", "A", 1)])

    assert [e.id for e in svc.list_roster(permissions=VIEWER)] == [1]
    with pytest.raises(AuthorizationError):
        svc.list_roster(permissions=PermissionSet.unresolved())
