from __future__ import annotations

import pytest

from src.attendance_dashboard.attendance_dashboard.core.exceptions import (
    AuthorizationError,
    IntegrityGuardError,
    NotFoundError,
    ValidationError,
)
from src.attendance_dashboard.attendance_dashboard.permissions.model import PermissionSet
from src.attendance_dashboard.attendance_dashboard.reference.cache import LookupCache
from src.attendance_dashboard.attendance_dashboard.reference.model import AttendanceStatusOption, Department
from src.attendance_dashboard.attendance_dashboard.reference.service import DepartmentService, StatusCatalogService

MANAGER = PermissionSet(can_manage_employees=True)
VIEWER = PermissionSet(can_view_attendance=True)


class InMemoryDepartments:
    def __init__(self, departments):
        self.items = {d.id: d for d in departments}
        self.list_calls = 0

    def list_all(self):
        self.list_calls += 1
        return sorted(self.items.values(), key=lambda d: d.name)

    def get_by_id(self, department_id):
        return self.items.get(department_id)

    def create(self, *, name, actor_id):
        new_id = max(self.items, default=0) + 1
        self.items[new_id] = Department(new_id, name)
        return new_id

    def update(self, *, department_id, name, is_active, actor_id):
        if department_id not in self.items:
            return False
        self.items[department_id] = Department(department_id, name, is_active)
        return True

    def delete(self, department_id):
        return self.items.pop(department_id, None) is not None


class InMemoryStatuses:
    def __init__(self, statuses):
        self.items = {s.id: s for s in statuses}

    def list_active(self):
        return [s for s in self.list_all() if s.is_active]

    def list_all(self):
        return sorted(self.items.values(), key=lambda s: s.name)

    def get_by_id(self, status_id):
        return self.items.get(status_id)

    def create(self, *, name, color, actor_id):
        new_id = max(self.items, default=0) + 1
        self.items[new_id] = AttendanceStatusOption(new_id, name, color)
        return new_id

    def update(self, *, status_id, name, color, is_active, actor_id):
        if status_id not in self.items:
            return False
        self.items[status_id] = AttendanceStatusOption(status_id, name, color, is_active)
        return True

    def delete(self, status_id):
        return self.items.pop(status_id, None) is not None


class CountingEmployees:
    def __init__(self, by_department):
        self._by_department = by_department

    def count_active_in_department(self, department_id):
        return self._by_department.get(department_id, 0)


class CountingAttendance:
    def __init__(self, by_status):
        self._by_status = by_status

    def count_by_status(self, status_id):
        return self._by_status.get(status_id, 0)


def _departments():
    return InMemoryDepartments([Department(1, "Engineering"), Department(2, "Operations")])


def _statuses():
    return InMemoryStatuses(
        [
            AttendanceStatusOption(1, "Present", "green"),
            AttendanceStatusOption(2, "Absent", "red"),
            AttendanceStatusOption(3, "Maternity", "pink", is_active=False),
        ]
    )


def test_cache_loads_once_until_invalidated():
    repo = _departments()
    cache = LookupCache("departments", repo.list_all, key=lambda d: d.id)

    cache.items()
    cache.items()
    assert cache.get(2).name == "Operations"
    assert repo.list_calls == 1

    cache.invalidate()
    cache.items()
    assert repo.list_calls == 2


def test_create_department_invalidates_cache():
    repo = _departments()
    svc = DepartmentService(repo, CountingEmployees({}))
    assert len(svc.list_departments()) == 2

    svc.create(permissions=MANAGER, actor_id=1, name="  Sales ")

    assert [d.name for d in svc.list_departments()] == ["Engineering", "Operations", "Sales"]


def test_department_names_must_be_unique():
    svc = DepartmentService(_departments(), CountingEmployees({}))

    with pytest.raises(ValidationError):
        svc.create(permissions=MANAGER, actor_id=1, name="engineering")


def test_department_mutation_requires_manage_employees():
    svc = DepartmentService(_departments(), CountingEmployees({}))

    with pytest.raises(AuthorizationError):
        svc.create(permissions=VIEWER, actor_id=1, name="Sales")
    with pytest.raises(AuthorizationError):
        svc.delete(permissions=VIEWER, department_id=1)


def test_department_delete_guard_carries_count():
    repo = _departments()
    svc = DepartmentService(repo, CountingEmployees({1: 4}))

    with pytest.raises(IntegrityGuardError) as exc:
        svc.delete(permissions=MANAGER, department_id=1)

    assert exc.value.count == 4
    assert 'department "Engineering"' in str(exc.value)
    assert "4 employee(s)" in str(exc.value)
    assert 1 in repo.items


def test_department_delete_and_missing():
    repo = _departments()
    svc = DepartmentService(repo, CountingEmployees({}))

    svc.delete(permissions=MANAGER, department_id=2)
    assert [d.name for d in svc.list_departments()] == ["Engineering"]

    with pytest.raises(NotFoundError):
        svc.delete(permissions=MANAGER, department_id=2)


def test_department_deactivate_guarded():
    svc = DepartmentService(_departments(), CountingEmployees({2: 1}))

    with pytest.raises(IntegrityGuardError):
        svc.update(permissions=MANAGER, actor_id=1, department_id=2, name="Operations", is_active=False)


def test_status_lists_and_names():
    svc = StatusCatalogService(_statuses(), CountingAttendance({}))

    assert [s.name for s in svc.list_active()] == ["Absent", "Present"]
    assert [s.name for s in svc.list_all(permissions=MANAGER)] == ["Absent", "Maternity", "Present"]
    assert svc.names_by_id() == {1: "Present", 2: "Absent", 3: "Maternity"}
    assert svc.name_of(None) == ""


def test_ensure_selectable():
    svc = StatusCatalogService(_statuses(), CountingAttendance({}))

    svc.ensure_selectable(None)
    svc.ensure_selectable(1)
    with pytest.raises(ValidationError):
        svc.ensure_selectable(3)
    with pytest.raises(ValidationError):
        svc.ensure_selectable(99)


def test_status_delete_guard_carries_count():
    repo = _statuses()
    svc = StatusCatalogService(repo, CountingAttendance({1: 12}))

    with pytest.raises(IntegrityGuardError) as exc:
        svc.delete(permissions=MANAGER, status_id=1)

    assert exc.value.count == 12
    assert "12 attendance record(s)" in str(exc.value)
    assert 1 in repo.items


def test_status_deactivate_guarded_but_rename_allowed():
    repo = _statuses()
    svc = StatusCatalogService(repo, CountingAttendance({1: 2}))

    with pytest.raises(IntegrityGuardError):
        svc.update(permissions=MANAGER, actor_id=1, status_id=1, name="Present", is_active=False)

    svc.update(permissions=MANAGER, actor_id=1, status_id=1, name="Present (office)", color="green")
    assert svc.name_of(1) == "Present (office)"


def test_status_create_defaults_color():
    repo = _statuses()
    svc = StatusCatalogService(repo, CountingAttendance({}))

    new_id = svc.create(permissions=MANAGER, actor_id=1, name="Remote")

    assert repo.items[new_id].color == "gray"
    assert svc.name_of(new_id) == "Remote"
