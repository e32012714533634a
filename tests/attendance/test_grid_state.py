from src.attendance_dashboard.attendance_dashboard.attendance.grid_state import AttendanceGridState, GridStore
from src.attendance_dashboard.attendance_dashboard.attendance.model import AttendanceRecord


def test_from_records_folds_by_employee_id():
    records = [
        AttendanceRecord(employee_id=1, work_date="2024-02-01", status_id=1, employee_code="GMDQS001"),
        AttendanceRecord(employee_id=1, work_date="2024-02-02", status_id=2, employee_code="GMDQS001"),
        AttendanceRecord(employee_id=2, work_date="2024-02-01", status_id=3, employee_code="GMDQS002"),
        AttendanceRecord(employee_id=2, work_date="2024-02-05", status_id=None),
    ]

    grid = AttendanceGridState.from_records(2024, 2, records)

    assert grid.to_dict() == {1: {"2024-02-01": 1, "2024-02-02": 2}, 2: {"2024-02-01": 3}}
    assert grid.get(2, "2024-02-05") is None


def test_apply_then_commit_keeps_value():
    grid = AttendanceGridState(2024, 2)

    entry = grid.apply(1, "2024-02-10", 4)
    assert grid.pending == (entry,)
    grid.commit(entry)

    assert grid.get(1, "2024-02-10") == 4
    assert grid.pending == ()


def test_rollback_restores_previous_value():
    grid = AttendanceGridState(2024, 2, {1: {"2024-02-10": 2}})

    entry = grid.apply(1, "2024-02-10", 5)
    assert grid.get(1, "2024-02-10") == 5
    grid.rollback(entry)

    assert grid.get(1, "2024-02-10") == 2
    assert grid.pending == ()


def test_rollback_removes_key_that_was_absent():
    grid = AttendanceGridState(2024, 2)

    entry = grid.apply(7, "2024-02-10", 5)
    grid.rollback(entry)

    assert grid.to_dict() == {}


def test_clearing_a_cell_removes_the_key():
    grid = AttendanceGridState(2024, 2, {1: {"2024-02-10": 2, "2024-02-11": 3}})

    grid.commit(grid.apply(1, "2024-02-10", None))

    assert grid.row(1) == {"2024-02-11": 3}


def test_contains_date_only_for_grid_month():
    grid = AttendanceGridState(2024, 2)

    assert grid.contains_date("2024-02-29")
    assert not grid.contains_date("2024-03-01")
    assert not grid.contains_date("2024-2-1")


def test_store_purges_employee_from_every_grid():
    store = GridStore()
    store.put(10, AttendanceGridState(2024, 2, {1: {"2024-02-01": 1}, 2: {"2024-02-01": 1}}))
    store.put(11, AttendanceGridState(2024, 3, {1: {"2024-03-01": 2}}))

    store.purge_employee(1)

    assert store.get(10).employee_ids() == [2]
    assert store.get(11).employee_ids() == []


def test_store_drop():
    store = GridStore()
    store.put(10, AttendanceGridState(2024, 2))
    store.drop(10)

    assert store.get(10) is None


def test_save_flag_is_exclusive():
    grid = AttendanceGridState(2024, 2)

    assert grid.try_begin_save()
    assert grid.saving
    assert not grid.try_begin_save()

    grid.end_save()
    assert not grid.saving
    assert grid.try_begin_save()


def test_store_keeps_grid_with_write_in_flight():
    store = GridStore()
    busy = AttendanceGridState(2024, 2, {1: {"2024-02-01": 1}})
    store.put(10, busy)
    busy.try_begin_save()

    fresh = AttendanceGridState(2024, 3)
    assert store.put(10, fresh) is busy
    assert store.get(10) is busy

    busy.end_save()
    assert store.put(10, fresh) is fresh


def test_store_evicts_least_recently_used():
    store = GridStore(max_grids=2)
    store.put(1, AttendanceGridState(2024, 1))
    store.put(2, AttendanceGridState(2024, 2))
    store.get(1)

    store.put(3, AttendanceGridState(2024, 3))

    assert len(store) == 2
    assert store.get(2) is None
    assert store.get(1) is not None


def test_store_never_evicts_saving_grid():
    store = GridStore(max_grids=1)
    busy = AttendanceGridState(2024, 1)
    store.put(1, busy)
    busy.try_begin_save()

    store.put(2, AttendanceGridState(2024, 2))

    assert store.get(1) is busy
    assert store.get(2) is not None
