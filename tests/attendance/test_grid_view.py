from src.attendance_dashboard.attendance_dashboard.attendance.grid_state import AttendanceGridState
from src.attendance_dashboard.attendance_dashboard.attendance.view import (
    GridView,
    clamp_page,
    filter_employees,
    grid_rows,
    paginate,
    total_pages,
)
from src.attendance_dashboard.attendance_dashboard.employees.model import Employee


def _roster():
    return [
        Employee(1, "GMDQS001", "Alice Nguyen", 1, "Engineering", "0901000001"),
        Employee(2, "GMDQS002", "Bob Tran", 2, "Operations", "0901000002"),
        Employee(3, "GMDQS003", "Carol Le", 1, "Engineering", "0907777777"),
        Employee(4, "GMDQS104", "Dan Pham", 3, "Administration", ""),
    ]


def test_empty_filters_return_roster_unchanged():
    roster = _roster()

    assert filter_employees(roster, "", "") == roster


def test_search_matches_any_field_case_insensitively():
    roster = _roster()

    assert [e.id for e in filter_employees(roster, "alice", "")] == [1]
    assert [e.id for e in filter_employees(roster, "gmdqs10", "")] == [4]
    assert [e.id for e in filter_employees(roster, "OPERATIONS", "")] == [2]
    assert [e.id for e in filter_employees(roster, "7777", "")] == [3]


def test_department_filter_is_exact():
    roster = _roster()

    assert [e.id for e in filter_employees(roster, "", "Engineering")] == [1, 3]
    assert filter_employees(roster, "", "Engineer") == []


def test_filter_with_term_is_subset_of_department_only():
    roster = _roster()
    for term in ("a", "le", "GMDQS", "zzz", "0901"):
        for dept in ("", "Engineering", "Operations"):
            narrowed = filter_employees(roster, term, dept)
            broad = filter_employees(roster, "", dept)
            assert all(e in broad for e in narrowed)


def test_paginate_25_items():
    items = list(range(25))

    assert paginate(items, 1, 10) == list(range(0, 10))
    assert paginate(items, 3, 10) == list(range(20, 25))
    assert paginate(items, 4, 10) == []
    assert paginate(items, 0, 10) == []
    assert total_pages(25, 10) == 3


def test_clamp_page():
    assert clamp_page(9, 25, 10) == 3
    assert clamp_page(0, 25, 10) == 1
    assert clamp_page(2, 0, 10) == 1


def test_changing_filters_resets_page():
    view = GridView(page_size=2, page=3)

    view.search_term = "a"
    assert view.page == 1

    view.page = 2
    view.department_name = "Engineering"
    assert view.page == 1


def test_view_visible_page():
    view = GridView(page_size=2, department_name="Engineering")
    view.page = 1

    assert [e.id for e in view.visible(_roster())] == [1, 3]


def test_view_pulls_stale_page_back_in_range():
    view = GridView(page_size=3, page=99)

    assert [e.id for e in view.visible(_roster())] == [4]
    assert view.page == 2


def test_grid_rows_mark_status_and_weekend():
    grid = AttendanceGridState(2024, 2, {1: {"2024-02-03": 5}})

    rows = grid_rows(grid, _roster()[:2], status_names={5: "Present"})

    assert len(rows) == 2
    cells = rows[0]["cells"]
    assert len(cells) == 29
    assert cells[2] == {"day": 3, "status_id": 5, "status": "Present", "is_weekend": True}
    assert all(c["status_id"] is None for c in rows[1]["cells"])
