import csv
import io
from datetime import date

from src.attendance_dashboard.attendance_dashboard.attendance.grid_state import AttendanceGridState
from src.attendance_dashboard.attendance_dashboard.employees.model import Employee
from src.attendance_dashboard.attendance_dashboard.export.csv_encoder import (
    Column,
    encode,
    encode_grid,
    encode_report,
    grid_filename,
    report_filename,
    to_download_bytes,
)
from src.attendance_dashboard.attendance_dashboard.reports.model import (
    CategoryCounts,
    DepartmentReport,
    EmployeeAggregateRow,
    EmployeeDayRow,
    EmployeeTimelineReport,
    ReportEmployee,
    ReportQuery,
    ReportSummary,
)

PRESENT = 1
STATUS_NAMES = {PRESENT: "Present", 2: "Absent"}


def test_grid_export_scenario_february_2024():
    roster = [
        Employee(1, "GMDQS001", "Employee A", 1, "Engineering"),
        Employee(2, "GMDQS002", "Employee B", 1, "Engineering"),
    ]
    grid = AttendanceGridState(2024, 2)
    grid.commit(grid.apply(1, "2024-02-29", PRESENT))

    text = encode_grid(grid, roster, STATUS_NAMES)
    rows = list(csv.reader(io.StringIO(text)))

    header, row_a, row_b = rows
    assert header[:3] == ["Employee ID", "Full Name", "Department"]
    assert header[3:] == [str(d) for d in range(1, 30)]
    assert row_a[:3] == ["GMDQS001", "Employee A", "Engineering"]
    assert row_a[-1] == "Present"
    assert row_a[3:-1] == [""] * 28
    assert row_b[3:] == [""] * 29


def test_every_field_is_quoted_and_lines_end_with_newline():
    text = encode([{"a": 1, "b": None}], [Column("A", lambda r: r["a"]), Column("B", lambda r: r["b"])])

    assert text == '"A","B"\n"1",""\n'


def test_embedded_quotes_and_commas_survive_a_round_trip():
    names = ['Nguyen "Ben", Jr.', "line\nbreak", "plain"]
    text = encode(names, [Column("Name", lambda n: n)])

    assert '"Nguyen ""Ben"", Jr."' in text
    assert [r[0] for r in csv.reader(io.StringIO(text))][1:] == names


def test_download_bytes_carry_bom():
    assert to_download_bytes('"A"\n').startswith(b"\xef\xbb\xbf")


def test_grid_filename():
    assert grid_filename(2024, 2) == "attendance_February_2024.csv"


def _query(**kw):
    return ReportQuery(start_date=date(2024, 2, 1), end_date=date(2024, 2, 29), **kw)


def test_department_report_columns():
    report = DepartmentReport(
        query=_query(department_id=3),
        rows=[
            EmployeeAggregateRow(
                employee_id=1,
                employee_code="GMDQS001",
                full_name="Alice",
                department_name="Engineering",
                counts=CategoryCounts(total_days=4, present_days=3, absent_days=1),
            )
        ],
        summary=ReportSummary(employee_count=1),
        department_name="Engineering",
    )

    rows = list(csv.reader(io.StringIO(encode_report(report))))

    assert rows[0] == [
        "Employee ID",
        "Employee Name",
        "Department",
        "Total Days",
        "Present",
        "Absent",
        "Holiday",
        "On Leave",
        "Other",
        "Attendance %",
    ]
    assert rows[1] == ["GMDQS001", "Alice", "Engineering", "4", "3", "1", "0", "0", "0", "75.00%"]
    assert report_filename(report) == "department_report_Engineering_2024-02-01_to_2024-02-29.csv"


def test_all_departments_filename():
    report = DepartmentReport(query=_query())

    assert report_filename(report) == "all_departments_report_2024-02-01_to_2024-02-29.csv"


def test_department_filename_falls_back_to_unknown():
    report = DepartmentReport(query=_query(department_id=99), department_name=None)

    assert report_filename(report) == "department_report_unknown_2024-02-01_to_2024-02-29.csv"


def test_employee_report_columns_and_filename():
    report = EmployeeTimelineReport(
        query=_query(employee_id=1),
        employee=ReportEmployee("GMDQS001", "Alice", "0901", "Engineering"),
        days=[EmployeeDayRow("2024-02-05", "Present", 1), EmployeeDayRow("2024-02-06", "Sick", 4)],
    )

    rows = list(csv.reader(io.StringIO(encode_report(report))))

    assert rows[0] == ["Employee ID", "Employee Name", "Mobile Number", "Department", "Date", "Day", "Status"]
    assert rows[1] == ["GMDQS001", "Alice", "0901", "Engineering", "2024-02-05", "Monday", "Present"]
    assert rows[2][5:] == ["Tuesday", "Sick"]
    assert report_filename(report) == "attendance_report_GMDQS001_2024-02-01_to_2024-02-29.csv"


def test_unknown_employee_filename():
    report = EmployeeTimelineReport(query=_query(employee_id=42), employee=ReportEmployee(), employee_found=False)

    assert report_filename(report) == "attendance_report_unknown_2024-02-01_to_2024-02-29.csv"
