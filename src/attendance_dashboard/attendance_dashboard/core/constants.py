"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_PAGE_SIZE = 10
DEFAULT_PASSWORD_RESET_TTL_MINUTES = 30
MIN_PASSWORD_LENGTH = 6

EMPLOYEE_CODE_PREFIX = "GMDQS"

DEFAULT_STATUS_COLOR = "gray"

YEAR_OPTIONS_SPAN = 2

MAX_HELD_GRIDS = 500

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Status display name -> report category. Names not listed fall into "other".
STATUS_CATEGORIES = {
    "Present": "present",
    "On Duty": "present",
    "Absent": "absent",
    "Holiday": "holiday",
    "On Leave": "leave",
    "Sick": "leave",
    "Excused": "leave",
    "Maternity": "leave",
}
