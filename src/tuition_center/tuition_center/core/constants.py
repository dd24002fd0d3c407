"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WORKING_DAYS = 26
HOURS_PER_DAY = 8
HALF_DAY_WEIGHT = 0.5

PASS_MARK = 35

STAFF_CODE_PREFIX = "DT-S-"
STUDENT_CODE_PREFIX = "DT-ST-"
CODE_MIN = 1000
CODE_MAX = 9999
CODE_ATTEMPTS = 5

ADMISSION_FEE_MONTH = "Admission"

MONTHS = (
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
