from __future__ import annotations

from enum import Enum


class RecordStatus(str, Enum):
    """Active flag shared by students and staff."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class SalaryType(str, Enum):
    MONTHLY = "Monthly"
    DAILY = "Daily"
    HOURLY = "Hourly"


class AttendanceStatus(str, Enum):
    """Daily staff attendance status as stored in the `staff_attendance` collection.

    LEAVE only exists on older records; it is still accepted and counted.
    """

    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"
    LEAVE = "Leave"


class PaymentStatus(str, Enum):
    """Salary record state: Unpaid -> Paid (terminal)."""

    UNPAID = "Unpaid"
    PAID = "Paid"


class PassStatus(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C = "C"
    D = "D"
    F = "F"
