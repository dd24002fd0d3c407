from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class StaffAttendance:
    """Domain entity: one staff member's status for one day.

    `status` stays a plain string when a stored value is not a known
    AttendanceStatus, so old or hand-edited documents can still be read.
    """

    attendance_id: str
    staff_id: str
    work_date: date
    status: Union[AttendanceStatus, str]
    staff_name: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "date": self.work_date.isoformat(),
            "status": getattr(self.status, "value", self.status),
        }


@dataclass(frozen=True)
class AttendanceSummary:
    present: int = 0
    absent: int = 0
    half_day: int = 0
    leave: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.half_day + self.leave + self.other

    @property
    def unpaid_days(self) -> int:
        """Days that earn nothing: Absent plus legacy Leave."""
        return self.absent + self.leave

    def breakdown(self) -> list[dict]:
        """Non-empty buckets in display order (profile pie chart)."""
        items = [
            ("Present", self.present),
            ("Absent", self.absent),
            ("Half Day", self.half_day),
            ("Leave", self.leave),
            ("Other", self.other),
        ]
        return [{"name": name, "value": value} for name, value in items if value > 0]

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "absent": self.absent,
            "halfDay": self.half_day,
            "leave": self.leave,
            "other": self.other,
            "total": self.total,
        }
