from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import month_bounds, months_back, parse_iso_date
from ..common.validators import require_choice
from ..core.enums import AttendanceStatus
from ..core.exceptions import StoreError, ValidationError
from ..staff.repository import StaffRepository
from .aggregation import canonical_records, summarize
from .model import AttendanceSummary, StaffAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: daily staff attendance sheet and per-staff tallies."""

    def __init__(self, attendance: AttendanceRepository, staff: StaffRepository):
        self._attendance = attendance
        self._staff = staff

    def mark_day(self, work_date: date, statuses: Mapping[str, str]) -> int:
        """Save the sheet for one day: {staff_id: status}. Re-marking overwrites."""
        if not statuses:
            raise ValidationError("No attendance entries to save")

        entries = []
        for staff_id, status in statuses.items():
            member = self._staff.get_by_id(staff_id)
            if not member:
                raise ValidationError(f"Unknown staff member: {staff_id}")
            entries.append(
                {
                    "staff_id": member.staff_id,
                    "staff_name": member.full_name,
                    "work_date": work_date,
                    "status": require_choice(status, "Attendance status", AttendanceStatus),
                }
            )

        self._attendance.mark_many(entries)
        logger.info("Marked attendance for %d staff on %s", len(entries), work_date)
        return len(entries)

    def get_day(self, work_date: date) -> dict[str, str]:
        records = canonical_records(self._attendance.list_for_date(work_date))
        return {r.staff_id: getattr(r.status, "value", r.status) for r in records}

    def monthly_records(self, staff_id: str, month: int, year: int) -> Sequence[StaffAttendance]:
        start, end = month_bounds(month, year)
        return self._attendance.list_for_staff(staff_id, start=parse_iso_date(start), end=parse_iso_date(end))

    def monthly_summary(self, staff_id: str, month: int, year: int) -> AttendanceSummary:
        return summarize(self.monthly_records(staff_id, month, year))

    def monthly_sheet(self, month: int, year: int) -> dict[str, dict[int, str]]:
        """{staff_id: {day_of_month: status}} for the monthly grid."""
        start, end = month_bounds(month, year)
        sheet: dict[str, dict[int, str]] = defaultdict(dict)
        for r in canonical_records(self._attendance.list_for_range(parse_iso_date(start), parse_iso_date(end))):
            sheet[r.staff_id][r.work_date.day] = getattr(r.status, "value", r.status)
        return dict(sheet)

    def staff_summary(
        self,
        staff_id: str,
        *,
        last_months: Optional[int] = None,
        today: Optional[date] = None,
    ) -> AttendanceSummary:
        """All-time tally, or the last N calendar months including the current one."""
        start = None
        if last_months:
            if int(last_months) <= 0:
                raise ValidationError("last_months must be positive")
            start = parse_iso_date(months_back(today or date.today(), int(last_months)))
        return summarize(self._attendance.list_for_staff(staff_id, start=start))

    def present_count(self, work_date: date) -> int:
        # Dashboard counter: a store failure shows 0 instead of breaking the page.
        try:
            return summarize(self._attendance.list_for_date(work_date)).present
        except StoreError:
            logger.warning("Could not count present staff for %s", work_date, exc_info=True)
            return 0
