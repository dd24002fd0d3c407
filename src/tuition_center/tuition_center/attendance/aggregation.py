"""Attendance tallies used by payroll and the staff profile.

Pure functions: callers fetch StaffAttendance records and pass them in.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceSummary, StaffAttendance

logger = logging.getLogger(__name__)


def canonical_records(records: Iterable[StaffAttendance]) -> list[StaffAttendance]:
    """Keep one record per (staff, day): the most recently created one.

    Records without a timestamp lose to timestamped ones; among equals the later
    one in the input wins.
    """
    chosen: dict[tuple[str, object], tuple[int, StaffAttendance]] = {}
    for position, record in enumerate(records):
        key = (record.staff_id, record.work_date)
        current = chosen.get(key)
        if current is None or _sort_key(record, position) >= _sort_key(current[1], current[0]):
            chosen[key] = (position, record)
    return [record for _, record in sorted(chosen.values(), key=lambda item: item[0])]


def _sort_key(record: StaffAttendance, position: int) -> tuple:
    created = record.created_at or datetime.min
    if created.tzinfo is not None:
        # Compare everything as naive UTC; legacy records may carry an offset.
        created = created.astimezone(timezone.utc).replace(tzinfo=None)
    return (created, position)


def summarize(records: Sequence[StaffAttendance], *, dedupe: bool = True) -> AttendanceSummary:
    """Count Present / Absent / Half Day / Leave; anything else lands in `other`."""
    if dedupe:
        records = canonical_records(records)

    counts = {status: 0 for status in AttendanceStatus}
    other = 0
    for record in records:
        try:
            counts[AttendanceStatus(record.status)] += 1
        except ValueError:
            logger.warning("Unrecognized attendance status %r for staff %s", record.status, record.staff_id)
            other += 1

    return AttendanceSummary(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        half_day=counts[AttendanceStatus.HALF_DAY],
        leave=counts[AttendanceStatus.LEAVE],
        other=other,
    )
