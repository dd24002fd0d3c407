from datetime import date, datetime

from tuition_center.attendance.aggregation import canonical_records, summarize
from tuition_center.attendance.model import AttendanceSummary, StaffAttendance
from tuition_center.core.enums import AttendanceStatus


def _rec(rid, status, day=1, staff_id="s1", created=None):
    return StaffAttendance(
        attendance_id=rid,
        staff_id=staff_id,
        work_date=date(2024, 3, day),
        status=status,
        created_at=created,
    )


def test_unknown_status_does_not_break_counts():
    records = [
        _rec("1", AttendanceStatus.PRESENT, 1),
        _rec("2", AttendanceStatus.HALF_DAY, 2),
        _rec("3", "Sick", 3),
        _rec("4", AttendanceStatus.ABSENT, 4),
        _rec("5", AttendanceStatus.LEAVE, 5),
        _rec("6", AttendanceStatus.PRESENT, 6),
    ]

    summary = summarize(records)

    assert summary == AttendanceSummary(present=2, absent=1, half_day=1, leave=1, other=1)
    assert summary.total == 6
    assert summary.unpaid_days == 2


def test_duplicate_day_keeps_latest_record():
    records = [
        _rec("old", AttendanceStatus.ABSENT, 1, created=datetime(2024, 3, 1, 9)),
        _rec("new", AttendanceStatus.PRESENT, 1, created=datetime(2024, 3, 1, 18)),
        _rec("other-staff", AttendanceStatus.PRESENT, 1, staff_id="s2"),
    ]

    assert [r.attendance_id for r in canonical_records(records)] == ["new", "other-staff"]
    assert summarize(records) == AttendanceSummary(present=2)


def test_without_dedupe_every_record_counts():
    records = [
        _rec("a", AttendanceStatus.PRESENT, 1),
        _rec("b", AttendanceStatus.PRESENT, 1),
    ]

    assert summarize(records, dedupe=False).present == 2
    assert summarize(records).present == 1


def test_breakdown_hides_empty_buckets():
    summary = AttendanceSummary(present=3, leave=1)

    assert summary.breakdown() == [{"name": "Present", "value": 3}, {"name": "Leave", "value": 1}]


def test_empty_input():
    assert summarize([]) == AttendanceSummary()


def test_mixed_naive_and_aware_timestamps_compare():
    from datetime import timedelta, timezone

    ist = timezone(timedelta(hours=5, minutes=30))
    records = [
        _rec("legacy", AttendanceStatus.ABSENT, 1, created=datetime(2024, 3, 1, 9, tzinfo=ist)),
        _rec("untimed", AttendanceStatus.HALF_DAY, 1),
        _rec("latest", AttendanceStatus.PRESENT, 1, created=datetime(2024, 3, 1, 12)),
    ]

    assert [r.attendance_id for r in canonical_records(records)] == ["latest"]
    assert summarize(records) == AttendanceSummary(present=1)
