from __future__ import annotations

from datetime import date
from typing import Optional, Sequence, Union

from ..common.datetime_utils import parse_iso_date, parse_timestamp, to_iso_date
from ..core.enums import AttendanceStatus
from ..store.record_store import RecordStore, WriteOp
from .model import StaffAttendance

COLLECTION = "staff_attendance"


def attendance_key(staff_id: str, work_date: date) -> str:
    """One document per staff member per day."""
    return f"{staff_id}_{to_iso_date(work_date)}"


def _parse_status(value) -> Union[AttendanceStatus, str]:
    try:
        return AttendanceStatus(value)
    except ValueError:
        return str(value)


def _to_model(r: dict) -> StaffAttendance:
    return StaffAttendance(
        attendance_id=str(r["id"]),
        staff_id=str(r.get("staffId")),
        work_date=parse_iso_date(r["date"]),
        status=_parse_status(r.get("status")),
        staff_name=r.get("staffName"),
        created_at=parse_timestamp(r.get("createdAt")),
    )


class AttendanceRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def mark_many(self, entries: Sequence[dict]) -> list[str]:
        """Write a day's sheet in one batch.

        Each entry: staff_id, staff_name, work_date, status.
        """
        ops = [
            WriteOp(
                COLLECTION,
                attendance_key(e["staff_id"], e["work_date"]),
                {
                    "staffId": e["staff_id"],
                    "staffName": e.get("staff_name"),
                    "date": to_iso_date(e["work_date"]),
                    "status": AttendanceStatus(e["status"]).value,
                },
            )
            for e in entries
        ]
        return self._store.batch_write(ops)

    def list_for_date(self, work_date: date) -> Sequence[StaffAttendance]:
        return [_to_model(r) for r in self._store.query_equal(COLLECTION, "date", to_iso_date(work_date))]

    def list_for_range(self, start: date, end: date) -> Sequence[StaffAttendance]:
        rows = self._store.query_range(COLLECTION, "date", to_iso_date(start), to_iso_date(end), order_by="date")
        return [_to_model(r) for r in rows]

    def list_for_staff(
        self,
        staff_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[StaffAttendance]:
        # Equality query only, then the date window in memory (no composite index needed).
        records = [_to_model(r) for r in self._store.query_equal(COLLECTION, "staffId", staff_id, order_by="date")]
        if start is not None:
            records = [r for r in records if r.work_date >= start]
        if end is not None:
            records = [r for r in records if r.work_date <= end]
        return records
