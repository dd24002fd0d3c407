from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import parse_timestamp
from ..core.enums import PaymentStatus
from ..store.record_store import RecordStore
from .model import StaffSalary

COLLECTION = "staff_salary"


def salary_key(staff_id: str, month: str, year: int) -> str:
    return f"{staff_id}_{month}_{int(year)}"


def _to_model(r: dict) -> StaffSalary:
    return StaffSalary(
        salary_id=str(r["id"]),
        staff_id=str(r.get("staffId")),
        staff_name=r.get("staffName") or "Unknown",
        month=r.get("month") or "",
        year=int(r.get("year") or 0),
        total_working_days=r.get("totalWorkingDays") or 0,
        present_days=r.get("presentDays") or 0,
        half_days=r.get("halfDays") or 0,
        absent_days=r.get("absentDays") or 0,
        basic_salary=r.get("basicSalary") or 0,
        deductions=r.get("deductions") or 0,
        net_salary=r.get("netSalary") or 0,
        payment_status=PaymentStatus(r.get("paymentStatus") or PaymentStatus.UNPAID.value),
        paid_at=parse_timestamp(r.get("paidAt")),
        created_at=parse_timestamp(r.get("createdAt")),
    )


class SalaryRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def create(self, record: dict) -> str:
        key = salary_key(record["staffId"], record["month"], record["year"])
        return self._store.insert_idempotent(COLLECTION, key, record)

    def get_by_id(self, salary_id: str) -> Optional[StaffSalary]:
        r = self._store.get_by_id(COLLECTION, salary_id)
        return _to_model(r) if r else None

    def get_for_period(self, staff_id: str, month: str, year: int) -> Optional[StaffSalary]:
        found = self.get_by_id(salary_key(staff_id, month, year))
        if found:
            return found
        # Records written before keyed ids carry random ids.
        for s in self.list_for_staff(staff_id):
            if s.month == month and s.year == int(year):
                return s
        return None

    def list_for_staff(self, staff_id: str) -> Sequence[StaffSalary]:
        rows = self._store.query_equal(COLLECTION, "staffId", staff_id, order_by="createdAt", descending=True)
        return [_to_model(r) for r in rows]

    def list_for_period(self, month: str, year: int) -> Sequence[StaffSalary]:
        rows = self._store.query_equal(COLLECTION, "month", month)
        return [_to_model(r) for r in rows if int(r.get("year") or 0) == int(year)]

    def mark_paid(self, salary_id: str, *, paid_at: datetime) -> bool:
        return self._store.update(
            COLLECTION,
            salary_id,
            {"paymentStatus": PaymentStatus.PAID.value, "paidAt": paid_at.isoformat()},
        )
