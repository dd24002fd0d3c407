from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_optional_date, parse_timestamp
from ..core.enums import RecordStatus, SalaryType
from ..store.record_store import RecordStore
from .model import Staff

COLLECTION = "staff"


def _to_model(r: dict) -> Staff:
    # Older documents may lack salaryType/status: they were treated as Monthly/Active.
    return Staff(
        staff_id=str(r["id"]),
        full_name=r.get("fullName") or "Unknown",
        staff_code=r.get("staffCode") or "N/A",
        role=r.get("role") or "",
        phone=r.get("phone") or "",
        salary_type=SalaryType(r.get("salaryType") or SalaryType.MONTHLY.value),
        basic_salary=float(r.get("basicSalary") or 0),
        status=RecordStatus(r.get("status") or RecordStatus.ACTIVE.value),
        joining_date=parse_optional_date(r.get("joiningDate")),
        gender=r.get("gender"),
        email=r.get("email"),
        address=r.get("address"),
        qualification=r.get("qualification"),
        created_at=parse_timestamp(r.get("createdAt")),
    )


class StaffRepository:
    """Maps `staff` documents to Staff entities."""

    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        r = self._store.get_by_id(COLLECTION, staff_id)
        return _to_model(r) if r else None

    def list_all(self) -> Sequence[Staff]:
        return [_to_model(r) for r in self._store.list_all(COLLECTION, order_by="createdAt", descending=True)]

    def list_active(self) -> Sequence[Staff]:
        return [s for s in self.list_all() if s.is_active]

    def code_exists(self, code: str) -> bool:
        return bool(self._store.query_equal(COLLECTION, "staffCode", code))

    def create(self, record: dict) -> str:
        return self._store.insert(COLLECTION, record)

    def update(self, staff_id: str, changes: dict) -> bool:
        return self._store.update(COLLECTION, staff_id, changes)

    def delete(self, staff_id: str) -> bool:
        return self._store.delete(COLLECTION, staff_id)
