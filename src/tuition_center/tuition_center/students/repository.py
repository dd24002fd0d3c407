from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_optional_date, parse_timestamp
from ..core.enums import RecordStatus
from ..store.record_store import RecordStore
from .model import Student

COLLECTION = "students"


def _to_model(r: dict) -> Student:
    return Student(
        student_id=str(r["id"]),
        full_name=r.get("fullName") or "",
        student_code=r.get("studentCode") or "",
        grade=str(r.get("grade") or ""),
        phone=r.get("phone") or "",
        status=RecordStatus(r.get("status") or RecordStatus.ACTIVE.value),
        joining_date=parse_optional_date(r.get("joiningDate")),
        gender=r.get("gender"),
        dob=parse_optional_date(r.get("dob")),
        email=r.get("email"),
        address=r.get("address"),
        parent_name=r.get("parentName"),
        created_at=parse_timestamp(r.get("createdAt")),
    )


class StudentRepository:
    """Maps `students` documents to Student entities."""

    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_id(self, student_id: str) -> Optional[Student]:
        r = self._store.get_by_id(COLLECTION, student_id)
        return _to_model(r) if r else None

    def list_all(self) -> Sequence[Student]:
        return [_to_model(r) for r in self._store.list_all(COLLECTION, order_by="createdAt", descending=True)]

    def list_by_grade(self, grade: str) -> Sequence[Student]:
        rows = self._store.query_equal(COLLECTION, "grade", grade, order_by="fullName")
        return [_to_model(r) for r in rows]

    def code_exists(self, code: str) -> bool:
        return bool(self._store.query_equal(COLLECTION, "studentCode", code))

    def create(self, record: dict) -> str:
        return self._store.insert(COLLECTION, record)

    def update(self, student_id: str, changes: dict) -> bool:
        return self._store.update(COLLECTION, student_id, changes)

    def delete(self, student_id: str) -> bool:
        return self._store.delete(COLLECTION, student_id)
