from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date, parse_optional_date, parse_timestamp
from ..store.record_store import RecordStore, WriteOp
from .model import Exam, MarksEntry

EXAMS = "exams"
MARKS = "marks"


def marks_key(exam_id: str, student_id: str, subject: str) -> str:
    """Idempotency key: one entry per (exam, student, subject)."""
    return f"{exam_id}_{student_id}_{subject}"


def _to_exam(r: dict) -> Exam:
    return Exam(
        exam_id=str(r["id"]),
        name=r.get("name") or "",
        grade=str(r.get("grade") or ""),
        exam_date=parse_iso_date(r["date"]),
        subjects=tuple(r.get("subjects") or ()),
        max_marks=float(r.get("maxMarks") or 0),
        created_at=parse_timestamp(r.get("createdAt")),
    )


def _to_entry(r: dict) -> MarksEntry:
    return MarksEntry(
        entry_id=str(r["id"]),
        exam_id=str(r.get("examId") or ""),
        student_id=str(r.get("studentId")),
        student_name=r.get("studentName") or "",
        subject=r.get("subject") or "",
        marks_obtained=float(r.get("marksObtained") or 0),
        max_marks=float(r.get("maxMarks") or 0),
        exam_date=parse_optional_date(r.get("examDate")),
        created_at=parse_timestamp(r.get("createdAt")),
    )


class ExamRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def create(self, record: dict) -> str:
        return self._store.insert(EXAMS, record)

    def get_by_id(self, exam_id: str) -> Optional[Exam]:
        r = self._store.get_by_id(EXAMS, exam_id)
        return _to_exam(r) if r else None

    def list_all(self) -> Sequence[Exam]:
        return [_to_exam(r) for r in self._store.list_all(EXAMS, order_by="createdAt", descending=True)]

    def list_by_grade(self, grade: str) -> Sequence[Exam]:
        return [_to_exam(r) for r in self._store.query_equal(EXAMS, "grade", grade, order_by="date", descending=True)]


class MarksRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def save_many(self, records: Sequence[dict]) -> list[str]:
        """Upsert entries in one batch; re-saving a cell overwrites it."""
        ops = [
            WriteOp(MARKS, marks_key(r["examId"], r["studentId"], r["subject"]), r)
            for r in records
        ]
        return self._store.batch_write(ops)

    def list_for_exam(self, exam_id: str) -> Sequence[MarksEntry]:
        return [_to_entry(r) for r in self._store.query_equal(MARKS, "examId", exam_id)]

    def list_for_student(self, student_id: str) -> Sequence[MarksEntry]:
        return [_to_entry(r) for r in self._store.query_equal(MARKS, "studentId", student_id)]
