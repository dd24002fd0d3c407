from __future__ import annotations

import logging
import random
from datetime import date
from typing import Optional, Sequence

from ..common.codes import generate_code
from ..common.datetime_utils import parse_iso_date, to_iso_date
from ..common.validators import optional_text, require_choice, require_non_empty
from ..core.constants import STUDENT_CODE_PREFIX
from ..core.enums import RecordStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

_REQUIRED = {"full_name": "Full name", "grade": "Grade", "phone": "Phone"}
_OPTIONAL = ("gender", "email", "address", "parent_name")
_DATES = {"joining_date": "joiningDate", "dob": "dob"}
_WIRE = {
    "full_name": "fullName",
    "grade": "grade",
    "phone": "phone",
    "gender": "gender",
    "email": "email",
    "address": "address",
    "parent_name": "parentName",
}


def _as_date(value, field_name: str) -> Optional[str]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return to_iso_date(value)
    try:
        return to_iso_date(parse_iso_date(str(value)))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def _clean(fields: dict, *, partial: bool) -> dict:
    record: dict = {}
    for key, label in _REQUIRED.items():
        if key in fields or not partial:
            record[_WIRE[key]] = require_non_empty(fields.get(key), label)
    for key in _OPTIONAL:
        if key in fields:
            record[_WIRE[key]] = optional_text(fields.get(key))
    for key, wire in _DATES.items():
        if key in fields:
            record[wire] = _as_date(fields.get(key), wire)
    if "status" in fields:
        record["status"] = require_choice(fields["status"], "Status", RecordStatus).value
    unknown = set(fields) - set(_REQUIRED) - set(_OPTIONAL) - set(_DATES) - {"status"}
    if unknown:
        raise ValidationError(f"Unknown student field(s): {', '.join(sorted(unknown))}")
    return record


class StudentService:
    """Use case: admissions and student profile maintenance."""

    def __init__(self, students: StudentRepository, *, rng: Optional[random.Random] = None):
        self._students = students
        self._rng = rng

    def admit(self, **fields) -> Student:
        record = _clean(fields, partial=False)
        record.setdefault("status", RecordStatus.ACTIVE.value)
        if not record.get("joiningDate"):
            record["joiningDate"] = to_iso_date(date.today())
        record["studentCode"] = generate_code(STUDENT_CODE_PREFIX, exists=self._students.code_exists, rng=self._rng)

        student_id = self._students.create(record)
        logger.info("Admitted student %s (%s)", record["fullName"], record["studentCode"])
        return self._students.get_by_id(student_id)

    def update(self, student_id: str, **fields) -> Student:
        changes = _clean(fields, partial=True)
        if not changes:
            raise ValidationError("Nothing to update")
        if not self._students.update(student_id, changes):
            raise NotFoundError("Student not found")
        return self._students.get_by_id(student_id)

    def toggle_status(self, student_id: str) -> RecordStatus:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        new_status = RecordStatus.INACTIVE if student.is_active else RecordStatus.ACTIVE
        self._students.update(student_id, {"status": new_status.value})
        logger.info("Student %s is now %s", student_id, new_status.value)
        return new_status

    def delete(self, student_id: str) -> None:
        # Payments and marks keep pointing at the removed id.
        if not self._students.delete(student_id):
            raise NotFoundError("Student not found")
        logger.info("Deleted student %s", student_id)

    def get(self, student_id: str) -> Optional[Student]:
        return self._students.get_by_id(student_id)

    def list(self, *, grade: Optional[str] = None, status: Optional[str] = None) -> Sequence[Student]:
        students = self._students.list_by_grade(grade) if grade else self._students.list_all()
        if status:
            wanted = require_choice(status, "Status", RecordStatus)
            students = [s for s in students if s.status == wanted]
        return students
