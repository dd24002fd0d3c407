from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RecordStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: an admitted student (collection `students`)."""

    student_id: str
    full_name: str
    student_code: str
    grade: str
    phone: str
    status: RecordStatus
    joining_date: Optional[date] = None
    gender: Optional[str] = None
    dob: Optional[date] = None
    email: Optional[str] = None
    address: Optional[str] = None
    parent_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "fullName": self.full_name,
            "studentCode": self.student_code,
            "grade": self.grade,
            "phone": self.phone,
            "status": self.status.value,
            "joiningDate": self.joining_date.isoformat() if self.joining_date else None,
            "gender": self.gender,
            "dob": self.dob.isoformat() if self.dob else None,
            "email": self.email,
            "address": self.address,
            "parentName": self.parent_name,
        }
