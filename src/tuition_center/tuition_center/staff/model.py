from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RecordStatus, SalaryType


@dataclass(frozen=True)
class Staff:
    """Domain entity: a staff member with salary configuration (collection `staff`)."""

    staff_id: str
    full_name: str
    staff_code: str
    role: str
    phone: str
    salary_type: SalaryType
    basic_salary: float
    status: RecordStatus
    joining_date: Optional[date] = None
    gender: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    qualification: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.staff_id,
            "fullName": self.full_name,
            "staffCode": self.staff_code,
            "role": self.role,
            "phone": self.phone,
            "salaryType": self.salary_type.value,
            "basicSalary": self.basic_salary,
            "status": self.status.value,
            "joiningDate": self.joining_date.isoformat() if self.joining_date else None,
            "gender": self.gender,
            "email": self.email,
            "address": self.address,
            "qualification": self.qualification,
        }
