from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class PayrollResult:
    effective_days: float
    deductions: int
    net_salary: int


@dataclass(frozen=True)
class StaffSalary:
    """Domain entity: one payroll record per staff member per month (collection `staff_salary`)."""

    salary_id: str
    staff_id: str
    staff_name: str
    month: str
    year: int
    total_working_days: float
    present_days: float
    half_days: float
    absent_days: float
    basic_salary: float
    deductions: float
    net_salary: float
    payment_status: PaymentStatus
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    def to_dict(self) -> dict:
        return {
            "id": self.salary_id,
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "month": self.month,
            "year": self.year,
            "totalWorkingDays": self.total_working_days,
            "presentDays": self.present_days,
            "halfDays": self.half_days,
            "absentDays": self.absent_days,
            "basicSalary": self.basic_salary,
            "deductions": self.deductions,
            "netSalary": self.net_salary,
            "paymentStatus": self.payment_status.value,
            "paidAt": self.paid_at.isoformat() if self.paid_at else None,
        }
