from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Payment:
    """Domain entity: one fee collection (collection `payments`). Never edited after creation."""

    payment_id: str
    student_id: str
    student_name: str
    grade: str
    fee_month: str
    fee_year: int
    amount: float
    payment_date: date
    receipt_number: Optional[str] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.payment_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "grade": self.grade,
            "feeMonth": self.fee_month,
            "feeYear": self.fee_year,
            "amount": self.amount,
            "paymentDate": self.payment_date.isoformat(),
            "receiptNumber": self.receipt_number,
            "remarks": self.remarks,
        }
