from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date, to_iso_date
from ..common.validators import optional_text, require_int, require_non_empty, require_positive
from ..core.constants import ADMISSION_FEE_MONTH, MONTHS
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import Payment
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


class FeeService:
    """Use case: record fee payments and build receipts / collection summaries."""

    def __init__(self, payments: PaymentRepository, students: StudentRepository, *, organization: Optional[dict] = None):
        self._payments = payments
        self._students = students
        self._organization = dict(organization or {})

    def collect(
        self,
        *,
        student_id: str,
        fee_month: str,
        fee_year,
        amount,
        payment_date=None,
        receipt_number: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> Payment:
        student = self._students.get_by_id(require_non_empty(student_id, "Student"))
        if not student:
            raise NotFoundError("Student not found")

        fee_month = require_non_empty(fee_month, "Fee month")
        if fee_month not in MONTHS and fee_month != ADMISSION_FEE_MONTH:
            raise ValidationError(f"Fee month is not valid: {fee_month!r}")

        if isinstance(payment_date, date):
            paid_on = payment_date
        elif payment_date:
            try:
                paid_on = parse_iso_date(str(payment_date))
            except ValueError:
                raise ValidationError("Payment date must be a date (YYYY-MM-DD)")
        else:
            paid_on = date.today()

        record = {
            "studentId": student.student_id,
            "studentName": student.full_name,
            "grade": student.grade,
            "feeMonth": fee_month,
            "feeYear": require_int(fee_year, "Fee year"),
            "amount": require_positive(amount, "Amount"),
            "paymentDate": to_iso_date(paid_on),
            "receiptNumber": optional_text(receipt_number),
            "remarks": optional_text(remarks),
        }
        payment_id = self._payments.create(record)
        logger.info("Recorded %s fee of %s for %s", fee_month, record["amount"], student.full_name)
        return self._payments.get_by_id(payment_id)

    def get(self, payment_id: str) -> Optional[Payment]:
        return self._payments.get_by_id(payment_id)

    def list(self, *, student_id: Optional[str] = None) -> Sequence[Payment]:
        if student_id:
            return self._payments.list_for_student(student_id)
        return self._payments.list_all()

    def receipt(self, payment_id: str) -> Optional[dict]:
        payment = self._payments.get_by_id(payment_id)
        if not payment:
            return None
        student = self._students.get_by_id(payment.student_id)
        return {
            "organization": self._organization,
            "studentName": payment.student_name,
            "studentCode": student.student_code if student else None,
            "grade": payment.grade,
            "feeMonth": payment.fee_month,
            "feeYear": payment.fee_year,
            "amount": payment.amount,
            "paymentDate": payment.payment_date.isoformat(),
            "receiptNumber": payment.receipt_number,
        }

    def collection_summary(self, *, today: Optional[date] = None) -> dict:
        today = today or date.today()
        payments = self._payments.list_all()
        current_month = MONTHS[today.month - 1]

        by_month: "OrderedDict[str, float]" = OrderedDict()
        for p in payments:
            key = p.fee_month[:3]
            by_month[key] = by_month.get(key, 0) + p.amount

        return {
            "totalCollected": sum(p.amount for p in payments),
            "currentMonthCollection": sum(
                p.amount for p in payments if p.fee_month == current_month and p.fee_year == today.year
            ),
            "byMonth": [{"name": k, "amount": v} for k, v in by_month.items()],
            "recent": [p.to_dict() for p in payments[:5]],
        }
