from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date, parse_timestamp
from ..store.record_store import RecordStore
from .model import Payment

COLLECTION = "payments"


def _to_model(r: dict) -> Payment:
    return Payment(
        payment_id=str(r["id"]),
        student_id=str(r.get("studentId")),
        student_name=r.get("studentName") or "",
        grade=str(r.get("grade") or ""),
        fee_month=r.get("feeMonth") or "",
        fee_year=int(r.get("feeYear") or 0),
        amount=float(r.get("amount") or 0),
        payment_date=parse_iso_date(r["paymentDate"]),
        receipt_number=r.get("receiptNumber"),
        remarks=r.get("remarks"),
        created_at=parse_timestamp(r.get("createdAt")),
    )


class PaymentRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def create(self, record: dict) -> str:
        return self._store.insert(COLLECTION, record)

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        r = self._store.get_by_id(COLLECTION, payment_id)
        return _to_model(r) if r else None

    def list_all(self) -> Sequence[Payment]:
        return [_to_model(r) for r in self._store.list_all(COLLECTION, order_by="createdAt", descending=True)]

    def list_for_student(self, student_id: str) -> Sequence[Payment]:
        rows = self._store.query_equal(COLLECTION, "studentId", student_id, order_by="createdAt", descending=True)
        return [_to_model(r) for r in rows]
