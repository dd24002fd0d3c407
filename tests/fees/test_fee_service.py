from datetime import date

import pytest

from tuition_center.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def student(container):
    return container.student_service.admit(full_name="Asha", grade="10", phone="1")


def test_collect_and_receipt(container, student):
    payment = container.fee_service.collect(
        student_id=student.student_id,
        fee_month="March",
        fee_year=2024,
        amount=1500,
        payment_date="2024-03-05",
        receipt_number="R-1",
    )

    assert payment.student_name == "Asha"
    assert payment.grade == "10"
    assert payment.payment_date == date(2024, 3, 5)

    receipt = container.fee_service.receipt(payment.payment_id)
    assert receipt["organization"]["name"] == "Test Tuition Center"
    assert receipt["studentCode"] == student.student_code
    assert receipt["amount"] == 1500
    assert container.fee_service.receipt("missing") is None


def test_admission_fee_month_is_allowed(container, student):
    payment = container.fee_service.collect(student_id=student.student_id, fee_month="Admission", fee_year=2024, amount=500)

    assert payment.fee_month == "Admission"
    assert payment.payment_date == date.today()


def test_collect_validates(container, student):
    with pytest.raises(NotFoundError):
        container.fee_service.collect(student_id="missing", fee_month="March", fee_year=2024, amount=10)
    with pytest.raises(ValidationError):
        container.fee_service.collect(student_id=student.student_id, fee_month="Marc", fee_year=2024, amount=10)
    with pytest.raises(ValidationError):
        container.fee_service.collect(student_id=student.student_id, fee_month="March", fee_year=2024, amount=0)
    with pytest.raises(ValidationError):
        container.fee_service.collect(student_id=student.student_id, fee_month="March", fee_year=2024.5, amount=10)


def test_collection_summary(container, student):
    for month, amount in (("January", 1000), ("March", 1500), ("March", 200)):
        container.fee_service.collect(student_id=student.student_id, fee_month=month, fee_year=2024, amount=amount)
    container.fee_service.collect(student_id=student.student_id, fee_month="March", fee_year=2023, amount=900)

    summary = container.fee_service.collection_summary(today=date(2024, 3, 20))

    assert summary["totalCollected"] == 3600
    assert summary["currentMonthCollection"] == 1700
    assert {m["name"]: m["amount"] for m in summary["byMonth"]} == {"Jan": 1000, "Mar": 2600}
    assert len(summary["recent"]) == 4
    assert summary["recent"][0]["feeYear"] == 2023
    assert len(container.fee_service.list(student_id=student.student_id)) == 4
