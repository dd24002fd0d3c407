from datetime import date, datetime

import pytest

from tuition_center.core.enums import PaymentStatus
from tuition_center.core.exceptions import NotFoundError, ValidationError
from tuition_center.payroll.repository import salary_key


def _staff(container, **overrides):
    fields = dict(full_name="Neha Joshi", role="Teacher", phone="9810000001", salary_type="Monthly", basic_salary=26000)
    fields.update(overrides)
    return container.staff_service.add(**fields)


def _mark(container, staff_id, days, status):
    for day in days:
        container.attendance_service.mark_day(date(2024, 3, day), {staff_id: status})


def test_generate_uses_the_month_attendance(container):
    member = _staff(container)
    _mark(container, member.staff_id, range(1, 21), "Present")
    _mark(container, member.staff_id, (21, 22), "Half Day")
    _mark(container, member.staff_id, (23,), "Absent")
    _mark(container, member.staff_id, (24,), "Leave")
    # Outside the month, must not count.
    container.attendance_service.mark_day(date(2024, 4, 1), {member.staff_id: "Present"})

    salary = container.payroll_service.generate(member.staff_id, "March", 2024, 26)

    assert salary.salary_id == salary_key(member.staff_id, "March", 2024)
    assert salary.present_days == 20
    assert salary.half_days == 2
    assert salary.absent_days == 2
    assert salary.net_salary == 21000
    assert salary.deductions == 0
    assert salary.payment_status == PaymentStatus.UNPAID
    assert salary.staff_name == "Neha Joshi"


def test_month_number_is_accepted(container):
    member = _staff(container, salary_type="Daily", basic_salary=500)
    _mark(container, member.staff_id, range(1, 11), "Present")

    salary = container.payroll_service.generate(member.staff_id, 3, 2024)

    assert salary.month == "March"
    assert salary.net_salary == 5000
    assert salary.total_working_days == 26


def test_generating_twice_is_refused(container):
    member = _staff(container)
    container.payroll_service.generate(member.staff_id, "March", 2024)

    with pytest.raises(ValidationError):
        container.payroll_service.generate(member.staff_id, "March", 2024)
    assert len(container.payroll_service.history(member.staff_id)) == 1


def test_generate_for_unknown_staff(container):
    with pytest.raises(NotFoundError):
        container.payroll_service.generate("missing", "March", 2024)


def test_invalid_inputs(container):
    member = _staff(container)
    with pytest.raises(ValidationError):
        container.payroll_service.generate(member.staff_id, "Marchember", 2024)
    with pytest.raises(ValidationError):
        container.payroll_service.generate(member.staff_id, "March", 2024, total_working_days=-3)


def test_generate_for_all_skips_inactive_and_existing(container):
    a = _staff(container, full_name="A")
    b = _staff(container, full_name="B")
    c = _staff(container, full_name="C")
    container.staff_service.update(c.staff_id, status="Inactive")
    container.payroll_service.generate(a.staff_id, "March", 2024)

    generated = container.payroll_service.generate_for_all("March", 2024)

    assert [s.staff_id for s in generated] == [b.staff_id]
    assert {s.staff_id for s in container.payroll_service.for_period("March", 2024)} == {a.staff_id, b.staff_id}


def test_mark_paid_is_terminal(container):
    member = _staff(container)
    salary = container.payroll_service.generate(member.staff_id, "March", 2024)

    paid = container.payroll_service.mark_paid(salary.salary_id)

    assert paid.is_paid
    assert isinstance(paid.paid_at, datetime)
    with pytest.raises(ValidationError):
        container.payroll_service.mark_paid(salary.salary_id)
    with pytest.raises(NotFoundError):
        container.payroll_service.mark_paid("missing")


def test_salary_slip(container):
    member = _staff(container)
    salary = container.payroll_service.generate(member.staff_id, "March", 2024)

    slip = container.payroll_service.salary_slip(salary.salary_id)

    assert slip["organization"]["name"] == "Test Tuition Center"
    assert slip["staffName"] == "Neha Joshi"
    assert slip["netSalary"] == 0
    assert container.payroll_service.salary_slip("missing") is None


def test_generate_for_all_validates_year(container):
    _staff(container)

    with pytest.raises(ValidationError):
        container.payroll_service.generate_for_all("March", "abc")
    assert container.payroll_service.generate_for_all("March", "2024")[0].year == 2024


def test_whole_working_days_are_stored_as_int(container, store):
    a = _staff(container, full_name="A")
    b = _staff(container, full_name="B")

    container.payroll_service.generate(a.staff_id, "March", 2024)
    container.payroll_service.generate(b.staff_id, "March", 2024, total_working_days="24")
    stored = {r["staffId"]: r["totalWorkingDays"] for r in store.list_all("staff_salary")}

    assert stored[a.staff_id] == 26 and type(stored[a.staff_id]) is int
    assert stored[b.staff_id] == 24 and type(stored[b.staff_id]) is int

    c = _staff(container, full_name="C")
    salary = container.payroll_service.generate(c.staff_id, "March", 2024, total_working_days=22.5)
    assert salary.total_working_days == 22.5
