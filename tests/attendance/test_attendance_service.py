from datetime import date

import pytest

from tuition_center.attendance.repository import attendance_key
from tuition_center.core.exceptions import StoreError, ValidationError


@pytest.fixture
def staff(container):
    a = container.staff_service.add(full_name="A", role="Teacher", phone="1")
    b = container.staff_service.add(full_name="B", role="Teacher", phone="2")
    return a, b


def test_mark_day_and_read_it_back(container, staff):
    a, b = staff
    saved = container.attendance_service.mark_day(date(2024, 3, 4), {a.staff_id: "Present", b.staff_id: "Half Day"})

    assert saved == 2
    assert container.attendance_service.get_day(date(2024, 3, 4)) == {a.staff_id: "Present", b.staff_id: "Half Day"}


def test_re_marking_overwrites_the_same_document(container, store, staff):
    a, _ = staff
    container.attendance_service.mark_day(date(2024, 3, 4), {a.staff_id: "Absent"})
    container.attendance_service.mark_day(date(2024, 3, 4), {a.staff_id: "Present"})

    rows = store.list_all("staff_attendance")
    assert [r["id"] for r in rows] == [attendance_key(a.staff_id, date(2024, 3, 4))]
    assert rows[0]["status"] == "Present"
    assert rows[0]["staffName"] == "A"


def test_mark_day_rejects_bad_input_without_writing(container, store, staff):
    a, _ = staff
    with pytest.raises(ValidationError):
        container.attendance_service.mark_day(date(2024, 3, 4), {a.staff_id: "Present", "ghost": "Present"})
    with pytest.raises(ValidationError):
        container.attendance_service.mark_day(date(2024, 3, 4), {a.staff_id: "Sleeping"})
    with pytest.raises(ValidationError):
        container.attendance_service.mark_day(date(2024, 3, 4), {})

    assert store.list_all("staff_attendance") == []


def test_monthly_summary_and_sheet(container, staff):
    a, b = staff
    container.attendance_service.mark_day(date(2024, 2, 29), {a.staff_id: "Present"})
    container.attendance_service.mark_day(date(2024, 3, 1), {a.staff_id: "Present", b.staff_id: "Absent"})
    container.attendance_service.mark_day(date(2024, 3, 31), {a.staff_id: "Half Day"})

    summary = container.attendance_service.monthly_summary(a.staff_id, 3, 2024)
    assert (summary.present, summary.half_day) == (1, 1)

    sheet = container.attendance_service.monthly_sheet(3, 2024)
    assert sheet == {a.staff_id: {1: "Present", 31: "Half Day"}, b.staff_id: {1: "Absent"}}


def test_staff_summary_window(container, staff):
    a, _ = staff
    container.attendance_service.mark_day(date(2023, 12, 20), {a.staff_id: "Present"})
    container.attendance_service.mark_day(date(2024, 1, 10), {a.staff_id: "Present"})
    container.attendance_service.mark_day(date(2024, 3, 5), {a.staff_id: "Absent"})

    everything = container.attendance_service.staff_summary(a.staff_id)
    recent = container.attendance_service.staff_summary(a.staff_id, last_months=3, today=date(2024, 3, 15))

    assert everything.total == 3
    assert (recent.present, recent.absent) == (1, 1)


def test_present_count_survives_store_failure(container, staff, monkeypatch):
    a, b = staff
    container.attendance_service.mark_day(date(2024, 3, 4), {a.staff_id: "Present", b.staff_id: "Present"})
    assert container.attendance_service.present_count(date(2024, 3, 4)) == 2

    def boom(*args, **kwargs):
        raise StoreError("down")

    monkeypatch.setattr(container.attendance_repo, "list_for_date", boom)
    assert container.attendance_service.present_count(date(2024, 3, 4)) == 0
