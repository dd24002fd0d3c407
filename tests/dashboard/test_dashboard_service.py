from datetime import date


def test_overview(container):
    a = container.student_service.admit(full_name="A", grade="10", phone="1")
    container.student_service.admit(full_name="B", grade="10", phone="2")
    container.student_service.admit(full_name="C", grade="9", phone="3")
    container.student_service.toggle_status(a.student_id)
    container.exam_service.create_exam(name="UT", grade="10", exam_date="2024-03-01", subjects=["Math"], max_marks=50)
    container.fee_service.collect(student_id=a.student_id, fee_month="March", fee_year=2024, amount=1200)
    teacher = container.staff_service.add(full_name="T", role="Teacher", phone="4")
    container.attendance_service.mark_day(date(2024, 3, 20), {teacher.staff_id: "Present"})

    overview = container.dashboard_service.overview(today=date(2024, 3, 20))

    assert overview["students"] == {
        "total": 3,
        "active": 2,
        "inactive": 1,
        "byGrade": [{"grade": "10", "count": 2}, {"grade": "9", "count": 1}],
    }
    assert overview["fees"]["currentMonthCollection"] == 1200
    assert overview["totalExams"] == 1
    assert overview["staffPresentToday"] == 1


def test_overview_on_empty_store(container):
    overview = container.dashboard_service.overview(today=date(2024, 3, 20))

    assert overview["students"]["total"] == 0
    assert overview["fees"]["totalCollected"] == 0
    assert overview["staffPresentToday"] == 0
