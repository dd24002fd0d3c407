from datetime import date

import pytest

from tuition_center.academics.repository import marks_key
from tuition_center.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def exam(container):
    return container.exam_service.create_exam(
        name="Unit Test 1", grade="10", exam_date="2024-03-01", subjects=["Math", "Science"], max_marks=100
    )


@pytest.fixture
def students(container):
    a = container.student_service.admit(full_name="Asha", grade="10", phone="1")
    b = container.student_service.admit(full_name="Bilal", grade="10", phone="2")
    return a, b


def test_create_exam_validates(container):
    with pytest.raises(ValidationError):
        container.exam_service.create_exam(name="T", grade="10", exam_date="2024-03-01", subjects=[], max_marks=100)
    with pytest.raises(ValidationError):
        container.exam_service.create_exam(
            name="T", grade="10", exam_date="2024-03-01", subjects=["Math", "Math"], max_marks=100
        )
    with pytest.raises(ValidationError):
        container.exam_service.create_exam(name="T", grade="10", exam_date="01/03/2024", subjects=["Math"], max_marks=100)
    with pytest.raises(ValidationError):
        container.exam_service.create_exam(name="T", grade="10", exam_date="2024-03-01", subjects=["Math"], max_marks=0)


def test_saving_the_same_cell_twice_keeps_one_record(container, store, exam, students):
    a, _ = students
    container.exam_service.save_marks(exam.exam_id, {a.student_id: {"Math": 40}})
    container.exam_service.save_marks(exam.exam_id, {a.student_id: {"Math": 75}})

    rows = store.list_all("marks")
    assert [r["id"] for r in rows] == [marks_key(exam.exam_id, a.student_id, "Math")]
    assert rows[0]["marksObtained"] == 75
    assert rows[0]["examDate"] == "2024-03-01"


def test_save_marks_is_validated_before_writing(container, store, exam, students):
    a, b = students
    bad_batches = [
        {a.student_id: {"Math": 50}, b.student_id: {"Math": 101}},
        {a.student_id: {"Math": -1}},
        {a.student_id: {"History": 50}},
        {"ghost": {"Math": 50}},
        {a.student_id: {"Math": "fifty"}},
        {},
    ]
    for batch in bad_batches:
        with pytest.raises(ValidationError):
            container.exam_service.save_marks(exam.exam_id, batch)

    assert store.list_all("marks") == []
    with pytest.raises(NotFoundError):
        container.exam_service.save_marks("missing", {a.student_id: {"Math": 50}})


def test_datasheet(container, exam, students):
    a, b = students
    container.exam_service.save_marks(
        exam.exam_id,
        {a.student_id: {"Math": 80, "Science": 90}, b.student_id: {"Math": 30, "Science": 20}},
    )

    sheet = container.exam_service.datasheet(exam.exam_id)

    assert [(r.student_name, r.rank, r.percentage) for r in sheet.results] == [("Asha", 1, 85), ("Bilal", 2, 25)]
    assert sheet.analytics.pass_rate == 50
    assert container.exam_service.datasheet("missing") is None


def test_student_report(container, exam, students):
    a, _ = students
    second = container.exam_service.create_exam(
        name="Unit Test 1", grade="10", exam_date="2024-04-01", subjects=["Math", "Science"], max_marks=50
    )
    container.exam_service.save_marks(exam.exam_id, {a.student_id: {"Math": 60, "Science": 70}})
    container.exam_service.save_marks(second.exam_id, {a.student_id: {"Math": 45, "Science": 40}})

    report = container.exam_service.student_report(a.student_id)

    assert report["series"] == ["Unit Test 1"]
    assert report["dates"] == ["2024-04-01", "2024-03-01"]
    assert report["activeDate"] == "2024-04-01"
    assert report["progression"] == [
        {"date": "2024-03-01", "percentage": 65},
        {"date": "2024-04-01", "percentage": 85},
    ]
    assert [s["subject"] for s in report["subjects"]] == ["Math", "Science"]

    older = container.exam_service.student_report(a.student_id, exam_date=date(2024, 3, 1))
    assert [s["score"] for s in older["subjects"]] == [60, 70]


def test_student_report_without_marks(container, students):
    a, _ = students

    report = container.exam_service.student_report(a.student_id)

    assert report["series"] == [] and report["progression"] == [] and report["subjects"] == []


def test_subjects_must_be_a_list_of_names(container, store):
    with pytest.raises(ValidationError):
        container.exam_service.create_exam(name="T", grade="10", exam_date="2024-03-01", subjects="Math", max_marks=100)
    with pytest.raises(ValidationError):
        container.exam_service.create_exam(
            name="T", grade="10", exam_date="2024-03-01", subjects=["Math", 7], max_marks=100
        )

    assert store.list_all("exams") == []


def test_each_marks_row_must_be_a_subject_mapping(container, store, exam, students):
    a, b = students

    with pytest.raises(ValidationError):
        container.exam_service.save_marks(exam.exam_id, {a.student_id: {"Math": 70}, b.student_id: 80})

    assert store.list_all("marks") == []
