from datetime import date

from tuition_center.academics import aggregation
from tuition_center.academics.model import Exam, MarksEntry
from tuition_center.core.enums import Grade, PassStatus


def _exam(exam_id="e1", name="Unit Test 1", day=1, subjects=("Math", "Science")):
    return Exam(exam_id=exam_id, name=name, grade="10", exam_date=date(2024, 3, day), subjects=subjects, max_marks=100)


def _entry(student_id, subject, marks, exam_id="e1", day=1):
    return MarksEntry(
        entry_id=f"{exam_id}_{student_id}_{subject}",
        exam_id=exam_id,
        student_id=student_id,
        student_name=student_id.upper(),
        subject=subject,
        marks_obtained=marks,
        max_marks=100,
        exam_date=date(2024, 3, day),
    )


def test_single_student_result():
    results = aggregation.build_results(_exam(), [_entry("a", "Math", 80), _entry("a", "Science", 90)])

    (result,) = results
    assert result.total == 170
    assert result.percentage == 85
    assert result.grade == Grade.A
    assert result.pass_status == PassStatus.PASS
    assert result.rank == 1
    assert result.missing_subjects == ()


def test_missing_subject_is_not_zero_filled_but_reported():
    (result,) = aggregation.build_results(_exam(), [_entry("a", "Math", 60)])

    assert result.total == 60
    assert result.percentage == 30
    assert result.pass_status == PassStatus.FAIL
    assert result.missing_subjects == ("Science",)


def test_rank_is_stable_under_ties():
    entries = [
        _entry("first", "Math", 50),
        _entry("top", "Math", 90),
        _entry("second", "Math", 50),
    ]

    results = aggregation.build_results(_exam(subjects=("Math",)), entries)

    assert [(r.student_id, r.rank) for r in results] == [("top", 1), ("first", 2), ("second", 3)]


def test_datasheet_analytics():
    exam = _exam()
    entries = [
        _entry("a", "Math", 80),
        _entry("a", "Science", 90),
        _entry("b", "Math", 20),
        _entry("b", "Science", 30),
        _entry("x", "Math", 99, exam_id="other"),
    ]

    sheet = aggregation.build_datasheet(exam, entries)

    assert [r.student_id for r in sheet.results] == ["a", "b"]
    analytics = sheet.analytics
    assert analytics.student_count == 2
    assert analytics.average == 55  # (170 + 50) / 2 / 200
    assert (analytics.highest, analytics.lowest) == (170, 50)
    assert analytics.pass_rate == 50
    assert analytics.to_dict()["subjectData"] == [
        {"subject": "Math", "average": 50},
        {"subject": "Science", "average": 60},
    ]


def test_datasheet_without_marks_has_no_analytics():
    sheet = aggregation.build_datasheet(_exam(), [])

    assert sheet.results == []
    assert sheet.analytics is None


def test_series_groups_by_name_oldest_first():
    exams = [
        _exam("e3", "Unit Test 1", day=20),
        _exam("e2", "Final", day=10),
        _exam("e1", "Unit Test 1", day=1),
    ]

    series = aggregation.group_series(exams)

    assert [s.name for s in series] == ["Unit Test 1", "Final"]
    assert [e.exam_id for e in series[0].exams] == ["e1", "e3"]


def test_progression_and_subject_analysis():
    exams = {"e1": _exam("e1", day=1), "e2": _exam("e2", day=15), "f": _exam("f", name="Final", day=28)}
    entries = [
        _entry("a", "Math", 40, exam_id="e1", day=1),
        _entry("a", "Science", 60, exam_id="e1", day=1),
        _entry("a", "Math", 90, exam_id="e2", day=15),
        _entry("a", "Math", 70, exam_id="f", day=28),
    ]

    assert aggregation.progression(entries, exams, "Unit Test 1") == [
        {"date": "2024-03-01", "percentage": 50},
        {"date": "2024-03-15", "percentage": 90},
    ]
    assert aggregation.subject_analysis(entries, date(2024, 3, 1)) == [
        {"subject": "Math", "score": 40, "max": 100, "percentage": 40},
        {"subject": "Science", "score": 60, "max": 100, "percentage": 60},
    ]
