"""Exam aggregation: per-student totals, rank and class analytics.

Everything here is derived from MarksEntry lists on each read; nothing is stored.
Missing entries are not zero-filled: a student without a subject's entry simply
has a smaller total, while the denominator still counts every exam subject.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import replace
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence, TypeVar

from ..common.numbers import round_half_up
from ..core.constants import PASS_MARK
from ..core.enums import PassStatus
from . import grading
from .model import Datasheet, Exam, ExamAnalytics, ExamSeries, MarksEntry, StudentResult

T = TypeVar("T")


def student_total(entries: Iterable[MarksEntry]) -> float:
    return sum(e.marks_obtained for e in entries)


def group_by_student(entries: Iterable[MarksEntry]) -> "OrderedDict[str, list[MarksEntry]]":
    """Entries per student id, in order of each student's first entry."""
    groups: "OrderedDict[str, list[MarksEntry]]" = OrderedDict()
    for e in entries:
        groups.setdefault(e.student_id, []).append(e)
    return groups


def class_average(totals: Sequence[float], max_marks: float, subject_count: int) -> int:
    denominator = max_marks * subject_count
    if not totals or not denominator:
        return 0
    mean = sum(totals) / len(totals)
    return round_half_up(mean / denominator * 100)


def subject_average(entries: Iterable[MarksEntry], subject: str) -> int:
    marks = [e.marks_obtained for e in entries if e.subject == subject]
    if not marks:
        return 0
    return round_half_up(sum(marks) / len(marks))


def rank(items: Sequence[T], *, key=lambda item: item.total) -> list[tuple[int, T]]:
    """Sort by key descending; equal keys keep their input order. Ranks start at 1."""
    ordered = sorted(items, key=key, reverse=True)
    return [(position, item) for position, item in enumerate(ordered, start=1)]


def pass_rate(statuses: Sequence[PassStatus]) -> int:
    if not statuses:
        return 0
    passed = sum(1 for s in statuses if s == PassStatus.PASS)
    return round_half_up(passed / len(statuses) * 100)


def build_results(
    exam: Exam,
    entries: Sequence[MarksEntry],
    *,
    passing_percentage: float = PASS_MARK,
) -> list[StudentResult]:
    """Per-student results, ordered by rank."""
    results = []
    for student_id, student_entries in group_by_student(entries).items():
        total = student_total(student_entries)
        pct = grading.percentage(total, exam.max_total)
        marks = {e.subject: e.marks_obtained for e in student_entries}
        results.append(
            StudentResult(
                student_id=student_id,
                student_name=student_entries[0].student_name,
                marks=marks,
                total=total,
                max_total=exam.max_total,
                percentage=pct,
                grade=grading.grade(pct),
                pass_status=grading.pass_status(pct, passing_percentage),
                missing_subjects=tuple(s for s in exam.subjects if s not in marks),
            )
        )

    return [replace(result, rank=position) for position, result in rank(results)]


def exam_analytics(exam: Exam, entries: Sequence[MarksEntry], results: Sequence[StudentResult]) -> Optional[ExamAnalytics]:
    if not results:
        return None
    totals = [r.total for r in results]
    return ExamAnalytics(
        student_count=len(results),
        average=class_average(totals, exam.max_marks, len(exam.subjects)),
        highest=max(totals),
        lowest=min(totals),
        pass_rate=pass_rate([r.pass_status for r in results]),
        subject_averages=OrderedDict((s, subject_average(entries, s)) for s in exam.subjects),
    )


def build_datasheet(
    exam: Exam,
    entries: Sequence[MarksEntry],
    *,
    passing_percentage: float = PASS_MARK,
) -> Datasheet:
    entries = [e for e in entries if e.exam_id == exam.exam_id]
    results = build_results(exam, entries, passing_percentage=passing_percentage)
    return Datasheet(exam=exam, results=results, analytics=exam_analytics(exam, entries, results))


def group_series(exams: Iterable[Exam]) -> list[ExamSeries]:
    """Exams grouped by name (first-seen order), each group oldest sitting first."""
    groups: "OrderedDict[str, list[Exam]]" = OrderedDict()
    for exam in exams:
        groups.setdefault(exam.name, []).append(exam)
    return [ExamSeries(name=name, exams=tuple(sorted(items, key=lambda e: e.exam_date))) for name, items in groups.items()]


def progression(
    entries: Iterable[MarksEntry],
    exams_by_id: Mapping[str, Exam],
    series_name: str,
) -> list[dict]:
    """One student's percentage per sitting date within an exam series."""
    by_date: dict[date, list[float]] = {}
    for e in entries:
        exam = exams_by_id.get(e.exam_id)
        if not exam or exam.name != series_name or not e.exam_date:
            continue
        sums = by_date.setdefault(e.exam_date, [0.0, 0.0])
        sums[0] += e.marks_obtained
        sums[1] += e.max_marks

    return [
        {"date": d.isoformat(), "percentage": grading.percentage(obtained, maximum)}
        for d, (obtained, maximum) in sorted(by_date.items())
    ]


def subject_analysis(entries: Iterable[MarksEntry], exam_date: date) -> list[dict]:
    """Per-subject score of one student for the papers sat on `exam_date`."""
    return [
        {
            "subject": e.subject,
            "score": e.marks_obtained,
            "max": e.max_marks,
            "percentage": grading.percentage(e.marks_obtained, e.max_marks),
        }
        for e in entries
        if e.exam_date == exam_date
    ]
