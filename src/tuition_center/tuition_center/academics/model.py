from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import Grade, PassStatus


@dataclass(frozen=True)
class Exam:
    """Domain entity: one sitting of an exam for a class (collection `exams`).

    Exams sharing a `name` form a series (e.g. repeated "Unit Test 1").
    """

    exam_id: str
    name: str
    grade: str
    exam_date: date
    subjects: tuple[str, ...]
    max_marks: float
    created_at: Optional[datetime] = None

    @property
    def max_total(self) -> float:
        return self.max_marks * len(self.subjects)

    def to_dict(self) -> dict:
        return {
            "id": self.exam_id,
            "name": self.name,
            "grade": self.grade,
            "date": self.exam_date.isoformat(),
            "subjects": list(self.subjects),
            "maxMarks": self.max_marks,
        }


@dataclass(frozen=True)
class MarksEntry:
    """Domain entity: marks of one student in one subject of one exam (collection `marks`)."""

    entry_id: str
    exam_id: str
    student_id: str
    student_name: str
    subject: str
    marks_obtained: float
    max_marks: float
    exam_date: Optional[date] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "examId": self.exam_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "subject": self.subject,
            "marksObtained": self.marks_obtained,
            "maxMarks": self.max_marks,
            "examDate": self.exam_date.isoformat() if self.exam_date else None,
        }


@dataclass(frozen=True)
class StudentResult:
    student_id: str
    student_name: str
    marks: dict
    total: float
    max_total: float
    percentage: int
    grade: Grade
    pass_status: PassStatus
    rank: int = 0
    missing_subjects: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "marks": dict(self.marks),
            "total": self.total,
            "maxTotal": self.max_total,
            "percentage": self.percentage,
            "grade": self.grade.value,
            "passStatus": self.pass_status.value,
            "rank": self.rank,
            "missingSubjects": list(self.missing_subjects),
        }


@dataclass(frozen=True)
class ExamAnalytics:
    student_count: int
    average: int
    highest: float
    lowest: float
    pass_rate: int
    subject_averages: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "studentCount": self.student_count,
            "average": self.average,
            "highest": self.highest,
            "lowest": self.lowest,
            "passRate": self.pass_rate,
            "subjectData": [{"subject": s, "average": a} for s, a in self.subject_averages.items()],
        }


@dataclass(frozen=True)
class Datasheet:
    exam: Exam
    results: list
    analytics: Optional[ExamAnalytics]

    def to_dict(self) -> dict:
        return {
            "exam": self.exam.to_dict(),
            "results": [r.to_dict() for r in self.results],
            "analytics": self.analytics.to_dict() if self.analytics else None,
        }


@dataclass(frozen=True)
class ExamSeries:
    name: str
    exams: tuple[Exam, ...]

    def to_dict(self) -> dict:
        return {"name": self.name, "exams": [e.to_dict() for e in self.exams]}
