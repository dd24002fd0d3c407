from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, to_iso_date
from ..common.validators import require_in_range, require_non_empty, require_positive
from ..core.constants import PASS_MARK
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from . import aggregation
from .model import Datasheet, Exam, ExamSeries
from .repository import ExamRepository, MarksRepository

logger = logging.getLogger(__name__)


def _as_date(value, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(require_non_empty(value, field_name))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


class ExamService:
    """Use case: exams, marks entry and exam analytics."""

    def __init__(
        self,
        exams: ExamRepository,
        marks: MarksRepository,
        students: StudentRepository,
        *,
        passing_percentage: float = PASS_MARK,
    ):
        self._exams = exams
        self._marks = marks
        self._students = students
        self._passing_percentage = float(passing_percentage)

    def create_exam(self, *, name: str, grade: str, exam_date, subjects: Sequence[str], max_marks) -> Exam:
        name = require_non_empty(name, "Exam name")
        grade = require_non_empty(grade, "Grade")
        exam_date = _as_date(exam_date, "Exam date")
        max_marks = require_positive(max_marks, "Max marks")

        if not isinstance(subjects, (list, tuple)):
            raise ValidationError("Subjects must be a list of names")
        cleaned: list[str] = []
        for subject in subjects:
            if not isinstance(subject, str):
                raise ValidationError(f"Subject must be a name: {subject!r}")
            subject = require_non_empty(subject, "Subject")
            if subject in cleaned:
                raise ValidationError(f"Subject listed twice: {subject}")
            cleaned.append(subject)
        if not cleaned:
            raise ValidationError("Please add at least one subject")

        exam_id = self._exams.create(
            {
                "name": name,
                "grade": grade,
                "date": to_iso_date(exam_date),
                "subjects": cleaned,
                "maxMarks": max_marks,
            }
        )
        logger.info("Created exam %s for grade %s on %s", name, grade, exam_date)
        return self._exams.get_by_id(exam_id)

    def get_exam(self, exam_id: str) -> Optional[Exam]:
        return self._exams.get_by_id(exam_id)

    def list_exams(self, *, grade: Optional[str] = None) -> Sequence[Exam]:
        return self._exams.list_by_grade(grade) if grade else self._exams.list_all()

    def series(self) -> list[ExamSeries]:
        return aggregation.group_series(self._exams.list_all())

    def save_marks(
        self,
        exam_id: str,
        marks: Mapping[str, Mapping[str, float]],
        *,
        exam_date=None,
    ) -> int:
        """Save a datasheet: {student_id: {subject: marks}}.

        Every cell is validated before anything is written; the batch is all-or-nothing.
        """
        exam = self._exams.get_by_id(exam_id)
        if not exam:
            raise NotFoundError("Exam not found")
        sat_on = _as_date(exam_date, "Exam date") if exam_date else exam.exam_date

        records = []
        for student_id, by_subject in (marks or {}).items():
            if not isinstance(by_subject, Mapping):
                raise ValidationError(f"Marks for {student_id} must be an object of subject -> marks")
            student = self._students.get_by_id(student_id)
            if not student:
                raise ValidationError(f"Unknown student: {student_id}")
            for subject, value in by_subject.items():
                if subject not in exam.subjects:
                    raise ValidationError(f"{subject} is not a subject of {exam.name}")
                obtained = require_in_range(value, f"Marks for {student.full_name} in {subject}", 0, exam.max_marks)
                records.append(
                    {
                        "examId": exam.exam_id,
                        "studentId": student.student_id,
                        "studentName": student.full_name,
                        "subject": subject,
                        "marksObtained": obtained,
                        "maxMarks": exam.max_marks,
                        "examDate": to_iso_date(sat_on),
                    }
                )
        if not records:
            raise ValidationError("No marks to save")

        self._marks.save_many(records)
        logger.info("Saved %d mark(s) for exam %s", len(records), exam.exam_id)
        return len(records)

    def datasheet(self, exam_id: str) -> Optional[Datasheet]:
        exam = self._exams.get_by_id(exam_id)
        if not exam:
            return None
        return aggregation.build_datasheet(
            exam,
            self._marks.list_for_exam(exam_id),
            passing_percentage=self._passing_percentage,
        )

    def student_report(
        self,
        student_id: str,
        *,
        series_name: Optional[str] = None,
        exam_date=None,
    ) -> dict:
        """Progression across one exam series and a subject breakdown for one sitting date.

        Defaults: the first series the student has marks in, and their latest sitting date.
        """
        entries = self._marks.list_for_student(student_id)
        exams_by_id = {e.exam_id: e for e in self._exams.list_all()}

        series_names: list[str] = []
        for e in entries:
            exam = exams_by_id.get(e.exam_id)
            if exam and exam.name not in series_names:
                series_names.append(exam.name)
        dates = sorted({e.exam_date for e in entries if e.exam_date}, reverse=True)

        active_series = series_name or (series_names[0] if series_names else None)
        active_date = _as_date(exam_date, "Exam date") if exam_date else (dates[0] if dates else None)

        return {
            "studentId": student_id,
            "series": series_names,
            "dates": [d.isoformat() for d in dates],
            "activeSeries": active_series,
            "activeDate": active_date.isoformat() if active_date else None,
            "progression": aggregation.progression(entries, exams_by_id, active_series) if active_series else [],
            "subjects": aggregation.subject_analysis(entries, active_date) if active_date else [],
        }
