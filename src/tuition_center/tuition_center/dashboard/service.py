from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Optional

from ..academics.repository import ExamRepository
from ..attendance.service import AttendanceService
from ..fees.service import FeeService
from ..students.repository import StudentRepository


class DashboardService:
    """Read-only overview numbers for the landing page and analytics page."""

    def __init__(
        self,
        students: StudentRepository,
        exams: ExamRepository,
        fees: FeeService,
        attendance: AttendanceService,
    ):
        self._students = students
        self._exams = exams
        self._fees = fees
        self._attendance = attendance

    def overview(self, *, today: Optional[date] = None) -> dict:
        today = today or date.today()
        students = self._students.list_all()
        active = sum(1 for s in students if s.is_active)
        by_grade = Counter(s.grade for s in students)

        return {
            "students": {
                "total": len(students),
                "active": active,
                "inactive": len(students) - active,
                "byGrade": [{"grade": g, "count": c} for g, c in sorted(by_grade.items())],
            },
            "fees": self._fees.collection_summary(today=today),
            "totalExams": len(self._exams.list_all()),
            "staffPresentToday": self._attendance.present_count(today),
        }
