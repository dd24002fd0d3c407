"""Load a small demo data set through the service layer (students, staff, one exam, fees, attendance)."""

from __future__ import annotations

import importlib
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "tuition_center"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from tuition_center.container import build_container, build_store
from tuition_center.core.constants import MONTHS

STUDENTS = [
    {"full_name": "Aarav Shah", "grade": "10", "phone": "9800000001", "parent_name": "Rakesh Shah"},
    {"full_name": "Diya Patel", "grade": "10", "phone": "9800000002", "parent_name": "Meena Patel"},
    {"full_name": "Kabir Mehta", "grade": "9", "phone": "9800000003", "parent_name": "Sunil Mehta"},
]

STAFF = [
    {"full_name": "Neha Joshi", "role": "Teacher", "phone": "9810000001", "salary_type": "Monthly", "basic_salary": 26000},
    {"full_name": "Ravi Kumar", "role": "Assistant", "phone": "9810000002", "salary_type": "Daily", "basic_salary": 900},
    {"full_name": "Priya Nair", "role": "Visiting Teacher", "phone": "9810000003", "salary_type": "Hourly", "basic_salary": 250},
]


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        store=build_store(backend=getattr(settings, "STORE_BACKEND", "mysql"), db_config=settings.DB_CONFIG),
        organization=getattr(settings, "ORGANIZATION", None),
    )

    students = [container.student_service.admit(**s) for s in STUDENTS]
    staff = [container.staff_service.add(**s) for s in STAFF]

    today = date.today()
    for offset in range(1, 6):
        day = today - timedelta(days=offset)
        container.attendance_service.mark_day(
            day, {m.staff_id: ("Half Day" if offset == 3 else "Present") for m in staff}
        )

    exam = container.exam_service.create_exam(
        name="Unit Test 1",
        grade="10",
        exam_date=today,
        subjects=["Maths", "Science", "English"],
        max_marks=100,
    )
    container.exam_service.save_marks(
        exam.exam_id,
        {
            students[0].student_id: {"Maths": 88, "Science": 76, "English": 91},
            students[1].student_id: {"Maths": 64, "Science": 59, "English": 72},
        },
    )

    month = MONTHS[today.month - 1]
    for s in students:
        container.fee_service.collect(student_id=s.student_id, fee_month=month, fee_year=today.year, amount=1500)

    print(f"OK: Seeded {len(students)} students, {len(staff)} staff, 1 exam")


if __name__ == "__main__":
    main()
