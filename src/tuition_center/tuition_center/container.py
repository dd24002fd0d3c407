from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .academics.repository import ExamRepository, MarksRepository
from .academics.service import ExamService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_WORKING_DAYS, PASS_MARK
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .fees.repository import PaymentRepository
from .fees.service import FeeService
from .payroll.calculator.factory import PayrollCalculatorFactory
from .payroll.repository import SalaryRepository
from .payroll.service import PayrollService
from .staff.repository import StaffRepository
from .staff.service import StaffService
from .store.memory_record_store import InMemoryRecordStore
from .store.mysql_record_store import MySQLRecordStore
from .store.record_store import RecordStore
from .students.repository import StudentRepository
from .students.service import StudentService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: RecordStore

    students_repo: StudentRepository
    staff_repo: StaffRepository
    attendance_repo: AttendanceRepository
    salaries_repo: SalaryRepository
    exams_repo: ExamRepository
    marks_repo: MarksRepository
    payments_repo: PaymentRepository

    student_service: StudentService
    staff_service: StaffService
    attendance_service: AttendanceService
    payroll_service: PayrollService
    exam_service: ExamService
    fee_service: FeeService
    dashboard_service: DashboardService


def build_store(*, backend: str = "mysql", db_config: Optional[dict] = None) -> RecordStore:
    if backend == "memory":
        logger.info("Using the in-memory record store")
        return InMemoryRecordStore()
    if backend != "mysql":
        raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")
    config = DBConfig.from_dict(db_config or {})
    logger.info("Using MySQL record store %s@%s:%s/%s", config.user, config.host, config.port, config.database)
    return MySQLRecordStore(DatabaseConnection(config))


def build_container(
    *,
    store: RecordStore,
    default_working_days: int = DEFAULT_WORKING_DAYS,
    pass_mark: float = PASS_MARK,
    organization: Optional[dict] = None,
) -> Container:
    students_repo = StudentRepository(store)
    staff_repo = StaffRepository(store)
    attendance_repo = AttendanceRepository(store)
    salaries_repo = SalaryRepository(store)
    exams_repo = ExamRepository(store)
    marks_repo = MarksRepository(store)
    payments_repo = PaymentRepository(store)

    student_service = StudentService(students_repo)
    staff_service = StaffService(staff_repo)
    attendance_service = AttendanceService(attendance_repo, staff_repo)
    payroll_service = PayrollService(
        salaries_repo,
        staff_repo,
        attendance_service,
        calculator_factory=PayrollCalculatorFactory(),
        default_working_days=default_working_days,
        organization=organization,
    )
    exam_service = ExamService(exams_repo, marks_repo, students_repo, passing_percentage=pass_mark)
    fee_service = FeeService(payments_repo, students_repo, organization=organization)
    dashboard_service = DashboardService(students_repo, exams_repo, fee_service, attendance_service)

    return Container(
        store=store,
        students_repo=students_repo,
        staff_repo=staff_repo,
        attendance_repo=attendance_repo,
        salaries_repo=salaries_repo,
        exams_repo=exams_repo,
        marks_repo=marks_repo,
        payments_repo=payments_repo,
        student_service=student_service,
        staff_service=staff_service,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        exam_service=exam_service,
        fee_service=fee_service,
        dashboard_service=dashboard_service,
    )
