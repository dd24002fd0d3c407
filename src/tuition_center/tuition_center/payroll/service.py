from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence, Union

from ..attendance.service import AttendanceService
from ..common.datetime_utils import month_name, month_number, now_local
from ..common.validators import require_int, require_positive
from ..core.constants import DEFAULT_WORKING_DAYS
from ..core.enums import PaymentStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..staff.model import Staff
from ..staff.repository import StaffRepository
from .calculator.factory import PayrollCalculatorFactory
from .engine import compute_salary
from .model import StaffSalary
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


def resolve_month(month: Union[int, str]) -> tuple[str, int]:
    """Accept 'March' or 3; return ('March', 3)."""
    if isinstance(month, int) or str(month).isdigit():
        number = int(month)
        return month_name(number), number
    return str(month), month_number(str(month))


class PayrollService:
    """Use case: generate monthly salary records from attendance and mark them paid."""

    def __init__(
        self,
        salaries: SalaryRepository,
        staff: StaffRepository,
        attendance: AttendanceService,
        *,
        calculator_factory: Optional[PayrollCalculatorFactory] = None,
        default_working_days: int = DEFAULT_WORKING_DAYS,
        organization: Optional[dict] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._salaries = salaries
        self._staff = staff
        self._attendance = attendance
        self._factory = calculator_factory or PayrollCalculatorFactory()
        self._default_working_days = int(default_working_days)
        self._organization = dict(organization or {})
        self._clock = clock or now_local

    def _working_days(self, total_working_days) -> Union[int, float]:
        if total_working_days in (None, ""):
            return self._default_working_days
        days = require_positive(total_working_days, "Total working days")
        # Whole day counts are stored as ints so slips read 26, not 26.0.
        return int(days) if days.is_integer() else days

    def preview(self, member: Staff, month: Union[int, str], year: int, total_working_days=None) -> dict:
        """Salary figures for one staff member and month, without writing anything."""
        name, number = resolve_month(month)
        year = require_int(year, "Year")
        working_days = self._working_days(total_working_days)

        summary = self._attendance.monthly_summary(member.staff_id, number, year)
        result = compute_salary(
            basic_salary=member.basic_salary,
            salary_type=member.salary_type,
            present_days=summary.present,
            half_days=summary.half_day,
            total_working_days=working_days,
            factory=self._factory,
        )
        return {
            "staffId": member.staff_id,
            "staffName": member.full_name,
            "month": name,
            "year": year,
            "totalWorkingDays": working_days,
            "presentDays": summary.present,
            "halfDays": summary.half_day,
            "absentDays": summary.unpaid_days,
            "basicSalary": member.basic_salary,
            "deductions": result.deductions,
            "netSalary": result.net_salary,
        }

    def generate(self, staff_id: str, month: Union[int, str], year: int, total_working_days=None) -> StaffSalary:
        member = self._staff.get_by_id(staff_id)
        if not member:
            raise NotFoundError("Staff member not found")

        record = self.preview(member, month, year, total_working_days)
        if self._salaries.get_for_period(member.staff_id, record["month"], record["year"]):
            raise ValidationError(f"Salary for {record['month']} {record['year']} already generated")

        record["paymentStatus"] = PaymentStatus.UNPAID.value
        salary_id = self._salaries.create(record)
        logger.info(
            "Generated salary for %s %s %s: net %s",
            member.full_name,
            record["month"],
            record["year"],
            record["netSalary"],
        )
        return self._salaries.get_by_id(salary_id)

    def generate_for_all(self, month: Union[int, str], year: int, total_working_days=None) -> list[StaffSalary]:
        """Generate for every active staff member that has no record for the month yet."""
        name, _ = resolve_month(month)
        year = require_int(year, "Year")
        generated: list[StaffSalary] = []
        for member in self._staff.list_active():
            if self._salaries.get_for_period(member.staff_id, name, year):
                continue
            generated.append(self.generate(member.staff_id, name, year, total_working_days))
        return generated

    def mark_paid(self, salary_id: str) -> StaffSalary:
        salary = self._salaries.get_by_id(salary_id)
        if not salary:
            raise NotFoundError("Salary record not found")
        if salary.is_paid:
            raise ValidationError("Salary is already paid")

        self._salaries.mark_paid(salary_id, paid_at=self._clock())
        logger.info("Salary %s marked paid", salary_id)
        return self._salaries.get_by_id(salary_id)

    def history(self, staff_id: str) -> Sequence[StaffSalary]:
        return self._salaries.list_for_staff(staff_id)

    def for_period(self, month: Union[int, str], year: int) -> Sequence[StaffSalary]:
        name, _ = resolve_month(month)
        return self._salaries.list_for_period(name, require_int(year, "Year"))

    def salary_slip(self, salary_id: str) -> Optional[dict]:
        salary = self._salaries.get_by_id(salary_id)
        if not salary:
            return None
        return {
            "organization": self._organization,
            "staffName": salary.staff_name,
            "month": salary.month,
            "year": salary.year,
            "totalWorkingDays": salary.total_working_days,
            "presentDays": salary.present_days,
            "halfDays": salary.half_days,
            "basicSalary": salary.basic_salary,
            "netSalary": salary.net_salary,
        }
