from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ...core.enums import SalaryType
from .base import PayrollCalculator
from .daily_calculator import DailyPayrollCalculator
from .hourly_calculator import HourlyPayrollCalculator
from .monthly_calculator import MonthlyPayrollCalculator


@dataclass
class PayrollCalculatorFactory:
    """Factory Pattern: choose the calculator for a staff member's salary type."""

    def for_salary_type(self, salary_type: Optional[Union[SalaryType, str]]) -> PayrollCalculator:
        try:
            kind = SalaryType(salary_type) if salary_type else SalaryType.MONTHLY
        except ValueError:
            kind = SalaryType.MONTHLY

        if kind == SalaryType.DAILY:
            return DailyPayrollCalculator()
        if kind == SalaryType.HOURLY:
            return HourlyPayrollCalculator()
        return MonthlyPayrollCalculator()
