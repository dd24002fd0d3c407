"""Payroll engine: basic salary + salary type + attendance counts -> net pay.

Pure function of its inputs. It does not look for an existing salary record;
PayrollService does that before writing.
"""

from __future__ import annotations

from typing import Optional, Union

from ..core.constants import DEFAULT_WORKING_DAYS
from ..core.enums import SalaryType
from .calculator.base import effective_days
from .calculator.factory import PayrollCalculatorFactory
from .model import PayrollResult

_factory = PayrollCalculatorFactory()


def compute_salary(
    *,
    basic_salary: float,
    salary_type: Optional[Union[SalaryType, str]],
    present_days: float,
    half_days: float,
    total_working_days: Optional[float] = DEFAULT_WORKING_DAYS,
    factory: Optional[PayrollCalculatorFactory] = None,
) -> PayrollResult:
    basic_salary = float(basic_salary or 0)
    working_days = float(total_working_days or DEFAULT_WORKING_DAYS)
    days = effective_days(present_days, half_days)

    calculator = (factory or _factory).for_salary_type(salary_type)
    net = calculator.net_salary(basic_salary=basic_salary, days=days, total_working_days=working_days)
    return PayrollResult(effective_days=days, deductions=0, net_salary=net)
