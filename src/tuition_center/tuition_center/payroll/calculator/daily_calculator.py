from __future__ import annotations

from ...common.numbers import round_half_up
from .base import PayrollCalculator


class DailyPayrollCalculator(PayrollCalculator):
    """basic_salary is the day rate."""

    def net_salary(self, *, basic_salary: float, days: float, total_working_days: float) -> int:
        return max(round_half_up(basic_salary * days), 0)
