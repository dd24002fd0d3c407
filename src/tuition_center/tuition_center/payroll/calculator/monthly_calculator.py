from __future__ import annotations

from ...common.numbers import round_half_up
from .base import PayrollCalculator


class MonthlyPayrollCalculator(PayrollCalculator):
    """basic / working days per day, times the days worked."""

    def net_salary(self, *, basic_salary: float, days: float, total_working_days: float) -> int:
        if total_working_days <= 0:
            return 0
        per_day = basic_salary / total_working_days
        return max(round_half_up(per_day * days), 0)
