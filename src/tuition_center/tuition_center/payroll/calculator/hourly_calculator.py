from __future__ import annotations

from ...common.numbers import round_half_up
from ...core.constants import HOURS_PER_DAY
from .base import PayrollCalculator


class HourlyPayrollCalculator(PayrollCalculator):
    """basic_salary is the hour rate; every worked day counts as a full shift."""

    def __init__(self, hours_per_day: int = HOURS_PER_DAY):
        self._hours_per_day = int(hours_per_day)

    def net_salary(self, *, basic_salary: float, days: float, total_working_days: float) -> int:
        return max(round_half_up(basic_salary * self._hours_per_day * days), 0)
