from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.constants import HALF_DAY_WEIGHT


def effective_days(present_days: float, half_days: float) -> float:
    """Present days plus half days at half weight."""
    return float(present_days or 0) + float(half_days or 0) * HALF_DAY_WEIGHT


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll, one per salary type).

    Pay is pro-rata for the days actually worked; no absence deduction is applied.
    """

    @abstractmethod
    def net_salary(self, *, basic_salary: float, days: float, total_working_days: float) -> int:
        raise NotImplementedError
