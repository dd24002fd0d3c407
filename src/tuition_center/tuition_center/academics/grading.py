"""Percentage, letter grade and pass/fail rules for marks."""

from __future__ import annotations

from ..common.numbers import round_half_up
from ..core.constants import PASS_MARK
from ..core.enums import Grade, PassStatus

# (lower bound inclusive, grade), highest first.
GRADE_THRESHOLDS = (
    (90, Grade.A_PLUS),
    (80, Grade.A),
    (70, Grade.B_PLUS),
    (60, Grade.B),
    (50, Grade.C),
    (35, Grade.D),
)


def percentage(obtained: float, maximum: float) -> int:
    """round(obtained / maximum * 100); 0 when maximum is 0."""
    if not maximum:
        return 0
    return round_half_up(float(obtained) / float(maximum) * 100)


def grade(pct: float) -> Grade:
    for lower, letter in GRADE_THRESHOLDS:
        if pct >= lower:
            return letter
    return Grade.F


def pass_status(pct: float, passing_percentage: float = PASS_MARK) -> PassStatus:
    return PassStatus.PASS if pct >= passing_percentage else PassStatus.FAIL
