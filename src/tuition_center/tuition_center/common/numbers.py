from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero.

    Python's built-in round() uses banker's rounding (round(0.5) == 0); amounts and
    percentages shown to operators use the schoolbook rule.
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
