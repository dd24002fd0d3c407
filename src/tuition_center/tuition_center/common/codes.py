from __future__ import annotations

import random
from typing import Callable, Optional

from ..core.constants import CODE_ATTEMPTS, CODE_MAX, CODE_MIN


def generate_code(
    prefix: str,
    *,
    exists: Callable[[str], bool],
    rng: Optional[random.Random] = None,
    attempts: int = CODE_ATTEMPTS,
) -> str:
    """Random `{prefix}NNNN` code, re-drawn while `exists` reports a clash.

    After `attempts` clashes the last candidate is returned anyway; codes are a
    display aid, records are addressed by id.
    """
    rng = rng or random.Random()
    candidate = ""
    for _ in range(max(int(attempts), 1)):
        candidate = f"{prefix}{rng.randint(CODE_MIN, CODE_MAX)}"
        if not exists(candidate):
            return candidate
    return candidate
