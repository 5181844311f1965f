"""
Rounding helpers shared by the scoring engines.

Scores round half up (12.5 → 13), not half-to-even as the builtin
round() does; persisted scores must not depend on banker's rounding.
"""
from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float, lower: int = 0, upper: int = 100) -> int:
    return int(min(upper, max(lower, value)))
