"""Load calculator: training max, set weights and AMRAP-based 1RM estimates.

The estimate is the Epley variant used throughout the app,
``weight * reps * 0.0333 + weight``, rounded half-up to a whole number.
"""

from __future__ import annotations

import math

from fivethreeone.config import DEFAULT_ROUNDING, DEFAULT_TM_PERCENTAGE
from fivethreeone.errors import InvalidArgumentError
from fivethreeone.rounding import round_half_up, round_to_step

EPLEY_FACTOR = 0.0333

# Upper bound for the reps-to-beat search
MAX_REPS_TO_EXCEED = 100


def training_max(
    one_rep_max: float,
    tm_percentage: float = DEFAULT_TM_PERCENTAGE,
    step: float = DEFAULT_ROUNDING,
) -> float:
    """Training max: a rounded fraction (90% by default) of the 1RM."""
    if not 0 < tm_percentage <= 1:
        raise InvalidArgumentError(
            f"training max percentage must be in (0, 1], got {tm_percentage!r}"
        )
    return round_to_step(one_rep_max * tm_percentage, step)


def set_weight(
    training_max: float,
    percentage: float,
    step: float = DEFAULT_ROUNDING,
) -> float:
    """Working weight for a set at ``percentage`` of the training max."""
    if not (percentage > 0 and math.isfinite(percentage)):
        raise InvalidArgumentError(f"set percentage must be > 0, got {percentage!r}")
    return round_to_step(training_max * percentage, step)


def estimated_one_rep_max(weight: float, reps: int) -> int | float:
    """Estimate a 1RM from a completed set.

    No reps (or a skipped AMRAP) returns the weight unchanged.
    """
    if reps <= 0:
        return weight
    return round_half_up(weight * reps * EPLEY_FACTOR + weight)


def reps_to_exceed(weight: float, current_max: float) -> int:
    """Fewest reps at ``weight`` whose estimate beats ``current_max``.

    Returns 0 for a non-positive weight. When even MAX_REPS_TO_EXCEED reps
    would not be enough the result is one past the cap, which no real set
    reaches.
    """
    if weight <= 0:
        return 0
    for reps in range(1, MAX_REPS_TO_EXCEED + 1):
        if estimated_one_rep_max(weight, reps) > current_max:
            return reps
    return MAX_REPS_TO_EXCEED + 1
