"""5/3/1 week prescriptions.

Each cycle is four weeks: three ascending-intensity weeks whose last set is
an AMRAP ("5+", "3+", "1+"), then a deload week with no AMRAP.
"""

from __future__ import annotations

from fivethreeone.calculator import set_weight
from fivethreeone.errors import InvalidArgumentError
from fivethreeone.models import WorkoutSet

WEEKS_PER_CYCLE = 4
DELOAD_WEEK = 4

# week -> (percentages of TM, target reps)
WEEK_SCHEME: dict[int, tuple[tuple[float, ...], tuple[int, ...]]] = {
    1: ((0.65, 0.75, 0.85), (5, 5, 5)),
    2: ((0.70, 0.80, 0.90), (3, 3, 3)),
    3: ((0.75, 0.85, 0.95), (5, 3, 1)),
    4: ((0.40, 0.50, 0.60), (5, 5, 5)),
}

WEEK_NAMES: dict[int, str] = {
    1: "5s week",
    2: "3s week",
    3: "5/3/1 week",
    4: "Deload",
}

AMRAP_SET_INDEX = 2


def _check_week(week: int) -> None:
    if week not in WEEK_SCHEME:
        raise InvalidArgumentError(f"week must be 1-{WEEKS_PER_CYCLE}, got {week!r}")


def is_deload_week(week: int) -> bool:
    return week == DELOAD_WEEK


def week_name(week: int) -> str:
    _check_week(week)
    return WEEK_NAMES[week]


def expand_week(training_max: float, week: int, step: float) -> list[WorkoutSet]:
    """The three main-lift sets for ``week`` at the given training max."""
    _check_week(week)
    percentages, reps = WEEK_SCHEME[week]

    return [
        WorkoutSet(
            weight=set_weight(training_max, pct, step),
            reps=reps[index],
            percentage=pct,
            is_amrap=not is_deload_week(week) and index == AMRAP_SET_INDEX,
        )
        for index, pct in enumerate(percentages)
    ]
