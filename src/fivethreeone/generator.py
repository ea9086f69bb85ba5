"""Workout generator: main-lift sets plus assistance work.

Combines the load calculator and the week table into Workout objects. A
lift without a 1RM yet (onboarding not finished) gets zero-weight sets
rather than an error.
"""

from __future__ import annotations

import logging

from fivethreeone.calculator import reps_to_exceed, set_weight, training_max
from fivethreeone.config import (
    BBB_PERCENTAGE,
    BBB_REPS,
    BBB_SETS,
    DEFAULT_TM_PERCENTAGE,
)
from fivethreeone.models import (
    AssistanceExercise,
    AssistanceTemplate,
    Lift,
    LiftValues,
    Profile,
    Workout,
    WorkoutSet,
)
from fivethreeone.weeks import WEEKS_PER_CYCLE, expand_week

logger = logging.getLogger(__name__)


def workout_id(lift: Lift, week: int, cycle: int) -> str:
    return f"cycle{cycle}_week{week}_{lift.value}"


def workout_name(lift: Lift) -> str:
    return f"{lift.label} 5/3/1"


def boring_but_big(lift: Lift, training_max: float, step: float) -> list[AssistanceExercise]:
    """BBB: 5 x 10 of the same lift at 50% of the training max."""
    return [
        AssistanceExercise(
            name=f"{lift.label} (BBB)",
            sets=BBB_SETS,
            reps=BBB_REPS,
            weight=set_weight(training_max, BBB_PERCENTAGE, step),
        )
    ]


def assistance_for(profile: Profile, lift: Lift, tm: float) -> list[AssistanceExercise]:
    template = profile.assistance_template
    if template == AssistanceTemplate.BORING_BUT_BIG:
        return boring_but_big(lift, tm, profile.settings.rounding)
    if template == AssistanceTemplate.CUSTOM:
        return [ex.reset() for ex in profile.custom_assistance.get(lift, [])]
    return []


def reps_to_beat(sets: list[WorkoutSet], best: float) -> int | None:
    """Reps on the AMRAP set needed to set a new estimated 1RM.

    None when there is no AMRAP set or nothing to beat yet.
    """
    amrap = next((s for s in sets if s.is_amrap), None)
    if amrap is None or best <= 0 or amrap.weight <= 0:
        return None
    return reps_to_exceed(amrap.weight, best)


def generate_workout(profile: Profile, lift: Lift) -> Workout:
    """The next workout for ``lift`` at its current cycle and week."""
    progress = profile.progress_for(lift)
    settings = profile.settings

    one_rep_max = profile.one_rep_maxes.get(lift)
    if one_rep_max <= 0:
        logger.debug("No 1RM recorded for %s; prescribing zero weights", lift.value)

    tm = training_max(one_rep_max, settings.training_max_percentage, settings.rounding)
    sets = expand_week(tm, progress.week, settings.rounding)
    best = profile.personal_records.get(lift) or one_rep_max

    return Workout(
        id=workout_id(lift, progress.week, progress.cycle),
        name=workout_name(lift),
        lift=lift,
        cycle=progress.cycle,
        week=progress.week,
        sets=sets,
        assistance_work=assistance_for(profile, lift, tm),
        training_max=tm,
        reps_to_beat=reps_to_beat(sets, best),
    )


def generate_cycle_workouts(
    one_rep_maxes: LiftValues,
    tm_percentage: float = DEFAULT_TM_PERCENTAGE,
    rounding: float = 2.5,
    cycle: int = 1,
) -> list[Workout]:
    """Every main-lift workout of one cycle, week by week (16 in total)."""
    workouts: list[Workout] = []

    for week in range(1, WEEKS_PER_CYCLE + 1):
        for lift in Lift:
            tm = training_max(one_rep_maxes.get(lift), tm_percentage, rounding)
            workouts.append(
                Workout(
                    id=workout_id(lift, week, cycle),
                    name=workout_name(lift),
                    lift=lift,
                    cycle=cycle,
                    week=week,
                    sets=expand_week(tm, week, rounding),
                    training_max=tm,
                )
            )

    return workouts
