"""Cycle/week progression for each main lift.

Finishing a workout moves that lift one week forward. Finishing week 4
(the deload) starts the next cycle and raises the lift's 1RM by a fixed
increment, larger for squat/deadlift than for bench/OHP. Personal records
only ever go up.

All functions take a Profile snapshot and return a new one; the input is
never mutated. Saving the result is the caller's job, one snapshot per
completion. Editing a past history entry never moves progress or 1RMs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from fivethreeone.calculator import estimated_one_rep_max
from fivethreeone.config import CYCLE_INCREMENTS
from fivethreeone.errors import InvalidArgumentError
from fivethreeone.models import (
    AssistanceExercise,
    Lift,
    LiftProgress,
    LiftValues,
    Profile,
    Settings,
    Workout,
    WorkoutHistoryEntry,
    WorkoutSet,
)
from fivethreeone.weeks import DELOAD_WEEK, WEEKS_PER_CYCLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionResult:
    profile: Profile
    entry: WorkoutHistoryEntry
    new_personal_record: bool = False
    cycle_completed: bool = False
    deload_next: bool = False
    one_rep_max_increase: float = 0.0


def advance(progress: LiftProgress) -> tuple[LiftProgress, bool]:
    """Next position after finishing a workout, and whether a cycle ended."""
    next_week = progress.week + 1
    if next_week > WEEKS_PER_CYCLE:
        return LiftProgress(cycle=progress.cycle + 1, week=1), True
    return LiftProgress(cycle=progress.cycle, week=next_week), False


def cycle_increment(lift: Lift, settings: Settings) -> float:
    """1RM added to ``lift`` when one of its cycles ends."""
    if settings.cycle_increments and settings.unit in settings.cycle_increments:
        upper, lower = settings.cycle_increments[settings.unit]
    else:
        upper, lower = CYCLE_INCREMENTS[settings.unit.value]
    return upper if lift.is_upper_body else lower


def _finalize_sets(workout: Workout) -> list[WorkoutSet]:
    sets = [s.model_copy() for s in workout.sets]
    for s in sets:
        if not s.is_amrap:
            continue
        if s.actual_reps is None:
            raise InvalidArgumentError(
                f"{workout.name}: enter reps for the AMRAP set before finishing"
            )
        s.completed = True
    return sets


def _amrap_estimate(sets: list[WorkoutSet]) -> float | None:
    amrap = next((s for s in sets if s.is_amrap), None)
    if amrap is None:
        return None
    return estimated_one_rep_max(amrap.weight, amrap.actual_reps or 0)


def _ratchet_record(
    records: LiftValues, lift: Lift, estimate: float | None
) -> tuple[LiftValues, bool]:
    if estimate is None or estimate <= records.get(lift):
        return records, False
    logger.info(
        "New personal record for %s: %s",
        lift.value,
        estimate,
        extra={"fto_lift": lift.value, "fto_e1rm": estimate},
    )
    return records.with_value(lift, estimate), True


def _latest_entry_for(profile: Profile, workout_id: str) -> WorkoutHistoryEntry | None:
    # history is newest first
    return next((h for h in profile.history if h.workout_id == workout_id), None)


def _as_template(assistance: list[AssistanceExercise]) -> list[AssistanceExercise]:
    return [ex.reset() for ex in assistance]


def complete_workout(
    profile: Profile,
    workout: Workout,
    *,
    completed_at: datetime,
    duration: int = 0,
    entry_id: str | None = None,
) -> CompletionResult:
    """Finish ``workout`` for the first time and advance its lift.

    A workout that is already finished (reopened from history, or whose id
    is in ``completed_workouts``) is handed to edit_workout instead, so its
    lift never advances twice.

    Raises InvalidArgumentError if the AMRAP set has no reps recorded.
    """
    if workout.completed or workout.id in profile.completed_workouts:
        previous = _latest_entry_for(profile, workout.id)
        if previous is None:
            raise InvalidArgumentError(
                f"{workout.id} is already completed but has no history entry to edit"
            )
        logger.debug("%s already completed; editing entry %s", workout.id, previous.id)
        return edit_workout(profile, previous.id, workout, duration=duration or None)

    lift = workout.lift
    sets = _finalize_sets(workout)
    estimate = _amrap_estimate(sets)

    entry = WorkoutHistoryEntry(
        id=entry_id or str(int(completed_at.timestamp() * 1000)),
        date=completed_at,
        workout_id=workout.id,
        workout_name=workout.name,
        lift=lift,
        cycle=workout.cycle,
        week=workout.week,
        sets=sets,
        assistance_work=[ex.model_copy(deep=True) for ex in workout.assistance_work],
        estimated_one_rep_max=estimate,
        duration=duration,
    )

    current = profile.progress_for(lift)
    next_progress, cycle_completed = advance(current)

    one_rep_maxes = profile.one_rep_maxes
    increase = 0.0
    if cycle_completed:
        increase = cycle_increment(lift, profile.settings)
        one_rep_maxes = one_rep_maxes.with_value(lift, one_rep_maxes.get(lift) + increase)
        logger.info(
            "%s cycle %d complete; 1RM +%s",
            lift.label,
            current.cycle,
            increase,
            extra={"fto_lift": lift.value, "fto_cycle": current.cycle},
        )

    records, new_record = _ratchet_record(profile.personal_records, lift, estimate)

    custom_assistance = dict(profile.custom_assistance)
    if workout.assistance_work:
        custom_assistance[lift] = _as_template(workout.assistance_work)

    updated = profile.model_copy(
        update={
            "history": [entry, *profile.history],
            "completed_workouts": [*profile.completed_workouts, workout.id],
            "lift_progress": {**profile.lift_progress, lift: next_progress},
            "one_rep_maxes": one_rep_maxes,
            "personal_records": records,
            "custom_assistance": custom_assistance,
        }
    )

    return CompletionResult(
        profile=updated,
        entry=entry,
        new_personal_record=new_record,
        cycle_completed=cycle_completed,
        deload_next=next_progress.week == DELOAD_WEEK,
        one_rep_max_increase=increase,
    )


def workout_from_entry(entry: WorkoutHistoryEntry) -> Workout:
    """Reopen a history entry as an editable workout."""
    return Workout(
        id=entry.workout_id,
        name=entry.workout_name,
        lift=entry.lift,
        cycle=entry.cycle,
        week=entry.week,
        sets=[s.model_copy() for s in entry.sets],
        assistance_work=[ex.model_copy(deep=True) for ex in entry.assistance_work],
        completed=True,
    )


def edit_workout(
    profile: Profile,
    entry_id: str,
    workout: Workout,
    *,
    duration: int | None = None,
) -> CompletionResult:
    """Overwrite history entry ``entry_id`` in place.

    Lift progress, 1RMs and the completed-workout list are left alone; only
    the personal record may still go up.
    """
    existing = profile.find_entry(entry_id)
    if existing is None:
        raise InvalidArgumentError(f"no history entry with id {entry_id!r}")

    sets = _finalize_sets(workout)
    estimate = _amrap_estimate(sets)

    entry = existing.model_copy(
        update={
            "sets": sets,
            "assistance_work": [ex.model_copy(deep=True) for ex in workout.assistance_work],
            "estimated_one_rep_max": estimate,
            "duration": existing.duration if duration is None else duration,
        }
    )
    history = [entry if h.id == entry_id else h for h in profile.history]
    records, new_record = _ratchet_record(profile.personal_records, existing.lift, estimate)

    updated = profile.model_copy(update={"history": history, "personal_records": records})
    return CompletionResult(profile=updated, entry=entry, new_personal_record=new_record)


def reset_progress(profile: Profile) -> Profile:
    """Put every lift back at cycle 1, week 1. 1RMs and history are kept.

    ``completed_workouts`` is cleared so the restarted weeks count as new.
    """
    return profile.model_copy(
        update={
            "lift_progress": {lift: LiftProgress() for lift in Lift},
            "completed_workouts": [],
        }
    )
