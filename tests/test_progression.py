"""Tests for the cycle/week progression state machine."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from fivethreeone.assistance import new_assistance_exercise
from fivethreeone.errors import InvalidArgumentError
from fivethreeone.generator import generate_workout
from fivethreeone.models import (
    Lift,
    LiftProgress,
    LiftValues,
    Profile,
    Settings,
    Unit,
)
from fivethreeone.progression import (
    advance,
    complete_workout,
    cycle_increment,
    edit_workout,
    reset_progress,
    workout_from_entry,
)

START = datetime(2026, 1, 5, 18, 0, tzinfo=timezone.utc)


def _make_profile(**overrides) -> Profile:
    defaults = dict(
        one_rep_maxes=LiftValues(squat=200, bench=150, deadlift=250, ohp=100),
        settings=Settings(rounding=5, unit=Unit.LB),
    )
    defaults.update(overrides)
    return Profile(**defaults)


def _finish(profile: Profile, lift: Lift, reps: int = 5, day: int = 0):
    workout = generate_workout(profile, lift)
    for s in workout.sets:
        s.completed = True
        if s.is_amrap:
            s.actual_reps = reps
    return complete_workout(
        profile, workout, completed_at=START + timedelta(days=day), duration=3000,
    )


def test_advance_moves_one_week():
    assert advance(LiftProgress(cycle=1, week=1)) == (LiftProgress(cycle=1, week=2), False)
    assert advance(LiftProgress(cycle=1, week=3)) == (LiftProgress(cycle=1, week=4), False)


def test_advance_wraps_after_deload():
    assert advance(LiftProgress(cycle=2, week=4)) == (LiftProgress(cycle=3, week=1), True)


def test_cycle_increment_lower_body_bigger():
    lb = Settings(unit=Unit.LB)
    kg = Settings(unit=Unit.KG)
    assert cycle_increment(Lift.SQUAT, lb) == 10
    assert cycle_increment(Lift.DEADLIFT, lb) == 10
    assert cycle_increment(Lift.BENCH, lb) == 5
    assert cycle_increment(Lift.OHP, lb) == 5
    assert cycle_increment(Lift.DEADLIFT, kg) == 5
    assert cycle_increment(Lift.OHP, kg) == 2.5


def test_cycle_increment_override():
    settings = Settings(unit=Unit.LB, cycle_increments={Unit.LB: (2.5, 5.0)})
    assert cycle_increment(Lift.SQUAT, settings) == 5
    assert cycle_increment(Lift.BENCH, settings) == 2.5
    # No override for kg: falls back to the default table
    kg = Settings(unit=Unit.KG, cycle_increments={Unit.LB: (2.5, 5.0)})
    assert cycle_increment(Lift.SQUAT, kg) == 5


def test_complete_workout_advances_week():
    result = _finish(_make_profile(), Lift.SQUAT)

    assert result.profile.progress_for(Lift.SQUAT) == LiftProgress(cycle=1, week=2)
    assert result.profile.one_rep_maxes.squat == 200
    assert not result.cycle_completed
    assert not result.deload_next


def test_week_3_goes_to_deload_without_changing_one_rep_max():
    profile = _make_profile(lift_progress={Lift.SQUAT: LiftProgress(cycle=1, week=3)})
    result = _finish(profile, Lift.SQUAT, reps=1)

    assert result.profile.progress_for(Lift.SQUAT) == LiftProgress(cycle=1, week=4)
    assert result.profile.one_rep_maxes.squat == 200
    assert result.deload_next
    assert not result.cycle_completed


def test_week_4_starts_next_cycle_and_raises_one_rep_max():
    progress = {lift: LiftProgress(cycle=1, week=4) for lift in Lift}
    profile = _make_profile(lift_progress=progress)

    squat = _finish(profile, Lift.SQUAT)
    assert squat.cycle_completed
    assert squat.one_rep_max_increase == 10
    assert squat.profile.progress_for(Lift.SQUAT) == LiftProgress(cycle=2, week=1)
    assert squat.profile.one_rep_maxes.squat == 210

    bench = _finish(profile, Lift.BENCH)
    assert bench.one_rep_max_increase == 5
    assert bench.profile.one_rep_maxes.bench == 155
    assert squat.one_rep_max_increase > bench.one_rep_max_increase


def test_kg_increments():
    progress = {lift: LiftProgress(cycle=1, week=4) for lift in Lift}
    profile = _make_profile(
        one_rep_maxes=LiftValues(squat=140, bench=100, deadlift=180, ohp=60),
        settings=Settings(rounding=2.5, unit=Unit.KG),
        lift_progress=progress,
    )
    assert _finish(profile, Lift.DEADLIFT).profile.one_rep_maxes.deadlift == 185
    assert _finish(profile, Lift.OHP).profile.one_rep_maxes.ohp == 62.5


def test_deload_completion_needs_no_amrap_reps():
    profile = _make_profile(lift_progress={Lift.OHP: LiftProgress(cycle=1, week=4)})
    workout = generate_workout(profile, Lift.OHP)
    result = complete_workout(profile, workout, completed_at=START)

    assert result.entry.estimated_one_rep_max is None
    assert not result.new_personal_record


def test_full_cycle_for_one_lift():
    profile = _make_profile()
    for day in range(4):
        profile = _finish(profile, Lift.DEADLIFT, reps=3, day=day).profile

    assert profile.progress_for(Lift.DEADLIFT) == LiftProgress(cycle=2, week=1)
    assert profile.one_rep_maxes.deadlift == 260
    assert len(profile.history) == 4
    assert profile.completed_workouts == [
        "cycle1_week1_deadlift",
        "cycle1_week2_deadlift",
        "cycle1_week3_deadlift",
        "cycle1_week4_deadlift",
    ]


def test_other_lifts_are_untouched():
    profile = _make_profile(lift_progress={Lift.BENCH: LiftProgress(cycle=4, week=2)})
    result = _finish(profile, Lift.SQUAT)

    assert result.profile.progress_for(Lift.BENCH) == LiftProgress(cycle=4, week=2)
    assert result.profile.progress_for(Lift.OHP) == LiftProgress(cycle=1, week=1)
    assert result.profile.one_rep_maxes.bench == 150


def test_input_profile_is_not_mutated():
    profile = _make_profile()
    _finish(profile, Lift.SQUAT, reps=12)

    assert profile.progress_for(Lift.SQUAT) == LiftProgress(cycle=1, week=1)
    assert profile.history == []
    assert profile.completed_workouts == []
    assert profile.personal_records.squat == 200


def test_history_entry_is_prepended():
    first = _finish(_make_profile(), Lift.SQUAT, day=0).profile
    second = _finish(first, Lift.BENCH, day=1)

    history = second.profile.history
    assert [h.lift for h in history] == [Lift.BENCH, Lift.SQUAT]
    assert second.entry.date == START + timedelta(days=1)
    assert second.entry.duration == 3000
    assert second.entry.id == str(int((START + timedelta(days=1)).timestamp() * 1000))


def test_amrap_estimate_and_personal_record():
    # Week 1 top set 155 x 10 -> 206.6 -> 207 beats the 200 record
    result = _finish(_make_profile(), Lift.SQUAT, reps=10)

    assert result.entry.estimated_one_rep_max == 207
    assert result.entry.sets[2].completed
    assert result.new_personal_record
    assert result.profile.personal_records.squat == 207


def test_weaker_amrap_does_not_lower_record():
    profile = _finish(_make_profile(), Lift.SQUAT, reps=10).profile
    result = _finish(profile, Lift.SQUAT, reps=1, day=1)

    assert not result.new_personal_record
    assert result.profile.personal_records.squat == 207


def test_missing_amrap_reps_rejected():
    profile = _make_profile()
    workout = generate_workout(profile, Lift.SQUAT)
    with pytest.raises(InvalidArgumentError):
        complete_workout(profile, workout, completed_at=START)


def test_assistance_is_saved_as_custom_template():
    profile = _make_profile()
    workout = generate_workout(profile, Lift.SQUAT)
    workout.sets[2].actual_reps = 5
    pushups = new_assistance_exercise("Push-ups", sets=3, reps=15)
    pushups.completed = [True, True, True]
    workout.assistance_work = [pushups]

    result = complete_workout(profile, workout, completed_at=START)

    saved = result.profile.custom_assistance[Lift.SQUAT]
    assert [ex.name for ex in saved] == ["Push-ups"]
    assert saved[0].completed == [False, False, False]
    assert result.entry.assistance_work[0].completed == [True, True, True]


def test_edit_does_not_touch_progression():
    done = _finish(_make_profile(), Lift.SQUAT, reps=5)
    profile = done.profile

    workout = workout_from_entry(done.entry)
    workout.sets[2].actual_reps = 6
    result = edit_workout(profile, done.entry.id, workout, duration=2400)

    assert result.profile.lift_progress == profile.lift_progress
    assert result.profile.one_rep_maxes == profile.one_rep_maxes
    assert result.profile.completed_workouts == profile.completed_workouts
    assert len(result.profile.history) == 1
    assert result.profile.history[0].sets[2].actual_reps == 6
    assert result.entry.date == done.entry.date
    assert result.entry.duration == 2400
    assert not result.cycle_completed


def test_edit_in_place_keeps_order():
    profile = _finish(_make_profile(), Lift.SQUAT, day=0).profile
    profile = _finish(profile, Lift.BENCH, day=1).profile
    squat_entry = profile.history[1]

    workout = workout_from_entry(squat_entry)
    workout.sets[2].actual_reps = 7
    edited = edit_workout(profile, squat_entry.id, workout).profile

    assert [h.id for h in edited.history] == [h.id for h in profile.history]
    assert edited.history[1].sets[2].actual_reps == 7
    assert edited.history[1].duration == squat_entry.duration


def test_edit_of_week_4_never_wraps_cycle():
    profile = _make_profile(lift_progress={Lift.SQUAT: LiftProgress(cycle=1, week=4)})
    done = _finish(profile, Lift.SQUAT)
    after = done.profile

    edited = edit_workout(after, done.entry.id, workout_from_entry(done.entry)).profile
    assert edited.progress_for(Lift.SQUAT) == LiftProgress(cycle=2, week=1)
    assert edited.one_rep_maxes.squat == 210


def test_edit_can_raise_personal_record():
    done = _finish(_make_profile(), Lift.SQUAT, reps=5)
    workout = workout_from_entry(done.entry)
    workout.sets[2].actual_reps = 12

    result = edit_workout(done.profile, done.entry.id, workout)
    assert result.new_personal_record
    # 155 x 12 -> 216.9 -> 217
    assert result.profile.personal_records.squat == 217


def test_edit_unknown_entry_rejected():
    profile = _make_profile()
    workout = generate_workout(profile, Lift.SQUAT)
    with pytest.raises(InvalidArgumentError):
        edit_workout(profile, "nope", workout)


def test_reset_progress():
    profile = _make_profile(lift_progress={Lift.SQUAT: LiftProgress(cycle=5, week=3)})
    profile = _finish(profile, Lift.SQUAT).profile

    reset = reset_progress(profile)
    for lift in Lift:
        assert reset.progress_for(lift) == LiftProgress(cycle=1, week=1)
    assert reset.history == profile.history
    assert reset.one_rep_maxes == profile.one_rep_maxes


def test_cycle_completion_is_logged(caplog):
    profile = _make_profile(lift_progress={Lift.SQUAT: LiftProgress(cycle=1, week=4)})
    with caplog.at_level(logging.INFO, logger="fivethreeone.progression"):
        _finish(profile, Lift.SQUAT)

    assert "Squat cycle 1 complete" in caplog.text
    record = next(r for r in caplog.records if "cycle 1 complete" in r.getMessage())
    assert record.fto_lift == "squat"


def test_completing_a_reopened_workout_edits_instead_of_advancing():
    done = _finish(_make_profile(), Lift.SQUAT, reps=5)
    profile = done.profile

    workout = workout_from_entry(done.entry)
    workout.sets[2].actual_reps = 9
    result = complete_workout(profile, workout, completed_at=START + timedelta(days=2))

    assert result.profile.progress_for(Lift.SQUAT) == LiftProgress(cycle=1, week=2)
    assert result.profile.completed_workouts == ["cycle1_week1_squat"]
    assert len(result.profile.history) == 1
    assert result.entry.id == done.entry.id
    assert result.entry.date == done.entry.date
    assert result.profile.history[0].sets[2].actual_reps == 9
    assert result.profile.one_rep_maxes == profile.one_rep_maxes


def test_completing_an_already_logged_id_does_not_advance():
    done = _finish(_make_profile(), Lift.SQUAT, reps=5)
    # same workout regenerated for week 1, not flagged as completed
    workout = generate_workout(_make_profile(), Lift.SQUAT)
    workout.sets[2].actual_reps = 6
    assert not workout.completed

    result = complete_workout(done.profile, workout, completed_at=START)
    assert result.profile.progress_for(Lift.SQUAT) == LiftProgress(cycle=1, week=2)
    assert result.profile.completed_workouts.count("cycle1_week1_squat") == 1
    assert not result.cycle_completed


def test_completed_workout_without_history_is_rejected():
    profile = _make_profile()
    workout = generate_workout(profile, Lift.SQUAT)
    workout.sets[2].actual_reps = 5
    workout.completed = True

    with pytest.raises(InvalidArgumentError):
        complete_workout(profile, workout, completed_at=START)


def test_week_can_be_redone_after_reset():
    profile = _finish(_make_profile(), Lift.SQUAT).profile
    reset = reset_progress(profile)
    assert reset.completed_workouts == []

    again = _finish(reset, Lift.SQUAT, day=7)
    assert again.profile.progress_for(Lift.SQUAT) == LiftProgress(cycle=1, week=2)
    assert len(again.profile.history) == 2
