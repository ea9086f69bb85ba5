"""CLI interface for the 5/3/1 progression engine."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn

import click
from pydantic import ValidationError

from fivethreeone.assistance import CATEGORIES, exercises_in_category
from fivethreeone.calculator import estimated_one_rep_max, reps_to_exceed, training_max
from fivethreeone.config import Config
from fivethreeone.errors import FiveThreeOneError
from fivethreeone.generator import generate_cycle_workouts, generate_workout
from fivethreeone.logging import setup_logging
from fivethreeone.models import (
    AssistanceTemplate,
    Lift,
    LiftValues,
    Profile,
    Settings,
    Unit,
    Workout,
)
from fivethreeone.plates import format_plates, load_bar
from fivethreeone.progression import complete_workout
from fivethreeone.weeks import expand_week, week_name

logger = logging.getLogger(__name__)

LIFT_CHOICE = click.Choice([lift.value for lift in Lift], case_sensitive=False)


def _fmt(weight: float) -> str:
    return str(int(weight)) if weight == int(weight) else str(weight)


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_profile(path: Path) -> Profile:
    if not path.exists():
        _fail(f"No profile at {path}. Run 'fivethreeone init' first.")
    with path.open() as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            _fail(f"{path} is not valid JSON: {e}")
    return Profile.from_snapshot(data)


def _save_profile(profile: Profile, path: Path) -> None:
    with path.open("w") as f:
        json.dump(profile.to_snapshot(), f, indent=2, ensure_ascii=False)
    logger.debug("Wrote profile to %s", path)


def _echo_workout(workout: Workout, unit: str) -> None:
    click.echo(
        f"{workout.name} | Cycle {workout.cycle} Week {workout.week} "
        f"({week_name(workout.week)}) | TM {_fmt(workout.training_max)} {unit}"
    )
    for s in workout.sets:
        reps = f"{s.reps}+" if s.is_amrap else str(s.reps)
        click.echo(f"  {_fmt(s.weight)} {unit} x {reps} ({round((s.percentage or 0) * 100)}%)")
    if workout.reps_to_beat:
        click.echo(f"  Reps to beat your best: {workout.reps_to_beat}")
    for ex in workout.assistance_work:
        weight = f" @ {_fmt(ex.weight)} {unit}" if ex.weight is not None else ""
        click.echo(f"  + {ex.name}: {ex.sets} x {ex.reps}{weight}")


@click.group()
@click.pass_context
def main(ctx: click.Context):
    """5/3/1 training calculator and progression tracker."""
    config = Config.from_env()
    setup_logging(config.log_format, config.log_level)
    ctx.obj = config


def _profile_option(f):
    return click.option(
        "--profile", "profile_path",
        type=click.Path(path_type=Path),
        help="Profile JSON file (default: $FIVETHREEONE_PROFILE).",
    )(f)


def _resolve_profile_path(ctx: click.Context, profile_path: Path | None) -> Path:
    return profile_path or Path(ctx.obj.profile_path)


@main.command()
@click.option("--one-rep-max", type=float, required=True, help="Current 1RM.")
@click.option("--week", type=int, required=True, help="Week of the cycle (1-4).")
@click.option("--tm-percentage", type=float, default=0.9, show_default=True)
@click.option("--rounding", type=float, default=5.0, show_default=True)
def week(one_rep_max: float, week: int, tm_percentage: float, rounding: float):
    """Print the three main-lift sets for one week."""
    try:
        tm = training_max(one_rep_max, tm_percentage, rounding)
        sets = expand_week(tm, week, rounding)
        name = week_name(week)
    except FiveThreeOneError as e:
        _fail(str(e))

    click.echo(f"Week {week} ({name}) | TM {_fmt(tm)}")
    for s in sets:
        reps = f"{s.reps}+" if s.is_amrap else str(s.reps)
        click.echo(f"  {_fmt(s.weight)} x {reps} ({round(s.percentage * 100)}%)")


@main.command()
@click.option("--squat", type=float, default=0.0)
@click.option("--bench", type=float, default=0.0)
@click.option("--deadlift", type=float, default=0.0)
@click.option("--ohp", type=float, default=0.0)
@click.option("--tm-percentage", type=float, default=0.9, show_default=True)
@click.option("--rounding", type=float, default=2.5, show_default=True)
@click.option("--cycle", "cycle_number", type=int, default=1, show_default=True)
def cycle(
    squat: float,
    bench: float,
    deadlift: float,
    ohp: float,
    tm_percentage: float,
    rounding: float,
    cycle_number: int,
):
    """Print every workout of a cycle."""
    try:
        maxes = LiftValues(squat=squat, bench=bench, deadlift=deadlift, ohp=ohp)
        workouts = generate_cycle_workouts(maxes, tm_percentage, rounding, cycle_number)
    except (FiveThreeOneError, ValidationError) as e:
        _fail(str(e))

    for workout in workouts:
        sets = ", ".join(
            f"{_fmt(s.weight)}x{s.reps}{'+' if s.is_amrap else ''}" for s in workout.sets
        )
        click.echo(f"W{workout.week} {workout.lift.label:<8} {sets}")


@main.command()
@click.argument("weight", type=float)
@click.option(
    "--unit", type=click.Choice([u.value for u in Unit]), default="lb", show_default=True,
)
def plates(weight: float, unit: str):
    """Show the plates to load on each side for WEIGHT."""
    loading = load_bar(weight, Settings(unit=Unit(unit)))
    click.echo(f"Bar {_fmt(loading.bar_weight)} {unit} + per side: {format_plates(loading.per_side)}")
    if loading.residual:
        click.echo(f"Not loadable with standard plates: {_fmt(loading.residual)} {unit}")


@main.command()
@click.argument("weight", type=float)
@click.argument("reps", type=int)
@click.option("--best", type=float, help="Current best estimated 1RM to beat.")
def e1rm(weight: float, reps: int, best: float | None):
    """Estimate a 1RM from WEIGHT lifted for REPS."""
    click.echo(f"Estimated 1RM: {_fmt(estimated_one_rep_max(weight, reps))}")
    if best is not None:
        click.echo(f"Reps at {_fmt(weight)} to beat {_fmt(best)}: {reps_to_exceed(weight, best)}")


@main.command()
@_profile_option
@click.option("--squat", type=float, default=0.0)
@click.option("--bench", type=float, default=0.0)
@click.option("--deadlift", type=float, default=0.0)
@click.option("--ohp", type=float, default=0.0)
@click.option("--unit", type=click.Choice([u.value for u in Unit]), default="lb", show_default=True)
@click.option("--rounding", type=float, default=5.0, show_default=True)
@click.option("--tm-percentage", type=float, default=0.9, show_default=True)
@click.option(
    "--assistance",
    type=click.Choice([t.value for t in AssistanceTemplate]),
    default=AssistanceTemplate.NONE.value,
    show_default=True,
)
@click.option("--force", is_flag=True, help="Overwrite an existing profile.")
@click.pass_context
def init(
    ctx: click.Context,
    profile_path: Path | None,
    squat: float,
    bench: float,
    deadlift: float,
    ohp: float,
    unit: str,
    rounding: float,
    tm_percentage: float,
    assistance: str,
    force: bool,
):
    """Create a new profile starting at cycle 1, week 1."""
    path = _resolve_profile_path(ctx, profile_path)
    if path.exists() and not force:
        _fail(f"{path} already exists. Use --force to overwrite.")

    try:
        profile = Profile(
            one_rep_maxes=LiftValues(squat=squat, bench=bench, deadlift=deadlift, ohp=ohp),
            settings=Settings(
                unit=Unit(unit), rounding=rounding, training_max_percentage=tm_percentage,
            ),
            assistance_template=AssistanceTemplate(assistance),
        )
    except ValidationError as e:
        _fail(str(e))

    _save_profile(profile, path)
    click.echo(f"Wrote new profile to {path}")


@main.command("next")
@_profile_option
@click.argument("lift", type=LIFT_CHOICE)
@click.pass_context
def next_workout(ctx: click.Context, profile_path: Path | None, lift: str):
    """Show the next workout for LIFT."""
    try:
        profile = _load_profile(_resolve_profile_path(ctx, profile_path))
        workout = generate_workout(profile, Lift.parse(lift))
    except (FiveThreeOneError, ValidationError) as e:
        _fail(str(e))

    _echo_workout(workout, profile.settings.unit.value)
    amrap = workout.amrap_set
    if amrap is not None:
        loading = load_bar(amrap.weight, profile.settings)
        click.echo(f"  Plates for {_fmt(amrap.weight)}: {format_plates(loading.per_side)} per side")


@main.command()
@_profile_option
@click.argument("lift", type=LIFT_CHOICE)
@click.option("--amrap-reps", type=int, help="Reps performed on the AMRAP set.")
@click.option("--duration", type=int, default=0, help="Workout duration in seconds.")
@click.option(
    "--date", "completed_at",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]),
    help="Completion date (default: now).",
)
@click.pass_context
def complete(
    ctx: click.Context,
    profile_path: Path | None,
    lift: str,
    amrap_reps: int | None,
    duration: int,
    completed_at: datetime | None,
):
    """Finish the current workout for LIFT and advance its progression."""
    path = _resolve_profile_path(ctx, profile_path)
    when = completed_at.replace(tzinfo=timezone.utc) if completed_at else datetime.now(timezone.utc)

    try:
        profile = _load_profile(path)
        workout = generate_workout(profile, Lift.parse(lift))
        for s in workout.sets:
            s.completed = True
            if s.is_amrap and amrap_reps is not None:
                s.actual_reps = amrap_reps
        result = complete_workout(profile, workout, completed_at=when, duration=duration)
    except (FiveThreeOneError, ValidationError) as e:
        _fail(str(e))

    _save_profile(result.profile, path)

    entry = result.entry
    click.echo(f"Logged {entry.workout_name} (cycle {entry.cycle}, week {entry.week}).")
    if entry.estimated_one_rep_max is not None:
        click.echo(f"Estimated 1RM: {_fmt(entry.estimated_one_rep_max)}")
    if result.new_personal_record:
        click.echo("New personal record!")
    if result.cycle_completed:
        click.echo(f"Cycle complete! 1RM +{_fmt(result.one_rep_max_increase)} for next cycle.")
    elif result.deload_next:
        click.echo("Week 3 complete. Next week is a deload week.")


@main.command("assistance")
def list_assistance():
    """List the assistance exercise library."""
    for category in CATEGORIES:
        click.echo(f"{category}:")
        for name in exercises_in_category(category):
            click.echo(f"  {name}")
