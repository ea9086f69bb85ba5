from fivethreeone.calculator import (
    estimated_one_rep_max, reps_to_exceed, set_weight, training_max,
)
from fivethreeone.errors import FiveThreeOneError, InvalidArgumentError
from fivethreeone.generator import generate_cycle_workouts, generate_workout
from fivethreeone.models import (
    AssistanceExercise, AssistanceTemplate, Lift, LiftProgress, LiftValues,
    Profile, Settings, Unit, Workout, WorkoutHistoryEntry, WorkoutSet,
)
from fivethreeone.plates import load_bar, solve_plates
from fivethreeone.progression import complete_workout, edit_workout, reset_progress
from fivethreeone.rounding import round_to_step
from fivethreeone.weeks import expand_week

__all__ = [
    "round_to_step",
    "training_max", "set_weight", "estimated_one_rep_max", "reps_to_exceed",
    "expand_week", "solve_plates", "load_bar",
    "generate_workout", "generate_cycle_workouts",
    "complete_workout", "edit_workout", "reset_progress",
    "Lift", "Unit", "AssistanceTemplate", "LiftValues", "LiftProgress", "Settings",
    "WorkoutSet", "AssistanceExercise", "Workout", "WorkoutHistoryEntry", "Profile",
    "FiveThreeOneError", "InvalidArgumentError",
]
