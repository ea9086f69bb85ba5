"""Assistance exercise library, grouped the way 5/3/1 picks accessories."""

from __future__ import annotations

from dataclasses import dataclass

from fivethreeone.models import AssistanceExercise


@dataclass(frozen=True)
class LibraryExercise:
    name: str
    category: str  # Push, Pull, Single Leg/Core


EXERCISE_LIBRARY: tuple[LibraryExercise, ...] = (
    # Push
    LibraryExercise("Dips", "Push"),
    LibraryExercise("Push-ups", "Push"),
    LibraryExercise("Dumbbell Bench Press", "Push"),
    LibraryExercise("Dumbbell Incline Press", "Push"),
    LibraryExercise("Dumbbell Overhead Press", "Push"),
    LibraryExercise("Triceps Pushdowns", "Push"),
    LibraryExercise("Close Grip Bench Press", "Push"),
    # Pull
    LibraryExercise("Chin-ups", "Pull"),
    LibraryExercise("Pull-ups", "Pull"),
    LibraryExercise("Dumbbell Rows", "Pull"),
    LibraryExercise("Barbell Rows", "Pull"),
    LibraryExercise("Face Pulls", "Pull"),
    LibraryExercise("Lat Pulldowns", "Pull"),
    LibraryExercise("Curls", "Pull"),
    # Single Leg / Core
    LibraryExercise("Lunges", "Single Leg/Core"),
    LibraryExercise("Bulgarian Split Squats", "Single Leg/Core"),
    LibraryExercise("Leg Press", "Single Leg/Core"),
    LibraryExercise("Hanging Leg Raises", "Single Leg/Core"),
    LibraryExercise("Ab Wheel Rollouts", "Single Leg/Core"),
    LibraryExercise("Planks", "Single Leg/Core"),
    LibraryExercise("Back Extensions", "Single Leg/Core"),
)

CATEGORIES: tuple[str, ...] = ("Push", "Pull", "Single Leg/Core")


def exercises_in_category(category: str) -> list[str]:
    return [ex.name for ex in EXERCISE_LIBRARY if ex.category == category]


def new_assistance_exercise(
    name: str,
    sets: int = 5,
    reps: int = 10,
    weight: float | None = None,
) -> AssistanceExercise:
    """A fresh accessory entry with every set not yet done."""
    return AssistanceExercise(name=name, sets=sets, reps=reps, weight=weight)
