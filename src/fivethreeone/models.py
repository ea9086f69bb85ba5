"""Profile data model: lifts, settings, workouts and history.

Everything the engine reads or produces is a pydantic model so that the
profile snapshot can be handed to (and taken back from) a key-value store
as plain JSON. Snapshots use the camelCase keys of the persisted blob
(``oneRepMaxes``, ``liftProgress`` ...); Python code uses snake_case.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from fivethreeone.config import (
    DEFAULT_PLATE_INVENTORY,
    DEFAULT_ROUNDING,
    DEFAULT_TM_PERCENTAGE,
)
from fivethreeone.errors import InvalidArgumentError


class Lift(str, Enum):
    SQUAT = "squat"
    BENCH = "bench"
    DEADLIFT = "deadlift"
    OHP = "ohp"

    @property
    def label(self) -> str:
        return _LIFT_LABELS[self]

    @property
    def is_upper_body(self) -> bool:
        return self in (Lift.BENCH, Lift.OHP)

    @classmethod
    def parse(cls, value: str | Lift) -> Lift:
        """Accept "squat", "Squat", "OHP" etc. Raises InvalidArgumentError."""
        if isinstance(value, Lift):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"unknown lift: {value!r}") from None


_LIFT_LABELS = {
    Lift.SQUAT: "Squat",
    Lift.BENCH: "Bench",
    Lift.DEADLIFT: "Deadlift",
    Lift.OHP: "OHP",
}


class Unit(str, Enum):
    LB = "lb"
    KG = "kg"


class AssistanceTemplate(str, Enum):
    NONE = "None"
    BORING_BUT_BIG = "BoringButBig"
    CUSTOM = "Custom"


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LiftValues(_Model):
    """One number per main lift (1RMs, personal records)."""

    squat: float = Field(default=0.0, ge=0)
    bench: float = Field(default=0.0, ge=0)
    deadlift: float = Field(default=0.0, ge=0)
    ohp: float = Field(default=0.0, ge=0)

    @field_validator("squat", "bench", "deadlift", "ohp", mode="before")
    @classmethod
    def missing_is_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    def get(self, lift: Lift) -> float:
        return getattr(self, lift.value)

    def with_value(self, lift: Lift, value: float) -> LiftValues:
        return self.model_copy(update={lift.value: value})


def _default_inventory() -> dict[Unit, dict[float, int]]:
    return {Unit(unit): dict(plates) for unit, plates in DEFAULT_PLATE_INVENTORY.items()}


class Settings(_Model):
    model_config = ConfigDict(frozen=True)

    training_max_percentage: float = DEFAULT_TM_PERCENTAGE
    rounding: float = DEFAULT_ROUNDING
    unit: Unit = Unit.LB
    plate_inventory: dict[Unit, dict[float, int]] = Field(default_factory=_default_inventory)
    # unit -> (upper body, lower body); None uses config.CYCLE_INCREMENTS
    cycle_increments: dict[Unit, tuple[float, float]] | None = None

    @field_validator("training_max_percentage")
    @classmethod
    def tm_percentage_in_range(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("training max percentage must be in (0, 1]")
        return v

    @field_validator("rounding")
    @classmethod
    def rounding_positive(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("rounding step must be > 0")
        return v

    @property
    def inventory(self) -> dict[float, int] | None:
        """Plate inventory for the active unit, if one is configured."""
        return self.plate_inventory.get(self.unit)


class LiftProgress(_Model):
    cycle: int = Field(default=1, ge=1)
    week: int = Field(default=1, ge=1, le=4)


class WorkoutSet(_Model):
    weight: float = 0.0
    reps: int
    percentage: float | None = None
    is_amrap: bool = False
    completed: bool = False
    actual_reps: int | None = None


class AssistanceExercise(_Model):
    name: str
    sets: int = Field(ge=1)
    reps: int = Field(ge=0)
    weight: float | None = None
    completed: list[bool] = []
    actual_reps: list[int] | None = None
    actual_weights: list[float] | None = None

    @model_validator(mode="after")
    def one_flag_per_set(self) -> AssistanceExercise:
        if not self.completed:
            self.completed = [False] * self.sets
        return self

    def reset(self) -> AssistanceExercise:
        """Copy with every set marked not done and no recorded performance."""
        return self.model_copy(
            update={
                "completed": [False] * self.sets,
                "actual_reps": None,
                "actual_weights": None,
            }
        )


class Workout(_Model):
    id: str
    name: str
    lift: Lift
    cycle: int = Field(ge=1)
    week: int = Field(ge=1, le=4)
    sets: list[WorkoutSet]
    assistance_work: list[AssistanceExercise] = []
    completed: bool = False
    training_max: float = 0.0
    reps_to_beat: int | None = None

    @field_validator("lift", mode="before")
    @classmethod
    def lift_any_case(cls, v: Any) -> Lift:
        return Lift.parse(v)

    @property
    def amrap_set(self) -> WorkoutSet | None:
        return next((s for s in self.sets if s.is_amrap), None)


class WorkoutHistoryEntry(_Model):
    id: str
    date: datetime
    workout_id: str
    workout_name: str
    lift: Lift
    cycle: int
    week: int
    sets: list[WorkoutSet]
    assistance_work: list[AssistanceExercise] = []
    estimated_one_rep_max: float | None = None
    duration: int = 0  # seconds
    completed: bool = True

    # older app versions saved the display name ("Squat")
    @field_validator("lift", mode="before")
    @classmethod
    def lift_any_case(cls, v: Any) -> Lift:
        return Lift.parse(v)


def _fresh_progress() -> dict[Lift, LiftProgress]:
    return {lift: LiftProgress() for lift in Lift}


def _pick(data: dict, name: str) -> Any:
    if name in data:
        return data[name]
    return data.get(to_camel(name))


class Profile(_Model):
    one_rep_maxes: LiftValues = Field(default_factory=LiftValues)
    lift_progress: dict[Lift, LiftProgress] = Field(default_factory=_fresh_progress)
    completed_workouts: list[str] = []
    settings: Settings = Field(default_factory=Settings)
    history: list[WorkoutHistoryEntry] = []
    assistance_template: AssistanceTemplate = AssistanceTemplate.NONE
    custom_assistance: dict[Lift, list[AssistanceExercise]] = {}
    personal_records: LiftValues = Field(default_factory=LiftValues)

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        # Older blobs kept one global cycle/week instead of per-lift progress
        if _pick(data, "lift_progress") is None and (
            "currentCycle" in data or "currentWeek" in data
        ):
            cycle = data.get("currentCycle") or 1
            week = data.get("currentWeek") or 1
            data["lift_progress"] = {
                lift.value: {"cycle": cycle, "week": week} for lift in Lift
            }
            data.pop("liftProgress", None)

        # Personal records start from the entered 1RMs
        if _pick(data, "personal_records") is None:
            maxes = _pick(data, "one_rep_maxes")
            data.pop("personalRecords", None)
            if isinstance(maxes, BaseModel):
                data["personal_records"] = maxes.model_copy()
            elif maxes is not None:
                data["personal_records"] = dict(maxes)
        return data

    @model_validator(mode="after")
    def every_lift_has_progress(self) -> Profile:
        for lift in Lift:
            self.lift_progress.setdefault(lift, LiftProgress())
        return self

    def progress_for(self, lift: Lift) -> LiftProgress:
        return self.lift_progress.get(lift) or LiftProgress()

    def find_entry(self, entry_id: str) -> WorkoutHistoryEntry | None:
        return next((h for h in self.history if h.id == entry_id), None)

    def to_snapshot(self) -> dict[str, Any]:
        """Plain JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> Profile:
        return cls.model_validate(data)
