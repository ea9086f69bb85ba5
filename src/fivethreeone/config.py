"""Program constants and runtime configuration.

Domain tables live here so they can be tuned without touching the
progression or generator code. Runtime settings (logging, default profile
path) are read from FIVETHREEONE_* environment variables.
"""

import os
from dataclasses import dataclass

LOG_FORMATS = ("text", "json")

DEFAULT_TM_PERCENTAGE = 0.9
DEFAULT_ROUNDING = 5.0

# 1RM added to a lift when it wraps from week 4 to the next cycle.
# unit -> (upper body, lower body). Bench/OHP are upper, squat/deadlift lower.
CYCLE_INCREMENTS: dict[str, tuple[float, float]] = {
    "lb": (5.0, 10.0),
    "kg": (2.5, 5.0),
}

# Boring But Big: 5 x 10 @ 50% TM
BBB_SETS = 5
BBB_REPS = 10
BBB_PERCENTAGE = 0.5

BAR_WEIGHTS: dict[str, float] = {"lb": 45.0, "kg": 20.0}

# Largest first; the plate solver walks them in this order.
PLATE_SIZES: dict[str, tuple[float, ...]] = {
    "lb": (45.0, 35.0, 25.0, 10.0, 5.0, 2.5),
    "kg": (20.0, 15.0, 10.0, 5.0, 2.5, 1.25),
}

# Physical plate counts (both sides together) for a fresh profile.
DEFAULT_PLATE_INVENTORY: dict[str, dict[float, int]] = {
    "lb": {45.0: 12, 35.0: 0, 25.0: 12, 10.0: 12, 5.0: 12, 2.5: 12},
    "kg": {20.0: 12, 15.0: 12, 10.0: 12, 5.0: 12, 2.5: 12, 1.25: 12},
}

DEFAULT_PROFILE_PATH = "fivethreeone-profile.json"


@dataclass(frozen=True)
class Config:
    log_format: str = "text"
    log_level: str = "WARNING"
    profile_path: str = DEFAULT_PROFILE_PATH

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("FIVETHREEONE_LOG_FORMAT", "text")
        if log_format not in LOG_FORMATS:
            raise RuntimeError("FIVETHREEONE_LOG_FORMAT must be 'text' or 'json'")

        return cls(
            log_format=log_format,
            log_level=os.environ.get("FIVETHREEONE_LOG_LEVEL", "WARNING").upper(),
            profile_path=os.environ.get("FIVETHREEONE_PROFILE", DEFAULT_PROFILE_PATH),
        )
