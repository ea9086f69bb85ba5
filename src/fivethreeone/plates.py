"""Plate math: which plates go on each side of the bar.

The solver is greedy. With a limited inventory it takes the largest plate
it still has a pair of and never backtracks, so a heavy target can end up
short (e.g. 225 lb with a single pair of 45s loads 45, 25, 10, 5, 2.5 per
side and leaves 5 lb unaccounted for). Callers must not assume the plates
sum to the target.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from fivethreeone.config import BAR_WEIGHTS, PLATE_SIZES
from fivethreeone.models import Settings


def solve_plates(
    target_total_weight: float,
    bar_weight: float,
    plate_sizes: Sequence[float],
    inventory: Mapping[float, int] | None = None,
) -> list[float]:
    """Plates for ONE side of the bar, heaviest first.

    ``inventory`` counts physical plates across both sides, so each plate
    listed here uses two of them. Without an inventory supply is unlimited.
    """
    per_side = (target_total_weight - bar_weight) / 2
    if per_side <= 0:
        return []

    remaining_stock = dict(inventory) if inventory is not None else None
    plates: list[float] = []
    remaining = per_side

    for plate in sorted(plate_sizes, reverse=True):
        while remaining >= plate:
            if remaining_stock is not None:
                if remaining_stock.get(plate, 0) < 2:
                    break
                remaining_stock[plate] -= 2
            plates.append(plate)
            remaining -= plate

    return plates


@dataclass(frozen=True)
class PlateLoading:
    target: float
    bar_weight: float
    per_side: list[float]

    @property
    def loaded_total(self) -> float:
        return self.bar_weight + 2 * sum(self.per_side)

    @property
    def residual(self) -> float:
        """Weight the available plates could not represent."""
        return max(0.0, round(self.target - self.loaded_total, 6))


def load_bar(weight: float, settings: Settings) -> PlateLoading:
    """Plate loading for ``weight`` using the profile's unit and inventory."""
    unit = settings.unit.value
    bar = BAR_WEIGHTS[unit]
    plates = solve_plates(weight, bar, PLATE_SIZES[unit], settings.inventory)
    return PlateLoading(target=weight, bar_weight=bar, per_side=plates)


def format_plates(plates: Sequence[float]) -> str:
    """Format plate list as readable string: '45 + 25 + 2.5'"""
    if not plates:
        return "empty bar"
    parts = []
    for p in plates:
        display = str(int(p)) if p == int(p) else str(p)
        parts.append(display)
    return " + ".join(parts)
