"""Rounding to loadable weight increments."""

from __future__ import annotations

import math

from fivethreeone.errors import InvalidArgumentError

# Decimals kept beyond the step's own precision when stripping float noise
NOISE_DECIMALS = 6


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +inf (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _clean_decimals(step: float) -> int:
    # 2.5 -> 6, 0.001 -> 9, 1e-7 -> 13
    return NOISE_DECIMALS + max(0, -math.floor(math.log10(step)))


def round_to_step(value: float, step: float) -> float:
    """Round value to the nearest multiple of step, ties away from zero.

    round_to_step(101.25, 2.5) == 102.5
    round_to_step(102.5, 2.5) == 102.5
    """
    if not step > 0:
        raise InvalidArgumentError(f"rounding step must be > 0, got {step!r}")

    multiples = math.floor(abs(value) / step + 0.5)
    if not multiples:
        return 0.0
    # strips float noise like 65.00000000000001
    return math.copysign(round(multiples * step, _clean_decimals(step)), value)
