"helpers for SANE-style ranges and fixed-point numbers"

import math
from collections import namedtuple
from const import SANE_FIXED_SCALE_SHIFT

# quant == 0 means any value between min and max is valid
Range = namedtuple("Range", ["min", "max", "quant"])


def sane_fix(value):
    "convert a float to SANE_Fixed"
    return int(value * (1 << SANE_FIXED_SCALE_SHIFT))


def sane_unfix(value):
    "convert SANE_Fixed to a float"
    return value / (1 << SANE_FIXED_SCALE_SHIFT)


def range_eq(r_1, r_2):
    "return whether both ranges are the same"
    return r_1.min == r_2.min and r_1.max == r_2.max and r_1.quant == r_2.quant


def range_overlaps(r_1, r_2):
    "return whether the ranges have at least one value in common"
    return r_1.max >= r_2.min and r_2.max >= r_1.min


def range_fit(rng, value):
    """Fit value into the range: clamp it to [min, max] and, if the range is
    quantised, round it to the nearest min + k * quant"""
    if value < rng.min:
        return rng.min
    if value > rng.max:
        return rng.max
    if rng.quant == 0:
        return value
    value -= rng.min
    value = ((value + rng.quant // 2) // rng.quant) * rng.quant
    value += rng.min
    return min(value, rng.max)


def _step_up(rng, value):
    "smallest min + k * quant not below value"
    return rng.min - (rng.min - value) // rng.quant * rng.quant


def _step_down(rng, value):
    "largest min + k * quant not above value"
    return rng.min + (value - rng.min) // rng.quant * rng.quant


def range_merge(r_1, r_2):
    """Merge two ranges into a single range containing only values valid for
    both. Returns None if there is no such range."""
    if range_eq(r_1, r_2):
        return r_1

    if not range_overlaps(r_1, r_2):
        return None

    lower = max(r_1.min, r_2.min)
    upper = min(r_1.max, r_2.max)
    if r_1.quant == 0 and r_2.quant == 0:
        return Range(lower, upper, 0)

    # Only one of them is quantised: keep its steps inside the overlap
    if r_1.quant == 0 or r_2.quant == 0:
        if r_1.quant == 0:
            r_1, r_2 = r_2, r_1
        lower = _step_up(r_1, lower)
        upper = _step_down(r_1, upper)
        if lower > upper:
            return None
        return Range(lower, upper, r_1.quant)

    # Both quantised: find the first step of r_1 that is also a step of r_2,
    # then step with the least common multiple
    quant = r_1.quant * r_2.quant // math.gcd(r_1.quant, r_2.quant)
    lowest = _step_up(r_1, lower)
    for _ in range(quant // r_1.quant):
        if (lowest - r_2.min) % r_2.quant == 0:
            break
        lowest += r_1.quant
    else:
        return None
    if lowest > upper:
        return None
    return Range(lowest, _step_down(Range(lowest, upper, quant), upper), quant)
