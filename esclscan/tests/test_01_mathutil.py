"tests for SANE range helpers"

from mathutil import (
    Range,
    range_eq,
    range_overlaps,
    range_fit,
    range_merge,
    sane_fix,
    sane_unfix,
)


def test_fixed():
    "SANE fixed-point conversion"
    assert sane_fix(1) == 65536, "1.0"
    assert sane_fix(0.5) == 32768, "0.5"
    assert sane_fix(25.4) == 1664614, "truncated towards zero"
    assert sane_unfix(65536 * 3) == 3.0, "unfix"


def test_range_fit():
    "fit values into ranges"
    rng = Range(50, 600, 0)
    assert range_fit(rng, 1000) == 600, "clamp above"
    assert range_fit(rng, 10) == 50, "clamp below"
    assert range_fit(rng, 333) == 333, "unquantised value unchanged"

    #########################

    rng = Range(100, 600, 100)
    assert range_fit(rng, 249) == 200, "round down"
    assert range_fit(rng, 250) == 300, "round half up"
    assert range_fit(rng, 600) == 600, "max"

    #########################

    rng = Range(75, 600, 100)
    assert range_fit(rng, 130) == 175, "steps counted from min"
    assert range_fit(rng, 580) == 575, "last step below max"
    assert range_fit(rng, 599) == 575, "nearest step"
    assert range_fit(Range(0, 550, 100), 550) == 550, "rounding never exceeds max"


def test_range_merge():
    "merge x and y ranges"
    assert range_eq(Range(1, 2, 0), Range(1, 2, 0)), "equal"
    assert not range_eq(Range(1, 2, 0), Range(1, 2, 1)), "unequal quant"
    assert range_overlaps(Range(1, 5, 0), Range(5, 9, 0)), "touching ranges overlap"
    assert not range_overlaps(Range(1, 4, 0), Range(5, 9, 0)), "disjoint"

    #########################

    assert range_merge(Range(50, 600, 0), Range(50, 600, 0)) == Range(
        50, 600, 0
    ), "equal ranges"
    assert range_merge(Range(50, 600, 0), Range(100, 1200, 0)) == Range(
        100, 600, 0
    ), "same quant intersects bounds"
    assert range_merge(Range(0, 300, 100), Range(50, 250, 0)) == Range(
        100, 200, 100
    ), "steps of the quantised range inside the overlap"
    assert range_merge(Range(50, 250, 0), Range(0, 300, 100)) == Range(
        100, 200, 100
    ), "order does not matter"
    assert range_merge(Range(0, 600, 100), Range(120, 180, 0)) is None, "no step in overlap"
    assert range_merge(Range(0, 600, 100), Range(0, 600, 150)) == Range(
        0, 600, 300
    ), "least common multiple"
    assert range_merge(Range(0, 600, 100), Range(50, 600, 150)) == Range(
        200, 500, 300
    ), "first value on both steps when the minimums differ"
    assert range_merge(Range(10, 100, 20), Range(30, 100, 20)) == Range(
        30, 90, 20
    ), "same quant, aligned minimums"
    assert range_merge(Range(0, 100, 20), Range(10, 100, 20)) is None, "same quant, offset steps"
    assert range_merge(Range(50, 100, 0), Range(200, 600, 0)) is None, "disjoint"
    assert range_merge(Range(0, 150, 100), Range(110, 190, 40)) is None, "no common step"
