import math

import pytest

from noise_engine import (
    Add, Blend, ConfigurationError, Constant, DimensionMismatchError, Max, Min,
    Multiply, Perlin, Power, Select, SuperSimplex,
)

from conftest import CountingSource


def test_arithmetic_combiners() -> None:
    a, b = Constant(0.5), Constant(-0.25)
    assert Add(a, b).get((1.0, 2.0)) == 0.25
    assert Multiply(a, b).get((1.0, 2.0)) == -0.125
    assert Max(a, b).get((1.0, 2.0)) == 0.5
    assert Min(a, b).get((1.0, 2.0)) == -0.25
    assert Power(a, Constant(2.0)).get((1.0, 2.0)) == 0.25


def test_add_follows_its_sources(points_2d) -> None:
    p1, p2 = Perlin(seed=1), Perlin(seed=2)
    node = Add(p1, p2)
    for point in points_2d:
        assert node.get(point) == p1.get(point) + p2.get(point)


def test_power_of_negative_base_is_nan_not_an_error() -> None:
    assert math.isnan(Power(Constant(-0.5), Constant(0.5)).get((0.0, 0.0)))
    assert Power(Constant(-0.5), Constant(2.0)).get((0.0, 0.0)) == 0.25


def test_combined_dimensions_are_the_intersection() -> None:
    assert Add(Perlin(), SuperSimplex()).dims == frozenset({2, 3})
    with pytest.raises(DimensionMismatchError):
        Add(Perlin(), SuperSimplex()).get((0.1, 0.2, 0.3, 0.4))


def test_disjoint_dimensions_fail_at_construction() -> None:
    with pytest.raises(DimensionMismatchError):
        Multiply(CountingSource(dims={2}), CountingSource(dims={3, 4}))


def test_rejects_non_nodes() -> None:
    with pytest.raises(ConfigurationError):
        Add(Perlin(), 0.5)


def test_blend_interpolates_linearly() -> None:
    node = Blend(Constant(-1.0), Constant(1.0), Constant(0.25))
    assert node.get((0.0, 0.0)) == -0.5


def test_select_switches_on_control() -> None:
    low, high = Constant(-1.0), Constant(1.0)
    assert Select(low, high, Constant(0.5)).get((0.0, 0.0)) == 1.0
    assert Select(low, high, Constant(1.5)).get((0.0, 0.0)) == -1.0
    assert Select(low, high, Constant(-0.5), lower=-1.0, upper=0.0).get((0.0, 0.0)) == 1.0


def test_select_falloff_blends_around_bounds() -> None:
    low, high = Constant(-1.0), Constant(1.0)
    at_lower = Select(low, high, Constant(0.0), lower=0.0, upper=1.0, falloff=0.2)
    assert at_lower.get((0.0, 0.0)) == pytest.approx(0.0)
    inside = Select(low, high, Constant(0.5), lower=0.0, upper=1.0, falloff=0.2)
    assert inside.get((0.0, 0.0)) == 1.0
    outside = Select(low, high, Constant(1.3), lower=0.0, upper=1.0, falloff=0.2)
    assert outside.get((0.0, 0.0)) == -1.0
    near_upper = Select(low, high, Constant(0.9), lower=0.0, upper=1.0, falloff=0.2)
    assert -1.0 < near_upper.get((0.0, 0.0)) < 1.0


def test_select_only_evaluates_the_chosen_source() -> None:
    unused = CountingSource()
    node = Select(unused, Constant(0.0), Constant(0.5))
    node.get((1.0, 1.0))
    assert unused.calls == 0


@pytest.mark.parametrize(
    "options",
    [
        {"lower": 1.0, "upper": 0.0},
        {"falloff": -0.1},
        {"falloff": 0.6},
    ],
)
def test_select_rejects_bad_bounds(options) -> None:
    with pytest.raises(ConfigurationError):
        Select(Constant(0.0), Constant(1.0), Constant(0.5), **options)
