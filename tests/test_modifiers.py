import math

import pytest

from noise_engine import (
    Abs, Clamp, ConfigurationError, Constant, Curve, Exponent, Invert, Negate,
    Perlin, ScaleBias, Terrace,
)


def _at(node):
    return node.get((0.0, 0.0))


def test_simple_modifiers() -> None:
    assert _at(Abs(Constant(-0.5))) == 0.5
    assert _at(Negate(Constant(0.5))) == -0.5
    assert _at(Invert(Constant(-0.75))) == 0.75
    assert _at(ScaleBias(Constant(0.5), scale=2.0, bias=0.25)) == 1.25
    assert _at(Clamp(Constant(3.0))) == 1.0
    assert _at(Clamp(Constant(-3.0), lower=-0.5, upper=0.5)) == -0.5
    assert _at(Clamp(Constant(0.2), lower=-0.5, upper=0.5)) == 0.2


def test_exponent_keeps_the_sign() -> None:
    assert _at(Exponent(Constant(-0.5), exponent=2.0)) == -0.25
    assert _at(Exponent(Constant(0.25), exponent=0.5)) == 0.5
    assert _at(Exponent(Constant(0.0), exponent=3.0)) == 0.0


def test_clamp_bounds_noise(points_2d) -> None:
    node = Clamp(ScaleBias(Perlin(seed=2), scale=4.0), lower=-0.5, upper=0.5)
    for point in points_2d:
        assert -0.5 <= node.get(point) <= 0.5


def test_clamp_rejects_inverted_bounds() -> None:
    with pytest.raises(ConfigurationError):
        Clamp(Constant(0.0), lower=1.0, upper=-1.0)


CURVE_POINTS = [(-1.0, -1.0), (-0.5, 0.0), (0.0, 0.5), (0.5, 0.75), (1.0, 1.0)]


def test_curve_passes_through_control_points() -> None:
    for x, y in CURVE_POINTS:
        assert _at(Curve(Constant(x), CURVE_POINTS)) == pytest.approx(y)


def test_curve_clamps_outside_its_range() -> None:
    assert _at(Curve(Constant(-5.0), CURVE_POINTS)) == -1.0
    assert _at(Curve(Constant(5.0), CURVE_POINTS)) == 1.0


def test_curve_is_smooth_between_points() -> None:
    value = _at(Curve(Constant(0.25), CURVE_POINTS))
    assert 0.5 < value < 0.75


def test_curve_add_control_point_keeps_order() -> None:
    curve = Curve(Constant(0.0), CURVE_POINTS[:4]).add_control_point(1.0, 1.0)
    assert curve.control_points == tuple(CURVE_POINTS)


@pytest.mark.parametrize(
    "points",
    [
        [],
        [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)],
        [(0.0, 0.0), (2.0, 1.0), (1.0, 2.0), (3.0, 3.0)],
        [(0.0, 0.0), (1.0, 1.0), (1.0, 2.0), (3.0, 3.0)],
        [(0.0, 0.0), (1.0, math.nan), (2.0, 2.0), (3.0, 3.0)],
    ],
)
def test_curve_rejects_bad_control_points(points) -> None:
    with pytest.raises(ConfigurationError):
        Curve(Constant(0.0), points)


TERRACES = [-1.0, 0.0, 1.0]


def test_terrace_hits_control_points_exactly() -> None:
    for value in TERRACES:
        assert _at(Terrace(Constant(value), TERRACES)) == value


def test_terrace_eases_quadratically() -> None:
    assert _at(Terrace(Constant(0.5), TERRACES)) == 0.25
    assert _at(Terrace(Constant(0.5), TERRACES, invert=True)) == 0.75


def test_terrace_snaps_outside_range() -> None:
    assert _at(Terrace(Constant(-4.0), TERRACES)) == -1.0
    assert _at(Terrace(Constant(4.0), TERRACES)) == 1.0


def test_terrace_builders() -> None:
    terrace = Terrace(Constant(0.5), [0.0, 1.0]).add_control_point(-1.0)
    assert terrace.control_points == (-1.0, 0.0, 1.0)
    assert terrace.invert_terraces().invert is True
    assert terrace.invert is False


@pytest.mark.parametrize("points", [[], [0.5], [1.0, 0.0], [0.0, 0.0, 1.0]])
def test_terrace_rejects_bad_control_points(points) -> None:
    with pytest.raises(ConfigurationError):
        Terrace(Constant(0.0), points)


def test_nan_passes_through() -> None:
    assert math.isnan(Terrace(Perlin(), TERRACES).get((math.nan, 0.0)))
    assert math.isnan(Curve(Perlin(), CURVE_POINTS).get((math.nan, 0.0)))
