import math

import numpy as np
import pytest

from noise_engine import (
    ConfigurationError, Constant, CyclePoint, DimensionMismatchError, Displace, Perlin,
    RotatePoint, ScalePoint, SuperSimplex, TranslatePoint, Turbulence,
)
from noise_engine.nodes.base import NoiseFn


class PointRecorder(NoiseFn):
    """Records the last point it was asked for."""

    def __init__(self):
        self.seen = None

    def _get(self, point):
        self.seen = point
        return 0.0


def test_translate_point() -> None:
    recorder = PointRecorder()
    TranslatePoint(recorder, x=1.0, y=-2.0, z=0.5).get((1.0, 1.0, 1.0))
    assert recorder.seen == (2.0, -1.0, 1.5)


def test_scale_point() -> None:
    recorder = PointRecorder()
    ScalePoint(recorder, scale=2.0, y=0.5).get((1.0, 4.0, 3.0, -1.0))
    assert recorder.seen == (2.0, 2.0, 6.0, -2.0)


def test_rotate_2d_uses_z_angle() -> None:
    recorder = PointRecorder()
    RotatePoint(recorder, z_angle=90.0).get((1.0, 0.0))
    assert recorder.seen == pytest.approx((0.0, 1.0))


def test_rotate_3d_about_each_axis() -> None:
    recorder = PointRecorder()
    RotatePoint(recorder, x_angle=90.0).get((0.0, 1.0, 0.0))
    assert recorder.seen == pytest.approx((0.0, 0.0, 1.0))
    RotatePoint(recorder, y_angle=90.0).get((0.0, 0.0, 1.0))
    assert recorder.seen == pytest.approx((1.0, 0.0, 0.0))
    RotatePoint(recorder, z_angle=180.0).get((1.0, 2.0, 3.0))
    assert recorder.seen == pytest.approx((-1.0, -2.0, 3.0))


def test_rotate_4d_preserves_length() -> None:
    recorder = PointRecorder()
    RotatePoint(recorder, 10.0, 20.0, 30.0, 40.0).get((1.0, 2.0, 3.0, 4.0))
    assert math.hypot(*recorder.seen) == pytest.approx(math.hypot(1.0, 2.0, 3.0, 4.0))


def test_rotate_zero_is_identity(points_2d) -> None:
    perlin = Perlin(seed=3)
    rotated = RotatePoint(perlin)
    for point in points_2d:
        assert rotated.get(point) == pytest.approx(perlin.get(point))


def test_displace_adds_displacer_output() -> None:
    recorder = PointRecorder()
    Displace(recorder, x=Constant(0.5), z=Constant(-1.0)).get((1.0, 1.0, 1.0))
    assert recorder.seen == (1.5, 1.0, 0.0)


def test_displace_limits_dimensions_to_its_axes() -> None:
    node = Displace(Perlin(), w=Constant(1.0))
    assert node.dims == frozenset({4})
    with pytest.raises(DimensionMismatchError):
        node.get((0.0, 0.0))


def test_displace_needs_a_displacer() -> None:
    with pytest.raises(ConfigurationError):
        Displace(Perlin())


def test_turbulence_moves_points_by_bounded_amount() -> None:
    recorder = PointRecorder()
    node = Turbulence(recorder, seed=4, power=0.25)
    node.get((3.3, 7.1))
    assert recorder.seen != (3.3, 7.1)
    assert abs(recorder.seen[0] - 3.3) <= 0.25 + 1e-9
    assert abs(recorder.seen[1] - 7.1) <= 0.25 + 1e-9


def test_turbulence_with_zero_power_is_identity(points_2d) -> None:
    perlin = Perlin(seed=1)
    node = Turbulence(perlin, power=0.0)
    for point in points_2d[:20]:
        assert node.get(point) == perlin.get(point)


def test_turbulence_is_deterministic(points_2d) -> None:
    a = Turbulence(Perlin(seed=2), seed=9, roughness=2)
    b = Turbulence(Perlin(seed=2), seed=9, roughness=2)
    for point in points_2d[:20]:
        assert a.get(point) == b.get(point)


def test_turbulence_builders() -> None:
    node = Turbulence(Perlin(), seed=1)
    other = node.set_power(2.0).set_roughness(4).set_frequency(0.5).set_seed(7)
    assert (node.power, node.roughness, node.seed) == (1.0, 3, 1)
    assert (other.power, other.roughness, other.frequency, other.seed) == (2.0, 4, 0.5, 7)
    assert len(other.distortions[0].sources) == 4


def test_turbulence_rejects_bad_roughness() -> None:
    with pytest.raises(ConfigurationError):
        Turbulence(Perlin(), roughness=0)


def test_cycle_point_blends_wrapped_and_mirrored_samples(counting_source) -> None:
    node = CyclePoint(counting_source)
    # 0.75 * f(0.25, 0) + 0.25 * f(0.75, 0); the mirrored y samples weigh 0.
    assert node.get((0.25, 0.0)) == pytest.approx(0.375)
    assert counting_source.calls == 4
    assert node.get((1.25, -1.0)) == pytest.approx(0.375)


@pytest.mark.parametrize("dims", [2, 3])
def test_cycle_point_repeats_every_period(dims) -> None:
    node = CyclePoint(Perlin(seed=5), x=3.0, y=2.0, z=4.0)
    periods = (3.0, 2.0, 4.0)[:dims]
    rng = np.random.default_rng(dims)
    for point in rng.uniform(-10.0, 10.0, size=(50, dims)).tolist():
        shifted = [c + period for c, period in zip(point, periods)]
        assert node.get(shifted) == pytest.approx(node.get(point), abs=1e-9)


def test_cycle_point_has_no_seam_at_the_period_edge() -> None:
    node = CyclePoint(Perlin(seed=8), x=4.0, y=4.0)
    for y in (0.3, 1.7, 2.9):
        assert node.get((4.0 - 1e-9, y)) == pytest.approx(node.get((0.0, y)), abs=1e-6)
        assert node.get((y, -1e-9)) == pytest.approx(node.get((y, 0.0)), abs=1e-6)


def test_cycle_point_options() -> None:
    node = CyclePoint(SuperSimplex(), x=2.0)
    assert node.dims == frozenset({2, 3})
    assert node.periods == (2.0, 1.0, 1.0, 1.0)
    other = node.set_periods(x=5.0, y=6.0)
    assert other.periods == (5.0, 6.0, 1.0, 1.0)
    assert node.periods[0] == 2.0
    with pytest.raises(ConfigurationError):
        CyclePoint(Perlin(), y=0.0)
