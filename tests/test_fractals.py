import pytest

from noise_engine import (
    BasicMulti, Billow, ConfigurationError, Fbm, HybridMulti, OpenSimplex, Perlin,
    PerlinSurflet, RidgedMulti, Simplex, SuperSimplex, Value,
)
from noise_engine.nodes.fractals import FractalConfig

FRACTALS = [Fbm, Billow, RidgedMulti, HybridMulti, BasicMulti]


def _single_octave_sample(seed, frequency, point, source=Perlin):
    return source(seed=seed).get([c * frequency for c in point])


@pytest.mark.parametrize("fractal", [Fbm, HybridMulti, BasicMulti])
@pytest.mark.parametrize("source", [Perlin, PerlinSurflet, Simplex, OpenSimplex, Value])
def test_single_octave_reduces_to_source(fractal, source, points_2d) -> None:
    node = fractal(seed=31, octaves=1, frequency=1.7, source=source)
    for point in points_2d:
        assert node.get(point) == pytest.approx(_single_octave_sample(31, 1.7, point, source))


def test_single_octave_billow_folds_the_source(points_2d) -> None:
    node = Billow(seed=8, octaves=1, frequency=0.5)
    for point in points_2d:
        sample = _single_octave_sample(8, 0.5, point)
        assert node.get(point) == pytest.approx(2.0 * abs(sample) - 1.0)


def test_single_octave_ridged_inverts_the_source(points_2d) -> None:
    node = RidgedMulti(seed=8, octaves=1, frequency=0.5)
    for point in points_2d:
        sample = _single_octave_sample(8, 0.5, point)
        assert node.get(point) == pytest.approx(2.0 * (1.0 - abs(sample)) ** 2 - 1.0)


def test_fbm_sums_weighted_octaves() -> None:
    node = Fbm(seed=3, octaves=3, frequency=1.0, persistence=0.5, lacunarity=2.0)
    point = (0.3, 1.9)
    expected = sum(
        Perlin(seed=3 + i).get([c * 2.0 ** i for c in point]) * 0.5 ** i for i in range(3)
    ) / 1.75
    assert node.get(point) == pytest.approx(expected)


@pytest.mark.parametrize("fractal", FRACTALS)
def test_is_deterministic(fractal, points_3d) -> None:
    a = fractal(seed=17)
    b = fractal(seed=17)
    for point in points_3d[:30]:
        assert a.get(point) == b.get(point)


@pytest.mark.parametrize("fractal", FRACTALS)
def test_seed_changes_output(fractal, points_2d) -> None:
    a = fractal(seed=1)
    b = fractal(seed=2)
    assert any(a.get(p) != b.get(p) for p in points_2d)


@pytest.mark.parametrize("fractal", [Fbm, Billow, RidgedMulti])
def test_normalized_families_stay_near_unit_range(fractal, points_2d) -> None:
    node = fractal(seed=5)
    for point in points_2d:
        assert -1.01 <= node.get(point) <= 1.01


def test_defaults() -> None:
    node = Fbm()
    assert node.octaves == 6
    assert node.frequency == 1.0
    assert node.persistence == 0.5
    assert node.lacunarity == 2.0
    assert node.source is Perlin
    assert len(node.sources) == 6
    assert RidgedMulti().attenuation == 2.0


def test_octave_seeds_wrap_around() -> None:
    node = Fbm(seed=2 ** 32 - 1, octaves=3)
    assert [s.seed for s in node.sources] == [2 ** 32 - 1, 0, 1]


def test_wavelength_is_the_inverse_of_frequency() -> None:
    node = Fbm(wavelength=4.0)
    assert node.frequency == 0.25
    assert node.wavelength == 4.0
    assert node.set_wavelength(0.5).frequency == 2.0


def test_builders_do_not_mutate() -> None:
    node = RidgedMulti(seed=1, octaves=4)
    changed = (
        node.set_seed(9).set_octaves(2).set_frequency(3.0).set_persistence(0.25)
        .set_lacunarity(2.5).set_attenuation(1.5)
    )
    assert (node.seed, node.octaves, node.frequency) == (1, 4, 1.0)
    assert (changed.seed, changed.octaves, changed.frequency) == (9, 2, 3.0)
    assert (changed.persistence, changed.lacunarity, changed.attenuation) == (0.25, 2.5, 1.5)
    assert isinstance(changed, RidgedMulti)


def test_from_config_falls_back_to_defaults() -> None:
    node = HybridMulti.from_config({'seed': 12, 'octaves': 3, 'lacunarity': 3.0}, source=Simplex)
    assert node.seed == 12
    assert node.octaves == 3
    assert node.lacunarity == 3.0
    assert node.persistence == 0.5
    assert node.frequency == 1.0
    assert node.source is Simplex

    ridged = RidgedMulti.from_config({'wavelength': 2.0, 'attenuation': 4.0})
    assert ridged.frequency == 0.5
    assert ridged.attenuation == 4.0


@pytest.mark.parametrize(
    "options",
    [
        {"octaves": 0},
        {"octaves": 33},
        {"octaves": 2.5},
        {"persistence": 0.0},
        {"persistence": -0.5},
        {"lacunarity": 0.0},
        {"frequency": -1.0},
        {"frequency": 2.0, "wavelength": 0.5},
        {"wavelength": 0.0},
        {"seed": -4},
        {"source": Perlin(seed=1)},
    ],
)
@pytest.mark.parametrize("fractal", FRACTALS)
def test_rejects_bad_options(fractal, options) -> None:
    with pytest.raises(ConfigurationError):
        fractal(**options)


def test_ridged_rejects_bad_attenuation() -> None:
    with pytest.raises(ConfigurationError):
        RidgedMulti(attenuation=0.0)


def test_fractal_config_is_frozen() -> None:
    config = FractalConfig()
    with pytest.raises(AttributeError):
        config.octaves = 3


def test_dimensions_follow_the_source() -> None:
    assert Fbm(source=SuperSimplex).dims == frozenset({2, 3})
    assert Billow().dims == frozenset({2, 3, 4})
