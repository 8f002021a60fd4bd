# noise_engine/nodes/generators.py

"""
================================================================================
GENERATOR NODES
================================================================================
Leaf nodes of a noise tree: the seeded lattice noises (Perlin, PerlinSurflet,
Value, Simplex, OpenSimplex, SuperSimplex), cellular Worley noise and a
handful of deterministic patterns.

Data Contract:
---------------
- Inputs (on initialization):
    - seed (int): Unsigned 32-bit seed, or a shared SeedTable.
    - Generator-specific options (frequency, metric, ...).
- Outputs (from get):
    - A float. Seeded noises stay within [-1, 1]; Worley DISTANCE and EDGE
      outputs are raw distances.
- Side Effects: Builds a permutation table on initialization.
- Invariants: Given the same seed and point, the output is identical.
================================================================================
"""

import collections
import logging
import math

import numpy as np

from .. import config as DEFAULTS
from .. import noise
from .. import simplex
from .. import worley
from ..errors import ConfigurationError
from ..permutation import SeedTable
from ..worley import DistanceMetric, WorleyReturn
from .base import NoiseFn, require_number, require_positive

logger = logging.getLogger(__name__)

WorleyResult = collections.namedtuple("WorleyResult", ["cell", "distance1", "distance2"])


class SeededGenerator(NoiseFn):
    """
    A lattice noise driven by a permutation table.

    Subclasses list one compiled kernel per supported dimensionality.
    """

    _KERNELS: dict = {}

    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED, seed_table: SeedTable = None):
        if seed_table is not None:
            self.seed_table = seed_table
        else:
            self.seed_table = SeedTable(seed)
        self.seed = self.seed_table.seed
        self.dims = frozenset(self._KERNELS)

    def set_seed(self, seed: int):
        """Returns a copy of this generator using a different seed."""
        return type(self)(seed)

    def _get(self, point):
        return self._KERNELS[len(point)](self.seed_table.table, *point)

    def __repr__(self):
        return f"{type(self).__name__}(seed={self.seed})"


class Perlin(SeededGenerator):
    """Classic gradient noise on the hypercube lattice."""
    _KERNELS = {2: noise.perlin_2d, 3: noise.perlin_3d, 4: noise.perlin_4d}


class Value(SeededGenerator):
    """Interpolated pseudo-random values at lattice corners."""
    _KERNELS = {2: noise.value_2d, 3: noise.value_3d, 4: noise.value_4d}


class Simplex(SeededGenerator):
    """Fast gradient noise on the simplex lattice."""
    _KERNELS = {2: simplex.simplex_2d, 3: simplex.simplex_3d, 4: simplex.simplex_4d}


class PerlinSurflet(SeededGenerator):
    """Gradient noise built from radial surflets on the hypercube corners."""
    _KERNELS = {
        2: noise.perlin_surflet_2d, 3: noise.perlin_surflet_3d, 4: noise.perlin_surflet_4d,
    }


class OpenSimplex(SeededGenerator):
    """Gradient noise on the stretched simplex lattice."""
    _KERNELS = {
        2: simplex.open_simplex_2d, 3: simplex.open_simplex_3d, 4: simplex.open_simplex_4d,
    }


class SuperSimplex(SeededGenerator):
    """Simplex-lattice noise with a wider kernel. Two and three dimensions only."""
    _KERNELS = {2: simplex.super_simplex_2d, 3: simplex.super_simplex_3d}


def _parse_enum(enum_type, value, name):
    if isinstance(value, enum_type):
        return value
    try:
        if isinstance(value, str):
            return enum_type[value.upper()]
        return enum_type(value)
    except (KeyError, ValueError):
        logger.debug(f"Rejected {name}={value!r}.")
        raise ConfigurationError(
            f"Unknown {name} {value!r}; expected one of {[m.name.lower() for m in enum_type]}."
        ) from None


class Worley(SeededGenerator):
    """
    Cellular noise: every unit cell (after scaling by `frequency`) owns one
    jittered seed point and a query reports on the nearest of them.

    Args:
        seed (int): Seed for the cell hash.
        frequency (float): Cells per unit of input space. Must be non-zero.
        metric (DistanceMetric | str): How distances are measured.
        return_type (WorleyReturn | str): VALUE, DISTANCE or EDGE.
        jitter (float): Seed point spread in (0, 1]; 1 lets a seed touch the
            cell border.
    """

    def __init__(
        self,
        seed: int = DEFAULTS.DEFAULT_SEED,
        frequency: float = DEFAULTS.DEFAULT_WORLEY_FREQUENCY,
        metric=DistanceMetric.EUCLIDEAN,
        return_type=WorleyReturn.VALUE,
        jitter: float = DEFAULTS.DEFAULT_WORLEY_JITTER,
        seed_table: SeedTable = None,
    ):
        super().__init__(seed, seed_table)
        self.dims = DEFAULTS.ALL_DIMENSIONS
        self.frequency = require_number("frequency", frequency)
        if self.frequency == 0.0:
            logger.debug("Rejected Worley frequency of zero.")
            raise ConfigurationError("Worley frequency must be non-zero.")
        self.metric = _parse_enum(DistanceMetric, metric, "metric")
        self.return_type = _parse_enum(WorleyReturn, return_type, "return type")
        self.jitter = require_positive("jitter", jitter)
        if self.jitter > 1.0:
            logger.debug(f"Rejected Worley jitter {self.jitter}.")
            raise ConfigurationError(f"jitter must be in (0, 1], got {self.jitter}.")

        self._radius = {
            dim: worley.search_radius(self.metric, dim, self.jitter) for dim in self.dims
        }
        logger.debug(
            f"Worley(seed={self.seed}, metric={self.metric.name}) search radius {self._radius}."
        )

    def _options(self) -> dict:
        return {
            "seed": self.seed,
            "frequency": self.frequency,
            "metric": self.metric,
            "return_type": self.return_type,
            "jitter": self.jitter,
        }

    def _rebuild(self, **changes):
        options = self._options()
        options.update(changes)
        return type(self)(**options)

    def set_seed(self, seed: int):
        return self._rebuild(seed=seed)

    def set_frequency(self, frequency: float):
        return self._rebuild(frequency=frequency)

    def set_metric(self, metric):
        return self._rebuild(metric=metric)

    def set_return_type(self, return_type):
        return self._rebuild(return_type=return_type)

    def set_jitter(self, jitter: float):
        return self._rebuild(jitter=jitter)

    def _search(self, point):
        scaled = np.array(point, dtype=np.float64) * self.frequency
        return worley.worley_query(
            self.seed_table.table, scaled, int(self.metric), self.jitter, self._radius[len(point)]
        )

    def _get(self, point):
        if not all(math.isfinite(c) for c in point):
            return math.nan
        nearest, distance1, distance2 = self._search(point)
        if self.return_type is WorleyReturn.VALUE:
            return float(worley.cell_value(self.seed_table.table, nearest))
        if self.return_type is WorleyReturn.DISTANCE:
            return float(distance1)
        return float(distance2 - distance1)

    def query(self, point) -> WorleyResult:
        """Nearest cell and the two smallest seed distances (in cell units)."""
        coords = self._coerce(point)
        if not all(math.isfinite(c) for c in coords):
            return WorleyResult(None, math.nan, math.nan)
        nearest, distance1, distance2 = self._search(coords)
        return WorleyResult(tuple(int(c) for c in nearest), float(distance1), float(distance2))

    def seed_point(self, cell) -> tuple:
        """The seed point owned by an integer cell, in input coordinates."""
        cell = np.array(cell, dtype=np.int64)
        self._check_dims(cell.shape[0])
        point = worley.cell_seed_point(self.seed_table.table, cell, self.jitter)
        return tuple(float(c) / self.frequency for c in point)

    def __repr__(self):
        return (
            f"Worley(seed={self.seed}, frequency={self.frequency}, metric={self.metric.name}, "
            f"return_type={self.return_type.name}, jitter={self.jitter})"
        )


class Constant(NoiseFn):
    """Returns the same value everywhere."""

    def __init__(self, value: float = 0.0):
        self.value = require_number("value", value)

    def _get(self, point):
        return self.value

    def __repr__(self):
        return f"Constant({self.value})"


class Checkerboard(NoiseFn):
    """Alternating +1 / -1 cubes with an edge length of 2 ** size."""

    def __init__(self, size: int = 0):
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            logger.debug(f"Rejected checkerboard size {size!r}.")
            raise ConfigurationError(f"size must be a non-negative integer, got {size!r}.")
        self.size = size

    def _get(self, point):
        if not all(math.isfinite(c) for c in point):
            return math.nan
        parity = 0
        for c in point:
            parity ^= (math.floor(c) >> self.size) & 1
        return 1.0 if parity else -1.0


class Cylinders(NoiseFn):
    """
    Concentric cylinders around the last axis (the z axis in 3D). Only the
    first two coordinates are used.
    """

    def __init__(self, frequency: float = DEFAULTS.DEFAULT_FREQUENCY):
        self.frequency = require_positive("frequency", frequency)

    def set_frequency(self, frequency: float):
        return Cylinders(frequency)

    def _get(self, point):
        radius = math.hypot(point[0], point[1]) * self.frequency
        return _shell_value(radius)


class Spheres(NoiseFn):
    """Concentric spheres centred on the origin."""

    def __init__(self, frequency: float = DEFAULTS.DEFAULT_FREQUENCY):
        self.frequency = require_positive("frequency", frequency)

    def set_frequency(self, frequency: float):
        return Spheres(frequency)

    def _get(self, point):
        radius = math.sqrt(sum(c * c for c in point)) * self.frequency
        return _shell_value(radius)


def _shell_value(radius: float) -> float:
    # 1 on every integer shell, -1 halfway between shells.
    if not math.isfinite(radius):
        return math.nan
    nearest = min(radius - math.floor(radius), math.ceil(radius) - radius)
    return 1.0 - nearest * 4.0


class Cone(NoiseFn):
    """
    A cone centred on the origin of the xy-plane: 1 at the apex, falling
    linearly to -1 at `radius` and staying there beyond it.
    """

    dims = frozenset({2})

    def __init__(self, radius: float = DEFAULTS.DEFAULT_CONE_RADIUS):
        self.radius = require_positive("radius", radius)

    def set_radius(self, radius: float):
        return Cone(radius)

    def _get(self, point):
        distance = math.hypot(point[0], point[1])
        if math.isnan(distance):
            return math.nan
        if distance > self.radius:
            return -1.0
        return 1.0 - 2.0 * distance / self.radius

    def __repr__(self):
        return f"Cone(radius={self.radius})"
