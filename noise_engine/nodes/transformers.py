# noise_engine/nodes/transformers.py

"""
================================================================================
COORDINATE TRANSFORMERS
================================================================================
Nodes that move, scale, rotate, wrap or warp the query point before handing
it to their source.

Data Contract:
---------------
- Inputs (on initialization):
    - source: The NoiseFn being sampled.
    - Per-axis offsets, scales, angles (degrees) or periods, or auxiliary
      noise nodes.
- Outputs (from get):
    - source.get(transformed point). CyclePoint blends 2 ** n such samples.
- Side Effects: None.
- Invariants: The transformed point has the same length as the input point.
================================================================================
"""

import abc
import logging
import math

import numpy as np

from .. import config as DEFAULTS
from ..errors import ConfigurationError
from ..permutation import validate_seed
from .base import NoiseFn, common_dims, require_number, require_positive, require_source
from .fractals import Fbm

logger = logging.getLogger(__name__)

AXES = ("x", "y", "z", "w")


class Transformer(NoiseFn):
    def __init__(self, source: NoiseFn):
        self.source = require_source(source)
        self.dims = self.source.dims

    def _get(self, point):
        return self.source._get(self._transform(point))

    @abc.abstractmethod
    def _transform(self, point: tuple) -> tuple:
        ...


class TranslatePoint(Transformer):
    """Adds a fixed offset to each coordinate."""

    def __init__(self, source: NoiseFn, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        super().__init__(source)
        self.translation = tuple(require_number(a, v) for a, v in zip(AXES, (x, y, z, w)))

    def set_translation(self, x=0.0, y=0.0, z=0.0, w=0.0):
        return TranslatePoint(self.source, x, y, z, w)

    def _transform(self, point):
        return tuple(c + t for c, t in zip(point, self.translation))


class ScalePoint(Transformer):
    """
    Multiplies each coordinate by a fixed factor. `scale` sets every axis at
    once; per-axis values override it.
    """

    def __init__(self, source: NoiseFn, x: float = None, y: float = None, z: float = None,
                 w: float = None, scale: float = 1.0):
        super().__init__(source)
        scale = require_number("scale", scale)
        self.scale = tuple(
            scale if v is None else require_number(a, v) for a, v in zip(AXES, (x, y, z, w))
        )

    def set_scale(self, x=None, y=None, z=None, w=None, scale=1.0):
        return ScalePoint(self.source, x, y, z, w, scale)

    def _transform(self, point):
        return tuple(c * s for c, s in zip(point, self.scale))


def _plane_rotation(size: int, a: int, b: int, degrees: float) -> np.ndarray:
    """Rotation of the (a, b) coordinate plane inside a size x size identity."""
    theta = math.radians(degrees)
    matrix = np.eye(size)
    matrix[a, a] = math.cos(theta)
    matrix[a, b] = -math.sin(theta)
    matrix[b, a] = math.sin(theta)
    matrix[b, b] = math.cos(theta)
    return matrix


class RotatePoint(Transformer):
    """
    Rotates the point around the origin. Angles are in degrees.

    - 2D points turn in the xy-plane by `z_angle`.
    - 3D points turn about the x, then y, then z axis.
    - 4D points additionally turn in the xw-plane by `w_angle`.
    """

    def __init__(self, source: NoiseFn, x_angle: float = 0.0, y_angle: float = 0.0,
                 z_angle: float = 0.0, w_angle: float = 0.0):
        super().__init__(source)
        self.angles = tuple(
            require_number(f"{a}_angle", v) for a, v in zip(AXES, (x_angle, y_angle, z_angle, w_angle))
        )
        x_angle, y_angle, z_angle, w_angle = self.angles

        rotate_x = _plane_rotation(3, 1, 2, x_angle)
        rotate_y = _plane_rotation(3, 2, 0, y_angle)
        rotate_z = _plane_rotation(3, 0, 1, z_angle)
        rotation_3d = rotate_z @ rotate_y @ rotate_x
        rotation_4d = np.eye(4)
        rotation_4d[:3, :3] = rotation_3d
        rotation_4d = _plane_rotation(4, 0, 3, w_angle) @ rotation_4d

        self._matrices = {
            2: _plane_rotation(2, 0, 1, z_angle),
            3: rotation_3d,
            4: rotation_4d,
        }

    def set_angles(self, x_angle=0.0, y_angle=0.0, z_angle=0.0, w_angle=0.0):
        return RotatePoint(self.source, x_angle, y_angle, z_angle, w_angle)

    def _transform(self, point):
        rotated = self._matrices[len(point)] @ np.array(point)
        return tuple(rotated.tolist())


class CyclePoint(Transformer):
    """
    Makes its source periodic along every axis.

    Each coordinate is wrapped into [0, period) and the source is sampled at
    the wrapped value `u` and at its mirror `period - u`. The samples are
    blended multilinearly with weight `u / period`, so both ends of a period
    land on the same sample and the output tiles without seams. A point costs
    2 ** n source evaluations.
    """

    def __init__(self, source: NoiseFn, x: float = DEFAULTS.DEFAULT_CYCLE_PERIOD,
                 y: float = DEFAULTS.DEFAULT_CYCLE_PERIOD, z: float = DEFAULTS.DEFAULT_CYCLE_PERIOD,
                 w: float = DEFAULTS.DEFAULT_CYCLE_PERIOD):
        super().__init__(source)
        self.periods = tuple(
            require_positive(f"{a}_period", v) for a, v in zip(AXES, (x, y, z, w))
        )

    def set_periods(self, x=DEFAULTS.DEFAULT_CYCLE_PERIOD, y=DEFAULTS.DEFAULT_CYCLE_PERIOD,
                    z=DEFAULTS.DEFAULT_CYCLE_PERIOD, w=DEFAULTS.DEFAULT_CYCLE_PERIOD):
        return CyclePoint(self.source, x, y, z, w)

    def _transform(self, point):
        return tuple(c % period for c, period in zip(point, self.periods))

    def _get(self, point):
        wrapped = self._transform(point)
        total = 0.0
        for corner in range(1 << len(wrapped)):
            weight = 1.0
            sample = []
            for axis, (u, period) in enumerate(zip(wrapped, self.periods)):
                t = u / period
                if (corner >> axis) & 1:
                    sample.append(period - u)
                    weight *= t
                else:
                    sample.append(u)
                    weight *= 1.0 - t
            total += weight * self.source._get(tuple(sample))
        return total


class Displace(Transformer):
    """
    Adds the output of an auxiliary node to each coordinate.

    Axes without a displacement node are left alone. A `z` or `w` displacer
    restricts the node to points that have that axis.
    """

    def __init__(self, source: NoiseFn, x: NoiseFn = None, y: NoiseFn = None,
                 z: NoiseFn = None, w: NoiseFn = None):
        super().__init__(source)
        displacers = (x, y, z, w)
        if all(d is None for d in displacers):
            logger.debug("Rejected Displace without any displacement source.")
            raise ConfigurationError("Displace needs at least one displacement source.")
        self.displacers = tuple(
            None if d is None else require_source(d, a) for a, d in zip(AXES, displacers)
        )

        active = [d for d in self.displacers if d is not None]
        highest_axis = max(i for i, d in enumerate(self.displacers) if d is not None)
        reachable = frozenset(dim for dim in DEFAULTS.ALL_DIMENSIONS if dim > highest_axis)
        self.dims = common_dims(self.source, *active) & reachable
        if not self.dims:
            logger.debug(f"Displace axes reach past every dimension of {sorted(self.source.dims)}.")
            raise ConfigurationError("Displacement axes do not fit any supported dimensionality.")

    def _transform(self, point):
        return tuple(
            c if d is None else c + d._get(point)
            for c, d in zip(point, self.displacers)
        )


class Turbulence(Transformer):
    """
    Domain warping with four independent Fbm fields.

    Each coordinate is pushed by `power` times its own Fbm field sampled at a
    fixed offset from the point. `roughness` is the octave count of the
    fields and `frequency` their base frequency.
    """

    def __init__(
        self,
        source: NoiseFn,
        seed: int = DEFAULTS.DEFAULT_SEED,
        frequency: float = DEFAULTS.DEFAULT_TURBULENCE_FREQUENCY,
        power: float = DEFAULTS.DEFAULT_TURBULENCE_POWER,
        roughness: int = DEFAULTS.DEFAULT_TURBULENCE_ROUGHNESS,
    ):
        super().__init__(source)
        self.seed = validate_seed(seed)
        self.frequency = require_positive("frequency", frequency)
        self.power = require_number("power", power)
        self.roughness = roughness
        self.distortions = tuple(
            Fbm(seed=(self.seed + i) % DEFAULTS.SEED_MODULUS, octaves=roughness, frequency=self.frequency)
            for i in range(len(AXES))
        )
        self.dims = common_dims(self.source, *self.distortions)
        logger.debug(
            f"Built Turbulence(seed={self.seed}, frequency={self.frequency}, "
            f"power={self.power}, roughness={roughness})."
        )

    def _rebuild(self, **changes):
        options = {
            "seed": self.seed,
            "frequency": self.frequency,
            "power": self.power,
            "roughness": self.roughness,
        }
        options.update(changes)
        return Turbulence(self.source, **options)

    def set_seed(self, seed: int):
        return self._rebuild(seed=seed)

    def set_frequency(self, frequency: float):
        return self._rebuild(frequency=frequency)

    def set_power(self, power: float):
        return self._rebuild(power=power)

    def set_roughness(self, roughness: int):
        return self._rebuild(roughness=roughness)

    def _transform(self, point):
        warped = []
        for axis, c in enumerate(point):
            offsets = DEFAULTS.TURBULENCE_OFFSETS[axis]
            sample = tuple(v + o for v, o in zip(point, offsets))
            warped.append(c + self.distortions[axis]._get(sample) * self.power)
        return tuple(warped)
