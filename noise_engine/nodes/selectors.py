# noise_engine/nodes/selectors.py

"""
Nodes that pick between, or mix, two sources under the control of a third.
"""

import logging

from .. import config as DEFAULTS
from ..errors import ConfigurationError
from .base import NoiseFn, common_dims, require_number, require_ordered, require_source

logger = logging.getLogger(__name__)


def s_curve3(t: float) -> float:
    "3t^2 - 2t^3"
    return t * t * (3.0 - 2.0 * t)


def linear(a: float, b: float, alpha: float) -> float:
    return a + alpha * (b - a)


class Blend(NoiseFn):
    """Linear interpolation from source1 to source2 weighted by the control value."""

    def __init__(self, source1: NoiseFn, source2: NoiseFn, control: NoiseFn):
        self.source1 = require_source(source1, "source1")
        self.source2 = require_source(source2, "source2")
        self.control = require_source(control, "control")
        self.dims = common_dims(self.source1, self.source2, self.control)

    def _get(self, point):
        return linear(self.source1._get(point), self.source2._get(point), self.control._get(point))


class Select(NoiseFn):
    """
    Outputs source2 where the control value lies within [lower, upper] and
    source1 elsewhere.

    A non-zero `falloff` cross-fades the two sources with an S-curve over
    [bound - falloff, bound + falloff] around each bound.
    """

    def __init__(
        self,
        source1: NoiseFn,
        source2: NoiseFn,
        control: NoiseFn,
        lower: float = DEFAULTS.DEFAULT_SELECT_LOWER_BOUND,
        upper: float = DEFAULTS.DEFAULT_SELECT_UPPER_BOUND,
        falloff: float = DEFAULTS.DEFAULT_SELECT_FALLOFF,
    ):
        self.source1 = require_source(source1, "source1")
        self.source2 = require_source(source2, "source2")
        self.control = require_source(control, "control")
        self.dims = common_dims(self.source1, self.source2, self.control)
        self.lower, self.upper = require_ordered("lower", lower, "upper", upper)
        falloff = require_number("falloff", falloff)
        half_range = (self.upper - self.lower) / 2.0
        if not 0.0 <= falloff <= half_range:
            logger.debug(f"Rejected select falloff {falloff} for bounds {self.lower}..{self.upper}.")
            raise ConfigurationError(f"falloff must be in [0, {half_range}], got {falloff}.")
        self.falloff = falloff

    def set_bounds(self, lower: float, upper: float):
        falloff = min(self.falloff, (upper - lower) / 2.0)
        return Select(self.source1, self.source2, self.control, lower, upper, falloff)

    def set_falloff(self, falloff: float):
        return Select(self.source1, self.source2, self.control, self.lower, self.upper, falloff)

    def _get(self, point):
        control = self.control._get(point)
        falloff = self.falloff

        if falloff > 0.0:
            if control < self.lower - falloff:
                return self.source1._get(point)
            if control < self.lower + falloff:
                alpha = s_curve3((control - (self.lower - falloff)) / (2.0 * falloff))
                return linear(self.source1._get(point), self.source2._get(point), alpha)
            if control < self.upper - falloff:
                return self.source2._get(point)
            if control < self.upper + falloff:
                alpha = s_curve3((control - (self.upper - falloff)) / (2.0 * falloff))
                return linear(self.source2._get(point), self.source1._get(point), alpha)
            return self.source1._get(point)

        if control < self.lower or control > self.upper:
            return self.source1._get(point)
        return self.source2._get(point)
