# noise_engine/nodes/modifiers.py

"""
================================================================================
UNARY MODIFIERS
================================================================================
Nodes that reshape the output of a single source without touching the point.

Data Contract:
---------------
- Inputs (on initialization):
    - source: The NoiseFn being modified.
    - Modifier-specific options (bounds, scale, control points, ...).
- Outputs (from get):
    - A float derived from source.get(point) alone.
- Side Effects: None.
- Invariants: Control points are validated and frozen on initialization.
================================================================================
"""

import abc
import logging
import math

import numpy as np
from scipy.interpolate import CubicSpline

from .. import config as DEFAULTS
from ..errors import ConfigurationError
from .base import NoiseFn, require_number, require_ordered, require_source

logger = logging.getLogger(__name__)


class Modifier(NoiseFn):
    """Applies `_modify` to the source's value."""

    def __init__(self, source: NoiseFn):
        self.source = require_source(source)
        self.dims = self.source.dims

    def _get(self, point):
        return self._modify(self.source._get(point))

    @abc.abstractmethod
    def _modify(self, value: float) -> float:
        ...


class Abs(Modifier):
    def _modify(self, value):
        return abs(value)


class Negate(Modifier):
    def _modify(self, value):
        return -value


class Invert(Modifier):
    """Mirrors the output around zero, the same mapping as Negate."""

    def _modify(self, value):
        return -value


class Clamp(Modifier):
    """Limits the output to [lower, upper]."""

    def __init__(
        self,
        source: NoiseFn,
        lower: float = DEFAULTS.DEFAULT_CLAMP_LOWER_BOUND,
        upper: float = DEFAULTS.DEFAULT_CLAMP_UPPER_BOUND,
    ):
        super().__init__(source)
        self.lower, self.upper = require_ordered("lower", lower, "upper", upper)

    def set_bounds(self, lower: float, upper: float):
        return Clamp(self.source, lower, upper)

    def _modify(self, value):
        if value < self.lower:
            return self.lower
        if value > self.upper:
            return self.upper
        return value


class ScaleBias(Modifier):
    """value * scale + bias"""

    def __init__(self, source: NoiseFn, scale: float = 1.0, bias: float = 0.0):
        super().__init__(source)
        self.scale = require_number("scale", scale)
        self.bias = require_number("bias", bias)

    def set_scale(self, scale: float):
        return ScaleBias(self.source, scale, self.bias)

    def set_bias(self, bias: float):
        return ScaleBias(self.source, self.scale, bias)

    def _modify(self, value):
        return value * self.scale + self.bias


class Exponent(Modifier):
    """sign(value) * |value| ** exponent, so the sign of the source survives."""

    def __init__(self, source: NoiseFn, exponent: float = 1.0):
        super().__init__(source)
        self.exponent = require_number("exponent", exponent)

    def set_exponent(self, exponent: float):
        return Exponent(self.source, exponent)

    def _modify(self, value):
        if math.isnan(value):
            return value
        try:
            return math.copysign(abs(value) ** self.exponent, value)
        except (OverflowError, ZeroDivisionError):
            return math.copysign(math.inf, value)


def _strictly_increasing(name: str, values: np.ndarray, minimum: int) -> np.ndarray:
    if values.shape[0] < minimum:
        logger.debug(f"Rejected {name} with {values.shape[0]} control points.")
        raise ConfigurationError(
            f"{name} needs at least {minimum} control points, got {values.shape[0]}."
        )
    if not np.all(np.isfinite(values)):
        logger.debug(f"Rejected {name} with non-finite control points.")
        raise ConfigurationError(f"{name} control points must be finite.")
    if np.any(np.diff(values) <= 0.0):
        logger.debug(f"Rejected {name} with unordered control points {values.tolist()}.")
        raise ConfigurationError(f"{name} control point inputs must be strictly increasing.")
    return values


class Curve(Modifier):
    """
    Maps the source through a cubic spline.

    Args:
        source (NoiseFn): The node being remapped.
        control_points: (input, output) pairs with strictly increasing inputs,
            at least four of them. Inputs below the first or above the last
            control point map to that point's output.
    """

    def __init__(self, source: NoiseFn, control_points):
        super().__init__(source)
        try:
            points = np.array(control_points, dtype=np.float64).reshape(-1, 2)
        except (TypeError, ValueError):
            logger.debug(f"Rejected curve control points {control_points!r}.")
            raise ConfigurationError("Curve control points must be (input, output) pairs.") from None
        self._inputs = _strictly_increasing("Curve", points[:, 0], DEFAULTS.MIN_CURVE_CONTROL_POINTS)
        self._outputs = points[:, 1]
        if not np.all(np.isfinite(self._outputs)):
            raise ConfigurationError("Curve control point outputs must be finite.")
        self.control_points = tuple(zip(self._inputs.tolist(), self._outputs.tolist()))
        self._spline = CubicSpline(self._inputs, self._outputs)
        logger.debug(f"Built Curve through {len(self.control_points)} control points.")

    def add_control_point(self, input_value: float, output_value: float):
        """Returns a new Curve with one more control point, kept in input order."""
        points = sorted(self.control_points + ((input_value, output_value),))
        return Curve(self.source, points)

    def _modify(self, value):
        if math.isnan(value):
            return value
        if value <= self._inputs[0]:
            return float(self._outputs[0])
        if value >= self._inputs[-1]:
            return float(self._outputs[-1])
        return float(self._spline(value))


class Terrace(Modifier):
    """
    Step-quantizes the source into terraces.

    Between two neighbouring control points the output eases from the lower
    terrace value towards the upper one with a quadratic curve, producing
    flat shelves with steep risers. `invert` flips the easing so the risers
    come first.
    """

    def __init__(self, source: NoiseFn, control_points, invert: bool = False):
        super().__init__(source)
        try:
            points = np.array(control_points, dtype=np.float64).reshape(-1)
        except (TypeError, ValueError):
            logger.debug(f"Rejected terrace control points {control_points!r}.")
            raise ConfigurationError("Terrace control points must be numbers.") from None
        self._points = _strictly_increasing("Terrace", points, DEFAULTS.MIN_TERRACE_CONTROL_POINTS)
        self.control_points = tuple(self._points.tolist())
        self.invert = bool(invert)

    def add_control_point(self, value: float):
        return Terrace(self.source, sorted(self.control_points + (value,)), self.invert)

    def invert_terraces(self, invert: bool = True):
        return Terrace(self.source, self.control_points, invert)

    def _modify(self, value):
        if math.isnan(value):
            return value
        points = self._points
        last = points.shape[0] - 1
        # First control point strictly above the value.
        index = int(np.searchsorted(points, value, side="right"))
        index0 = min(max(index - 1, 0), last)
        index1 = min(max(index, 0), last)
        if index0 == index1:
            return float(points[index1])

        value0 = float(points[index0])
        value1 = float(points[index1])
        alpha = (value - value0) / (value1 - value0)
        if self.invert:
            alpha = 1.0 - alpha
            value0, value1 = value1, value0
        alpha *= alpha
        return value0 + alpha * (value1 - value0)
