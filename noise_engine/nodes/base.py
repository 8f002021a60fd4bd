# noise_engine/nodes/base.py

"""
================================================================================
NOISE FUNCTION BASE
================================================================================
The abstract node every noise generator, combinator and transformer derives
from, together with the construction-time validation helpers they share.

Data Contract:
---------------
- Inputs:
    - point: A sequence (tuple, list or 1-D NumPy array) of 2, 3 or 4 numbers.
- Outputs:
    - A Python float. Primitive sources stay within [-1, 1]; composites may not.
- Side Effects: None during evaluation. Validation failures are logged at
  DEBUG level before the exception is raised.
- Invariants:
    - A node's `dims` never changes after construction.
    - A composite's `dims` is the intersection of its children's.
================================================================================
"""

import abc
import logging
import math
import numbers

from .. import config as DEFAULTS
from ..errors import ConfigurationError, DimensionMismatchError

logger = logging.getLogger(__name__)


class NoiseFn(abc.ABC):
    """
    A pure function from a point to a float.

    Subclasses implement `_get`, which receives the point as a tuple of
    floats whose length is already known to be in `dims`. Composite nodes
    call their children's `_get` directly so the point is only checked once,
    at the root of the tree.
    """

    dims: frozenset = DEFAULTS.ALL_DIMENSIONS

    def get(self, point) -> float:
        """Evaluates the node at `point`."""
        return self._get(self._coerce(point))

    def _check_dims(self, length: int):
        if length not in self.dims:
            raise DimensionMismatchError(
                f"{type(self).__name__} accepts {sorted(self.dims)}-dimensional points, "
                f"got {length}."
            )

    def _coerce(self, point) -> tuple:
        coords = tuple(float(c) for c in point)
        self._check_dims(len(coords))
        return coords

    def __call__(self, point) -> float:
        return self.get(point)

    @abc.abstractmethod
    def _get(self, point: tuple) -> float:
        ...


def require_source(source, name: str = "source") -> NoiseFn:
    if not isinstance(source, NoiseFn):
        logger.debug(f"Rejected {name}: {source!r} is not a noise function.")
        raise ConfigurationError(f"{name} must be a NoiseFn, got {type(source).__name__}.")
    return source


def common_dims(*sources: NoiseFn) -> frozenset:
    """Dimensionalities every one of `sources` accepts."""
    dims = frozenset.intersection(*(source.dims for source in sources))
    if not dims:
        names = ", ".join(f"{type(s).__name__}{sorted(s.dims)}" for s in sources)
        logger.debug(f"No shared dimensionality between {names}.")
        raise DimensionMismatchError(f"Sources share no common dimensionality: {names}.")
    return dims


def require_number(name: str, value) -> float:
    """Checks that an option is a finite real number and returns it as float."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        logger.debug(f"Rejected {name}={value!r}: not a finite number.")
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}.")
    return float(value)


def require_positive(name: str, value) -> float:
    value = require_number(name, value)
    if value <= 0.0:
        logger.debug(f"Rejected {name}={value}: must be positive.")
        raise ConfigurationError(f"{name} must be greater than zero, got {value}.")
    return value


def require_ordered(lower_name: str, lower, upper_name: str, upper) -> tuple:
    lower = require_number(lower_name, lower)
    upper = require_number(upper_name, upper)
    if lower > upper:
        logger.debug(f"Rejected bounds {lower_name}={lower} > {upper_name}={upper}.")
        raise ConfigurationError(f"{lower_name} ({lower}) must not exceed {upper_name} ({upper}).")
    return lower, upper
