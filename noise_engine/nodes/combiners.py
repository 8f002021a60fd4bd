# noise_engine/nodes/combiners.py

"""
Binary combiners: nodes that merge the outputs of two sources point by point.
"""

import abc
import logging
import math

from .base import NoiseFn, common_dims, require_source

logger = logging.getLogger(__name__)


class Combiner(NoiseFn):
    """Evaluates both sources at the same point and merges the results."""

    def __init__(self, source1: NoiseFn, source2: NoiseFn):
        self.source1 = require_source(source1, "source1")
        self.source2 = require_source(source2, "source2")
        self.dims = common_dims(self.source1, self.source2)
        logger.debug(f"Built {self!r} over dims {sorted(self.dims)}.")

    def _get(self, point):
        return self._merge(self.source1._get(point), self.source2._get(point))

    @abc.abstractmethod
    def _merge(self, a: float, b: float) -> float:
        ...

    def __repr__(self):
        return f"{type(self).__name__}({self.source1!r}, {self.source2!r})"


class Add(Combiner):
    def _merge(self, a, b):
        return a + b


class Multiply(Combiner):
    def _merge(self, a, b):
        return a * b


class Max(Combiner):
    def _merge(self, a, b):
        return max(a, b)


class Min(Combiner):
    def _merge(self, a, b):
        return min(a, b)


class Power(Combiner):
    """Raises source1 to the power of source2."""

    def _merge(self, a, b):
        try:
            return math.pow(a, b)
        except OverflowError:
            return math.inf
        except ValueError:
            # Negative base with a fractional exponent, or zero to a negative power.
            return math.nan
