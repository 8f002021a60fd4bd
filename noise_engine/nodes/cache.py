# noise_engine/nodes/cache.py

"""
Single-slot memoization for expensive subtrees that are queried repeatedly at
the same point, e.g. a source shared by several branches of a Select.
"""

from .base import NoiseFn, require_source


class Cache(NoiseFn):
    """
    Remembers the last point and the value its source returned for it.

    This is the only node with mutable state, and the slot is not guarded by
    a lock: give each thread its own Cache (or its own tree) instead of
    sharing one.
    """

    def __init__(self, source: NoiseFn):
        self.source = require_source(source)
        self.dims = self.source.dims
        self._last_point = None
        self._last_value = None

    def clear(self):
        self._last_point = None
        self._last_value = None

    def _get(self, point):
        # Tuples compare component-wise, so a point of another length never hits.
        if self._last_point is not None and self._last_point == point:
            return self._last_value
        value = self.source._get(point)
        self._last_point = point
        self._last_value = value
        return value
