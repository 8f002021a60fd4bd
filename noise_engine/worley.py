# noise_engine/worley.py

"""
================================================================================
CELL (WORLEY) NOISE
================================================================================
This module provides the compiled neighbourhood search behind cellular noise.
Every integer lattice cell owns one jittered seed point; a query returns the
cell whose seed point is nearest, together with the nearest and second-nearest
distances, much like a Voronoi lookup.

Data Contract:
---------------
- Inputs:
    - p: A SeedTable permutation table.
    - point: A float64 array of 2 to 4 coordinates.
    - metric: One of the DistanceMetric codes.
    - jitter: Seed point spread in (0, 1].
    - radius: Number of neighbouring cells searched along each axis.
- Outputs:
    - (nearest_cell, distance1, distance2)
- Side Effects: None.
- Invariants: Cells are scanned in lexicographic order with the first axis
  slowest; a later cell replaces the nearest only when strictly closer.
================================================================================
"""

import enum
import math

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .noise import hash_cell

_SECONDARY_HASH_OFFSET = DEFAULTS.WORLEY_SECONDARY_HASH_OFFSET


class DistanceMetric(enum.IntEnum):
    EUCLIDEAN_SQUARED = 0
    EUCLIDEAN = 1
    MANHATTAN = 2
    CHEBYSHEV = 3


class WorleyReturn(enum.Enum):
    """What a Worley node reports for a query."""
    VALUE = "value"        # pseudo-random value of the nearest cell
    DISTANCE = "distance"  # distance to the nearest seed point
    EDGE = "edge"          # distance2 - distance1, zero on cell borders


@njit
def distance(metric, a, b):
    """Distance between two points of equal length under the given metric."""
    total = 0.0
    for i in range(a.shape[0]):
        delta = abs(a[i] - b[i])
        if metric == 2:
            total += delta
        elif metric == 3:
            if delta > total:
                total = delta
        else:
            total += delta * delta
    if metric == 1:
        return math.sqrt(total)
    return total

@njit
def cell_seed_point(p, cell, jitter):
    """
    Returns the seed point owned by an integer cell.

    The first two axes read the low and high nibble of hash(cell); the next
    two read a second hash taken with the last axis shifted by 128.
    """
    dim = cell.shape[0]
    primary = hash_cell(p, cell)
    shifted = cell.copy()
    shifted[dim - 1] += _SECONDARY_HASH_OFFSET
    secondary = hash_cell(p, shifted)

    out = np.empty(dim, dtype=np.float64)
    for i in range(dim):
        h = primary if i < 2 else secondary
        if i % 2 == 0:
            nibble = h & 15
        else:
            nibble = (h >> 4) & 15
        out[i] = cell[i] + 0.5 + jitter * (nibble / 15.0 - 0.5)
    return out

@njit
def worley_query(p, point, metric, jitter, radius):
    """Scans the (2r+1)^n block around the point's cell."""
    dim = point.shape[0]
    base = np.empty(dim, dtype=np.int64)
    for i in range(dim):
        base[i] = int(math.floor(point[i]))

    offset = np.full(dim, -radius, dtype=np.int64)
    cell = np.empty(dim, dtype=np.int64)
    nearest = base.copy()
    distance1 = np.inf
    distance2 = np.inf

    span = 2 * radius + 1
    for _ in range(span ** dim):
        for i in range(dim):
            cell[i] = base[i] + offset[i]
        d = distance(metric, point, cell_seed_point(p, cell, jitter))
        if d < distance1:
            distance2 = distance1
            distance1 = d
            nearest[:] = cell
        elif d < distance2:
            distance2 = d

        # Advance the offset odometer, last axis fastest.
        i = dim - 1
        while i >= 0:
            offset[i] += 1
            if offset[i] <= radius:
                break
            offset[i] = -radius
            i -= 1

    return nearest, distance1, distance2

@njit
def cell_value(p, cell):
    """Maps hash(cell) into [-1, 1]."""
    return hash_cell(p, cell) / 255.0 * 2.0 - 1.0


def search_radius(metric: DistanceMetric, dimension: int, jitter: float) -> int:
    """
    Smallest neighbourhood radius that is guaranteed to contain the nearest
    seed point.

    A seed point lies at most `a = 0.5 + jitter / 2` from its cell's low
    corner along each axis, so the point's own seed is at most
    norm(a, ..., a) away, while every seed outside radius r is at least
    r + 1 - a away along one axis.
    """
    reach = 0.5 + jitter / 2.0
    if metric == DistanceMetric.MANHATTAN:
        bound = dimension * reach
    elif metric == DistanceMetric.CHEBYSHEV:
        bound = reach
    else:
        bound = math.sqrt(dimension) * reach
    return max(1, math.floor(bound + reach - 1.0) + 1)
