# noise_engine/gradients.py

"""
Gradient tables for the lattice noise kernels.

Every vector is unit length, so a Perlin kernel peaks at sqrt(n) / 2 and is
rescaled by 2 / sqrt(n). Every table length is a power of two so a hash can be
reduced to an index with a bit mask. The arrays are built once at
import time; numba treats them as compile-time constants.
"""

import itertools
import math

import numpy as np

_DIAG_2 = 1.0 / math.sqrt(2.0)
_DIAG_3 = 1.0 / math.sqrt(3.0)


def _signed_vectors(dimension: int, zero_axes: int) -> list:
    """Every vector with `zero_axes` zeros and +/-1 everywhere else."""
    vectors = []
    for zeros in itertools.combinations(range(dimension), zero_axes):
        live = [axis for axis in range(dimension) if axis not in zeros]
        for signs in itertools.product((1.0, -1.0), repeat=len(live)):
            vector = [0.0] * dimension
            for axis, sign in zip(live, signs):
                vector[axis] = sign
            vectors.append(vector)
    return vectors


def _frozen(rows) -> np.ndarray:
    table = np.array(rows, dtype=np.float64)
    table.setflags(write=False)
    return table


# --- Perlin ---
# 2D: the four diagonals, selected by hash & 3.
PERLIN_GRAD2 = _frozen([[_DIAG_2 * x, _DIAG_2 * y] for x, y in _signed_vectors(2, 0)])
# 3D: the twelve cube edges padded to sixteen with a tetrahedron, hash & 15.
_CUBE_EDGES = _signed_vectors(3, 1)
_PADDING_3 = [[1.0, 1.0, 0.0], [-1.0, 1.0, 0.0], [0.0, -1.0, 1.0], [0.0, -1.0, -1.0]]
PERLIN_GRAD3 = _frozen([[c * _DIAG_2 for c in v] for v in _CUBE_EDGES + _PADDING_3])
# 4D: the thirty-two vectors with exactly one zero component, hash & 31.
PERLIN_GRAD4 = _frozen([[c * _DIAG_3 for c in v] for v in _signed_vectors(4, 1)])

# --- Simplex / SuperSimplex ---
# 2D: four axis vectors and four diagonals, hash & 7.
SIMPLEX_GRAD2 = _frozen(
    [[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]]
    + [[_DIAG_2 * x, _DIAG_2 * y] for x, y in _signed_vectors(2, 0)]
)
# 3D: the twelve edges twice, then the eight corners, hash & 31.
_EDGES_3 = [[c * _DIAG_2 for c in v] for v in _CUBE_EDGES]
SIMPLEX_GRAD3 = _frozen(
    _EDGES_3 + _EDGES_3 + [[c * _DIAG_3 for c in v] for v in _signed_vectors(3, 0)]
)
# 4D: thirty-two edges, then the sixteen corners twice, hash & 63.
_CORNERS_4 = [[c * 0.5 for c in v] for v in _signed_vectors(4, 0)]
SIMPLEX_GRAD4 = _frozen(
    [[c * _DIAG_3 for c in v] for v in _signed_vectors(4, 1)] + _CORNERS_4 + _CORNERS_4
)
