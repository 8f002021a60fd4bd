# noise_engine/simplex.py

"""
================================================================================
SIMPLEX-FAMILY NOISE KERNELS
================================================================================
Compiled scalar kernels for simplex gradient noise (2D/3D/4D), OpenSimplex
noise on the stretched lattice (2D/3D/4D) and the smoother SuperSimplex
variant (2D/3D).

Data Contract:
---------------
- Inputs:
    - p: A SeedTable permutation table (int array of length 512).
    - x, y[, z[, w]]: Scalar float coordinates.
- Outputs:
    - A float in [-1, 1], or NaN when any coordinate is not finite.
- Side Effects: None.
- Invariants: Each lattice vertex contributes max(0, r^2 - |d|^2)^4 * (g . d),
  with r^2 = 0.5, so the field stays continuous across simplex boundaries.
================================================================================
"""

import math

import numpy as np
from numba import njit

from .gradients import SIMPLEX_GRAD2, SIMPLEX_GRAD3, SIMPLEX_GRAD4
from .noise import clamp_unit, hash2, hash3, hash4

# Skew (F) and unskew (G) factors: F = (sqrt(n+1) - 1) / n, G = (1 - 1/sqrt(n+1)) / n.
F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0
F3 = 1.0 / 3.0
G3 = 1.0 / 6.0
F4 = (math.sqrt(5.0) - 1.0) / 4.0
G4 = (5.0 - math.sqrt(5.0)) / 20.0

# Kernel radius squared. Every facet a vertex does not belong to lies at least
# sqrt(0.5) away in all three dimensionalities, so contributions reach zero
# before a corner drops out of the containing simplex.
SIMPLEX_RADIUS_SQ = 0.5

# Normalization for unit-length gradients. The 3D and 4D values are the
# published r^2 = 0.6 constants times (0.6 / 0.5)^4.5, the ratio of the
# single-vertex peaks of the two kernels.
_RADIUS_RESCALE = (0.6 / SIMPLEX_RADIUS_SQ) ** 4.5
SIMPLEX_SCALE_2D = 99.83685446303647
SIMPLEX_SCALE_3D = 32.0 * math.sqrt(2.0) * _RADIUS_RESCALE
SIMPLEX_SCALE_4D = 27.0 * math.sqrt(3.0) * _RADIUS_RESCALE

SUPER_SIMPLEX_TO_REAL_2D = -0.211324865405187
SUPER_SIMPLEX_TO_SIMPLEX_2D = 0.366025403784439
SUPER_SIMPLEX_TO_SIMPLEX_3D = -2.0 / 3.0
SUPER_SIMPLEX_NORM_2D = 1.0 / 0.05428295288661623
SUPER_SIMPLEX_NORM_3D = 1.0 / 0.0867664001655369
# Offset between the two interleaved lattices used in 3D.
SUPER_SIMPLEX_LATTICE_SHIFT_3D = 512.5

# 2D: eight groups of four (lattice offset, offset to the point) entries,
# selected by which region of the rhombus the point falls in.
_A = 0.577350269189626
_B = 0.788675134594813
_C = 0.211324865405187
_D = 1.366025403784439
_E = 0.36602540378443904
_LOOKUP_2D = (
    ((0, 0), (0.0, 0.0)), ((1, 1), (-_A, -_A)), ((-1, 0), (_B, -_C)), ((0, -1), (-_C, _B)),
    ((0, 0), (0.0, 0.0)), ((1, 1), (-_A, -_A)), ((0, 1), (_C, -_B)), ((1, 0), (-_B, _C)),
    ((0, 0), (0.0, 0.0)), ((1, 1), (-_A, -_A)), ((1, 0), (-_B, _C)), ((0, -1), (-_C, _B)),
    ((0, 0), (0.0, 0.0)), ((1, 1), (-_A, -_A)), ((2, 1), (-_D, -_E)), ((1, 0), (-_B, _C)),
    ((0, 0), (0.0, 0.0)), ((1, 1), (-_A, -_A)), ((-1, 0), (_B, -_C)), ((0, 1), (_C, -_B)),
    ((0, 0), (0.0, 0.0)), ((1, 1), (-_A, -_A)), ((0, 1), (_C, -_B)), ((1, 2), (-_E, -_D)),
    ((0, 0), (0.0, 0.0)), ((1, 1), (-_A, -_A)), ((1, 0), (-_B, _C)), ((0, 1), (_C, -_B)),
    ((0, 0), (0.0, 0.0)), ((1, 1), (-_A, -_A)), ((2, 1), (-_D, -_E)), ((1, 2), (-_E, -_D)),
)
LATTICE_OFFSETS_2D = np.array([entry[0] for entry in _LOOKUP_2D], dtype=np.int64)
LATTICE_DELTAS_2D = np.array([entry[1] for entry in _LOOKUP_2D], dtype=np.float64)

# 3D: sixteen groups of four lattice offsets in simplex space.
LATTICE_OFFSETS_3D = np.array([
    [0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1],
    [1, 1, 1], [1, 0, 0], [0, 1, 0], [0, 0, 1],
    [0, 0, 0], [0, 1, 1], [0, 1, 0], [0, 0, 1],
    [1, 1, 1], [0, 1, 1], [0, 1, 0], [0, 0, 1],
    [0, 0, 0], [1, 0, 0], [1, 0, 1], [0, 0, 1],
    [1, 1, 1], [1, 0, 0], [1, 0, 1], [0, 0, 1],
    [0, 0, 0], [0, 1, 1], [1, 0, 1], [0, 0, 1],
    [1, 1, 1], [0, 1, 1], [1, 0, 1], [0, 0, 1],
    [0, 0, 0], [1, 0, 0], [0, 1, 0], [1, 1, 0],
    [1, 1, 1], [1, 0, 0], [0, 1, 0], [1, 1, 0],
    [0, 0, 0], [0, 1, 1], [0, 1, 0], [1, 1, 0],
    [1, 1, 1], [0, 1, 1], [0, 1, 0], [1, 1, 0],
    [0, 0, 0], [1, 0, 0], [1, 0, 1], [1, 1, 0],
    [1, 1, 1], [1, 0, 0], [1, 0, 1], [1, 1, 0],
    [0, 0, 0], [0, 1, 1], [1, 0, 1], [1, 1, 0],
    [1, 1, 1], [0, 1, 1], [1, 0, 1], [1, 1, 0],
], dtype=np.int64)

for _table in (LATTICE_OFFSETS_2D, LATTICE_DELTAS_2D, LATTICE_OFFSETS_3D):
    _table.setflags(write=False)


@njit
def _falloff(radius_sq, dist_sq):
    """(r^2 - |d|^2)^4 inside the kernel radius, zero outside."""
    t = radius_sq - dist_sq
    if t <= 0.0:
        return 0.0
    t *= t
    return t * t


# --- Simplex ---

@njit
def simplex_2d(p, x, y):
    """2D simplex noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return math.nan

    # Skew into the simplex grid and find the containing cell.
    s = (x + y) * F2
    i = int(math.floor(x + s))
    j = int(math.floor(y + s))
    t = (i + j) * G2
    x0 = x - (i - t)
    y0 = y - (j - t)

    if x0 > y0:
        i1 = 1
        j1 = 0
    else:
        i1 = 0
        j1 = 1

    x1 = x0 - i1 + G2
    y1 = y0 - j1 + G2
    x2 = x0 - 1.0 + 2.0 * G2
    y2 = y0 - 1.0 + 2.0 * G2

    r2 = SIMPLEX_RADIUS_SQ
    g0 = SIMPLEX_GRAD2[hash2(p, i, j) & 7]
    g1 = SIMPLEX_GRAD2[hash2(p, i + i1, j + j1) & 7]
    g2 = SIMPLEX_GRAD2[hash2(p, i + 1, j + 1) & 7]

    n0 = _falloff(r2, x0 * x0 + y0 * y0) * (g0[0] * x0 + g0[1] * y0)
    n1 = _falloff(r2, x1 * x1 + y1 * y1) * (g1[0] * x1 + g1[1] * y1)
    n2 = _falloff(r2, x2 * x2 + y2 * y2) * (g2[0] * x2 + g2[1] * y2)
    return clamp_unit(SIMPLEX_SCALE_2D * (n0 + n1 + n2))

@njit
def simplex_3d(p, x, y, z):
    """3D simplex noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    s = (x + y + z) * F3
    i = int(math.floor(x + s))
    j = int(math.floor(y + s))
    k = int(math.floor(z + s))
    t = (i + j + k) * G3
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)

    # Simplex order
    if x0 >= y0:
        if y0 >= z0:
            i1 = 1; j1 = 0; k1 = 0; i2 = 1; j2 = 1; k2 = 0
        elif x0 >= z0:
            i1 = 1; j1 = 0; k1 = 0; i2 = 1; j2 = 0; k2 = 1
        else:
            i1 = 0; j1 = 0; k1 = 1; i2 = 1; j2 = 0; k2 = 1
    else:
        if y0 < z0:
            i1 = 0; j1 = 0; k1 = 1; i2 = 0; j2 = 1; k2 = 1
        elif x0 < z0:
            i1 = 0; j1 = 1; k1 = 0; i2 = 0; j2 = 1; k2 = 1
        else:
            i1 = 0; j1 = 1; k1 = 0; i2 = 1; j2 = 1; k2 = 0

    x1 = x0 - i1 + G3
    y1 = y0 - j1 + G3
    z1 = z0 - k1 + G3
    x2 = x0 - i2 + 2.0 * G3
    y2 = y0 - j2 + 2.0 * G3
    z2 = z0 - k2 + 2.0 * G3
    x3 = x0 - 1.0 + 3.0 * G3
    y3 = y0 - 1.0 + 3.0 * G3
    z3 = z0 - 1.0 + 3.0 * G3

    r2 = SIMPLEX_RADIUS_SQ
    g0 = SIMPLEX_GRAD3[hash3(p, i, j, k) & 31]
    g1 = SIMPLEX_GRAD3[hash3(p, i + i1, j + j1, k + k1) & 31]
    g2 = SIMPLEX_GRAD3[hash3(p, i + i2, j + j2, k + k2) & 31]
    g3 = SIMPLEX_GRAD3[hash3(p, i + 1, j + 1, k + 1) & 31]

    n0 = _falloff(r2, x0 * x0 + y0 * y0 + z0 * z0) * (g0[0] * x0 + g0[1] * y0 + g0[2] * z0)
    n1 = _falloff(r2, x1 * x1 + y1 * y1 + z1 * z1) * (g1[0] * x1 + g1[1] * y1 + g1[2] * z1)
    n2 = _falloff(r2, x2 * x2 + y2 * y2 + z2 * z2) * (g2[0] * x2 + g2[1] * y2 + g2[2] * z2)
    n3 = _falloff(r2, x3 * x3 + y3 * y3 + z3 * z3) * (g3[0] * x3 + g3[1] * y3 + g3[2] * z3)
    return clamp_unit(SIMPLEX_SCALE_3D * (n0 + n1 + n2 + n3))

@njit
def simplex_4d(p, x, y, z, w):
    """
    4D simplex noise at a single point.
    The traversal order through the pentachoron is found by ranking the
    offset components instead of a lookup table.
    """
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z) and math.isfinite(w)):
        return math.nan

    s = (x + y + z + w) * F4
    i = int(math.floor(x + s))
    j = int(math.floor(y + s))
    k = int(math.floor(z + s))
    l = int(math.floor(w + s))
    t = (i + j + k + l) * G4
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)
    w0 = w - (l - t)

    rank_x = 0
    rank_y = 0
    rank_z = 0
    rank_w = 0
    if x0 > y0:
        rank_x += 1
    else:
        rank_y += 1
    if x0 > z0:
        rank_x += 1
    else:
        rank_z += 1
    if x0 > w0:
        rank_x += 1
    else:
        rank_w += 1
    if y0 > z0:
        rank_y += 1
    else:
        rank_z += 1
    if y0 > w0:
        rank_y += 1
    else:
        rank_w += 1
    if z0 > w0:
        rank_z += 1
    else:
        rank_w += 1

    total = 0.0
    # Corner c steps along every axis whose rank is at least 4 - c.
    for c in range(5):
        threshold = 4 - c
        di = 1 if rank_x >= threshold else 0
        dj = 1 if rank_y >= threshold else 0
        dk = 1 if rank_z >= threshold else 0
        dl = 1 if rank_w >= threshold else 0
        xc = x0 - di + c * G4
        yc = y0 - dj + c * G4
        zc = z0 - dk + c * G4
        wc = w0 - dl + c * G4
        g = SIMPLEX_GRAD4[hash4(p, i + di, j + dj, k + dk, l + dl) & 63]
        falloff = _falloff(SIMPLEX_RADIUS_SQ, xc * xc + yc * yc + zc * zc + wc * wc)
        total += falloff * (g[0] * xc + g[1] * yc + g[2] * zc + g[3] * wc)
    return clamp_unit(SIMPLEX_SCALE_4D * total)


# --- OpenSimplex ---
# The point is unskewed onto the lattice (stretch by -G) and each candidate
# vertex skewed back (squish by F). A cell is cut into slabs by the coordinate
# sum of its corners; a point in slab k draws on the corners whose sum is k or
# k + 1. Those slab boundaries lie sqrt((n + 1) / n) from every vertex that
# drops out across them, which fixes the kernel radius.
OPEN_SIMPLEX_RADIUS_SQ_2D = 3.0 / 2.0
OPEN_SIMPLEX_RADIUS_SQ_3D = 4.0 / 3.0
OPEN_SIMPLEX_RADIUS_SQ_4D = 5.0 / 4.0
# The lattice is the simplex lattice enlarged so that its kernel radius maps
# onto SIMPLEX_RADIUS_SQ; the peak grows with the ninth power of that factor.
OPEN_SIMPLEX_NORM_2D = SIMPLEX_SCALE_2D * (SIMPLEX_RADIUS_SQ / OPEN_SIMPLEX_RADIUS_SQ_2D) ** 4.5
OPEN_SIMPLEX_NORM_3D = SIMPLEX_SCALE_3D * (SIMPLEX_RADIUS_SQ / OPEN_SIMPLEX_RADIUS_SQ_3D) ** 4.5
OPEN_SIMPLEX_NORM_4D = SIMPLEX_SCALE_4D * (SIMPLEX_RADIUS_SQ / OPEN_SIMPLEX_RADIUS_SQ_4D) ** 4.5


@njit
def open_simplex_2d(p, x, y):
    """2D OpenSimplex noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return math.nan

    stretch = (x + y) * -G2
    sx = x + stretch
    sy = y + stretch
    bx = math.floor(sx)
    by = math.floor(sy)
    squish = (bx + by) * F2
    dx = x - (bx + squish)
    dy = y - (by + squish)
    ix = int(bx)
    iy = int(by)
    layer = int(math.floor((sx - bx) + (sy - by)))

    total = 0.0
    for corner in range(4):
        cx = corner & 1
        cy = (corner >> 1) & 1
        height = cx + cy
        if height != layer and height != layer + 1:
            continue
        offset = height * F2
        px = dx - cx - offset
        py = dy - cy - offset
        falloff = _falloff(OPEN_SIMPLEX_RADIUS_SQ_2D, px * px + py * py)
        if falloff > 0.0:
            g = SIMPLEX_GRAD2[hash2(p, ix + cx, iy + cy) & 7]
            total += falloff * (g[0] * px + g[1] * py)
    return clamp_unit(total * OPEN_SIMPLEX_NORM_2D)

@njit
def open_simplex_3d(p, x, y, z):
    """3D OpenSimplex noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    stretch = (x + y + z) * -G3
    sx = x + stretch
    sy = y + stretch
    sz = z + stretch
    bx = math.floor(sx)
    by = math.floor(sy)
    bz = math.floor(sz)
    squish = (bx + by + bz) * F3
    dx = x - (bx + squish)
    dy = y - (by + squish)
    dz = z - (bz + squish)
    ix = int(bx)
    iy = int(by)
    iz = int(bz)
    layer = int(math.floor((sx - bx) + (sy - by) + (sz - bz)))

    total = 0.0
    for corner in range(8):
        cx = corner & 1
        cy = (corner >> 1) & 1
        cz = (corner >> 2) & 1
        height = cx + cy + cz
        if height != layer and height != layer + 1:
            continue
        offset = height * F3
        px = dx - cx - offset
        py = dy - cy - offset
        pz = dz - cz - offset
        falloff = _falloff(OPEN_SIMPLEX_RADIUS_SQ_3D, px * px + py * py + pz * pz)
        if falloff > 0.0:
            g = SIMPLEX_GRAD3[hash3(p, ix + cx, iy + cy, iz + cz) & 31]
            total += falloff * (g[0] * px + g[1] * py + g[2] * pz)
    return clamp_unit(total * OPEN_SIMPLEX_NORM_3D)

@njit
def open_simplex_4d(p, x, y, z, w):
    """4D OpenSimplex noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z) and math.isfinite(w)):
        return math.nan

    stretch = (x + y + z + w) * -G4
    sx = x + stretch
    sy = y + stretch
    sz = z + stretch
    sw = w + stretch
    bx = math.floor(sx)
    by = math.floor(sy)
    bz = math.floor(sz)
    bw = math.floor(sw)
    squish = (bx + by + bz + bw) * F4
    dx = x - (bx + squish)
    dy = y - (by + squish)
    dz = z - (bz + squish)
    dw = w - (bw + squish)
    ix = int(bx)
    iy = int(by)
    iz = int(bz)
    iw = int(bw)
    layer = int(math.floor((sx - bx) + (sy - by) + (sz - bz) + (sw - bw)))

    total = 0.0
    for corner in range(16):
        cx = corner & 1
        cy = (corner >> 1) & 1
        cz = (corner >> 2) & 1
        cw = (corner >> 3) & 1
        height = cx + cy + cz + cw
        if height != layer and height != layer + 1:
            continue
        offset = height * F4
        px = dx - cx - offset
        py = dy - cy - offset
        pz = dz - cz - offset
        pw = dw - cw - offset
        falloff = _falloff(OPEN_SIMPLEX_RADIUS_SQ_4D, px * px + py * py + pz * pz + pw * pw)
        if falloff > 0.0:
            g = SIMPLEX_GRAD4[hash4(p, ix + cx, iy + cy, iz + cz, iw + cw) & 63]
            total += falloff * (g[0] * px + g[1] * py + g[2] * pz + g[3] * pw)
    return clamp_unit(total * OPEN_SIMPLEX_NORM_4D)


# --- SuperSimplex ---

@njit
def super_simplex_2d(p, x, y):
    """2D SuperSimplex noise: a wider, smoother kernel over the same lattice."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return math.nan

    to_simplex = (x + y) * SUPER_SIMPLEX_TO_SIMPLEX_2D
    sx = x + to_simplex
    sy = y + to_simplex
    bx = math.floor(sx)
    by = math.floor(sy)
    rx = sx - bx
    ry = sy - by
    ix = int(bx)
    iy = int(by)

    region_sum = math.floor(rx + ry)
    index = 0
    if region_sum >= 1.0:
        index |= 4
    if rx - ry * 0.5 + 1.0 - region_sum * 0.5 >= 1.0:
        index |= 8
    if ry - rx * 0.5 + 1.0 - region_sum * 0.5 >= 1.0:
        index |= 16

    to_real = (rx + ry) * SUPER_SIMPLEX_TO_REAL_2D
    px = rx + to_real
    py = ry + to_real

    total = 0.0
    for n in range(index, index + 4):
        dx = px + LATTICE_DELTAS_2D[n, 0]
        dy = py + LATTICE_DELTAS_2D[n, 1]
        attenuation = (2.0 / 3.0) - (dx * dx + dy * dy)
        if attenuation > 0.0:
            h = hash2(p, ix + LATTICE_OFFSETS_2D[n, 0], iy + LATTICE_OFFSETS_2D[n, 1])
            g = SIMPLEX_GRAD2[h & 7]
            attenuation *= attenuation
            total += attenuation * attenuation * (g[0] * dx + g[1] * dy)
    return clamp_unit(total * SUPER_SIMPLEX_NORM_2D)

@njit
def _super_simplex_lattice_3d(p, sx, sy, sz):
    # Contribution of one of the two interleaved body-centred lattices.
    bx = math.floor(sx)
    by = math.floor(sy)
    bz = math.floor(sz)
    rx = sx - bx
    ry = sy - by
    rz = sz - bz

    index = 0
    if rx + ry + rz >= 1.5:
        index |= 4
    if -rx + ry + rz >= 0.5:
        index |= 8
    if rx - ry + rz >= 0.5:
        index |= 16
    if rx + ry - rz >= 0.5:
        index |= 32

    total = 0.0
    for n in range(index, index + 4):
        ox = LATTICE_OFFSETS_3D[n, 0]
        oy = LATTICE_OFFSETS_3D[n, 1]
        oz = LATTICE_OFFSETS_3D[n, 2]
        dx = rx - ox
        dy = ry - oy
        dz = rz - oz
        attenuation = 0.75 - (dx * dx + dy * dy + dz * dz)
        if attenuation > 0.0:
            h = hash3(p, int(bx) + ox, int(by) + oy, int(bz) + oz)
            g = SIMPLEX_GRAD3[h & 31]
            attenuation *= attenuation
            total += attenuation * attenuation * (g[0] * dx + g[1] * dy + g[2] * dz)
    return total

@njit
def super_simplex_3d(p, x, y, z):
    """3D SuperSimplex noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    to_simplex = (x + y + z) * SUPER_SIMPLEX_TO_SIMPLEX_3D
    sx = -(x + to_simplex)
    sy = -(y + to_simplex)
    sz = -(z + to_simplex)
    shift = SUPER_SIMPLEX_LATTICE_SHIFT_3D

    total = _super_simplex_lattice_3d(p, sx, sy, sz)
    total += _super_simplex_lattice_3d(p, sx + shift, sy + shift, sz + shift)
    return clamp_unit(total * SUPER_SIMPLEX_NORM_3D)
