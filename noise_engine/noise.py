# noise_engine/noise.py

"""
================================================================================
LATTICE NOISE KERNELS
================================================================================
This module provides the compiled scalar kernels for hypercube lattice noise:
Perlin gradient noise, Perlin surflet noise and value noise in two, three and
four dimensions, plus the lattice hash shared by every other kernel. It is
designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - p: A SeedTable permutation table (int array of length 512).
    - x, y[, z[, w]]: Scalar float coordinates.
- Outputs:
    - A float in [-1, 1], or NaN when any coordinate is not finite.
- Side Effects: None.
- Invariants: Gradient noise is exactly zero at every integer lattice point.
================================================================================
"""

import math

from numba import njit

from .gradients import (
    PERLIN_GRAD2, PERLIN_GRAD3, PERLIN_GRAD4, SIMPLEX_GRAD2, SIMPLEX_GRAD3, SIMPLEX_GRAD4,
)

# Unit gradients peak at sqrt(n) / 2 at a cell centre; these map that peak to 1.
PERLIN_SCALE_2D = 2.0 / math.sqrt(2.0)
PERLIN_SCALE_3D = 2.0 / math.sqrt(3.0)
PERLIN_SCALE_4D = 2.0 / math.sqrt(4.0)

# Surflet sums are stretched to [-1, 1] by fixed factors.
PERLIN_SURFLET_SCALE_2D = 3.1604938271604937
PERLIN_SURFLET_SCALE_3D = 3.8898553255531074
PERLIN_SURFLET_SCALE_4D = 4.424369240215691


# --- Shared helpers ---

@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def clamp_unit(value):
    """Clamps a kernel result into [-1, 1]."""
    if value < -1.0:
        return -1.0
    if value > 1.0:
        return 1.0
    return value

@njit
def _blend_weight(fade, bit):
    # Multilinear interpolation weight of a corner along one axis.
    return fade if bit else 1.0 - fade


# --- Lattice hashing ---

@njit
def hash2(p, x, y):
    """Folds two lattice coordinates through the permutation table."""
    h = p[x & 255]
    return p[h ^ (y & 255)]

@njit
def hash3(p, x, y, z):
    h = p[x & 255]
    h = p[h ^ (y & 255)]
    return p[h ^ (z & 255)]

@njit
def hash4(p, x, y, z, w):
    h = p[x & 255]
    h = p[h ^ (y & 255)]
    h = p[h ^ (z & 255)]
    return p[h ^ (w & 255)]

@njit
def hash_cell(p, cell):
    """Folds an integer coordinate array of any length through the table."""
    h = p[cell[0] & 255]
    for i in range(1, cell.shape[0]):
        h = p[h ^ (cell[i] & 255)]
    return h


# --- Perlin ---

@njit
def _gradient2(h, x, y):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = PERLIN_GRAD2[h & 3]
    return g[0] * x + g[1] * y

@njit
def perlin_2d(p, x, y):
    """
    2D Perlin noise at a single point.
    Corner gradients are blended with the quintic fade curve.
    """
    if not (math.isfinite(x) and math.isfinite(y)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    xf = x - xi
    yf = y - yi

    u = _fade(xf)
    v = _fade(yf)

    g00 = _gradient2(hash2(p, xi, yi), xf, yf)
    g01 = _gradient2(hash2(p, xi, yi + 1), xf, yf - 1)
    g10 = _gradient2(hash2(p, xi + 1, yi), xf - 1, yf)
    g11 = _gradient2(hash2(p, xi + 1, yi + 1), xf - 1, yf - 1)

    x1 = _lerp(g00, g10, u)
    x2 = _lerp(g01, g11, u)
    return clamp_unit(_lerp(x1, x2, v) * PERLIN_SCALE_2D)

@njit
def perlin_3d(p, x, y, z):
    """3D Perlin noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    zi = int(math.floor(z))
    xf = x - xi
    yf = y - yi
    zf = z - zi
    u = _fade(xf)
    v = _fade(yf)
    s = _fade(zf)

    total = 0.0
    for corner in range(8):
        cx = corner & 1
        cy = (corner >> 1) & 1
        cz = (corner >> 2) & 1
        weight = _blend_weight(u, cx) * _blend_weight(v, cy) * _blend_weight(s, cz)
        g = PERLIN_GRAD3[hash3(p, xi + cx, yi + cy, zi + cz) & 15]
        total += weight * (g[0] * (xf - cx) + g[1] * (yf - cy) + g[2] * (zf - cz))
    return clamp_unit(total * PERLIN_SCALE_3D)

@njit
def perlin_4d(p, x, y, z, w):
    """4D Perlin noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z) and math.isfinite(w)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    zi = int(math.floor(z))
    wi = int(math.floor(w))
    xf = x - xi
    yf = y - yi
    zf = z - zi
    wf = w - wi
    u = _fade(xf)
    v = _fade(yf)
    s = _fade(zf)
    t = _fade(wf)

    total = 0.0
    for corner in range(16):
        cx = corner & 1
        cy = (corner >> 1) & 1
        cz = (corner >> 2) & 1
        cw = (corner >> 3) & 1
        weight = (_blend_weight(u, cx) * _blend_weight(v, cy)
                  * _blend_weight(s, cz) * _blend_weight(t, cw))
        g = PERLIN_GRAD4[hash4(p, xi + cx, yi + cy, zi + cz, wi + cw) & 31]
        total += weight * (g[0] * (xf - cx) + g[1] * (yf - cy)
                           + g[2] * (zf - cz) + g[3] * (wf - cw))
    return clamp_unit(total * PERLIN_SCALE_4D)


# --- Perlin surflets ---
# Each corner of the containing cell contributes (1 - |d|^2)^4 * (g . d). The
# kernel reaches zero one unit from its corner, which is never closer than
# the far side of the cell, so no interpolation is needed.

@njit
def perlin_surflet_2d(p, x, y):
    """2D Perlin surflet noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    xf = x - xi
    yf = y - yi

    total = 0.0
    for corner in range(4):
        cx = corner & 1
        cy = (corner >> 1) & 1
        dx = xf - cx
        dy = yf - cy
        attenuation = 1.0 - (dx * dx + dy * dy)
        if attenuation > 0.0:
            g = SIMPLEX_GRAD2[hash2(p, xi + cx, yi + cy) & 7]
            attenuation *= attenuation
            total += attenuation * attenuation * (g[0] * dx + g[1] * dy)
    return clamp_unit(total * PERLIN_SURFLET_SCALE_2D)

@njit
def perlin_surflet_3d(p, x, y, z):
    """3D Perlin surflet noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    zi = int(math.floor(z))
    xf = x - xi
    yf = y - yi
    zf = z - zi

    total = 0.0
    for corner in range(8):
        cx = corner & 1
        cy = (corner >> 1) & 1
        cz = (corner >> 2) & 1
        dx = xf - cx
        dy = yf - cy
        dz = zf - cz
        attenuation = 1.0 - (dx * dx + dy * dy + dz * dz)
        if attenuation > 0.0:
            g = SIMPLEX_GRAD3[hash3(p, xi + cx, yi + cy, zi + cz) & 31]
            attenuation *= attenuation
            total += attenuation * attenuation * (g[0] * dx + g[1] * dy + g[2] * dz)
    return clamp_unit(total * PERLIN_SURFLET_SCALE_3D)

@njit
def perlin_surflet_4d(p, x, y, z, w):
    """4D Perlin surflet noise at a single point."""
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z) and math.isfinite(w)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    zi = int(math.floor(z))
    wi = int(math.floor(w))
    xf = x - xi
    yf = y - yi
    zf = z - zi
    wf = w - wi

    total = 0.0
    for corner in range(16):
        cx = corner & 1
        cy = (corner >> 1) & 1
        cz = (corner >> 2) & 1
        cw = (corner >> 3) & 1
        dx = xf - cx
        dy = yf - cy
        dz = zf - cz
        dw = wf - cw
        attenuation = 1.0 - (dx * dx + dy * dy + dz * dz + dw * dw)
        if attenuation > 0.0:
            g = SIMPLEX_GRAD4[hash4(p, xi + cx, yi + cy, zi + cz, wi + cw) & 63]
            attenuation *= attenuation
            total += attenuation * attenuation * (g[0] * dx + g[1] * dy + g[2] * dz + g[3] * dw)
    return clamp_unit(total * PERLIN_SURFLET_SCALE_4D)


# --- Value ---
# Each lattice corner carries a scalar hash / 255; the blend lands in [0, 1]
# and is then stretched to [-1, 1].

@njit
def value_2d(p, x, y):
    if not (math.isfinite(x) and math.isfinite(y)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    u = _fade(x - xi)
    v = _fade(y - yi)

    v00 = hash2(p, xi, yi) / 255.0
    v01 = hash2(p, xi, yi + 1) / 255.0
    v10 = hash2(p, xi + 1, yi) / 255.0
    v11 = hash2(p, xi + 1, yi + 1) / 255.0

    blended = _lerp(_lerp(v00, v10, u), _lerp(v01, v11, u), v)
    return clamp_unit(blended * 2.0 - 1.0)

@njit
def value_3d(p, x, y, z):
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    zi = int(math.floor(z))
    u = _fade(x - xi)
    v = _fade(y - yi)
    s = _fade(z - zi)

    blended = 0.0
    for corner in range(8):
        cx = corner & 1
        cy = (corner >> 1) & 1
        cz = (corner >> 2) & 1
        weight = _blend_weight(u, cx) * _blend_weight(v, cy) * _blend_weight(s, cz)
        blended += weight * (hash3(p, xi + cx, yi + cy, zi + cz) / 255.0)
    return clamp_unit(blended * 2.0 - 1.0)

@njit
def value_4d(p, x, y, z, w):
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z) and math.isfinite(w)):
        return math.nan

    xi = int(math.floor(x))
    yi = int(math.floor(y))
    zi = int(math.floor(z))
    wi = int(math.floor(w))
    u = _fade(x - xi)
    v = _fade(y - yi)
    s = _fade(z - zi)
    t = _fade(w - wi)

    blended = 0.0
    for corner in range(16):
        cx = corner & 1
        cy = (corner >> 1) & 1
        cz = (corner >> 2) & 1
        cw = (corner >> 3) & 1
        weight = (_blend_weight(u, cx) * _blend_weight(v, cy)
                  * _blend_weight(s, cz) * _blend_weight(t, cw))
        blended += weight * (hash4(p, xi + cx, yi + cy, zi + cz, wi + cw) / 255.0)
    return clamp_unit(blended * 2.0 - 1.0)
