# noise_engine/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback constants for every noise node.
These values are used when a node is built without an explicit override,
either through keyword arguments or through a configuration dictionary passed
to a `from_config` constructor.

DO NOT MODIFY THIS FILE FOR A SPECIFIC NOISE TREE.
Instead, pass the values to the node you are building.
================================================================================
"""

# --- Seeding ---
DEFAULT_SEED = 0
# Seeds are unsigned 32-bit integers; octave seeds wrap around this modulus.
SEED_MODULUS = 2 ** 32

# --- Permutation Table ---
PERMUTATION_TABLE_SIZE = 256
# The table is stored twice back-to-back so lookups never need a modulo.
PERMUTATION_TABLE_REPEAT = 2

# --- Fractal (Multi-Octave) Defaults ---
DEFAULT_OCTAVES = 6
MAX_OCTAVES = 32
DEFAULT_FREQUENCY = 1.0
DEFAULT_PERSISTENCE = 0.5
DEFAULT_LACUNARITY = 2.0
# Ridged multifractal feedback divisor. Higher values keep more detail.
DEFAULT_ATTENUATION = 2.0

# --- Cell (Worley) Noise ---
DEFAULT_WORLEY_FREQUENCY = 1.0
# Fraction of the cell a seed point may wander from the cell centre.
DEFAULT_WORLEY_JITTER = 0.9
# Offset applied to the last lattice axis to draw a second, independent hash.
WORLEY_SECONDARY_HASH_OFFSET = 128

# --- Patterns ---
DEFAULT_CONE_RADIUS = 1.0

# --- Selection ---
DEFAULT_SELECT_LOWER_BOUND = 0.0
DEFAULT_SELECT_UPPER_BOUND = 1.0
DEFAULT_SELECT_FALLOFF = 0.0

# --- Clamp ---
DEFAULT_CLAMP_LOWER_BOUND = -1.0
DEFAULT_CLAMP_UPPER_BOUND = 1.0

# --- Control Point Minimums ---
MIN_CURVE_CONTROL_POINTS = 4
MIN_TERRACE_CONTROL_POINTS = 2

# --- Cycling ---
# Period applied to every axis a CyclePoint is not given one for.
DEFAULT_CYCLE_PERIOD = 1.0

# --- Turbulence ---
DEFAULT_TURBULENCE_FREQUENCY = 1.0
DEFAULT_TURBULENCE_POWER = 1.0
DEFAULT_TURBULENCE_ROUGHNESS = 3
# Per-axis sample offsets that decorrelate the four distortion fields.
# Each row is the offset added to (x, y, z, w) before sampling that axis.
TURBULENCE_OFFSETS = (
    (12414.0 / 65536.0, 65124.0 / 65536.0, 31337.0 / 65536.0, 57948.0 / 65536.0),
    (26519.0 / 65536.0, 18128.0 / 65536.0, 60943.0 / 65536.0, 48513.0 / 65536.0),
    (53820.0 / 65536.0, 11213.0 / 65536.0, 44845.0 / 65536.0, 39357.0 / 65536.0),
    (18128.0 / 65536.0, 44845.0 / 65536.0, 12414.0 / 65536.0, 60943.0 / 65536.0),
)

# --- Supported Dimensionalities ---
ALL_DIMENSIONS = frozenset({2, 3, 4})
