# noise_engine/permutation.py

"""
================================================================================
SEED TABLE
================================================================================
A seeded permutation of the integers 0..255 used to hash integer lattice
coordinates into pseudo-random indices.

Data Contract:
---------------
- Inputs:
    - seed (int): An unsigned 32-bit seed.
- Outputs:
    - SeedTable.table: A read-only NumPy int64 array of length 512 holding the
      permutation twice, ready to be handed to the compiled noise kernels.
    - SeedTable.hash(*indices): An integer in [0, 255].
- Side Effects: Logs a debug message when a table is generated.
- Invariants: The same seed always produces the same table, in any process.
================================================================================
"""

import logging
import numbers

import numpy as np

from . import config as DEFAULTS
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def validate_seed(seed) -> int:
    """Checks that a seed is an unsigned 32-bit integer and returns it as int."""
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
        logger.debug(f"Rejected non-integer seed {seed!r}.")
        raise ConfigurationError(f"Seed must be an integer, got {seed!r}.")
    if not 0 <= seed < DEFAULTS.SEED_MODULUS:
        logger.debug(f"Rejected out-of-range seed {seed}.")
        raise ConfigurationError(
            f"Seed must be in [0, {DEFAULTS.SEED_MODULUS - 1}], got {seed}."
        )
    return int(seed)


def generate_permutation_table(seed: int) -> np.ndarray:
    """Shuffles the identity permutation with the seed and doubles it."""
    p = np.arange(DEFAULTS.PERMUTATION_TABLE_SIZE, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    table = np.tile(p, DEFAULTS.PERMUTATION_TABLE_REPEAT)
    table.setflags(write=False)
    return table


class SeedTable:
    """
    Immutable permutation table shared by every node built from the same seed.
    """

    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED):
        self.seed = validate_seed(seed)
        self.table = generate_permutation_table(self.seed)
        logger.debug(f"Generated permutation table for seed {self.seed}.")

    def hash(self, *indices: int) -> int:
        """
        Folds integer lattice coordinates through the table.

        The first coordinate indexes the table directly; every further
        coordinate is XOR-ed into the previous lookup before the next one.
        """
        if not indices:
            raise ConfigurationError("hash() needs at least one lattice index.")
        table = self.table
        h = int(indices[0]) & 255
        for index in indices[1:]:
            h = int(table[h]) ^ (int(index) & 255)
        return int(table[h])

    def __eq__(self, other):
        if not isinstance(other, SeedTable):
            return NotImplemented
        return self.seed == other.seed

    def __hash__(self):
        return hash(("SeedTable", self.seed))

    def __repr__(self):
        return f"SeedTable(seed={self.seed})"
