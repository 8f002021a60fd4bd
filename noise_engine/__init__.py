# noise_engine/__init__.py

"""
================================================================================
NOISE ENGINE
================================================================================
Composable procedural noise: seeded lattice noises, cellular noise, fractal
combinators and a node graph of combiners, modifiers and transformers.

    >>> from noise_engine import Fbm, ScaleBias
    >>> terrain = ScaleBias(Fbm(seed=42, octaves=5), scale=0.5, bias=0.5)
    >>> height = terrain.get((1.25, 3.5))

The package logs through the standard `logging` module under the
"noise_engine" logger and never configures handlers itself.
================================================================================
"""

import logging

from .errors import ConfigurationError, DimensionMismatchError, NoiseConfigError
from .permutation import SeedTable
from .worley import DistanceMetric, WorleyReturn
from .nodes import *  # noqa: F401,F403
from .nodes import __all__ as _node_names

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "DimensionMismatchError",
    "NoiseConfigError",
    "SeedTable",
    "DistanceMetric",
    "WorleyReturn",
] + list(_node_names)
