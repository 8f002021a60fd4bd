# noise_engine/nodes/__init__.py

# This file makes the 'nodes' directory a Python package.
# It also defines the public API of the node graph.

from .base import NoiseFn
from .generators import (
    Checkerboard, Cone, Constant, Cylinders, OpenSimplex, Perlin, PerlinSurflet,
    SeededGenerator, Simplex, Spheres, SuperSimplex, Value, Worley, WorleyResult,
)
from .fractals import BasicMulti, Billow, Fbm, Fractal, FractalConfig, HybridMulti, RidgedMulti
from .combiners import Add, Combiner, Max, Min, Multiply, Power
from .selectors import Blend, Select
from .modifiers import Abs, Clamp, Curve, Exponent, Invert, Modifier, Negate, ScaleBias, Terrace
from .transformers import (
    CyclePoint, Displace, RotatePoint, ScalePoint, Transformer, TranslatePoint, Turbulence,
)
from .cache import Cache

__all__ = [
    "NoiseFn",
    "SeededGenerator", "Perlin", "PerlinSurflet", "Value", "Simplex", "OpenSimplex",
    "SuperSimplex", "Worley", "WorleyResult",
    "Constant", "Checkerboard", "Cone", "Cylinders", "Spheres",
    "Fractal", "FractalConfig", "Fbm", "Billow", "RidgedMulti", "HybridMulti", "BasicMulti",
    "Combiner", "Add", "Multiply", "Max", "Min", "Power",
    "Blend", "Select",
    "Modifier", "Abs", "Negate", "Invert", "Clamp", "ScaleBias", "Exponent", "Curve", "Terrace",
    "Transformer", "TranslatePoint", "ScalePoint", "RotatePoint", "CyclePoint", "Displace",
    "Turbulence",
    "Cache",
]
