# noise_engine/errors.py

"""
Exceptions raised while building or querying a noise tree.

Every configuration problem is reported when a node is constructed, never
while it is being evaluated. Both concrete errors derive from ValueError so
callers that already guard against bad values keep working.
"""


class NoiseConfigError(ValueError):
    """Base class for all noise_engine errors."""


class ConfigurationError(NoiseConfigError):
    """An option is outside its valid range or has the wrong shape."""


class DimensionMismatchError(NoiseConfigError):
    """A node was combined with, or queried at, an unsupported dimensionality."""
