# noise_engine/nodes/fractals.py

"""
================================================================================
FRACTAL COMBINATORS
================================================================================
Multi-octave noise. Each octave samples its own seeded copy of a generator at
a higher frequency and lower amplitude, and the octaves are folded together
with a per-family rule.

Data Contract:
---------------
- Inputs (on initialization):
    - seed, octaves, frequency (or wavelength), persistence, lacunarity and,
      for RidgedMulti, attenuation. Missing options fall back to config.py.
    - source: A SeededGenerator subclass; octave i uses seed + i.
- Outputs (from get):
    - A float, normalized so a single octave reproduces the (shaped) source.
- Side Effects: Builds one permutation table per octave on initialization.
- Invariants:
    - 1 <= octaves <= MAX_OCTAVES.
    - Octave i samples the point scaled by frequency * lacunarity ** i with
      amplitude persistence ** i.
================================================================================
"""

import abc
import dataclasses
import logging

from .. import config as DEFAULTS
from ..errors import ConfigurationError
from ..permutation import validate_seed
from .base import NoiseFn, common_dims, require_positive
from .generators import Perlin, SeededGenerator

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class FractalConfig:
    """Validated multi-octave settings shared by every fractal node."""
    seed: int = DEFAULTS.DEFAULT_SEED
    octaves: int = DEFAULTS.DEFAULT_OCTAVES
    frequency: float = DEFAULTS.DEFAULT_FREQUENCY
    persistence: float = DEFAULTS.DEFAULT_PERSISTENCE
    lacunarity: float = DEFAULTS.DEFAULT_LACUNARITY

    def __post_init__(self):
        validate_seed(self.seed)
        octaves = self.octaves
        if isinstance(octaves, bool) or not isinstance(octaves, int):
            logger.debug(f"Rejected octave count {octaves!r}.")
            raise ConfigurationError(f"octaves must be an integer, got {octaves!r}.")
        if not 1 <= octaves <= DEFAULTS.MAX_OCTAVES:
            logger.debug(f"Rejected octave count {octaves}.")
            raise ConfigurationError(
                f"octaves must be between 1 and {DEFAULTS.MAX_OCTAVES}, got {octaves}."
            )
        object.__setattr__(self, "frequency", require_positive("frequency", self.frequency))
        object.__setattr__(self, "persistence", require_positive("persistence", self.persistence))
        object.__setattr__(self, "lacunarity", require_positive("lacunarity", self.lacunarity))

    @property
    def wavelength(self) -> float:
        return 1.0 / self.frequency

    def octave_seeds(self) -> list:
        return [(self.seed + i) % DEFAULTS.SEED_MODULUS for i in range(self.octaves)]


def resolve_frequency(frequency, wavelength) -> float:
    """Frequency and wavelength are two views of one option; at most one may be given."""
    if frequency is not None and wavelength is not None:
        logger.debug(f"Rejected frequency={frequency} together with wavelength={wavelength}.")
        raise ConfigurationError("Give either frequency or wavelength, not both.")
    if wavelength is not None:
        return 1.0 / require_positive("wavelength", wavelength)
    if frequency is not None:
        return frequency
    return DEFAULTS.DEFAULT_FREQUENCY


class Fractal(NoiseFn):
    """
    Base class for multi-octave noise. Subclasses implement `_combine`, which
    receives the octave samples in order.
    """

    def __init__(
        self,
        seed: int = DEFAULTS.DEFAULT_SEED,
        octaves: int = DEFAULTS.DEFAULT_OCTAVES,
        frequency: float = None,
        wavelength: float = None,
        persistence: float = DEFAULTS.DEFAULT_PERSISTENCE,
        lacunarity: float = DEFAULTS.DEFAULT_LACUNARITY,
        source: type = Perlin,
    ):
        self.config = FractalConfig(
            seed=seed,
            octaves=octaves,
            frequency=resolve_frequency(frequency, wavelength),
            persistence=persistence,
            lacunarity=lacunarity,
        )
        if not (isinstance(source, type) and issubclass(source, SeededGenerator)):
            logger.debug(f"Rejected fractal source {source!r}.")
            raise ConfigurationError(f"source must be a seeded generator class, got {source!r}.")
        self.source = source
        self.sources = tuple(source(seed=s) for s in self.config.octave_seeds())
        self.dims = common_dims(*self.sources)

        # Amplitude of each octave and their sum, used for normalization.
        self._amplitudes = tuple(
            self.config.persistence ** i for i in range(self.config.octaves)
        )
        self._amplitude_sum = sum(self._amplitudes)
        logger.debug(
            f"Built {type(self).__name__} with {octaves} octaves of {source.__name__} "
            f"(seed={seed}, frequency={self.config.frequency})."
        )

    # --- Accessors ---
    @property
    def seed(self) -> int:
        return self.config.seed

    @property
    def octaves(self) -> int:
        return self.config.octaves

    @property
    def frequency(self) -> float:
        return self.config.frequency

    @property
    def wavelength(self) -> float:
        return self.config.wavelength

    @property
    def persistence(self) -> float:
        return self.config.persistence

    @property
    def lacunarity(self) -> float:
        return self.config.lacunarity

    # --- Builders ---
    def _options(self) -> dict:
        options = dataclasses.asdict(self.config)
        options["source"] = self.source
        return options

    def _rebuild(self, **changes):
        options = self._options()
        options.update(changes)
        return type(self)(**options)

    def set_seed(self, seed: int):
        return self._rebuild(seed=seed)

    def set_octaves(self, octaves: int):
        return self._rebuild(octaves=octaves)

    def set_frequency(self, frequency: float):
        return self._rebuild(frequency=frequency)

    def set_wavelength(self, wavelength: float):
        return self._rebuild(frequency=None, wavelength=wavelength)

    def set_persistence(self, persistence: float):
        return self._rebuild(persistence=persistence)

    def set_lacunarity(self, lacunarity: float):
        return self._rebuild(lacunarity=lacunarity)

    def set_source(self, source: type):
        return self._rebuild(source=source)

    @classmethod
    def _options_from_config(cls, config: dict) -> dict:
        return {
            'seed': config.get('seed', DEFAULTS.DEFAULT_SEED),
            'octaves': config.get('octaves', DEFAULTS.DEFAULT_OCTAVES),
            'frequency': config.get('frequency'),
            'wavelength': config.get('wavelength'),
            'persistence': config.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE),
            'lacunarity': config.get('lacunarity', DEFAULTS.DEFAULT_LACUNARITY),
        }

    @classmethod
    def from_config(cls, config: dict, source: type = Perlin):
        """
        Builds a node from a plain dictionary.

        Args:
            config (dict): User-defined options to override defaults. Unknown
                keys are ignored.
            source (type): Generator class used for each octave.
        """
        return cls(source=source, **cls._options_from_config(config))

    # --- Evaluation ---
    def _samples(self, point):
        scale = self.config.frequency
        lacunarity = self.config.lacunarity
        for source in self.sources:
            yield source._get(tuple(c * scale for c in point))
            scale *= lacunarity

    def _get(self, point):
        return self._combine(self._samples(point))

    @abc.abstractmethod
    def _combine(self, samples) -> float:
        ...

    def __repr__(self):
        return (
            f"{type(self).__name__}(seed={self.seed}, octaves={self.octaves}, "
            f"frequency={self.frequency}, persistence={self.persistence}, "
            f"lacunarity={self.lacunarity}, source={self.source.__name__})"
        )


class Fbm(Fractal):
    """Fractal Brownian motion: an amplitude-weighted sum of octaves."""

    def _combine(self, samples):
        result = 0.0
        for signal, amplitude in zip(samples, self._amplitudes):
            result += signal * amplitude
        return result / self._amplitude_sum


class Billow(Fractal):
    """Like Fbm, but every octave is folded with 2|s| - 1 into puffy lobes."""

    def _combine(self, samples):
        result = 0.0
        for signal, amplitude in zip(samples, self._amplitudes):
            result += (abs(signal) * 2.0 - 1.0) * amplitude
        return result / self._amplitude_sum


class RidgedMulti(Fractal):
    """
    Ridged multifractal: octaves are inverted into sharp ridges and each
    octave is weighted by the previous one, so detail collects on the ridges.

    `attenuation` divides the feedback weight; larger values keep more detail
    in the valleys.
    """

    def __init__(self, *args, attenuation: float = DEFAULTS.DEFAULT_ATTENUATION, **kwargs):
        self.attenuation = require_positive("attenuation", attenuation)
        super().__init__(*args, **kwargs)

    def _options(self) -> dict:
        options = super()._options()
        options["attenuation"] = self.attenuation
        return options

    @classmethod
    def _options_from_config(cls, config: dict) -> dict:
        options = super()._options_from_config(config)
        options['attenuation'] = config.get('attenuation', DEFAULTS.DEFAULT_ATTENUATION)
        return options

    def set_attenuation(self, attenuation: float):
        return self._rebuild(attenuation=attenuation)

    def _combine(self, samples):
        result = 0.0
        weight = 1.0
        for signal, amplitude in zip(samples, self._amplitudes):
            signal = 1.0 - abs(signal)
            signal *= signal
            signal *= weight
            weight = min(max(signal / self.attenuation, 0.0), 1.0)
            result += signal * amplitude
        return result / self._amplitude_sum * 2.0 - 1.0


class HybridMulti(Fractal):
    """
    Hybrid multifractal: each octave's contribution is scaled by a running
    weight built from the octaves before it, so smooth areas stay smooth.
    """

    def _combine(self, samples):
        samples = iter(samples)
        result = next(samples)
        weight = result
        for signal, amplitude in zip(samples, self._amplitudes[1:]):
            weight = min(weight, 1.0)
            signal *= amplitude
            result += weight * signal
            weight *= signal
        return result / self._amplitude_sum


class BasicMulti(Fractal):
    """Basic multifractal: each octave is scaled by the running result."""

    def _combine(self, samples):
        samples = iter(samples)
        result = next(samples)
        for signal, amplitude in zip(samples, self._amplitudes[1:]):
            result += signal * amplitude * result
        return result / (2.0 - self._amplitudes[-1])
