"""Fractal (multi-octave) noise filters built on the simplex samplers."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from . import simplex
from .config import NoiseSettings

# Per-octave offsets are integers drawn from [OFFSET_LOW, OFFSET_HIGH).
OFFSET_LOW = -1000
OFFSET_HIGH = 1000

# Seeds are 32-bit; any int wraps into range.
SEED_MASK = 0xFFFFFFFF


def seeded_rng(seed: int) -> np.random.Generator:
    """Random generator for a seed, accepting negative and oversized ints."""
    return np.random.default_rng(seed & SEED_MASK)


def generate_offsets(seed: int, settings: NoiseSettings) -> NDArray[np.float64]:
    """Draw one offset vector per octave from a seeded generator.

    Only the components used by the configured dimensionality are drawn;
    the rest stay zero.

    Args:
        seed: Random seed.
        settings: Noise settings (octave count and dimensionality).

    Returns:
        Array of shape (octaves, 3).
    """
    rng = seeded_rng(seed)
    dims = int(settings.dimensions)

    offsets = np.zeros((settings.octaves, 3), dtype=np.float64)
    offsets[:, :dims] = rng.integers(
        OFFSET_LOW, OFFSET_HIGH, size=(settings.octaves, dims)
    )
    return offsets


class NoiseFilter:
    """Fractal noise: amplitude-weighted octaves of simplex noise.

    Evaluation is stateless once constructed, so one instance may be shared
    between threads.
    """

    def __init__(self, seed: int, settings: NoiseSettings):
        self.seed = seed
        self.settings = settings
        self.offsets = generate_offsets(seed, settings)
        self.offsets.flags.writeable = False

    def _post_filter(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        return values

    def evaluate(self, points: ArrayLike) -> float | NDArray[np.float64]:
        """Evaluate fractal noise.

        Args:
            points: A single point of shape (3,) or points of shape (N, 3).

        Returns:
            A float for a single point, otherwise an (N,) array, roughly in
            [0, 1].
        """
        points = np.asarray(points, dtype=np.float64)
        single = points.ndim == 1
        points = np.atleast_2d(points)

        settings = self.settings
        sample = np.zeros(points.shape[0], dtype=np.float64)
        max_value = 0.0
        amplitude = 1.0
        frequency = 1.0

        for i in range(settings.octaves):
            inputs = points / settings.scale * frequency + self.offsets[i]

            v = np.asarray(simplex.sample(inputs, settings.dimensions))
            v = self._post_filter(v)

            sample += v * amplitude
            max_value += amplitude
            amplitude *= settings.persistence
            frequency *= settings.lacunarity

        sample /= max_value

        if single:
            return float(sample[0])
        return sample


class RidgedNoiseFilter(NoiseFilter):
    """Fractal noise with every octave folded into sharp ridges."""

    def _post_filter(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        # Fold [0, 1] about its midpoint, invert, then square to sharpen.
        v = 1.0 - np.abs(values * 2.0 - 1.0)
        return v * v


def make_noise_filter(
    seed: int, settings: NoiseSettings, ridged: bool = False
) -> NoiseFilter:
    """Build a standard or ridged noise filter."""
    if ridged:
        return RidgedNoiseFilter(seed, settings)
    return NoiseFilter(seed, settings)
