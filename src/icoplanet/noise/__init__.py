"""Simplex noise sampling and fractal noise filters."""

from .config import NoiseDimensions, NoiseSettings
from .filters import NoiseFilter, RidgedNoiseFilter, make_noise_filter
from .maps import (
    MappingType,
    blend_layers,
    normalize_weights,
    simplex_map_2d,
    white_noise_map,
)
from .simplex import sample, sample_1d, sample_2d, sample_3d

__all__ = [
    "MappingType",
    "NoiseDimensions",
    "NoiseFilter",
    "NoiseSettings",
    "RidgedNoiseFilter",
    "blend_layers",
    "make_noise_filter",
    "normalize_weights",
    "sample",
    "sample_1d",
    "sample_2d",
    "sample_3d",
    "simplex_map_2d",
    "white_noise_map",
]
