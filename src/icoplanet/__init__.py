"""Procedural icosphere planet generation.

Layered simplex noise displaces the surface of a subdivided icosahedron. The
20 faces are meshed as independent patches whose seam normals agree.
"""

from .config import PlanetConfig, find_config, list_configs, load_config
from .curves import ResponseCurve
from .exceptions import (
    BufferOverflowError,
    ChannelMismatchError,
    InvalidResolutionError,
    PlanetError,
)
from .mesh import (
    MeshPatch,
    PatchBuild,
    build_patch,
    generate_icosphere,
    planet_resolution,
)
from .noise import NoiseDimensions, NoiseFilter, NoiseSettings, RidgedNoiseFilter
from .shape import NoiseLayer, ShapeGenerator, ShapeSettings
from .validation import ValidationResult, validate_patches

__all__ = [
    "BufferOverflowError",
    "ChannelMismatchError",
    "InvalidResolutionError",
    "MeshPatch",
    "NoiseDimensions",
    "NoiseFilter",
    "NoiseLayer",
    "NoiseSettings",
    "PatchBuild",
    "PlanetConfig",
    "PlanetError",
    "ResponseCurve",
    "RidgedNoiseFilter",
    "ShapeGenerator",
    "ShapeSettings",
    "ValidationResult",
    "build_patch",
    "find_config",
    "generate_icosphere",
    "list_configs",
    "load_config",
    "planet_resolution",
    "validate_patches",
]
