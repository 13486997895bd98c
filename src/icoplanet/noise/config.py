"""Noise configuration models."""

from enum import IntEnum

from pydantic import BaseModel, Field


class NoiseDimensions(IntEnum):
    """Dimensionality of the underlying simplex sampler."""

    ONE_D = 1
    TWO_D = 2
    THREE_D = 3


class NoiseSettings(BaseModel, frozen=True):
    """Fractal noise parameters for a single noise filter."""

    dimensions: NoiseDimensions = Field(
        default=NoiseDimensions.TWO_D, description="Sampler dimensionality"
    )
    octaves: int = Field(
        default=1, ge=1, description="Number of noise layers summed together"
    )
    scale: float = Field(
        default=1.0, gt=0.0, description="Zoom level (larger is more zoomed in)"
    )
    persistence: float = Field(
        default=1.0,
        ge=0.001,
        le=1.0,
        description="Amplitude multiplier per octave",
    )
    lacunarity: float = Field(
        default=1.0, ge=1.0, description="Frequency multiplier per octave"
    )

    @classmethod
    def default(
        cls, dimensions: NoiseDimensions = NoiseDimensions.TWO_D
    ) -> "NoiseSettings":
        """Single-octave settings with neutral scale, persistence and lacunarity."""
        return cls(dimensions=dimensions)
