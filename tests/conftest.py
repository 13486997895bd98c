"""Shared test fixtures for planet generation tests."""

import pytest

from icoplanet.curves import ResponseCurve
from icoplanet.noise.config import NoiseDimensions, NoiseSettings
from icoplanet.shape import NoiseLayer, ShapeGenerator, ShapeSettings


@pytest.fixture
def sphere_settings() -> ShapeSettings:
    """Radius-10 planet with no noise layers (a perfect sphere)."""
    return ShapeSettings(radius=10.0, noise_layers=[])


@pytest.fixture
def sphere_shape(sphere_settings: ShapeSettings) -> ShapeGenerator:
    return ShapeGenerator(sphere_settings)


@pytest.fixture
def planet_settings() -> ShapeSettings:
    """Two visible layers, the second ridged and masked by the first."""
    return ShapeSettings(
        radius=50.0,
        use_first_layer_as_mask=True,
        mask_curve=ResponseCurve(times=[0.0, 0.5, 1.0], values=[0.0, 0.3, 1.0]),
        noise_layers=[
            NoiseLayer(
                name="Continents",
                seed=3,
                strength=0.2,
                noise_settings=NoiseSettings(
                    dimensions=NoiseDimensions.THREE_D,
                    octaves=3,
                    scale=0.7,
                    persistence=0.5,
                    lacunarity=2.0,
                ),
            ),
            NoiseLayer(
                name="Mountains",
                seed=11,
                strength=0.1,
                use_ridged_noise=True,
                noise_settings=NoiseSettings(
                    dimensions=NoiseDimensions.THREE_D,
                    octaves=2,
                    scale=0.3,
                    persistence=0.5,
                    lacunarity=2.0,
                ),
            ),
        ],
    )


@pytest.fixture
def planet_shape(planet_settings: ShapeSettings) -> ShapeGenerator:
    return ShapeGenerator(planet_settings)
