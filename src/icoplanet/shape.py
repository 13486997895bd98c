"""Shape function: displace unit-sphere points with layered noise."""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, Field

from .curves import ResponseCurve
from .noise.config import NoiseDimensions, NoiseSettings
from .noise.filters import NoiseFilter, make_noise_filter


class NoiseLayer(BaseModel):
    """One independently configured noise contribution to the planet shape."""

    name: str = Field(default="Base Layer", description="Display name")
    seed: int = Field(default=0, description="Seed for this layer's noise filter")
    strength: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Weight of this layer's noise"
    )
    curve: ResponseCurve = Field(
        default_factory=ResponseCurve.linear,
        description="Remaps raw noise before weighting",
    )
    noise_settings: NoiseSettings = Field(
        default_factory=lambda: NoiseSettings.default(NoiseDimensions.THREE_D)
    )
    use_ridged_noise: bool = Field(default=False, description="Use ridged noise")
    hide: bool = Field(default=False, description="Skip this layer entirely")


class ShapeSettings(BaseModel):
    """Radius and noise layers describing a planet's shape."""

    radius: float = Field(default=50.0, gt=0.0, description="Base planet radius")
    use_first_layer_as_mask: bool = Field(
        default=True, description="Scale later layers by the first layer's noise"
    )
    mask_curve: ResponseCurve = Field(
        default_factory=lambda: ResponseCurve.constant(1.0),
        description="Remaps the first layer's noise into a mask",
    )
    noise_layers: list[NoiseLayer] = Field(default_factory=lambda: [NoiseLayer()])

    def max_radius(self) -> float:
        """Upper bound on the distance from the centre to any surface point."""
        max_radius = self.radius
        for layer in self.noise_layers:
            if not layer.hide:
                max_radius += self.radius * layer.strength
        return max_radius


class ShapeGenerator:
    """Maps points on the unit sphere to displaced planet surface points.

    Hidden layers keep a ``None`` placeholder so layer indices line up with
    ``settings.noise_layers``.
    """

    def __init__(self, settings: ShapeSettings):
        self.settings = settings
        self.noise_filters: list[NoiseFilter | None] = [
            None
            if layer.hide
            else make_noise_filter(
                layer.seed, layer.noise_settings, ridged=layer.use_ridged_noise
            )
            for layer in settings.noise_layers
        ]

        layers = settings.noise_layers
        self._masking = (
            settings.use_first_layer_as_mask and bool(layers) and not layers[0].hide
        )

    def elevation(self, points: ArrayLike) -> float | NDArray[np.float64]:
        """Combined layer noise at unit-sphere points.

        Args:
            points: A point of shape (3,) or points of shape (N, 3).

        Returns:
            Noise value(s); 0 when no layer is visible.
        """
        points = np.asarray(points, dtype=np.float64)
        single = points.ndim == 1
        points = np.atleast_2d(points)

        noise = np.zeros(points.shape[0], dtype=np.float64)
        base_noise = np.zeros(points.shape[0], dtype=np.float64)

        for i, noise_filter in enumerate(self.noise_filters):
            if noise_filter is None:
                continue

            layer = self.settings.noise_layers[i]
            added = np.asarray(layer.curve(noise_filter.evaluate(points)))

            if i == 0:
                base_noise = added
            elif self._masking:
                added = added * np.asarray(self.settings.mask_curve(base_noise))

            noise = noise + added * layer.strength

        if single:
            return float(noise[0])
        return noise

    def evaluate(self, points: ArrayLike) -> NDArray[np.float64]:
        """Displace unit-sphere points radially.

        Args:
            points: A point of shape (3,) or points of shape (N, 3).

        Returns:
            ``radius * (1 + noise) * point`` with the same shape as ``points``.
        """
        points = np.asarray(points, dtype=np.float64)
        noise = np.asarray(self.elevation(points))
        scale = np.asarray(self.settings.radius * (1.0 + noise))
        return scale[..., np.newaxis] * points
