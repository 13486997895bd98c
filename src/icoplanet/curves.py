"""Key-framed response curves for remapping unit-range noise."""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, Field, PrivateAttr, model_validator
from scipy.interpolate import PchipInterpolator


class ResponseCurve(BaseModel, frozen=True):
    """A monotone-friendly curve defined by (time, value) keys.

    Between keys the curve is a shape-preserving cubic (PCHIP), so monotone
    keys give a monotone curve. Inputs outside the key range are clamped.
    """

    times: list[float] = Field(
        default_factory=lambda: [0.0, 1.0], description="Key times, increasing"
    )
    values: list[float] = Field(
        default_factory=lambda: [0.0, 1.0], description="Key values"
    )

    _interpolator: PchipInterpolator | None = PrivateAttr(default=None)

    @model_validator(mode="after")
    def _check_keys(self) -> "ResponseCurve":
        if len(self.times) != len(self.values):
            raise ValueError(
                f"Curve has {len(self.times)} times but {len(self.values)} values"
            )
        if not self.times:
            raise ValueError("Curve needs at least one key")
        if any(b <= a for a, b in zip(self.times, self.times[1:])):
            raise ValueError("Curve key times must be strictly increasing")
        return self

    def model_post_init(self, __context: Any) -> None:
        if len(self.times) >= 2:
            self._interpolator = PchipInterpolator(
                self.times, self.values, extrapolate=False
            )

    @classmethod
    def linear(cls) -> "ResponseCurve":
        """Identity on [0, 1]."""
        return cls(times=[0.0, 1.0], values=[0.0, 1.0])

    @classmethod
    def constant(cls, value: float = 1.0) -> "ResponseCurve":
        """Flat curve returning ``value`` everywhere."""
        return cls(times=[0.0, 1.0], values=[value, value])

    def evaluate(self, x: ArrayLike) -> float | NDArray[np.float64]:
        """Evaluate the curve.

        Args:
            x: Input value(s).

        Returns:
            Curve value(s), a float for scalar input.
        """
        x = np.asarray(x, dtype=np.float64)
        if self._interpolator is None:
            result = np.full(x.shape, self.values[0], dtype=np.float64)
        else:
            clamped = np.clip(x, self.times[0], self.times[-1])
            result = np.asarray(self._interpolator(clamped), dtype=np.float64)

        if result.ndim == 0:
            return float(result)
        return result

    def __call__(self, x: ArrayLike) -> float | NDArray[np.float64]:
        return self.evaluate(x)
