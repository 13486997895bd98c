"""2D noise maps and helpers for combining them."""

import math
from enum import Enum
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import ChannelMismatchError
from .config import NoiseSettings
from .filters import NoiseFilter, seeded_rng

# Ratio of horizontal to vertical spacing between cells of a hex grid.
HEX_GRID_RATIO = 4.0 * math.cos(math.radians(30.0)) / 3.0


class MappingType(str, Enum):
    """Grid layout used when sampling a noise map."""

    SQUARE = "square"
    HEXAGONAL = "hexagonal"


def white_noise_map(seed: int, row_length: int, row_count: int) -> NDArray[np.float64]:
    """Generate uniform white noise.

    Args:
        seed: Random seed.
        row_length: Map size along x.
        row_count: Map size along y.

    Returns:
        Array of shape (row_length, row_count) with values in [0, 1).
    """
    rng = seeded_rng(seed)
    # Drawn row by row, indexed [x, y].
    return rng.random((row_count, row_length)).T


def simplex_map_2d(
    seed: int,
    row_length: int,
    row_count: int,
    mapping: MappingType,
    settings: NoiseSettings,
) -> NDArray[np.float64]:
    """Sample fractal noise over a square or hexagonal grid.

    The grid is centred on the origin. Hexagonal grids stretch x by the hex
    spacing ratio and indent every even row by half a cell.

    Args:
        seed: Random seed for the noise filter.
        row_length: Map size along x.
        row_count: Map size along y.
        mapping: Grid layout.
        settings: Noise settings.

    Returns:
        Array of shape (row_length, row_count).
    """
    noise_filter = NoiseFilter(seed, settings)

    x_step = HEX_GRID_RATIO if mapping == MappingType.HEXAGONAL else 1.0
    y_step = 1.0

    xs = (np.arange(row_length) - row_length * 0.5) * x_step
    ys = (np.arange(row_count) - row_count * 0.5) * y_step
    grid_x, grid_y = np.meshgrid(xs, ys, indexing="ij")

    if mapping == MappingType.HEXAGONAL:
        even_rows = (np.arange(row_count) % 2 == 0)[np.newaxis, :]
        grid_x = grid_x + np.where(even_rows, x_step * 0.5, 0.0)

    points = np.stack(
        [grid_x.ravel(), grid_y.ravel(), np.zeros(grid_x.size)], axis=1
    )
    values = noise_filter.evaluate(points)
    return np.asarray(values).reshape(row_length, row_count)


def normalize_weights(
    weights: ArrayLike, cumulative: bool = False
) -> NDArray[np.float64]:
    """Convert weights to fractions of their total.

    Args:
        weights: Non-empty sequence of weights.
        cumulative: If True, each entry also includes all previous fractions,
            so the result climbs from the first fraction to 1.

    Returns:
        Array of fractions.

    Raises:
        ValueError: If ``weights`` is empty or sums to zero.
    """
    weights = np.asarray(weights, dtype=np.float64)
    if weights.size == 0:
        raise ValueError("weights must not be empty")

    total = weights.sum()
    if total == 0:
        raise ValueError("weights must not sum to zero")

    fractions = weights / total
    if cumulative:
        fractions = np.cumsum(fractions)
    return fractions


def blend_layers(
    values: Sequence[ArrayLike], weights: Sequence[float]
) -> NDArray[np.float64]:
    """Weighted average of equally shaped noise maps.

    Args:
        values: Maps to blend.
        weights: One weight per map.

    Returns:
        Blended map.

    Raises:
        ChannelMismatchError: If the number of maps and weights differ.
    """
    if len(values) != len(weights):
        raise ChannelMismatchError(
            f"Got {len(values)} value maps but {len(weights)} weights"
        )

    fractions = normalize_weights(weights)
    stacked = np.stack([np.asarray(v, dtype=np.float64) for v in values])
    return np.tensordot(fractions, stacked, axes=1)
