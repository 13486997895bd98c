"""Simplex gradient noise in one, two and three dimensions.

All samplers accept scalars or numpy arrays (broadcast against each other)
and return values in roughly [0, 1]. The permutation table and gradient sets
are module-level constants and are never written to.
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .config import NoiseDimensions

# Ken Perlin's permutation, repeated so lookups never need to wrap.
_PERMUTATION_BASE = [
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
]

PERMUTATION: NDArray[np.int64] = np.array(_PERMUTATION_BASE * 2, dtype=np.int64)
PERMUTATION.flags.writeable = False

HASH_MASK = 255


def _normalized(vectors: list[tuple[float, ...]]) -> NDArray[np.float64]:
    arr = np.array(vectors, dtype=np.float64)
    arr /= np.linalg.norm(arr, axis=1, keepdims=True)
    arr.flags.writeable = False
    return arr


GRADIENTS_1D: NDArray[np.float64] = np.array([1.0, -1.0])
GRADIENTS_1D.flags.writeable = False
GRADIENTS_MASK_1D = 1

GRADIENTS_2D = _normalized([
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (1, 1), (-1, 1), (1, -1), (-1, -1),
])
GRADIENTS_MASK_2D = 7

# The 12 cube-edge directions appear twice so the set has 32 entries and can
# be indexed with a bit mask.
_EDGES_3D = [
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
]
_DIAGONALS_3D = [
    (1, 1, 1), (-1, 1, 1), (1, -1, 1), (-1, -1, 1),
    (1, 1, -1), (-1, 1, -1), (1, -1, -1), (-1, -1, -1),
]
GRADIENTS_3D = _normalized(_EDGES_3D + _EDGES_3D + _DIAGONALS_3D)
GRADIENTS_MASK_3D = 31

# Skew factors between the triangle grid and the square grid.
_SQUARES_TO_TRIANGLES = (3.0 - math.sqrt(3.0)) / 6.0
_TRIANGLES_TO_SQUARES = (math.sqrt(3.0) - 1.0) / 2.0

# Reciprocals of the largest reachable raw sums.
_SCALE_1D = 64.0 / 27.0
_SCALE_2D = 2916.0 * math.sqrt(2.0) / 125.0
_SCALE_3D = 8192.0 * math.sqrt(3.0) / 375.0

# Largest lattice coordinate; leaves headroom for neighbour offsets.
_LATTICE_LIMIT = float(2**62)


def _to_output(values: NDArray[np.float64]) -> float | NDArray[np.float64]:
    if values.ndim == 0:
        return float(values)
    return values


def _floor(values: NDArray[np.float64]) -> NDArray[np.int64]:
    # Clamped so coordinates beyond the int64 range land on a fixed edge cell.
    return np.clip(np.floor(values), -_LATTICE_LIMIT, _LATTICE_LIMIT).astype(np.int64)


def _hash(*coords: NDArray[np.int64]) -> NDArray[np.int64]:
    """Chain lattice coordinates through the permutation table."""
    h = PERMUTATION[coords[0] & HASH_MASK]
    for c in coords[1:]:
        h = PERMUTATION[(h + c) & HASH_MASK]
    return h


# 1D ---------------------------------------------------------------------------


def _part_1d(x: NDArray[np.float64], ix: NDArray[np.int64]) -> NDArray[np.float64]:
    gradient = GRADIENTS_1D[_hash(ix) & GRADIENTS_MASK_1D]
    rel = x - ix
    t = 1.0 - rel * rel
    return gradient * rel * (t * t * t)


def sample_1d(x: ArrayLike) -> float | NDArray[np.float64]:
    """Sample 1D simplex noise.

    Args:
        x: Coordinate(s) on the number line.

    Returns:
        Noise value(s) in [0, 1].
    """
    x = np.asarray(x, dtype=np.float64)
    ix = _floor(x)

    sample = _part_1d(x, ix) + _part_1d(x, ix + 1)
    return _to_output((sample * _SCALE_1D + 1.0) * 0.5)


# 2D ---------------------------------------------------------------------------


def _part_2d(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    ix: NDArray[np.int64],
    iy: NDArray[np.int64],
) -> NDArray[np.float64]:
    unskew = (ix + iy) * _SQUARES_TO_TRIANGLES
    rel_x = x - ix + unskew
    rel_y = y - iy + unskew

    gradient = GRADIENTS_2D[_hash(ix, iy) & GRADIENTS_MASK_2D]
    influence = gradient[..., 0] * rel_x + gradient[..., 1] * rel_y

    t = 0.5 - rel_x * rel_x - rel_y * rel_y
    return influence * np.maximum(t * t * t, 0.0)


def sample_2d(x: ArrayLike, y: ArrayLike) -> float | NDArray[np.float64]:
    """Sample 2D simplex noise.

    The input is skewed onto a square grid to find the containing rhombus;
    the two shared corners always contribute, and the third corner is picked
    by comparing the offsets inside the cell.

    Args:
        x: X coordinate(s).
        y: Y coordinate(s).

    Returns:
        Noise value(s) in [0, 1].
    """
    x, y = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
    )
    skew = (x + y) * _TRIANGLES_TO_SQUARES
    sx = x + skew
    sy = y + skew
    ix = _floor(sx)
    iy = _floor(sy)

    sample = _part_2d(x, y, ix, iy)
    sample = sample + _part_2d(x, y, ix + 1, iy + 1)

    # Lower triangle of the rhombus when x leads (ties go to x).
    step_x = ((sx - ix) >= (sy - iy)).astype(np.int64)
    sample = sample + _part_2d(x, y, ix + step_x, iy + 1 - step_x)

    return _to_output((sample * _SCALE_2D + 1.0) * 0.5)


# 3D ---------------------------------------------------------------------------


def _part_3d(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    z: NDArray[np.float64],
    ix: NDArray[np.int64],
    iy: NDArray[np.int64],
    iz: NDArray[np.int64],
) -> NDArray[np.float64]:
    unskew = (ix + iy + iz) * (1.0 / 6.0)
    rel_x = x - ix + unskew
    rel_y = y - iy + unskew
    rel_z = z - iz + unskew

    gradient = GRADIENTS_3D[_hash(ix, iy, iz) & GRADIENTS_MASK_3D]
    influence = (
        gradient[..., 0] * rel_x
        + gradient[..., 1] * rel_y
        + gradient[..., 2] * rel_z
    )

    t = 0.5 - rel_x * rel_x - rel_y * rel_y - rel_z * rel_z
    return influence * np.maximum(t * t * t, 0.0)


def sample_3d(
    x: ArrayLike, y: ArrayLike, z: ArrayLike
) -> float | NDArray[np.float64]:
    """Sample 3D simplex noise.

    Skews into an approximation of cube space, then adds the contributions of
    the cube's near and far corners plus the two corners selected by ordering
    the in-cube offsets (ties resolved with >=).

    Args:
        x: X coordinate(s).
        y: Y coordinate(s).
        z: Z coordinate(s).

    Returns:
        Noise value(s) in [0, 1].
    """
    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    skew = (x + y + z) * (1.0 / 3.0)
    sx = x + skew
    sy = y + skew
    sz = z + skew
    ix = _floor(sx)
    iy = _floor(sy)
    iz = _floor(sz)

    cube_x = sx - ix
    cube_y = sy - iy
    cube_z = sz - iz

    sample = _part_3d(x, y, z, ix, iy, iz)
    sample = sample + _part_3d(x, y, z, ix + 1, iy + 1, iz + 1)

    x_ge_y = cube_x >= cube_y
    x_ge_z = cube_x >= cube_z
    y_ge_z = cube_y >= cube_z

    # First middle corner: one step along the largest offset.
    i1 = (x_ge_y & x_ge_z).astype(np.int64)
    j1 = (~x_ge_y & y_ge_z).astype(np.int64)
    k1 = 1 - i1 - j1

    # Second middle corner: one step along all but the smallest offset.
    i2 = (x_ge_y | x_ge_z).astype(np.int64)
    j2 = (~x_ge_y | (x_ge_z & y_ge_z)).astype(np.int64)
    k2 = 2 - i2 - j2

    sample = sample + _part_3d(x, y, z, ix + i1, iy + j1, iz + k1)
    sample = sample + _part_3d(x, y, z, ix + i2, iy + j2, iz + k2)

    return _to_output((sample * _SCALE_3D + 1.0) * 0.5)


def sample(
    points: ArrayLike, dimensions: NoiseDimensions
) -> float | NDArray[np.float64]:
    """Sample noise of the given dimensionality at 3-component points.

    Only the first ``dimensions`` components of each point are used.

    Args:
        points: Array of shape (3,) or (..., 3).
        dimensions: Which sampler to use.

    Returns:
        Noise value(s) with the leading shape of ``points``.
    """
    points = np.asarray(points, dtype=np.float64)
    if dimensions == NoiseDimensions.ONE_D:
        return sample_1d(points[..., 0])
    if dimensions == NoiseDimensions.TWO_D:
        return sample_2d(points[..., 0], points[..., 1])
    return sample_3d(points[..., 0], points[..., 1], points[..., 2])
