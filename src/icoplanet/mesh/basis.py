"""Orthonormal patch frames and the fixed neighbour-frame construction."""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.transform import Rotation

# Angle in degrees between the normals of two edge-adjacent icosahedron faces
# (about 41.8103149).
NORMAL_ANGLE_DELTA = math.degrees(math.acos(math.sqrt(5.0) / 3.0))

# Distance from the centre of a unit-edge regular icosahedron to a face centre
# (about 0.755761).
IN_RADIUS = (3.0 + math.sqrt(5.0)) / (4.0 * math.sqrt(3.0))


def rotate(vectors: ArrayLike, degrees: float, axis: ArrayLike) -> NDArray[np.float64]:
    """Rotate vector(s) by ``degrees`` about ``axis`` (right-hand rule)."""
    axis = np.asarray(axis, dtype=np.float64)
    axis = axis / np.linalg.norm(axis)
    rotation = Rotation.from_rotvec(np.radians(degrees) * axis)
    return rotation.apply(np.asarray(vectors, dtype=np.float64))


@dataclass(frozen=True, eq=False)
class Basis:
    """A (normal, tangent, cotangent) frame for one patch.

    Flat lattice points (x, y, z) map to ``x * tangent + y * normal +
    z * cotangent``.
    """

    normal: NDArray[np.float64]
    tangent: NDArray[np.float64]
    cotangent: NDArray[np.float64]

    @classmethod
    def from_normal(
        cls, normal: ArrayLike, tangent: ArrayLike, flip: bool = False
    ) -> "Basis":
        """Build a frame, deriving the cotangent from normal and tangent."""
        normal = np.asarray(normal, dtype=np.float64)
        tangent = np.asarray(tangent, dtype=np.float64)
        if flip:
            cotangent = np.cross(tangent, normal)
        else:
            cotangent = np.cross(normal, tangent)
        return cls(normal, tangent, cotangent)

    def transform_point(self, points: ArrayLike) -> NDArray[np.float64]:
        """Map flat point(s) of shape (3,) or (N, 3) into 3D space."""
        points = np.asarray(points, dtype=np.float64)
        return (
            points[..., 0:1] * self.tangent
            + points[..., 2:3] * self.cotangent
            + points[..., 1:2] * self.normal
        )

    def rotate_by_axis(
        self, degrees: float, axis: ArrayLike, flip: bool = False
    ) -> "Basis":
        """Rotate all three vectors about ``axis``; optionally negate the cotangent."""
        normal, tangent, cotangent = rotate(
            [self.normal, self.tangent, self.cotangent], degrees, axis
        )
        if flip:
            cotangent = -cotangent
        return Basis(normal, tangent, cotangent)


def bordering_bases(current: Basis) -> list[Basis]:
    """Frames of the six faces bordering ``current``.

    Index 0 is the face across the bottom edge (the edge along the tangent),
    1 the face across the top-right edge and 2 across the top-left edge.
    Indices 3-5 are the faces that touch only the bottom-right corner, the
    top corner and the bottom-left corner respectively.

    The order and sign of every rotation matters: a flat point pushed
    through neighbour frame k must land exactly where that neighbour places
    the same lattice point.
    """
    delta = NORMAL_ANGLE_DELTA

    # Hinges along the three edges of the current face.
    edge_hinge0 = current.tangent
    edge_hinge1 = rotate(current.cotangent, -30, current.normal)
    edge_hinge2 = rotate(current.cotangent, 30, current.normal)

    base0 = current.rotate_by_axis(-delta, edge_hinge0, flip=True)

    base1 = current.rotate_by_axis(-delta, edge_hinge1, flip=True)
    base1 = base1.rotate_by_axis(-120, base1.normal)

    base2 = current.rotate_by_axis(delta, edge_hinge2, flip=True)
    base2 = base2.rotate_by_axis(120, base2.normal)
    base2 = Basis(base2.normal, -base2.tangent, base2.cotangent)

    # Hinges along the far edges of the edge neighbours.
    corner_hinge0 = rotate(base0.cotangent, 30, base0.normal)
    corner_hinge1 = rotate(base1.cotangent, 30, base1.normal)
    corner_hinge2 = rotate(base2.cotangent, 30, base2.normal)

    base3 = base0.rotate_by_axis(delta, corner_hinge0)
    base3 = base3.rotate_by_axis(60, base3.normal)

    base4 = base1.rotate_by_axis(delta, corner_hinge1)
    base4 = base4.rotate_by_axis(60, base4.normal)

    base5 = base2.rotate_by_axis(delta, corner_hinge2)
    base5 = base5.rotate_by_axis(240, base5.normal, flip=True)

    return [base0, base1, base2, base3, base4, base5]
