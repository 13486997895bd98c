"""The twenty faces of a regular icosahedron with unit edge length."""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

FACE_COUNT = 20


@dataclass(frozen=True, eq=False)
class Face:
    """A triangular face; corner order fixes winding and the patch frame."""

    a: NDArray[np.float64]
    b: NDArray[np.float64]
    c: NDArray[np.float64]

    @property
    def centre(self) -> NDArray[np.float64]:
        return (self.a + self.b + self.c) / 3.0

    def normal(self) -> NDArray[np.float64]:
        """Unit normal from the cross product of (b - a) and (c - a)."""
        n = np.cross(self.b - self.a, self.c - self.a)
        return n / np.linalg.norm(n)


def generate_faces() -> list[Face]:
    """Return the 20 faces in their fixed order."""
    golden_ratio = (1.0 + math.sqrt(5.0)) * 0.5
    half = golden_ratio * 0.5

    def v(x: float, y: float, z: float) -> NDArray[np.float64]:
        return np.array([x, y, z], dtype=np.float64)

    # xz rectangle
    nx_nz = v(-half, 0.0, -0.5)
    nx_pz = v(-half, 0.0, 0.5)
    px_pz = v(half, 0.0, 0.5)
    px_nz = v(half, 0.0, -0.5)

    # yz rectangle
    ny_nz = v(0.0, -0.5, -half)
    py_nz = v(0.0, 0.5, -half)
    py_pz = v(0.0, 0.5, half)
    ny_pz = v(0.0, -0.5, half)

    # xy rectangle
    nx_ny = v(-0.5, -half, 0.0)
    nx_py = v(-0.5, half, 0.0)
    px_py = v(0.5, half, 0.0)
    px_ny = v(0.5, -half, 0.0)

    corners = [
        (py_nz, nx_py, px_py),
        (px_py, px_nz, py_nz),
        (px_nz, px_py, px_pz),
        (px_pz, px_py, py_pz),
        (py_pz, px_py, nx_py),
        (py_pz, nx_py, nx_pz),
        (nx_pz, nx_py, nx_nz),
        (nx_nz, nx_py, py_nz),
        (ny_nz, py_nz, px_nz),
        (px_nz, px_ny, ny_nz),
        (px_nz, px_pz, px_ny),
        (px_pz, ny_pz, px_ny),
        (px_pz, py_pz, ny_pz),
        (ny_pz, py_pz, nx_pz),
        (nx_ny, ny_nz, px_ny),
        (nx_ny, px_ny, ny_pz),
        (ny_pz, nx_pz, nx_ny),
        (nx_ny, nx_pz, nx_nz),
        (nx_nz, py_nz, ny_nz),
        (nx_ny, nx_nz, ny_nz),
    ]
    return [Face(a, b, c) for a, b, c in corners]
