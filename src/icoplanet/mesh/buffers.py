"""Vertex and index buffers with separate real and ghost (border) ranges.

A single signed index addresses both ranges: non-negative indices hit the
real range, negative index ``i`` hits ghost slot ``-i - 1``. Ghost data only
feeds normal calculation and is never emitted.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import BufferOverflowError, InvalidResolutionError


def _check_resolution(resolution: int) -> None:
    if resolution < 0:
        raise InvalidResolutionError(f"Resolution must be >= 0, got {resolution}")


def vertex_count(resolution: int) -> int:
    """Real vertices in one patch: 3 + 3n + sum(1..n-1)."""
    _check_resolution(resolution)
    count = 3 + 3 * resolution
    for i in range(1, resolution):
        count += i
    return count


def ghost_vertex_count(resolution: int) -> int:
    """Ghost vertex capacity of one patch: 6(n + 1)."""
    _check_resolution(resolution)
    return 6 * (resolution + 1)


def index_count(resolution: int) -> int:
    """Real triangle corners in one patch: 3 * sum(2t - 1 for t in 1..n+1)."""
    _check_resolution(resolution)
    count = 0
    for t in range(1, resolution + 2):
        count += 2 * t - 1
    return 3 * count


def ghost_index_count(resolution: int) -> int:
    """Border triangle corners in one patch: 3(9 + 6n)."""
    _check_resolution(resolution)
    return 3 * (9 + 6 * resolution)


def to_slot(index: int) -> tuple[bool, int]:
    """Map a signed buffer index to (is_ghost, slot)."""
    if index >= 0:
        return False, index
    return True, -index - 1


class VertexBuffer:
    """Fixed-size real and ghost vertex arrays addressed by signed index."""

    def __init__(self, size: int, ghost_size: int = 0):
        self.real = np.zeros((size, 3), dtype=np.float64)
        self.ghost = np.zeros((ghost_size, 3), dtype=np.float64)

    @classmethod
    def create(cls, resolution: int) -> "VertexBuffer":
        """Buffer sized for one icosphere patch."""
        return cls(vertex_count(resolution), ghost_vertex_count(resolution))

    @property
    def size(self) -> int:
        return len(self.real)

    @property
    def ghost_size(self) -> int:
        return len(self.ghost)

    def __getitem__(self, index: int) -> NDArray[np.float64]:
        is_ghost, slot = to_slot(index)
        if is_ghost:
            return self.ghost[slot]
        return self.real[slot]

    def __setitem__(self, index: int, vertex: ArrayLike) -> None:
        is_ghost, slot = to_slot(index)
        if is_ghost:
            self.ghost[slot] = vertex
        else:
            self.real[slot] = vertex

    def gather(self, indices: ArrayLike) -> NDArray[np.float64]:
        """Look up many signed indices at once.

        Args:
            indices: Integer array of signed indices.

        Returns:
            Array of shape indices.shape + (3,).
        """
        indices = np.asarray(indices, dtype=np.int64)
        is_ghost = indices < 0

        vertices = np.empty(indices.shape + (3,), dtype=np.float64)
        vertices[~is_ghost] = self.real[indices[~is_ghost]]
        vertices[is_ghost] = self.ghost[-indices[is_ghost] - 1]
        return vertices

    def copy_vertices(self) -> NDArray[np.float64]:
        """Copy of the real vertices only."""
        return self.real.copy()


class IndexBuffer:
    """Pre-sized triangle index arrays for real and border triangles.

    Triangles are appended in order; writing past either range raises
    ``BufferOverflowError``.
    """

    def __init__(self, size: int, border_size: int = 0):
        self.triangles = np.zeros(size, dtype=np.int64)
        self.border_triangles = np.zeros(border_size, dtype=np.int64)
        self._index = 0
        self._border_index = 0

    @classmethod
    def create(cls, resolution: int) -> "IndexBuffer":
        """Buffer sized for one icosphere patch."""
        return cls(index_count(resolution), ghost_index_count(resolution))

    @property
    def size(self) -> int:
        return len(self.triangles)

    @property
    def border_size(self) -> int:
        return len(self.border_triangles)

    @property
    def filled(self) -> int:
        """Number of real indices written so far."""
        return self._index

    @property
    def border_filled(self) -> int:
        """Number of border indices written so far."""
        return self._border_index

    @property
    def is_full(self) -> bool:
        """True when both ranges have been written exactly to capacity."""
        return self._index == self.size and self._border_index == self.border_size

    def set_triangle(self, a: int, b: int, c: int, border: bool = False) -> None:
        """Append one triangle to the real or border range."""
        if border:
            start = self._border_index
            if start + 3 > self.border_size:
                raise BufferOverflowError(
                    f"Border index buffer full ({self.border_size} indices)"
                )
            self.border_triangles[start:start + 3] = (a, b, c)
            self._border_index += 3
        else:
            start = self._index
            if start + 3 > self.size:
                raise BufferOverflowError(f"Index buffer full ({self.size} indices)")
            self.triangles[start:start + 3] = (a, b, c)
            self._index += 3

    def copy_triangles(self) -> NDArray[np.int64]:
        """Copy of the real triangle indices only."""
        return self.triangles.copy()
