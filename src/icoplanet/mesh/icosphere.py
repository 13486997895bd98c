"""Icosphere patch mesh builder.

Each of the 20 icosahedron faces is subdivided into a triangular lattice,
ballooned onto the unit sphere and displaced by a shape function. Patches
are built in isolation; a ring of ghost vertices sampled through the
neighbouring faces' frames gives boundary vertices the same normals their
twins receive on the adjacent patches.
"""

import math
from concurrent import futures
from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import NDArray

from ..exceptions import InvalidResolutionError
from ..shape import ShapeGenerator
from .basis import IN_RADIUS, Basis, bordering_bases
from .buffers import IndexBuffer, VertexBuffer
from .icosahedron import Face, generate_faces

logger = structlog.get_logger()

# Height of an equilateral triangle with unit side.
TRIANGLE_HEIGHT = math.sqrt(3.0) / 2.0


@dataclass(frozen=True, eq=False)
class MeshPatch:
    """One emitted patch: real vertices, their normals and triangle indices."""

    face_index: int
    vertices: NDArray[np.float64]
    normals: NDArray[np.float64]
    triangles: NDArray[np.int64]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3


@dataclass(frozen=True, eq=False)
class PatchBuild:
    """Full per-patch build state, including the ghost ring.

    ``bottom``, ``top_right`` and ``top_left`` hold the signed ghost indices
    past each edge; the last entry of each is the ghost past the
    corresponding corner.
    """

    face_index: int
    resolution: int
    basis: Basis
    vertex_buffer: VertexBuffer
    index_buffer: IndexBuffer
    normals: NDArray[np.float64]
    bottom: list[int]
    top_right: list[int]
    top_left: list[int]

    @property
    def ghost_indices(self) -> list[int]:
        """Every ghost index that is actually sampled."""
        return self.bottom + self.top_right + self.top_left

    def to_patch(self) -> MeshPatch:
        return MeshPatch(
            face_index=self.face_index,
            vertices=self.vertex_buffer.copy_vertices(),
            normals=self.normals,
            triangles=self.index_buffer.copy_triangles(),
        )


def face_basis(face: Face) -> Basis:
    """Frame whose tangent runs along the face's (a - b) edge."""
    tangent = face.a - face.b
    tangent = tangent / np.linalg.norm(tangent)
    return Basis.from_normal(face.normal(), tangent, flip=True)


def lattice_points(resolution: int) -> NDArray[np.float64]:
    """Flat lattice points of one patch, row by row from the bottom edge.

    The triangle has unit side, is centred on the origin and sits at height
    ``IN_RADIUS`` along the frame's normal. Row ``z`` holds
    ``resolution + 2 - z`` points.
    """
    num_rows = resolution + 2
    x_step = 1.0 / (resolution + 1)
    z_step = TRIANGLE_HEIGHT / (resolution + 1)

    points = []
    for z in range(num_rows):
        x_start = z * x_step * 0.5
        z_pos = z * z_step - TRIANGLE_HEIGHT / 3.0
        for x in range(num_rows - z):
            points.append((x_start + x * x_step - 0.5, IN_RADIUS, z_pos))
    return np.array(points, dtype=np.float64)


def _on_sphere(points: NDArray[np.float64]) -> NDArray[np.float64]:
    return points / np.linalg.norm(points, axis=-1, keepdims=True)


def _sample_ghosts(
    resolution: int,
    flat: NDArray[np.float64],
    bases: list[Basis],
    shape: ShapeGenerator,
    vertex_buffer: VertexBuffer,
) -> tuple[list[int], list[int], list[int]]:
    """Sample the ghost ring and record where each ghost landed.

    The three corner ghosts come first (from the second point of row 0),
    followed by one ghost per edge for every point of row 1.
    """
    num_rows = resolution + 2
    corner = flat[1]
    row_one = flat[num_rows:num_rows + num_rows - 1]

    bottom: list[int] = []
    top_right: list[int] = []
    top_left: list[int] = []

    ghost_points = [
        bases[3].transform_point(corner),
        bases[4].transform_point(corner),
        bases[5].transform_point(corner),
    ]
    corner_indices = (-1, -2, -3)

    next_index = -4
    for point in row_one:
        for k, indices in enumerate((bottom, top_right, top_left)):
            ghost_points.append(bases[k].transform_point(point))
            indices.append(next_index)
            next_index -= 1

    bottom.append(corner_indices[0])
    top_right.append(corner_indices[1])
    top_left.append(corner_indices[2])

    ghost_points = np.array(ghost_points)
    displaced = shape.evaluate(_on_sphere(ghost_points))
    vertex_buffer.ghost[: len(displaced)] = displaced

    return bottom, top_right, top_left


def _triangulate(
    resolution: int,
    index_buffer: IndexBuffer,
    bottom: list[int],
    top_right: list[int],
    top_left: list[int],
) -> None:
    """Emit real triangles plus the border triangles that touch the ghost ring."""
    num_rows = resolution + 2
    v = 0

    for y in range(num_rows - 1):
        row_length = num_rows - y

        for x in range(row_length):
            if x < row_length - 1:
                # Pointing up.
                index_buffer.set_triangle(v, v + row_length, v + 1)

                if y == 0:
                    index_buffer.set_triangle(v, v + 1, bottom[x], border=True)

                # Pointing down.
                if x > 0:
                    index_buffer.set_triangle(v, v + row_length - 1, v + row_length)

                    if y == 0:
                        index_buffer.set_triangle(
                            v, bottom[x], bottom[x - 1], border=True
                        )

            # Left edge.
            if x == 0:
                index_buffer.set_triangle(v, top_left[y], v + row_length, border=True)
                if y > 0:
                    index_buffer.set_triangle(
                        v, top_left[y - 1], top_left[y], border=True
                    )
                else:
                    # Bottom-left corner.
                    index_buffer.set_triangle(
                        v, top_left[-1], top_left[0], border=True
                    )
                    index_buffer.set_triangle(
                        v, bottom[0], top_left[-1], border=True
                    )

            # Right edge.
            if x == row_length - 1:
                index_buffer.set_triangle(
                    v, v + row_length - 1, top_right[y], border=True
                )
                if y > 0:
                    index_buffer.set_triangle(
                        v, top_right[y], top_right[y - 1], border=True
                    )
                else:
                    # Bottom-right corner.
                    index_buffer.set_triangle(
                        v, top_right[y], bottom[-1], border=True
                    )
                    index_buffer.set_triangle(
                        v, bottom[-1], bottom[x - 1], border=True
                    )

            v += 1

    # The apex is the only vertex of the last row.
    index_buffer.set_triangle(v, top_right[-1], top_right[-2], border=True)
    index_buffer.set_triangle(v, top_left[-2], top_right[-1], border=True)


def _triangle_normals(
    vertex_buffer: VertexBuffer, triangles: NDArray[np.int64]
) -> tuple[NDArray[np.int64], NDArray[np.float64]]:
    corners = triangles.reshape(-1, 3)
    a = vertex_buffer.gather(corners[:, 0])
    b = vertex_buffer.gather(corners[:, 1])
    c = vertex_buffer.gather(corners[:, 2])
    return corners, np.cross(b - a, c - a)


def compute_normals(
    vertex_buffer: VertexBuffer, index_buffer: IndexBuffer
) -> NDArray[np.float64]:
    """Area-weighted vertex normals for the real vertices.

    Border triangles contribute only to their real corners.
    """
    normals = np.zeros_like(vertex_buffer.real)

    corners, face_normals = _triangle_normals(vertex_buffer, index_buffer.triangles)
    for k in range(3):
        np.add.at(normals, corners[:, k], face_normals)

    corners, face_normals = _triangle_normals(
        vertex_buffer, index_buffer.border_triangles
    )
    for k in range(3):
        real = corners[:, k] >= 0
        np.add.at(normals, corners[real, k], face_normals[real])

    normals /= np.linalg.norm(normals, axis=1, keepdims=True)
    return normals


def build_patch(
    resolution: int,
    face: Face,
    shape: ShapeGenerator,
    face_index: int = 0,
) -> PatchBuild:
    """Build one patch with its ghost ring and normals.

    Args:
        resolution: Number of extra vertices inserted along each edge.
        face: The icosahedron face to subdivide.
        shape: Shape function applied to every lattice point.
        face_index: Index of ``face`` in the face table (for bookkeeping).

    Returns:
        The full build state of the patch.

    Raises:
        InvalidResolutionError: If ``resolution`` is negative.
    """
    if resolution < 0:
        raise InvalidResolutionError(f"Resolution must be >= 0, got {resolution}")

    basis = face_basis(face)
    bases = bordering_bases(basis)

    vertex_buffer = VertexBuffer.create(resolution)
    flat = lattice_points(resolution)
    vertex_buffer.real[:] = shape.evaluate(_on_sphere(basis.transform_point(flat)))

    bottom, top_right, top_left = _sample_ghosts(
        resolution, flat, bases, shape, vertex_buffer
    )

    index_buffer = IndexBuffer.create(resolution)
    _triangulate(resolution, index_buffer, bottom, top_right, top_left)

    normals = compute_normals(vertex_buffer, index_buffer)

    return PatchBuild(
        face_index=face_index,
        resolution=resolution,
        basis=basis,
        vertex_buffer=vertex_buffer,
        index_buffer=index_buffer,
        normals=normals,
        bottom=bottom,
        top_right=top_right,
        top_left=top_left,
    )


def generate_face_mesh(
    resolution: int,
    face: Face,
    shape: ShapeGenerator,
    face_index: int = 0,
) -> MeshPatch:
    """Build one patch and emit only its real geometry."""
    patch = build_patch(resolution, face, shape, face_index).to_patch()
    _log_patch(patch)
    return patch


def _log_patch(patch: MeshPatch) -> None:
    logger.debug(
        "patch_generated",
        face=patch.face_index,
        vertices=patch.vertex_count,
        triangles=patch.triangle_count,
    )


def build_all_patches(
    resolution: int, shape: ShapeGenerator, workers: int | None = None
) -> list[PatchBuild]:
    """Build state for all 20 patches, in face order."""
    faces = generate_faces()

    if workers is None or workers <= 1:
        return [
            build_patch(resolution, face, shape, i) for i, face in enumerate(faces)
        ]

    with futures.ThreadPoolExecutor(max_workers=workers) as executor:
        jobs = [
            executor.submit(build_patch, resolution, face, shape, i)
            for i, face in enumerate(faces)
        ]
        return [job.result() for job in jobs]


def generate_icosphere(
    resolution: int, shape: ShapeGenerator, workers: int | None = None
) -> list[MeshPatch]:
    """Generate the 20 independent patches of a displaced icosphere.

    Patches share no vertex index space. With ``workers`` > 1 the faces are
    built concurrently; output order is always face order.

    Args:
        resolution: Number of extra vertices inserted along each face edge.
        shape: Shape function (read-only, shared by all patches).
        workers: Optional thread count.

    Returns:
        List of 20 MeshPatch objects.

    Raises:
        InvalidResolutionError: If ``resolution`` is negative.
    """
    if resolution < 0:
        raise InvalidResolutionError(f"Resolution must be >= 0, got {resolution}")

    patches = []
    for build in build_all_patches(resolution, shape, workers):
        patch = build.to_patch()
        _log_patch(patch)
        patches.append(patch)

    logger.info(
        "icosphere_generated",
        resolution=resolution,
        patches=len(patches),
        vertices=sum(p.vertex_count for p in patches),
        triangles=sum(p.triangle_count for p in patches),
    )
    return patches


def planet_resolution(detail: int) -> int:
    """Subdivision resolution for a user-facing detail level (>= 1)."""
    if detail < 1:
        raise InvalidResolutionError(f"Detail level must be >= 1, got {detail}")
    return detail * 2 - 1
