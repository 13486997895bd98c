"""Icosphere patch meshing."""

from .basis import Basis, bordering_bases
from .buffers import (
    IndexBuffer,
    VertexBuffer,
    ghost_index_count,
    ghost_vertex_count,
    index_count,
    vertex_count,
)
from .icosahedron import FACE_COUNT, Face, generate_faces
from .icosphere import (
    MeshPatch,
    PatchBuild,
    build_all_patches,
    build_patch,
    generate_face_mesh,
    generate_icosphere,
    planet_resolution,
)

__all__ = [
    "FACE_COUNT",
    "Basis",
    "Face",
    "IndexBuffer",
    "MeshPatch",
    "PatchBuild",
    "VertexBuffer",
    "bordering_bases",
    "build_all_patches",
    "build_patch",
    "generate_face_mesh",
    "generate_faces",
    "generate_icosphere",
    "ghost_index_count",
    "ghost_vertex_count",
    "index_count",
    "planet_resolution",
    "vertex_count",
]
