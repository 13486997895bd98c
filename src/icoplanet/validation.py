"""Post-generation seam validation."""

from dataclasses import dataclass, field

import numpy as np
import structlog
from scipy.spatial import cKDTree

from .mesh.buffers import (
    ghost_index_count,
    ghost_vertex_count,
    index_count,
    vertex_count,
)
from .mesh.icosahedron import FACE_COUNT
from .mesh.icosphere import MeshPatch, PatchBuild

logger = structlog.get_logger()


@dataclass
class ValidationResult:
    """Seam problems found on a generated icosphere.

    Errors are broken invariants; warnings flag inputs that could not be
    fully checked.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def log(self, patches: int) -> None:
        if self.passed:
            logger.info("validation_passed", patches=patches)
        else:
            logger.warning("validation_failed", errors=len(self.errors))
        for error in self.errors:
            logger.error("validation_error", error=error)
        for warning in self.warnings:
            logger.warning("validation_warning", warning=warning)


def validate_patches(
    patches: list[MeshPatch],
    builds: list[PatchBuild],
    tolerance: float = 1e-6,
) -> ValidationResult:
    """Validate a generated icosphere.

    Args:
        patches: Emitted patches, in face order.
        builds: Build state of the same patches (needed for the ghost ring).
        tolerance: Distance under which two vertices count as coincident, and
            maximum component difference between matching normals.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    if len(patches) != len(builds):
        result.add_error(f"Got {len(patches)} patches but {len(builds)} builds")
    if len(patches) != FACE_COUNT:
        result.add_warning(f"Expected {FACE_COUNT} patches, got {len(patches)}")

    for build in builds:
        _check_buffer_sizes(build, result)

    if patches and len(patches) == len(builds):
        positions = np.concatenate([p.vertices for p in patches])
        owners = np.concatenate(
            [np.full(p.vertex_count, i) for i, p in enumerate(patches)]
        )
        tree = cKDTree(positions)

        _check_ghost_coincidence(builds, tree, owners, tolerance, result)
        _check_normal_agreement(patches, tree, owners, tolerance, result)

    result.log(len(patches))
    return result


def _check_buffer_sizes(build: PatchBuild, result: ValidationResult) -> None:
    """Check a patch's buffers match the closed-form sizes and are full."""
    n = build.resolution
    expected = {
        "vertices": (build.vertex_buffer.size, vertex_count(n)),
        "ghost vertices": (build.vertex_buffer.ghost_size, ghost_vertex_count(n)),
        "indices": (build.index_buffer.size, index_count(n)),
        "border indices": (build.index_buffer.border_size, ghost_index_count(n)),
    }
    for label, (actual, wanted) in expected.items():
        if actual != wanted:
            result.add_error(
                f"Patch {build.face_index}: {actual} {label}, expected {wanted}"
            )

    if not build.index_buffer.is_full:
        result.add_error(f"Patch {build.face_index}: index buffer not fully written")


def _check_ghost_coincidence(
    builds: list[PatchBuild],
    tree: cKDTree,
    owners: np.ndarray,
    tolerance: float,
    result: ValidationResult,
) -> None:
    """Check every sampled ghost sits on a real vertex of another patch."""
    for i, build in enumerate(builds):
        ghosts = build.vertex_buffer.gather(build.ghost_indices)
        distances, nearest = tree.query(ghosts)

        # Ghosts lie outside their own patch, so the nearest match must be foreign.
        matched = (distances <= tolerance) & (owners[nearest] != i)
        orphans = int(np.count_nonzero(~matched))

        if orphans:
            result.add_error(
                f"Patch {build.face_index}: {orphans} ghost vertices "
                f"match no vertex on a neighbouring patch"
            )


def _check_normal_agreement(
    patches: list[MeshPatch],
    tree: cKDTree,
    owners: np.ndarray,
    tolerance: float,
    result: ValidationResult,
) -> None:
    """Check coincident seam vertices on different patches share a normal."""
    normals = np.concatenate([p.normals for p in patches])
    pairs = tree.query_pairs(tolerance, output_type="ndarray")
    if len(pairs) == 0:
        result.add_warning("No shared seam vertices found")
        return

    across = owners[pairs[:, 0]] != owners[pairs[:, 1]]
    pairs = pairs[across]

    difference = np.abs(normals[pairs[:, 0]] - normals[pairs[:, 1]]).max(axis=1)
    mismatched = int(np.count_nonzero(difference > tolerance))
    if mismatched:
        result.add_error(
            f"{mismatched} of {len(pairs)} seam vertex pairs have mismatched normals "
            f"(max difference {difference.max():.3g})"
        )
