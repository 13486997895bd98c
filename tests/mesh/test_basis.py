"""Tests for patch frames and the icosahedron face table."""

import math

import numpy as np
import pytest

from icoplanet.mesh.basis import (
    IN_RADIUS,
    NORMAL_ANGLE_DELTA,
    Basis,
    bordering_bases,
    rotate,
)
from icoplanet.mesh.icosahedron import FACE_COUNT, generate_faces
from icoplanet.mesh.icosphere import face_basis


def _assert_orthonormal(basis: Basis) -> None:
    vectors = np.array([basis.tangent, basis.normal, basis.cotangent])
    np.testing.assert_allclose(vectors @ vectors.T, np.eye(3), atol=1e-12)


class TestConstants:
    """Tests for the icosahedron constants."""

    def test_normal_angle(self) -> None:
        """Adjacent face normals are about 41.81 degrees apart."""
        assert NORMAL_ANGLE_DELTA == pytest.approx(41.8103149, abs=1e-6)

    def test_in_radius(self) -> None:
        """A unit-edge icosahedron has in-radius of about 0.755761."""
        assert IN_RADIUS == pytest.approx(0.755761, abs=1e-6)


class TestRotate:
    """Tests for axis-angle rotation."""

    def test_quarter_turn(self) -> None:
        """Rotation follows the right-hand rule."""
        np.testing.assert_allclose(
            rotate([1.0, 0.0, 0.0], 90.0, [0.0, 0.0, 1.0]), [0.0, 1.0, 0.0], atol=1e-12
        )

    def test_axis_need_not_be_unit(self) -> None:
        """The axis is normalised before use."""
        np.testing.assert_allclose(
            rotate([1.0, 0.0, 0.0], 180.0, [0.0, 0.0, 5.0]), [-1.0, 0.0, 0.0], atol=1e-12
        )

    def test_many_vectors(self) -> None:
        """Several vectors rotate at once."""
        result = rotate(np.eye(3), 120.0, [1.0, 1.0, 1.0])
        np.testing.assert_allclose(result, np.roll(np.eye(3), 1, axis=1), atol=1e-12)


class TestBasis:
    """Tests for single frames."""

    def test_cotangent_handedness(self) -> None:
        """Flipping swaps the cross product order."""
        normal = [0.0, 1.0, 0.0]
        tangent = [1.0, 0.0, 0.0]
        np.testing.assert_allclose(Basis.from_normal(normal, tangent).cotangent, [0, 0, -1])
        np.testing.assert_allclose(
            Basis.from_normal(normal, tangent, flip=True).cotangent, [0, 0, 1]
        )

    def test_transform_point(self) -> None:
        """x follows the tangent, y the normal and z the cotangent."""
        basis = Basis.from_normal([0.0, 0.0, 1.0], [0.0, 1.0, 0.0], flip=True)
        np.testing.assert_allclose(basis.transform_point([1.0, 0.0, 0.0]), basis.tangent)
        np.testing.assert_allclose(basis.transform_point([0.0, 1.0, 0.0]), basis.normal)
        np.testing.assert_allclose(basis.transform_point([0.0, 0.0, 1.0]), basis.cotangent)

    def test_transform_many_points(self) -> None:
        """Vectorised transform keeps the leading shape."""
        basis = Basis.from_normal([0.0, 1.0, 0.0], [1.0, 0.0, 0.0])
        points = np.arange(12.0).reshape(4, 3)
        result = basis.transform_point(points)
        assert result.shape == (4, 3)
        np.testing.assert_allclose(result[2], basis.transform_point(points[2]))

    def test_rotate_by_axis_flip(self) -> None:
        """Flip negates the rotated cotangent."""
        basis = Basis.from_normal([0.0, 1.0, 0.0], [1.0, 0.0, 0.0])
        plain = basis.rotate_by_axis(30.0, [0.0, 1.0, 0.0])
        flipped = basis.rotate_by_axis(30.0, [0.0, 1.0, 0.0], flip=True)
        np.testing.assert_allclose(flipped.cotangent, -plain.cotangent)
        np.testing.assert_allclose(flipped.tangent, plain.tangent)


class TestFaces:
    """Tests for the icosahedron face table."""

    def test_face_count(self) -> None:
        """There are 20 faces."""
        assert len(generate_faces()) == FACE_COUNT

    def test_unit_edges(self) -> None:
        """Every edge has unit length."""
        for face in generate_faces():
            for p, q in ((face.a, face.b), (face.b, face.c), (face.c, face.a)):
                assert np.linalg.norm(p - q) == pytest.approx(1.0)

    def test_face_centres_at_in_radius(self) -> None:
        """Face centres are IN_RADIUS from the origin."""
        for face in generate_faces():
            assert np.linalg.norm(face.centre) == pytest.approx(IN_RADIUS, abs=1e-12)

    def test_normals_point_outward(self) -> None:
        """Winding gives outward normals through the face centres."""
        for face in generate_faces():
            expected = face.centre / np.linalg.norm(face.centre)
            np.testing.assert_allclose(face.normal(), expected, atol=1e-12)

    def test_twelve_distinct_vertices(self) -> None:
        """The faces share the icosahedron's 12 vertices."""
        corners = np.array([c for f in generate_faces() for c in (f.a, f.b, f.c)])
        assert len(np.unique(np.round(corners, 9), axis=0)) == 12


class TestBorderingBases:
    """Tests for neighbour frame derivation."""

    def test_six_orthonormal_frames(self) -> None:
        """Rotations keep every frame orthonormal."""
        for face in generate_faces():
            bases = bordering_bases(face_basis(face))
            assert len(bases) == 6
            for basis in bases:
                _assert_orthonormal(basis)

    def test_edge_neighbours_tilt_by_delta(self) -> None:
        """Edge neighbours' normals sit NORMAL_ANGLE_DELTA from the current normal."""
        current = face_basis(generate_faces()[0])
        expected = math.cos(math.radians(NORMAL_ANGLE_DELTA))
        for basis in bordering_bases(current)[:3]:
            assert np.dot(basis.normal, current.normal) == pytest.approx(expected)

    def test_normals_match_real_faces(self) -> None:
        """Every neighbour frame faces along a distinct icosahedron face normal."""
        faces = generate_faces()
        face_normals = np.array([face.normal() for face in faces])

        for index, face in enumerate(faces):
            matched = set()
            for basis in bordering_bases(face_basis(face)):
                distances = np.linalg.norm(face_normals - basis.normal, axis=1)
                neighbour = int(np.argmin(distances))
                assert distances[neighbour] < 1e-9
                matched.add(neighbour)
            assert index not in matched
            assert len(matched) == 6
