"""Tests for the simplex noise samplers."""

import warnings

import numpy as np

from icoplanet.noise.config import NoiseDimensions
from icoplanet.noise.simplex import PERMUTATION, sample, sample_1d, sample_2d, sample_3d


def _random_coords(count: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.uniform(-50.0, 50.0, size=(count, 3))


class TestPermutation:
    """Tests for the permutation table."""

    def test_table_is_doubled(self) -> None:
        """The 512-entry table repeats a permutation of 0..255."""
        assert len(PERMUTATION) == 512
        np.testing.assert_array_equal(PERMUTATION[:256], PERMUTATION[256:])
        assert sorted(PERMUTATION[:256].tolist()) == list(range(256))


class TestSample1D:
    """Tests for 1D noise."""

    def test_zero_at_lattice_points(self) -> None:
        """Integer coordinates sit on a zero crossing, which maps to 0.5."""
        for x in (-3, 0, 1, 17):
            assert sample_1d(float(x)) == 0.5

    def test_output_range(self) -> None:
        """Values stay within [0, 1]."""
        values = sample_1d(np.linspace(-20.0, 20.0, 10001))
        assert values.min() >= -1e-9
        assert values.max() <= 1.0 + 1e-9

    def test_scalar_returns_float(self) -> None:
        """Scalar input gives a plain float."""
        assert isinstance(sample_1d(0.3), float)

    def test_not_constant(self) -> None:
        """Noise actually varies between lattice points."""
        values = sample_1d(np.linspace(0.0, 10.0, 101))
        assert values.std() > 0.01


class TestSample2D:
    """Tests for 2D noise."""

    def test_origin_is_midpoint(self) -> None:
        """The origin is a zero crossing."""
        assert sample_2d(0.0, 0.0) == 0.5

    def test_output_range(self) -> None:
        """Values stay within [0, 1]."""
        coords = _random_coords(20000)
        values = sample_2d(coords[:, 0], coords[:, 1])
        assert values.min() >= -1e-9
        assert values.max() <= 1.0 + 1e-9

    def test_vectorised_matches_scalar(self) -> None:
        """Array evaluation agrees with point-by-point evaluation."""
        coords = _random_coords(20, seed=4)
        values = sample_2d(coords[:, 0], coords[:, 1])
        for (x, y, _), value in zip(coords, values):
            assert sample_2d(x, y) == value

    def test_continuity(self) -> None:
        """A tiny step in the input produces a tiny step in the output."""
        coords = _random_coords(500, seed=2)
        a = sample_2d(coords[:, 0], coords[:, 1])
        b = sample_2d(coords[:, 0] + 1e-5, coords[:, 1])
        assert np.abs(a - b).max() < 1e-3

    def test_deterministic(self) -> None:
        """Same input always gives the same output."""
        assert sample_2d(12.34, -5.6) == sample_2d(12.34, -5.6)


class TestSample3D:
    """Tests for 3D noise."""

    def test_origin_is_midpoint(self) -> None:
        """The origin is a zero crossing."""
        assert sample_3d(0.0, 0.0, 0.0) == 0.5

    def test_output_range(self) -> None:
        """Values stay within [0, 1] and use a good part of it."""
        coords = _random_coords(50000, seed=1)
        values = sample_3d(coords[:, 0], coords[:, 1], coords[:, 2])
        assert values.min() >= -1e-9
        assert values.max() <= 1.0 + 1e-9
        assert values.max() - values.min() > 0.5

    def test_continuity(self) -> None:
        """A tiny step in the input produces a tiny step in the output."""
        coords = _random_coords(500, seed=3)
        a = sample_3d(coords[:, 0], coords[:, 1], coords[:, 2])
        b = sample_3d(coords[:, 0], coords[:, 1], coords[:, 2] + 1e-5)
        assert np.abs(a - b).max() < 1e-3

    def test_ties_are_consistent(self) -> None:
        """Points on the cube diagonal (all offsets tied) evaluate cleanly."""
        t = np.linspace(-3.0, 3.0, 61)
        values = sample_3d(t, t, t)
        assert np.all(np.isfinite(values))

    def test_huge_coordinates(self) -> None:
        """Coordinates past the integer lattice range sample without warnings."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            first = sample_3d(1e30, 2.0, 3.0)
            second = sample_3d(1e30, 2.0, 3.0)
        assert np.isfinite(first)
        assert first == second


class TestSampleDispatch:
    """Tests for dimension dispatch."""

    def test_one_d_ignores_y_and_z(self) -> None:
        """1D sampling uses only the x component."""
        a = sample(np.array([[0.4, 1.0, 2.0]]), NoiseDimensions.ONE_D)
        b = sample(np.array([[0.4, -7.0, 9.0]]), NoiseDimensions.ONE_D)
        np.testing.assert_array_equal(a, b)

    def test_two_d_ignores_z(self) -> None:
        """2D sampling uses only x and y."""
        a = sample(np.array([0.4, 1.3, 2.0]), NoiseDimensions.TWO_D)
        b = sample(np.array([0.4, 1.3, -5.0]), NoiseDimensions.TWO_D)
        assert a == b

    def test_three_d_matches_direct_call(self) -> None:
        """3D dispatch matches sample_3d."""
        point = np.array([1.1, -2.2, 3.3])
        assert sample(point, NoiseDimensions.THREE_D) == sample_3d(1.1, -2.2, 3.3)

    def test_shape_follows_input(self) -> None:
        """Leading input dimensions carry through."""
        points = np.zeros((4, 5, 3))
        assert sample(points, NoiseDimensions.THREE_D).shape == (4, 5)
