"""Tests for response curves."""

import numpy as np
import pytest
from pydantic import ValidationError

from icoplanet.curves import ResponseCurve


class TestResponseCurve:
    """Tests for key-framed curves."""

    def test_linear_is_identity(self) -> None:
        """The linear curve returns its input on [0, 1]."""
        curve = ResponseCurve.linear()
        x = np.linspace(0.0, 1.0, 11)
        np.testing.assert_allclose(curve(x), x)

    def test_constant(self) -> None:
        """The constant curve ignores its input."""
        curve = ResponseCurve.constant(0.4)
        np.testing.assert_allclose(curve(np.array([0.0, 0.3, 1.0])), 0.4)

    def test_clamps_outside_keys(self) -> None:
        """Inputs beyond the first and last key take the end values."""
        curve = ResponseCurve(times=[0.0, 1.0], values=[0.2, 0.8])
        assert curve(-5.0) == pytest.approx(0.2)
        assert curve(5.0) == pytest.approx(0.8)

    def test_passes_through_keys(self) -> None:
        """The curve hits every key exactly."""
        curve = ResponseCurve(times=[0.0, 0.3, 1.0], values=[0.0, 0.6, 1.0])
        np.testing.assert_allclose(curve([0.0, 0.3, 1.0]), [0.0, 0.6, 1.0])

    def test_monotone_keys_give_monotone_curve(self) -> None:
        """Increasing keys never produce a dip between them."""
        curve = ResponseCurve(times=[0.0, 0.1, 0.9, 1.0], values=[0.0, 0.8, 0.85, 1.0])
        values = curve(np.linspace(0.0, 1.0, 501))
        assert np.all(np.diff(values) >= -1e-12)

    def test_single_key_is_constant(self) -> None:
        """A one-key curve returns that key's value everywhere."""
        curve = ResponseCurve(times=[0.5], values=[0.7])
        np.testing.assert_allclose(curve(np.array([0.0, 1.0])), 0.7)
        assert curve(0.2) == pytest.approx(0.7)

    def test_scalar_returns_float(self) -> None:
        """Scalar input gives a plain float."""
        assert isinstance(ResponseCurve.linear()(0.5), float)

    def test_rejects_mismatched_keys(self) -> None:
        """Times and values must pair up."""
        with pytest.raises(ValidationError):
            ResponseCurve(times=[0.0, 1.0], values=[0.0])

    def test_rejects_unsorted_times(self) -> None:
        """Key times must strictly increase."""
        with pytest.raises(ValidationError):
            ResponseCurve(times=[0.0, 0.5, 0.5], values=[0.0, 0.1, 0.2])

    def test_rejects_empty(self) -> None:
        """At least one key is required."""
        with pytest.raises(ValidationError):
            ResponseCurve(times=[], values=[])

    def test_round_trips_through_dict(self) -> None:
        """A dumped curve validates back to the same curve."""
        curve = ResponseCurve(times=[0.0, 0.4, 1.0], values=[0.1, 0.3, 0.9])
        restored = ResponseCurve.model_validate(curve.model_dump())
        assert restored(0.25) == pytest.approx(curve(0.25))
