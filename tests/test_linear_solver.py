"""
Unit tests for the linear_solver module.

Tests Gaussian elimination with partial pivoting and 3x3 inversion,
including the singular-input failure value.
"""

import numpy as np
import pytest

from IE_Libs.TransformLib.linear_solver import invert_3x3, solve

IDENTITY = (1, 0, 0, 0, 1, 0, 0, 0, 1)


def _as_matrix(values):
    return np.array(values, dtype=float).reshape(3, 3)


class TestSolve:
    """Tests for solve function."""

    def test_small_system(self):
        x = solve([[2, 1], [1, 3]], [3, 5])
        np.testing.assert_allclose(x, [0.8, 1.4])

    def test_requires_pivoting(self):
        """A zero in the first pivot position must be swapped away."""
        x = solve([[0, 1], [1, 0]], [2, 3])
        np.testing.assert_allclose(x, [3, 2])

    def test_matches_numpy_on_8x8(self):
        rng = np.random.default_rng(7)
        a = rng.random((8, 8)) + 8 * np.eye(8)
        b = rng.random(8)
        np.testing.assert_allclose(solve(a, b), np.linalg.solve(a, b), rtol=1e-10)

    def test_singular_returns_none(self):
        assert solve([[1, 2], [2, 4]], [3, 6]) is None

    def test_tiny_pivot_is_singular(self):
        assert solve([[1e-12, 0], [0, 1e-12]], [1, 1]) is None

    def test_inputs_not_mutated(self):
        a = [[0.0, 1.0], [1.0, 0.0]]
        b = [2.0, 3.0]
        solve(a, b)
        assert a == [[0.0, 1.0], [1.0, 0.0]]
        assert b == [2.0, 3.0]

    def test_non_square_rejected(self):
        with pytest.raises(ValueError):
            solve([[1, 2, 3], [4, 5, 6]], [1, 2])

    def test_mismatched_rhs_rejected(self):
        with pytest.raises(ValueError):
            solve([[1, 0], [0, 1]], [1, 2, 3])


class TestInvert3x3:
    """Tests for invert_3x3 function."""

    def test_identity(self):
        assert invert_3x3(IDENTITY) == pytest.approx(IDENTITY)

    def test_diagonal(self):
        assert invert_3x3((2, 0, 0, 0, 4, 0, 0, 0, 1)) == pytest.approx((0.5, 0, 0, 0, 0.25, 0, 0, 0, 1))

    def test_product_is_identity(self):
        m = (2, -1, 3, 0.5, 4, 1, 0.01, -0.02, 1)
        inverse = invert_3x3(m)
        product = _as_matrix(m) @ _as_matrix(inverse)
        np.testing.assert_allclose(product, np.eye(3), atol=1e-12)

    def test_singular_returns_none(self):
        assert invert_3x3((1, 2, 3, 2, 4, 6, 0, 0, 1)) is None

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError):
            invert_3x3((1, 0, 0, 1))
