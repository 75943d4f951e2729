"""Tests for Bini's approximate algorithm and its exact polynomial mode."""

from __future__ import annotations

import numpy as np
import pytest

from fast_matrix_multiplication.bini.core import multiply_bini, multiply_bini_exact
from fast_matrix_multiplication.common.datasets import random_float_matrix, random_int_matrix
from fast_matrix_multiplication.common.errors import DimensionMismatchError
from fast_matrix_multiplication.common.metrics import max_relative_difference
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix
from fast_matrix_multiplication.core.polynomial import Polynomial, polynomial_to_scalar, to_polynomial


def test_exact_hand_computed() -> None:
    a = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    b = Matrix.from_flat([6, 5, 4, 3, 2, 1], 2, 3)
    assert multiply_bini_exact(a, b, threshold=1) == Matrix.from_flat([12, 9, 6, 30, 23, 16], 2, 3)

    assert multiply_bini_exact(Matrix.filled(1, 1, 2), Matrix.filled(1, 1, 3), threshold=1) == Matrix.filled(1, 1, 6)

    # inner dimension 4 and three columns: one level plus peeling
    a = Matrix.from_flat([1, 2, 3, 4, 5, 6, 7, 8], 2, 4)
    b = Matrix.from_flat([12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1], 4, 3)
    assert multiply_bini_exact(a, b, threshold=1) == Matrix.from_flat([60, 50, 40, 180, 154, 128], 2, 3)


def test_exact_keeps_input_dtype() -> None:
    a = random_int_matrix(4, 4, seed=0)
    b = random_int_matrix(4, 6, seed=1)
    c = multiply_bini_exact(a, b, threshold=1)
    assert c.dtype == np.int64


def test_exact_square_matches_classic() -> None:
    rng = np.random.default_rng(0)
    for size in range(1, 13):
        a = random_int_matrix(size, size, rng=rng)
        b = random_int_matrix(size, size, rng=rng)
        assert multiply_bini_exact(a, b, threshold=1) == multiply_classic(a, b)


def test_exact_non_square_matches_classic() -> None:
    rng = np.random.default_rng(1)
    for _ in range(12):
        n, k, m = (int(v) for v in rng.integers(1, 14, size=3))
        a = random_int_matrix(n, k, rng=rng)
        b = random_int_matrix(k, m, rng=rng)
        assert multiply_bini_exact(a, b, threshold=2) == multiply_classic(a, b)


def test_generic_polynomial_product_has_epsilon_tail() -> None:
    # the raw result is C + O(ε); only its constant term is the product
    a = random_int_matrix(2, 2, seed=2)
    b = random_int_matrix(2, 3, seed=3)
    raw = multiply_bini(to_polynomial(a), to_polynomial(b), Polynomial.epsilon(), threshold=1)
    assert raw.dtype == object
    assert polynomial_to_scalar(raw, dtype=np.int64) == multiply_classic(a, b)


def test_approx_hand_computed() -> None:
    a = Matrix.from_flat([1.0, 2.0, 3.0, 4.0], 2, 2)
    b = Matrix.from_flat([6.0, 5.0, 4.0, 3.0, 2.0, 1.0], 2, 3)
    c = multiply_bini(a, b, 1e-5, threshold=1)
    assert max_relative_difference(Matrix.from_flat([12, 9, 6, 30, 23, 16], 2, 3), c) <= 1e-3


def test_approx_below_threshold_is_classic() -> None:
    a = random_float_matrix(5, 7, seed=4)
    b = random_float_matrix(7, 6, seed=5)
    assert multiply_bini(a, b, 1e-1) == multiply_classic(a, b)


def test_approx_error_shrinks_with_epsilon() -> None:
    a = random_float_matrix(4, 4, seed=6)
    b = random_float_matrix(4, 6, seed=7)
    correct = multiply_classic(a, b)

    errors = [
        max_relative_difference(correct, multiply_bini(a, b, epsilon, threshold=2))
        for epsilon in (1e-1, 1e-2, 1e-3, 1e-4, 1e-5, 1e-6)
    ]
    assert errors[0] > 0.0
    for larger, smaller in zip(errors, errors[1:]):
        assert smaller <= larger, f"error did not shrink: {errors}"
    assert errors[-1] <= 1e-2


def test_approx_recursive_is_close() -> None:
    a = random_float_matrix(16, 16, seed=8)
    b = random_float_matrix(16, 24, seed=9)
    c = multiply_bini(a, b, 1e-4, threshold=2)
    assert max_relative_difference(multiply_classic(a, b), c) <= 1e-2


def test_invalid_arguments() -> None:
    a = Matrix.zeros(4, 4)
    with pytest.raises(DimensionMismatchError):
        multiply_bini(a, Matrix.zeros(3, 6), 1e-1)
    with pytest.raises(ValueError):
        multiply_bini(a, a, 0.0)
    with pytest.raises(ValueError):
        multiply_bini(a, a, -1e-3)
    with pytest.raises(ValueError):
        multiply_bini(a, a, 1e-1, threshold=0)
    with pytest.raises(DimensionMismatchError):
        multiply_bini_exact(a, Matrix.zeros(3, 6))


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(pytest.main([__file__]))
