"""Tests for Schönhage's approximate algorithm and its exact polynomial mode."""

from __future__ import annotations

import numpy as np
import pytest

from fast_matrix_multiplication.common.datasets import random_float_matrix, random_int_matrix
from fast_matrix_multiplication.common.errors import DimensionMismatchError
from fast_matrix_multiplication.common.metrics import max_relative_difference
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix
from fast_matrix_multiplication.schonhage.core import multiply_schonhage, multiply_schonhage_exact


def test_exact_hand_computed() -> None:
    a = Matrix.from_flat(range(1, 10), 3, 3)
    b = Matrix.from_flat(range(9, 0, -1), 3, 3)
    expected = Matrix.from_flat([30, 24, 18, 84, 69, 54, 138, 114, 90], 3, 3)
    assert multiply_schonhage_exact(a, b, threshold=1) == expected

    a = Matrix.from_flat(range(1, 13), 3, 4)
    b = Matrix.from_flat(range(12, 0, -1), 4, 3)
    expected = Matrix.from_flat([60, 50, 40, 180, 154, 128, 300, 258, 216], 3, 3)
    assert multiply_schonhage_exact(a, b, threshold=1) == expected


def test_exact_small_inputs_use_classic() -> None:
    a = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    b = Matrix.from_flat([6, 5, 4, 3, 2, 1], 2, 3)
    assert multiply_schonhage_exact(a, b, threshold=1) == Matrix.from_flat([12, 9, 6, 30, 23, 16], 2, 3)
    assert multiply_schonhage_exact(Matrix.filled(1, 1, 2), Matrix.filled(1, 1, 3)) == Matrix.filled(1, 1, 6)


def test_exact_single_level() -> None:
    for seed in range(5):
        a = random_int_matrix(3, 3, seed=seed)
        b = random_int_matrix(3, 3, seed=seed + 50)
        assert multiply_schonhage_exact(a, b, threshold=1) == multiply_classic(a, b)


def test_exact_square_matches_classic() -> None:
    rng = np.random.default_rng(0)
    for size in range(1, 11):
        a = random_int_matrix(size, size, rng=rng)
        b = random_int_matrix(size, size, rng=rng)
        assert multiply_schonhage_exact(a, b, threshold=1) == multiply_classic(a, b)


def test_exact_non_square_matches_classic() -> None:
    rng = np.random.default_rng(1)
    for _ in range(10):
        n, k, m = (int(v) for v in rng.integers(1, 13, size=3))
        a = random_int_matrix(n, k, rng=rng)
        b = random_int_matrix(k, m, rng=rng)
        assert multiply_schonhage_exact(a, b, threshold=2) == multiply_classic(a, b)


def test_exact_two_levels() -> None:
    # 9 x 9 -> 3 x 3 blocks -> 1 x 1 blocks
    a = random_int_matrix(9, 10, seed=11)
    b = random_int_matrix(10, 9, seed=12)
    assert multiply_schonhage_exact(a, b, threshold=1) == multiply_classic(a, b)


def test_approx_below_threshold_is_classic() -> None:
    a = random_float_matrix(6, 6, seed=3)
    b = random_float_matrix(6, 6, seed=4)
    assert multiply_schonhage(a, b, 1e-1) == multiply_classic(a, b)


def test_approx_error_shrinks_with_epsilon() -> None:
    a = random_float_matrix(6, 6, seed=5)
    b = random_float_matrix(6, 6, seed=6)
    correct = multiply_classic(a, b)

    # below about 1e-5 round-off from the division by ε² dominates
    errors = [
        max_relative_difference(correct, multiply_schonhage(a, b, epsilon, threshold=2))
        for epsilon in (1e-1, 1e-2, 1e-3, 1e-4)
    ]
    assert errors[0] > 0.0
    for larger, smaller in zip(errors, errors[1:]):
        assert smaller <= larger, f"error did not shrink: {errors}"
    assert errors[-1] <= 1e-2


def test_invalid_arguments() -> None:
    a = Matrix.zeros(3, 3)
    with pytest.raises(DimensionMismatchError):
        multiply_schonhage(a, Matrix.zeros(4, 3), 1e-1)
    with pytest.raises(ValueError):
        multiply_schonhage(a, a, 0.0)
    with pytest.raises(ValueError):
        multiply_schonhage(a, a, 1e-1, threshold=0)
    with pytest.raises(DimensionMismatchError):
        multiply_schonhage_exact(a, Matrix.zeros(4, 3))


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(pytest.main([__file__]))
