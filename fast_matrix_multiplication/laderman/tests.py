"""Tests for Laderman's algorithm."""

from __future__ import annotations

import numpy as np
import pytest

from fast_matrix_multiplication.common.datasets import random_float_matrix, random_int_matrix
from fast_matrix_multiplication.common.errors import DimensionMismatchError
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix
from fast_matrix_multiplication.laderman.core import multiply_laderman


def test_hand_computed() -> None:
    a = Matrix.from_flat(range(1, 10), 3, 3)
    b = Matrix.from_flat(range(9, 0, -1), 3, 3)
    expected = Matrix.from_flat([30, 24, 18, 84, 69, 54, 138, 114, 90], 3, 3)
    assert multiply_laderman(a, b, threshold=1) == expected

    # one extra inner index is peeled
    a = Matrix.from_flat(range(1, 13), 3, 4)
    b = Matrix.from_flat(range(12, 0, -1), 4, 3)
    expected = Matrix.from_flat([60, 50, 40, 180, 154, 128, 300, 258, 216], 3, 3)
    assert multiply_laderman(a, b, threshold=1) == expected


def test_small_inputs_use_classic() -> None:
    a = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    b = Matrix.from_flat([6, 5, 4, 3, 2, 1], 2, 3)
    assert multiply_laderman(a, b, threshold=1) == Matrix.from_flat([12, 9, 6, 30, 23, 16], 2, 3)
    assert multiply_laderman(Matrix.filled(1, 1, 2), Matrix.filled(1, 1, 3), threshold=1) == Matrix.filled(1, 1, 6)


def test_single_level_each_product_lands_in_place() -> None:
    # 1 x 1 blocks: every one of the 23 products is a scalar, so a wrong
    # sign or target block shows up directly
    for seed in range(10):
        a = random_int_matrix(3, 3, seed=seed)
        b = random_int_matrix(3, 3, seed=seed + 100)
        assert multiply_laderman(a, b, threshold=1) == multiply_classic(a, b)


def test_identity() -> None:
    for size in range(1, 20):
        eye = Matrix.identity(size)
        assert multiply_laderman(eye, eye, threshold=1) == eye


def test_square_matches_classic() -> None:
    rng = np.random.default_rng(0)
    for size in range(1, 22):
        a = random_int_matrix(size, size, rng=rng)
        b = random_int_matrix(size, size, rng=rng)
        assert multiply_laderman(a, b, threshold=2) == multiply_classic(a, b)


def test_non_square_matches_classic() -> None:
    rng = np.random.default_rng(1)
    for _ in range(20):
        n, k, m = (int(v) for v in rng.integers(1, 25, size=3))
        a = random_int_matrix(n, k, rng=rng)
        b = random_int_matrix(k, m, rng=rng)
        assert multiply_laderman(a, b, threshold=2) == multiply_classic(a, b)


def test_two_levels_with_peeling() -> None:
    a = random_float_matrix(29, 31, seed=2)
    b = random_float_matrix(31, 28, seed=3)
    assert multiply_laderman(a, b, threshold=3) == multiply_classic(a, b)


def test_invalid_arguments() -> None:
    with pytest.raises(DimensionMismatchError):
        multiply_laderman(Matrix.zeros(3, 4), Matrix.zeros(3, 3))
    with pytest.raises(ValueError):
        multiply_laderman(Matrix.zeros(3, 3), Matrix.zeros(3, 3), threshold=0)


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(pytest.main([__file__]))
