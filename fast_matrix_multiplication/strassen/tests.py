"""Tests for Strassen's algorithm (static padding and dynamic peeling)."""

from __future__ import annotations

import numpy as np
import pytest

from fast_matrix_multiplication.common.datasets import random_float_matrix, random_int_matrix
from fast_matrix_multiplication.common.errors import DimensionMismatchError
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix
from fast_matrix_multiplication.strassen.core import (
    multiply_strassen_dynamic,
    multiply_strassen_static,
    next_power_of_two,
)

VARIANTS = [multiply_strassen_static, multiply_strassen_dynamic]


def test_next_power_of_two() -> None:
    assert [next_power_of_two(v) for v in (0, 1, 2, 3, 4, 5, 17, 64)] == [1, 1, 2, 4, 4, 8, 32, 64]


@pytest.mark.parametrize("multiply", VARIANTS)
def test_hand_computed(multiply) -> None:
    a = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    b = Matrix.from_flat([4, 3, 2, 1], 2, 2)
    assert multiply(a, b, threshold=1) == Matrix.from_flat([8, 5, 20, 13], 2, 2)

    a = Matrix.from_flat([1, 2, 3, 4, 5, 6, 7, 8], 2, 4)
    b = Matrix.from_flat([12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1], 4, 3)
    assert multiply(a, b, threshold=1) == Matrix.from_flat([60, 50, 40, 180, 154, 128], 2, 3)

    assert multiply(Matrix.filled(1, 1, 2), Matrix.filled(1, 1, 3), threshold=1) == Matrix.filled(1, 1, 6)


@pytest.mark.parametrize("multiply", VARIANTS)
def test_identity(multiply) -> None:
    for size in range(1, 20):
        eye = Matrix.identity(size)
        assert multiply(eye, eye, threshold=4) == eye


@pytest.mark.parametrize("multiply", VARIANTS)
def test_square_matches_classic(multiply) -> None:
    rng = np.random.default_rng(0)
    for size in range(1, 25):
        a = random_int_matrix(size, size, rng=rng)
        b = random_int_matrix(size, size, rng=rng)
        assert multiply(a, b, threshold=2) == multiply_classic(a, b)


@pytest.mark.parametrize("multiply", VARIANTS)
def test_non_square_matches_classic(multiply) -> None:
    rng = np.random.default_rng(1)
    for _ in range(25):
        n, k, m = (int(v) for v in rng.integers(1, 30, size=3))
        a = random_int_matrix(n, k, rng=rng)
        b = random_int_matrix(k, m, rng=rng)
        assert multiply(a, b, threshold=4) == multiply_classic(a, b)


@pytest.mark.parametrize("multiply", VARIANTS)
def test_integer_valued_floats_are_exact(multiply) -> None:
    a = random_float_matrix(33, 21, seed=3)
    b = random_float_matrix(21, 17, seed=4)
    assert multiply(a, b, threshold=4) == multiply_classic(a, b)


@pytest.mark.parametrize("multiply", VARIANTS)
def test_default_threshold_falls_back_to_classic(multiply) -> None:
    a = random_int_matrix(12, 9, seed=5)
    b = random_int_matrix(9, 14, seed=6)
    assert multiply(a, b) == multiply_classic(a, b)


@pytest.mark.parametrize("multiply", VARIANTS)
def test_invalid_arguments(multiply) -> None:
    with pytest.raises(DimensionMismatchError):
        multiply(Matrix.zeros(2, 3), Matrix.zeros(2, 3))
    with pytest.raises(ValueError):
        multiply(Matrix.zeros(2, 2), Matrix.zeros(2, 2), threshold=0)


def test_static_pads_to_largest_dimension() -> None:
    # strongly rectangular: padded to 32 x 32 internally, cropped back
    a = random_int_matrix(3, 20, seed=7)
    b = random_int_matrix(20, 2, seed=8)
    c = multiply_strassen_static(a, b, threshold=4)
    assert c.shape == (3, 2)
    assert c == multiply_classic(a, b)


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(pytest.main([__file__]))
