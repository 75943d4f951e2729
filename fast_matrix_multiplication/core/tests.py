"""Tests for the matrix primitives: Matrix, Polynomial, classic product, peeling."""

from __future__ import annotations

import numpy as np
import pytest

from fast_matrix_multiplication.common.config import BlockFactor
from fast_matrix_multiplication.common.datasets import random_int_matrix
from fast_matrix_multiplication.common.errors import DimensionMismatchError, UnsupportedOperationError
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix, validate_product_shapes
from fast_matrix_multiplication.core.peeling import dynamic_peeling
from fast_matrix_multiplication.core.polynomial import Polynomial, polynomial_to_scalar, to_polynomial


# ----------------------------------------------------------------------
# Matrix
# ----------------------------------------------------------------------

def test_from_flat_is_row_major() -> None:
    m = Matrix.from_flat([1, 2, 3, 4, 5, 6], 2, 3)
    assert m.shape == (2, 3)
    assert m[0, 2] == 3
    assert m[1, 0] == 4


def test_empty_and_filled_constructors() -> None:
    assert Matrix().shape == (0, 0)
    m = Matrix.filled(2, 3, 7)
    assert m == Matrix.from_flat([7] * 6, 2, 3)


def test_non_2d_data_rejected() -> None:
    with pytest.raises(DimensionMismatchError):
        Matrix(np.arange(4))


def test_subblock_is_a_copy() -> None:
    m = Matrix.from_flat(range(1, 10), 3, 3)
    block = m.subblock((1, 1), (2, 2))
    assert block == Matrix.from_flat([5, 6, 8, 9], 2, 2)

    block[0, 0] = 100
    assert m[1, 1] == 5
    m[2, 2] = -1
    assert block[1, 1] == 9


def test_subblock_out_of_range() -> None:
    m = Matrix.zeros(3, 3)
    with pytest.raises(DimensionMismatchError):
        m.subblock((2, 2), (2, 2))
    with pytest.raises(DimensionMismatchError):
        m.subblock((-1, 0), (1, 1))


def test_block_add_and_subtract_in_place() -> None:
    c = Matrix.zeros(3, 3)
    block = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    c.block_add((1, 1), block)
    c.block_add((1, 1), block)
    c.block_subtract((0, 0), block)
    assert c == Matrix.from_flat([-1, -2, 0, -3, -2, 4, 0, 6, 8], 3, 3)


def test_construction_copies_external_array() -> None:
    for block_value in (1, 1.5):
        external = np.zeros((2, 2), dtype=np.int64)
        m = Matrix(external)
        m.block_add((0, 0), Matrix.filled(2, 2, block_value))
        m.block_subtract((0, 0), Matrix.filled(2, 2, block_value))
        m[1, 1] = 7
        assert np.array_equal(external, np.zeros((2, 2), dtype=np.int64))
        assert m.data.flags["C_CONTIGUOUS"]

    m = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    m.copy()[0, 0] = 9
    m.transposed()[0, 0] = 9
    assert m[0, 0] == 1


def test_block_add_out_of_range() -> None:
    c = Matrix.zeros(2, 2)
    with pytest.raises(DimensionMismatchError):
        c.block_add((1, 0), Matrix.zeros(2, 2))


def test_block_add_promotes_dtype() -> None:
    c = Matrix.zeros(1, 2)
    c.block_add((0, 0), Matrix(np.array([[0.5, 1.5]])))
    assert c.dtype == np.float64
    assert c == Matrix(np.array([[0.5, 1.5]]))


def test_blocks_floor_sizes() -> None:
    m = Matrix.from_flat(range(35), 5, 7)
    grid = m.blocks(2, 3)
    assert len(grid) == 2 and len(grid[0]) == 3
    assert grid[1][2].shape == (2, 2)
    assert grid[1][2] == Matrix.from_flat([18, 19, 25, 26], 2, 2)


def test_elementwise_arithmetic() -> None:
    a = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    b = Matrix.from_flat([4, 3, 2, 1], 2, 2)
    assert a + b == Matrix.filled(2, 2, 5)
    assert a - b == Matrix.from_flat([-3, -1, 1, 3], 2, 2)
    assert -a == Matrix.from_flat([-1, -2, -3, -4], 2, 2)
    assert 2 * a == a * 2 == a + a
    assert (a * 2) / 2 == a.astype(np.float64)

    c = a.copy()
    c += b
    c -= a
    assert c == b


def test_elementwise_shape_mismatch() -> None:
    with pytest.raises(DimensionMismatchError):
        Matrix.zeros(2, 2) + Matrix.zeros(2, 3)
    with pytest.raises(DimensionMismatchError):
        Matrix.zeros(2, 2) - Matrix.zeros(3, 2)


def test_equality_checks_shape_first() -> None:
    assert Matrix.zeros(2, 3) != Matrix.zeros(3, 2)
    assert Matrix.zeros(1, 1) != Matrix.filled(1, 1, 1)
    assert Matrix.identity(3) == Matrix.identity(3)


def test_transposed() -> None:
    m = Matrix.from_flat([1, 2, 3, 4, 5, 6], 2, 3)
    assert m.transposed() == Matrix.from_flat([1, 4, 2, 5, 3, 6], 3, 2)


def test_validate_product_shapes() -> None:
    assert validate_product_shapes(Matrix.zeros(2, 4), Matrix.zeros(4, 3)) == (2, 4, 3)
    with pytest.raises(DimensionMismatchError):
        validate_product_shapes(Matrix.zeros(2, 3), Matrix.zeros(2, 3))


# ----------------------------------------------------------------------
# Polynomial
# ----------------------------------------------------------------------

def test_polynomial_ring_operations() -> None:
    p = Polynomial(1, 2)
    q = Polynomial(3, 0, 1)
    assert p + q == Polynomial(4, 2, 1)
    assert p - q == Polynomial(-2, 2, -1)
    assert p * q == Polynomial(3, 6, 1, 2)
    assert 2 * p == Polynomial(2, 4)
    assert p + 1 == Polynomial(2, 2)
    assert 1 - p == Polynomial(0, -2)


def test_polynomial_equality_ignores_trailing_zeros() -> None:
    assert Polynomial(1, 2, 0, 0) == Polynomial(1, 2)
    assert hash(Polynomial(1, 2, 0)) == hash(Polynomial(1, 2))
    assert Polynomial() == 0
    assert Polynomial(5) == 5


def test_polynomial_division_by_epsilon() -> None:
    eps = Polynomial.epsilon()
    p = Polynomial(7, 3, 5)
    assert p / eps == Polynomial(3, 5)
    assert p / Polynomial.epsilon_squared() == Polynomial(5)
    assert Polynomial(7) / eps == Polynomial()
    assert (p * eps) / eps == p


def test_polynomial_division_by_anything_else_fails() -> None:
    p = Polynomial(1, 1)
    with pytest.raises(UnsupportedOperationError):
        p / Polynomial(1, 1)
    with pytest.raises(UnsupportedOperationError):
        p / 2
    with pytest.raises(UnsupportedOperationError):
        p / Polynomial(0, 0, 0, 1)


def test_polynomial_degree() -> None:
    assert Polynomial().degree == 0
    assert Polynomial(5).degree == 0
    assert Polynomial(0, 1).degree == 1
    assert Polynomial(1, 2, 3, 0, 0).degree == 2
    assert (Polynomial(1, 1) * Polynomial(0, 0, 1)).degree == 3
    assert (Polynomial(1, 2, 3) / Polynomial.epsilon_squared()).degree == 0


def test_polynomial_text_form() -> None:
    assert str(Polynomial(1, 2, 3)) == "1e^0 + 2e^1 + 3e^2"


def test_polynomial_lift_rejects_non_numbers() -> None:
    assert Polynomial.lift(3) == Polynomial(3)
    with pytest.raises(TypeError):
        Polynomial.lift("x")


def test_polynomial_matrix_round_trip() -> None:
    a = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    lifted = to_polynomial(a)
    assert lifted.dtype == object
    assert lifted[1, 0] == Polynomial(3)

    shifted = lifted * Polynomial(1, 1)
    assert shifted[0, 1] == Polynomial(2, 2)
    assert polynomial_to_scalar(shifted, dtype=np.int64) == a


def test_classic_on_polynomial_entries() -> None:
    a = to_polynomial(Matrix.from_flat([1, 2, 3, 4], 2, 2))
    b = to_polynomial(Matrix.from_flat([4, 3, 2, 1], 2, 2))
    product = multiply_classic(a, b)
    assert polynomial_to_scalar(product, dtype=np.int64) == Matrix.from_flat([8, 5, 20, 13], 2, 2)


# ----------------------------------------------------------------------
# Classic multiplication
# ----------------------------------------------------------------------

def test_classic_hand_computed() -> None:
    cases = [
        ([1, 2, 3, 4], (2, 2), [4, 3, 2, 1], (2, 2), [8, 5, 20, 13]),
        ([1, 2, 3, 4], (2, 2), [6, 5, 4, 3, 2, 1], (2, 3), [12, 9, 6, 30, 23, 16]),
        ([2], (1, 1), [3], (1, 1), [6]),
        ([1, 2, 3, 4, 5, 6, 7, 8], (2, 4), [8, 7, 6, 5, 4, 3, 2, 1], (4, 2), [40, 30, 120, 94]),
        (
            [1, 2, 3, 4, 5, 6, 7, 8], (2, 4),
            [12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1], (4, 3),
            [60, 50, 40, 180, 154, 128],
        ),
    ]
    for a_vals, a_shape, b_vals, b_shape, expected in cases:
        a = Matrix.from_flat(a_vals, *a_shape)
        b = Matrix.from_flat(b_vals, *b_shape)
        assert multiply_classic(a, b) == Matrix.from_flat(expected, a_shape[0], b_shape[1])


def test_classic_identity_powers() -> None:
    for size in range(1, 30):
        eye = Matrix.identity(size)
        squared = multiply_classic(eye, eye)
        assert squared == eye
        assert multiply_classic(squared, eye) == eye


def test_classic_matches_numpy() -> None:
    a = random_int_matrix(7, 5, seed=1)
    b = random_int_matrix(5, 4, seed=2)
    assert multiply_classic(a, b) == Matrix(a.data @ b.data)


def test_classic_associative() -> None:
    a = random_int_matrix(4, 6, seed=3)
    b = random_int_matrix(6, 5, seed=4)
    c = random_int_matrix(5, 3, seed=5)
    assert multiply_classic(multiply_classic(a, b), c) == multiply_classic(a, multiply_classic(b, c))


def test_classic_dimension_mismatch() -> None:
    with pytest.raises(DimensionMismatchError):
        multiply_classic(Matrix.zeros(2, 3), Matrix.zeros(2, 3))


# ----------------------------------------------------------------------
# Dynamic peeling
# ----------------------------------------------------------------------

def _leading_block_product(a: Matrix, b: Matrix, factor: BlockFactor) -> Matrix:
    """Accumulator holding only what a recursive core would have computed."""
    rows = (a.rows // factor.n) * factor.n
    inner = (a.cols // factor.k) * factor.k
    cols = (b.cols // factor.m) * factor.m
    c = Matrix.zeros(a.rows, b.cols)
    core = multiply_classic(a.subblock((0, 0), (rows, inner)), b.subblock((0, 0), (inner, cols)))
    return c.block_add((0, 0), core)


def test_peeling_completes_product() -> None:
    for factor in (BlockFactor(2, 2, 2), BlockFactor(3, 3, 3), BlockFactor(2, 2, 3)):
        for n, k, m in [(5, 7, 8), (6, 6, 6), (7, 4, 11), (3, 5, 3)]:
            a = random_int_matrix(n, k, seed=n)
            b = random_int_matrix(k, m, seed=m)
            c = _leading_block_product(a, b, factor)
            dynamic_peeling(a, b, c, factor)
            assert c == multiply_classic(a, b)


def test_peeling_is_noop_when_divisible() -> None:
    a = random_int_matrix(6, 6, seed=0)
    b = random_int_matrix(6, 6, seed=1)
    c = Matrix.zeros(6, 6)
    dynamic_peeling(a, b, c, BlockFactor(3, 3, 3))
    assert c == Matrix.zeros(6, 6)


def test_peeling_rejects_wrong_accumulator() -> None:
    with pytest.raises(DimensionMismatchError):
        dynamic_peeling(Matrix.zeros(3, 3), Matrix.zeros(3, 3), Matrix.zeros(3, 2), BlockFactor(2, 2, 2))


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(pytest.main([__file__]))
