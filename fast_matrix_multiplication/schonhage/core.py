"""Schönhage's approximate ``<3, 3, 3>`` algorithm (border rank <= 21).

A. Schönhage, "Partial and total matrix multiplication", SIAM J. Comput. 10
(1981), example 2.1. Both operands are split into 3 × 3 block grids and for
each row group ``i`` of A::

    W_i  = A_i1 (B_2i + B_3i)

    U_ii = (A_i1 + ε² A_i2)(ε² B_1i + B_2i)
    V_ii = (A_i1 + ε² A_i3) B_3i
    U_ij = (A_i1 + ε² A_j2)(B_2i - ε B_1j)          (j != i)
    V_ij = (A_i1 + ε² A_j3)(B_3i + ε B_1j)          (j != i)

    C_ji += (U_ij + V_ij - W_i) / ε²                (all j)
    C_ij += V_ij / ε                                (j != i)
    C_ik -= V_ii / ε                                (k != i)

The ``1/ε`` terms cancel in pairs, the ``1/ε²`` ones supply the rest, and the
result is ``C + O(ε)``.
"""

from __future__ import annotations

from typing import Any

from fast_matrix_multiplication.common.config import (
    DEFAULT_THRESHOLD,
    BlockFactor,
    validate_epsilon,
    validate_threshold,
)
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix, product_dtype, validate_product_shapes
from fast_matrix_multiplication.core.peeling import dynamic_peeling
from fast_matrix_multiplication.core.polynomial import Polynomial, polynomial_to_scalar, to_polynomial

SCHONHAGE_THRESHOLD = DEFAULT_THRESHOLD

SCHONHAGE_FACTOR = BlockFactor(3, 3, 3)


def multiply_schonhage(a: Matrix, b: Matrix, epsilon: Any, threshold: int = SCHONHAGE_THRESHOLD) -> Matrix:
    """Compute ``C ≈ A @ B`` with Schönhage's algorithm.

    Parameters
    ----------
    a, b:
        Matrices with shapes ``(n, k)`` and ``(k, m)``.
    epsilon:
        Either a small positive number (approximate mode) or
        ``Polynomial.epsilon()`` with polynomial matrices (exact mode).
    threshold:
        If any of ``n``, ``k``, ``m`` is at or below this value the product is
        computed classically.

    Returns
    -------
    Matrix
        Product with shape ``(n, m)``. Division by ``ε²`` makes the
        approximate mode more sensitive to round-off than Bini's.
    """

    validate_product_shapes(a, b)
    validate_threshold(threshold)
    validate_epsilon(epsilon)

    if a.rows < 3 or a.cols < 3 or b.cols < 3:
        return multiply_classic(a, b)
    if min(a.rows, a.cols, b.cols) <= threshold:
        return multiply_classic(a, b)

    def recurse(x: Matrix, y: Matrix) -> Matrix:
        return multiply_schonhage(x, y, epsilon, threshold)

    a_blocks = a.blocks(3, 3)
    b_blocks = b.blocks(3, 3)

    block_rows = a.rows // 3
    block_cols = b.cols // 3
    dtype = product_dtype(a, b)
    c_blocks = [[Matrix.zeros(block_rows, block_cols, dtype=dtype) for _ in range(3)] for _ in range(3)]

    epsilon2 = epsilon * epsilon

    for i in range(3):
        w = recurse(a_blocks[i][0], b_blocks[1][i] + b_blocks[2][i])

        for j in range(3):
            if j == i:
                u = recurse(
                    a_blocks[i][0] + epsilon2 * a_blocks[i][1],
                    epsilon2 * b_blocks[0][i] + b_blocks[1][i],
                )
                v = recurse(
                    a_blocks[i][0] + epsilon2 * a_blocks[i][2],
                    b_blocks[2][i],
                )
                correction = v / epsilon
                for k in range(3):
                    if k != i:
                        c_blocks[i][k] -= correction
            else:
                u = recurse(
                    a_blocks[i][0] + epsilon2 * a_blocks[j][1],
                    b_blocks[1][i] - epsilon * b_blocks[0][j],
                )
                v = recurse(
                    a_blocks[i][0] + epsilon2 * a_blocks[j][2],
                    b_blocks[2][i] + epsilon * b_blocks[0][j],
                )
                c_blocks[i][j] += v / epsilon

            c_blocks[j][i] += (u + v - w) / epsilon2

    c = Matrix.zeros(a.rows, b.cols, dtype=dtype)
    for i in range(3):
        for j in range(3):
            c.block_add((i * block_rows, j * block_cols), c_blocks[i][j])

    dynamic_peeling(a, b, c, SCHONHAGE_FACTOR)
    return c


def multiply_schonhage_exact(a: Matrix, b: Matrix, threshold: int = SCHONHAGE_THRESHOLD) -> Matrix:
    """Compute ``C = A @ B`` exactly with Schönhage's algorithm over ``Z[ε]``.

    Same lifting/projection scheme as :func:`multiply_bini_exact`.
    """

    validate_product_shapes(a, b)

    product = multiply_schonhage(to_polynomial(a), to_polynomial(b), Polynomial.epsilon(), threshold)
    return polynomial_to_scalar(product, dtype=product_dtype(a, b))
