"""Bini's approximate ``<2, 2, 3>`` algorithm (border rank 10).

A is split into a 2 × 2 grid and B into a 2 × 3 grid. Five products give
``ε·C11``, ``ε·C12`` and ``ε·C21`` up to ``O(ε²)``::

    P1 = (A12 + ε A22) B21              ε·C11 += ε P1      C21 += P1
    P2 = A11 (B11 + ε B12)              ε·C11 += ε P2      C12 += P2
    P3 = A12 (B11 + B21 + ε B22)        C21 -= P3
    P4 = (A11 + A12 + ε A21) B11        C12 -= P4
    P5 = (A12 + ε A21)(B11 + ε B22)     C12 += P5          C21 += P5

The other three blocks (C13, C22, C23) come from the same five formulas
applied to the transposed problem. Dividing the accumulated result by ε
leaves ``C + O(ε)``.

With a numeric ε the result only approximates the product and the error
grows with the matrix size; with ε the formal indeterminate of
:class:`Polynomial` the constant term is exact (see :func:`multiply_bini_exact`).
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

BINI_THRESHOLD = DEFAULT_THRESHOLD

BINI_FACTOR = BlockFactor(2, 2, 3)


def multiply_bini(a: Matrix, b: Matrix, epsilon: Any, threshold: int = BINI_THRESHOLD) -> Matrix:
    """Compute ``C ≈ A @ B`` with Bini's algorithm.

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
        Product with shape ``(n, m)``. In approximate mode the error shrinks
        as ``epsilon`` goes to 0, until round-off takes over.
    """

    validate_product_shapes(a, b)
    validate_threshold(threshold)
    validate_epsilon(epsilon)

    if a.rows < 2 or a.cols < 2 or b.cols < 3:
        return multiply_classic(a, b)
    if min(a.rows, a.cols, b.cols) <= threshold:
        return multiply_classic(a, b)

    def recurse(x: Matrix, y: Matrix) -> Matrix:
        return multiply_bini(x, y, epsilon, threshold)

    # | A11 A12 |  | B11 B12 B13 |
    # | A21 A22 |  | B21 B22 B23 |
    (a11, a12), (a21, a22) = a.blocks(2, 2)
    (b11, b12, b13), (b21, b22, b23) = b.blocks(2, 3)

    block_rows = a.rows // 2
    block_cols = b.cols // 3

    def corner(i: int, j: int) -> tuple:
        return i * block_rows, j * block_cols

    c = Matrix.zeros(a.rows, b.cols, dtype=product_dtype(a, b))

    # C11, C12, C21
    p = recurse(a12 + epsilon * a22, b21)
    c.block_add(corner(0, 0), epsilon * p)
    c.block_add(corner(1, 0), p)

    p = recurse(a11, b11 + epsilon * b12)
    c.block_add(corner(0, 0), epsilon * p)
    c.block_add(corner(0, 1), p)

    p = recurse(a12, b11 + b21 + epsilon * b22)
    c.block_subtract(corner(1, 0), p)

    p = recurse(a11 + a12 + epsilon * a21, b11)
    c.block_subtract(corner(0, 1), p)

    p = recurse(a12 + epsilon * a21, b11 + epsilon * b22)
    c.block_add(corner(0, 1), p)
    c.block_add(corner(1, 0), p)

    # C13, C22, C23: the same formulas on the transposed problem, i.e. with
    #   A11 A12  ->  B23' B13'      B11 B12  ->  A22' A12'
    #   A21 A22  ->  B22' B12'      B21 B22  ->  A21' A11'
    # B11 and B21 are not needed here.
    a11, a12, a21, a22 = (block.transposed() for block in (a11, a12, a21, a22))
    b12, b13, b22, b23 = (block.transposed() for block in (b12, b13, b22, b23))

    p = recurse(b13 + epsilon * b12, a21).transposed()
    c.block_add(corner(1, 2), epsilon * p)
    c.block_add(corner(1, 1), p)

    p = recurse(b23, a22 + epsilon * a12).transposed()
    c.block_add(corner(1, 2), epsilon * p)
    c.block_add(corner(0, 2), p)

    p = recurse(b13, a22 + a21 + epsilon * a11).transposed()
    c.block_subtract(corner(1, 1), p)

    p = recurse(b23 + b13 + epsilon * b22, a22).transposed()
    c.block_subtract(corner(0, 2), p)

    p = recurse(b13 + epsilon * b22, a22 + epsilon * a11).transposed()
    c.block_add(corner(0, 2), p)
    c.block_add(corner(1, 1), p)

    # everything above is ε·C + O(ε²)
    c = c / epsilon

    dynamic_peeling(a, b, c, BINI_FACTOR)
    return c


def multiply_bini_exact(a: Matrix, b: Matrix, threshold: int = BINI_THRESHOLD) -> Matrix:
    """Compute ``C = A @ B`` exactly with Bini's algorithm over ``Z[ε]``.

    The operands are lifted to polynomial matrices, multiplied with ε kept
    symbolic, and projected back by taking constant terms. Polynomial
    arithmetic makes this slower than classic multiplication; it exists to
    check the recombination formulas.
    """

    validate_product_shapes(a, b)

    product = multiply_bini(to_polynomial(a), to_polynomial(b), Polynomial.epsilon(), threshold)
    return polynomial_to_scalar(product, dtype=product_dtype(a, b))
