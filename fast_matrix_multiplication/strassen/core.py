"""Strassen's ``<2, 2, 2>`` algorithm with 7 block products.

Two ways of dealing with sizes that cannot be halved all the way down:

- **static padding**: embed both operands in zero matrices whose size is the
  next power of two, recurse on exact halves, crop the result;
- **dynamic peeling**: recurse on floor-sized halves and patch the odd
  row/column with :func:`dynamic_peeling` at every level.

Both use the same identities::

    P1 = (A11 + A22)(B11 + B22)      C11 = P1 + P4 - P5 + P7
    P2 = (A21 + A22) B11             C12 = P3 + P5
    P3 = A11 (B12 - B22)             C21 = P2 + P4
    P4 = A22 (B21 - B11)             C22 = P1 - P2 + P3 + P6
    P5 = (A11 + A12) B22
    P6 = (A21 - A11)(B11 + B12)
    P7 = (A12 - A22)(B21 + B22)
"""

from __future__ import annotations

from typing import Callable

from fast_matrix_multiplication.common.config import DEFAULT_THRESHOLD, BlockFactor, validate_threshold
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix, product_dtype, validate_product_shapes
from fast_matrix_multiplication.core.peeling import dynamic_peeling

STRASSEN_THRESHOLD = DEFAULT_THRESHOLD

STRASSEN_FACTOR = BlockFactor(2, 2, 2)


def next_power_of_two(value: int) -> int:
    """Smallest power of two that is ``>= value`` (and at least 1)."""
    power = 1
    while power < value:
        power *= 2
    return power


def _strassen_step(
    a: Matrix,
    b: Matrix,
    recurse: Callable[[Matrix, Matrix], Matrix],
) -> Matrix:
    """One level of Strassen on the leading even-sized part of ``a`` and ``b``.

    The returned matrix has the full ``a.rows × b.cols`` shape; entries
    outside the leading ``2 * (rows // 2)`` by ``2 * (cols // 2)`` block are
    left at zero.
    """

    (a11, a12), (a21, a22) = a.blocks(2, 2)
    (b11, b12), (b21, b22) = b.blocks(2, 2)

    half_rows = a.rows // 2
    half_cols = b.cols // 2
    c11 = (0, 0)
    c12 = (0, half_cols)
    c21 = (half_rows, 0)
    c22 = (half_rows, half_cols)

    c = Matrix.zeros(a.rows, b.cols, dtype=product_dtype(a, b))

    p = recurse(a11 + a22, b11 + b22)
    c.block_add(c11, p)
    c.block_add(c22, p)

    p = recurse(a21 + a22, b11)
    c.block_add(c21, p)
    c.block_subtract(c22, p)

    p = recurse(a11, b12 - b22)
    c.block_add(c12, p)
    c.block_add(c22, p)

    p = recurse(a22, b21 - b11)
    c.block_add(c11, p)
    c.block_add(c21, p)

    p = recurse(a11 + a12, b22)
    c.block_subtract(c11, p)
    c.block_add(c12, p)

    p = recurse(a21 - a11, b11 + b12)
    c.block_add(c22, p)

    p = recurse(a12 - a22, b21 + b22)
    c.block_add(c11, p)

    return c


def _strassen_recursive(a: Matrix, b: Matrix, threshold: int) -> Matrix:
    """Internal recursive Strassen implementation.

    Assumes that ``a`` and ``b`` are square matrices with power-of-two size
    and identical shapes.
    """

    size = a.rows
    if size <= threshold:
        return multiply_classic(a, b)
    return _strassen_step(a, b, lambda x, y: _strassen_recursive(x, y, threshold))


def multiply_strassen_static(a: Matrix, b: Matrix, threshold: int = STRASSEN_THRESHOLD) -> Matrix:
    """Compute ``C = A @ B`` with Strassen's algorithm and static padding.

    Parameters
    ----------
    a, b:
        Matrices with shapes ``(n, k)`` and ``(k, m)``.
    threshold:
        Size at or below which the recursion falls back to classic
        multiplication.

    Returns
    -------
    Matrix
        Product with shape ``(n, m)``.

    Note
    ----
    Both operands are zero-padded to ``s × s`` with ``s`` the next power of
    two of ``max(n, k, m)``, so strongly rectangular inputs waste work.
    """

    validate_product_shapes(a, b)
    validate_threshold(threshold)

    size = next_power_of_two(max(a.rows, a.cols, b.cols))
    dtype = product_dtype(a, b)

    padded_a = Matrix.zeros(size, size, dtype=dtype).block_add((0, 0), a)
    padded_b = Matrix.zeros(size, size, dtype=dtype).block_add((0, 0), b)

    product = _strassen_recursive(padded_a, padded_b, threshold)
    return product.subblock((0, 0), (a.rows, b.cols))


def multiply_strassen_dynamic(a: Matrix, b: Matrix, threshold: int = STRASSEN_THRESHOLD) -> Matrix:
    """Compute ``C = A @ B`` with Strassen's algorithm and dynamic peeling.

    Parameters
    ----------
    a, b:
        Matrices with shapes ``(n, k)`` and ``(k, m)``.
    threshold:
        If any of ``n``, ``k``, ``m`` is at or below this value the product is
        computed classically.

    Returns
    -------
    Matrix
        Product with shape ``(n, m)``.
    """

    validate_product_shapes(a, b)
    validate_threshold(threshold)

    smallest = min(a.rows, a.cols, b.cols)
    if smallest <= threshold or smallest < 2:
        return multiply_classic(a, b)

    c = _strassen_step(a, b, lambda x, y: multiply_strassen_dynamic(x, y, threshold))

    # odd rows/columns were not part of the halves
    dynamic_peeling(a, b, c, STRASSEN_FACTOR)
    return c
