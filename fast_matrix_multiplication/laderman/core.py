"""Laderman's ``<3, 3, 3>`` algorithm with 23 block products.

J. D. Laderman, "A noncommutative algorithm for multiplying 3×3 matrices
using 23 multiplications", Bull. AMS 82 (1976). Both operands are split into
3 × 3 grids of floor-sized blocks; rows/columns that do not fill a block are
handled with dynamic peeling. Padding to a power of three would waste too
much work, so only the peeling variant exists.

Products and the output blocks each one contributes to::

    M1  = (A11 + A12 + A13 - A21 - A22 - A32 - A33) B22       C12
    M2  = (A11 - A21)(B22 - B12)                              C21 C22
    M3  = A22 (B12 - B11 + B21 - B22 - B23 - B31 + B33)       C21
    M4  = (A21 - A11 + A22)(B11 - B12 + B22)                  C12 C21 C22
    M5  = (A21 + A22)(B12 - B11)                              C12 C22
    M6  = A11 B11                         C11 C12 C13 C21 C22 C31 C33
    M7  = (A31 - A11 + A32)(B11 - B13 + B23)                  C13 C31 C33
    M8  = (A31 - A11)(B13 - B23)                              C31 C33
    M9  = (A31 + A32)(B13 - B11)                              C13 C33
    M10 = (A11 + A12 + A13 - A22 - A23 - A31 - A32) B23       C13
    M11 = A32 (B13 - B11 + B21 - B22 - B23 - B31 + B32)       C31
    M12 = (A32 - A13 + A33)(B22 + B31 - B32)                  C12 C31 C32
    M13 = (A13 - A33)(B22 - B32)                              C31 C32
    M14 = A13 B31                         C11 C12 C13 C21 C23 C31 C32
    M15 = (A32 + A33)(B32 - B31)                              C12 C32
    M16 = (A22 - A13 + A23)(B23 + B31 - B33)                  C13 C21 C23
    M17 = (A13 - A23)(B23 - B33)                              C21 C23
    M18 = (A22 + A23)(B33 - B31)                              C13 C23
    M19 = A12 B21                                             C11
    M20 = A23 B32                                             C22
    M21 = A21 B13                                             C23
    M22 = A31 B12                                             C32
    M23 = A33 B33                                             C33
"""

from __future__ import annotations

from fast_matrix_multiplication.common.config import DEFAULT_THRESHOLD, BlockFactor, validate_threshold
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix, product_dtype, validate_product_shapes
from fast_matrix_multiplication.core.peeling import dynamic_peeling

LADERMAN_THRESHOLD = DEFAULT_THRESHOLD

LADERMAN_FACTOR = BlockFactor(3, 3, 3)


def _add_to_blocks(c: Matrix, product: Matrix, *targets: str) -> None:
    """Add ``product`` to the named output blocks, e.g. ``"12"`` for C12."""
    for target in targets:
        i, j = int(target[0]) - 1, int(target[1]) - 1
        c.block_add((i * product.rows, j * product.cols), product)


def multiply_laderman(a: Matrix, b: Matrix, threshold: int = LADERMAN_THRESHOLD) -> Matrix:
    """Compute ``C = A @ B`` with Laderman's algorithm and dynamic peeling.

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
    if smallest <= threshold or smallest < 3:
        return multiply_classic(a, b)

    def recurse(x: Matrix, y: Matrix) -> Matrix:
        return multiply_laderman(x, y, threshold)

    (a11, a12, a13), (a21, a22, a23), (a31, a32, a33) = a.blocks(3, 3)
    (b11, b12, b13), (b21, b22, b23), (b31, b32, b33) = b.blocks(3, 3)

    c = Matrix.zeros(a.rows, b.cols, dtype=product_dtype(a, b))

    m = recurse(a11 + a12 + a13 - a21 - a22 - a32 - a33, b22)
    _add_to_blocks(c, m, "12")

    m = recurse(a11 - a21, b22 - b12)
    _add_to_blocks(c, m, "21", "22")

    m = recurse(a22, b12 - b11 + b21 - b22 - b23 - b31 + b33)
    _add_to_blocks(c, m, "21")

    m = recurse(a21 - a11 + a22, b11 - b12 + b22)
    _add_to_blocks(c, m, "12", "21", "22")

    m = recurse(a21 + a22, b12 - b11)
    _add_to_blocks(c, m, "12", "22")

    m = recurse(a11, b11)
    _add_to_blocks(c, m, "11", "12", "13", "21", "22", "31", "33")

    m = recurse(a31 - a11 + a32, b11 - b13 + b23)
    _add_to_blocks(c, m, "13", "31", "33")

    m = recurse(a31 - a11, b13 - b23)
    _add_to_blocks(c, m, "31", "33")

    m = recurse(a31 + a32, b13 - b11)
    _add_to_blocks(c, m, "13", "33")

    m = recurse(a11 + a12 + a13 - a22 - a23 - a31 - a32, b23)
    _add_to_blocks(c, m, "13")

    m = recurse(a32, b13 - b11 + b21 - b22 - b23 - b31 + b32)
    _add_to_blocks(c, m, "31")

    m = recurse(a32 - a13 + a33, b22 + b31 - b32)
    _add_to_blocks(c, m, "12", "31", "32")

    m = recurse(a13 - a33, b22 - b32)
    _add_to_blocks(c, m, "31", "32")

    m = recurse(a13, b31)
    _add_to_blocks(c, m, "11", "12", "13", "21", "23", "31", "32")

    m = recurse(a32 + a33, b32 - b31)
    _add_to_blocks(c, m, "12", "32")

    m = recurse(a22 - a13 + a23, b23 + b31 - b33)
    _add_to_blocks(c, m, "13", "21", "23")

    m = recurse(a13 - a23, b23 - b33)
    _add_to_blocks(c, m, "21", "23")

    m = recurse(a22 + a23, b33 - b31)
    _add_to_blocks(c, m, "13", "23")

    m = recurse(a12, b21)
    _add_to_blocks(c, m, "11")

    m = recurse(a23, b32)
    _add_to_blocks(c, m, "22")

    m = recurse(a21, b13)
    _add_to_blocks(c, m, "23")

    m = recurse(a31, b12)
    _add_to_blocks(c, m, "32")

    m = recurse(a33, b33)
    _add_to_blocks(c, m, "33")

    dynamic_peeling(a, b, c, LADERMAN_FACTOR)
    return c
