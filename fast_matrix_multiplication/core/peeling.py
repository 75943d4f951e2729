"""Dynamic peeling for dimensions not divisible by a block factor.

A recursive ``<n, k, m>`` algorithm only covers the leading
``(rows // n) * n`` rows, ``(cols // k) * k`` inner indices and
``(cols // m) * m`` columns. ``dynamic_peeling`` adds the remaining
contributions with classic multiplication::

    A * B = C
    | . . O |   | . . . |   | O O . |
    | . . O | * | . . . | = | O O . |     (1) leftover inner strip
    | . . . |   | O O . |   | . . . |

    | O O O |   | . . O |   | . . O |
    | O O O | * | . . O | = | . . O |     (2) leftover columns of B
    | O O O |   | . . O |   | . . O |

    | . . . |   | O O . |   | . . . |
    | . . . | * | O O . | = | . . . |     (3) leftover rows of A
    | O O O |   | O O . |   | O O . |
"""

from __future__ import annotations

from fast_matrix_multiplication.common.config import BlockFactor
from fast_matrix_multiplication.common.errors import DimensionMismatchError
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix


def dynamic_peeling(a: Matrix, b: Matrix, c: Matrix, factor: BlockFactor) -> Matrix:
    """Add the products the recursive core skipped into ``c`` (in place).

    Parameters
    ----------
    a, b:
        The full operands, shapes ``(n, k)`` and ``(k, m)``.
    c:
        Accumulator of shape ``(n, m)`` whose leading block already holds the
        recursively computed part of the product.
    factor:
        Block factor used by the recursive algorithm.

    Returns
    -------
    Matrix
        ``c``, for chaining.
    """

    if a.rows != c.rows or a.cols != b.rows or b.cols != c.cols:
        raise DimensionMismatchError(
            f"cannot peel A {a.rows}x{a.cols}, B {b.rows}x{b.cols} into C {c.rows}x{c.cols}"
        )

    included_rows_a = (a.rows // factor.n) * factor.n
    included_cols_a = (a.cols // factor.k) * factor.k
    included_rows_b = (b.rows // factor.k) * factor.k
    included_cols_b = (b.cols // factor.m) * factor.m

    peel_rows_a = a.rows - included_rows_a
    peel_cols_a = a.cols - included_cols_a
    peel_rows_b = b.rows - included_rows_b
    peel_cols_b = b.cols - included_cols_b

    # (1) completes the block computed by recursion
    if peel_cols_a > 0:
        a_extra = a.subblock((0, included_cols_a), (included_rows_a, peel_cols_a))
        b_extra = b.subblock((included_rows_b, 0), (peel_rows_b, included_cols_b))
        c.block_add((0, 0), multiply_classic(a_extra, b_extra))

    # (2)
    if peel_cols_b > 0:
        b_extra = b.subblock((0, included_cols_b), (b.rows, peel_cols_b))
        c.block_add((0, included_cols_b), multiply_classic(a, b_extra))

    # (3)
    if peel_rows_a > 0:
        a_extra = a.subblock((included_rows_a, 0), (peel_rows_a, a.cols))
        b_extra = b.subblock((0, 0), (b.rows, included_cols_b))
        c.block_add((included_rows_a, 0), multiply_classic(a_extra, b_extra))

    return c
