"""Classic ``O(n·k·m)`` matrix multiplication.

Used as an algorithm in its own right, as the base case of every recursive
algorithm and as the reference result when validating the fast ones.
"""

from __future__ import annotations

import numpy as np

from fast_matrix_multiplication.core.matrix import Matrix, product_dtype, validate_product_shapes


def multiply_classic(a: Matrix, b: Matrix) -> Matrix:
    """Compute ``C = A @ B`` as the triple sum ``C[i, j] = Σ_k A[i, k] B[k, j]``.

    Parameters
    ----------
    a, b:
        Matrices with shapes ``(n, k)`` and ``(k, m)``.

    Returns
    -------
    Matrix
        Product with shape ``(n, m)``.

    Note
    ----
    Uses the outer-product formulation (one rank-one update per ``k``), so
    only the ring operations ``+`` and ``*`` of the entries are needed. This
    keeps it usable for ``Polynomial`` entries, where BLAS is not an option.
    """

    n, k, m = validate_product_shapes(a, b)

    c = np.zeros((n, m), dtype=product_dtype(a, b))
    for t in range(k):
        # Rank-one update: column t of A times row t of B
        c += np.multiply.outer(a.data[:, t], b.data[t, :])
    return Matrix(c)
