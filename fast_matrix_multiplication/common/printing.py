"""Console rendering of matrices."""

from __future__ import annotations

from typing import List

import numpy as np

from fast_matrix_multiplication.common.errors import DimensionMismatchError
from fast_matrix_multiplication.core.matrix import Matrix


def format_matrix(matrix: Matrix, name: str = "") -> str:
    """Render ``matrix`` as ``name (rows x cols)`` followed by tab-separated rows."""
    label = name if name else "matrix"
    lines: List[str] = [f"{label} ({matrix.rows} x {matrix.cols})"]
    for i in range(matrix.rows):
        lines.append("\t".join(str(matrix[i, j]) for j in range(matrix.cols)))
    return "\n".join(lines)


def print_matrix(matrix: Matrix, name: str = "") -> None:
    print(format_matrix(matrix, name))


def format_differences(a: Matrix, b: Matrix) -> str:
    """Render the element-wise equality mask of two same-shaped matrices."""
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"shapes differ: {a.rows}x{a.cols} vs {b.rows}x{b.cols}"
        )
    mask = np.asarray(a.data == b.data, dtype=bool).reshape(a.shape)
    return format_matrix(Matrix(mask), "equal")


def print_differences(a: Matrix, b: Matrix) -> None:
    print(format_differences(a, b))
