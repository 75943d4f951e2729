"""Metric utilities for comparing a computed product with a reference.

All functions are side-effect free and accept either ``Matrix`` objects or
NumPy arrays.
"""

from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import NDArray

from fast_matrix_multiplication.common.errors import DimensionMismatchError
from fast_matrix_multiplication.core.matrix import Matrix

FloatArray = NDArray[np.floating]
MatrixLike = Union[Matrix, np.ndarray]


def _as_float_array(value: MatrixLike) -> FloatArray:
    data = value.data if isinstance(value, Matrix) else value
    return np.asarray(data, dtype=np.float64)


def max_relative_difference(correct: MatrixLike, approx: MatrixLike) -> float:
    """Compute ``max_ij |correct_ij - approx_ij| / |correct_ij|``.

    Entries where ``correct`` is zero contribute 0 when ``approx`` matches
    exactly and infinity otherwise.

    Parameters
    ----------
    correct:
        Reference matrix (usually the classic product).
    approx:
        Matrix of the same shape to compare.

    Returns
    -------
    float
        Largest element-wise relative difference (0 for empty matrices).
    """

    true = _as_float_array(correct)
    other = _as_float_array(approx)
    if true.shape != other.shape:
        raise DimensionMismatchError("shapes of correct and approx must match")
    if true.size == 0:
        return 0.0

    diff = np.abs(true - other)
    with np.errstate(divide="ignore", invalid="ignore"):
        rel = np.where(true != 0.0, diff / np.abs(true), np.where(diff == 0.0, 0.0, np.inf))
    return float(np.max(rel))


def relative_frobenius_error(correct: MatrixLike, approx: MatrixLike) -> float:
    """Compute relative Frobenius norm error ``||correct - approx||_F / ||correct||_F``.

    Parameters
    ----------
    correct:
        Ground-truth matrix.
    approx:
        Approximate matrix with the same shape as ``correct``.

    Returns
    -------
    float
        Relative Frobenius norm error.
    """

    true = _as_float_array(correct)
    other = _as_float_array(approx)
    if true.shape != other.shape:
        raise DimensionMismatchError("shapes of correct and approx must match")

    num = np.linalg.norm(true - other)
    denom = np.linalg.norm(true)
    if denom == 0.0:
        if num == 0.0:
            return 0.0
        raise ValueError("cannot compute relative error: correct has zero Frobenius norm")
    return float(num / denom)
