"""Random test/benchmark matrices.

Every generator takes an explicit ``seed`` or ``numpy.random.Generator``;
there is no shared module-level generator, so runs are reproducible and
independent callers never disturb each other's streams.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from fast_matrix_multiplication.core.matrix import Matrix


def _generator(seed: Optional[int], rng: Optional[np.random.Generator]) -> np.random.Generator:
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def random_int_matrix(
    rows: int,
    cols: int,
    max_value: int = 10,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Matrix:
    """Integer matrix with entries drawn uniformly from ``[0, max_value]``."""
    gen = _generator(seed, rng)
    return Matrix(gen.integers(0, max_value, size=(rows, cols), endpoint=True, dtype=np.int64))


def random_float_matrix(
    rows: int,
    cols: int,
    max_value: int = 10,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Matrix:
    """Float matrix with integer values drawn uniformly from ``[1, max_value]``.

    Integer values keep classic products exact in double precision for
    moderate sizes, and the lower bound of 1 keeps relative errors defined.
    """
    gen = _generator(seed, rng)
    values = gen.integers(1, max_value, size=(rows, cols), endpoint=True)
    return Matrix(values.astype(np.float64))


def identity_matrix(n: int) -> Matrix:
    """Integer ``n × n`` identity matrix."""
    return Matrix.identity(n)
