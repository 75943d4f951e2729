"""Registry of every multiplication algorithm behind a single entry point.

``multiply`` picks the implementation for an :class:`Algorithm`, threads the
per-family threshold through and supplies ε for the approximate variants.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from fast_matrix_multiplication.bini.core import multiply_bini, multiply_bini_exact
from fast_matrix_multiplication.common.config import (
    Algorithm,
    BenchmarkConfig,
    ThresholdConfig,
    validate_epsilon,
)
from fast_matrix_multiplication.common.logging_utils import get_logger
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix
from fast_matrix_multiplication.laderman.core import multiply_laderman
from fast_matrix_multiplication.schonhage.core import multiply_schonhage, multiply_schonhage_exact
from fast_matrix_multiplication.strassen.core import (
    multiply_strassen_dynamic,
    multiply_strassen_static,
)

logger = get_logger(__name__)

Runner = Callable[[Matrix, Matrix, ThresholdConfig, Optional[float]], Matrix]

ALGORITHM_LABELS: Dict[Algorithm, str] = {
    Algorithm.CLASSIC: "Classic",
    Algorithm.STRASSEN_STATIC: "Strassen <2, 2, 2> (static)",
    Algorithm.STRASSEN_DYNAMIC: "Strassen <2, 2, 2> (dynamic)",
    Algorithm.LADERMAN: "Laderman <3, 3, 3>",
    Algorithm.BINI_EXACT: "Bini <2, 2, 3> (exact)",
    Algorithm.BINI_APPROX: "Bini <2, 2, 3> (approx)",
    Algorithm.SCHONHAGE_EXACT: "Schönhage <3, 3, 3> (exact)",
    Algorithm.SCHONHAGE_APPROX: "Schönhage <3, 3, 3> (approx)",
}

_APPROXIMATE = {Algorithm.BINI_APPROX, Algorithm.SCHONHAGE_APPROX}

_DEFAULTS = BenchmarkConfig()
DEFAULT_EPSILONS: Dict[Algorithm, float] = {
    Algorithm.BINI_APPROX: _DEFAULTS.bini_epsilon,
    Algorithm.SCHONHAGE_APPROX: _DEFAULTS.schonhage_epsilon,
}

_RUNNERS: Dict[Algorithm, Runner] = {
    Algorithm.CLASSIC: lambda a, b, t, e: multiply_classic(a, b),
    Algorithm.STRASSEN_STATIC: lambda a, b, t, e: multiply_strassen_static(a, b, threshold=t.strassen),
    Algorithm.STRASSEN_DYNAMIC: lambda a, b, t, e: multiply_strassen_dynamic(a, b, threshold=t.strassen),
    Algorithm.LADERMAN: lambda a, b, t, e: multiply_laderman(a, b, threshold=t.laderman),
    Algorithm.BINI_EXACT: lambda a, b, t, e: multiply_bini_exact(a, b, threshold=t.bini),
    Algorithm.BINI_APPROX: lambda a, b, t, e: multiply_bini(a, b, e, threshold=t.bini),
    Algorithm.SCHONHAGE_EXACT: lambda a, b, t, e: multiply_schonhage_exact(a, b, threshold=t.schonhage),
    Algorithm.SCHONHAGE_APPROX: lambda a, b, t, e: multiply_schonhage(a, b, e, threshold=t.schonhage),
}


def _resolve(algorithm: "Algorithm | str") -> Algorithm:
    try:
        return Algorithm(algorithm)
    except ValueError:
        choices = ", ".join(a.value for a in Algorithm)
        raise ValueError(f"unknown algorithm {algorithm!r}; expected one of: {choices}") from None


def is_exact(algorithm: "Algorithm | str") -> bool:
    """Whether the algorithm's result must equal the classic product."""
    return _resolve(algorithm) not in _APPROXIMATE


def algorithm_label(algorithm: "Algorithm | str") -> str:
    """Human-readable name used in logs and plots."""
    return ALGORITHM_LABELS[_resolve(algorithm)]


def multiply(
    a: Matrix,
    b: Matrix,
    algorithm: "Algorithm | str",
    thresholds: Optional[ThresholdConfig] = None,
    epsilon: Optional[float] = None,
) -> Matrix:
    """Compute ``A @ B`` with the chosen algorithm.

    Parameters
    ----------
    a, b:
        Matrices with shapes ``(n, k)`` and ``(k, m)``.
    algorithm:
        An :class:`Algorithm` or its string value (e.g. ``"laderman"``).
    thresholds:
        Per-family recursion cut-offs; defaults to ``ThresholdConfig()``.
    epsilon:
        ε for the approximate algorithms; ignored by the others. Defaults to
        the family's value in ``BenchmarkConfig``.

    Returns
    -------
    Matrix
        Product with shape ``(n, m)``.
    """

    algo = _resolve(algorithm)
    if thresholds is None:
        thresholds = ThresholdConfig()
    if algo in _APPROXIMATE:
        if epsilon is None:
            epsilon = DEFAULT_EPSILONS[algo]
        validate_epsilon(epsilon)

    logger.debug(
        f"multiply: {algo.value} on {a.rows}x{a.cols} @ {b.rows}x{b.cols} "
        f"(thresholds={thresholds}, epsilon={epsilon})"
    )
    return _RUNNERS[algo](a, b, thresholds, epsilon)
