"""Demo: multiply one random pair with every algorithm and report timings.

Exact algorithms are checked against the classic product; approximate ones
report their largest relative deviation instead. Entries are integer-valued
floats, so every exact algorithm reproduces the classic product bit for bit.

Run with::

    python -m fast_matrix_multiplication.overall.demo --n 40 --k 42 --m 38
"""

from __future__ import annotations

import argparse
from typing import Dict, List, Optional

import numpy as np

from fast_matrix_multiplication.common.config import Algorithm, MatrixShape, ThresholdConfig
from fast_matrix_multiplication.common.datasets import random_float_matrix
from fast_matrix_multiplication.common.logging_utils import get_logger, set_verbosity
from fast_matrix_multiplication.common.metrics import max_relative_difference
from fast_matrix_multiplication.common.timing import Timer
from fast_matrix_multiplication.overall.algorithms import algorithm_label, is_exact, multiply

logger = get_logger(__name__)

DEMO_EPSILONS: Dict[Algorithm, float] = {
    Algorithm.BINI_APPROX: 1e-6,
    Algorithm.SCHONHAGE_APPROX: 1e-4,
}


def run_demo(
    shape: Optional[MatrixShape] = None,
    threshold: int = 8,
    seed: int = 0,
    algorithms: Optional[List[Algorithm]] = None,
) -> Dict[Algorithm, float]:
    """Time every algorithm on one random ``(n×k) @ (k×m)`` product.

    ``shape`` defaults to ``MatrixShape(40, 42, 38)``.

    Returns
    -------
    dict
        Runtime in seconds per algorithm.

    Raises
    ------
    AssertionError
        If an exact algorithm disagrees with classic multiplication.
    """

    if shape is None:
        shape = MatrixShape(40, 42, 38)
    n, k, m = shape.n, shape.k, shape.m

    rng = np.random.default_rng(seed)
    a = random_float_matrix(n, k, rng=rng)
    b = random_float_matrix(k, m, rng=rng)
    thresholds = ThresholdConfig.uniform(threshold)

    logger.info(f"DEMO: product of A ({n}x{k}) and B ({k}x{m}), threshold={threshold}")

    timer = Timer()
    timer.start()
    classic = multiply(a, b, Algorithm.CLASSIC)
    timings: Dict[Algorithm, float] = {Algorithm.CLASSIC: timer.elapsed()}
    logger.info(f"{algorithm_label(Algorithm.CLASSIC):<32} {timings[Algorithm.CLASSIC]:.4f}s")

    for algo in algorithms or list(Algorithm):
        if algo == Algorithm.CLASSIC:
            continue
        timer.start()
        result = multiply(a, b, algo, thresholds=thresholds, epsilon=DEMO_EPSILONS.get(algo))
        timings[algo] = timer.elapsed()

        if is_exact(algo):
            assert result == classic, f"{algo.value} differs from classic multiplication"
            logger.info(f"{algorithm_label(algo):<32} {timings[algo]:.4f}s")
        else:
            error = max_relative_difference(classic, result)
            logger.info(f"{algorithm_label(algo):<32} {timings[algo]:.4f}s (max rel. error {error:.2e})")

    return timings


def main() -> None:
    parser = argparse.ArgumentParser(description="Multiply one random pair with every algorithm")
    parser.add_argument("--n", type=int, default=40, help="Rows of A")
    parser.add_argument("--k", type=int, default=42, help="Columns of A / rows of B")
    parser.add_argument("--m", type=int, default=38, help="Columns of B")
    parser.add_argument("--threshold", type=int, default=8, help="Recursion cut-off for every family")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Log every dispatched product")
    args = parser.parse_args()
    set_verbosity(args.verbose)

    run_demo(MatrixShape(args.n, args.k, args.m), threshold=args.threshold, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
