"""Timing sweep over square sizes for every multiplication algorithm.

For each size ``start..stop`` (step ``step``) and each trial a fresh random
pair is generated and multiplied by every configured algorithm. One row per
run is written to ``timings.csv`` and appended to ``timings.jsonl``:

    size, trial, algorithm, label, runtime_sec, max_rel_error, exact_match

Exact-mode Bini/Schönhage work on polynomial entries and are skipped above
``exact_max_size``.
"""

from __future__ import annotations

import argparse
import csv
from pathlib import Path
from typing import Dict, List

import numpy as np

from fast_matrix_multiplication.common.config import Algorithm, BenchmarkConfig, ThresholdConfig
from fast_matrix_multiplication.common.datasets import random_float_matrix
from fast_matrix_multiplication.common.logging_utils import append_jsonl, get_logger, set_verbosity
from fast_matrix_multiplication.common.metrics import max_relative_difference
from fast_matrix_multiplication.common.timing import time_function
from fast_matrix_multiplication.core.matrix import Matrix
from fast_matrix_multiplication.overall.algorithms import algorithm_label, is_exact, multiply

logger = get_logger(__name__)

DEFAULT_OUTPUT_DIR = Path("fast_matrix_multiplication/overall/results")

# runs on polynomial matrices
POLYNOMIAL_ALGORITHMS = {Algorithm.BINI_EXACT, Algorithm.SCHONHAGE_EXACT}


def _write_csv(path: Path, rows: List[Dict]) -> None:
    """Write rows to CSV file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        return
    fieldnames = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    logger.info(f"Wrote {len(rows)} rows to {path}")


def _epsilon_for(algorithm: Algorithm, config: BenchmarkConfig) -> float | None:
    if algorithm == Algorithm.BINI_APPROX:
        return config.bini_epsilon
    if algorithm == Algorithm.SCHONHAGE_APPROX:
        return config.schonhage_epsilon
    return None


def _run_one(
    a: Matrix,
    b: Matrix,
    classic: Matrix,
    algorithm: Algorithm,
    config: BenchmarkConfig,
) -> Dict:
    result, timing = time_function(
        lambda: multiply(a, b, algorithm, thresholds=config.thresholds, epsilon=_epsilon_for(algorithm, config))
    )
    exact_match = result == classic
    if is_exact(algorithm) and not exact_match:
        logger.error(f"{algorithm.value} differs from classic multiplication at size {a.rows}")
    return {
        "algorithm": algorithm.value,
        "label": algorithm_label(algorithm),
        "runtime_sec": timing.seconds,
        "max_rel_error": max_relative_difference(classic, result),
        "exact_match": exact_match,
    }


def run_timing_sweep(config: BenchmarkConfig, output_dir: Path) -> List[Dict]:
    """Run the sweep described by ``config`` and write its results.

    Parameters
    ----------
    config:
        Sizes, trials, thresholds, ε values and algorithms to run.
    output_dir:
        Directory receiving ``timings.csv`` and ``timings.jsonl``.

    Returns
    -------
    list of dict
        One row per (size, trial, algorithm) run.
    """

    output_dir.mkdir(parents=True, exist_ok=True)
    jsonl_path = output_dir / "timings.jsonl"
    rng = np.random.default_rng(config.seed)
    rows: List[Dict] = []

    logger.info(
        f"Timing sweep: sizes {config.start}..{config.stop} step {config.step}, "
        f"{config.trials} trial(s), {len(config.algorithms)} algorithm(s)"
    )

    for size in config.sizes():
        logger.info(f"SIZE {size}x{size}")
        for trial in range(config.trials):
            a = random_float_matrix(size, size, max_value=config.max_value, rng=rng)
            b = random_float_matrix(size, size, max_value=config.max_value, rng=rng)
            classic, classic_timing = time_function(lambda: multiply(a, b, Algorithm.CLASSIC))

            for algorithm in config.algorithms:
                if algorithm in POLYNOMIAL_ALGORITHMS and size > config.exact_max_size:
                    logger.info(f"  skipping {algorithm.value} (size > {config.exact_max_size})")
                    continue
                if algorithm == Algorithm.CLASSIC:
                    outcome = {
                        "algorithm": algorithm.value,
                        "label": algorithm_label(algorithm),
                        "runtime_sec": classic_timing.seconds,
                        "max_rel_error": 0.0,
                        "exact_match": True,
                    }
                else:
                    outcome = _run_one(a, b, classic, algorithm, config)

                row = {"size": size, "trial": trial, **outcome}
                rows.append(row)
                append_jsonl(jsonl_path, row)
                logger.info(f"  {outcome['label']:<32} {outcome['runtime_sec']:.4f}s")

    _write_csv(output_dir / "timings.csv", rows)
    return rows


def main() -> None:
    defaults = BenchmarkConfig()
    parser = argparse.ArgumentParser(description="Time every multiplication algorithm over square sizes")
    parser.add_argument("--start", type=int, default=defaults.start)
    parser.add_argument("--stop", type=int, default=defaults.stop)
    parser.add_argument("--step", type=int, default=defaults.step)
    parser.add_argument("--trials", type=int, default=defaults.trials)
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--threshold", type=int, default=None, help="Same recursion cut-off for every family")
    parser.add_argument("--bini-epsilon", type=float, default=defaults.bini_epsilon)
    parser.add_argument("--schonhage-epsilon", type=float, default=defaults.schonhage_epsilon)
    parser.add_argument("--exact-max-size", type=int, default=defaults.exact_max_size)
    parser.add_argument(
        "--algorithms",
        nargs="+",
        choices=[a.value for a in Algorithm],
        default=[a.value for a in Algorithm],
    )
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR)
    parser.add_argument("--verbose", action="store_true", help="Log every dispatched product")
    args = parser.parse_args()
    set_verbosity(args.verbose)

    config = BenchmarkConfig(
        start=args.start,
        stop=args.stop,
        step=args.step,
        trials=args.trials,
        seed=args.seed,
        bini_epsilon=args.bini_epsilon,
        schonhage_epsilon=args.schonhage_epsilon,
        exact_max_size=args.exact_max_size,
        thresholds=ThresholdConfig() if args.threshold is None else ThresholdConfig.uniform(args.threshold),
        algorithms=[Algorithm(value) for value in args.algorithms],
    )
    run_timing_sweep(config, args.output_dir)


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
