"""Tests for the algorithm registry and the drivers."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from fast_matrix_multiplication.common.config import Algorithm, BenchmarkConfig, MatrixShape, ThresholdConfig
from fast_matrix_multiplication.common.datasets import random_float_matrix, random_int_matrix
from fast_matrix_multiplication.common.metrics import max_relative_difference
from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix
from fast_matrix_multiplication.overall.algorithms import algorithm_label, is_exact, multiply
from fast_matrix_multiplication.overall.demo import run_demo
from fast_matrix_multiplication.overall.experiments import run_timing_sweep


def test_every_exact_algorithm_matches_classic() -> None:
    a = random_int_matrix(13, 11, seed=0)
    b = random_int_matrix(11, 10, seed=1)
    expected = multiply_classic(a, b)
    thresholds = ThresholdConfig.uniform(2)
    for algorithm in Algorithm:
        if is_exact(algorithm):
            assert multiply(a, b, algorithm, thresholds=thresholds) == expected, algorithm.value


def test_hand_computed_scenarios_every_algorithm() -> None:
    thresholds = ThresholdConfig.uniform(1)
    cases = [
        (Matrix.from_flat([1, 2, 3, 4], 2, 2), Matrix.from_flat([4, 3, 2, 1], 2, 2), [8, 5, 20, 13]),
        (Matrix.filled(1, 1, 2), Matrix.filled(1, 1, 3), [6]),
        (
            Matrix.from_flat([1, 2, 3, 4, 5, 6, 7, 8], 2, 4),
            Matrix.from_flat([12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1], 4, 3),
            [60, 50, 40, 180, 154, 128],
        ),
    ]
    for a, b, values in cases:
        expected = Matrix.from_flat(values, a.rows, b.cols)
        for algorithm in Algorithm:
            result = multiply(a, b, algorithm, thresholds=thresholds, epsilon=1e-6)
            if is_exact(algorithm):
                assert result == expected, algorithm.value
            else:
                assert max_relative_difference(expected, result) <= 1e-3, algorithm.value


def test_identity_law_every_exact_algorithm() -> None:
    a = random_int_matrix(7, 7, seed=9)
    eye = Matrix.identity(7)
    thresholds = ThresholdConfig.uniform(2)
    for algorithm in Algorithm:
        if is_exact(algorithm):
            assert multiply(eye, a, algorithm, thresholds=thresholds) == a, algorithm.value
            assert multiply(a, eye, algorithm, thresholds=thresholds) == a, algorithm.value


def test_approximate_algorithms_are_close() -> None:
    a = random_float_matrix(12, 12, seed=2)
    b = random_float_matrix(12, 12, seed=3)
    expected = multiply_classic(a, b)
    thresholds = ThresholdConfig.uniform(4)
    for algorithm in (Algorithm.BINI_APPROX, Algorithm.SCHONHAGE_APPROX):
        result = multiply(a, b, algorithm, thresholds=thresholds, epsilon=1e-4)
        assert max_relative_difference(expected, result) <= 1e-2, algorithm.value


def test_string_names_and_labels() -> None:
    a = random_int_matrix(4, 4, seed=4)
    assert multiply(a, a, "laderman") == multiply_classic(a, a)
    assert algorithm_label("strassen_dynamic") == "Strassen <2, 2, 2> (dynamic)"
    assert is_exact(Algorithm.BINI_EXACT)
    assert not is_exact("schonhage_approx")


def test_unknown_algorithm() -> None:
    a = random_int_matrix(2, 2, seed=5)
    with pytest.raises(ValueError):
        multiply(a, a, "winograd")
    with pytest.raises(ValueError):
        algorithm_label("winograd")


def test_approximate_epsilon_validated() -> None:
    a = random_float_matrix(4, 4, seed=6)
    with pytest.raises(ValueError):
        multiply(a, a, Algorithm.BINI_APPROX, epsilon=0.0)
    # default epsilon is filled in
    assert multiply(a, a, Algorithm.SCHONHAGE_APPROX).shape == (4, 4)


def test_threshold_config_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        ThresholdConfig(strassen=0)
    with pytest.raises(ValueError):
        ThresholdConfig.uniform(-3)


def test_demo_runs_every_algorithm() -> None:
    timings = run_demo(MatrixShape(9, 10, 8), threshold=2, seed=1)
    assert set(timings) == set(Algorithm)
    assert all(t >= 0.0 for t in timings.values())


def test_timing_sweep_writes_outputs(tmp_path: Path) -> None:
    config = BenchmarkConfig(
        start=6,
        stop=12,
        step=6,
        trials=1,
        exact_max_size=6,
        thresholds=ThresholdConfig.uniform(2),
    )
    rows = run_timing_sweep(config, tmp_path)

    # exact polynomial algorithms are skipped at size 12
    expected = len(Algorithm) + len(Algorithm) - 2
    assert len(rows) == expected
    assert {row["size"] for row in rows} == {6, 12}
    skipped = {row["algorithm"] for row in rows if row["size"] == 12}
    assert "bini_exact" not in skipped and "schonhage_exact" not in skipped

    for row in rows:
        if is_exact(row["algorithm"]):
            assert row["exact_match"], row
            assert row["max_rel_error"] == 0.0

    with (tmp_path / "timings.csv").open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        assert reader.fieldnames == [
            "size", "trial", "algorithm", "label", "runtime_sec", "max_rel_error", "exact_match",
        ]
        assert len(list(reader)) == expected

    lines = (tmp_path / "timings.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == expected
    assert json.loads(lines[0])["algorithm"] == "classic"


def test_benchmark_sizes() -> None:
    assert BenchmarkConfig(start=50, stop=200, step=50).sizes() == [50, 100, 150, 200]
    with pytest.raises(ValueError):
        BenchmarkConfig(step=0).sizes()


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(pytest.main([__file__]))
