"""Tests for the shared utilities: datasets, metrics, printing, timing, logging."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

import numpy as np
import pytest

from fast_matrix_multiplication.common.config import validate_epsilon, validate_threshold
from fast_matrix_multiplication.common.datasets import identity_matrix, random_float_matrix, random_int_matrix
from fast_matrix_multiplication.common.errors import DimensionMismatchError
from fast_matrix_multiplication.common.logging_utils import append_jsonl, get_logger, set_verbosity
from fast_matrix_multiplication.common.metrics import max_relative_difference, relative_frobenius_error
from fast_matrix_multiplication.common.printing import (
    format_differences,
    format_matrix,
    print_differences,
    print_matrix,
)
from fast_matrix_multiplication.common.timing import Timer, time_function, timer
from fast_matrix_multiplication.core.matrix import Matrix
from fast_matrix_multiplication.core.polynomial import Polynomial


def test_random_int_matrix_range_and_seed() -> None:
    m = random_int_matrix(20, 30, max_value=5, seed=7)
    assert m.shape == (20, 30)
    assert m.dtype == np.int64
    assert m.data.min() >= 0 and m.data.max() <= 5
    assert m == random_int_matrix(20, 30, max_value=5, seed=7)


def test_random_float_matrix_is_integer_valued() -> None:
    m = random_float_matrix(15, 10, max_value=10, seed=8)
    assert m.dtype == np.float64
    assert m.data.min() >= 1.0 and m.data.max() <= 10.0
    assert np.array_equal(m.data, np.round(m.data))


def test_shared_generator_advances() -> None:
    rng = np.random.default_rng(0)
    first = random_int_matrix(5, 5, rng=rng)
    second = random_int_matrix(5, 5, rng=rng)
    assert first != second


def test_identity_matrix() -> None:
    assert identity_matrix(3) == Matrix.from_flat([1, 0, 0, 0, 1, 0, 0, 0, 1], 3, 3)


def test_max_relative_difference() -> None:
    correct = Matrix.from_flat([1.0, 2.0, 4.0, 0.0], 2, 2)
    approx = Matrix.from_flat([1.0, 2.5, 3.0, 0.0], 2, 2)
    assert max_relative_difference(correct, approx) == pytest.approx(0.25)
    assert max_relative_difference(correct, correct) == 0.0

    off_zero = Matrix.from_flat([1.0, 2.0, 4.0, 1e-9], 2, 2)
    assert math.isinf(max_relative_difference(correct, off_zero))

    with pytest.raises(DimensionMismatchError):
        max_relative_difference(correct, Matrix.zeros(1, 2))


def test_relative_frobenius_error() -> None:
    correct = np.array([[3.0, 0.0], [0.0, 4.0]])
    approx = np.array([[3.0, 0.0], [0.0, 3.0]])
    assert relative_frobenius_error(correct, approx) == pytest.approx(0.2)
    assert relative_frobenius_error(Matrix(correct), Matrix(correct)) == 0.0


def test_format_matrix() -> None:
    m = Matrix.from_flat([1, 2, 3, 4, 5, 6], 2, 3)
    assert format_matrix(m, "A") == "A (2 x 3)\n1\t2\t3\n4\t5\t6"


def test_format_polynomial_matrix() -> None:
    m = Matrix.filled(1, 2, Polynomial(1, 2))
    assert format_matrix(m, "P").splitlines()[1] == "1e^0 + 2e^1\t1e^0 + 2e^1"


def test_print_matrix(capsys: pytest.CaptureFixture[str]) -> None:
    print_matrix(Matrix.filled(1, 1, 9), "x")
    assert capsys.readouterr().out == "x (1 x 1)\n9\n"


def test_format_differences() -> None:
    a = Matrix.from_flat([1, 2, 3, 4], 2, 2)
    b = Matrix.from_flat([1, 0, 3, 0], 2, 2)
    assert format_differences(a, b) == "equal (2 x 2)\nTrue\tFalse\nTrue\tFalse"
    with pytest.raises(DimensionMismatchError):
        format_differences(a, Matrix.zeros(2, 3))


def test_print_differences(capsys: pytest.CaptureFixture[str]) -> None:
    a = Matrix.from_flat([1, 2], 1, 2)
    print_differences(a, Matrix.from_flat([1, 3], 1, 2))
    assert capsys.readouterr().out == "equal (1 x 2)\nTrue\tFalse\n"


def test_timer() -> None:
    t = Timer()
    with pytest.raises(RuntimeError):
        t.elapsed()
    t.start()
    first = t.elapsed()
    assert first >= 0.0
    assert t.elapsed() >= first


def test_timer_context_and_time_function() -> None:
    with timer() as t:
        sum(range(1000))
    assert t.seconds >= 0.0

    value, timing = time_function(lambda: 6 * 7)
    assert value == 42
    assert timing.seconds >= 0.0


def test_validators() -> None:
    assert validate_threshold(1) == 1
    with pytest.raises(ValueError):
        validate_threshold(0)
    assert validate_epsilon(1e-3) == 1e-3
    eps = Polynomial.epsilon()
    assert validate_epsilon(eps) is eps
    with pytest.raises(ValueError):
        validate_epsilon(-1.0)


def test_logging_helpers(tmp_path: Path) -> None:
    logger = get_logger("fast_matrix_multiplication.tests")
    assert logger is get_logger("fast_matrix_multiplication.tests")
    assert len(logger.handlers) == 1

    path = tmp_path / "nested" / "records.jsonl"
    append_jsonl(path, {"size": 4, "algorithm": "classic"})
    append_jsonl(path, {"size": 8, "algorithm": "laderman"})
    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert records == [{"size": 4, "algorithm": "classic"}, {"size": 8, "algorithm": "laderman"}]


def test_set_verbosity() -> None:
    logger = get_logger("fast_matrix_multiplication.tests.verbosity")
    other = get_logger("some_other_package")
    try:
        set_verbosity(True)
        assert logger.level == logging.DEBUG
        assert other.level == logging.INFO
    finally:
        set_verbosity(False)
    assert logger.level == logging.INFO


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(pytest.main([__file__]))
