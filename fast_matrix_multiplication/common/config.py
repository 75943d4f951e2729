"""Configuration dataclasses for algorithms and benchmark runs.

These provide typed containers for thresholds and sweep parameters so that
the algorithm registry, the drivers and the plotting scripts share a common
schema.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

# Size at or below which every fast algorithm falls back to classic multiplication.
DEFAULT_THRESHOLD = 200


class Algorithm(str, Enum):
    """Supported matrix multiplication algorithms."""

    CLASSIC = "classic"
    STRASSEN_STATIC = "strassen_static"
    STRASSEN_DYNAMIC = "strassen_dynamic"
    LADERMAN = "laderman"
    BINI_EXACT = "bini_exact"
    BINI_APPROX = "bini_approx"
    SCHONHAGE_EXACT = "schonhage_exact"
    SCHONHAGE_APPROX = "schonhage_approx"


@dataclass(frozen=True)
class BlockFactor:
    """Block factor ``<n, k, m>``: how many pieces each dimension of an
    ``(n×k) @ (k×m)`` product is split into per recursion level."""

    n: int
    k: int
    m: int


@dataclass
class MatrixShape:
    """Problem size triple (n, k, m) for products A(n×k) @ B(k×m)."""

    n: int
    k: int
    m: int


def validate_threshold(threshold: int) -> int:
    """Return ``threshold`` if it is a usable recursion cut-off.

    Raises
    ------
    ValueError
        If ``threshold`` is smaller than 1.
    """

    if threshold < 1:
        raise ValueError(f"threshold must be at least 1, got {threshold}")
    return threshold


def validate_epsilon(epsilon: Any) -> Any:
    """Return ``epsilon`` if it is usable by an approximate algorithm.

    Numeric values must be strictly positive; a symbolic ``Polynomial``
    passes through untouched.

    Raises
    ------
    ValueError
        If ``epsilon`` is a number ``<= 0``.
    """

    if isinstance(epsilon, numbers.Real) and not epsilon > 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")
    return epsilon


@dataclass
class ThresholdConfig:
    """Per-family sizes below which recursion stops."""

    strassen: int = DEFAULT_THRESHOLD
    laderman: int = DEFAULT_THRESHOLD
    bini: int = DEFAULT_THRESHOLD
    schonhage: int = DEFAULT_THRESHOLD

    def __post_init__(self) -> None:
        for value in (self.strassen, self.laderman, self.bini, self.schonhage):
            validate_threshold(value)

    @classmethod
    def uniform(cls, threshold: int) -> "ThresholdConfig":
        """Use the same threshold for every family."""
        return cls(
            strassen=threshold,
            laderman=threshold,
            bini=threshold,
            schonhage=threshold,
        )


@dataclass
class BenchmarkConfig:
    """Top-level configuration for a timing sweep.

    Sizes are square ``size × size`` products from ``start`` to ``stop``
    (inclusive) in increments of ``step``. Exact-mode Bini/Schönhage run on
    polynomial entries and are skipped above ``exact_max_size``.
    """

    start: int = 50
    stop: int = 400
    step: int = 50
    trials: int = 1
    seed: int = 42
    max_value: int = 10
    bini_epsilon: float = 1e-1
    schonhage_epsilon: float = 1e-1
    exact_max_size: int = 60
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    algorithms: List[Algorithm] = field(default_factory=lambda: list(Algorithm))

    def sizes(self) -> List[int]:
        """Matrix sizes covered by the sweep."""
        if self.step <= 0:
            raise ValueError("step must be positive")
        return list(range(self.start, self.stop + 1, self.step))
