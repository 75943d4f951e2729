"""Timing utilities for benchmarks and demos.

``Timer`` mirrors a stopwatch (``start`` / ``elapsed``); ``timer`` and
``time_function`` wrap a block or a call.
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass
from typing import Callable, Generator, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass
class TimerResult:
    """Result of a timed execution block.

    Attributes
    ----------
    seconds : float
        Elapsed wall-clock time in seconds.
    """

    seconds: float


class Timer:
    """Restartable wall-clock stopwatch."""

    def __init__(self) -> None:
        self._epoch: Optional[float] = None

    def start(self) -> None:
        """(Re)start measuring from now."""
        self._epoch = time.perf_counter()

    def elapsed(self) -> float:
        """Seconds since the last ``start``."""
        if self._epoch is None:
            raise RuntimeError("Timer.elapsed() called before Timer.start()")
        return float(time.perf_counter() - self._epoch)


@contextlib.contextmanager
def timer() -> Generator[TimerResult, None, None]:
    """Context manager for wall-clock timing.

    Example
    -------
    >>> with timer() as t:
    ...     c = multiply_classic(a, b)
    >>> print(t.seconds)
    """

    stopwatch = Timer()
    result = TimerResult(seconds=0.0)
    stopwatch.start()
    try:
        yield result
    finally:
        result.seconds = stopwatch.elapsed()


def time_function(func: Callable[[], T]) -> Tuple[T, TimerResult]:
    """Time a zero-argument function and return its result and timing.

    Parameters
    ----------
    func:
        Callable with no arguments, e.g. ``lambda: multiply(a, b, algo)``.

    Returns
    -------
    (result, TimerResult)
        The function's return value and a ``TimerResult`` structure.
    """

    with timer() as t:
        value = func()
    return value, t
