"""Strassen's algorithm (static padding and dynamic peeling variants)."""

from fast_matrix_multiplication.strassen.core import (
    STRASSEN_THRESHOLD,
    multiply_strassen_dynamic,
    multiply_strassen_static,
    next_power_of_two,
)

__all__ = [
    "STRASSEN_THRESHOLD",
    "multiply_strassen_dynamic",
    "multiply_strassen_static",
    "next_power_of_two",
]
