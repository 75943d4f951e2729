"""Schönhage's approximate <3, 3, 3> algorithm and its exact polynomial mode."""

from fast_matrix_multiplication.schonhage.core import (
    SCHONHAGE_THRESHOLD,
    multiply_schonhage,
    multiply_schonhage_exact,
)

__all__ = ["SCHONHAGE_THRESHOLD", "multiply_schonhage", "multiply_schonhage_exact"]
