"""Bini's approximate <2, 2, 3> algorithm and its exact polynomial mode."""

from fast_matrix_multiplication.bini.core import BINI_THRESHOLD, multiply_bini, multiply_bini_exact

__all__ = ["BINI_THRESHOLD", "multiply_bini", "multiply_bini_exact"]
