"""Laderman's 23-product algorithm for 3 × 3 block matrices."""

from fast_matrix_multiplication.laderman.core import LADERMAN_THRESHOLD, multiply_laderman

__all__ = ["LADERMAN_THRESHOLD", "multiply_laderman"]
