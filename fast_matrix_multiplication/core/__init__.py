"""Matrix primitives shared by every multiplication algorithm."""

from fast_matrix_multiplication.core.classic import multiply_classic
from fast_matrix_multiplication.core.matrix import Matrix, product_dtype, validate_product_shapes
from fast_matrix_multiplication.core.peeling import dynamic_peeling
from fast_matrix_multiplication.core.polynomial import (
    Polynomial,
    polynomial_to_scalar,
    to_polynomial,
)

__all__ = [
    "Matrix",
    "Polynomial",
    "dynamic_peeling",
    "multiply_classic",
    "polynomial_to_scalar",
    "product_dtype",
    "to_polynomial",
    "validate_product_shapes",
]
