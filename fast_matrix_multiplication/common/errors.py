"""Exception types raised by the matrix algorithms."""

from __future__ import annotations


class DimensionMismatchError(ValueError):
    """Matrix shapes are incompatible with the requested operation.

    Raised when inner dimensions of a product disagree, when a block does not
    fit inside the matrix it is read from or accumulated into, or when two
    matrices combined element-wise have different shapes.
    """


class UnsupportedOperationError(ArithmeticError):
    """A restricted operation was invoked outside of its defined domain.

    ``Polynomial`` division is only defined for the divisors ``ε`` and ``ε²``.
    Hitting this error means the recombination step of an approximate
    algorithm is wrong, not that the caller passed bad input.
    """
