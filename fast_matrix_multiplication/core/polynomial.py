"""Polynomials in a formal indeterminate ε.

Bini's and Schönhage's algorithms are only exact in the limit ε → 0. Running
them over polynomials in ε keeps every power of ε separate, so the constant
term of the result is the exact product. Multiplication here is quadratic in
the number of coefficients, which makes the exact mode a verification tool
rather than a fast path.

Division is deliberately restricted: only ``ε`` and ``ε²`` are valid
divisors. Both simply shift coefficients down and drop the lowest ones.
"""

from __future__ import annotations

import numbers
from typing import Any, Optional, Tuple

import numpy as np
from numpy.typing import DTypeLike

from fast_matrix_multiplication.common.errors import UnsupportedOperationError
from fast_matrix_multiplication.core.matrix import Matrix


def _strip(coefficients: Tuple[Any, ...]) -> Tuple[Any, ...]:
    """Drop trailing zero coefficients, keeping at least one."""
    end = len(coefficients)
    while end > 1 and coefficients[end - 1] == 0:
        end -= 1
    return coefficients[:end]


class Polynomial:
    """Immutable polynomial ``a[0] + a[1]·ε + a[2]·ε² + ...``.

    ``Polynomial()`` is zero, ``Polynomial(c)`` a constant and
    ``Polynomial(a0, a1)`` a linear polynomial. Plain numbers mix freely with
    polynomials in ``+``, ``-`` and ``*``; they are lifted to constants.
    """

    __slots__ = ("coefficients",)

    def __init__(self, *coefficients: Any) -> None:
        if not coefficients:
            coefficients = (0,)
        self.coefficients: Tuple[Any, ...] = tuple(coefficients)

    @classmethod
    def epsilon(cls) -> "Polynomial":
        """The indeterminate ε."""
        return cls(0, 1)

    @classmethod
    def epsilon_squared(cls) -> "Polynomial":
        """ε²."""
        return cls(0, 0, 1)

    @classmethod
    def lift(cls, value: Any) -> "Polynomial":
        """Return ``value`` as a polynomial (numbers become constants)."""
        if isinstance(value, Polynomial):
            return value
        if isinstance(value, numbers.Number):
            return cls(value)
        raise TypeError(f"cannot interpret {type(value).__name__} as a polynomial in epsilon")

    @staticmethod
    def _coerce(value: Any) -> Optional["Polynomial"]:
        if isinstance(value, Polynomial):
            return value
        if isinstance(value, numbers.Number):
            return Polynomial(value)
        return None

    @property
    def constant(self) -> Any:
        """Coefficient of ε⁰."""
        return self.coefficients[0]

    @property
    def degree(self) -> int:
        return len(_strip(self.coefficients)) - 1

    def _zero(self) -> Any:
        head = self.coefficients[0]
        return head - head

    # ------------------------------------------------------------------
    # Ring operations
    # ------------------------------------------------------------------

    def __add__(self, other: Any) -> "Polynomial":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        a, b = self.coefficients, other.coefficients
        if len(a) < len(b):
            a, b = b, a
        return Polynomial(*(x + y for x, y in zip(a, b)), *a[len(b):])

    __radd__ = __add__

    def __neg__(self) -> "Polynomial":
        return Polynomial(*(-x for x in self.coefficients))

    def __sub__(self, other: Any) -> "Polynomial":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other: Any) -> "Polynomial":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other + (-self)

    def __mul__(self, other: Any) -> "Polynomial":
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        a, b = self.coefficients, other.coefficients
        product = [0] * (len(a) + len(b) - 1)
        for i, x in enumerate(a):
            for j, y in enumerate(b):
                product[i + j] += x * y
        return Polynomial(*product)

    __rmul__ = __mul__

    # ------------------------------------------------------------------
    # Restricted division
    # ------------------------------------------------------------------

    def divide_by_epsilon(self) -> "Polynomial":
        """Shift coefficients down by one; the constant term is dropped."""
        if len(self.coefficients) <= 1:
            return Polynomial(self._zero())
        return Polynomial(*self.coefficients[1:])

    def divide_by_epsilon_squared(self) -> "Polynomial":
        """Shift coefficients down by two; the two lowest terms are dropped."""
        if len(self.coefficients) <= 2:
            return Polynomial(self._zero())
        return Polynomial(*self.coefficients[2:])

    def __truediv__(self, other: Any) -> "Polynomial":
        divisor = self._coerce(other)
        if divisor is None:
            return NotImplemented
        shape = _strip(divisor.coefficients)
        if shape == (0, 1):
            return self.divide_by_epsilon()
        if shape == (0, 0, 1):
            return self.divide_by_epsilon_squared()
        raise UnsupportedOperationError(
            f"polynomial division is only defined for epsilon and epsilon^2, got {divisor}"
        )

    def __rtruediv__(self, other: Any) -> "Polynomial":
        dividend = self._coerce(other)
        if dividend is None:
            return NotImplemented
        return dividend / self

    # ------------------------------------------------------------------
    # Comparison / display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return _strip(self.coefficients) == _strip(other.coefficients)

    def __hash__(self) -> int:
        return hash(_strip(self.coefficients))

    def __str__(self) -> str:
        return " + ".join(f"{c}e^{i}" for i, c in enumerate(self.coefficients))

    def __repr__(self) -> str:
        return f"Polynomial{self.coefficients!r}"


_lift = np.frompyfunc(Polynomial.lift, 1, 1)
_constant_term = np.frompyfunc(lambda value: Polynomial.lift(value).constant, 1, 1)


def to_polynomial(matrix: Matrix) -> Matrix:
    """Lift every entry of ``matrix`` to a constant polynomial."""
    values = matrix.data
    if values.dtype != object:
        values = values.astype(object)
    return Matrix(_lift(values).astype(object))


def polynomial_to_scalar(matrix: Matrix, dtype: Optional[DTypeLike] = None) -> Matrix:
    """Project a polynomial matrix back to scalars by sending ε to 0.

    Each entry is replaced by its constant term. With ``dtype`` given, the
    result is cast to it; otherwise it stays an object array.
    """

    values = _constant_term(matrix.data).astype(object)
    if dtype is not None:
        values = values.astype(dtype)
    return Matrix(values)
