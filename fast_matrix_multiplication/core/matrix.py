"""Dense matrix with block extraction and in-place block accumulation.

``Matrix`` wraps a two-dimensional, row-major NumPy array. Entries may be
any ring-like scalar: machine integers and floats use a numeric dtype, while
``Polynomial`` entries (exact mode of the approximate algorithms) live in a
``dtype=object`` array.

Every matrix owns its buffer: construction copies the input and sub-blocks
are copies. Mutating a block never changes the matrix it was taken from,
and vice versa.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import DTypeLike, NDArray

from fast_matrix_multiplication.common.errors import DimensionMismatchError

Index = Tuple[int, int]


class Matrix:
    """Dense ``rows × cols`` matrix backed by a NumPy array.

    Parameters
    ----------
    data:
        Two-dimensional array-like, copied into a C-contiguous array the
        matrix owns. ``None`` creates an empty ``0 × 0`` matrix.
    """

    __slots__ = ("data",)

    # numpy scalars on the left of ``*`` defer to ``__rmul__``
    __array_ufunc__ = None

    def __init__(self, data: Optional[Any] = None) -> None:
        if data is None:
            data = np.zeros((0, 0), dtype=np.int64)
        array = np.array(data, order="C")
        if array.ndim != 2:
            raise DimensionMismatchError(f"matrix data must be 2D, got shape {array.shape}")
        self.data: NDArray[Any] = array

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype: DTypeLike = np.int64) -> "Matrix":
        """``rows × cols`` matrix of additive identities.

        For ``dtype=object`` the entries are the integer ``0``, which
        ``Polynomial`` arithmetic treats as the zero polynomial.
        """
        return cls(np.zeros((rows, cols), dtype=dtype))

    @classmethod
    def filled(cls, rows: int, cols: int, value: Any) -> "Matrix":
        """``rows × cols`` matrix with every entry equal to ``value``."""
        if isinstance(value, (int, float, complex, np.number)):
            return cls(np.full((rows, cols), value))
        data = np.empty((rows, cols), dtype=object)
        data.fill(value)
        return cls(data)

    @classmethod
    def from_flat(cls, values: Iterable[Any], rows: int, cols: int) -> "Matrix":
        """Build a matrix from a flat row-major buffer.

        No validation is done here beyond what ``numpy.reshape`` enforces.
        """
        values = list(values)
        if any(not isinstance(v, (int, float, complex, np.number)) for v in values):
            flat = np.empty(len(values), dtype=object)
            for i, value in enumerate(values):
                flat[i] = value
        else:
            flat = np.asarray(values)
        return cls(flat.reshape(rows, cols))

    @classmethod
    def identity(cls, n: int, dtype: DTypeLike = np.int64) -> "Matrix":
        """``n × n`` identity matrix."""
        return cls(np.eye(n, dtype=dtype))

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return int(self.data.shape[0])

    @property
    def cols(self) -> int:
        return int(self.data.shape[1])

    @property
    def shape(self) -> Index:
        return self.rows, self.cols

    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype

    def __getitem__(self, location: Index) -> Any:
        i, j = location
        return self.data[i, j]

    def __setitem__(self, location: Index, value: Any) -> None:
        i, j = location
        self.data[i, j] = value

    def copy(self) -> "Matrix":
        return Matrix(self.data)

    def astype(self, dtype: DTypeLike) -> "Matrix":
        """Copy of this matrix with entries cast to ``dtype``."""
        return Matrix(self.data.astype(dtype))

    def transposed(self) -> "Matrix":
        """New matrix holding the transpose."""
        return Matrix(self.data.T)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _check_block(self, top_left: Index, size: Index) -> None:
        start_row, start_col = top_left
        block_rows, block_cols = size
        if start_row < 0 or start_col < 0 or block_rows < 0 or block_cols < 0:
            raise DimensionMismatchError(
                f"negative block offset/size: top_left={top_left}, size={size}"
            )
        if start_row + block_rows > self.rows or start_col + block_cols > self.cols:
            raise DimensionMismatchError(
                f"block at {top_left} of size {size} does not fit in a "
                f"{self.rows}x{self.cols} matrix"
            )

    def subblock(self, top_left: Index, size: Index) -> "Matrix":
        """Copy of the ``size`` region starting at ``top_left``."""
        self._check_block(top_left, size)
        start_row, start_col = top_left
        block_rows, block_cols = size
        region = self.data[start_row:start_row + block_rows, start_col:start_col + block_cols]
        return Matrix(region)

    def blocks(self, row_parts: int, col_parts: int) -> List[List["Matrix"]]:
        """Split into a ``row_parts × col_parts`` grid of equal blocks.

        Block sizes are ``rows // row_parts`` by ``cols // col_parts``;
        trailing rows and columns that do not fill a whole block are left
        out (they are handled by dynamic peeling).
        """
        block_rows = self.rows // row_parts
        block_cols = self.cols // col_parts
        return [
            [
                self.subblock((i * block_rows, j * block_cols), (block_rows, block_cols))
                for j in range(col_parts)
            ]
            for i in range(row_parts)
        ]

    def _accumulate(self, top_left: Index, block: "Matrix", subtract: bool) -> "Matrix":
        self._check_block(top_left, block.shape)
        dtype = np.result_type(self.data.dtype, block.data.dtype)
        if dtype != self.data.dtype:
            self.data = self.data.astype(dtype)
        start_row, start_col = top_left
        region = self.data[start_row:start_row + block.rows, start_col:start_col + block.cols]
        if subtract:
            region -= block.data
        else:
            region += block.data
        return self

    def block_add(self, top_left: Index, block: "Matrix") -> "Matrix":
        """Add ``block`` into this matrix at ``top_left`` (in place)."""
        return self._accumulate(top_left, block, subtract=False)

    def block_subtract(self, top_left: Index, block: "Matrix") -> "Matrix":
        """Subtract ``block`` from this matrix at ``top_left`` (in place)."""
        return self._accumulate(top_left, block, subtract=True)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _check_same_shape(self, other: "Matrix") -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"shapes differ: {self.rows}x{self.cols} vs {other.rows}x{other.cols}"
            )

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        return Matrix(self.data + other.data)

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        return Matrix(self.data - other.data)

    def __neg__(self) -> "Matrix":
        return Matrix(-self.data)

    def __iadd__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        return self.block_add((0, 0), other)

    def __isub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        return self.block_subtract((0, 0), other)

    def __mul__(self, scalar: Any) -> "Matrix":
        if isinstance(scalar, Matrix):
            return NotImplemented
        return Matrix(self.data * scalar)

    def __rmul__(self, scalar: Any) -> "Matrix":
        if isinstance(scalar, Matrix):
            return NotImplemented
        return Matrix(scalar * self.data)

    def __truediv__(self, scalar: Any) -> "Matrix":
        if isinstance(scalar, Matrix):
            return NotImplemented
        return Matrix(self.data / scalar)

    # ------------------------------------------------------------------
    # Comparison / display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return bool(np.array_equal(self.data, other.data))

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols}, dtype={self.data.dtype})"


def validate_product_shapes(a: Matrix, b: Matrix) -> Tuple[int, int, int]:
    """Check that ``a @ b`` is defined and return ``(n, k, m)``.

    Raises
    ------
    DimensionMismatchError
        If ``a.cols != b.rows``.
    """

    if a.cols != b.rows:
        raise DimensionMismatchError(
            f"inner dimensions must match: A is {a.rows}x{a.cols}, B is {b.rows}x{b.cols}"
        )
    return a.rows, a.cols, b.cols


def product_dtype(a: Matrix, b: Matrix) -> np.dtype:
    """Entry type of ``a @ b``."""
    return np.result_type(a.data.dtype, b.data.dtype)
