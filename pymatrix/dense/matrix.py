"""
Dense matrix container.

A Matrix owns one contiguous, row-major NumPy buffer of float32 or float64
elements: element (r, c) lives at buffer[r * columns + c]. Shapes are fixed
at construction and always have at least one row and one column.

Every constructor copies its input and every accessor that returns a row,
a column or an iteration item returns a copy, so two live matrices never
share memory.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Sequence
import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrix.core.compute.precision import DEFAULT_DTYPE
from pymatrix.core.exceptions import DimensionError
from pymatrix.core.validation import (
    check_array,
    check_dtype,
    check_extent,
    check_index,
    check_length,
    check_2d,
)


class Axis(Enum):
    """Reduction axis for sum()."""
    ROW = 'row'
    COLUMN = 'column'


class Matrix:
    """
    Dense row-major matrix of single or double precision elements.

    Construction:
        Matrix(2, 3)                                # 2x3 of zeros, float64
        Matrix(2, 3, 1.5, dtype=np.float32)         # filled
        Matrix.from_rows([[1, 2], [3, 4]])          # rectangular literal
        Matrix.from_buffer(2, 2, [1, 2, 3, 4])      # flat row-major buffer
        Matrix.from_array(np.eye(3))                # any 2-D array-like
        Matrix.identity(3)

    Access:
        m[r, c], m.get(r, c), m.set(r, c, v)
        m.row(i), m.set_row(i, values)
        m.column(j), m.set_column(j, values)
        for row in m: ...
    """

    __slots__ = ('_rows', '_columns', '_buffer')

    # Keep numpy scalars and arrays from broadcasting over a Matrix;
    # `np.float32(2) * m` dispatches to Matrix.__rmul__ instead.
    __array_ufunc__ = None

    # Mutable container
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        rows: int,
        columns: int,
        fill: float = 0.0,
        *,
        dtype: DTypeLike = DEFAULT_DTYPE,
    ):
        check_extent(rows, columns)
        dt = check_dtype(dtype, 'dtype')
        self._rows = int(rows)
        self._columns = int(columns)
        self._buffer = np.full(self._rows * self._columns, fill, dtype=dt)

    # === Alternate constructors ===

    @classmethod
    def from_rows(
        cls,
        contents: Sequence[Sequence[float]],
        *,
        dtype: DTypeLike = DEFAULT_DTYPE,
    ) -> Matrix:
        """
        Build from a sequence of rows.

        The column count is taken from the first row. Shorter rows are
        zero-padded and longer rows truncated to that count.
        """
        if len(contents) == 0:
            raise DimensionError("contents: expected at least one row")
        columns = len(contents[0])
        result = cls(len(contents), columns, 0.0, dtype=dtype)

        for i, row in enumerate(contents):
            values = check_array(row, f"contents[{i}]", dtype=result.dtype)
            if values.ndim != 1:
                raise DimensionError(
                    f"contents[{i}]: expected a flat row, got shape {values.shape}"
                )
            count = min(columns, values.shape[0])
            start = i * columns
            result._buffer[start:start + count] = values[:count]

        return result

    @classmethod
    def from_buffer(
        cls,
        rows: int,
        columns: int,
        buffer: ArrayLike,
        *,
        dtype: DTypeLike | None = None,
    ) -> Matrix:
        """Build from a flat row-major buffer of exactly rows*columns values."""
        check_extent(rows, columns)
        values = check_array(buffer, 'buffer', dtype=dtype).ravel()
        check_length(values, rows * columns, 'buffer')
        return cls._wrap(rows, columns, values.copy())

    @classmethod
    def from_array(cls, array: ArrayLike, *, dtype: DTypeLike | None = None) -> Matrix:
        """Build from any 2-D array-like."""
        arr = check_array(array, 'array', dtype=dtype)
        check_2d(arr, 'array')
        rows, columns = arr.shape
        check_extent(rows, columns)
        return cls._wrap(rows, columns, np.ascontiguousarray(arr).ravel().copy())

    @classmethod
    def identity(cls, n: int, *, dtype: DTypeLike = DEFAULT_DTYPE) -> Matrix:
        """n x n identity matrix."""
        result = cls(n, n, 0.0, dtype=dtype)
        result._buffer[::n + 1] = 1.0
        return result

    @classmethod
    def _wrap(cls, rows: int, columns: int, buffer: NDArray[np.floating[Any]]) -> Matrix:
        """Adopt a freshly allocated buffer without copying. Internal use only."""
        result = cls.__new__(cls)
        result._rows = int(rows)
        result._columns = int(columns)
        result._buffer = np.ascontiguousarray(buffer).reshape(-1)
        return result

    # === Properties ===

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._columns)

    @property
    def size(self) -> int:
        return self._rows * self._columns

    @property
    def dtype(self) -> np.dtype:
        return self._buffer.dtype

    @property
    def buffer(self) -> NDArray[np.floating[Any]]:
        """The owned row-major buffer (not a copy)."""
        return self._buffer

    @property
    def T(self) -> Matrix:
        """Transpose, see algebra.transpose()."""
        from pymatrix.dense.algebra import transpose
        return transpose(self)

    # === Element access ===

    def _offset(self, row: int, column: int) -> int:
        check_index(row, self._rows, 'row')
        check_index(column, self._columns, 'column')
        return row * self._columns + column

    def get(self, row: int, column: int) -> float:
        return self._buffer[self._offset(row, column)]

    def set(self, row: int, column: int, value: float) -> None:
        self._buffer[self._offset(row, column)] = value

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, column = _split_key(key)
        return self.get(row, column)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        row, column = _split_key(key)
        self.set(row, column, value)

    def row(self, index: int) -> NDArray[np.floating[Any]]:
        """Copy of row `index`."""
        check_index(index, self._rows, 'row')
        start = index * self._columns
        return self._buffer[start:start + self._columns].copy()

    def set_row(self, index: int, values: ArrayLike) -> None:
        check_index(index, self._rows, 'row')
        arr = check_array(values, 'values', dtype=self.dtype)
        check_length(arr, self._columns, 'values')
        start = index * self._columns
        self._buffer[start:start + self._columns] = arr

    def column(self, index: int) -> NDArray[np.floating[Any]]:
        """Copy of column `index`, one element per row."""
        check_index(index, self._columns, 'column')
        return self._buffer[index::self._columns].copy()

    def set_column(self, index: int, values: ArrayLike) -> None:
        check_index(index, self._columns, 'column')
        arr = check_array(values, 'values', dtype=self.dtype)
        check_length(arr, self._rows, 'values')
        self._buffer[index::self._columns] = arr

    # === Conversion ===

    def copy(self) -> Matrix:
        return Matrix._wrap(self._rows, self._columns, self._buffer.copy())

    def to_array(self) -> NDArray[np.floating[Any]]:
        """2-D copy of the contents."""
        return self._buffer.reshape(self._rows, self._columns).copy()

    def tolist(self) -> list[list[float]]:
        return self._buffer.reshape(self._rows, self._columns).tolist()

    # === Sequence protocol ===

    def __len__(self) -> int:
        return self._rows

    def __iter__(self) -> Iterator[NDArray[np.floating[Any]]]:
        for i in range(self._rows):
            yield self.row(i)

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._columns == other._columns
            and self.dtype == other.dtype
            and bool(np.array_equal(self._buffer, other._buffer))
        )

    # === Operators ===

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        from pymatrix.dense.algebra import add
        return add(self, other)

    def __mul__(self, other: object) -> Matrix:
        from pymatrix.dense.algebra import elementwise_multiply, scale
        if isinstance(other, Matrix):
            return elementwise_multiply(self, other)
        if _is_scalar(other):
            return scale(other, self)
        return NotImplemented

    def __rmul__(self, other: object) -> Matrix:
        if not _is_scalar(other):
            return NotImplemented
        from pymatrix.dense.algebra import scale
        return scale(other, self)

    def __matmul__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        from pymatrix.dense.algebra import multiply
        return multiply(self, other)

    def __truediv__(self, other: object) -> Matrix:
        if not (isinstance(other, Matrix) or _is_scalar(other)):
            return NotImplemented
        from pymatrix.dense.algebra import divide
        return divide(self, other)

    def __pow__(self, exponent: object) -> Matrix:
        if not _is_scalar(exponent):
            return NotImplemented
        from pymatrix.dense.algebra import power
        return power(self, exponent)

    # === Rendering ===

    def __str__(self) -> str:
        lines = []
        last = self._rows - 1
        for i in range(self._rows):
            start = i * self._columns
            contents = "\t".join(str(v) for v in self._buffer[start:start + self._columns])
            if self._rows == 1:
                left, right = "(", ")"
            elif i == 0:
                left, right = "⎛", "⎞"
            elif i == last:
                left, right = "⎝", "⎠"
            else:
                left, right = "⎜", "⎥"
            lines.append(f"{left}\t{contents}\t{right}\n")
        return "".join(lines)

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, columns={self._columns}, dtype={self.dtype})"


def _split_key(key: Any) -> tuple[int, int]:
    if not (isinstance(key, tuple) and len(key) == 2):
        raise TypeError(f"Matrix indices must be (row, column) pairs, got {key!r}")
    return key


def _is_scalar(value: object) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)
