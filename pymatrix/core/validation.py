"""
Input validation utilities for pymatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Everything raised here is a
precondition violation: the caller passed something the operation's
contract forbids.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Operation or parameter names included in all error messages

Matrix checks are duck-typed on (rows, columns, dtype) so this module has
no dependency on the Matrix class itself.
"""

from typing import Any, Protocol
import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pymatrix.core.exceptions import ValidationError, DimensionError, MatrixIndexError
from pymatrix.core.compute.precision import SUPPORTED_DTYPES, is_supported_dtype


class _Typed(Protocol):
    dtype: np.dtype


class _Shaped(_Typed, Protocol):
    rows: int
    columns: int


def check_dtype(dtype: DTypeLike, name: str) -> np.dtype:
    """
    Verify dtype is one of the supported element widths.

    Args:
        dtype: Requested element type
        name: Parameter name for error messages

    Returns:
        Normalized numpy dtype

    Raises:
        ValidationError: If dtype is not float32 or float64
    """
    if not is_supported_dtype(dtype):
        supported = ", ".join(str(d) for d in SUPPORTED_DTYPES)
        raise ValidationError(
            f"{name}: unsupported element type {dtype!r}, expected one of: {supported}"
        )
    return np.dtype(dtype)


def check_array(
    array: ArrayLike,
    name: str,
    dtype: DTypeLike | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a floating-point numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages
        dtype: Target element type; if None, floating input keeps its
               width when supported and everything else becomes float64

    Returns:
        numpy.ndarray with a supported floating dtype

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex values are not supported")

    if dtype is not None:
        return result.astype(check_dtype(dtype, 'dtype'), copy=False)

    if not is_supported_dtype(result.dtype):
        result = result.astype(np.float64)

    return result


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Raises:
        DimensionError: If array is not 2D
    """
    if array.ndim != 2:
        raise DimensionError(
            f"{name}: expected 2D array, got {array.ndim}D with shape {array.shape}"
        )


def check_extent(rows: int, columns: int) -> None:
    """
    Verify a matrix shape has at least one row and one column.

    Raises:
        DimensionError: If either extent is not a positive integer
    """
    for label, value in (('rows', rows), ('columns', columns)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise DimensionError(f"{label}: expected an integer, got {type(value).__name__}")
        if value < 1:
            raise DimensionError(f"{label}: must be >= 1, got {value}")


def check_length(values: NDArray[np.floating[Any]], expected: int, name: str) -> None:
    """
    Verify a 1-D sequence has exactly the expected number of elements.

    Raises:
        DimensionError: If the length differs
    """
    if values.ndim != 1 or values.shape[0] != expected:
        raise DimensionError(
            f"{name}: expected {expected} values, got shape {values.shape}"
        )


def check_index(index: int, bound: int, name: str) -> None:
    """
    Verify 0 <= index < bound. Negative indices are not wrapped.

    Raises:
        MatrixIndexError: If index is out of range
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise MatrixIndexError(f"{name}: expected an integer index, got {type(index).__name__}")
    if not 0 <= index < bound:
        raise MatrixIndexError(f"{name}: index {index} out of range [0, {bound})")


def check_same_dtype(x: _Typed, y: _Typed, operation: str) -> None:
    """
    Verify two operands (matrices or arrays) hold the same element width.

    Raises:
        DimensionError: If the dtypes differ
    """
    if x.dtype != y.dtype:
        raise DimensionError(
            f"{operation}: element types differ ({x.dtype} vs {y.dtype})"
        )


def check_same_shape(x: _Shaped, y: _Shaped, operation: str) -> None:
    """
    Verify two matrices have identical shape and element width.

    Raises:
        DimensionError: If shapes or dtypes differ
    """
    if x.rows != y.rows or x.columns != y.columns:
        raise DimensionError(
            f"{operation}: matrix dimensions not compatible "
            f"({x.rows}x{x.columns} vs {y.rows}x{y.columns})"
        )
    check_same_dtype(x, y, operation)


def check_conformable(x: _Shaped, y: _Shaped, operation: str) -> None:
    """
    Verify x.columns == y.rows (inner dimensions agree).

    Raises:
        DimensionError: If the inner dimensions or dtypes differ
    """
    if x.columns != y.rows:
        raise DimensionError(
            f"{operation}: matrix dimensions not compatible with multiplication "
            f"({x.rows}x{x.columns} by {y.rows}x{y.columns})"
        )
    check_same_dtype(x, y, operation)


def check_square(x: _Shaped, operation: str) -> None:
    """
    Verify a matrix is square.

    Raises:
        DimensionError: If rows != columns
    """
    if x.rows != x.columns:
        raise DimensionError(
            f"{operation}: matrix must be square, got {x.rows}x{x.columns}"
        )
