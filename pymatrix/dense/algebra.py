"""
Matrix algebra.

Free functions over Matrix instances. Every function returns a freshly
allocated Matrix and leaves its operands untouched. Shape and element-type
requirements are preconditions: violating them raises DimensionError.

Functions that map onto BLAS-style primitives (add, scale, multiply,
transpose) go through the numeric backend; pure elementwise maps (exp,
power, Hadamard product, scalar division, reductions) use NumPy directly.
"""

from __future__ import annotations

import numpy as np

from pymatrix.core.compute.tolerances import select_tolerance
from pymatrix.core.validation import (
    check_conformable,
    check_same_shape,
    check_square,
)
from pymatrix.dense.backends import BackendSpec, get_backend
from pymatrix.dense.matrix import Axis, Matrix


def add(x: Matrix, y: Matrix, *, backend: BackendSpec = None) -> Matrix:
    """Elementwise sum x + y. Shapes must be equal."""
    check_same_shape(x, y, 'add')
    impl = get_backend(backend)
    return Matrix._wrap(x.rows, x.columns, impl.axpy(1.0, x.buffer, y.buffer))


def scale(alpha: float, x: Matrix, *, backend: BackendSpec = None) -> Matrix:
    """Multiply every element by the scalar alpha."""
    impl = get_backend(backend)
    return Matrix._wrap(x.rows, x.columns, impl.scale(alpha, x.buffer))


def elementwise_multiply(x: Matrix, y: Matrix) -> Matrix:
    """Hadamard product. Shapes must be equal."""
    check_same_shape(x, y, 'elementwise_multiply')
    return Matrix._wrap(x.rows, x.columns, x.buffer * y.buffer)


def multiply(x: Matrix, y: Matrix, *, backend: BackendSpec = None) -> Matrix:
    """
    Matrix product x @ y.

    Requires x.columns == y.rows; the result is x.rows x y.columns.
    Computed by the backend's general matrix multiply (row-major, no
    transposes).
    """
    check_conformable(x, y, 'multiply')
    impl = get_backend(backend)
    buffer = impl.general_multiply(x.buffer, y.buffer, x.rows, x.columns, y.columns)
    return Matrix._wrap(x.rows, y.columns, buffer)


def transpose(x: Matrix, *, backend: BackendSpec = None) -> Matrix:
    """Transpose: result[j, i] == x[i, j], shape x.columns x x.rows."""
    impl = get_backend(backend)
    return Matrix._wrap(x.columns, x.rows, impl.transpose_buffer(x.buffer, x.rows, x.columns))


def power(x: Matrix, exponent: float) -> Matrix:
    """Raise every element to `exponent`."""
    exponent = np.asarray(exponent, dtype=x.dtype)
    return Matrix._wrap(x.rows, x.columns, np.power(x.buffer, exponent))


def exp(x: Matrix) -> Matrix:
    """Elementwise natural exponential."""
    return Matrix._wrap(x.rows, x.columns, np.exp(x.buffer))


def sum(x: Matrix, axis: Axis | str = Axis.COLUMN) -> Matrix:
    """
    Sum along an axis.

    Args:
        x: Input matrix (m x n)
        axis: Axis.COLUMN (default) sums each column into a 1 x n matrix;
              Axis.ROW sums each row into an m x 1 matrix

    Raises:
        ValueError: If axis is not a valid Axis
    """
    axis = Axis(axis)
    grid = x.buffer.reshape(x.rows, x.columns)
    if axis is Axis.COLUMN:
        return Matrix._wrap(1, x.columns, grid.sum(axis=0, dtype=x.dtype))
    return Matrix._wrap(x.rows, 1, grid.sum(axis=1, dtype=x.dtype))


def divide(x: Matrix, y: Matrix | float, *, backend: BackendSpec = None) -> Matrix:
    """
    Divide by a matrix or by a scalar.

    Matrix divisor: x * inv(y). y must be square with y.rows == x.columns.
    NotInvertibleError from the inversion propagates unchanged.

    Scalar divisor: elementwise x / y with IEEE semantics; dividing by
    zero yields inf or nan, never an error.
    """
    if isinstance(y, Matrix):
        from pymatrix.dense.solvers import invert

        check_square(y, 'divide')
        check_conformable(x, y, 'divide')
        impl = get_backend(backend)
        return multiply(x, invert(y, backend=impl), backend=impl)

    divisor = np.asarray(y, dtype=x.dtype)
    with np.errstate(divide='ignore', invalid='ignore'):
        quotient = x.buffer / divisor
    return Matrix._wrap(x.rows, x.columns, quotient)


def allclose(
    x: Matrix,
    y: Matrix,
    *,
    rtol: float | None = None,
    atol: float | None = None,
) -> bool:
    """
    Approximate equality within floating-point tolerance.

    Defaults come from the CPU tolerance tier for the operands' element
    width. Use == for exact comparison.
    """
    check_same_shape(x, y, 'allclose')
    tier = select_tolerance('cpu', x.dtype)
    return bool(np.allclose(
        x.buffer,
        y.buffer,
        rtol=tier.rtol if rtol is None else rtol,
        atol=tier.atol if atol is None else atol,
    ))