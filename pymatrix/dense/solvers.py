"""
LU-based inversion and linear system solving.

Public API:
    invert(x) -> Matrix
    solve(a, b) -> pivots          (b is overwritten with the solution)
    solve_system(a, b) -> LinearSystemSolution   (b is left untouched)

All three are single-shot: they copy what they need into working buffers,
call the numeric backend, and map nonzero backend status codes onto the
exception taxonomy in pymatrix.core.exceptions. Failures are never retried
and never replaced by an approximate answer.
"""

from __future__ import annotations

from typing import Any, Union
import warnings

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.precision import condition_number
from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import ill_conditioning_threshold
from pymatrix.core.exceptions import (
    DimensionError,
    EquationUnsolvedError,
    IllegalArgumentError,
    NotInvertibleError,
    ValidationError,
)
from pymatrix.core.protocols import LinearAlgebraBackend
from pymatrix.core.result import Result
from pymatrix.core.validation import check_2d, check_same_dtype, check_square
from pymatrix.dense.backends import BackendSpec, get_backend
from pymatrix.dense.matrix import Matrix
from pymatrix.dense.solution import LinearSystemSolution, SolveParams


RightHandSide = Union[Matrix, NDArray[np.floating[Any]]]


def invert(x: Matrix, *, backend: BackendSpec = None) -> Matrix:
    """
    Inverse of a square matrix via LU factorization.

    Algorithm:
        1. Copy x into a working buffer (x itself is never modified)
        2. LU-factorize the working buffer
        3. Build the inverse in place from the factors

    Args:
        x: Square matrix (n x n)
        backend: Backend choice or instance, see get_backend()

    Returns:
        New n x n matrix with x's element type

    Raises:
        DimensionError: If x is not square
        NotInvertibleError: If the factorization or inversion reports a
            nonzero status (an exactly singular matrix stops at step 2)
    """
    check_square(x, 'invert')
    impl = get_backend(backend)
    n = x.rows

    work = x.buffer.copy()

    pivots, status = impl.lu_factorize(work, n)
    if status != 0:
        raise _not_invertible(status, 'factorization')

    status = impl.lu_invert(work, n, pivots)
    if status != 0:
        raise _not_invertible(status, 'inversion')

    return Matrix._wrap(n, n, work)


def solve(a: Matrix, b: RightHandSide, *, backend: BackendSpec = None) -> list[int]:
    """
    Solve A X = B, overwriting B with X.

    Each column of B is solved independently against a fresh copy of the
    (once-transposed) coefficient buffer. B is only overwritten after every
    column has been solved; on failure it is left as it was.

    Args:
        a: Square coefficient matrix (n x n)
        b: Right-hand sides, a Matrix or a writable 2-D NumPy array (n x k)
        backend: Backend choice or instance, see get_backend()

    Returns:
        Concatenated pivots: k * n entries, one full set per column

    Raises:
        IllegalArgumentError: If b has no columns (raised before any backend
            call) or the backend rejects an argument
        EquationUnsolvedError: If A is exactly singular
        DimensionError: If a is not square, b has the wrong number of rows,
            or b's element type differs from a's (no implicit casts)
    """
    rhs = _rhs_array(a, b)
    impl = get_backend(backend)

    out, pivots = _solve_columns(a, rhs, impl, Timer())

    if isinstance(b, Matrix):
        b.buffer[:] = out.ravel()
    else:
        b[...] = out
    return pivots


def solve_system(
    a: Matrix,
    b: RightHandSide,
    *,
    backend: BackendSpec = None,
) -> LinearSystemSolution:
    """
    Solve A X = B without modifying B.

    Runs the same per-column algorithm as solve() and wraps the answer with
    diagnostics: condition number of A, maximum residual, timings and the
    backend used.

    Args:
        a: Square coefficient matrix (n x n)
        b: Right-hand sides, a Matrix or a 2-D array (n x k)
        backend: Backend choice or instance, see get_backend()

    Returns:
        LinearSystemSolution

    Raises:
        Same as solve()

    Warns:
        RuntimeWarning: If A is ill-conditioned for its element width, or
            contains NaN or inf
    """
    rhs = _rhs_array(a, b)
    impl = get_backend(backend)
    n, k = rhs.shape

    with Timer(sync_cuda=impl.name.startswith('gpu')) as timer:
        out, pivots = _solve_columns(a, rhs, impl, timer)

        with timer.section('diagnostics'):
            A = a.to_array()
            finite = bool(np.isfinite(A).all())
            cond = condition_number(A)
            with np.errstate(invalid='ignore', over='ignore'):
                residual = float(np.max(np.abs(A @ out - rhs)))

    notes: list[str] = []
    threshold = ill_conditioning_threshold(a.dtype)
    if not finite:
        notes.append(
            "solve_system: coefficient matrix contains NaN or inf; "
            "condition number and residual are undefined"
        )
    elif cond > threshold:
        notes.append(
            f"solve_system: coefficient matrix is ill-conditioned "
            f"(condition number {cond:.3g} > {threshold:.0g} for {a.dtype}); "
            f"solution may be inaccurate"
        )
    for message in notes:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    params = SolveParams(
        solution=Matrix._wrap(n, k, out.ravel()),
        pivots=tuple(pivots),
        condition_number=cond,
        residual_norm=residual,
    )
    result = Result(
        params=params,
        info={'method': 'lu', 'n': n, 'nrhs': k},
        timing=timer.result(),
        backend_name=impl.name,
        warnings=tuple(notes),
    )
    return LinearSystemSolution(_result=result)


def _rhs_array(a: Matrix, b: RightHandSide) -> NDArray[np.floating[Any]]:
    """
    Validate the operands of solve() and return B as a 2-D array copy.

    The zero-column check comes first so that it fires before anything
    else, the backend included.
    """
    if isinstance(b, Matrix):
        rhs = b.to_array()
    else:
        if not isinstance(b, np.ndarray):
            raise ValidationError(
                f"b: expected a Matrix or a 2-D numpy array, got {type(b).__name__}"
            )
        check_2d(b, 'b')
        if not np.issubdtype(b.dtype, np.floating):
            raise ValidationError(f"b: expected floating-point elements, got {b.dtype}")
        rhs = np.array(b)

    if rhs.shape[1] < 1:
        raise IllegalArgumentError(
            "solve: right-hand side has no columns",
            argument_index=1,
        )

    check_square(a, 'solve')
    if rhs.shape[0] != a.rows:
        raise DimensionError(
            f"solve: right-hand side has {rhs.shape[0]} rows, "
            f"coefficient matrix has {a.rows}"
        )
    check_same_dtype(a, b, 'solve')
    return rhs


def _solve_columns(
    a: Matrix,
    rhs: NDArray[np.floating[Any]],
    impl: LinearAlgebraBackend,
    timer: Timer,
) -> tuple[NDArray[np.floating[Any]], list[int]]:
    """Per-column direct solves. Returns (solution, concatenated pivots)."""
    n = a.rows

    # Column-major coefficient buffer for the direct solver, built once.
    with timer.section('transpose'):
        coefficients = impl.transpose_buffer(a.buffer, n, n)

    out = np.zeros(rhs.shape, dtype=a.dtype)
    pivots: list[int] = []

    for c in range(rhs.shape[1]):
        column = np.ascontiguousarray(rhs[:, c], dtype=a.dtype)

        with timer.section('direct_solve'):
            x, column_pivots, status = impl.direct_solve(coefficients.copy(), n, column)

        if status < 0:
            raise IllegalArgumentError(
                f"solve: argument {-status} to the direct solver is illegal "
                f"(right-hand side column {c})",
                argument_index=-status,
                column=c,
            )
        if status > 0:
            raise EquationUnsolvedError(
                f"solve: system is singular, U({status},{status}) is exactly zero "
                f"(right-hand side column {c})",
                equation=status,
                column=c,
            )

        pivots.extend(int(p) for p in column_pivots)
        out[:, c] = x

    return out, pivots


def _not_invertible(status: int, step: str) -> NotInvertibleError:
    if status > 0:
        message = (
            f"invert: matrix is not invertible, U({status},{status}) is exactly "
            f"zero during LU {step}"
        )
        pivot: int | None = status
    else:
        message = f"invert: LU {step} rejected argument {-status}"
        pivot = None
    return NotInvertibleError(message, operation='invert', status=status, pivot=pivot)
